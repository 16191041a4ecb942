"""Bend insertion: split a non-octilinear edge into octilinear sub-edges.

A straight edge A->B becomes A->V->B (straight run, then diagonal) or,
when that bend would land on an existing station, A->V1->V2->B. Bends
landing on an existing bend node are merged into it.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from metro_space.graph import Edge, Graph, Node, bend_node_signature

if TYPE_CHECKING:
    from metro_space.map import MetroMap

logger = logging.getLogger(__name__)

Coordinate = tuple[float, float]


def octilinear_bend_points(
    start: Coordinate,
    end: Coordinate,
    occupied: set[Coordinate] | None = None,
) -> list[Coordinate]:
    """Bend coordinates turning start->end into octilinear segments.

    Returns an empty list if start->end is already octilinear.
    """
    occupied = occupied or set()
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    adx, ady = abs(dx), abs(dy)
    if adx == 0 or ady == 0 or adx == ady:
        return []
    sx = math.copysign(1, dx)
    sy = math.copysign(1, dy)

    if adx > ady:
        straight_first = (start[0] + sx * (adx - ady), start[1])
    else:
        straight_first = (start[0], start[1] + sy * (ady - adx))
    if straight_first not in occupied:
        return [straight_first]

    short = min(adx, ady)
    diagonal_first = (start[0] + sx * short, start[1] + sy * short)
    if diagonal_first not in occupied:
        return [diagonal_first]

    half = (max(adx, ady) - short) / 2
    if adx > ady:
        first = (start[0] + sx * half, start[1])
        second = (first[0] + sx * short, end[1])
    else:
        first = (start[0], start[1] + sy * half)
        second = (end[0], first[1] + sy * short)
    return [first, second]


def insert_bend_nodes(metro_map: MetroMap, edge: Edge) -> list[Node]:
    """Replace ``edge`` by a chain of octilinear edges through bend nodes.

    The original edge is deleted. Returns the surviving bend nodes.
    """
    node_a, node_b = edge.nodes
    occupied = {
        node.coordinate
        for node in metro_map.nodes
        if not node.signature.is_bend and node is not node_a and node is not node_b
    }
    points = octilinear_bend_points(node_a.coordinate, node_b.coordinate, occupied)
    if not points:
        logger.warning("No octilinear edge created for %r", edge)
        return []

    routes = edge.routes
    bends = [
        metro_map.create_node(x, y, _bend_name(edge, i), bend_node_signature)
        for i, (x, y) in enumerate(points, start=1)
    ]
    chain = [node_a, *bends, node_b]
    for u, v in zip(chain, chain[1:]):
        u.create_adjacent_edge_to(v, routes)
    edge.delete()
    metro_map.invalidate()
    logger.info("Octilinear edge created for %r with %d bend(s)", edge, len(bends))

    survivors = []
    for bend in bends:
        existing = _coincident_bend(metro_map, bend)
        if existing is not None and merge_bend_nodes(metro_map, existing, bend):
            survivors.append(existing)
        else:
            merge_duplicate_edges(bend)
            survivors.append(bend)
    metro_map.remove_deleted()
    return survivors


def merge_bend_nodes(graph: Graph, fixed: Node, obsolete: Node) -> bool:
    """Merge ``obsolete`` into ``fixed``; one of them must be a bend node.

    Adjacent edges and routes are transferred to ``fixed``, edges that
    would duplicate an existing connection add their routes to it.
    """
    if not (fixed.signature.is_bend or obsolete.signature.is_bend):
        return False

    for edge in obsolete.adjacent_edges:
        other = edge.other_node(obsolete)
        if other is fixed:
            continue
        existing = fixed.edge_to(other)
        if existing is not None:
            existing.add_routes(*edge.routes)
        else:
            fixed.create_adjacent_edge_to(other, edge.routes)

    obsolete.delete()
    graph.remove_deleted()
    logger.debug("Merged bend %r into %r", obsolete, fixed)
    return True


def merge_duplicate_edges(node: Node) -> None:
    """Fold adjacent edges connecting the same pair of nodes into one."""
    edges = node.adjacent_edges
    for i, first in enumerate(edges):
        if first.deleted:
            continue
        for second in edges[i + 1:]:
            if not second.deleted and first.equal_nodes(second):
                first.add_routes(*second.routes)
                second.delete()


def _coincident_bend(metro_map: MetroMap, bend: Node) -> Node | None:
    for node in metro_map.nodes:
        if node is not bend and node.signature.is_bend and node.coordinate == bend.coordinate:
            return node
    return None


def _bend_name(edge: Edge, index: int) -> str:
    a = edge.node_a.name or str(edge.node_a.uid)
    b = edge.node_b.name or str(edge.node_b.uid)
    return f"{a}-{b}/{index}"
