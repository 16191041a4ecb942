"""Conflict finder: buffers every element and ranks overlapping pairs.

Incident elements (an edge and one of its endpoints) and adjacent edges
(sharing an endpoint) always overlap at their shared node and are never
paired. Two nodes sharing an edge are paired: their overlap means the
edge is too short for both signatures.
"""

from __future__ import annotations

import functools
import itertools
import logging

from metro_space.conflict.buffer import EdgeBuffer, ElementBuffer, NodeBuffer
from metro_space.conflict.model import Conflict, ConflictType
from metro_space.constants import EDGE_MARGIN, ROUTE_MARGIN
from metro_space.geometry import DEFAULT_PRECISION, PrecisionModel
from metro_space.graph import Graph

logger = logging.getLogger(__name__)


def compare_conflicts(c1: Conflict, c2: Conflict) -> int:
    """Order conflicts: most urgent first.

    Descending by rank, required displacement, move vector length, move
    vector x and y; element ids complete the order so solving is
    reproducible run to run.
    """
    key1 = _conflict_key(c1)
    key2 = _conflict_key(c2)
    return (key1 > key2) - (key1 < key2)


def _conflict_key(conflict: Conflict) -> tuple:
    a, b = conflict.elements
    return (
        -conflict.conflict_type.rank,
        -conflict.best_displace_distance,
        -conflict.move_vector.length(),
        -conflict.move_vector.x,
        -conflict.move_vector.y,
        type(a).__name__,
        a.uid,
        type(b).__name__,
        b.uid,
    )


CONFLICT_ORDER = functools.cmp_to_key(compare_conflicts)


def build_buffers(
    graph: Graph,
    route_margin: float = ROUTE_MARGIN,
    edge_margin: float = EDGE_MARGIN,
) -> list[ElementBuffer]:
    """One node buffer per node and one edge buffer per edge."""
    buffers: list[ElementBuffer] = [
        NodeBuffer(node, edge_margin) for node in graph.nodes
    ]
    buffers.extend(
        EdgeBuffer(edge, route_margin, edge_margin) for edge in graph.edges
    )
    return buffers


def find_conflicts(
    graph: Graph,
    route_margin: float = ROUTE_MARGIN,
    edge_margin: float = EDGE_MARGIN,
    major_misalignment_only: bool = False,
    correction_factor: float = 1.0,
    precision: PrecisionModel = DEFAULT_PRECISION,
) -> list[Conflict]:
    """Return all conflicts of the graph, most urgent first.

    With ``major_misalignment_only`` conflicts whose displacement is
    smaller than ``correction_factor * edge_margin`` are dropped. An empty
    list means the layout has enough space.
    """
    buffers = build_buffers(graph, route_margin, edge_margin)
    conflicts: list[Conflict] = []

    for buffer_a, buffer_b in itertools.combinations(buffers, 2):
        if _are_incident(buffer_a, buffer_b):
            continue
        # cheap envelope test before the polygon intersection
        if not buffer_a.polygon.intersects(buffer_b.polygon):
            continue
        conflict = Conflict(
            buffer_a,
            buffer_b,
            ConflictType.of(buffer_a.element, buffer_b.element),
            precision=precision,
        )
        if conflict.solved:
            continue
        conflicts.append(conflict)

    if major_misalignment_only:
        threshold = correction_factor * edge_margin
        conflicts = [
            c for c in conflicts
            if not _is_incident_node_edge(c)
            and c.best_displace_distance >= threshold
        ]

    conflicts.sort(key=CONFLICT_ORDER)
    logger.debug("Found %d conflicts", len(conflicts))
    return conflicts


def _are_incident(buffer_a: ElementBuffer, buffer_b: ElementBuffer) -> bool:
    if buffer_a.is_node and buffer_b.is_node:
        return False
    return buffer_a.element.is_adjacent(buffer_b.element)


def _is_incident_node_edge(conflict: Conflict) -> bool:
    if conflict.conflict_type is not ConflictType.NODE_EDGE:
        return False
    node = conflict.nodes[0]
    edge = conflict.edges[0]
    return edge.is_adjacent(node)
