"""Restore octilinearity of edges broken by a displacement.

For each non-octilinear edge the cheaper endpoint is moved until the
edge is octilinear again; the move may cascade into the adjacent edges
of the moved node. When both endpoints are too expensive to move, bend
nodes are inserted instead.
"""

from __future__ import annotations

import functools
import logging
import operator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from metro_space.constants import (
    CORRECT_CIRCLE_PENALTY,
    MAX_ADJUSTMENT_COSTS,
    OCTILINEAR_TOLERANCE,
)
from metro_space.graph import Edge, Node, OctilinearDirection
from metro_space.space.bends import insert_bend_nodes

if TYPE_CHECKING:
    from metro_space.conflict import Conflict
    from metro_space.map import MetroMap

logger = logging.getLogger(__name__)


@dataclass
class DisplaceResult:
    """Outcome of one displacement: which nodes moved, where and how far."""

    conflict: Conflict
    direction: OctilinearDirection
    distance: float
    displaced_nodes: list[Node] = field(default_factory=list)

    @property
    def axis_coordinate(self) -> float:
        """Coordinate of the displacement origin along the displacement axis."""
        origin = self.conflict.displace_origin
        return origin.x if self.direction.is_horizontal() else origin.y


class AdjustmentGuard:
    """Bookkeeping for one edge correction.

    Only nodes on the same side of the displacement origin as the first
    endpoint may move, and every node moves at most once, so a cycle in
    the graph cannot make the correction recurse forever.
    """

    def __init__(self, result: DisplaceResult, nodes: list[Node], first_node: Node) -> None:
        self.result = result
        self.last_move_direction = result.direction
        self.last_move_distance = result.distance
        self.nodes = nodes
        self._visited: set[Node] = set()
        self._moveable = _same_side(result, nodes, first_node)

    def is_moveable(self, node: Node) -> bool:
        return node in self._moveable

    def has_already_visited(self, node: Node) -> bool:
        return node in self._visited

    def visited(self, node: Node) -> None:
        self._visited.add(node)

    def is_occupied(self, coordinate: tuple[float, float], node: Node) -> bool:
        """True if another live node already sits at ``coordinate``."""
        return any(
            other is not node and not other.deleted and other.coordinate == coordinate
            for other in self.nodes
        )

    def reuse(self) -> AdjustmentGuard:
        """Reset the visited set for the actual move after a cost estimate."""
        self._visited.clear()
        self.last_move_direction = self.result.direction
        self.last_move_distance = self.result.distance
        return self


def _same_side(result: DisplaceResult, nodes: list[Node], first_node: Node) -> set[Node]:
    coordinate = operator.attrgetter("x" if result.direction.is_horizontal() else "y")
    origin = result.axis_coordinate
    if coordinate(first_node) <= origin:
        return {n for n in nodes if coordinate(n) <= origin}
    return {n for n in nodes if coordinate(n) > origin}


def deviation(edge: Edge) -> float:
    """Angle in degrees between the edge and its nearest octilinear direction."""
    nearest = edge.direction.to_octilinear()
    diff = abs(edge.direction.angle - nearest.angle) % 360
    return min(diff, 360 - diff)


def compare_non_octilinear_edges(e1: Edge, e2: Edge) -> int:
    """Most misaligned edge first; longer edges first on equal misalignment."""
    key1 = (-deviation(e1), -e1.length, e1.uid)
    key2 = (-deviation(e2), -e2.length, e2.uid)
    return (key1 > key2) - (key1 < key2)


NON_OCTILINEAR_ORDER = functools.cmp_to_key(compare_non_octilinear_edges)


def is_simple_node(connection_edge: Edge, node: Node) -> bool:
    """True if ``node`` can slide along its other edges without side effects.

    A simple node has at most two other edges; with two, they must be
    opposite each other (the node sits on a straight line), and none of
    them may continue the connection edge straight through the node.
    """
    others = node.adjacent_edges_except(connection_edge)
    if not others:
        return True
    if len(others) > 2:
        return False
    connection = connection_edge.direction_from(node).to_octilinear()
    directions = [edge.direction_from(node) for edge in others]
    if any(connection.is_opposite(d) for d in directions):
        return False
    return len(directions) == 1 or directions[0].to_octilinear().is_opposite(directions[1])


def calculate_adjustment_costs(
    connection_edge: Edge, node: Node, guard: AdjustmentGuard
) -> float:
    """Estimated cost of making ``connection_edge`` octilinear by moving ``node``."""
    if not guard.is_moveable(node) or guard.has_already_visited(node):
        return CORRECT_CIRCLE_PENALTY
    guard.visited(node)

    if node.degree == 1:
        return 0

    others = node.adjacent_edges_except(connection_edge)
    if is_simple_node(connection_edge, node):
        if guard.result.direction.is_vertical():
            aligned = all(edge.is_vertical() for edge in others)
        else:
            aligned = all(edge.is_horizontal() for edge in others)
        return 1 if aligned else 2

    costs = 2 + len(others)
    for edge in others:
        costs += calculate_adjustment_costs(edge, edge.other_node(node), guard)
    return costs


def _flips_horizontal(alpha: float) -> bool:
    return 45 < alpha < 90 or 135 < alpha < 180 or 225 < alpha < 270 or alpha > 335


def evaluate_move_direction(
    connection_edge: Edge, adjacent_edge: Edge, node: Node
) -> OctilinearDirection | None:
    """Direction to slide a simple node along its adjacent edge.

    Returns None when the adjacent edge has the same alignment as the
    connection edge: sliding along it cannot change the connection angle.
    """
    connection = connection_edge.original_direction_from(node).to_octilinear()
    adjacent = adjacent_edge.original_direction_from(node)
    if adjacent.alignment is connection.alignment:
        return None

    alpha = adjacent.angle_to(connection_edge.direction_from(node))
    if adjacent is OctilinearDirection.SOUTH:
        return OctilinearDirection.NORTH if alpha > 315 or alpha < 45 else OctilinearDirection.SOUTH
    if adjacent is OctilinearDirection.NORTH:
        return OctilinearDirection.SOUTH if alpha > 315 or alpha < 45 else OctilinearDirection.NORTH
    if adjacent is OctilinearDirection.EAST:
        return OctilinearDirection.WEST if _flips_horizontal(alpha) else OctilinearDirection.EAST
    if adjacent is OctilinearDirection.WEST:
        return OctilinearDirection.EAST if _flips_horizontal(alpha) else OctilinearDirection.WEST
    if alpha < 45 or alpha > 90:
        return adjacent
    return adjacent.opposite()


def octilinear_move_distance(
    node: Node, other: Node, direction: OctilinearDirection
) -> float | None:
    """Smallest positive step of ``node`` along ``direction`` making node->other octilinear.

    Returns None if no such step exists (the edge would never become
    octilinear, or only by collapsing onto ``other``).
    """
    ex = other.x - node.x
    ey = other.y - node.y
    ux, uy = direction.dx, direction.dy

    candidates = []
    if ux:
        candidates.append(ex / ux)
    if uy:
        candidates.append(ey / uy)
    if ux != uy:
        candidates.append((ex - ey) / (ux - uy))
    if ux != -uy:
        candidates.append((ex + ey) / (ux + uy))

    valid = []
    for t in candidates:
        if t <= OCTILINEAR_TOLERANCE:
            continue
        rx, ry = ex - t * ux, ey - t * uy
        if abs(rx) < OCTILINEAR_TOLERANCE and abs(ry) < OCTILINEAR_TOLERANCE:
            continue
        valid.append(t)
    if not valid:
        return None
    return node.precision.make_precise(min(valid))


def _best_along_axis(
    node: Node, other: Node, direction: OctilinearDirection
) -> tuple[OctilinearDirection, float]:
    # either way along the axis, whichever needs the shorter step
    best = (direction, 0.0)
    for candidate in (direction, direction.opposite()):
        distance = octilinear_move_distance(node, other, candidate)
        if distance is not None and (best[1] == 0 or distance < best[1]):
            best = (candidate, distance)
    return best


def move_node(
    connection_edge: Edge,
    node: Node,
    guard: AdjustmentGuard,
    ignore_shortening_guard: bool = True,
) -> OctilinearDirection:
    """Move ``node`` so that ``connection_edge`` becomes octilinear.

    Returns the direction of the move, which the cascade reuses for the
    adjacent edges.
    """
    other = connection_edge.other_node(node)
    direction: OctilinearDirection | None
    if node.degree != 1 and is_simple_node(connection_edge, node):
        adjacent = node.adjacent_edges_except(connection_edge)[0]
        direction = evaluate_move_direction(connection_edge, adjacent, node)
        if direction is None:
            logger.debug("No move for %r along %r", node, adjacent)
            return guard.last_move_direction
        distance = octilinear_move_distance(node, other, direction) or 0.0
    else:
        direction, distance = _best_along_axis(node, other, guard.last_move_direction)

    if distance == 0:
        logger.debug("No octilinear position for %r moving %s", node, direction.name)
        return direction

    precision = node.precision
    target = (
        precision.make_precise(node.x + direction.dx * distance),
        precision.make_precise(node.y + direction.dy * distance),
    )
    if guard.is_occupied(target, node):
        logger.info("Move of %r to %s would land on another node", node, target)
        return direction

    if not ignore_shortening_guard:
        for edge in node.adjacent_edges_except(connection_edge):
            if edge.direction_from(node) is direction and edge.length <= distance:
                logger.info("Move of %r by %s would collapse %r", node, distance, edge)
                return direction

    logger.debug("Move %r %s by %s", node, direction.name, distance)
    node.move(direction, distance)
    guard.last_move_direction = direction
    guard.last_move_distance = distance
    return direction


def correct_edge_by_moving_node(
    edge: Edge,
    node: Node,
    guard: AdjustmentGuard,
    ignore_shortening_guard: bool = True,
) -> None:
    """Move ``node`` and cascade into adjacent edges that lost octilinearity."""
    if not guard.is_moveable(node):
        logger.info("Node %r is not moveable", node)
        return
    if guard.has_already_visited(node):
        logger.info("Node %r already moved, skipping circle", node)
        return
    guard.visited(node)

    move_node(edge, node, guard, ignore_shortening_guard)
    for adjacent in node.adjacent_edges_except(edge):
        if not adjacent.is_octilinear:
            correct_edge_by_moving_node(
                adjacent, adjacent.other_node(node), guard, ignore_shortening_guard
            )


def correct_edge(
    metro_map: MetroMap,
    edge: Edge,
    result: DisplaceResult,
    ignore_shortening_guard: bool = True,
) -> None:
    """Make ``edge`` octilinear by moving its cheaper endpoint or adding bends."""
    nodes = metro_map.nodes
    guard_a = AdjustmentGuard(result, nodes, edge.node_a)
    guard_b = AdjustmentGuard(result, nodes, edge.node_b)
    costs_a = calculate_adjustment_costs(edge, edge.node_a, guard_a)
    costs_b = calculate_adjustment_costs(edge, edge.node_b, guard_b)
    logger.debug("Adjustment costs for %r: %s / %s", edge, costs_a, costs_b)

    if costs_a > MAX_ADJUSTMENT_COSTS and costs_b > MAX_ADJUSTMENT_COSTS:
        logger.info("Adjustment of %r too expensive, inserting bends", edge)
        insert_bend_nodes(metro_map, edge)
        return

    if costs_a < costs_b:
        correct_edge_by_moving_node(edge, edge.node_a, guard_a.reuse(), ignore_shortening_guard)
    else:
        correct_edge_by_moving_node(edge, edge.node_b, guard_b.reuse(), ignore_shortening_guard)


def correct_non_octilinear_edges(
    metro_map: MetroMap,
    result: DisplaceResult,
    ignore_shortening_guard: bool = True,
) -> int:
    """Repair every non-octilinear edge, worst first.

    Returns the number of edges still non-octilinear afterwards.
    """
    edges = sorted(metro_map.non_octilinear_edges(), key=NON_OCTILINEAR_ORDER)
    if not edges:
        return 0
    logger.debug("Correcting %d non-octilinear edges", len(edges))
    for edge in edges:
        if edge.deleted or edge.is_octilinear:
            continue
        correct_edge(metro_map, edge, result, ignore_shortening_guard)

    remaining = metro_map.count_non_octilinear_edges()
    if remaining:
        logger.info("Uncorrected non-octilinear edges: %d", remaining)
    return remaining
