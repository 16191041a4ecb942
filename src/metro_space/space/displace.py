"""Displace strategy: push apart one conflict at a time.

Each iteration takes the most urgent conflict and shifts every node
beyond the conflict origin along the cheaper axis; edges crossing the
cut get stretched and lose octilinearity, which the adjustment step
then repairs. A first pass only handles major conflicts at a quarter of
the edge margin, a second pass resolves everything.
"""

from __future__ import annotations

import logging
import operator
from typing import TYPE_CHECKING

from metro_space.constants import (
    FULL_CORRECTION_FACTOR,
    MAJOR_MISALIGNMENT_CORRECTION_FACTOR,
    MAX_ITERATIONS_DISPLACE,
)
from metro_space.geometry import Axis
from metro_space.graph import Edge, GraphElement, Node
from metro_space.space.adjustment import DisplaceResult, correct_non_octilinear_edges
from metro_space.space.bends import insert_bend_nodes

if TYPE_CHECKING:
    from metro_space.conflict import Conflict
    from metro_space.map import MetroMap

logger = logging.getLogger(__name__)


def _element_nodes(element: GraphElement) -> set[Node]:
    if isinstance(element, Edge):
        return set(element.nodes)
    return {element}


def _touches_conflict(conflict: Conflict, displaced: set[Node]) -> bool:
    return any(_element_nodes(element) & displaced for element in conflict.elements)


def displace_nodes(metro_map: MetroMap, conflict: Conflict) -> DisplaceResult:
    """Shift every node beyond the conflict origin by the conflict distance.

    When no node of either conflict element lies beyond the origin
    (stacked stations sit right on it), everything from the origin on
    moves except the nodes of the first element.
    """
    origin = conflict.displace_origin
    distance = conflict.best_displace_distance
    direction = conflict.best_displace_direction
    if conflict.best_displace_axis is Axis.X:
        coordinate, limit = operator.attrgetter("x"), origin.x
    else:
        coordinate, limit = operator.attrgetter("y"), origin.y

    nodes = metro_map.nodes
    displaced = [n for n in nodes if coordinate(n) > limit]
    if not _touches_conflict(conflict, set(displaced)):
        anchored = _element_nodes(conflict.buffer_a.element)
        displaced = [n for n in nodes if coordinate(n) >= limit and n not in anchored]
        logger.debug("Conflict origin splits no elements, anchoring %r", anchored)

    for node in displaced:
        node.move(direction, distance)

    logger.debug(
        "Displaced %d nodes %s by %s for %r",
        len(displaced), direction.name, distance, conflict,
    )
    return DisplaceResult(conflict, direction, distance, displaced)


class DisplaceLineSpaceHandler:
    """Make space by local displacement while keeping edges octilinear."""

    def __init__(
        self,
        metro_map: MetroMap,
        max_iterations: int = MAX_ITERATIONS_DISPLACE,
        ignore_shortening_guard: bool = True,
    ) -> None:
        self.metro_map = metro_map
        self.max_iterations = max_iterations
        self.ignore_shortening_guard = ignore_shortening_guard
        self.iterations = 0
        self.handled: list[Conflict] = []

    def make_space(self) -> None:
        logger.info("Displacing nodes for major conflicts")
        self._make_space(MAJOR_MISALIGNMENT_CORRECTION_FACTOR, major_misalignment_only=True)
        logger.info("Displacing nodes for all conflicts")
        self._make_space(FULL_CORRECTION_FACTOR, major_misalignment_only=False)
        self._restore_octilinearity()

        remaining = self.metro_map.evaluate_conflicts()
        if remaining:
            logger.warning("%d conflicts remain after displacement", len(remaining))
            for conflict in remaining:
                logger.debug("Remaining %r", conflict)
        logger.info("Bounding box after displacement: %s", self.metro_map.bounding_box())

    def _make_space(self, correction_factor: float, major_misalignment_only: bool) -> None:
        last: Conflict | None = None
        for _ in range(self.max_iterations):
            conflicts = self.metro_map.evaluate_conflicts(
                major_misalignment_only=major_misalignment_only,
                correction_factor=correction_factor,
            )
            if not conflicts:
                logger.info("No more conflicts after %d iterations", self.iterations)
                return

            conflict = conflicts[0]
            # same pair twice in a row means the last fix undid itself
            if len(conflicts) > 1 and conflict.same_elements(last):
                conflict = conflicts[1]

            self.iterations += 1
            self.handled.append(conflict)
            result = displace_nodes(self.metro_map, conflict)
            correct_non_octilinear_edges(
                self.metro_map, result, self.ignore_shortening_guard
            )
            last = conflict

        logger.warning(
            "Maximum number of iterations (%d) reached, %d conflicts left",
            self.max_iterations,
            len(self.metro_map.evaluate_conflicts(major_misalignment_only, correction_factor)),
        )

    def _restore_octilinearity(self) -> None:
        for edge in self.metro_map.non_octilinear_edges():
            if edge.deleted:
                continue
            if not edge.has_routes():
                logger.warning("Leaving non-octilinear edge without routes: %r", edge)
                continue
            insert_bend_nodes(self.metro_map, edge)
        remaining = self.metro_map.count_non_octilinear_edges()
        if remaining:
            logger.warning("Uncorrected non-octilinear edges found: %d", remaining)
