"""Scale strategy: stretch the whole map until nothing overlaps.

Scaling about the origin keeps every angle, so octilinear edges stay
octilinear. Each round scales by the largest factor any single conflict
asks for.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from shapely import affinity

from metro_space.constants import MAX_ITERATIONS_SCALE, MIN_SCALE_FACTOR

if TYPE_CHECKING:
    from metro_space.conflict import Conflict
    from metro_space.map import MetroMap

logger = logging.getLogger(__name__)


def evaluate_scale_factor(conflicts: list[Conflict], width: float, height: float) -> float:
    """Largest per-conflict factor that opens enough room in the bounding box."""
    factor = 1.0
    for conflict in conflicts:
        mv = conflict.move_vector
        if width > 0:
            factor = max(factor, (width + math.ceil(abs(mv.x))) / width)
        if height > 0:
            factor = max(factor, (height + math.ceil(abs(mv.y))) / height)
    return factor


class ScaleLineSpaceHandler:
    """Make space by uniform scaling of all node coordinates."""

    def __init__(self, metro_map: MetroMap, max_iterations: int = MAX_ITERATIONS_SCALE) -> None:
        self.metro_map = metro_map
        self.max_iterations = max_iterations
        self.iterations = 0

    def make_space(self) -> None:
        precision = self.metro_map.precision
        while True:
            conflicts = self.metro_map.evaluate_conflicts()
            if not conflicts:
                logger.info("No more conflicts after %d scaling rounds", self.iterations)
                return
            if self.iterations >= self.max_iterations:
                logger.warning(
                    "Maximum number of iterations (%d) reached, %d conflicts left",
                    self.max_iterations, len(conflicts),
                )
                return

            box = self.metro_map.bounding_box()
            factor = evaluate_scale_factor(conflicts, box.width, box.height)
            factor = max(precision.make_precise(factor), MIN_SCALE_FACTOR)
            self.iterations += 1
            logger.debug(
                "Scaling round %d: %d conflicts, factor %s",
                self.iterations, len(conflicts), factor,
            )
            self.scale(factor)

    def scale(self, factor: float) -> None:
        """Scale every node position about the origin (0, 0)."""
        for node in self.metro_map.nodes:
            scaled = affinity.scale(node.point, factor, factor, origin=(0, 0))
            node.move_to(scaled.x, scaled.y)
