"""Precision model snapping coordinates to a fixed decimal grid."""

from __future__ import annotations

from dataclasses import dataclass

import shapely
from shapely.geometry.base import BaseGeometry

from metro_space.constants import PRECISION_DECIMALS


@dataclass(frozen=True)
class PrecisionModel:
    """Rounds coordinates to ``decimals`` decimal places.

    Every geometric result of the kernel is passed through a precision
    model so repeated moves do not accumulate floating point drift.
    """

    decimals: int = PRECISION_DECIMALS

    @property
    def grid_size(self) -> float:
        return 10.0 ** -self.decimals

    def make_precise(self, value: float) -> float:
        # adding 0.0 turns -0.0 into 0.0
        return round(value, self.decimals) + 0.0

    def snap(self, geometry: BaseGeometry) -> BaseGeometry:
        if geometry.is_empty:
            return geometry
        return shapely.set_precision(geometry, self.grid_size)


DEFAULT_PRECISION = PrecisionModel()
