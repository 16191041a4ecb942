"""Octilinear direction algebra.

Angles are compass bearings in degrees: north (+y) is 0, east (+x) is 90,
growing clockwise. A direction is octilinear if its angle is a multiple
of 45 degrees.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

ANGLE_TOLERANCE: float = 1e-7
"""Angles closer than this to a multiple of 45 degrees count as octilinear."""


class Alignment(Enum):
    """Line orientation shared by a direction and its opposite."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    DIAGONAL_45 = "diagonal_45"
    DIAGONAL_135 = "diagonal_135"


class OctilinearDirection(Enum):
    """The eight compass directions with their angle and unit step."""

    NORTH = (0.0, 0, 1)
    NORTH_EAST = (45.0, 1, 1)
    EAST = (90.0, 1, 0)
    SOUTH_EAST = (135.0, 1, -1)
    SOUTH = (180.0, 0, -1)
    SOUTH_WEST = (225.0, -1, -1)
    WEST = (270.0, -1, 0)
    NORTH_WEST = (315.0, -1, 1)

    def __init__(self, angle: float, dx: int, dy: int) -> None:
        self.angle = angle
        self.dx = dx
        self.dy = dy

    @classmethod
    def from_angle(cls, angle: float) -> OctilinearDirection:
        """Return the direction nearest to the given angle (mod 360).

        Raises ValueError for angles that are not finite.
        """
        if not math.isfinite(angle):
            raise ValueError(f"No octilinear direction with angle {angle}")
        normalized = _normalize(angle)
        for direction in cls:
            if direction.angle == normalized:
                return direction
        return AnyDirection(normalized).to_octilinear()

    @property
    def alignment(self) -> Alignment:
        return _ALIGNMENTS[self]

    @property
    def is_octilinear(self) -> bool:
        return True

    def is_horizontal(self) -> bool:
        return self in (OctilinearDirection.EAST, OctilinearDirection.WEST)

    def is_vertical(self) -> bool:
        return self in (OctilinearDirection.NORTH, OctilinearDirection.SOUTH)

    def is_diagonal(self) -> bool:
        return not (self.is_horizontal() or self.is_vertical())

    def opposite(self) -> OctilinearDirection:
        return OctilinearDirection.from_angle(self.angle + 180)

    def rotate(self, other: OctilinearDirection) -> OctilinearDirection:
        """Rotate clockwise by the angle of ``other``."""
        return OctilinearDirection.from_angle(self.angle + other.angle)

    def is_opposite(self, other: Direction) -> bool:
        return other.to_octilinear() is self.opposite()

    def angle_to(self, other: Direction) -> float:
        """Clockwise angle from this direction to ``other``, within [0, 360)."""
        return _normalize(other.angle - self.angle)

    def to_octilinear(self) -> OctilinearDirection:
        return self


_ALIGNMENTS = {
    OctilinearDirection.NORTH: Alignment.VERTICAL,
    OctilinearDirection.SOUTH: Alignment.VERTICAL,
    OctilinearDirection.EAST: Alignment.HORIZONTAL,
    OctilinearDirection.WEST: Alignment.HORIZONTAL,
    OctilinearDirection.NORTH_EAST: Alignment.DIAGONAL_45,
    OctilinearDirection.SOUTH_WEST: Alignment.DIAGONAL_45,
    OctilinearDirection.SOUTH_EAST: Alignment.DIAGONAL_135,
    OctilinearDirection.NORTH_WEST: Alignment.DIAGONAL_135,
}


@dataclass(frozen=True)
class AnyDirection:
    """A direction with an arbitrary (non-octilinear) angle."""

    angle: float

    @property
    def is_octilinear(self) -> bool:
        return False

    def is_horizontal(self) -> bool:
        return False

    def is_vertical(self) -> bool:
        return False

    def is_diagonal(self) -> bool:
        return False

    def opposite(self) -> AnyDirection:
        return AnyDirection(_normalize(self.angle + 180))

    def is_opposite(self, other: Direction) -> bool:
        return other.to_octilinear() is self.to_octilinear().opposite()

    def angle_to(self, other: Direction) -> float:
        return _normalize(other.angle - self.angle)

    def to_octilinear(self) -> OctilinearDirection:
        """Round to the nearest multiple of 45 degrees.

        An angle exactly between two octilinear directions snaps to the
        diagonal one, so 22.5 and 67.5 both give NORTH_EAST.
        """
        steps = _normalize(self.angle) / 45.0
        lower = math.floor(steps)
        fraction = steps - lower
        if abs(fraction - 0.5) < ANGLE_TOLERANCE:
            step = lower if lower % 2 == 1 else lower + 1
        elif fraction < 0.5:
            step = lower
        else:
            step = lower + 1
        return OctilinearDirection.from_angle(step * 45.0)


Direction = Union[OctilinearDirection, AnyDirection]


def direction_from_angle(angle: float) -> Direction:
    """Octilinear direction for multiples of 45 degrees, AnyDirection otherwise."""
    normalized = _normalize(angle)
    step = round(normalized / 45.0)
    if abs(normalized - step * 45.0) < ANGLE_TOLERANCE:
        return OctilinearDirection.from_angle(step * 45.0)
    return AnyDirection(normalized)


def _normalize(angle: float) -> float:
    normalized = angle % 360
    # -1e-12 % 360 is 360.0
    return 0.0 if normalized >= 360 else normalized + 0.0
