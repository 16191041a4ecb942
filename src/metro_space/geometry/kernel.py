"""Geometry kernel for buffers, intersections, projections and angles.

All functions accept an optional :class:`PrecisionModel` and round their
results through it. Polygons with no area (a shared point or a shared
border) are returned as an empty polygon.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from shapely.geometry import LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry

from metro_space.geometry.precision import DEFAULT_PRECISION, PrecisionModel


class Axis(Enum):
    """Coordinate axis along which a conflict is displaced."""

    X = "x"
    Y = "y"


@dataclass(frozen=True)
class MoveVector:
    """A 2D vector, typically the directed chord of a conflict polygon."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_line(
        cls, line: LineString, precision: PrecisionModel = DEFAULT_PRECISION
    ) -> MoveVector:
        (x1, y1), (x2, y2) = line.coords[0], line.coords[-1]
        return cls(precision.make_precise(x2 - x1), precision.make_precise(y2 - y1))

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def dot(self, other: MoveVector) -> float:
        return self.x * other.x + self.y * other.y

    def multiply(self, factor: float) -> MoveVector:
        return MoveVector(self.x * factor, self.y * factor)

    def projection(self, along: MoveVector) -> MoveVector:
        """Project this vector onto ``along``."""
        return along.multiply(self.dot(along) / along.dot(along))

    def angle(self, other: MoveVector) -> float:
        """Unsigned angle between both vectors in degrees, within [0, 180]."""
        diff = abs(math.atan2(self.y, self.x) - math.atan2(other.y, other.x))
        if diff > math.pi:
            diff = 2 * math.pi - diff
        return math.degrees(diff)


VECTOR_ALONG_X_AXIS = MoveVector(1.0, 0.0)
VECTOR_ALONG_Y_AXIS = MoveVector(0.0, 1.0)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned envelope of a geometry."""

    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


def create_point(
    x: float, y: float, precision: PrecisionModel = DEFAULT_PRECISION
) -> Point:
    return Point(precision.make_precise(x), precision.make_precise(y))


def create_line_string(
    start: tuple[float, float],
    end: tuple[float, float],
    precision: PrecisionModel = DEFAULT_PRECISION,
) -> LineString:
    return LineString([
        (precision.make_precise(start[0]), precision.make_precise(start[1])),
        (precision.make_precise(end[0]), precision.make_precise(end[1])),
    ])


def buffer(
    geometry: BaseGeometry,
    distance: float,
    square_ends: bool = True,
    precision: PrecisionModel = DEFAULT_PRECISION,
) -> BaseGeometry:
    """Buffer a point, line or polygon by ``distance``.

    With ``square_ends`` a point becomes a square and a line a rectangle
    extended by ``distance`` beyond both ends; otherwise ends are round.
    A zero distance keeps polygons as they are; otherwise a non-positive
    distance yields an empty polygon.
    """
    if geometry.is_empty or distance < 0:
        return Polygon()
    if distance == 0:
        return precision.snap(geometry) if geometry.area > 0 else Polygon()
    cap_style = "square" if square_ends else "round"
    result = geometry.buffer(distance, cap_style=cap_style, join_style="mitre")
    return precision.snap(result)


def intersection(
    a: BaseGeometry,
    b: BaseGeometry,
    precision: PrecisionModel = DEFAULT_PRECISION,
) -> BaseGeometry:
    """Intersection of two polygons, or an empty polygon if it has no area."""
    if a.is_empty or b.is_empty:
        return Polygon()
    result = precision.snap(a.intersection(b))
    if result.is_empty or result.area <= 0:
        return Polygon()
    return result


def centroid(
    geometry: BaseGeometry, precision: PrecisionModel = DEFAULT_PRECISION
) -> Point:
    c = geometry.centroid
    return create_point(c.x, c.y, precision)


def envelope(geometry: BaseGeometry) -> BoundingBox:
    if geometry.is_empty:
        return BoundingBox()
    return BoundingBox(*geometry.bounds)


def angle_to_x_axis(line: LineString) -> float:
    """Counter-clockwise angle of the line to the x-axis, within [0, 360)."""
    (x1, y1), (x2, y2) = line.coords[0], line.coords[-1]
    return math.degrees(math.atan2(y2 - y1, x2 - x1)) % 360


def bearing(line: LineString) -> float:
    """Clockwise angle of the line to north (+y), within [0, 360)."""
    return (90.0 - angle_to_x_axis(line)) % 360


def find_longest_parallel_segment(
    geometry: BaseGeometry,
    direction: MoveVector,
    precision: PrecisionModel = DEFAULT_PRECISION,
) -> LineString | None:
    """Longest chord of ``geometry`` parallel to ``direction``.

    The chord is oriented along ``direction``. For convex polygons the
    longest chord passes through a vertex, so only chords through the
    vertices are measured.
    """
    if geometry.is_empty or direction.is_zero():
        return None

    bbox = envelope(geometry)
    reach = 2 * math.hypot(bbox.width, bbox.height) + 1.0
    unit = direction.multiply(1 / direction.length())

    best: LineString | None = None
    best_length = 0.0
    for x, y in _vertices(geometry):
        chord = LineString([
            (x - unit.x * reach, y - unit.y * reach),
            (x + unit.x * reach, y + unit.y * reach),
        ])
        for piece in _line_pieces(chord.intersection(geometry)):
            if piece.length > best_length:
                best, best_length = piece, piece.length

    if best is None:
        return None
    (x1, y1), (x2, y2) = best.coords[0], best.coords[-1]
    if (x2 - x1) * unit.x + (y2 - y1) * unit.y < 0:
        x1, y1, x2, y2 = x2, y2, x1, y1
    return create_line_string((x1, y1), (x2, y2), precision)


def _vertices(geometry: BaseGeometry) -> list[tuple[float, float]]:
    if hasattr(geometry, "geoms"):
        return [v for part in geometry.geoms for v in _vertices(part)]
    if isinstance(geometry, Polygon):
        return list(geometry.exterior.coords)
    return list(geometry.coords)


def _line_pieces(geometry: BaseGeometry) -> list[LineString]:
    if geometry.is_empty:
        return []
    if isinstance(geometry, LineString):
        return [geometry]
    if hasattr(geometry, "geoms"):
        return [piece for part in geometry.geoms for piece in _line_pieces(part)]
    return []
