"""Geometry kernel: shapely-backed buffers, intersections and vectors."""

from metro_space.geometry.kernel import (
    VECTOR_ALONG_X_AXIS,
    VECTOR_ALONG_Y_AXIS,
    Axis,
    BoundingBox,
    MoveVector,
    angle_to_x_axis,
    bearing,
    buffer,
    centroid,
    create_line_string,
    create_point,
    envelope,
    find_longest_parallel_segment,
    intersection,
)
from metro_space.geometry.precision import DEFAULT_PRECISION, PrecisionModel

__all__ = [
    "Axis",
    "BoundingBox",
    "DEFAULT_PRECISION",
    "MoveVector",
    "PrecisionModel",
    "VECTOR_ALONG_X_AXIS",
    "VECTOR_ALONG_Y_AXIS",
    "angle_to_x_axis",
    "bearing",
    "buffer",
    "centroid",
    "create_line_string",
    "create_point",
    "envelope",
    "find_longest_parallel_segment",
    "intersection",
]
