"""Tests for the geometry kernel and precision model."""

import math

import pytest
from shapely.geometry import LineString, Point, box

from metro_space.geometry import (
    VECTOR_ALONG_X_AXIS,
    VECTOR_ALONG_Y_AXIS,
    MoveVector,
    angle_to_x_axis,
    PrecisionModel,
    bearing,
    buffer,
    centroid,
    envelope,
    find_longest_parallel_segment,
    intersection,
)


def test_make_precise_rounds_to_grid():
    precision = PrecisionModel(2)
    assert precision.make_precise(1.23456) == 1.23
    assert precision.grid_size == pytest.approx(0.01)


def test_make_precise_drops_negative_zero():
    value = PrecisionModel().make_precise(-0.0000001)
    assert value == 0
    assert math.copysign(1, value) == 1


def test_projection_on_axes():
    v = MoveVector(3, 4)
    assert v.projection(VECTOR_ALONG_X_AXIS) == MoveVector(3, 0)
    assert v.projection(VECTOR_ALONG_Y_AXIS) == MoveVector(0, 4)
    assert v.length() == 5


def test_vector_angle():
    assert MoveVector(1, 0).angle(MoveVector(0, 1)) == pytest.approx(90)
    assert MoveVector(1, 0).angle(MoveVector(-1, 0)) == pytest.approx(180)
    assert MoveVector(1, 1).angle(MoveVector(1, -1)) == pytest.approx(90)


@pytest.mark.parametrize("end,expected", [
    ((0, 10), 0),
    ((10, 0), 90),
    ((0, -10), 180),
    ((-10, 0), 270),
    ((10, 10), 45),
])
def test_bearing_is_compass_angle(end, expected):
    assert bearing(LineString([(0, 0), end])) == pytest.approx(expected)


@pytest.mark.parametrize("end,expected", [
    ((10, 0), 0),
    ((0, 10), 90),
    ((-10, 10), 135),
    ((0, -10), 270),
])
def test_angle_to_x_axis_counter_clockwise(end, expected):
    assert angle_to_x_axis(LineString([(0, 0), end])) == pytest.approx(expected)


def test_point_buffer_square():
    assert buffer(Point(0, 0), 5).bounds == (-5, -5, 5, 5)


def test_line_buffer_extends_beyond_ends():
    assert buffer(LineString([(0, 0), (10, 0)]), 2).bounds == (-2, -2, 12, 2)


def test_zero_buffer_keeps_polygon():
    polygon = box(0, 0, 10, 10)
    assert buffer(polygon, 0).equals(polygon)
    assert buffer(Point(0, 0), 0).is_empty


def test_intersection_without_area_is_empty():
    touching = intersection(box(0, 0, 10, 10), box(10, 0, 20, 10))
    assert touching.is_empty


def test_intersection_with_area():
    overlap = intersection(box(0, 0, 10, 10), box(5, 0, 20, 10))
    assert overlap.area == pytest.approx(50)
    c = centroid(overlap)
    assert (c.x, c.y) == (7.5, 5)


def test_longest_parallel_segment_oriented_along_direction():
    polygon = box(0, 0, 10, 4)
    forward = find_longest_parallel_segment(polygon, MoveVector(1, 0))
    assert MoveVector.from_line(forward) == MoveVector(10, 0)
    backward = find_longest_parallel_segment(polygon, MoveVector(-1, 0))
    assert MoveVector.from_line(backward) == MoveVector(-10, 0)


def test_longest_parallel_segment_diagonal():
    segment = find_longest_parallel_segment(box(0, 0, 10, 10), MoveVector(1, 1))
    assert segment.length == pytest.approx(math.hypot(10, 10))


def test_longest_parallel_segment_empty():
    assert find_longest_parallel_segment(box(0, 0, 1, 1).difference(box(0, 0, 1, 1)), MoveVector(1, 0)) is None


def test_envelope():
    bbox = envelope(box(-10, -5, 30, 15))
    assert (bbox.width, bbox.height) == (40, 20)
