"""Conflict between two overlapping element buffers."""

from __future__ import annotations

import math
from enum import Enum

from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry

from metro_space.conflict.buffer import ElementBuffer
from metro_space.constants import ELEMENT_CONFLICT_RANK, NODE_CONFLICT_RANK
from metro_space.geometry import (
    DEFAULT_PRECISION,
    VECTOR_ALONG_X_AXIS,
    VECTOR_ALONG_Y_AXIS,
    Axis,
    MoveVector,
    PrecisionModel,
    centroid,
    find_longest_parallel_segment,
    intersection,
)
from metro_space.graph import Edge, GraphElement, Node, OctilinearDirection


class ConflictType(Enum):
    """Kind of conflict with its rank (higher ranks are solved first)."""

    ADJACENT_NODE_NODE_DIAGONAL = ("adjacent_node_node_diagonal", NODE_CONFLICT_RANK)
    ADJACENT_NODE_NODE = ("adjacent_node_node", NODE_CONFLICT_RANK)
    NODE_NODE = ("node_node", NODE_CONFLICT_RANK)
    NODE_EDGE = ("node_edge", ELEMENT_CONFLICT_RANK)
    EDGE_EDGE = ("edge_edge", ELEMENT_CONFLICT_RANK)

    def __init__(self, label: str, rank: int) -> None:
        self.label = label
        self.rank = rank

    @classmethod
    def of(cls, a: GraphElement, b: GraphElement) -> ConflictType:
        """Classify the conflict between two graph elements."""
        if isinstance(a, Node) and isinstance(b, Node):
            shared = a.edge_to(b)
            if shared is None:
                return cls.NODE_NODE
            if shared.is_diagonal():
                return cls.ADJACENT_NODE_NODE_DIAGONAL
            return cls.ADJACENT_NODE_NODE
        if isinstance(a, Edge) and isinstance(b, Edge):
            return cls.EDGE_EDGE
        return cls.NODE_EDGE


class Conflict:
    """Two buffers whose polygons overlap.

    The move vector is the longest chord of the overlap parallel to the
    line between both element centroids. Its projections on the X and Y
    axes give the two candidate displacements; the smaller non-zero one
    is the best displacement.
    """

    def __init__(
        self,
        buffer_a: ElementBuffer,
        buffer_b: ElementBuffer,
        conflict_type: ConflictType | None = None,
        precision: PrecisionModel = DEFAULT_PRECISION,
    ) -> None:
        self.buffer_a = buffer_a
        self.buffer_b = buffer_b
        self.precision = precision
        self.conflict_type = conflict_type or ConflictType.of(
            buffer_a.element, buffer_b.element
        )
        self.polygon: BaseGeometry
        self.move_vector = MoveVector()
        self.x_projection = MoveVector()
        self.y_projection = MoveVector()
        self.best_displace_axis = Axis.Y
        self.best_displace_vector = MoveVector()
        self.displace_origin: Point
        self.solved = False
        self.update()

    def update(self) -> None:
        """Recompute the conflict from the current buffer polygons."""
        self.polygon = intersection(
            self.buffer_a.polygon, self.buffer_b.polygon, self.precision
        )
        self.solved = self.polygon.is_empty

        centroid_a = self.buffer_a.element.centroid
        centroid_b = self.buffer_b.element.centroid
        q = MoveVector(centroid_b.x - centroid_a.x, centroid_b.y - centroid_a.y)
        if q.is_zero():
            q = VECTOR_ALONG_Y_AXIS

        segment = find_longest_parallel_segment(self.polygon, q, self.precision)
        if segment is None:
            self.move_vector = MoveVector()
        else:
            self.move_vector = MoveVector.from_line(segment, self.precision)

        self.x_projection = self.move_vector.projection(VECTOR_ALONG_X_AXIS)
        self.y_projection = self.move_vector.projection(VECTOR_ALONG_Y_AXIS)
        self.best_displace_axis = _choose_axis(self.x_projection, self.y_projection)
        if self.best_displace_axis is Axis.X:
            self.best_displace_vector = self.x_projection
        else:
            self.best_displace_vector = self.y_projection

        if self.solved:
            self.displace_origin = centroid_a
        else:
            self.displace_origin = centroid(self.polygon, self.precision)

    @property
    def best_displace_direction(self) -> OctilinearDirection:
        if self.best_displace_axis is Axis.X:
            return OctilinearDirection.EAST
        return OctilinearDirection.NORTH

    @property
    def best_displace_distance(self) -> int:
        return self._ceil(self.best_displace_vector.length())

    @property
    def displace_distance_along_x(self) -> int:
        return self._ceil(self.x_projection.length())

    @property
    def displace_distance_along_y(self) -> int:
        return self._ceil(self.y_projection.length())

    def _ceil(self, value: float) -> int:
        return math.ceil(self.precision.make_precise(abs(value)))

    @property
    def elements(self) -> tuple[GraphElement, GraphElement]:
        return self.buffer_a.element, self.buffer_b.element

    @property
    def nodes(self) -> list[Node]:
        return [e for e in self.elements if isinstance(e, Node)]

    @property
    def edges(self) -> list[Edge]:
        return [e for e in self.elements if isinstance(e, Edge)]

    def is_conflict_related(self, element: GraphElement) -> bool:
        """True for a conflict element or an element adjacent to one."""
        return any(
            element is e or element.is_adjacent(e) for e in self.elements
        )

    def same_elements(self, other: Conflict | None) -> bool:
        return (
            other is not None
            and self.buffer_a.element is other.buffer_a.element
            and self.buffer_b.element is other.buffer_b.element
        )

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Conflict)
            and self.buffer_a == other.buffer_a
            and self.buffer_b == other.buffer_b
        )

    def __hash__(self) -> int:
        return hash((self.buffer_a, self.buffer_b))

    def __repr__(self) -> str:
        return (
            f"Conflict({self.conflict_type.label}: {self.buffer_a.element!r}, "
            f"{self.buffer_b.element!r}, distance={self.best_displace_distance}, "
            f"axis={self.best_displace_axis.value}, "
            f"origin=({self.displace_origin.x}, {self.displace_origin.y}))"
        )


def _choose_axis(x_projection: MoveVector, y_projection: MoveVector) -> Axis:
    # the cheaper push is the smaller projection, but a zero push never helps
    along_x = x_projection.length()
    along_y = y_projection.length()
    if along_x == 0:
        return Axis.Y
    if along_y == 0 or along_x < along_y:
        return Axis.X
    return Axis.Y
