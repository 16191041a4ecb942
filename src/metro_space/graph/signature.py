"""Node signatures: the drawable symbol of a station or bend.

A signature recomputes its geometry lazily whenever its node or one of
the node's adjacent edges changed since the last computation.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from shapely.geometry import box
from shapely.geometry.base import BaseGeometry

from metro_space.constants import MIN_SIGNATURE_SIDE, SIGNATURE_ROUTE_MARGIN
from metro_space.geometry import buffer

if TYPE_CHECKING:
    from metro_space.graph.model import Node


class SignatureKind(Enum):
    """Variant of a node signature."""

    RECTANGLE = "rectangle"
    SQUARE = "square"
    BEND = "bend"
    EMPTY = "empty"


class NodeSignature:
    """Geometry of a node symbol, one of :class:`SignatureKind`."""

    def __init__(self, node: Node, kind: SignatureKind) -> None:
        self.node = node
        self.kind = kind
        self._state: tuple | None = None
        self._geometry: BaseGeometry | None = None

    def state_key(self) -> tuple:
        """Revisions of everything the geometry depends on."""
        edges = tuple((edge.uid, edge.revision) for edge in self.node.adjacent_edges)
        return self.node.revision, edges

    @property
    def geometry(self) -> BaseGeometry:
        key = self.state_key()
        if key != self._state:
            self._geometry = self._compute()
            self._state = key
        return self._geometry

    @property
    def convex_hull(self) -> BaseGeometry:
        return self.geometry.convex_hull

    @property
    def is_bend(self) -> bool:
        return self.kind is SignatureKind.BEND

    @property
    def is_station(self) -> bool:
        return self.kind in (SignatureKind.RECTANGLE, SignatureKind.SQUARE)

    def invalidate(self) -> None:
        self._state = None

    def _compute(self) -> BaseGeometry:
        if self.kind is SignatureKind.RECTANGLE:
            return self._rectangle()
        if self.kind is SignatureKind.SQUARE:
            return self._square()
        return self.node.point

    def _rectangle(self) -> BaseGeometry:
        edges = self.node.adjacent_edges
        width = max(
            (e.width(SIGNATURE_ROUTE_MARGIN) for e in edges if not e.is_horizontal()),
            default=SIGNATURE_ROUTE_MARGIN,
        )
        height = max(
            (e.width(SIGNATURE_ROUTE_MARGIN) for e in edges if not e.is_vertical()),
            default=SIGNATURE_ROUTE_MARGIN,
        )
        half_w = max(width, MIN_SIGNATURE_SIDE) / 2
        half_h = max(height, MIN_SIGNATURE_SIDE) / 2
        x, y = self.node.coordinate
        polygon = box(x - half_w, y - half_h, x + half_w, y + half_h)
        return self.node.precision.snap(polygon)

    def _square(self) -> BaseGeometry:
        width = max(
            (e.width(SIGNATURE_ROUTE_MARGIN) for e in self.node.adjacent_edges),
            default=SIGNATURE_ROUTE_MARGIN,
        )
        return buffer(self.node.point, width / 2, square_ends=False, precision=self.node.precision)

    def __repr__(self) -> str:
        return f"NodeSignature({self.kind.value}, {self.node!r})"


def rectangle_station_signature(node: Node) -> NodeSignature:
    return NodeSignature(node, SignatureKind.RECTANGLE)


def square_station_signature(node: Node) -> NodeSignature:
    return NodeSignature(node, SignatureKind.SQUARE)


def bend_node_signature(node: Node) -> NodeSignature:
    return NodeSignature(node, SignatureKind.BEND)


def empty_signature(node: Node) -> NodeSignature:
    return NodeSignature(node, SignatureKind.EMPTY)
