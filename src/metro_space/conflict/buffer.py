"""Element buffers: margin polygons around nodes and edges.

A buffer keeps the revision state of its source element and recomputes
its polygon on the next read after the element changed.
"""

from __future__ import annotations

from shapely.geometry.base import BaseGeometry

from metro_space.geometry import buffer
from metro_space.graph import Edge, GraphElement, Node


class ElementBuffer:
    """Base class of node and edge buffers."""

    element: GraphElement

    def __init__(self) -> None:
        self._state: object = None
        self._polygon: BaseGeometry | None = None

    @property
    def polygon(self) -> BaseGeometry:
        state = self._source_state()
        if state != self._state:
            self._polygon = self._compute()
            self._state = state
        return self._polygon

    @property
    def is_node(self) -> bool:
        return isinstance(self.element, Node)

    @property
    def is_edge(self) -> bool:
        return isinstance(self.element, Edge)

    def _source_state(self) -> object:
        raise NotImplementedError

    def _compute(self) -> BaseGeometry:
        raise NotImplementedError


class NodeBuffer(ElementBuffer):
    """The node signature inflated by ``margin`` (square corners)."""

    def __init__(self, node: Node, margin: float) -> None:
        super().__init__()
        self.element = node
        self.margin = margin

    @property
    def node(self) -> Node:
        return self.element

    def _source_state(self) -> object:
        return self.node.signature.state_key()

    def _compute(self) -> BaseGeometry:
        return buffer(
            self.node.signature.geometry,
            self.margin,
            square_ends=True,
            precision=self.node.precision,
        )

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, NodeBuffer)
            and other.element is self.element
            and other.margin == self.margin
        )

    def __hash__(self) -> int:
        return hash((NodeBuffer, self.element.uid, self.margin))

    def __repr__(self) -> str:
        return f"NodeBuffer({self.node!r})"


class EdgeBuffer(ElementBuffer):
    """A rectangular corridor along an edge, wide enough for its routes."""

    def __init__(self, edge: Edge, route_margin: float, edge_margin: float) -> None:
        super().__init__()
        self.element = edge
        self.route_margin = route_margin
        self.edge_margin = edge_margin

    @property
    def edge(self) -> Edge:
        return self.element

    def _source_state(self) -> object:
        return self.edge.revision

    def _compute(self) -> BaseGeometry:
        width = self.edge.width(self.route_margin) + 2 * self.edge_margin
        return buffer(
            self.edge.line_string,
            width / 2,
            square_ends=True,
            precision=self.edge.node_a.precision,
        )

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, EdgeBuffer)
            and other.element is self.element
            and other.route_margin == self.route_margin
            and other.edge_margin == self.edge_margin
        )

    def __hash__(self) -> int:
        return hash((EdgeBuffer, self.element.uid, self.route_margin, self.edge_margin))

    def __repr__(self) -> str:
        return f"EdgeBuffer({self.edge!r})"
