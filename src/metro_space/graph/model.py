"""Data model for metro map graphs: routes, nodes, edges and the graph."""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Union

import networkx as nx
from shapely.geometry import GeometryCollection, LineString, Point

from metro_space.constants import OCTILINEAR_TOLERANCE
from metro_space.geometry import (
    DEFAULT_PRECISION,
    BoundingBox,
    PrecisionModel,
    bearing,
    create_line_string,
    create_point,
    envelope,
)
from metro_space.graph.direction import (
    AnyDirection,
    Direction,
    OctilinearDirection,
    direction_from_angle,
)
from metro_space.graph.signature import NodeSignature, empty_signature

SignatureFactory = Callable[["Node"], NodeSignature]

_node_ids = itertools.count(1)
_edge_ids = itertools.count(1)


@dataclass(eq=False)
class Route:
    """A metro line (coloured route) carried by edges. Compared by identity."""

    name: str
    line_width: float
    color: str = "#000000"


class Node:
    """A node/station of the metro map graph.

    Every change of position or adjacency bumps ``revision``; signatures
    and buffers compare revisions to decide whether to recompute.
    """

    def __init__(
        self,
        x: float,
        y: float,
        name: str | None = None,
        signature_factory: SignatureFactory | None = None,
        precision: PrecisionModel = DEFAULT_PRECISION,
    ) -> None:
        self.uid = next(_node_ids)
        self.name = name
        self.precision = precision
        self.deleted = False
        self.revision = 0
        self._x = precision.make_precise(x)
        self._y = precision.make_precise(y)
        self._adjacent_edges: dict[Edge, None] = {}
        factory = signature_factory or empty_signature
        self.signature: NodeSignature = factory(self)

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def coordinate(self) -> tuple[float, float]:
        return self._x, self._y

    @property
    def point(self) -> Point:
        return create_point(self._x, self._y, self.precision)

    @property
    def centroid(self) -> Point:
        return self.point

    @property
    def degree(self) -> int:
        return len(self._adjacent_edges)

    @property
    def adjacent_edges(self) -> list[Edge]:
        return list(self._adjacent_edges)

    def adjacent_edges_except(self, edge: Edge) -> list[Edge]:
        return [e for e in self._adjacent_edges if e is not edge]

    def adjacent_nodes(self) -> list[Node]:
        return [e.other_node(self) for e in self._adjacent_edges]

    def move_to(self, x: float, y: float) -> None:
        """Set a new position and update every dependent element."""
        x = self.precision.make_precise(x)
        y = self.precision.make_precise(y)
        if (x, y) == (self._x, self._y):
            return
        self._x, self._y = x, y
        self.revision += 1
        for edge in list(self._adjacent_edges):
            edge.update()

    def set_x(self, x: float) -> None:
        self.move_to(x, self._y)

    def set_y(self, y: float) -> None:
        self.move_to(self._x, y)

    def move(self, direction: OctilinearDirection, distance: float) -> None:
        """Move along an octilinear direction (diagonal steps move both axes)."""
        self.move_to(self._x + direction.dx * distance, self._y + direction.dy * distance)

    def is_adjacent(self, element: GraphElement) -> bool:
        if isinstance(element, Edge):
            return element in self._adjacent_edges
        return any(e.other_node(self) is element for e in self._adjacent_edges)

    def create_adjacent_edge_to(self, other: Node, routes: Iterable[Route] = ()) -> Edge:
        """Connect to ``other``; the owning graph must invalidate its edge cache."""
        return Edge(self, other, routes)

    def edge_to(self, other: Node) -> Edge | None:
        for edge in self._adjacent_edges:
            if edge.other_node(self) is other:
                return edge
        return None

    def delete(self) -> None:
        """Detach from all adjacent edges and mark as deleted."""
        for edge in list(self._adjacent_edges):
            edge.delete()
        self.deleted = True
        self.revision += 1

    def _add_adjacent_edge(self, edge: Edge) -> None:
        self._adjacent_edges[edge] = None
        self.revision += 1

    def _remove_adjacent_edge(self, edge: Edge) -> None:
        if edge in self._adjacent_edges:
            del self._adjacent_edges[edge]
            self.revision += 1

    def __repr__(self) -> str:
        return f"Node({self.name or self.uid}, x={self._x}, y={self._y})"


class Edge:
    """An undirected edge between two nodes carrying a set of routes.

    The line string and direction are recomputed whenever an endpoint
    moves. ``original_direction`` remembers the last octilinear direction
    the edge had, so a repair knows where a displaced edge came from.
    """

    def __init__(
        self,
        node_a: Node,
        node_b: Node,
        routes: Iterable[Route] = (),
        name: str | None = None,
    ) -> None:
        if node_a is node_b:
            raise ValueError(f"Edge endpoints must differ: {node_a}")
        self.uid = next(_edge_ids)
        self.name = name
        self.node_a = node_a
        self.node_b = node_b
        self.deleted = False
        self.revision = 0
        self._routes: dict[Route, None] = dict.fromkeys(routes)
        self.line_string: LineString
        self.direction: Direction
        self.original_direction: OctilinearDirection | None = None
        node_a._add_adjacent_edge(self)
        node_b._add_adjacent_edge(self)
        self.update()

    def update(self) -> None:
        """Recompute line string and direction from the endpoints."""
        precision = self.node_a.precision
        self.line_string = create_line_string(
            self.node_a.coordinate, self.node_b.coordinate, precision
        )
        dx = self.node_b.x - self.node_a.x
        dy = self.node_b.y - self.node_a.y
        direction = direction_from_angle(bearing(self.line_string))
        if isinstance(direction, AnyDirection) and _is_octilinear_delta(dx, dy):
            direction = direction.to_octilinear()
        self.direction = direction
        if isinstance(direction, OctilinearDirection):
            self.original_direction = direction
        elif self.original_direction is None:
            self.original_direction = direction.to_octilinear()
        self.revision += 1

    @property
    def routes(self) -> list[Route]:
        return list(self._routes)

    @property
    def nodes(self) -> tuple[Node, Node]:
        return self.node_a, self.node_b

    @property
    def centroid(self) -> Point:
        c = self.line_string.centroid
        return create_point(c.x, c.y, self.node_a.precision)

    @property
    def length(self) -> float:
        return self.line_string.length

    @property
    def dx(self) -> float:
        return self.node_b.x - self.node_a.x

    @property
    def dy(self) -> float:
        return self.node_b.y - self.node_a.y

    def add_routes(self, *routes: Route) -> None:
        """Add routes, ignoring duplicates."""
        added = [r for r in routes if r not in self._routes]
        if not added:
            return
        for route in added:
            self._routes[route] = None
        self.revision += 1
        self.node_a.revision += 1
        self.node_b.revision += 1

    def has_routes(self) -> bool:
        return bool(self._routes)

    def width(self, route_margin: float) -> float:
        """Width of the route bundle: line widths plus inner route margins."""
        total = sum(route.line_width for route in self._routes)
        return total + route_margin * max(0, len(self._routes) - 2)

    def other_node(self, node: Node) -> Node:
        if node is self.node_a:
            return self.node_b
        if node is self.node_b:
            return self.node_a
        raise ValueError(f"{node} is not an endpoint of {self}")

    def direction_from(self, node: Node) -> Direction:
        """Direction of this edge seen from the given endpoint."""
        if node is self.node_a:
            return self.direction
        if node is self.node_b:
            return self.direction.opposite()
        raise ValueError(f"{node} is not an endpoint of {self}")

    def original_direction_from(self, node: Node) -> OctilinearDirection:
        if node is self.node_a:
            return self.original_direction
        if node is self.node_b:
            return self.original_direction.opposite()
        raise ValueError(f"{node} is not an endpoint of {self}")

    @property
    def is_octilinear(self) -> bool:
        return self.direction.is_octilinear

    def is_horizontal(self) -> bool:
        return self.direction.is_horizontal()

    def is_vertical(self) -> bool:
        return self.direction.is_vertical()

    def is_diagonal(self) -> bool:
        return self.direction.is_diagonal()

    def is_adjacent(self, element: GraphElement) -> bool:
        """True for an endpoint or an edge sharing an endpoint."""
        if isinstance(element, Node):
            return element is self.node_a or element is self.node_b
        if element is self:
            return False
        return self.node_a.is_adjacent(element) or self.node_b.is_adjacent(element)

    def equal_nodes(self, other: Edge) -> bool:
        """True if both edges connect the same pair of nodes."""
        return {self.node_a, self.node_b} == {other.node_a, other.node_b}

    def delete(self) -> None:
        """Remove from both endpoints and mark as deleted."""
        self.node_a._remove_adjacent_edge(self)
        self.node_b._remove_adjacent_edge(self)
        self.deleted = True
        self.revision += 1

    def __repr__(self) -> str:
        label = self.name or f"{self.node_a.name or self.node_a.uid} <-> {self.node_b.name or self.node_b.uid}"
        return f"Edge({label})"


GraphElement = Union[Node, Edge]


def _is_octilinear_delta(dx: float, dy: float) -> bool:
    return (
        abs(dx) < OCTILINEAR_TOLERANCE
        or abs(dy) < OCTILINEAR_TOLERANCE
        or abs(abs(dx) - abs(dy)) < OCTILINEAR_TOLERANCE
    )


class Graph:
    """A container of nodes; edges are derived from node adjacencies.

    The edge cache is built on first access after a mutation.
    """

    def __init__(
        self,
        nodes: Iterable[Node] = (),
        precision: PrecisionModel = DEFAULT_PRECISION,
    ) -> None:
        self.precision = precision
        self._nodes: dict[Node, None] = dict.fromkeys(nodes)
        self._edge_cache: list[Edge] | None = None

    @property
    def nodes(self) -> list[Node]:
        return list(self._nodes)

    @property
    def edges(self) -> list[Edge]:
        if self._edge_cache is None:
            self._build_edge_cache()
        return [edge for edge in self._edge_cache if not edge.deleted]

    def _build_edge_cache(self) -> None:
        cache: dict[Edge, None] = {}
        for node in self._nodes:
            for edge in node.adjacent_edges:
                cache[edge] = None
        self._edge_cache = list(cache)

    def invalidate(self) -> None:
        """Flag the edge cache for a rebuild on next access."""
        self._edge_cache = None

    def create_node(
        self,
        x: float,
        y: float,
        name: str | None = None,
        signature_factory: SignatureFactory | None = None,
    ) -> Node:
        node = Node(x, y, name, signature_factory, precision=self.precision)
        self.add_nodes(node)
        return node

    def create_edge(
        self, node_a: Node, node_b: Node, *routes: Route, name: str | None = None
    ) -> Edge:
        edge = Edge(node_a, node_b, routes, name=name)
        self.invalidate()
        return edge

    def add_nodes(self, *nodes: Node) -> None:
        for node in nodes:
            self._nodes[node] = None
        self.invalidate()

    def remove_nodes(self, *nodes: Node) -> None:
        for node in nodes:
            self._nodes.pop(node, None)
        self.invalidate()

    def remove_deleted(self) -> None:
        """Drop deleted nodes and rebuild the edge cache on next access."""
        for node in [n for n in self._nodes if n.deleted]:
            del self._nodes[node]
        self.invalidate()

    def find_node(self, name: str) -> Node | None:
        for node in self._nodes:
            if node.name == name:
                return node
        return None

    def non_octilinear_edges(self) -> list[Edge]:
        return [edge for edge in self.edges if not edge.is_octilinear]

    def count_non_octilinear_edges(self) -> int:
        return len(self.non_octilinear_edges())

    def bounding_box(self) -> BoundingBox:
        """Envelope of all edge line strings and node signatures."""
        geometries = [edge.line_string for edge in self.edges]
        geometries.extend(node.signature.geometry for node in self._nodes)
        return envelope(GeometryCollection([g for g in geometries if not g.is_empty]))

    def to_networkx(self) -> nx.Graph:
        """Export the live topology; nodes are keyed by ``Node`` objects."""
        G = nx.Graph()
        for node in self._nodes:
            G.add_node(node, name=node.name, x=node.x, y=node.y)
        for edge in self.edges:
            G.add_edge(edge.node_a, edge.node_b, edge=edge, routes=len(edge.routes))
        return G

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={len(self.edges)})"
