"""Metro map graph: nodes, edges, routes, signatures and directions.

Public API:
- Graph, Node, Edge, Route: the mutable graph model
- OctilinearDirection, AnyDirection, Alignment: direction algebra
- NodeSignature and its factories
"""

from metro_space.graph.direction import (
    Alignment,
    AnyDirection,
    Direction,
    OctilinearDirection,
    direction_from_angle,
)
from metro_space.graph.model import Edge, Graph, GraphElement, Node, Route
from metro_space.graph.signature import (
    NodeSignature,
    SignatureKind,
    bend_node_signature,
    empty_signature,
    rectangle_station_signature,
    square_station_signature,
)

__all__ = [
    "Alignment",
    "AnyDirection",
    "Direction",
    "Edge",
    "Graph",
    "GraphElement",
    "Node",
    "NodeSignature",
    "OctilinearDirection",
    "Route",
    "SignatureKind",
    "bend_node_signature",
    "direction_from_angle",
    "empty_signature",
    "rectangle_station_signature",
    "square_station_signature",
]
