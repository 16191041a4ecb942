"""A small demo network: 17 stations, 7 lines of width 20.

Several stations are much closer than their route bundles allow, so the
map is full of conflicts until space is made.
"""

from __future__ import annotations

from metro_space.constants import EDGE_MARGIN, ROUTE_MARGIN
from metro_space.graph import Route, rectangle_station_signature
from metro_space.map import MetroMap

STATIONS = {
    "A": (150, 200),
    "B": (150, 100),
    "C": (200, 100),
    "D": (200, 150),
    "E": (200, 250),
    "F": (150, 300),
    "G": (100, 300),
    "H": (100, 200),
    "I": (100, 150),
    "J": (150, 250),
    "K": (170, 250),
    "L": (300, 200),
    "N": (100, 250),
    "O": (170, 150),
    "P": (300, 250),
    "Q": (400, 100),
    "R": (100, 350),
}
"""Station name -> initial position."""

LINES = {
    "1": "blue",
    "2": "red",
    "3": "green",
    "4": "yellow",
    "5": "orange",
    "6": "magenta",
    "7": "black",
}
"""Line name -> colour."""

CONNECTIONS = [
    ("A", "B", "12345"),
    ("C", "B", "1245"),
    ("C", "D", "1245"),
    ("D", "E", "1245"),
    ("E", "F", "12456"),
    ("F", "G", "16"),
    ("G", "N", "124"),
    ("N", "H", "12"),
    ("H", "A", "12367"),
    ("H", "I", "136"),
    ("I", "B", "1234567"),
    ("I", "A", "145"),
    ("A", "J", "5"),
    ("J", "K", "52"),
    ("L", "C", "13"),
    ("E", "K", "2"),
    ("O", "K", "254"),
    ("O", "D", "12456"),
    ("P", "E", "1245"),
    ("P", "D", "1"),
    ("G", "R", "1"),
    ("F", "R", "1"),
]
"""(station, station, lines) for every edge; Q stays unconnected."""

LINE_WIDTH = 20.0


def build_example_map(
    route_margin: float = ROUTE_MARGIN,
    edge_margin: float = EDGE_MARGIN,
) -> MetroMap:
    """Build the demo network with rectangle station signatures."""
    metro_map = MetroMap(route_margin=route_margin, edge_margin=edge_margin)
    nodes = {
        name: metro_map.create_node(x, y, name, rectangle_station_signature)
        for name, (x, y) in STATIONS.items()
    }
    routes = {
        name: Route(name, LINE_WIDTH, color)
        for name, color in LINES.items()
    }
    for a, b, lines in CONNECTIONS:
        metro_map.create_edge(nodes[a], nodes[b], *(routes[line] for line in lines))
    return metro_map
