"""Tests for the demo network."""

from metro_space.example import CONNECTIONS, STATIONS, build_example_map


def test_example_topology():
    metro_map = build_example_map()
    assert len(metro_map.nodes) == len(STATIONS) == 17
    assert len(metro_map.edges) == len(CONNECTIONS) == 22
    assert metro_map.find_node("Q").degree == 0


def test_example_widest_bundle():
    metro_map = build_example_map(route_margin=5)
    i, b = metro_map.find_node("I"), metro_map.find_node("B")
    # seven routes of width 20 with five inner margins
    assert i.edge_to(b).width(5) == 165


def test_example_margins():
    metro_map = build_example_map(route_margin=3, edge_margin=7)
    assert (metro_map.route_margin, metro_map.edge_margin) == (3, 7)


def test_example_is_crowded():
    assert build_example_map().evaluate_conflicts()
