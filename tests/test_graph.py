"""Tests for the graph model and node signatures."""

import pytest

from metro_space.graph import (
    AnyDirection,
    Graph,
    OctilinearDirection,
    Route,
    bend_node_signature,
    rectangle_station_signature,
    square_station_signature,
)


def _make_line_graph():
    graph = Graph()
    a = graph.create_node(0, 0, "A", rectangle_station_signature)
    b = graph.create_node(100, 0, "B", rectangle_station_signature)
    route = Route("red", 10, "#ff0000")
    edge = graph.create_edge(a, b, route)
    return graph, a, b, edge


class TestEdgeWidth:
    def test_single_route(self):
        _, _, _, edge = _make_line_graph()
        assert edge.width(5) == 10

    def test_two_routes_have_no_margin(self):
        _, a, b, edge = _make_line_graph()
        edge.add_routes(Route("blue", 20))
        assert edge.width(5) == 30

    def test_inner_margins(self):
        graph = Graph()
        a = graph.create_node(0, 0)
        b = graph.create_node(0, 50)
        edge = graph.create_edge(a, b, Route("1", 10), Route("2", 20), Route("3", 30))
        assert edge.width(5) == 65

    def test_no_routes(self):
        graph = Graph()
        edge = graph.create_edge(graph.create_node(0, 0), graph.create_node(10, 0))
        assert edge.width(5) == 0
        assert not edge.has_routes()

    def test_duplicate_routes_ignored(self):
        _, _, _, edge = _make_line_graph()
        edge.add_routes(*edge.routes)
        assert len(edge.routes) == 1


class TestPreconditions:
    def test_edge_needs_two_nodes(self):
        graph = Graph()
        a = graph.create_node(0, 0)
        with pytest.raises(ValueError):
            graph.create_edge(a, a)

    def test_other_node_of_stranger(self):
        graph, _, _, edge = _make_line_graph()
        stranger = graph.create_node(5, 5)
        with pytest.raises(ValueError):
            edge.other_node(stranger)
        with pytest.raises(ValueError):
            edge.direction_from(stranger)


def test_single_node_graph_has_no_edges():
    graph = Graph()
    graph.create_node(0, 0)
    assert graph.edges == []
    assert graph.count_non_octilinear_edges() == 0


def test_edge_direction_follows_nodes():
    _, a, b, edge = _make_line_graph()
    assert edge.direction is OctilinearDirection.EAST
    assert edge.direction_from(b) is OctilinearDirection.WEST

    b.move_to(100, 100)
    assert edge.direction is OctilinearDirection.NORTH_EAST
    assert edge.original_direction is OctilinearDirection.NORTH_EAST

    b.move_to(100, 30)
    assert isinstance(edge.direction, AnyDirection)
    assert not edge.is_octilinear
    assert edge.original_direction is OctilinearDirection.NORTH_EAST
    assert edge.original_direction_from(b) is OctilinearDirection.SOUTH_WEST


def test_move_to_same_position_keeps_revision():
    _, a, _, edge = _make_line_graph()
    node_revision, edge_revision = a.revision, edge.revision
    a.move_to(0, 0)
    assert (a.revision, edge.revision) == (node_revision, edge_revision)
    a.move_to(0, 1)
    assert a.revision > node_revision
    assert edge.revision > edge_revision


def test_move_along_diagonal():
    graph = Graph()
    node = graph.create_node(0, 0)
    node.move(OctilinearDirection.NORTH_EAST, 10)
    assert node.coordinate == (10, 10)
    node.move(OctilinearDirection.SOUTH, 4)
    assert node.coordinate == (10, 6)


def test_adjacency():
    graph, a, b, edge = _make_line_graph()
    c = graph.create_node(200, 0)
    other = graph.create_edge(b, c)
    assert a.is_adjacent(b)
    assert a.is_adjacent(edge)
    assert not a.is_adjacent(c)
    assert edge.is_adjacent(other)
    assert edge.is_adjacent(a)
    assert b.edge_to(c) is other
    assert a.edge_to(c) is None
    assert set(b.adjacent_nodes()) == {a, c}
    assert b.adjacent_edges_except(edge) == [other]


def test_create_adjacent_edge_to():
    graph, a, b, edge = _make_line_graph()
    c = graph.create_node(200, 0)
    blue = Route("blue", 10, "#0000ff")
    created = b.create_adjacent_edge_to(c, [blue])
    graph.invalidate()
    assert created.nodes == (b, c)
    assert created.routes == [blue]
    assert b.edge_to(c) is created
    assert c.degree == 1
    assert created in graph.edges


def test_remove_deleted_node():
    graph, a, b, edge = _make_line_graph()
    b.delete()
    graph.remove_deleted()
    assert graph.nodes == [a]
    assert graph.edges == []
    assert edge.deleted
    assert a.degree == 0


def test_find_node():
    graph, a, _, _ = _make_line_graph()
    assert graph.find_node("A") is a
    assert graph.find_node("Z") is None


def test_bounding_box_includes_signatures():
    graph, _, _, _ = _make_line_graph()
    bbox = graph.bounding_box()
    assert (bbox.min_x, bbox.min_y, bbox.max_x, bbox.max_y) == (-10, -10, 110, 10)


def test_to_networkx():
    graph, a, b, _ = _make_line_graph()
    graph.create_node(300, 300, "lonely")
    G = graph.to_networkx()
    assert G.number_of_nodes() == 3
    assert G.number_of_edges() == 1
    assert G.edges[a, b]["routes"] == 1


class TestSignatures:
    def test_rectangle_grows_with_bundle(self):
        graph = Graph()
        node = graph.create_node(0, 0, "A", rectangle_station_signature)
        other = graph.create_node(0, 100)
        edge = graph.create_edge(node, other, Route("1", 10), Route("2", 20))
        # vertical bundle of width 30, minimal height
        assert node.signature.geometry.bounds == (-15, -10, 15, 10)

        edge.add_routes(Route("3", 15))
        assert node.signature.geometry.bounds == (-25, -10, 25, 10)

    def test_rectangle_follows_node(self):
        graph = Graph()
        node = graph.create_node(0, 0, "A", rectangle_station_signature)
        node.move_to(50, 50)
        assert node.signature.geometry.bounds == (40, 40, 60, 60)

    def test_square_signature_is_round(self):
        graph = Graph()
        node = graph.create_node(0, 0, "A", square_station_signature)
        other = graph.create_node(100, 0)
        graph.create_edge(node, other, Route("1", 30))
        minx, miny, maxx, maxy = node.signature.geometry.bounds
        assert maxx - minx == pytest.approx(30, abs=1e-3)
        assert node.signature.is_station

    def test_bend_signature_is_point(self):
        graph = Graph()
        node = graph.create_node(3, 4, None, bend_node_signature)
        assert node.signature.is_bend
        assert not node.signature.is_station
        assert node.signature.geometry.equals(node.point)
