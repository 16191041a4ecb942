"""Tests for SVG rendering."""

import xml.etree.ElementTree as ET

from metro_space.graph import Route, rectangle_station_signature
from metro_space.map import MetroMap
from metro_space.render.svg import bundle_offsets, render_svg
from metro_space.themes import DARK_THEME, LIGHT_THEME


def _simple_map(distance=100):
    metro_map = MetroMap(route_margin=5, edge_margin=0)
    a = metro_map.create_node(0, 0, "Input", rectangle_station_signature)
    b = metro_map.create_node(distance, 0, "Output", rectangle_station_signature)
    metro_map.create_edge(a, b, Route("main", 10, "#ff0000"), Route("side", 10, "#00aa00"))
    return metro_map


def _render_simple(**kwargs):
    return render_svg(_simple_map(), LIGHT_THEME, **kwargs)


def test_render_produces_valid_svg():
    svg = _render_simple()
    root = ET.fromstring(svg)
    assert root.tag.endswith("svg") or "svg" in root.tag


def test_render_contains_title():
    assert "Demo" in _render_simple(title="Demo")


def test_render_contains_station_labels():
    svg = _render_simple()
    assert "Input" in svg
    assert "Output" in svg


def test_render_without_labels():
    svg = _render_simple(show_labels=False)
    assert "Input" not in svg


def test_render_contains_route_colors():
    svg = _render_simple()
    assert "#ff0000" in svg
    assert "#00aa00" in svg


def test_render_dark_theme_background():
    svg = render_svg(_simple_map(), DARK_THEME)
    assert DARK_THEME.background_color in svg


def test_render_marks_conflicts():
    crowded = render_svg(_simple_map(distance=15), LIGHT_THEME)
    assert LIGHT_THEME.conflict_stroke in crowded
    assert LIGHT_THEME.conflict_stroke not in _render_simple()


def test_render_empty_map():
    svg = render_svg(MetroMap(), LIGHT_THEME)
    assert svg.startswith("<svg")


def test_bundle_offsets_centre_the_routes():
    metro_map = _simple_map()
    edge = metro_map.edges[0]
    assert bundle_offsets(edge, 5) == [-5, 5]

    edge.add_routes(Route("third", 10))
    assert bundle_offsets(edge, 5) == [-12.5, 2.5, 17.5]
