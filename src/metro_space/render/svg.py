"""SVG generation for metro maps using drawsvg.

Map coordinates grow upwards (north is +y); the drawing flips them so
north is at the top of the image.
"""

from __future__ import annotations

import math

import drawsvg as draw
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

from metro_space.conflict import Conflict
from metro_space.graph import Edge
from metro_space.map import MetroMap
from metro_space.render.style import Theme


def render_svg(
    metro_map: MetroMap,
    theme: Theme,
    width: int | None = None,
    height: int | None = None,
    padding: float = 40.0,
    title: str | None = None,
    show_conflicts: bool = True,
    show_labels: bool = True,
    show_bends: bool = False,
) -> str:
    """Render a metro map to an SVG string.

    Remaining conflicts are drawn as translucent polygons on top of the
    map when ``show_conflicts`` is set.
    """
    if not metro_map.nodes:
        return '<svg xmlns="http://www.w3.org/2000/svg"></svg>'

    box = metro_map.bounding_box()
    title_height = theme.title_font_size + 20 if title else 0.0
    svg_width = width or int(math.ceil(box.width + padding * 2))
    svg_height = height or int(math.ceil(box.height + padding * 2 + title_height))

    def to_svg(x: float, y: float) -> tuple[float, float]:
        return x - box.min_x + padding, box.max_y - y + padding + title_height

    d = draw.Drawing(svg_width, svg_height)
    d.append(draw.Rectangle(0, 0, svg_width, svg_height, fill=theme.background_color))

    if title:
        d.append(draw.Text(
            title,
            theme.title_font_size,
            padding, theme.title_font_size + 5,
            fill=theme.title_color,
            font_family=theme.label_font_family,
            font_weight="bold",
        ))

    for edge in metro_map.edges:
        _render_bundle(d, edge, metro_map.route_margin, theme, to_svg)

    _render_stations(d, metro_map, theme, to_svg, show_bends)

    if show_labels:
        _render_labels(d, metro_map, theme, to_svg)

    if show_conflicts:
        _render_conflicts(d, metro_map.evaluate_conflicts(), theme, to_svg)

    return d.as_svg()


def bundle_offsets(edge: Edge, route_margin: float) -> list[float]:
    """Perpendicular offset of every route's centre line within the bundle."""
    routes = edge.routes
    gap = route_margin if len(routes) > 2 else 0.0
    offset = -edge.width(route_margin) / 2
    offsets = []
    for route in routes:
        offsets.append(offset + route.line_width / 2)
        offset += route.line_width + gap
    return offsets


def _render_bundle(d: draw.Drawing, edge: Edge, route_margin: float, theme: Theme, to_svg) -> None:
    """Draw the routes of an edge as parallel lines."""
    (x1, y1), (x2, y2) = edge.node_a.coordinate, edge.node_b.coordinate
    length = math.hypot(x2 - x1, y2 - y1)
    if length == 0:
        return
    # unit normal to the left of a -> b
    nx, ny = -(y2 - y1) / length, (x2 - x1) / length

    for route, offset in zip(edge.routes, bundle_offsets(edge, route_margin)):
        sx1, sy1 = to_svg(x1 + nx * offset, y1 + ny * offset)
        sx2, sy2 = to_svg(x2 + nx * offset, y2 + ny * offset)
        d.append(draw.Line(
            sx1, sy1, sx2, sy2,
            stroke=route.color,
            stroke_width=route.line_width,
            stroke_opacity=theme.route_opacity,
            stroke_linecap="butt",
        ))


def _render_stations(
    d: draw.Drawing,
    metro_map: MetroMap,
    theme: Theme,
    to_svg,
    show_bends: bool,
) -> None:
    for node in metro_map.nodes:
        signature = node.signature
        if signature.is_station:
            _render_polygon(
                d, signature.geometry, to_svg,
                fill=theme.station_fill,
                stroke=theme.station_stroke,
                stroke_width=theme.station_stroke_width,
            )
        elif signature.is_bend and show_bends:
            cx, cy = to_svg(node.x, node.y)
            d.append(draw.Circle(cx, cy, theme.bend_radius, fill=theme.bend_fill))


def _render_labels(d: draw.Drawing, metro_map: MetroMap, theme: Theme, to_svg) -> None:
    """Station names, centred on the station symbol."""
    for node in metro_map.nodes:
        if not node.name or not node.signature.is_station:
            continue
        x, y = to_svg(node.x, node.y)
        d.append(draw.Text(
            node.name,
            theme.label_font_size,
            x, y,
            fill=theme.label_color,
            font_family=theme.label_font_family,
            text_anchor="middle",
            dominant_baseline="central",
        ))


def _render_conflicts(d: draw.Drawing, conflicts: list[Conflict], theme: Theme, to_svg) -> None:
    for conflict in conflicts:
        _render_polygon(
            d, conflict.polygon, to_svg,
            fill=theme.conflict_fill,
            stroke=theme.conflict_stroke,
            stroke_width=1.0,
        )


def _render_polygon(d: draw.Drawing, geometry: BaseGeometry, to_svg, **style) -> None:
    parts = geometry.geoms if hasattr(geometry, "geoms") else [geometry]
    for part in parts:
        if not isinstance(part, Polygon) or part.is_empty:
            continue
        points: list[float] = []
        for x, y in part.exterior.coords[:-1]:
            points.extend(to_svg(x, y))
        d.append(draw.Lines(*points, close=True, **style))

