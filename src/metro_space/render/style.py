"""Theme and style constants for metro map rendering."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for a rendered metro map."""

    name: str
    background_color: str
    station_fill: str
    station_stroke: str
    station_stroke_width: float
    label_color: str
    label_font_family: str
    label_font_size: float
    title_color: str
    title_font_size: float
    conflict_fill: str
    conflict_stroke: str
    # Bend nodes are only drawn when show_bends is requested
    bend_radius: float = 2.0
    bend_fill: str = "#888888"
    route_opacity: float = 1.0
