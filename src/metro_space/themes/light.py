"""Light theme."""

from metro_space.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="none",
    station_fill="#ffffff",
    station_stroke="#333333",
    station_stroke_width=2.0,
    label_color="#333333",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=12.0,
    title_color="#111111",
    title_font_size=22.0,
    conflict_fill="rgba(220, 0, 0, 0.25)",
    conflict_stroke="#cc0000",
    route_opacity=0.9,
)
