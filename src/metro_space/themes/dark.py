"""Dark grey theme."""

from metro_space.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#2b2b2b",
    station_fill="#ffffff",
    station_stroke="#333333",
    station_stroke_width=1.5,
    label_color="#e0e0e0",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=11.0,
    title_color="#ffffff",
    title_font_size=20.0,
    conflict_fill="rgba(255, 80, 80, 0.35)",
    conflict_stroke="#ff5050",
    bend_fill="#aaaaaa",
)
