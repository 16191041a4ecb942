"""SVG rendering of metro maps."""

from metro_space.render.style import Theme
from metro_space.render.svg import bundle_offsets, render_svg

__all__ = ["Theme", "bundle_offsets", "render_svg"]
