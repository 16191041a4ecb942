"""Theme definitions for rendered metro maps."""

from metro_space.themes.dark import DARK_THEME
from metro_space.themes.light import LIGHT_THEME

THEMES = {
    "light": LIGHT_THEME,
    "dark": DARK_THEME,
}

__all__ = ["THEMES", "DARK_THEME", "LIGHT_THEME"]
