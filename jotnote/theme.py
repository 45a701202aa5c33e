# -*- coding: utf-8 -*-
"""jotnote.theme
Terminal theme colors.

License: MIT
"""
from rich.style import Style

DEFAULT_THEME = "cyan"

# theme key -> rich color name
THEME_COLORS = {
    "red": "red",
    "green": "green",
    "yellow": "yellow",
    "blue": "bright_blue",
    "magenta": "magenta",
    "cyan": "cyan",
    "white": "white",
}


class ThemeError(KeyError):
    """Raised for a theme key that isn't in THEME_COLORS."""

    def __init__(self, key):
        self.key = key
        super().__init__(key)

    def __str__(self):
        choices = ", ".join(THEME_COLORS)
        return f"unknown theme color '{self.key}' (choose from: {choices})"


def is_theme(key):
    """Whether a key names a theme color."""
    return isinstance(key, str) and key.lower() in THEME_COLORS


def theme_color(key):
    """Map a theme key to its rich color name.

    Args:
        key (str):  the theme key.

    Returns:
        color (str): the rich color name.

    """
    if not is_theme(key):
        raise ThemeError(key)
    return THEME_COLORS[key.lower()]


def theme_style(key, bold=False):
    """Build a rich Style for a theme key.

    Args:
        key (str):      the theme key.
        bold (bool):    bold text.

    Returns:
        style (Style):  the style for the theme.

    """
    return Style(color=theme_color(key), bold=bold)
