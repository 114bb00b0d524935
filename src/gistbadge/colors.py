"""Message color helpers: range-to-hue mapping and SVG color normalisation."""

from __future__ import annotations

import math
import re
from typing import Optional

from gistbadge.models import ColorRange

DEFAULT_SATURATION = 100.0
DEFAULT_LIGHTNESS = 40.0

NAMED_COLORS = {
    "brightgreen": "#4c1",
    "green": "#97ca00",
    "yellow": "#dfb317",
    "yellowgreen": "#a4a61d",
    "orange": "#fe7d37",
    "red": "#e05d44",
    "blue": "#007ec6",
    "grey": "#555",
    "gray": "#555",
    "lightgrey": "#9f9f9f",
    "lightgray": "#9f9f9f",
}

ALIASES = {
    "success": "brightgreen",
    "important": "orange",
    "critical": "red",
    "informational": "blue",
    "inactive": "lightgrey",
}

_BARE_HEX = re.compile(r"^([\da-f]{3}|[\da-f]{6})$", re.IGNORECASE)
_HASH_HEX = re.compile(r"^#([\da-f]{3}|[\da-f]{4}|[\da-f]{6}|[\da-f]{8})$", re.IGNORECASE)
_CSS_FUNCTION = re.compile(r"^(rgb|rgba|hsl|hsla)\([^()]*\)$", re.IGNORECASE)
_CSS_KEYWORD = re.compile(r"^[a-z]+$", re.IGNORECASE)


def format_number(value: float) -> str:
    """Print a float the way JavaScript prints a number (100, not 100.0)."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def range_hue(color_range: ColorRange) -> int:
    """Map the clamped value to a hue between 0 (red) and 120 (green).

    An empty range (min == max) maps to hue 0 in both orientations.
    """
    lo, hi = color_range.min, color_range.max
    if hi == lo:
        return 0
    # Clamp low first, then high: a reversed range (min > max) ends at max.
    value = color_range.value
    if value < lo:
        value = lo
    if value > hi:
        value = hi
    if color_range.inverted:
        t = (hi - value) / (hi - lo)
    else:
        t = (value - lo) / (hi - lo)
    return math.floor(t * 120)


def range_color(color_range: ColorRange) -> str:
    """Return the ``hsl(H, S%, L%)`` string for a color range."""
    hue = range_hue(color_range)
    sat = format_number(color_range.saturation)
    lig = format_number(color_range.lightness)
    return f"hsl({hue}, {sat}%, {lig}%)"


def to_svg_color(color: Optional[str]) -> Optional[str]:
    """Normalise a badge color for use as an SVG fill.

    Returns None when the color is unset or not recognised, so the caller
    can fall back to its default.
    """
    if not color:
        return None
    color = color.strip()
    lowered = color.lower()
    name = ALIASES.get(lowered, lowered)
    if name in NAMED_COLORS:
        return NAMED_COLORS[name]
    if _BARE_HEX.match(color):
        return f"#{color}"
    if _HASH_HEX.match(color) or _CSS_FUNCTION.match(color) or _CSS_KEYWORD.match(color):
        return color
    return None
