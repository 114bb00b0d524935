"""Build the badge content from action inputs."""

from __future__ import annotations

import math
from typing import Optional

from gistbadge.colors import DEFAULT_LIGHTNESS, DEFAULT_SATURATION, range_color
from gistbadge.config import ConfigError
from gistbadge.models import BadgeConfig, BadgeContent, ColorRange


def _parse_float(name: str, value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise ConfigError(f"Input '{name}' must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ConfigError(f"Input '{name}' must be a finite number, got {value!r}")
    return number


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Input '{name}' must be an integer, got {value!r}") from None


def color_range_from_config(config: BadgeConfig) -> Optional[ColorRange]:
    """Return the color range, or None unless min, max and value are all set."""
    if not (config.min_color_range and config.max_color_range and config.val_color_range):
        return None

    saturation = DEFAULT_SATURATION
    if config.color_range_saturation:
        saturation = _parse_float("colorRangeSaturation", config.color_range_saturation)
    lightness = DEFAULT_LIGHTNESS
    if config.color_range_lightness:
        lightness = _parse_float("colorRangeLightness", config.color_range_lightness)

    return ColorRange(
        min=_parse_float("minColorRange", config.min_color_range),
        max=_parse_float("maxColorRange", config.max_color_range),
        value=_parse_float("valColorRange", config.val_color_range),
        inverted=config.invert_color_range != "",
        saturation=saturation,
        lightness=lightness,
    )


def build_content(config: BadgeConfig) -> BadgeContent:
    """Build the badge content for a config.

    A range-derived color wins over a literal ``color``. Every optional
    field is set only when its input is non-empty.

    Raises:
        ConfigError: If a numeric input cannot be parsed.
    """
    content = BadgeContent(label=config.label, message=config.message)

    color_range = color_range_from_config(config)
    if color_range is not None:
        content.color = range_color(color_range)
    elif config.color:
        content.color = config.color

    content.label_color = config.label_color or None
    content.is_error = config.is_error or None
    content.named_logo = config.named_logo or None
    content.logo_svg = config.logo_svg or None
    content.logo_color = config.logo_color or None
    content.logo_position = config.logo_position or None
    content.style = config.style or None

    if config.logo_width:
        content.logo_width = _parse_int("logoWidth", config.logo_width)
    if config.cache_seconds:
        content.cache_seconds = _parse_int("cacheSeconds", config.cache_seconds)

    return content
