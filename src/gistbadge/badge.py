"""shields.io-style SVG badge rendering and output format selection."""

from __future__ import annotations

import json
from html import escape
from typing import Optional

from gistbadge.colors import to_svg_color
from gistbadge.models import BadgeContent

DEFAULT_MESSAGE_COLOR = "#4c1"
DEFAULT_LABEL_COLOR = "#555"
STYLES = ("flat", "flat-square", "plastic", "for-the-badge", "social")

_FONT = "Verdana,Geneva,DejaVu Sans,sans-serif"
_NARROW = set("fijlrtI!|.,:;'`()[]{} ")
_WIDE = set("mwMW@%")


class BadgeError(Exception):
    """Raised when a badge cannot be rendered."""


def text_width(text: str, scale: float = 1.0) -> float:
    """Approximate rendered width of ``text`` at 11px Verdana."""
    width = 0.0
    for ch in text:
        if ch in _NARROW:
            width += 3.9
        elif ch in _WIDE:
            width += 10.0
        elif ch.isupper() or ch.isdigit():
            width += 7.5
        else:
            width += 6.6
    return round(width * scale, 1)


def render_svg(
    label: str,
    message: str,
    color: Optional[str] = None,
    label_color: Optional[str] = None,
    style: Optional[str] = None,
) -> str:
    """Render a two-part badge as SVG markup.

    Unrecognised colors fall back to the defaults. An empty label gives a
    message-only badge.

    Raises:
        BadgeError: If ``style`` is not one of STYLES.
    """
    style = style or "flat"
    if style not in STYLES:
        raise BadgeError(f"Unknown badge style '{style}'. Valid styles: {', '.join(STYLES)}")

    message_fill = to_svg_color(color) or DEFAULT_MESSAGE_COLOR
    label_fill = to_svg_color(label_color) or DEFAULT_LABEL_COLOR

    if style == "for-the-badge":
        label, message = label.upper(), message.upper()
    if style == "social":
        label = label[:1].upper() + label[1:]

    if style == "for-the-badge":
        height, padding, scale, font_size = 28, 24, 1.15, 10
    elif style == "plastic":
        height, padding, scale, font_size = 18, 10, 1.0, 11
    else:
        height, padding, scale, font_size = 20, 10, 1.0, 11

    label_width = round(text_width(label, scale) + padding, 1) if label else 0
    message_width = round(text_width(message, scale) + padding, 1)
    total_width = round(label_width + message_width, 1)

    label_text = escape(label)
    message_text = escape(message)
    title = escape(f"{label}: {message}" if label else message)

    if style == "social":
        return _render_social(label_text, message_text, title, label_width, message_width)

    radius = {"flat": 3, "plastic": 4}.get(style, 0)
    text_y = height / 2 + 4
    bold = ' font-weight="bold"' if style == "for-the-badge" else ""
    spacing = ' letter-spacing="1"' if style == "for-the-badge" else ""

    if style == "plastic":
        gradient = '''  <linearGradient id="s" x2="0" y2="100%">
    <stop offset="0" stop-color="#fff" stop-opacity=".7"/>
    <stop offset=".1" stop-color="#aaa" stop-opacity=".1"/>
    <stop offset=".9" stop-opacity=".3"/>
    <stop offset="1" stop-opacity=".5"/>
  </linearGradient>
'''
    elif style == "flat":
        gradient = '''  <linearGradient id="s" x2="0" y2="100%">
    <stop offset="0" stop-color="#bbb" stop-opacity=".1"/>
    <stop offset="1" stop-opacity=".1"/>
  </linearGradient>
'''
    else:
        gradient = ""
    overlay = f'    <rect width="{total_width}" height="{height}" fill="url(#s)"/>\n' if gradient else ""

    label_rect = ""
    label_texts = ""
    if label:
        label_rect = f'    <rect width="{label_width}" height="{height}" fill="{label_fill}"/>\n'
        label_texts = _texts(label_text, label_width / 2, text_y, shadow=bool(gradient))

    message_texts = _texts(message_text, label_width + message_width / 2, text_y, shadow=bool(gradient))

    return f'''<svg xmlns="http://www.w3.org/2000/svg" width="{total_width}" height="{height}" role="img" aria-label="{title}">
  <title>{title}</title>
{gradient}  <clipPath id="r">
    <rect width="{total_width}" height="{height}" rx="{radius}" fill="#fff"/>
  </clipPath>
  <g clip-path="url(#r)">
{label_rect}    <rect x="{label_width}" width="{message_width}" height="{height}" fill="{message_fill}"/>
{overlay}  </g>
  <g fill="#fff" text-anchor="middle" font-family="{_FONT}" font-size="{font_size}"{bold}{spacing}>
{label_texts}{message_texts}  </g>
</svg>'''


def _texts(text: str, x: float, y: float, shadow: bool) -> str:
    x = round(x, 1)
    lines = ""
    if shadow:
        lines += f'    <text x="{x}" y="{y + 1}" fill="#010101" fill-opacity=".3">{text}</text>\n'
    lines += f'    <text x="{x}" y="{y}">{text}</text>\n'
    return lines


def _render_social(label: str, message: str, title: str, label_width: float, message_width: float) -> str:
    gap = 6 if label else 0
    total_width = round(label_width + gap + message_width, 1)
    message_x = label_width + gap
    label_part = ""
    if label:
        label_part = (
            f'  <rect x=".5" y=".5" width="{round(label_width - 1, 1)}" height="19" rx="2" '
            f'fill="#fcfcfc" stroke="#d5d5d5"/>\n'
            f'  <text x="{round(label_width / 2, 1)}" y="14" fill="#333">{label}</text>\n'
        )
    return f'''<svg xmlns="http://www.w3.org/2000/svg" width="{total_width}" height="20" role="img" aria-label="{title}">
  <title>{title}</title>
  <g font-family="Helvetica Neue,Helvetica,Arial,sans-serif" font-size="11" font-weight="700" text-anchor="middle">
{label_part}  <rect x="{round(message_x + 0.5, 1)}" y=".5" width="{round(message_width - 1, 1)}" height="19" rx="2" fill="#fafafa" stroke="#d5d5d5"/>
  <text x="{round(message_x + message_width / 2, 1)}" y="14" fill="#333">{message}</text>
  </g>
</svg>'''


def render_json(content: BadgeContent) -> str:
    """Serialize the full endpoint payload as compact JSON."""
    return json.dumps(content.to_dict(), separators=(",", ":"), ensure_ascii=False)


def render_content(content: BadgeContent, filename: str) -> str:
    """Render the content in the format the target filename calls for.

    ``.svg`` files get SVG markup built from color, message, label,
    labelColor and style; anything else gets the endpoint JSON.
    """
    if filename.endswith(".svg"):
        return render_svg(
            label=content.label,
            message=content.message,
            color=content.color,
            label_color=content.label_color,
            style=content.style,
        )
    return render_json(content)
