"""Layout & style resolver.

Pure, total helpers converting editor values (CSS-ish pixels, hex strings,
font stacks) into what python-pptx expects. None of them raise.
"""

from __future__ import annotations

import math
import re
from typing import Any

from pptx.dml.color import RGBColor
from pptx.enum.text import MSO_VERTICAL_ANCHOR, PP_ALIGN

PX_PER_INCH = 96.0
PT_PER_PX = 0.75
DEFAULT_INCHES = 1.0

DEFAULT_COLOR = "000000"
DEFAULT_FONT = "Arial"
DEFAULT_FONT_SIZE = 18

_FLOAT_PREFIX = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def parse_float(value: Any) -> float | None:
    """parseFloat-style coercion: numbers pass, strings parse by numeric prefix.

    Returns None for anything non-numeric, booleans and non-finite values.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        x = float(value)
    elif isinstance(value, str):
        m = _FLOAT_PREFIX.match(value)
        if m is None:
            return None
        try:
            x = float(m.group(0))
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(x):
        return None
    return x


def px_to_inch(value: Any) -> float:
    """Pixels at 96 DPI to inches. Invalid input gives 1 inch."""
    px = parse_float(value)
    if px is None:
        return DEFAULT_INCHES
    return px / PX_PER_INCH


def px_to_pt(value: Any, default: float = 1.0) -> float:
    px = parse_float(value)
    if px is None:
        return default
    return px * PT_PER_PX


def format_color(value: Any) -> str:
    if not isinstance(value, str):
        return DEFAULT_COLOR
    s = value.strip()
    return s[1:] if s.startswith("#") else s


def resolve_color(component_value: Any, theme_value: Any, fallback: Any = DEFAULT_COLOR) -> str:
    """First non-empty string of component → theme → fallback, without '#'."""
    for candidate in (component_value, theme_value):
        if isinstance(candidate, str) and candidate.strip():
            return format_color(candidate)
    return format_color(fallback)


def resolve_font_family(
    component_value: Any,
    theme_fonts: Any,
    kind: str = "body",
    fallback: str = DEFAULT_FONT,
) -> str:
    if isinstance(component_value, str) and component_value.strip():
        return component_value.strip()
    if theme_fonts is None:
        return fallback
    heading = getattr(theme_fonts, "heading", None)
    body = getattr(theme_fonts, "body", None)
    caption = getattr(theme_fonts, "caption", None)
    if kind == "heading":
        order = (heading, body)
    elif kind == "caption":
        order = (caption, body)
    else:
        order = (body,)
    for candidate in order:
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
    return fallback


def parse_font_size(value: Any, default_size: float = DEFAULT_FONT_SIZE) -> float:
    """Font size in points from a number or a numeric-prefixed string ("16px")."""
    size = parse_float(value)
    if size is None or size <= 0:
        return default_size
    return size


def rgb_from_any(v: Any) -> RGBColor | None:
    """Parse RGB from 'RRGGBB', '#RRGGBB', '#RGB' or [r, g, b]."""
    if v is None:
        return None
    if isinstance(v, (list, tuple)) and len(v) == 3:
        try:
            r, g, b = (int(v[0]), int(v[1]), int(v[2]))
        except (TypeError, ValueError):
            return None
        if all(0 <= c <= 255 for c in (r, g, b)):
            return RGBColor(r, g, b)
        return None
    if isinstance(v, str):
        s = format_color(v)
        if len(s) == 3:
            s = "".join(ch * 2 for ch in s)
        if len(s) == 6:
            try:
                return RGBColor(int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))
            except ValueError:
                return None
    return None


def align_from_any(v: Any) -> PP_ALIGN | None:
    if isinstance(v, PP_ALIGN):
        return v
    if not isinstance(v, str):
        return None
    s = v.strip().lower()
    if s in ("left", "start"):
        return PP_ALIGN.LEFT
    if s in ("center", "centre"):
        return PP_ALIGN.CENTER
    if s in ("right", "end"):
        return PP_ALIGN.RIGHT
    if s in ("justify", "justified"):
        return PP_ALIGN.JUSTIFY
    return None


def vanchor_from_any(v: Any) -> MSO_VERTICAL_ANCHOR | None:
    if isinstance(v, MSO_VERTICAL_ANCHOR):
        return v
    if not isinstance(v, str):
        return None
    s = v.strip().lower()
    if s in ("top", "flex-start", "start"):
        return MSO_VERTICAL_ANCHOR.TOP
    if s in ("middle", "center", "centre"):
        return MSO_VERTICAL_ANCHOR.MIDDLE
    if s in ("bottom", "flex-end", "end"):
        return MSO_VERTICAL_ANCHOR.BOTTOM
    return None


def alpha01(v: Any) -> float | None:
    """Normalize an opacity into 0..1 (accepts 0..1 or 0..100)."""
    x = parse_float(v)
    if x is None:
        return None
    if x > 1.0:
        x = x / 100.0 if x <= 100.0 else 1.0
    return min(max(x, 0.0), 1.0)
