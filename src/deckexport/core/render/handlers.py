"""Per-type component handlers.

Every handler has the signature ``handler(slide, component, theme) -> None``
and draws onto ``slide`` only. Payloads are read through the typed payload
classes, so missing fields become defaults or placeholders; anything that
still raises is contained by the dispatcher.
"""

from __future__ import annotations

import base64
import logging
from pathlib import Path
from typing import Any, Mapping
from urllib.parse import unquote_to_bytes, urlparse

import requests
from pptx.chart.data import BubbleChartData, CategoryChartData, XyChartData
from pptx.enum.chart import XL_CHART_TYPE, XL_LEGEND_POSITION
from pptx.enum.shapes import MSO_AUTO_SHAPE_TYPE
from pptx.enum.text import MSO_VERTICAL_ANCHOR, PP_ALIGN
from pptx.util import Pt

from deckexport.core.config import current_settings
from deckexport.core.errors import ComponentRenderError
from deckexport.core.model.deck import DeckTheme, ThemeColors, ThemeFonts, VisualComponent
from deckexport.core.model.payloads import (
    ButtonPayload,
    CalloutPayload,
    ChartPayload,
    CitationPayload,
    ImagePayload,
    ListPayload,
    QuotePayload,
    TextPayload,
)
from deckexport.core.render.primitives import (
    Box,
    TextStyle,
    add_autoshape,
    add_picture_with_fit,
    add_placeholder,
    add_text,
    set_shape_text,
)
from deckexport.core.render.sanitize import Layout, get_safe, safe_mapping, safe_str, sanitize_layout
from deckexport.core.render.units import (
    align_from_any,
    alpha01,
    format_color,
    parse_float,
    parse_font_size,
    px_to_pt,
    resolve_color,
    resolve_font_family,
    rgb_from_any,
    vanchor_from_any,
)

logger = logging.getLogger(__name__)

# 1x1 transparent GIF
TRANSPARENT_GIF = base64.b64decode("R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7")

LINK_COLOR = "0077CC"

VARIANT_SIZES = {"heading": 28, "subheading": 22, "paragraph": 18}

CHART_TYPES: dict[str, XL_CHART_TYPE] = {
    "bar": XL_CHART_TYPE.COLUMN_CLUSTERED,
    "line": XL_CHART_TYPE.LINE_MARKERS,
    "pie": XL_CHART_TYPE.PIE,
    "doughnut": XL_CHART_TYPE.DOUGHNUT,
    "radar": XL_CHART_TYPE.RADAR,
    "scatter": XL_CHART_TYPE.XY_SCATTER,
    "area": XL_CHART_TYPE.AREA,
    # python-pptx cannot write 3-D plots; keep the clustered column look.
    "bar3d": XL_CHART_TYPE.COLUMN_CLUSTERED,
    "bubble": XL_CHART_TYPE.BUBBLE,
    "polararea": XL_CHART_TYPE.RADAR_FILLED,
}

_POINT_COLORED = (XL_CHART_TYPE.PIE, XL_CHART_TYPE.DOUGHNUT)
_LINE_COLORED = (XL_CHART_TYPE.LINE_MARKERS, XL_CHART_TYPE.RADAR)


def theme_colors(theme: DeckTheme | None) -> ThemeColors:
    return theme.colors if theme is not None else ThemeColors()


def theme_fonts(theme: DeckTheme | None) -> ThemeFonts | None:
    return theme.fonts if theme is not None else None


def _is_bold(weight: Any) -> bool:
    if weight == "bold":
        return True
    w = parse_float(weight)
    return w is not None and w >= 700


def _line_spacing(css: Mapping[str, Any]) -> Any:
    lh = css.get("lineHeight")
    if isinstance(lh, (int, float)) and not isinstance(lh, bool) and lh > 0:
        return float(lh)
    if isinstance(lh, str) and lh.strip().endswith("px"):
        return Pt(px_to_pt(lh))
    return None


def css_text_style(
    css: Any,
    theme: DeckTheme | None,
    *,
    default_size: float = 18,
    font_kind: str = "body",
    default_color: str = "000000",
) -> TextStyle:
    """TextStyle from a component's CSS-like style with the theme cascade."""
    css = safe_mapping(css)
    fill = css.get("backgroundColor")
    fill = format_color(fill) if isinstance(fill, str) and fill.strip() else None
    decoration = safe_str(css.get("textDecorationLine")) or safe_str(css.get("textDecoration"))
    return TextStyle(
        size=parse_font_size(css.get("fontSize"), default_size),
        face=resolve_font_family(css.get("fontFamily"), theme_fonts(theme), font_kind),
        color=resolve_color(css.get("color"), theme_colors(theme).text, default_color),
        bold=_is_bold(css.get("fontWeight")),
        italic=css.get("fontStyle") == "italic",
        underline="underline" in decoration,
        align=align_from_any(css.get("textAlign")),
        valign=vanchor_from_any(css.get("verticalAlign")),
        fill=fill,
        fill_alpha=alpha01(css.get("opacity")) if fill else None,
        line_spacing=_line_spacing(css),
    )


def _border(css: Mapping[str, Any], theme: DeckTheme | None) -> tuple[str | None, float | None]:
    if not (css.get("borderColor") or css.get("borderWidth")):
        return (None, None)
    color = resolve_color(css.get("borderColor"), theme_colors(theme).secondary, "000000")
    width = parse_float(css.get("borderWidth"))
    return (color, width if width and width > 0 else 1.0)


# --- Text -------------------------------------------------------------------


def handle_text(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = TextPayload.from_data(component.data)
    kind = "heading" if payload.variant in ("heading", "subheading") else "body"
    style = css_text_style(
        component.style,
        theme,
        default_size=VARIANT_SIZES.get(payload.variant or "", 18),
        font_kind=kind,
    )
    text = payload.text
    if not text:
        text = f"[{payload.variant}]" if payload.variant else "[Empty Text Block]"
    add_text(slide, text, Box.from_layout(layout), style)


# --- Image ------------------------------------------------------------------


def load_image_bytes(src: str | None) -> bytes:
    """Image bytes for `src`; unusable sources yield a transparent pixel.

    data: URIs are decoded, http(s) URLs fetched, anything else is a path.
    Fetch failures raise so the dispatcher can draw a placeholder.
    """
    settings = current_settings()
    if not src:
        logger.warning("image has no usable source; embedding a transparent pixel")
        return TRANSPARENT_GIF
    if any(p in src for p in settings.blocked_image_patterns):
        logger.warning("image url %s is blocked for export; embedding a transparent pixel", src)
        return TRANSPARENT_GIF

    if src.startswith("data:"):
        header, _, payload = src.partition(",")
        if ";base64" in header:
            return base64.b64decode(payload)
        return unquote_to_bytes(payload)

    parsed = urlparse(src)
    if parsed.scheme in ("http", "https"):
        try:
            resp = requests.get(src, timeout=settings.image_timeout_s, headers={"User-Agent": settings.user_agent})
            resp.raise_for_status()
        except requests.RequestException as e:
            raise ComponentRenderError(f"could not fetch image {src}", cause=e) from e
        return resp.content

    path = Path(unquote_to_bytes(parsed.path).decode("utf-8") if parsed.scheme == "file" else src)
    if not path.is_file():
        raise ComponentRenderError(f"image not found: {src}")
    return path.read_bytes()


def handle_image(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = ImagePayload.from_data(component.data)
    css = safe_mapping(component.style)
    blob = load_image_bytes(payload.src)

    box = Box.from_layout(layout)
    if payload.caption and component.type == "imageWithCaption":
        img_box = Box(box.x, box.y, box.w, box.h * 0.8)
        cap_box = Box(box.x, box.y + box.h * 0.8, box.w, box.h * 0.2)
        cap_style = css_text_style(None, theme, default_size=12, font_kind="caption", default_color="595959")
        add_text(slide, payload.caption, cap_box, cap_style.but(align=PP_ALIGN.CENTER, italic=True))
        box = img_box
    add_picture_with_fit(slide, blob, box, fit=safe_str(css.get("objectFit"), "stretch"))


# --- Lists ------------------------------------------------------------------


def handle_list(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = ListPayload.from_data(component.data)
    if not payload.items:
        add_placeholder(slide, "List (No Items)", layout)
        return

    css = safe_mapping(component.style)
    base = css_text_style(css, theme, default_size=16)
    paragraphs = []
    for i, item in enumerate(payload.items):
        merged = {**css, **item.style}
        st = css_text_style(merged, theme, default_size=base.size)
        paragraphs.append((item.text, st.but(space_before_pt=0 if i == 0 else base.size * 0.2)))
    add_text(slide, paragraphs, Box.from_layout(layout), base, bullets="number" if payload.ordered else "bullet")


def handle_checklist(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = ListPayload.from_data(component.data, placeholder="Task")
    if not payload.items:
        add_placeholder(slide, "Checklist (No Items)", layout)
        return
    draw_checklist(slide, payload, layout, component.style, theme)


def draw_checklist(slide: Any, payload: ListPayload, layout: Layout, css: Any, theme: DeckTheme | None) -> None:
    base = css_text_style(css, theme, default_size=14)
    paragraphs = [
        (("☑ " if item.checked else "☐ ") + item.text, base.but(space_before_pt=0 if i == 0 else base.size * 0.3))
        for i, item in enumerate(payload.items)
    ]
    add_text(slide, paragraphs, Box.from_layout(layout), base)


# --- Quote ------------------------------------------------------------------


def handle_quote(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = QuotePayload.from_data(component.data)
    css = safe_mapping(component.style)
    quote_size = parse_font_size(css.get("fontSize"), 20)
    font = resolve_font_family(css.get("fontFamily"), theme_fonts(theme), "body")
    split = 0.75 if payload.author else 1.0

    quote_style = TextStyle(
        size=quote_size,
        face=font,
        color=resolve_color(css.get("color"), theme_colors(theme).text),
        italic=True,
        align=align_from_any(css.get("textAlign")) or PP_ALIGN.CENTER,
        valign=MSO_VERTICAL_ANCHOR.MIDDLE,
    )
    box = Box.from_layout(layout)
    add_text(slide, f"“{payload.text}”", Box(box.x, box.y, box.w, box.h * split), quote_style)

    if payload.author:
        author_style = TextStyle(
            size=quote_size * 0.8 if css.get("fontSize") is not None else 16,
            face=font,
            color=resolve_color(css.get("color"), theme_colors(theme).text, "666666"),
            align=align_from_any(css.get("textAlign")) or PP_ALIGN.RIGHT,
            valign=MSO_VERTICAL_ANCHOR.TOP,
        )
        add_text(slide, f"— {payload.author}", Box(box.x, box.y + box.h * split, box.w, box.h * (1 - split)), author_style)


# --- Chart ------------------------------------------------------------------


def chart_type_for(tag: str) -> XL_CHART_TYPE:
    key = (tag or "bar").strip().lower()
    if key not in CHART_TYPES:
        logger.warning("unsupported chart type %r, defaulting to bar", tag)
    return CHART_TYPES.get(key, CHART_TYPES["bar"])


def build_chart_data(chart_type: XL_CHART_TYPE, payload: ChartPayload) -> Any:
    if chart_type == XL_CHART_TYPE.XY_SCATTER:
        data = XyChartData()
        for ds in payload.datasets:
            series = data.add_series(ds.label)
            for i, v in enumerate(ds.values):
                x, y = (get_safe(v, "x"), get_safe(v, "y")) if isinstance(v, Mapping) else (i + 1, v)
                xf, yf = parse_float(x), parse_float(y)
                if xf is not None and yf is not None:
                    series.add_data_point(xf, yf)
        return data

    if chart_type == XL_CHART_TYPE.BUBBLE:
        data = BubbleChartData()
        for ds in payload.datasets:
            series = data.add_series(ds.label)
            for i, v in enumerate(ds.values):
                if isinstance(v, Mapping):
                    x, y, r = parse_float(get_safe(v, "x")), parse_float(get_safe(v, "y")), parse_float(get_safe(v, "r"))
                else:
                    x, y, r = float(i + 1), parse_float(v), 1.0
                if x is not None and y is not None:
                    series.add_data_point(x, y, r if r is not None and r > 0 else 1.0)
        return data

    data = CategoryChartData()
    data.categories = list(payload.labels)
    n = len(payload.labels)
    for ds in payload.datasets:
        values = [parse_float(v) for v in ds.values[:n]]
        values += [None] * (n - len(values))
        data.add_series(ds.label, values)
    return data


def apply_chart_colors(chart: Any, chart_type: XL_CHART_TYPE, colors: list[str], n_points: int) -> None:
    rgbs = [c for c in (rgb_from_any(v) for v in colors) if c is not None]
    if not rgbs:
        return
    if chart_type in _POINT_COLORED:
        for series in chart.plots[0].series:
            for j in range(n_points):
                fmt = series.points[j].format
                fmt.fill.solid()
                fmt.fill.fore_color.rgb = rgbs[j % len(rgbs)]
        return
    for i, series in enumerate(chart.series):
        rgb = rgbs[i % len(rgbs)]
        if chart_type == XL_CHART_TYPE.XY_SCATTER:
            # series line stays noFill; only markers take the color
            series.marker.format.fill.solid()
            series.marker.format.fill.fore_color.rgb = rgb
        elif chart_type in _LINE_COLORED:
            series.format.line.color.rgb = rgb
        else:
            series.format.fill.solid()
            series.format.fill.fore_color.rgb = rgb


def handle_chart(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = ChartPayload.from_data(component.data)
    chart_type = chart_type_for(payload.chart_type)
    needs_labels = chart_type not in (XL_CHART_TYPE.XY_SCATTER, XL_CHART_TYPE.BUBBLE)
    if not payload.datasets or (needs_labels and not payload.labels):
        add_placeholder(slide, "Chart (Invalid Data)", layout)
        return
    draw_chart(slide, chart_type, build_chart_data(chart_type, payload), layout, theme, payload=payload)


def draw_chart(
    slide: Any,
    chart_type: XL_CHART_TYPE,
    chart_data: Any,
    layout: Layout,
    theme: DeckTheme | None,
    *,
    payload: ChartPayload | None = None,
    n_points: int = 0,
) -> Any:
    frame = slide.shapes.add_chart(chart_type, *Box.from_layout(layout).emu(), chart_data)
    chart = frame.chart
    chart.font.name = resolve_font_family(None, theme_fonts(theme), "body")

    show_legend = payload.show_legend if payload is not None else True
    chart.has_legend = show_legend
    if show_legend:
        chart.legend.position = XL_LEGEND_POSITION.BOTTOM
        chart.legend.include_in_layout = False

    if payload is not None and payload.title:
        chart.has_title = True
        tf = chart.chart_title.text_frame
        tf.text = payload.title
        font = tf.paragraphs[0].runs[0].font
        font.size = Pt(parse_font_size(payload.title_size, 14))
        rgb = rgb_from_any(resolve_color(payload.title_color, theme_colors(theme).text))
        if rgb is not None:
            font.color.rgb = rgb
    else:
        chart.has_title = False

    if theme is not None:
        if payload is not None:
            n_points = len(payload.labels)
        apply_chart_colors(chart, chart_type, theme.chart_colors(), n_points)
    return frame


# --- Shapes -----------------------------------------------------------------

SHAPE_KINDS: dict[str, MSO_AUTO_SHAPE_TYPE] = {
    "rectangle": MSO_AUTO_SHAPE_TYPE.RECTANGLE,
    "rect": MSO_AUTO_SHAPE_TYPE.RECTANGLE,
    "square": MSO_AUTO_SHAPE_TYPE.RECTANGLE,
    "circle": MSO_AUTO_SHAPE_TYPE.OVAL,
    "ellipse": MSO_AUTO_SHAPE_TYPE.OVAL,
    "oval": MSO_AUTO_SHAPE_TYPE.OVAL,
    "rounded": MSO_AUTO_SHAPE_TYPE.ROUNDED_RECTANGLE,
    "rounded_rectangle": MSO_AUTO_SHAPE_TYPE.ROUNDED_RECTANGLE,
    "roundedrectangle": MSO_AUTO_SHAPE_TYPE.ROUNDED_RECTANGLE,
    "triangle": MSO_AUTO_SHAPE_TYPE.ISOSCELES_TRIANGLE,
    "arrow": MSO_AUTO_SHAPE_TYPE.RIGHT_ARROW,
}


def _shape_key(v: Any) -> str:
    return safe_str(v).strip().lower().replace("-", "_").replace(" ", "_")


def handle_shape(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    css = safe_mapping(component.style)
    requested = get_safe(component.data, "shape")
    key = _shape_key(requested)

    if key == "line":
        draw_rule(slide, layout, css, theme)
        return
    kind = SHAPE_KINDS.get(key)
    if kind is None:
        logger.warning("unsupported shape type %r", requested)
        add_placeholder(slide, f"Shape ({safe_str(requested) or 'Unknown'})", layout)
        return

    if key == "circle":
        size = min(layout.width, layout.height)
        layout = Layout(layout.x, layout.y, size, size, layout.z_index)
    line_color, line_width = _border(css, theme)
    add_autoshape(
        slide,
        kind,
        Box.from_layout(layout),
        fill=resolve_color(css.get("backgroundColor"), theme_colors(theme).primary, "F0F0F0"),
        line_color=line_color,
        line_width_pt=line_width,
    )


def handle_button(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    draw_button(slide, ButtonPayload.from_data(component.data), layout, component.style, theme)


def draw_button(slide: Any, payload: ButtonPayload, layout: Layout, css: Any, theme: DeckTheme | None) -> Any:
    css = safe_mapping(css)
    line_color, line_width = _border(css, theme)
    shape = add_autoshape(
        slide,
        MSO_AUTO_SHAPE_TYPE.RECTANGLE,
        Box.from_layout(layout),
        fill=resolve_color(css.get("backgroundColor"), theme_colors(theme).primary, LINK_COLOR),
        line_color=line_color,
        line_width_pt=line_width,
    )
    style = TextStyle(
        size=parse_font_size(css.get("fontSize"), 14),
        face=resolve_font_family(css.get("fontFamily"), theme_fonts(theme), "body"),
        color=resolve_color(css.get("color"), theme_colors(theme).text, "FFFFFF"),
        align=PP_ALIGN.CENTER,
        valign=MSO_VERTICAL_ANCHOR.MIDDLE,
        hyperlink=payload.url,
    )
    set_shape_text(shape, payload.label, style)
    return shape


def draw_rule(slide: Any, layout: Layout, css: Mapping[str, Any], theme: DeckTheme | None) -> Any:
    """Thin filled bar centred in the layout; vertical when taller than wide."""
    width_px = parse_float(css.get("borderWidth")) or 1.0
    width_px = max(1.0, width_px)
    color = resolve_color(css.get("borderColor") or css.get("backgroundColor"), theme_colors(theme).secondary, "C0C0C0")
    if layout.height > layout.width:
        box = Box.from_px(layout.x + layout.width / 2 - width_px / 2, layout.y, width_px, layout.height)
    else:
        box = Box.from_px(layout.x, layout.y + layout.height / 2 - width_px / 2, layout.width, width_px)
    return add_autoshape(slide, MSO_AUTO_SHAPE_TYPE.RECTANGLE, box, fill=color)


def handle_divider(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    draw_rule(slide, sanitize_layout(component.layout), safe_mapping(component.style), theme)


def handle_icon(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    css = safe_mapping(component.style)
    name = safe_str(get_safe(component.data, "iconName")) or "HelpCircle"
    size = min(layout.width, layout.height)
    circle = Layout(layout.x + (layout.width - size) / 2, layout.y + (layout.height - size) / 2, size, size)
    shape = add_autoshape(
        slide,
        MSO_AUTO_SHAPE_TYPE.OVAL,
        Box.from_layout(circle),
        fill=resolve_color(css.get("backgroundColor"), theme_colors(theme).accent, "E0E0E0"),
    )
    box = Box.from_layout(circle)
    style = TextStyle(
        size=min(parse_font_size(css.get("fontSize"), 24), box.h * 20),
        color=resolve_color(css.get("color"), theme_colors(theme).text),
        align=PP_ALIGN.CENTER,
        valign=MSO_VERTICAL_ANCHOR.MIDDLE,
        margin_in=0.0,
    )
    set_shape_text(shape, name, style)


CALLOUT_FILLS = {"warning": "FFF3CD", "success": "D4EDDA", "danger": "F8D7DA"}


def handle_callout(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = CalloutPayload.from_data(component.data)
    css = safe_mapping(component.style)
    colors = theme_colors(theme)

    if css.get("backgroundColor"):
        fill = format_color(css.get("backgroundColor"))
    elif payload.variant == "info":
        fill = format_color(colors.primary or "E0EFFF")
    elif payload.variant == "custom":
        fill = format_color(payload.background_color or "F0F0F0")
    else:
        fill = CALLOUT_FILLS.get(payload.variant, "F0F0F0")
    text_color = resolve_color(css.get("color") or payload.text_color, colors.text, "000000")
    border = resolve_color(css.get("borderColor"), payload.border_color, fill)

    shape = add_autoshape(
        slide, MSO_AUTO_SHAPE_TYPE.RECTANGLE, Box.from_layout(layout), fill=fill, line_color=border, line_width_pt=1.0
    )
    size = parse_font_size(css.get("fontSize"), 12)
    base = TextStyle(
        size=size,
        face=resolve_font_family(css.get("fontFamily"), theme_fonts(theme), "body"),
        color=text_color,
        valign=MSO_VERTICAL_ANCHOR.TOP,
        margin_in=0.08,
    )
    if payload.title:
        set_shape_text(shape, [(payload.title, base.but(bold=True, size=size * 1.1)), (payload.text, base)], base)
    else:
        set_shape_text(shape, payload.text, base)


# --- Misc text-like ---------------------------------------------------------


def handle_code(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    css = safe_mapping(component.style)
    colors = theme_colors(theme)
    code = safe_str(get_safe(component.data, "code")) or "[No code content]"
    style = TextStyle(
        size=parse_font_size(css.get("fontSize"), 10),
        face=safe_str(css.get("fontFamily")) or "Courier New",
        color=resolve_color(css.get("color"), colors.text, "333333"),
        fill=resolve_color(css.get("backgroundColor"), colors.background, "F5F5F5"),
        margin_in=0.1,
    )
    add_text(slide, code, Box.from_layout(layout), style)


def handle_citation(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    css = safe_mapping(component.style)
    payload = CitationPayload.from_data(component.data)
    style = css_text_style(css, theme, default_size=10, default_color="595959").but(italic=True)
    add_text(slide, payload.text, Box.from_layout(layout), style)


def _link_text(slide: Any, text: str, url: str, layout: Layout, size: float | None = None) -> None:
    style = TextStyle(
        size=size or 18,
        color=LINK_COLOR,
        underline=True,
        align=PP_ALIGN.CENTER,
        valign=MSO_VERTICAL_ANCHOR.MIDDLE,
        hyperlink=url,
    )
    add_text(slide, text, Box.from_layout(layout), style)


def handle_video(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    src = get_safe(component.data, "src")
    if not isinstance(src, str) or not src.strip():
        add_placeholder(slide, "Video (No Source)", layout)
        return
    _link_text(slide, "Click to view video", src.strip(), layout)


def handle_embed(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    url = get_safe(component.data, "url")
    if not isinstance(url, str) or not url.strip():
        add_placeholder(slide, "Embed (No URL)", layout)
        return
    url = url.strip()
    shown = url[:50] + ("..." if len(url) > 50 else "")
    _link_text(slide, f"View Embedded Content: {shown}", url, layout, size=12)


def handle_generic(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    add_placeholder(slide, component.type, sanitize_layout(component.layout))
