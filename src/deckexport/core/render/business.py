"""Handlers for the pitch-deck business blocks.

These compose the primitives used by the core handlers: native tables,
panels, metric tiles, a pie chart and simple diagrams. Geometry is computed
in pixels inside the component's sanitized layout and converted at the end.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from pptx.chart.data import CategoryChartData
from pptx.enum.chart import XL_CHART_TYPE
from pptx.enum.shapes import MSO_AUTO_SHAPE_TYPE
from pptx.enum.text import MSO_VERTICAL_ANCHOR, PP_ALIGN

from deckexport.core.model.deck import DeckTheme, VisualComponent
from deckexport.core.model.payloads import (
    ButtonPayload,
    FundsPayload,
    InvestmentAskPayload,
    ListPayload,
    MarketMapPayload,
    MetricsPayload,
    ProblemSolutionPayload,
    TablePayload,
    TeamPayload,
    TimelinePayload,
)
from deckexport.core.render.handlers import (
    CALLOUT_FILLS,
    css_text_style,
    draw_button,
    draw_chart,
    draw_checklist,
    theme_colors,
    theme_fonts,
)
from deckexport.core.render.primitives import Box, TextStyle, add_autoshape, add_placeholder, add_table, add_text, set_shape_text
from deckexport.core.render.sanitize import Layout, get_safe, safe_mapping, safe_str, sanitize_layout
from deckexport.core.render.units import resolve_color, resolve_font_family

logger = logging.getLogger(__name__)

GAP_PX = 10.0
TREND_MARKS = {"up": "▲", "down": "▼", "flat": "►"}


def _sub(layout: Layout, x: float, y: float, w: float, h: float) -> Layout:
    return Layout(layout.x + x, layout.y + y, max(w, 1.0), max(h, 1.0))


def format_money(value: float) -> str:
    """Compact currency label: 1500000 -> $1.5M."""
    for threshold, suffix in ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K")):
        if abs(value) >= threshold:
            return f"${value / threshold:.1f}".rstrip("0").rstrip(".") + suffix
    return f"${value:,.0f}"


# --- Tables -----------------------------------------------------------------


def _draw_table(slide: Any, payload: TablePayload, component: VisualComponent, theme: DeckTheme | None, empty_label: str) -> None:
    layout = sanitize_layout(component.layout)
    if not payload.rows and not payload.header:
        add_placeholder(slide, empty_label, layout)
        return
    style = css_text_style(component.style, theme, default_size=12)
    add_table(
        slide,
        payload.header,
        payload.rows,
        Box.from_layout(layout),
        style,
        header_fill=theme_colors(theme).primary,
    )


def handle_table(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    _draw_table(slide, TablePayload.from_data(component.data), component, theme, "Table (No Data)")


def handle_competitor_table(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    payload = TablePayload.from_competitors(component.data)
    if not payload.rows:
        add_placeholder(slide, "Competitor Table (No Data)", sanitize_layout(component.layout))
        return
    _draw_table(slide, payload, component, theme, "Competitor Table (No Data)")


# --- Panels -----------------------------------------------------------------


def _panel(slide: Any, layout: Layout, title: str, body: str, fill: str, base: TextStyle) -> None:
    shape = add_autoshape(slide, MSO_AUTO_SHAPE_TYPE.ROUNDED_RECTANGLE, Box.from_layout(layout), fill=fill)
    set_shape_text(shape, [(title, base.but(bold=True, size=base.size * 1.3)), (body, base)], base)


def handle_problem_solution(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = ProblemSolutionPayload.from_data(component.data)
    if not payload.problem and not payload.solution:
        add_placeholder(slide, "Problem / Solution (No Data)", layout)
        return
    base = css_text_style(component.style, theme, default_size=14).but(valign=MSO_VERTICAL_ANCHOR.TOP, margin_in=0.1)
    half = (layout.width - GAP_PX) / 2
    _panel(slide, _sub(layout, 0, 0, half, layout.height), "Problem", payload.problem or "-", CALLOUT_FILLS["danger"], base)
    _panel(
        slide,
        _sub(layout, half + GAP_PX, 0, half, layout.height),
        "Solution",
        payload.solution or "-",
        CALLOUT_FILLS["success"],
        base,
    )


def handle_investment_ask(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = InvestmentAskPayload.from_data(component.data)
    base = css_text_style(component.style, theme, default_size=16).but(align=PP_ALIGN.CENTER, valign=MSO_VERTICAL_ANCHOR.MIDDLE)
    headline = f"Raising {payload.amount}" if payload.amount else "[Investment amount missing]"
    paragraphs = [(headline, base.but(bold=True, size=base.size * 1.75, color=resolve_color(None, theme_colors(theme).primary, base.color)))]
    if payload.equity:
        paragraphs.append((f"for {payload.equity} equity", base))
    if payload.terms:
        paragraphs.append((payload.terms, base.but(size=base.size * 0.8, italic=True)))
    add_text(slide, paragraphs, Box.from_layout(layout), base)


def handle_cta_card(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    data = component.data
    text = safe_str(get_safe(data, "text")) or safe_str(get_safe(data, "title")) or "[Call to action missing]"
    base = css_text_style(component.style, theme, default_size=18).but(align=PP_ALIGN.CENTER, valign=MSO_VERTICAL_ANCHOR.MIDDLE)
    add_text(slide, text, Box.from_layout(_sub(layout, 0, 0, layout.width, layout.height * 0.6)), base.but(fill=None))

    button = ButtonPayload.from_data(data, label_key="buttonText", url_key="buttonUrl")
    bw, bh = layout.width * 0.5, layout.height * 0.3
    button_layout = _sub(layout, (layout.width - bw) / 2, layout.height * 0.65, bw, bh)
    draw_button(slide, button, button_layout, {"fontSize": base.size * 0.8}, theme)


# --- Metrics ----------------------------------------------------------------


def _draw_metrics(slide: Any, payload: MetricsPayload, layout: Layout, css: Any, theme: DeckTheme | None) -> None:
    colors = theme_colors(theme)
    base = css_text_style(css, theme, default_size=12).but(align=PP_ALIGN.CENTER, valign=MSO_VERTICAL_ANCHOR.MIDDLE)
    value_color = resolve_color(safe_mapping(css).get("color"), colors.primary, base.color)
    n = len(payload.metrics)
    tile_w = (layout.width - GAP_PX * (n - 1)) / n
    for i, metric in enumerate(payload.metrics):
        tile = _sub(layout, i * (tile_w + GAP_PX), 0, tile_w, layout.height)
        shape = add_autoshape(
            slide,
            MSO_AUTO_SHAPE_TYPE.ROUNDED_RECTANGLE,
            Box.from_layout(tile),
            fill=resolve_color(None, colors.background, "F5F5F5"),
            line_color=resolve_color(None, colors.secondary, "D0D0D0"),
            line_width_pt=0.75,
        )
        value = metric.value or "-"
        if metric.trend:
            value = f"{value} {TREND_MARKS[metric.trend]}"
        paragraphs = [(value, base.but(bold=True, size=base.size * 2, color=value_color))]
        if metric.label:
            paragraphs.append((metric.label, base))
        if metric.description:
            paragraphs.append((metric.description, base.but(size=base.size * 0.8, italic=True)))
        set_shape_text(shape, paragraphs, base)


def handle_traction(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = MetricsPayload.from_data(component.data)
    if not payload.metrics:
        add_placeholder(slide, "Traction (No Metrics)", layout)
        return
    _draw_metrics(slide, payload, layout, component.style, theme)


def handle_metric_counter(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = MetricsPayload.from_counter(component.data)
    if not payload.metrics:
        add_placeholder(slide, "Metric (No Value)", layout)
        return
    _draw_metrics(slide, payload, layout, component.style, theme)


def handle_milestone_tracker(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = ListPayload.from_data(component.data, key="milestones", placeholder="Milestone")
    if not payload.items:
        add_placeholder(slide, "Milestones (No Items)", layout)
        return
    draw_checklist(slide, payload, layout, component.style, theme)


# --- Team -------------------------------------------------------------------


def handle_team_card(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = TeamPayload.from_data(component.data)
    if not payload.members:
        add_placeholder(slide, "Team (No Members)", layout)
        return

    colors = theme_colors(theme)
    base = css_text_style(component.style, theme, default_size=11).but(
        align=PP_ALIGN.CENTER, valign=MSO_VERTICAL_ANCHOR.MIDDLE, margin_in=0.05
    )
    cols = min(len(payload.members), 4)
    rows = math.ceil(len(payload.members) / cols)
    cell_w = (layout.width - GAP_PX * (cols - 1)) / cols
    cell_h = (layout.height - GAP_PX * (rows - 1)) / rows
    for i, member in enumerate(payload.members):
        r, c = divmod(i, cols)
        cell = _sub(layout, c * (cell_w + GAP_PX), r * (cell_h + GAP_PX), cell_w, cell_h)
        shape = add_autoshape(
            slide,
            MSO_AUTO_SHAPE_TYPE.ROUNDED_RECTANGLE,
            Box.from_layout(cell),
            fill=resolve_color(None, colors.background, "F5F5F5"),
        )
        paragraphs = [(member.name, base.but(bold=True, size=base.size * 1.3))]
        if member.title:
            paragraphs.append((member.title, base))
        set_shape_text(shape, paragraphs, base)


# --- Diagrams ---------------------------------------------------------------


def handle_market_map(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    """TAM/SAM/SOM as nested circles sharing a bottom edge."""
    layout = sanitize_layout(component.layout)
    payload = MarketMapPayload.from_data(component.data)
    if payload.tam is None or payload.tam <= 0:
        add_placeholder(slide, "Market Map (No Data)", layout)
        return
    if (payload.sam or 0) > payload.tam or (payload.som or 0) > (payload.sam or payload.tam):
        logger.warning("market map %s: expected TAM >= SAM >= SOM", component.id or "?")

    palette = (theme.chart_colors() if theme is not None else []) + ["1F4E79", "2E75B6", "9DC3E6"]
    base = css_text_style(component.style, theme, default_size=11).but(
        align=PP_ALIGN.CENTER, valign=MSO_VERTICAL_ANCHOR.TOP, margin_in=0.05
    )
    diameter = min(layout.width, layout.height)
    bottom = layout.height
    rings = [("TAM", payload.tam), ("SAM", payload.sam), ("SOM", payload.som)]
    for i, (name, value) in enumerate(rings):
        if value is None or value <= 0:
            continue
        ratio = 1.0 if i == 0 else min(max(math.sqrt(value / payload.tam), 0.15), 0.9 ** i)
        d = diameter * ratio
        circle = _sub(layout, (layout.width - d) / 2, bottom - d, d, d)
        shape = add_autoshape(slide, MSO_AUTO_SHAPE_TYPE.OVAL, Box.from_layout(circle), fill=palette[i % len(palette)])
        set_shape_text(shape, [(name, base.but(bold=True)), (format_money(value), base)], base.but(color="FFFFFF"))

    if payload.notes:
        notes_style = base.but(size=base.size * 0.9, italic=True, align=PP_ALIGN.LEFT)
        add_text(slide, payload.notes, Box.from_layout(_sub(layout, 0, 0, (layout.width - diameter) / 2, layout.height)), notes_style)


def handle_use_of_funds(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = FundsPayload.from_data(component.data)
    if not payload.labels:
        add_placeholder(slide, "Use of Funds (No Data)", layout)
        return
    chart_data = CategoryChartData()
    chart_data.categories = list(payload.labels)
    chart_data.add_series("Use of Funds", list(payload.percents))
    frame = draw_chart(slide, XL_CHART_TYPE.PIE, chart_data, layout, theme, n_points=len(payload.labels))

    plot = frame.chart.plots[0]
    plot.has_data_labels = True
    labels = plot.data_labels
    labels.number_format = '0"%"'
    labels.number_format_is_linked = False


def handle_timeline(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    layout = sanitize_layout(component.layout)
    payload = TimelinePayload.from_data(component.data)
    if not payload.milestones:
        add_placeholder(slide, "Timeline (No Milestones)", layout)
        return

    colors = theme_colors(theme)
    axis_color = resolve_color(None, colors.secondary, "A0A0A0")
    dot_color = resolve_color(None, colors.primary, "0077CC")
    base = TextStyle(
        size=11,
        face=resolve_font_family(None, theme_fonts(theme), "body"),
        color=resolve_color(safe_mapping(component.style).get("color"), colors.text),
        align=PP_ALIGN.CENTER,
    )
    mid = layout.height / 2
    add_autoshape(
        slide,
        MSO_AUTO_SHAPE_TYPE.RECTANGLE,
        Box.from_layout(_sub(layout, 0, mid - 1, layout.width, 2)),
        fill=axis_color,
    )

    n = len(payload.milestones)
    slot = layout.width / n
    dot = 12.0
    for i, m in enumerate(payload.milestones):
        cx = slot * i + slot / 2
        add_autoshape(slide, MSO_AUTO_SHAPE_TYPE.OVAL, Box.from_layout(_sub(layout, cx - dot / 2, mid - dot / 2, dot, dot)), fill=dot_color)
        if m.date:
            date_box = _sub(layout, slot * i, 0, slot, mid - dot)
            add_text(slide, m.date, Box.from_layout(date_box), base.but(bold=True, valign=MSO_VERTICAL_ANCHOR.BOTTOM))
        if m.label:
            label_box = _sub(layout, slot * i, mid + dot, slot, mid - dot)
            add_text(slide, m.label, Box.from_layout(label_box), base.but(valign=MSO_VERTICAL_ANCHOR.TOP))
