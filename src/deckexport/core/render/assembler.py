"""Document assembler: Deck -> in-memory python-pptx Presentation.

One slide per section on the blank layout of a fixed 16:9 master. Nothing in
here raises for bad component data; the dispatcher contains those.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from pptx import Presentation
from pptx.enum.text import MSO_VERTICAL_ANCHOR, PP_ALIGN
from pptx.util import Inches

from deckexport.core.config import ExportSettings, get_settings
from deckexport.core.model.deck import Deck, DeckSection, DeckTheme
from deckexport.core.render.dispatch import dispatch_component, sort_components
from deckexport.core.render.handlers import theme_colors, theme_fonts
from deckexport.core.render.primitives import Box, TextStyle, add_slide_number, add_text
from deckexport.core.render.units import resolve_color, resolve_font_family, rgb_from_any

logger = logging.getLogger(__name__)

SLIDE_WIDTH_IN = 10.0
SLIDE_HEIGHT_IN = 5.625
BLANK_LAYOUT = 6

EMPTY_SLIDE_TEXT = "Slide content not available."
DEFAULT_DECK_TITLE = "Presentation"


def new_presentation() -> Any:
    prs = Presentation()
    prs.slide_width = Inches(SLIDE_WIDTH_IN)
    prs.slide_height = Inches(SLIDE_HEIGHT_IN)
    return prs


def apply_metadata(prs: Any, deck: Deck, settings: ExportSettings) -> None:
    props = prs.core_properties
    author = deck.user_id or settings.creator
    props.author = author
    props.last_modified_by = author
    props.title = deck.title or "Presentation Title"
    props.subject = deck.title or "Presentation Subject"
    props.revision = 1
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    props.created = now
    props.modified = now


def set_background(slide: Any, color: str | None) -> bool:
    rgb = rgb_from_any(color)
    if rgb is None:
        return False
    fill = slide.background.fill
    fill.solid()
    fill.fore_color.rgb = rgb
    return True


def background_for(section: DeckSection | None, theme: DeckTheme | None) -> str | None:
    colors = theme_colors(theme)
    candidates = (section.background_color if section is not None else None, colors.slide_background, colors.background)
    for c in candidates:
        if rgb_from_any(c) is not None:
            return c
    return None


def _title_style(theme: DeckTheme | None, size: float) -> TextStyle:
    return TextStyle(
        size=size,
        face=resolve_font_family(None, theme_fonts(theme), "heading"),
        color=resolve_color(None, theme_colors(theme).text),
        bold=True,
        align=PP_ALIGN.CENTER,
        valign=MSO_VERTICAL_ANCHOR.MIDDLE,
    )


def render_section(prs: Any, section: DeckSection, theme: DeckTheme | None) -> Any:
    slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT])
    set_background(slide, background_for(section, theme))

    if section.title:
        add_text(slide, section.title, Box.from_px(50, 25, 860, 70), _title_style(theme, 28))

    if not section.components:
        if not section.title:
            style = TextStyle(size=18, color=resolve_color(None, theme_colors(theme).text))
            add_text(slide, EMPTY_SLIDE_TEXT, Box(1, 1, 8, 1), style)
        return slide

    for component in sort_components(section.components):
        dispatch_component(slide, component, theme)
    return slide


def render_title_only(prs: Any, deck: Deck) -> Any:
    slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT])
    set_background(slide, background_for(None, deck.theme))
    add_text(slide, deck.title or DEFAULT_DECK_TITLE, Box(0.5, 2.5, 9, 1), _title_style(deck.theme, 32).but(bold=False))
    return slide


def add_slide_numbers(prs: Any, theme: DeckTheme | None) -> None:
    style = TextStyle(
        size=10,
        face=resolve_font_family(None, theme_fonts(theme), "caption"),
        color=resolve_color(None, theme_colors(theme).text, "808080"),
        align=PP_ALIGN.RIGHT,
    )
    for i, slide in enumerate(prs.slides, start=1):
        add_slide_number(slide, Box.from_px(895, 510, 50, 24), style, i)


def build_presentation(deck: Deck, settings: ExportSettings | None = None) -> Any:
    """Compile `deck` into a Presentation. Never fails on component data."""
    settings = settings or get_settings()
    prs = new_presentation()
    apply_metadata(prs, deck, settings)

    if not deck.sections:
        logger.info("deck %s has no sections; writing a title slide", deck.id or "?")
        render_title_only(prs, deck)
    else:
        for index, section in enumerate(deck.sections):
            logger.debug("rendering section %d (%s) with %d components", index, section.id or "?", len(section.components))
            render_section(prs, section, deck.theme)

    if settings.slide_numbers:
        add_slide_numbers(prs, deck.theme)
    return prs
