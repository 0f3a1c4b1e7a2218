"""Component dispatcher: type tag -> handler, with a per-component failure boundary."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from deckexport.core.errors import ComponentRenderError
from deckexport.core.model.deck import DeckTheme, VisualComponent
from deckexport.core.render import business, handlers
from deckexport.core.render.primitives import add_placeholder
from deckexport.core.render.sanitize import get_safe, sanitize_layout
from deckexport.core.render.units import parse_float

logger = logging.getLogger(__name__)

Handler = Callable[[Any, VisualComponent, "DeckTheme | None"], None]

INVALID_COMPONENT_LABEL = "Invalid Component Data"

HANDLERS: dict[str, Handler] = {
    "text": handlers.handle_text,
    "image": handlers.handle_image,
    "heroImage": handlers.handle_image,
    "imageGallery": handlers.handle_image,
    "imageWithCaption": handlers.handle_image,
    "customImage": handlers.handle_image,
    "list": handlers.handle_list,
    "checklist": handlers.handle_checklist,
    "quote": handlers.handle_quote,
    "visualQuote": handlers.handle_quote,
    "testimonialCard": handlers.handle_quote,
    "chart": handlers.handle_chart,
    "shape": handlers.handle_shape,
    "button": handlers.handle_button,
    "divider": handlers.handle_divider,
    "icon": handlers.handle_icon,
    "calloutBox": handlers.handle_callout,
    "code": handlers.handle_code,
    "citation": handlers.handle_citation,
    "video": handlers.handle_video,
    "embed": handlers.handle_embed,
    "table": business.handle_table,
    "competitorTable": business.handle_competitor_table,
    "problemSolution": business.handle_problem_solution,
    "tractionWidget": business.handle_traction,
    "metricCounter": business.handle_metric_counter,
    "milestoneTracker": business.handle_milestone_tracker,
    "investmentAsk": business.handle_investment_ask,
    "ctaCard": business.handle_cta_card,
    "teamCard": business.handle_team_card,
    "marketMap": business.handle_market_map,
    "useOfFunds": business.handle_use_of_funds,
    "timeline": business.handle_timeline,
}


def _media_hero(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    if get_safe(component.data, "mediaType") == "image":
        handlers.handle_image(slide, component, theme)
    else:
        handlers.handle_video(slide, component, theme)


HANDLERS["mediaHero"] = _media_hero


def register_handler(tag: str, handler: Handler) -> None:
    HANDLERS[tag] = handler


def handler_for(tag: str) -> Handler:
    """Handler for a type tag; unknown tags get the generic placeholder."""
    return HANDLERS.get(tag, handlers.handle_generic)


def dispatch_component(slide: Any, component: VisualComponent, theme: DeckTheme | None) -> None:
    """Draw one component. Never raises: failures become a labeled placeholder."""
    if not component.type:
        logger.warning("component %r has no type", component.id or "?")
        add_placeholder(slide, "Unknown", sanitize_layout(component.layout), message=INVALID_COMPONENT_LABEL)
        return

    handler = handler_for(component.type)
    if handler is handlers.handle_generic:
        logger.warning("no handler for component type %r (id=%s)", component.type, component.id or "?")
    try:
        handler(slide, component, theme)
    except Exception as e:  # noqa: BLE001
        err = ComponentRenderError(
            "component failed to render",
            cause=e,
            context={"id": component.id, "type": component.type},
        )
        logger.error("%s", err, exc_info=logger.isEnabledFor(logging.DEBUG))
        add_placeholder(
            slide,
            component.type,
            sanitize_layout(component.layout),
            message=f"Error rendering {component.type}",
        )


def _paint_key(component: VisualComponent) -> float:
    z = parse_float(get_safe(component.layout, "zIndex"))
    if z is None:
        z = sanitize_layout(component.layout).z_index
    if z is not None:
        return z
    order = component.order
    if isinstance(order, (int, float)) and not isinstance(order, bool):
        return parse_float(order) or 0.0
    return 0.0


def sort_components(components: Iterable[VisualComponent]) -> list[VisualComponent]:
    """Paint order: stable by zIndex, else order, else 0."""
    return sorted(components, key=_paint_key)
