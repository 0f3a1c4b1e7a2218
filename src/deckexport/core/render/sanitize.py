"""Validation and sanitization of untrusted deck fields.

Everything here coerces; nothing raises. Handlers read component payloads only
through these helpers so a wrong shape degrades to defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import orjson

from deckexport.core.model.deck import Deck
from deckexport.core.render.units import parse_float

logger = logging.getLogger(__name__)

DEFAULT_COMPONENT_WIDTH = 300.0
DEFAULT_COMPONENT_HEIGHT = 150.0

_BLOCK_NODES = ("paragraph", "heading", "listItem", "blockquote", "codeBlock")


@dataclass(frozen=True)
class Layout:
    """Pixel geometry of a component, origin top-left. Always width/height > 0."""

    x: float = 0.0
    y: float = 0.0
    width: float = DEFAULT_COMPONENT_WIDTH
    height: float = DEFAULT_COMPONENT_HEIGHT
    z_index: float | None = None


def _field(layout: Any, name: str) -> Any:
    if isinstance(layout, Mapping):
        return layout.get(name)
    return getattr(layout, name, None)


def sanitize_layout(layout: Any) -> Layout:
    x = parse_float(_field(layout, "x"))
    y = parse_float(_field(layout, "y"))
    w = parse_float(_field(layout, "width"))
    h = parse_float(_field(layout, "height"))

    z_raw = _field(layout, "zIndex") if isinstance(layout, Mapping) else _field(layout, "z_index")
    z_index = None
    if isinstance(z_raw, (int, float)) and not isinstance(z_raw, bool):
        z_index = parse_float(z_raw)

    return Layout(
        x=0.0 if x is None else x,
        y=0.0 if y is None else y,
        width=DEFAULT_COMPONENT_WIDTH if w is None or w <= 0 else w,
        height=DEFAULT_COMPONENT_HEIGHT if h is None or h <= 0 else h,
        z_index=z_index,
    )


def get_safe(obj: Any, path: str, default: Any = None) -> Any:
    """Read `a.b.c` from nested mappings; `default` on any miss or None."""
    if not isinstance(obj, Mapping) or not path:
        return default
    current: Any = obj
    for prop in path.split("."):
        if isinstance(current, Mapping) and prop in current:
            current = current[prop]
        else:
            return default
    return default if current is None else current


def safe_str(v: Any, default: str = "") -> str:
    if isinstance(v, str):
        return v
    if isinstance(v, bool) or v is None:
        return default
    if isinstance(v, (int, float)):
        return str(v)
    return default


def safe_list(v: Any) -> list[Any]:
    return list(v) if isinstance(v, (list, tuple)) else []


def safe_mapping(v: Any) -> Mapping[str, Any]:
    return v if isinstance(v, Mapping) else {}


def is_valid_deck_data(deck: Any) -> bool:
    """Boundary check used once by the export entry point."""
    if isinstance(deck, Deck):
        sections = deck.sections
    elif isinstance(deck, Mapping):
        sections = deck.get("sections")
    else:
        logger.error("deck data is %s, expected an object", type(deck).__name__)
        return False

    if not isinstance(sections, (list, tuple)) or len(sections) == 0:
        logger.warning("deck has no sections; exporting a title-only presentation")
    return True


def flatten_rich_text(value: Any) -> str:
    """Flatten a TipTap/ProseMirror document into plain text.

    Block nodes are separated by newlines and `hardBreak` becomes a newline.
    A mapping that is not a document falls back to its `text` key, then to
    its JSON form.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping) and value.get("type") == "doc":
        blocks: list[str] = []
        for node in safe_list(value.get("content")):
            _collect_blocks(node, blocks)
        return "\n".join(blocks).strip()
    if isinstance(value, Mapping):
        text = value.get("text")
        if isinstance(text, str):
            return text
    try:
        return orjson.dumps(value).decode("utf-8")
    except TypeError:
        return str(value)


def _inline_text(node: Any) -> str:
    if not isinstance(node, Mapping):
        return ""
    kind = node.get("type")
    if kind == "text":
        return safe_str(node.get("text"))
    if kind == "hardBreak":
        return "\n"
    return "".join(_inline_text(child) for child in safe_list(node.get("content")))


def _collect_blocks(node: Any, out: list[str]) -> None:
    if not isinstance(node, Mapping):
        return
    children = safe_list(node.get("content"))
    has_block_children = any(isinstance(c, Mapping) and c.get("type") in _BLOCK_NODES for c in children)
    if node.get("type") in _BLOCK_NODES and not has_block_children:
        out.append(_inline_text(node))
        return
    if node.get("type") == "text":
        out.append(safe_str(node.get("text")))
        return
    for child in children:
        _collect_blocks(child, out)
