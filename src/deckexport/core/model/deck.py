"""Deck model handed to the exporter.

The editor/persistence layer stores decks as camelCase JSON. `Deck.from_dict`
turns that into frozen dataclasses without judging component payloads:
`data`, `layout` and `style` keep their raw values and are only read through
the sanitizer, so a malformed component still reaches the dispatcher (and
becomes a placeholder) instead of breaking model construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


def _str_or_none(v: Any) -> str | None:
    if isinstance(v, str) and v.strip():
        return v
    return None


def _mapping(v: Any) -> Mapping[str, Any]:
    return v if isinstance(v, Mapping) else {}


def _seq(v: Any) -> list[Any]:
    return list(v) if isinstance(v, (list, tuple)) else []


@dataclass(frozen=True)
class ThemeColors:
    primary: str | None = None
    secondary: str | None = None
    accent: str | None = None
    background: str | None = None
    text: str | None = None
    slide_background: str | None = None

    @classmethod
    def from_dict(cls, d: Any) -> "ThemeColors":
        m = _mapping(d)
        return cls(
            primary=_str_or_none(m.get("primary")),
            secondary=_str_or_none(m.get("secondary")),
            accent=_str_or_none(m.get("accent")),
            background=_str_or_none(m.get("background")),
            text=_str_or_none(m.get("text")),
            slide_background=_str_or_none(m.get("slideBackground")),
        )


@dataclass(frozen=True)
class ThemeFonts:
    heading: str | None = None
    body: str | None = None
    caption: str | None = None

    @classmethod
    def from_dict(cls, d: Any) -> "ThemeFonts":
        m = _mapping(d)
        return cls(
            heading=_str_or_none(m.get("heading")),
            body=_str_or_none(m.get("body")),
            caption=_str_or_none(m.get("caption")),
        )


@dataclass(frozen=True)
class DeckTheme:
    colors: ThemeColors = field(default_factory=ThemeColors)
    fonts: ThemeFonts = field(default_factory=ThemeFonts)

    @classmethod
    def from_dict(cls, d: Any) -> "DeckTheme | None":
        if isinstance(d, DeckTheme):
            return d
        if not isinstance(d, Mapping):
            return None
        return cls(colors=ThemeColors.from_dict(d.get("colors")), fonts=ThemeFonts.from_dict(d.get("fonts")))

    def chart_colors(self) -> list[str]:
        """Theme colors used for chart series, in fixed order."""
        c = self.colors
        return [v for v in (c.primary, c.secondary, c.accent, c.text) if v]


@dataclass(frozen=True)
class VisualComponent:
    id: str
    type: str
    data: Any = None
    layout: Any = None
    style: Mapping[str, Any] | None = None
    order: Any = None

    @classmethod
    def from_dict(cls, d: Any) -> "VisualComponent":
        if isinstance(d, VisualComponent):
            return d
        m = _mapping(d)
        style = m.get("style")
        return cls(
            id=str(m.get("id") or ""),
            type=m.get("type") if isinstance(m.get("type"), str) else "",
            data=m.get("data"),
            layout=m.get("layout"),
            style=style if isinstance(style, Mapping) else None,
            order=m.get("order"),
        )


@dataclass(frozen=True)
class DeckSection:
    id: str
    title: str = ""
    components: tuple[VisualComponent, ...] = ()
    slide_style: Mapping[str, Any] | None = None

    @classmethod
    def from_dict(cls, d: Any) -> "DeckSection":
        if isinstance(d, DeckSection):
            return d
        m = _mapping(d)
        slide_style = m.get("slideStyle")
        title = m.get("title")
        return cls(
            id=str(m.get("id") or ""),
            title=title if isinstance(title, str) else "",
            components=tuple(VisualComponent.from_dict(c) for c in _seq(m.get("components"))),
            slide_style=slide_style if isinstance(slide_style, Mapping) else None,
        )

    @property
    def background_color(self) -> str | None:
        return _str_or_none(_mapping(self.slide_style).get("backgroundColor"))


@dataclass(frozen=True)
class Deck:
    id: str
    title: str = ""
    sections: tuple[DeckSection, ...] = ()
    theme: DeckTheme | None = None
    user_id: str | None = None
    company_name: str | None = None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Deck":
        title = d.get("title")
        return cls(
            id=str(d.get("id") or ""),
            title=title if isinstance(title, str) else "",
            sections=tuple(DeckSection.from_dict(s) for s in _seq(d.get("sections"))),
            theme=DeckTheme.from_dict(d.get("theme")),
            user_id=_str_or_none(d.get("user_id") or d.get("userId")),
            company_name=_str_or_none(d.get("company_name") or d.get("companyName")),
        )
