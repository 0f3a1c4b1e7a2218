"""Export settings.

Defaults come from `DECKEXPORT_*` environment variables so a deployment can
tune them without code changes; callers may also pass an explicit
`ExportSettings` to `export_deck`.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterator


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(p.strip() for p in raw.split(",") if p.strip())


@dataclass(frozen=True)
class ExportSettings:
    # Used for author / last_modified_by when the deck has no owner.
    creator: str = field(default_factory=lambda: os.getenv("DECKEXPORT_CREATOR", "The Wheel Deck Builder"))
    default_file_name: str = field(default_factory=lambda: os.getenv("DECKEXPORT_FILE_NAME", "presentation.pptx"))
    slide_numbers: bool = field(default_factory=lambda: _env_bool("DECKEXPORT_SLIDE_NUMBERS", True))
    image_timeout_s: float = field(default_factory=lambda: _env_float("DECKEXPORT_IMAGE_TIMEOUT", 10.0))
    # Substrings of image URLs known to fail in headless export.
    blocked_image_patterns: tuple[str, ...] = field(
        default_factory=lambda: _env_list("DECKEXPORT_BLOCKED_IMAGE_PATTERNS", ("placehold.co",))
    )
    user_agent: str = field(default_factory=lambda: os.getenv("DECKEXPORT_USER_AGENT", "deckexport/0.1"))


@lru_cache(maxsize=1)
def get_settings() -> ExportSettings:
    return ExportSettings()


_active_settings: ContextVar[ExportSettings | None] = ContextVar("deckexport_settings", default=None)


def current_settings() -> ExportSettings:
    """Settings of the export in progress, or the process defaults."""
    return _active_settings.get() or get_settings()


@contextmanager
def use_settings(settings: ExportSettings | None) -> Iterator[ExportSettings]:
    resolved = settings or get_settings()
    token = _active_settings.set(resolved)
    try:
        yield resolved
    finally:
        _active_settings.reset(token)
