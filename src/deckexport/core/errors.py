"""Exception hierarchy for deck export.

Only `InvalidDeckData` and `WriteFailure` ever reach the caller of
`export_deck`; `ComponentRenderError` is raised by handlers (or wrapped around
whatever they raised) and contained by the dispatcher.
"""

from __future__ import annotations

from typing import Any


class DeckExportError(Exception):
    """Base exception for all export errors."""

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.cause is not None:
            parts.append(f" (caused by: {type(self.cause).__name__}: {self.cause})")
        if self.context:
            parts.append(f" context={self.context}")
        return "".join(parts)


class InvalidDeckData(DeckExportError):
    """Deck is not a well-formed object. Raised before any slide exists."""


class ComponentRenderError(DeckExportError):
    """A single component could not be drawn. Recovered with a placeholder."""


class WriteFailure(DeckExportError):
    """The assembled presentation could not be saved."""
