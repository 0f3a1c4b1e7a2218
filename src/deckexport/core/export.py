"""Export entry point.

    VALIDATING -> ASSEMBLING -> WRITING -> DONE
         |                        |
         +------> REJECTED <------+

Validation failures raise `InvalidDeckData` before a slide exists; a failed
save raises `WriteFailure`, leaves no partial file behind and keeps any file
already at the target path. Assembling cannot fail as a whole.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping

from deckexport.core.config import ExportSettings, get_settings, use_settings
from deckexport.core.errors import InvalidDeckData, WriteFailure
from deckexport.core.model.deck import Deck
from deckexport.core.render.assembler import build_presentation
from deckexport.core.render.sanitize import is_valid_deck_data

logger = logging.getLogger(__name__)


class ExportState(enum.Enum):
    VALIDATING = "validating"
    ASSEMBLING = "assembling"
    WRITING = "writing"
    DONE = "done"
    REJECTED = "rejected"


def _save_atomic(prs: Any, out_path: Path) -> None:
    """Save next to `out_path` and swap it in; an existing file survives a failed save."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{out_path.stem}.", suffix=".pptx.tmp", dir=out_path.parent)
    os.close(fd)
    try:
        prs.save(tmp)
        os.replace(tmp, out_path)
    except Exception:
        try:
            os.unlink(tmp)
        except OSError:
            logger.warning("could not remove partial file %s", tmp)
        raise


class DeckExporter:
    """Single-use exporter that records its progress in `state`."""

    def __init__(self, settings: ExportSettings | None = None):
        self.settings = settings or get_settings()
        self.state = ExportState.VALIDATING

    def _reject(self, err: Exception) -> None:
        self.state = ExportState.REJECTED
        logger.error("export rejected: %s", err)

    def validate(self, deck: Any) -> Deck:
        self.state = ExportState.VALIDATING
        if not is_valid_deck_data(deck):
            err = InvalidDeckData("deck data is missing or not an object", context={"type": type(deck).__name__})
            self._reject(err)
            raise err
        return deck if isinstance(deck, Deck) else Deck.from_dict(deck)

    async def export(self, deck: Deck | Mapping[str, Any], file_name: str | Path | None = None) -> Path:
        model = self.validate(deck)
        out_path = Path(file_name or self.settings.default_file_name)

        with use_settings(self.settings):
            self.state = ExportState.ASSEMBLING
            logger.info("assembling deck %s (%d sections)", model.id or "?", len(model.sections))
            prs = build_presentation(model, self.settings)

            self.state = ExportState.WRITING
            try:
                await asyncio.to_thread(_save_atomic, prs, out_path)
            except Exception as e:
                err = WriteFailure(f"failed to write {out_path}", cause=e, context={"deck": model.id})
                self._reject(err)
                raise err from e

        self.state = ExportState.DONE
        logger.info("exported deck %s to %s", model.id or "?", out_path)
        return out_path


async def export_deck(
    deck: Deck | Mapping[str, Any],
    file_name: str | Path | None = None,
    *,
    settings: ExportSettings | None = None,
) -> Path:
    return await DeckExporter(settings).export(deck, file_name)


def export_deck_sync(
    deck: Deck | Mapping[str, Any],
    file_name: str | Path | None = None,
    *,
    settings: ExportSettings | None = None,
) -> Path:
    """Blocking wrapper around `export_deck` for scripts and the CLI."""
    return asyncio.run(export_deck(deck, file_name, settings=settings))
