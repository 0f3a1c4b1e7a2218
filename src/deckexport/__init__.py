"""Compile deck documents into PowerPoint files."""

from deckexport.core.export import DeckExporter, ExportState, export_deck, export_deck_sync

__version__ = "0.1.0"

__all__ = ["DeckExporter", "ExportState", "export_deck", "export_deck_sync", "__version__"]
