"""Deck to slide rendering. Handlers are imported by the dispatcher, not here."""
