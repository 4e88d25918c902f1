"""Deck surface implementations."""

from vscsdeck.deck.mock_deck import MockDeck

__all__ = ["MockDeck"]
