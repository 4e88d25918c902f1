"""Deck-side client: bridge HTTP client, state cache, slot engine, renderer."""

from vscsdeck.client.bridge_client import BridgeClient
from vscsdeck.client.controller import DeckController
from vscsdeck.client.slot_assignment import SlotAssignmentEngine
from vscsdeck.client.state_store import DeckStateStore

__all__ = ["BridgeClient", "DeckController", "DeckStateStore", "SlotAssignmentEngine"]
