"""vscsdeck — entry points for the bridge process and the deck simulator.

``run_bridge`` wires Config → InMemoryHost → BridgeAggregator → BridgeServer
and blocks until interrupted.  ``run_deck`` wires Config → BridgeClient →
DeckStateStore → DeckController → NiceGUI deck panel; NiceGUI owns the
event loop and ``app.on_startup`` / ``app.on_shutdown`` handle lifecycle.
"""

from __future__ import annotations

import logging as _logging
import threading

from vscsdeck.bridge.aggregator import BridgeAggregator
from vscsdeck.bridge.server import BridgeServer
from vscsdeck.config.config_manager import load_config
from vscsdeck.core.models.config import DeckConfig
from vscsdeck.host.mock_host import InMemoryHost
from vscsdeck.log_config.logger import setup_logging

_log = _logging.getLogger(__name__)


def _log_level(config: DeckConfig) -> str:
    return "DEBUG" if config.system.dev_mode else config.system.log_level


def build_bridge(config: DeckConfig) -> BridgeServer:
    """Create (but do not start) the bridge server described by *config*."""
    seed = config.bridge.seed_file
    host = InMemoryHost.from_seed_file(seed) if seed else InMemoryHost()
    aggregator = BridgeAggregator(host)
    return BridgeServer(aggregator, host=config.bridge.host, port=config.bridge.port)


def run_bridge() -> None:
    """Synchronous entry point for ``vscsdeck-bridge``."""
    config = load_config()
    setup_logging(_log_level(config), config.system.log_dir, file_name="vscsdeck-bridge.log")
    _log.info("Starting vscsdeck bridge")

    server = build_bridge(config)
    server.start()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        _log.info("Interrupted — stopping bridge")
    finally:
        server.stop()


def run_deck() -> None:
    """Synchronous entry point for ``vscsdeck-deck`` — bootstraps and starts NiceGUI."""
    from nicegui import app, ui

    from vscsdeck.client.bridge_client import BridgeClient
    from vscsdeck.client.controller import DeckController
    from vscsdeck.client.render import get_profile
    from vscsdeck.client.state_store import DeckStateStore
    from vscsdeck.deck.mock_deck import MockDeck
    from vscsdeck.ui.deck_panel import DeckPanel

    config = load_config()
    setup_logging(_log_level(config), config.system.log_dir, file_name="vscsdeck.log")
    _log.info("Starting vscsdeck deck (profile=%s)", config.client.profile)

    # 1. Client side: bridge client, store, presentation profile
    client = BridgeClient(config.client.base_url, timeout=config.client.request_timeout)
    store = DeckStateStore(retain_on_disappear=config.client.retain_slots_on_disappear)
    profile = get_profile(config.client.profile, config.client.location_aliases)

    # 2. Simulated deck surface + controller
    deck = MockDeck()
    controller = DeckController(deck, client, store, profile)

    # 3. UI
    panel = DeckPanel(deck, config.client.buttons, columns=config.client.grid_columns)

    @ui.page("/")
    def _index() -> None:
        ui.query("body").style("background: #1a1a1a;")
        panel.build()

    # 4. Lifecycle hooks
    async def on_startup() -> None:
        _log.info("NiceGUI startup — attaching deck controller")
        controller.attach()
        for button in config.client.buttons:
            deck.simulate_appear(button.context_id, button.kind, button.settings)
        _log.info("Deck simulator running on http://localhost:%d", config.system.webui_port)

    async def on_shutdown() -> None:
        _log.info("NiceGUI shutdown — stopping pollers")
        await controller.close()

    app.on_startup(on_startup)
    app.on_shutdown(on_shutdown)

    # 5. Launch NiceGUI (blocks forever)
    ui.run(
        port=config.system.webui_port,
        title="vscsdeck",
        reload=False,
        show=False,
    )


if __name__ == "__main__":
    run_deck()
