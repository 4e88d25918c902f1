"""Shared pytest fixtures for vscsdeck tests."""

from __future__ import annotations

import pytest

from vscsdeck.bridge.aggregator import BridgeAggregator
from vscsdeck.bridge.server import BridgeServer
from vscsdeck.client.render import RenderProfile, vatsys_profile
from vscsdeck.core.interfaces.host import (
    HostFrequency,
    HostLine,
    HostLineKind,
    HostLineState,
    HostToggles,
)
from vscsdeck.core.models.config import DeckConfig
from vscsdeck.host.mock_host import InMemoryHost


@pytest.fixture
def host() -> InMemoryHost:
    """A small console: two frequencies, a hotline, two coldlines, a monitor."""
    return InMemoryHost(
        frequencies=[
            HostFrequency(name="SY_TWR", frequency=120500, receive=True, transmit=False),
            HostFrequency(name="ML_CTR", frequency=121500, friendly_name="Melbourne Centre"),
        ],
        lines=[
            HostLine(name="ML_TWR", kind=HostLineKind.HOTLINE),
            HostLine(name="GND", kind=HostLineKind.COLDLINE, state=HostLineState.INBOUND),
            HostLine(name="SY_APP", kind=HostLineKind.COLDLINE),
            HostLine(name="BN_CTR", kind=HostLineKind.MONITOR_IN, external=True),
        ],
        toggles=HostToggles(tones_speaker=True),
        network_valid=True,
        real_atc=False,
        atis_monitor=True,
    )


@pytest.fixture
def aggregator(host: InMemoryHost) -> BridgeAggregator:
    return BridgeAggregator(host)


@pytest.fixture
def bridge_server(aggregator: BridgeAggregator):
    """A real loopback bridge on a free port, stopped after the test."""
    server = BridgeServer(aggregator, port=0)
    server.start()
    yield server
    server.stop()


@pytest.fixture
def profile() -> RenderProfile:
    return vatsys_profile({"MUN": {"code": "MUN", "label": "Mungo"}, "SY": {"label": "Sydney"}})


@pytest.fixture(scope="session")
def deck_config() -> DeckConfig:
    """Session-scoped default config (no file I/O)."""
    return DeckConfig()
