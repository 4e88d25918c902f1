"""Bridge process: host state aggregation and the loopback HTTP transport."""

from vscsdeck.bridge.aggregator import BridgeAggregator
from vscsdeck.bridge.server import BridgeServer

__all__ = ["BridgeAggregator", "BridgeServer"]
