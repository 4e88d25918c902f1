"""vscsdeck — loopback VSCS bridge and button-deck client."""

__version__ = "0.3.0"
