"""Host backends implementing :class:`~vscsdeck.core.interfaces.host.HostAdapter`."""

from vscsdeck.host.mock_host import InMemoryHost

__all__ = ["InMemoryHost"]
