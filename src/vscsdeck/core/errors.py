"""Domain-specific errors for vscsdeck.

Bridge-side errors carry the HTTP status they map to, so the transport can
translate them at the request boundary and the client can translate a status
back into the same class.
"""

from __future__ import annotations


class VscsDeckError(Exception):
    """Base error for vscsdeck."""

    status: int = 500


class NotFound(VscsDeckError):
    """Raised when a frequency, line, or route does not exist."""

    status = 404


class BadRequest(VscsDeckError):
    """Raised on a malformed mode, toggle name, or path."""

    status = 400


class Forbidden(VscsDeckError):
    """Raised when a permission-gated transition is attempted without authorization."""

    status = 403


class MethodNotAllowed(VscsDeckError):
    """Raised when a known route is called with the wrong HTTP method."""

    status = 405


class PartialState(VscsDeckError):
    """Raised when one section of host state could not be read."""


class TransientFetchFailure(VscsDeckError):
    """Raised by the client on network errors, timeouts, or unreadable responses."""


_BY_STATUS: dict[int, type[VscsDeckError]] = {
    cls.status: cls for cls in (NotFound, BadRequest, Forbidden, MethodNotAllowed)
}


def error_for_status(status: int) -> type[VscsDeckError]:
    """Return the error class for an HTTP *status* (``VscsDeckError`` if unmapped)."""
    return _BY_STATUS.get(status, VscsDeckError)
