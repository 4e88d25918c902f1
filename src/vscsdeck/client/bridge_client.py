"""Blocking HTTP client for the bridge's loopback API.

Thin wrapper around :mod:`requests`.  No retries: the deck's polling
interval is the retry.  Network failures become
:class:`TransientFetchFailure`; bridge error statuses are translated back
into the same error classes the bridge raised.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from vscsdeck.client.error_utils import summarize_error
from vscsdeck.core.errors import TransientFetchFailure, error_for_status
from vscsdeck.core.models.snapshot import FrequencyMode, LineAction, StateSnapshot, ToggleName

_log = logging.getLogger(__name__)

_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


class BridgeClient:
    """Calls the bridge at *base_url*.

    Args:
        base_url: e.g. ``http://127.0.0.1:18084``.
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:18084", timeout: float = 2.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fetch_state(self) -> StateSnapshot:
        """GET ``/state``.  Raises :class:`TransientFetchFailure` on any failure."""
        try:
            resp = requests.get(f"{self._base_url}/state", headers=_HEADERS, timeout=self._timeout)
            resp.raise_for_status()
            snapshot = StateSnapshot.model_validate(resp.json())
        except Exception as exc:  # noqa: BLE001
            raise TransientFetchFailure(summarize_error(exc)) from exc
        if snapshot.error:
            _log.debug("Bridge returned partial state: %s", snapshot.error)
        return snapshot

    def set_frequency_mode(self, target_id: str, mode: FrequencyMode | str) -> None:
        value = mode.value if isinstance(mode, FrequencyMode) else mode
        self._post(f"/freq/{quote(target_id, safe='')}/mode", body=value)

    def remove_frequency(self, target_id: str) -> None:
        self._post(f"/freq/{quote(target_id, safe='')}/remove")

    def toggle_line(self, target_id: str) -> LineAction | None:
        """POST a line toggle and return the action the bridge issued, if reported."""
        result = self._post(f"/line/{quote(target_id, safe='')}/toggle")
        action = result.get("action")
        if not action:
            return None
        try:
            return LineAction(str(action).lower())
        except ValueError:
            _log.warning("Bridge reported unknown line action %r for %s", action, target_id)
            return None

    def toggle_switch(self, name: ToggleName | str) -> None:
        value = name.value if isinstance(name, ToggleName) else name
        self._post(f"/toggle/{quote(value, safe='')}")

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _post(self, path: str, body: Any = None) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            if body is None:
                resp = requests.post(url, headers=_HEADERS, timeout=self._timeout)
            else:
                resp = requests.post(url, json=body, headers=_HEADERS, timeout=self._timeout)
        except requests.exceptions.RequestException as exc:
            raise TransientFetchFailure(summarize_error(exc)) from exc

        payload = _json_or_empty(resp)
        if not resp.ok:
            message = payload.get("error") or f"Bridge error {resp.status_code}"
            raise error_for_status(resp.status_code)(message)
        return payload


def _json_or_empty(resp: requests.Response) -> dict[str, Any]:
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
