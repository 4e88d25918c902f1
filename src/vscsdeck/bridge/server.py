"""Loopback HTTP transport for the bridge.

A :class:`http.server.ThreadingHTTPServer` accepts connections on one thread
and handles each request on its own daemon thread, so a slow or faulty
request never blocks the next poll.  Domain errors map to their HTTP status;
anything else becomes a 500 with the exception message.
"""

from __future__ import annotations

import json
import logging
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import unquote, urlparse

from vscsdeck.bridge.aggregator import BridgeAggregator
from vscsdeck.core.errors import BadRequest, MethodNotAllowed, NotFound, VscsDeckError

_log = logging.getLogger(__name__)

_CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def parse_mode_body(raw: bytes) -> str | None:
    """Extract a mode from a request body.

    Accepts a JSON string (``"tx"``), a JSON object (``{"mode": "tx"}``), or
    bare text (``tx``).  Returns ``None`` for an empty body.
    """
    text = raw.decode("utf-8", errors="replace").strip()
    if not text:
        return None
    try:
        value = json.loads(text)
    except ValueError:
        return text.strip('"')
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and isinstance(value.get("mode"), str):
        return value["mode"]
    return text


class _BridgeHandler(BaseHTTPRequestHandler):
    """Routes one request to the aggregator.  ``server.aggregator`` is injected."""

    server: _BridgeHTTPServer

    # -- HTTP verbs --

    def do_OPTIONS(self) -> None:  # noqa: N802
        self.send_response(200)
        for key, value in _CORS_HEADERS.items():
            self.send_header(key, value)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def do_GET(self) -> None:  # noqa: N802
        self._handle("GET")

    def do_POST(self) -> None:  # noqa: N802
        self._handle("POST")

    # -- Dispatch --

    def _handle(self, method: str) -> None:
        try:
            status, payload = self._route(method)
            self._send_json(payload, status)
        except VscsDeckError as exc:
            self._send_json({"error": str(exc)}, exc.status)
        except (BrokenPipeError, ConnectionResetError):
            _log.debug("Client went away during %s %s", method, self.path)
        except Exception as exc:  # noqa: BLE001
            _log.exception("Request %s %s failed", method, self.path)
            try:
                self._send_json({"error": str(exc)}, 500)
            except (BrokenPipeError, ConnectionResetError):
                pass

    def _route(self, method: str) -> tuple[int, dict[str, Any]]:
        path = urlparse(self.path).path.rstrip("/") or "/"
        segments = [unquote(s) for s in path.split("/") if s]
        if not segments:
            raise NotFound("Not found.")

        root = segments[0].lower()
        aggregator = self.server.aggregator

        if root == "state" and len(segments) == 1:
            self._require(method, "GET")
            return 200, aggregator.build_snapshot().to_wire()

        if root == "freq":
            self._require(method, "POST")
            body = self._read_body()
            if len(segments) < 3:
                raise BadRequest("Missing frequency id or action.")
            target_id, action = segments[1], segments[2].lower()
            if action == "mode":
                aggregator.set_frequency_mode(target_id, parse_mode_body(body))
                return 200, {"ok": True}
            if action == "remove":
                aggregator.remove_frequency(target_id)
                return 200, {"ok": True}
            if aggregator.find_frequency(target_id) is None:
                raise NotFound("Frequency not found.")
            raise BadRequest("Unknown frequency action.")

        if root == "line":
            self._require(method, "POST")
            self._read_body()
            if len(segments) < 2:
                raise BadRequest("Missing line id.")
            action = segments[2].lower() if len(segments) > 2 else "toggle"
            if action != "toggle":
                raise BadRequest("Unknown line action.")
            issued = aggregator.toggle_line(segments[1])
            return 200, {"ok": True, "action": issued.value}

        if root == "toggle" and len(segments) == 2:
            self._require(method, "POST")
            self._read_body()
            aggregator.toggle_switch(segments[1])
            return 200, {"ok": True}

        raise NotFound("Not found.")

    # -- Helpers --

    @staticmethod
    def _require(method: str, expected: str) -> None:
        if method != expected:
            raise MethodNotAllowed(f"Use {expected} for this route.")

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length > 0 else b""

    def _send_json(self, payload: dict[str, Any], status: int = 200) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        for key, value in _CORS_HEADERS.items():
            self.send_header(key, value)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        _log.debug("%s - %s", self.address_string(), format % args)


class _BridgeHTTPServer(ThreadingHTTPServer):
    daemon_threads = True
    allow_reuse_address = True

    def __init__(self, address: tuple[str, int], aggregator: BridgeAggregator) -> None:
        self.aggregator = aggregator
        super().__init__(address, _BridgeHandler)


class BridgeServer:
    """Owns the listener and its accept thread.

    Args:
        aggregator: Command/snapshot backend.
        host: Listen address; keep it on loopback.
        port: Listen port (``0`` picks a free port, useful in tests).
    """

    def __init__(self, aggregator: BridgeAggregator, host: str = "127.0.0.1", port: int = 18084) -> None:
        self._aggregator = aggregator
        self._address = (host, port)
        self._httpd: _BridgeHTTPServer | None = None
        self._thread: threading.Thread | None = None

    @property
    def port(self) -> int:
        """The bound port (resolved after :meth:`start` when ``port=0``)."""
        if self._httpd is not None:
            return self._httpd.server_address[1]
        return self._address[1]

    @property
    def base_url(self) -> str:
        return f"http://{self._address[0]}:{self.port}"

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Bind and start serving on a daemon thread.  No-op if already running."""
        if self._httpd is not None:
            return
        self._httpd = _BridgeHTTPServer(self._address, self._aggregator)
        self._thread = threading.Thread(
            target=self._httpd.serve_forever,
            name="vscs-bridge-http",
            daemon=True,
        )
        self._thread.start()
        _log.info("Bridge listening on %s", self.base_url)

    def stop(self, timeout: float = 5.0) -> None:
        """Stop serving and release the socket."""
        if self._httpd is None:
            return
        self._httpd.shutdown()
        self._httpd.server_close()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
        self._httpd = None
        self._thread = None
        _log.info("Bridge stopped")
