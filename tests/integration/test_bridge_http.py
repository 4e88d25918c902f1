"""Integration test — the bridge over a real loopback socket.

Boots BridgeServer on a free port around an in-memory host and drives it
with plain ``requests`` calls, checking status codes, bodies, and host
side effects.
"""

from __future__ import annotations

import requests

from vscsdeck.core.interfaces.host import HostLineState


def _url(server, path: str) -> str:
    return f"{server.base_url}{path}"


class TestState:
    def test_get_state(self, bridge_server):
        resp = requests.get(_url(bridge_server, "/state"), timeout=2)
        assert resp.status_code == 200
        assert resp.headers["Content-Type"].startswith("application/json")
        assert resp.headers["Access-Control-Allow-Origin"] == "*"
        body = resp.json()
        assert body["networkValid"] is True
        assert {f["id"] for f in body["frequencies"]} == {"120500:SY_TWR", "121500:ML_CTR"}
        assert {ln["id"] for ln in body["lines"]} >= {"GND_coldline", "ML_TWR_hotline"}
        assert "error" not in body

    def test_partial_state(self, bridge_server, host):
        host.simulate_read_failure("toggles")
        body = requests.get(_url(bridge_server, "/state"), timeout=2).json()
        assert "toggles" in body["error"]
        assert len(body["lines"]) == 4

    def test_options_preflight(self, bridge_server):
        resp = requests.options(_url(bridge_server, "/freq/121500/mode"), timeout=2)
        assert resp.status_code == 200
        assert "POST" in resp.headers["Access-Control-Allow-Methods"]
        assert resp.headers["Access-Control-Allow-Headers"] == "Content-Type"


class TestFrequencyRoutes:
    def test_set_mode_json_string(self, bridge_server, host):
        resp = requests.post(_url(bridge_server, "/freq/121500:ML_CTR/mode"), json="rx", timeout=2)
        assert resp.status_code == 200
        assert resp.json() == {"ok": True}
        freq = next(f for f in host.read_frequencies() if f.name == "ML_CTR")
        assert freq.receive is True

    def test_set_mode_object_body(self, bridge_server, host):
        resp = requests.post(_url(bridge_server, "/freq/121500/mode"), json={"mode": "tx"}, timeout=2)
        assert resp.status_code == 200
        freq = next(f for f in host.read_frequencies() if f.name == "ML_CTR")
        assert (freq.receive, freq.transmit) == (True, True)

    def test_tx_forbidden_without_identity(self, bridge_server, host):
        host.simulate_identity(network_valid=False)
        resp = requests.post(_url(bridge_server, "/freq/121500/mode"), json="tx", timeout=2)
        assert resp.status_code == 403
        assert "error" in resp.json()
        freq = next(f for f in host.read_frequencies() if f.name == "ML_CTR")
        assert freq.transmit is False

    def test_missing_mode(self, bridge_server):
        resp = requests.post(_url(bridge_server, "/freq/121500/mode"), timeout=2)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Missing mode (off|rx|tx)."

    def test_unknown_mode(self, bridge_server):
        resp = requests.post(_url(bridge_server, "/freq/121500/mode"), data="loud", timeout=2)
        assert resp.status_code == 400

    def test_unknown_frequency(self, bridge_server):
        resp = requests.post(_url(bridge_server, "/freq/999999/mode"), json="rx", timeout=2)
        assert resp.status_code == 404

    def test_missing_action(self, bridge_server):
        assert requests.post(_url(bridge_server, "/freq/121500"), timeout=2).status_code == 400

    def test_unknown_action(self, bridge_server):
        assert requests.post(_url(bridge_server, "/freq/121500/tune"), timeout=2).status_code == 400
        assert requests.post(_url(bridge_server, "/freq/999/tune"), timeout=2).status_code == 404

    def test_remove(self, bridge_server, host):
        resp = requests.post(_url(bridge_server, "/freq/120500:SY_TWR/remove"), timeout=2)
        assert resp.status_code == 200
        assert [f.name for f in host.read_frequencies()] == ["ML_CTR"]

    def test_url_encoded_id(self, bridge_server, host):
        resp = requests.post(_url(bridge_server, "/freq/121500%3AMelbourne%20Centre/mode"), json="rx", timeout=2)
        assert resp.status_code == 200


class TestLineRoutes:
    def test_inbound_coldline_opens_then_closes(self, bridge_server, host):
        url = _url(bridge_server, "/line/GND_COLDLINE/toggle")

        first = requests.post(url, timeout=2)
        assert first.status_code == 200
        assert first.json() == {"ok": True, "action": "open"}

        second = requests.post(url, timeout=2)
        assert second.json()["action"] == "close"

        gnd = next(ln for ln in host.read_lines() if ln.name == "GND")
        assert gnd.state is HostLineState.CLOSED

    def test_toggle_without_action_segment(self, bridge_server):
        resp = requests.post(_url(bridge_server, "/line/ML_TWR_hotline"), timeout=2)
        assert resp.json()["action"] == "outbound"

    def test_unknown_line(self, bridge_server):
        assert requests.post(_url(bridge_server, "/line/NOPE/toggle"), timeout=2).status_code == 404

    def test_unknown_line_action(self, bridge_server):
        assert requests.post(_url(bridge_server, "/line/GND_coldline/hold"), timeout=2).status_code == 400


class TestToggleRoutes:
    def test_mute(self, bridge_server, host):
        resp = requests.post(_url(bridge_server, "/toggle/mute"), timeout=2)
        assert resp.status_code == 200
        assert host.read_toggles().mute is True

    def test_group_noop_is_still_ok(self, bridge_server, host):
        resp = requests.post(_url(bridge_server, "/toggle/group"), timeout=2)
        assert resp.status_code == 200
        assert host.read_toggles().group is False

    def test_unknown_toggle(self, bridge_server):
        assert requests.post(_url(bridge_server, "/toggle/volume"), timeout=2).status_code == 400


class TestRouting:
    def test_unknown_route(self, bridge_server):
        resp = requests.get(_url(bridge_server, "/nope"), timeout=2)
        assert resp.status_code == 404
        assert resp.json() == {"error": "Not found."}

    def test_root(self, bridge_server):
        assert requests.get(bridge_server.base_url + "/", timeout=2).status_code == 404

    def test_wrong_method(self, bridge_server):
        assert requests.post(_url(bridge_server, "/state"), timeout=2).status_code == 405
        assert requests.get(_url(bridge_server, "/toggle/mute"), timeout=2).status_code == 405

    def test_host_fault_is_500(self, bridge_server, host):
        host.simulate_read_failure("lines", RuntimeError("host crashed"))
        resp = requests.post(_url(bridge_server, "/line/GND_coldline/toggle"), timeout=2)
        assert resp.status_code == 500
        assert resp.json() == {"error": "host crashed"}

    def test_server_keeps_serving_after_fault(self, bridge_server, host):
        host.simulate_read_failure("lines")
        requests.post(_url(bridge_server, "/line/GND_coldline/toggle"), timeout=2)
        host.clear_read_failures()
        assert requests.get(_url(bridge_server, "/state"), timeout=2).status_code == 200
