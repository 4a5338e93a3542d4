"""Unit tests for napalm_hrui.client.loop_ops (loop protection and STP)."""

from __future__ import annotations

import logging
from urllib.parse import parse_qsl

import pytest
import responses as rsps_lib

from napalm_hrui.client.errors import HRUICodecError, HRUIPortNotFoundError
from napalm_hrui.client.loop_ops import (
    configure_loop_protocol,
    list_stp_ports,
    read_loop_protocol,
    read_stp_port,
    read_stp_settings,
    set_stp_port,
    set_stp_settings,
)
from napalm_hrui.client.session import HRUICredentials, HRUISession, SessionState
from napalm_hrui.model.loop import LoopPortStatus, STPGlobalSettings, STPPort

BASE_URL = "http://192.168.1.1"
LOOP_URL = BASE_URL + "/loop.cgi"

PORT_SELECT_HTML = """
<html><body>
<select name="portid">
  <option value="0">Port 1</option>
  <option value="1">Port 2</option>
  <option value="2">Port 3</option>
  <option value="3">Port 4</option>
</select>
</body></html>
"""

LOOP_HTML = """
<html><body>
<select name="func_type">
  <option value="0">Off</option>
  <option value="1" selected>Loop Detection</option>
  <option value="2">Loop Prevention</option>
</select>
<input name="interval_time" value="5">
<input name="recover_time" value="10">
</body></html>
"""

STP_GLOBAL_HTML = """
<html><body>
<table>
  <tr><th>Spanning Tree Status</th><td>Enable</td></tr>
  <tr><th>Force Version</th><td><select name="version"><option value="0" selected>STP</option></select></td></tr>
  <tr><th>Priority</th><td><select name="priority"><option value="4096" selected>4096</option></select></td></tr>
  <tr><th>Maximum Age</th><td><input name="maxage" value="20"></td></tr>
  <tr><th>Hello Time</th><td><input name="hello" value="2"></td></tr>
  <tr><th>Forward Delay</th><td><input name="delay" value="15"></td></tr>
  <tr><th>Root Priority</th><td>4096</td></tr>
  <tr><th>Root MAC Address</th><td>1C:2A:A3:23:D1:BA</td></tr>
  <tr><th>Root Path Cost</th><td>0</td></tr>
  <tr><th>Root Port</th><td>-</td></tr>
  <tr><th>Root Maximum Age</th><td>20 Sec</td></tr>
  <tr><th>Root Hello Time</th><td>2 Sec</td></tr>
  <tr><th>Root Forward Delay</th><td>15 Sec</td></tr>
</table>
</body></html>
"""

STP_PORT_HTML = """
<html><body>
<table>
  <tr><th>Port</th><th>State</th><th>Role</th><th>Cost</th><th>Cost</th><th>Priority</th><th>P2P</th><th>P2P</th><th>Edge</th><th>Edge</th></tr>
  <tr><td>Port 1</td><td>Forwarding</td><td>Root</td><td>0</td><td>20000</td><td>128</td><td>Auto</td><td>True</td><td>False</td><td>False</td></tr>
  <tr><td>Port 2</td><td>Disabled</td><td>-</td><td>0</td><td>-</td><td>128</td><td>Auto</td><td>-</td><td>False</td><td>-</td></tr>
</table>
</body></html>
"""

_OK = "<html>OK</html>"


def _make_session() -> HRUISession:
    session = HRUISession(
        base_url=BASE_URL,
        credentials=HRUICredentials("admin", "admin"),
        verify_tls=False,
    )
    session.authenticate()
    session._state = SessionState.AUTHENTICATED  # skip index.cgi validation
    return session


def _posts() -> list[rsps_lib.Call]:
    return [c for c in rsps_lib.calls if c.request.method == "POST"]


# ---------------------------------------------------------------------------
# Loop protection
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_read_loop_protocol() -> None:
    rsps_lib.add(rsps_lib.GET, LOOP_URL, body=LOOP_HTML)
    protocol = read_loop_protocol(_make_session())
    assert protocol.function == "Loop Detection"
    assert protocol.interval_time is None
    assert rsps_lib.calls[0].request.url == LOOP_URL


class TestConfigureLoopProtocol:
    @rsps_lib.activate
    def test_loop_prevention_sends_only_the_loop_form(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        rsps_lib.add(rsps_lib.POST, LOOP_URL, body=_OK)

        with caplog.at_level(logging.DEBUG, logger="napalm_hrui.client.loop_ops"):
            configure_loop_protocol(
                _make_session(),
                "Loop Prevention",
                interval_time=5,
                recover_time=12,
                port_statuses=[
                    LoopPortStatus(port="Port 1", enabled=True),
                    LoopPortStatus(port="Port 8", enabled=False),
                ],
            )

        assert len(rsps_lib.calls) == 1
        assert dict(parse_qsl(rsps_lib.calls[0].request.body)) == {
            "cmd": "loop",
            "func_type": "2",
            "interval_time": "5",
            "recover_time": "12",
        }
        assert "Loop port status is read-only" in caplog.text

    @rsps_lib.activate
    def test_defaults_for_missing_timers(self) -> None:
        rsps_lib.add(rsps_lib.POST, LOOP_URL, body=_OK)

        configure_loop_protocol(_make_session(), "Spanning Tree")

        fields = dict(parse_qsl(rsps_lib.calls[0].request.body))
        assert fields["func_type"] == "3"
        assert fields["interval_time"] == "1"
        assert fields["recover_time"] == "1"

    @rsps_lib.activate
    def test_unknown_function(self) -> None:
        with pytest.raises(HRUICodecError):
            configure_loop_protocol(_make_session(), "Loop Guard")
        assert len(rsps_lib.calls) == 0


# ---------------------------------------------------------------------------
# Spanning tree
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_read_stp_settings() -> None:
    rsps_lib.add(rsps_lib.GET, LOOP_URL, body=STP_GLOBAL_HTML)
    settings = read_stp_settings(_make_session())
    assert settings.version == "STP"
    assert settings.priority == 4096
    assert rsps_lib.calls[0].request.url == LOOP_URL + "?page=stp_global"


@rsps_lib.activate
def test_set_stp_settings() -> None:
    rsps_lib.add(rsps_lib.POST, LOOP_URL, body=_OK)
    settings = STPGlobalSettings(
        version="RSTP",
        priority=32768,
        max_age=20,
        hello_time=2,
        forward_delay=15,
        root_priority=4096,
    )

    set_stp_settings(_make_session(), settings)

    request = rsps_lib.calls[0].request
    assert request.url == LOOP_URL + "?page=stp_global"
    assert dict(parse_qsl(request.body)) == {
        "cmd": "stp",
        "version": "1",
        "priority": "32768",
        "maxage": "20",
        "hello": "2",
        "delay": "15",
    }


@rsps_lib.activate
def test_set_stp_settings_unknown_version() -> None:
    settings = STPGlobalSettings(version="MSTP", priority=0, max_age=20, hello_time=2, forward_delay=15)
    with pytest.raises(HRUICodecError):
        set_stp_settings(_make_session(), settings)
    assert len(rsps_lib.calls) == 0


@rsps_lib.activate
def test_list_and_read_stp_port() -> None:
    rsps_lib.add(rsps_lib.GET, BASE_URL + "/port.cgi", body=PORT_SELECT_HTML)
    rsps_lib.add(rsps_lib.GET, LOOP_URL, body=STP_PORT_HTML)
    session = _make_session()

    assert [p.port for p in list_stp_ports(session)] == ["Port 1", "Port 2"]
    port = read_stp_port(session, 1)
    assert port.role == "Root"
    assert port.path_cost_actual == 20000
    with pytest.raises(HRUIPortNotFoundError):
        read_stp_port(session, "Port 4")


@rsps_lib.activate
def test_set_stp_port() -> None:
    rsps_lib.add(rsps_lib.GET, BASE_URL + "/port.cgi", body=PORT_SELECT_HTML)
    rsps_lib.add(rsps_lib.POST, LOOP_URL, body=_OK)

    set_stp_port(
        _make_session(),
        STPPort(port="Port 3", path_cost=20000, priority=128, p2p="Auto", edge="True"),
    )

    post = _posts()[0].request
    assert post.url == LOOP_URL + "?page=stp_port"
    assert dict(parse_qsl(post.body)) == {
        "cmd": "stp_port",
        "portid": "2",
        "cost": "20000",
        "priority": "128",
        "p2p": "Auto",
        "edge": "True",
    }
