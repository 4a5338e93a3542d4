"""Unit tests for napalm_hrui.client.fwd_ops (storm control and jumbo frames)."""

from __future__ import annotations

from urllib.parse import parse_qsl

import pytest
import responses as rsps_lib

from napalm_hrui.client.errors import HRUICodecError, HRUIDeviceError, HRUIPortNotFoundError
from napalm_hrui.client.fwd_ops import (
    is_storm_control_disabled,
    read_jumbo_frame,
    read_port_max_rate,
    read_storm_control,
    read_storm_control_port,
    set_jumbo_frame,
    set_storm_control,
    validate_storm_control_rate,
)
from napalm_hrui.client.session import HRUICredentials, HRUISession, SessionState

BASE_URL = "http://192.168.1.1"
FWD_URL = BASE_URL + "/fwd.cgi"

PORT_SELECT_HTML = """
<html><body>
<select name="portid">
  <option value="0">Port 1</option>
  <option value="1">Port 2</option>
  <option value="2">Trunk1</option>
</select>
</body></html>
"""

STORM_HTML = """
<html>
<head><title>Storm Control</title></head>
<body>
<form method="post" action="/fwd.cgi?page=storm_ctrl">
<table border="1">
  <tr><th>Port</th><th>Broadcast</th><th>Known Multicast</th><th>Unknown Unicast</th><th>Unknown Multicast</th></tr>
  <tr><td>Port 1</td><td>(1-2500000)(kbps)</td><td>(1-2500000)(kbps)</td><td>(1-2500000)(kbps)</td><td>(1-2500000)(kbps)</td></tr>
  <tr><td>Port 2</td><td>(1-1000000)(kbps)</td><td>(1-1000000)(kbps)</td><td>(1-1000000)(kbps)</td><td>(1-1000000)(kbps)</td></tr>
  <tr><td>Trunk1</td><td>(1-2490000)(kbps)</td><td>(1-2490000)(kbps)</td><td>(1-2490000)(kbps)</td><td>(1-2490000)(kbps)</td></tr>
</table>
</form>
<table border="1">
  <tr><th>Port</th><th>Broadcast (kbps)</th><th>Known Multicast (kbps)</th><th>Unknown Unicast (kbps)</th><th>Unknown Multicast (kbps)</th></tr>
  <tr><td>Port 1</td><td>Off</td><td>25000</td><td>0</td><td>Off</td></tr>
  <tr><td>Trunk1</td><td>2490000</td><td>Off</td><td>Off</td><td>Off</td></tr>
</table>
</body>
</html>
"""

JUMBO_HTML = """
<html>
<head><title>Jumbo Frame Setting</title></head>
<body>
<select name="jumboframe">
  <option value="0">1522</option>
  <option value="3" selected>9216</option>
</select>
</body>
</html>
"""


def _make_session(autosave: bool = False) -> HRUISession:
    session = HRUISession(
        base_url=BASE_URL,
        credentials=HRUICredentials("admin", "admin"),
        verify_tls=False,
        autosave=autosave,
    )
    session.authenticate()
    session._state = SessionState.AUTHENTICATED  # skip index.cgi validation
    return session


def _mock_pages() -> None:
    rsps_lib.add(rsps_lib.GET, BASE_URL + "/port.cgi", body=PORT_SELECT_HTML)
    rsps_lib.add(rsps_lib.GET, FWD_URL, body=STORM_HTML)


def _posts() -> list[rsps_lib.Call]:
    return [c for c in rsps_lib.calls if c.request.method == "POST"]


# ---------------------------------------------------------------------------
# Disabled-rate rules
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    ("rate", "disabled"),
    [(None, True), (0, True), (2500000, True), (1000, False), (2499999, False)],
)
def test_is_storm_control_disabled(rate: int | None, disabled: bool) -> None:
    assert is_storm_control_disabled(rate, 2500000) is disabled


@pytest.mark.parametrize("rate", [0, 2500000])
def test_validate_rejects_rates_stored_as_disabled(rate: int) -> None:
    with pytest.raises(ValueError):
        validate_storm_control_rate(rate, 2500000)


def test_validate_accepts_real_rate() -> None:
    validate_storm_control_rate(1000, 2500000)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_read_storm_control() -> None:
    rsps_lib.add(rsps_lib.GET, FWD_URL, body=STORM_HTML)
    entries = read_storm_control(_make_session())
    assert [e.port for e in entries] == ["Port 1", "Trunk1"]
    assert rsps_lib.calls[0].request.url == FWD_URL + "?page=storm_ctrl"


@rsps_lib.activate
def test_read_port_max_rate() -> None:
    _mock_pages()
    session = _make_session()
    assert read_port_max_rate(session, 1) == 2500000
    assert read_port_max_rate(session, "Trunk1") == 2490000


class TestReadStormControlPort:
    @rsps_lib.activate
    def test_real_rate_is_enabled(self) -> None:
        _mock_pages()
        state = read_storm_control_port(_make_session(), "Port 1", "known multicast")
        assert state.enabled
        assert state.storm_type == "Known Multicast"
        assert state.rate_kbps == 25000
        assert state.max_rate_kbps == 2500000

    @rsps_lib.activate
    def test_off_is_disabled(self) -> None:
        _mock_pages()
        state = read_storm_control_port(_make_session(), 1, "Broadcast")
        assert not state.enabled
        assert state.rate_kbps is None

    @rsps_lib.activate
    def test_zero_is_disabled(self) -> None:
        _mock_pages()
        assert not read_storm_control_port(_make_session(), 1, "Unknown Unicast").enabled

    @rsps_lib.activate
    def test_port_maximum_is_disabled(self) -> None:
        _mock_pages()
        state = read_storm_control_port(_make_session(), "Trunk1", "Broadcast")
        assert not state.enabled
        assert state.rate_kbps is None

    @rsps_lib.activate
    def test_port_without_status_row(self) -> None:
        _mock_pages()
        state = read_storm_control_port(_make_session(), "Port 2", "Broadcast")
        assert not state.enabled
        assert state.max_rate_kbps == 1000000

    @rsps_lib.activate
    def test_unknown_storm_type(self) -> None:
        with pytest.raises(HRUICodecError):
            read_storm_control_port(_make_session(), 1, "Jumbo")
        assert len(rsps_lib.calls) == 0


# ---------------------------------------------------------------------------
# set_storm_control
# ---------------------------------------------------------------------------

class TestSetStormControl:
    @rsps_lib.activate
    def test_enable_on_several_ports(self) -> None:
        _mock_pages()
        rsps_lib.add(rsps_lib.POST, FWD_URL, body=STORM_HTML)

        set_storm_control(_make_session(), "Broadcast", [1, "Port 2"], True, 1000)

        posts = _posts()
        assert len(posts) == 1
        assert posts[0].request.url == FWD_URL + "?page=storm_ctrl"
        assert parse_qsl(posts[0].request.body) == [
            ("storm_filter", "3"),
            ("action", "1"),
            ("cmd", "storm"),
            ("portid", "Port 1"),
            ("portid", "Port 2"),
            ("rate", "1000"),
        ]

    @rsps_lib.activate
    def test_disable_sends_no_rate(self) -> None:
        rsps_lib.add(rsps_lib.GET, BASE_URL + "/port.cgi", body=PORT_SELECT_HTML)
        rsps_lib.add(rsps_lib.POST, FWD_URL, body=STORM_HTML)

        set_storm_control(_make_session(), "unknown unicast", ["Trunk1"], False)

        assert parse_qsl(_posts()[0].request.body) == [
            ("storm_filter", "0"),
            ("action", "0"),
            ("cmd", "storm"),
            ("portid", "Trunk1"),
        ]
        assert not any(c.request.url.startswith(FWD_URL) for c in rsps_lib.calls[:-1])

    @pytest.mark.parametrize("rate", [0, 1000000])
    @rsps_lib.activate
    def test_rate_equal_to_disabled_is_rejected_before_post(self, rate: int) -> None:
        _mock_pages()
        with pytest.raises(ValueError):
            set_storm_control(_make_session(), "Broadcast", ["Port 1", "Port 2"], True, rate)
        assert _posts() == []

    @rsps_lib.activate
    def test_enable_requires_rate(self) -> None:
        with pytest.raises(ValueError):
            set_storm_control(_make_session(), "Broadcast", [1], True)
        assert len(rsps_lib.calls) == 0

    @rsps_lib.activate
    def test_empty_port_list(self) -> None:
        with pytest.raises(ValueError):
            set_storm_control(_make_session(), "Broadcast", [], False)
        assert len(rsps_lib.calls) == 0

    @rsps_lib.activate
    def test_unknown_port(self) -> None:
        rsps_lib.add(rsps_lib.GET, BASE_URL + "/port.cgi", body=PORT_SELECT_HTML)
        with pytest.raises(HRUIPortNotFoundError):
            set_storm_control(_make_session(), "Broadcast", ["Port 9"], False)
        assert _posts() == []

    @rsps_lib.activate
    def test_unexpected_response_page(self) -> None:
        _mock_pages()
        rsps_lib.add(rsps_lib.POST, FWD_URL, body="<html><head><title>Login</title></head></html>")
        with pytest.raises(HRUIDeviceError):
            set_storm_control(_make_session(), "Broadcast", [1], True, 1000)

    @rsps_lib.activate
    def test_unexpected_response_page_is_not_saved(self) -> None:
        _mock_pages()
        rsps_lib.add(rsps_lib.POST, FWD_URL, body="<html><head><title>Login</title></head></html>")
        rsps_lib.add(rsps_lib.POST, BASE_URL + "/save.cgi", body="<html>saved</html>")

        with pytest.raises(HRUIDeviceError):
            set_storm_control(_make_session(autosave=True), "Broadcast", [1], True, 1000)

        assert [c.request.url for c in _posts()] == [FWD_URL + "?page=storm_ctrl"]

    @rsps_lib.activate
    def test_accepted_change_is_saved(self) -> None:
        _mock_pages()
        rsps_lib.add(rsps_lib.POST, FWD_URL, body=STORM_HTML)
        rsps_lib.add(rsps_lib.POST, BASE_URL + "/save.cgi", body="<html>saved</html>")

        set_storm_control(_make_session(autosave=True), "Broadcast", [1], True, 1000)

        assert [c.request.url for c in _posts()] == [
            FWD_URL + "?page=storm_ctrl",
            BASE_URL + "/save.cgi",
        ]


# ---------------------------------------------------------------------------
# Jumbo frames
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_read_jumbo_frame() -> None:
    rsps_lib.add(rsps_lib.GET, FWD_URL, body=JUMBO_HTML)
    assert read_jumbo_frame(_make_session()) == 9216
    assert rsps_lib.calls[0].request.url == FWD_URL + "?page=jumboframe"


@rsps_lib.activate
def test_set_jumbo_frame() -> None:
    rsps_lib.add(rsps_lib.POST, FWD_URL, body=JUMBO_HTML)
    set_jumbo_frame(_make_session(), 9216)
    request = rsps_lib.calls[0].request
    assert request.url == FWD_URL + "?page=jumboframe"
    assert dict(parse_qsl(request.body)) == {"cmd": "jumboframe", "jumboframe": "3"}


@rsps_lib.activate
def test_set_jumbo_frame_unsupported_size() -> None:
    with pytest.raises(HRUICodecError):
        set_jumbo_frame(_make_session(), 4096)
    assert len(rsps_lib.calls) == 0


@rsps_lib.activate
def test_set_jumbo_frame_wrong_page() -> None:
    rsps_lib.add(rsps_lib.POST, FWD_URL, body="<html><head><title>Storm Control</title></head></html>")
    with pytest.raises(HRUIDeviceError):
        set_jumbo_frame(_make_session(), 1522)
