"""Unit tests for napalm_hrui.client.igmp_ops.

The per-port update is a read-modify-write of the whole static router
table; the concurrency tests drive two updates at once against a stateful
fake of ``igmp.cgi``.
"""

from __future__ import annotations

import contextlib
import threading
import time
from urllib.parse import parse_qsl

import pytest
import requests
import responses as rsps_lib

from napalm_hrui.client.errors import HRUIPortNotFoundError
from napalm_hrui.client.igmp_ops import (
    build_igmp_port_payload,
    configure_port_igmp_snooping,
    read_igmp_config,
    read_port_igmp_snooping,
    set_igmp_snooping,
)
from napalm_hrui.client.session import HRUICredentials, HRUISession, SessionState

BASE_URL = "http://192.168.1.1"
IGMP_URL = BASE_URL + "/igmp.cgi"

_PORT_COUNT = 4


def _render(enabled: bool, ports: list[bool]) -> str:
    cells = "".join(
        f'<td><input type="checkbox" name="lPort_{i}"{" checked" if flag else ""}></td>'
        for i, flag in enumerate(ports)
    )
    return f"""
    <html><body>
    <input type="checkbox" name="enable_igmp"{" checked" if enabled else ""}>
    <table>
      <tr><th>Port</th>{"".join(f"<th>{i + 1}</th>" for i in range(len(ports)))}</tr>
      <tr><th>static</th>{cells}</tr>
    </table>
    </body></html>
    """


class _FakeIGMPPage:
    """Stateful stand-in for igmp.cgi; GETs are slow to widen the race window."""

    def __init__(self, read_delay_s: float = 0.0) -> None:
        self.ports = [False] * _PORT_COUNT
        self.read_delay_s = read_delay_s
        self._lock = threading.Lock()

    def on_get(self, request: requests.PreparedRequest) -> tuple[int, dict[str, str], str]:
        with self._lock:
            body = _render(True, list(self.ports))
        time.sleep(self.read_delay_s)
        return (200, {}, body)

    def on_post(self, request: requests.PreparedRequest) -> tuple[int, dict[str, str], str]:
        fields = dict(parse_qsl(str(request.body or "")))
        with self._lock:
            self.ports = [fields.get(f"lPort_{i}") == "on" for i in range(_PORT_COUNT)]
        return (200, {}, "<html>OK</html>")


def _make_session() -> HRUISession:
    session = HRUISession(
        base_url=BASE_URL,
        credentials=HRUICredentials("admin", "admin"),
        verify_tls=False,
    )
    session.authenticate()
    session._state = SessionState.AUTHENTICATED  # skip index.cgi validation
    return session


def _run_concurrently(session: HRUISession, ports: list[int]) -> None:
    errors: list[BaseException] = []

    def worker(port: int) -> None:
        try:
            configure_port_igmp_snooping(session, port, True)
        except BaseException as exc:  # noqa: BLE001
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(p,)) for p in ports]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    assert not errors


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

@rsps_lib.activate
def test_read_igmp_config() -> None:
    rsps_lib.add(rsps_lib.GET, IGMP_URL, body=_render(True, [False, True, False, False]))
    config = read_igmp_config(_make_session())
    assert config.enabled
    assert config.ports == [False, True, False, False]
    assert rsps_lib.calls[0].request.url == IGMP_URL + "?page=dump"


@rsps_lib.activate
def test_read_port_igmp_snooping() -> None:
    rsps_lib.add(rsps_lib.GET, IGMP_URL, body=_render(True, [False, True, False, False]))
    session = _make_session()
    assert read_port_igmp_snooping(session, 2)
    assert not read_port_igmp_snooping(session, 1)
    with pytest.raises(HRUIPortNotFoundError):
        read_port_igmp_snooping(session, 5)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(("enabled", "body"), [(True, "enable_igmp=on"), (False, "")])
@rsps_lib.activate
def test_set_igmp_snooping(enabled: bool, body: str) -> None:
    rsps_lib.add(rsps_lib.POST, IGMP_URL, body="<html>OK</html>")
    set_igmp_snooping(_make_session(), enabled)
    request = rsps_lib.calls[0].request
    assert request.url == IGMP_URL + "?page=enable_igmp"
    assert (request.body or "") == body


def test_build_igmp_port_payload() -> None:
    assert build_igmp_port_payload([True, False, True]) == [
        ("cmd", "set"),
        ("lPort_0", "on"),
        ("lPort_2", "on"),
    ]


@rsps_lib.activate
def test_configure_port_keeps_other_flags() -> None:
    rsps_lib.add(rsps_lib.GET, IGMP_URL, body=_render(True, [True, False, False, True]))
    rsps_lib.add(rsps_lib.POST, IGMP_URL, body="<html>OK</html>")

    configure_port_igmp_snooping(_make_session(), 3, True)

    post = rsps_lib.calls[1].request
    assert post.url == IGMP_URL + "?page=igmp_static_router"
    assert parse_qsl(post.body) == [
        ("cmd", "set"),
        ("lPort_0", "on"),
        ("lPort_2", "on"),
        ("lPort_3", "on"),
    ]


@rsps_lib.activate
def test_configure_port_disable() -> None:
    rsps_lib.add(rsps_lib.GET, IGMP_URL, body=_render(True, [True, False, False, True]))
    rsps_lib.add(rsps_lib.POST, IGMP_URL, body="<html>OK</html>")

    configure_port_igmp_snooping(_make_session(), 1, False)

    assert parse_qsl(rsps_lib.calls[1].request.body) == [("cmd", "set"), ("lPort_3", "on")]


@rsps_lib.activate
def test_configure_port_out_of_range_posts_nothing() -> None:
    rsps_lib.add(rsps_lib.GET, IGMP_URL, body=_render(True, [False] * 4))
    with pytest.raises(HRUIPortNotFoundError):
        configure_port_igmp_snooping(_make_session(), 5, True)
    assert [c.request.method for c in rsps_lib.calls] == ["GET"]


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------

class TestConcurrentPortUpdates:
    @rsps_lib.activate
    def test_serialized_updates_keep_both_flags(self) -> None:
        fake = _FakeIGMPPage(read_delay_s=0.2)
        rsps_lib.add_callback(rsps_lib.GET, IGMP_URL, callback=fake.on_get)
        rsps_lib.add_callback(rsps_lib.POST, IGMP_URL, callback=fake.on_post)
        session = _make_session()

        _run_concurrently(session, [1, 3])

        assert fake.ports == [True, False, True, False]
        methods = [c.request.method for c in rsps_lib.calls]
        assert methods == ["GET", "POST", "GET", "POST"]

    @rsps_lib.activate
    def test_unserialized_updates_lose_one_flag(self) -> None:
        fake = _FakeIGMPPage(read_delay_s=0.2)
        rsps_lib.add_callback(rsps_lib.GET, IGMP_URL, callback=fake.on_get)
        rsps_lib.add_callback(rsps_lib.POST, IGMP_URL, callback=fake.on_post)
        session = _make_session()
        session.igmp_port_lock = contextlib.nullcontext()  # type: ignore[assignment]

        _run_concurrently(session, [1, 3])

        assert sum(fake.ports) == 1
