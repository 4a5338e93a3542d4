"""Unit tests for napalm_hrui.parser.fwd."""

from __future__ import annotations

import pytest

from napalm_hrui.client.errors import HRUICodecError, HRUIFieldNotFoundError
from napalm_hrui.model.fwd import StormControlEntry
from napalm_hrui.parser.fwd import parse_jumbo_frame, parse_max_rate, parse_storm_control

STORM_HTML = """
<html>
<head><title>Storm Control</title></head>
<body>
<form method="post" action="/fwd.cgi?page=storm_ctrl">
<table border="1">
  <tr>
    <th>Port</th><th>Broadcast (kbps)</th><th>Known Multicast (kbps)</th>
    <th>Unknown Unicast (kbps)</th><th>Unknown Multicast (kbps)</th>
  </tr>
  <tr>
    <td>Port 1</td><td>(1-2500000)(kbps)</td><td>(1-25000)(kbps)</td>
    <td>(1-50000)(kbps)</td><td>(1-100000)(kbps)</td>
  </tr>
  <tr>
    <td>Trunk1</td><td>( 1-2490000 )( kbps )</td><td>Off</td><td>Off</td><td>(1-50000)(kbps)</td>
  </tr>
</table>
</form>
<table border="1">
  <tr>
    <th>Port</th><th>Broadcast (kbps)</th><th>Known Multicast (kbps)</th>
    <th>Unknown Unicast (kbps)</th><th>Unknown Multicast (kbps)</th>
  </tr>
  <tr><td>Port 1</td><td>Off</td><td>25000</td><td>25000</td><td>Off</td></tr>
  <tr><td>Trunk1</td><td>2490000</td><td>Off</td><td>Off</td><td>Off</td></tr>
  <tr><td colspan="5">Rates are in kbps</td></tr>
</table>
</body>
</html>
"""

JUMBO_HTML = """
<html>
<head><title>Jumbo Frame Setting</title></head>
<body>
<form method="post" name="jumboframe" action="/fwd.cgi?page=jumboframe">
  <select name="jumboframe">
    <option value="0">1522</option>
    <option value="1">1536</option>
    <option value="2">1552</option>
    <option value="3">9216</option>
    <option value="4" selected>16383</option>
  </select>
</form>
</body>
</html>
"""


def test_parse_storm_control() -> None:
    assert parse_storm_control(STORM_HTML) == [
        StormControlEntry(
            port="Port 1",
            broadcast_kbps=None,
            known_multicast_kbps=25000,
            unknown_unicast_kbps=25000,
            unknown_multicast_kbps=None,
        ),
        StormControlEntry(
            port="Trunk1",
            broadcast_kbps=2490000,
            known_multicast_kbps=None,
            unknown_unicast_kbps=None,
            unknown_multicast_kbps=None,
        ),
    ]


def test_rate_for_storm_type() -> None:
    entry = parse_storm_control(STORM_HTML)[0]
    assert entry.rate_for("Known Multicast") == 25000
    assert entry.rate_for("broadcast") is None


class TestParseMaxRate:
    def test_first_rate_hint_of_row(self) -> None:
        assert parse_max_rate(STORM_HTML, "Port 1") == 2500000

    def test_spaces_inside_hint(self) -> None:
        assert parse_max_rate(STORM_HTML, "Trunk1") == 2490000

    def test_port_match_is_exact(self) -> None:
        with pytest.raises(HRUIFieldNotFoundError):
            parse_max_rate(STORM_HTML, "Port 10")

    def test_row_without_hint(self) -> None:
        html = """
        <table>
          <tr><td>Port 1</td><td>Off</td><td>Off</td><td>Off</td><td>Off</td></tr>
          <tr><td>Port 2</td><td>(1-2500000)(kbps)</td></tr>
        </table>
        """
        with pytest.raises(HRUIFieldNotFoundError):
            parse_max_rate(html, "Port 1")


class TestParseJumboFrame:
    def test_selected_size(self) -> None:
        assert parse_jumbo_frame(JUMBO_HTML) == 16383

    def test_unknown_size(self) -> None:
        html = JUMBO_HTML.replace(">16383<", ">4096<")
        with pytest.raises(HRUICodecError):
            parse_jumbo_frame(html)
