"""Parser for HRUI port/interface pages (port.cgi)."""

from __future__ import annotations

from napalm_hrui.model.port import Port, PortStatistics
from napalm_hrui.parser.html import (
    PORT_SETTINGS_SELECTOR,
    PORT_SETTINGS_TABLE,
    ParseOptions,
    extract_table,
    parse_html,
    parse_int,
)
from napalm_hrui.vendor.hrui.mappings import PORT_STATE


_COUNTER_OPTIONS: ParseOptions = ParseOptions().quiet()


def parse_ports(html: str | bytes) -> list[Port]:
    """Parse the port settings/status table of ``port.cgi``.

    The table is the third one inside the page fieldset and starts with two
    header rows.  Columns:

    +------+-------+--------------+--------------+--------------+--------------+
    | Port | State | Speed/Duplex | Speed/Duplex | Flow Control | Flow Control |
    |      |       | (config)     | (actual)     | (config)     | (actual)     |
    +------+-------+--------------+--------------+--------------+--------------+

    Args:
        html: Raw HTML from ``port.cgi``.

    Returns:
        One :class:`~napalm_hrui.model.port.Port` per row, physical ports
        and trunks alike.

    Raises:
        HRUIParseError: If the document cannot be parsed.
        HRUIFieldNotFoundError: If the status table is missing.
    """
    doc = parse_html(html)
    ports: list[Port] = []
    for cells in extract_table(
        doc,
        PORT_SETTINGS_SELECTOR,
        PORT_SETTINGS_TABLE,
        skip_rows=2,
        min_cells=6,
    ):
        if not cells[0]:
            continue
        ports.append(
            Port(
                name=cells[0],
                enabled=cells[1] == PORT_STATE.decode("1"),
                speed_duplex_config=cells[2],
                speed_duplex_actual=cells[3],
                flow_control_config=cells[4],
                flow_control_actual=cells[5],
            )
        )
    return ports


def parse_port_statistics(html: str | bytes) -> list[PortStatistics]:
    """Parse the counters page (``port.cgi?page=stats``).

    Columns: Port, State, Link Status, TxGoodPkt, TxBadPkt, RxGoodPkt, RxBadPkt.
    """
    doc = parse_html(html)
    stats: list[PortStatistics] = []
    for cells in extract_table(doc, "table", 0, skip_rows=1, min_cells=7):
        if not cells[0]:
            continue
        stats.append(
            PortStatistics(
                port=cells[0],
                enabled=cells[1].lower() == "enable",
                link_up=cells[2].lower() == "link up",
                tx_good=parse_int(cells[3], _COUNTER_OPTIONS) or 0,
                tx_bad=parse_int(cells[4], _COUNTER_OPTIONS) or 0,
                rx_good=parse_int(cells[5], _COUNTER_OPTIONS) or 0,
                rx_bad=parse_int(cells[6], _COUNTER_OPTIONS) or 0,
            )
        )
    return stats
