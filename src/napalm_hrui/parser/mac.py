"""Parser for HRUI MAC address pages (mac.cgi, mac_constraint.cgi)."""

from __future__ import annotations

from napalm_hrui.model.mac import MacEntry, MacLimit, StaticMacEntry
from napalm_hrui.parser.html import (
    FIRST_TABLE,
    ParseOptions,
    extract_table,
    parse_html,
    parse_int,
)

_STATIC_TABLE: str = "form[action='/mac.cgi?page=staticdel'] table"
_VLAN_OPTIONS: ParseOptions = ParseOptions().with_default(1)
_LIMIT_OPTIONS: ParseOptions = ParseOptions().with_special_cases("Unlimited", none=True)


def _port_name(text: str) -> str:
    # MAC tables print physical ports as bare numbers and trunks by name.
    return f"Port {text}" if text.isdigit() else text


def parse_mac_table(html: str | bytes) -> list[MacEntry]:
    """Parse the forwarding table (``mac.cgi?page=fwd_tbl``).

    Columns: No., MAC Address, VLAN ID, Type, Port.
    """
    doc = parse_html(html)
    return [
        MacEntry(
            mac=cells[1],
            vlan_id=parse_int(cells[2], _VLAN_OPTIONS) or 1,
            type=cells[3].lower(),
            port=_port_name(cells[4]),
        )
        for cells in extract_table(doc, "table", FIRST_TABLE, skip_rows=1, exact_cells=5)
        if cells[1]
    ]


def parse_static_macs(html: str | bytes) -> list[StaticMacEntry]:
    """Parse the static MAC table inside the ``staticdel`` form.

    Columns: No., MAC Address, VLAN ID, Port, Select.
    """
    doc = parse_html(html)
    return [
        StaticMacEntry(
            mac=cells[1],
            vlan_id=parse_int(cells[2], _VLAN_OPTIONS) or 1,
            port=_port_name(cells[3]),
        )
        for cells in extract_table(doc, _STATIC_TABLE, FIRST_TABLE, skip_rows=1, min_cells=4)
        if cells[1]
    ]


def parse_mac_limits(html: str | bytes) -> list[MacLimit]:
    """Parse the learning limit table (last table on ``mac_constraint.cgi``).

    Columns: Port, Limit (number or ``"Unlimited"``).
    """
    doc = parse_html(html)
    limits: list[MacLimit] = []
    for cells in extract_table(doc, skip_rows=1, min_cells=2):
        if not cells[0]:
            continue
        limit = parse_int(cells[1], _LIMIT_OPTIONS)
        limits.append(MacLimit(port=cells[0], enabled=limit is not None, limit=limit))
    return limits
