"""Parser for HRUI loop protection and spanning tree pages (loop.cgi)."""

from __future__ import annotations

from bs4 import BeautifulSoup

from napalm_hrui.model.loop import LoopPortStatus, LoopProtocol, STPGlobalSettings, STPPort
from napalm_hrui.parser.html import (
    FIRST_TABLE,
    ParseOptions,
    extract_int_attr,
    extract_labeled_value,
    extract_selected,
    extract_selected_value,
    extract_table,
    parse_html,
    parse_int,
)
from napalm_hrui.vendor.hrui.mappings import LOOP_FUNCTION

LOOP_PREVENTION: str = "Loop Prevention"

_SECONDS_OPTIONS: ParseOptions = ParseOptions().with_suffix("Sec")
_COST_OPTIONS: ParseOptions = ParseOptions().with_special_cases("-", none=True)


def parse_loop_protocol(html: str | bytes) -> LoopProtocol:
    """Parse the loop protection page (``loop.cgi``).

    The selected ``func_type`` option gives the loop function.  Timers and
    the per-port table (Port / State / Status, first table on the page) are
    only meaningful for ``"Loop Prevention"`` and are left as ``None``
    otherwise.

    Raises:
        HRUIParseError: If the document cannot be parsed.
        HRUIFieldNotFoundError: If no loop function is selected or a
            Loop Prevention timer is missing.
        HRUICodecError: If the selected function is unknown.
    """
    doc = parse_html(html)
    function = LOOP_FUNCTION.canonical(extract_selected(doc, 'select[name="func_type"]'))
    protocol = LoopProtocol(function=function)
    if function != LOOP_PREVENTION:
        return protocol

    protocol.interval_time = extract_int_attr(doc, 'input[name="interval_time"]')
    protocol.recover_time = extract_int_attr(doc, 'input[name="recover_time"]')
    protocol.port_statuses = _parse_loop_ports(doc)
    return protocol


def _parse_loop_ports(doc: BeautifulSoup) -> list[LoopPortStatus]:
    if doc.find("table") is None:
        return []
    return [
        LoopPortStatus(
            port=cells[0],
            enabled=cells[1] == "Enable",
            state=cells[1],
            status=cells[2],
        )
        for cells in extract_table(doc, "table", FIRST_TABLE, skip_rows=1, min_cells=3)
        if cells[0]
    ]


def parse_stp_global(html: str | bytes) -> STPGlobalSettings:
    """Parse the spanning tree bridge page (``loop.cgi?page=stp_global``).

    Editable values come from the form controls; root bridge values come
    from ``<th>label</th><td>value</td>`` rows (timers shown as ``"20 Sec"``).

    Raises:
        HRUIFieldNotFoundError: If a form control or root value is missing.
    """
    doc = parse_html(html)
    return STPGlobalSettings(
        status=extract_labeled_value(doc, "Spanning Tree Status"),
        version=extract_selected(doc, 'select[name="version"]'),
        priority=int(extract_selected_value(doc, 'select[name="priority"]')),
        max_age=extract_int_attr(doc, 'input[name="maxage"]'),
        hello_time=extract_int_attr(doc, 'input[name="hello"]'),
        forward_delay=extract_int_attr(doc, 'input[name="delay"]'),
        root_priority=parse_int(extract_labeled_value(doc, "Root Priority")),
        root_mac=extract_labeled_value(doc, "Root MAC Address"),
        root_path_cost=parse_int(extract_labeled_value(doc, "Root Path Cost")),
        root_port=extract_labeled_value(doc, "Root Port"),
        root_max_age=parse_int(extract_labeled_value(doc, "Root Maximum Age"), _SECONDS_OPTIONS),
        root_hello_time=parse_int(extract_labeled_value(doc, "Root Hello Time"), _SECONDS_OPTIONS),
        root_forward_delay=parse_int(
            extract_labeled_value(doc, "Root Forward Delay"), _SECONDS_OPTIONS
        ),
    )


def _flag(text: str) -> str:
    # The firmware mixes "TRUE" and "True" between columns.
    return text.capitalize() if text.lower() in ("true", "false") else text


def parse_stp_ports(html: str | bytes) -> list[STPPort]:
    """Parse the spanning tree port page (``loop.cgi?page=stp_port``).

    Columns of the first table: Port, State, Role, Path Cost (config),
    Path Cost (actual), Priority, P2P (config), P2P (actual), Edge (config),
    Edge (actual).
    """
    doc = parse_html(html)
    return [
        STPPort(
            port=cells[0],
            state=cells[1],
            role=cells[2],
            path_cost=parse_int(cells[3]) or 0,
            path_cost_actual=parse_int(cells[4], _COST_OPTIONS),
            priority=parse_int(cells[5], ParseOptions().with_default(128)) or 0,
            p2p=_flag(cells[6]),
            p2p_actual=_flag(cells[7]),
            edge=_flag(cells[8]),
            edge_actual=_flag(cells[9]),
        )
        for cells in extract_table(doc, "table", FIRST_TABLE, skip_rows=1, min_cells=10)
    ]
