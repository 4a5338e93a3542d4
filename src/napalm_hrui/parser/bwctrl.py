"""Parser for the HRUI bandwidth control page (port.cgi?page=bw_ctrl)."""

from __future__ import annotations

from napalm_hrui.model.bwctrl import BandwidthControl
from napalm_hrui.parser.html import ParseOptions, extract_table, parse_html, parse_int

UNLIMITED: str = "Unlimited"

_RATE_OPTIONS: ParseOptions = ParseOptions().with_special_cases(UNLIMITED, "Off", none=True)


def parse_bandwidth_control(html: str | bytes) -> list[BandwidthControl]:
    """Parse the last table: Port, Ingress rate, Egress rate (kbps or ``"Unlimited"``)."""
    doc = parse_html(html)
    return [
        BandwidthControl(
            port=cells[0],
            ingress_kbps=parse_int(cells[1], _RATE_OPTIONS),
            egress_kbps=parse_int(cells[2], _RATE_OPTIONS),
        )
        for cells in extract_table(doc, skip_rows=1, exact_cells=3)
        if cells[0]
    ]
