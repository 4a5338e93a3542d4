"""Parser for HRUI forwarding pages: storm control and jumbo frames (fwd.cgi)."""

from __future__ import annotations

import re

from napalm_hrui.client.errors import HRUIFieldNotFoundError
from napalm_hrui.model.fwd import StormControlEntry
from napalm_hrui.parser.html import (
    RATE_OPTIONS,
    cell_text,
    extract_selected,
    extract_table,
    parse_html,
    parse_int,
)
from napalm_hrui.vendor.hrui.mappings import FRAME_SIZE

# Hint next to the rate input, e.g. "(1-2500000)(kbps)".
_MAX_RATE_RE: re.Pattern[str] = re.compile(r"\(?1-(\d+)\)?\(kbps\)")


def parse_storm_control(html: str | bytes) -> list[StormControlEntry]:
    """Parse the storm control status table (last table on ``fwd.cgi?page=storm_ctrl``).

    +------+-----------+-----------------+-----------------+-------------------+
    | Port | Broadcast | Known Multicast | Unknown Unicast | Unknown Multicast |
    +------+-----------+-----------------+-----------------+-------------------+

    ``"Off"`` (and ``"Auto"``) parse to ``None``; numbers are kbps.  Rows that
    do not have exactly five cells are skipped.
    """
    doc = parse_html(html)
    return [
        StormControlEntry(
            port=cells[0],
            broadcast_kbps=parse_int(cells[1], RATE_OPTIONS),
            known_multicast_kbps=parse_int(cells[2], RATE_OPTIONS),
            unknown_unicast_kbps=parse_int(cells[3], RATE_OPTIONS),
            unknown_multicast_kbps=parse_int(cells[4], RATE_OPTIONS),
        )
        for cells in extract_table(doc, skip_rows=1, exact_cells=5)
        if cells[0]
    ]


def parse_max_rate(html: str | bytes, port: str) -> int:
    """Return the maximum storm control rate (kbps) the page offers for *port*.

    Raises:
        HRUIFieldNotFoundError: If the port row or its rate hint is missing.
    """
    doc = parse_html(html)
    for tr in doc.find_all("tr"):
        cells = tr.find_all("td")
        if not cells or cell_text(cells[0]) != port:
            continue
        for cell in cells[1:]:
            text = cell_text(cell).replace(" ", "")
            match = _MAX_RATE_RE.search(text)
            if match:
                return int(match.group(1))
        break
    raise HRUIFieldNotFoundError(f"Rate information not found for port {port!r}")


def parse_jumbo_frame(html: str | bytes) -> int:
    """Return the selected maximum frame size (bytes) on ``fwd.cgi?page=jumboframe``.

    Raises:
        HRUIFieldNotFoundError: If no size is selected.
        HRUICodecError: If the selected size is not a known frame size.
    """
    doc = parse_html(html)
    return int(FRAME_SIZE.canonical(extract_selected(doc, 'select[name="jumboframe"]')))
