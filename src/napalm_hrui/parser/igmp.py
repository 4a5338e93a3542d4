"""Parser for the HRUI IGMP snooping page (igmp.cgi?page=dump)."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from napalm_hrui.client.errors import HRUIFieldNotFoundError
from napalm_hrui.model.igmp import IGMPConfig
from napalm_hrui.parser.html import cell_text, is_checked, parse_html

_PORT_INPUT_RE: re.Pattern[str] = re.compile(r"^lPort_(\d+)$")


def _static_row(doc: BeautifulSoup) -> Tag:
    for th in doc.find_all("th"):
        if cell_text(th) == "static":
            row = th.find_parent("tr")
            if row is not None:
                return row
    raise HRUIFieldNotFoundError("No 'static' router port row on igmp.cgi")


def parse_igmp_config(html: str | bytes) -> IGMPConfig:
    """Parse global and per-port IGMP snooping state.

    The global flag is the ``enable_igmp`` checkbox.  Per-port flags are the
    ``lPort_<n>`` checkboxes (0-based *n*) in the row headed ``static``.

    Raises:
        HRUIFieldNotFoundError: If the ``static`` row is missing.
    """
    doc = parse_html(html)
    enable = doc.find("input", attrs={"name": "enable_igmp"})
    enabled = enable is not None and is_checked(enable)

    flags: dict[int, bool] = {}
    for inp in _static_row(doc).find_all("input"):
        match = _PORT_INPUT_RE.match(str(inp.get("name", "")))
        if match:
            flags[int(match.group(1))] = is_checked(inp)
    ports = [flags.get(i, False) for i in range(max(flags, default=-1) + 1)]
    return IGMPConfig(enabled=enabled, ports=ports)
