"""Parser for the HRUI Energy Efficient Ethernet page (eee.cgi)."""

from __future__ import annotations

from napalm_hrui.model.eee import EEESettings
from napalm_hrui.parser.html import extract_selected, parse_html
from napalm_hrui.vendor.hrui.mappings import EEE_STATE


def parse_eee(html: str | bytes) -> EEESettings:
    doc = parse_html(html)
    state = EEE_STATE.encode(extract_selected(doc, "select[name='func_type']"))
    return EEESettings(enabled=state == "1")
