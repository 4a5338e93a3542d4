"""Parser for the HRUI trunk group page (trunk.cgi?page=group)."""

from __future__ import annotations

import logging

from napalm_hrui.model.trunk import TrunkConfig
from napalm_hrui.parser.html import (
    FIRST_TABLE,
    ParseOptions,
    expand_port_numbers,
    extract_options,
    extract_table,
    parse_html,
    parse_int,
)
from napalm_hrui.vendor.hrui.mappings import TRUNK_TYPE

logger = logging.getLogger(__name__)

_TRUNK_TABLE: str = "form[action='/trunk.cgi?page=group_remove'] table"
_TRUNK_ID_OPTIONS: ParseOptions = ParseOptions().with_prefix("Trunk").with_default(-1).quiet()


def parse_available_trunks(html: str | bytes) -> list[int]:
    """Return the trunk IDs offered by the ``id`` selector."""
    doc = parse_html(html)
    ids: list[int] = []
    for _text, value in extract_options(doc, "select[name='id'] option"):
        trunk_id = parse_int(value, ParseOptions().with_default(-1).quiet())
        if trunk_id is not None and trunk_id >= 0:
            ids.append(trunk_id)
    return ids


def parse_trunks(html: str | bytes) -> list[TrunkConfig]:
    """Parse configured trunk groups from the ``group_remove`` form.

    Columns: Trunk (``"Trunk2"``), Type (``"static"``/``"LACP"``), Member
    ports (``"2,6"`` or ``"2-6"``, 1-based).  A page without the form has no
    trunks configured.

    Raises:
        HRUICodecError: If a trunk type is unknown.
    """
    doc = parse_html(html)
    if not doc.select(_TRUNK_TABLE):
        return []
    trunks: list[TrunkConfig] = []
    for cells in extract_table(doc, _TRUNK_TABLE, FIRST_TABLE, skip_rows=1, min_cells=3):
        trunk_id = parse_int(cells[0], _TRUNK_ID_OPTIONS)
        if trunk_id is None or trunk_id < 0:
            logger.debug("Skipping trunk row %r", cells)
            continue
        trunks.append(
            TrunkConfig(
                trunk_id=trunk_id,
                type=TRUNK_TYPE.canonical(cells[1]),
                ports=expand_port_numbers(cells[2]),
            )
        )
    return trunks
