"""Parser for HRUI VLAN configuration pages (vlan.cgi)."""

from __future__ import annotations

import logging

from napalm_hrui.client.errors import HRUIFieldNotFoundError
from napalm_hrui.model.vlan import PortVlanConfig, VlanEntry
from napalm_hrui.parser.html import (
    FIRST_TABLE,
    ParseOptions,
    expand_port_list,
    extract_table,
    parse_html,
    parse_int,
)

logger = logging.getLogger(__name__)

_STATIC_VLAN_TABLE: str = "form[name=formVlanStatus] table"
_VLAN_ID_OPTIONS: ParseOptions = ParseOptions().with_default(-1).quiet()
_PVID_OPTIONS: ParseOptions = ParseOptions().with_default(1)


def parse_static_vlans(html: str | bytes) -> list[VlanEntry]:
    """Parse the static VLAN page and return one entry per VLAN.

    The status table inside ``<form name="formVlanStatus">`` has the columns:

    +----+------+---------+--------+----------+--------+
    | ID | Name | Members | Tagged | Untagged | Remove |
    +----+------+---------+--------+----------+--------+

    Member strings such as ``"2-3,Trunk2"`` are expanded to display names.

    Args:
        html: Raw HTML from ``vlan.cgi?page=static``.

    Returns:
        List of :class:`~napalm_hrui.model.vlan.VlanEntry` in page order.

    Raises:
        HRUIParseError: If the document cannot be parsed.
        HRUIFieldNotFoundError: If the VLAN status table is missing.
    """
    doc = parse_html(html)
    entries: list[VlanEntry] = []
    for cells in extract_table(doc, _STATIC_VLAN_TABLE, FIRST_TABLE, skip_rows=1, min_cells=5):
        vlan_id = parse_int(cells[0], _VLAN_ID_OPTIONS)
        if vlan_id is None or vlan_id < 1:
            logger.debug("Skipping VLAN row with ID %r", cells[0])
            continue
        entries.append(
            VlanEntry(
                vlan_id=vlan_id,
                name=cells[1],
                member_ports=expand_port_list(cells[2]),
                tagged_ports=expand_port_list(cells[3]),
                untagged_ports=expand_port_list(cells[4]),
            )
        )
    return entries


def find_vlan(entries: list[VlanEntry], vlan_id: int) -> VlanEntry:
    """Return the entry for *vlan_id*.

    Raises:
        HRUIFieldNotFoundError: If the VLAN does not exist.
    """
    for entry in entries:
        if entry.vlan_id == vlan_id:
            return entry
    raise HRUIFieldNotFoundError(f"VLAN {vlan_id} not found")


def parse_port_vlan_configs(html: str | bytes) -> list[PortVlanConfig]:
    """Parse the port-based VLAN page (``vlan.cgi?page=port_based``).

    The status table is the last table on the page:

    +------+------+---------------------+
    | Port | PVID | Accepted Frame Type |
    +------+------+---------------------+
    """
    doc = parse_html(html)
    configs: list[PortVlanConfig] = []
    for cells in extract_table(doc, skip_rows=1, min_cells=3):
        if not cells[0]:
            continue
        pvid = parse_int(cells[1], _PVID_OPTIONS)
        configs.append(
            PortVlanConfig(
                port=cells[0],
                pvid=1 if pvid is None else pvid,
                accept_frame_type=cells[2],
            )
        )
    return configs
