"""VLAN operations for HRUI switches.

Each write translates a typed request into the form fields the switch's
``vlan.cgi`` pages submit and delegates to
:class:`~napalm_hrui.client.session.HRUISession` for dispatch.

Payloads:

    SET (create or update): POST /vlan.cgi?page=static
        vid=<id>&name=<name>&vlanPort_0=<m>&vlanPort_1=<m>&...
        One ``vlanPort_<wire id>`` field per port in the port table, where
        <m> is 0 = untagged, 1 = tagged, 2 = not a member.

    DELETE: POST /vlan.cgi?page=getRmvVlanEntry
        remove_<id>=on

    PVID: POST /vlan.cgi?page=port_based
        cmd=pvid&portid=<wire id>&pvid=<id>&vlan_accept_frame_type=<code>
"""

from __future__ import annotations

import logging

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.errors import HRUIPortNotFoundError
from napalm_hrui.client.resolver import PortResolver, PortTable
from napalm_hrui.client.session import HRUISession
from napalm_hrui.model.port import PortRef
from napalm_hrui.model.vlan import PortVlanConfig, VlanConfig, VlanEntry
from napalm_hrui.parser.vlan import find_vlan, parse_port_vlan_configs, parse_static_vlans
from napalm_hrui.vendor.hrui.endpoints import (
    PAGE_VLAN_PORT_BASED,
    PAGE_VLAN_REMOVE,
    PAGE_VLAN_STATIC,
    VLAN,
    page,
)
from napalm_hrui.vendor.hrui.mappings import ACCEPT_FRAME_TYPE, VLAN_MEMBERSHIP

logger = logging.getLogger(__name__)

MIN_VLAN_ID: int = 1
MAX_VLAN_ID: int = 4094


def _check_vlan_id(vlan_id: int) -> None:
    if not MIN_VLAN_ID <= vlan_id <= MAX_VLAN_ID:
        raise ValueError(f"VLAN ID must be {MIN_VLAN_ID}-{MAX_VLAN_ID}, got {vlan_id}")


# ---------------------------------------------------------------------------
# Static VLANs
# ---------------------------------------------------------------------------


def list_vlans(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> list[VlanEntry]:
    """Return every static VLAN configured on the switch."""
    html = session.get(VLAN, page(PAGE_VLAN_STATIC), ctx=ctx)
    return parse_static_vlans(html)


def read_vlan(
    session: HRUISession,
    vlan_id: int,
    *,
    ctx: RequestContext | None = None,
) -> VlanEntry:
    """Return a single static VLAN.

    Raises:
        HRUIFieldNotFoundError: If the VLAN does not exist.
    """
    return find_vlan(list_vlans(session, ctx=ctx), vlan_id)


def build_vlan_payload(vlan: VlanConfig, ports: PortTable) -> list[tuple[str, str]]:
    """Build the form fields for :func:`set_vlan`.

    Every port of *ports* gets exactly one ``vlanPort_<wire id>`` field, so
    ports absent from *vlan* are explicitly removed from the VLAN.

    Raises:
        ValueError: If a port is listed as both tagged and untagged.
        HRUIPortNotFoundError: If a listed port is not in *ports*.
        HRUICodecError: If a membership label is unknown.
    """
    untagged = {ports.wire_id(ref) for ref in vlan.untagged_ports}
    tagged = {ports.wire_id(ref) for ref in vlan.tagged_ports}
    overlap = untagged & tagged
    if overlap:
        names = sorted(ports.name_of(wire + 1) for wire in overlap)
        raise ValueError(f"Ports listed as both tagged and untagged: {names}")

    fields: list[tuple[str, str]] = [("vid", str(vlan.vlan_id)), ("name", vlan.name)]
    for wire in sorted(ports.wire_ids.values()):
        if wire in untagged:
            membership = "untagged"
        elif wire in tagged:
            membership = "tagged"
        else:
            membership = "not member"
        fields.append((f"vlanPort_{wire}", VLAN_MEMBERSHIP.encode(membership)))
    return fields


def set_vlan(
    session: HRUISession,
    vlan: VlanConfig,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Create or update a static VLAN.

    The switch has no separate create and update forms: submitting a VLAN ID
    that already exists replaces its name and membership.

    Args:
        session: Active session.
        vlan: Desired VLAN state.  Ports not listed become non-members.
        ctx: Optional deadline/cancellation context.

    Raises:
        ValueError: If the VLAN ID is out of range or a port is listed twice.
        HRUIPortNotFoundError: If a listed port does not exist.
    """
    _check_vlan_id(vlan.vlan_id)
    ports = PortResolver(session).snapshot(ctx=ctx)
    payload = build_vlan_payload(vlan, ports)
    logger.debug("Setting VLAN %d: %s", vlan.vlan_id, payload)
    session.submit_form(VLAN, payload, page(PAGE_VLAN_STATIC), ctx=ctx)
    logger.info("VLAN %d (%r) applied", vlan.vlan_id, vlan.name)


def delete_vlan(
    session: HRUISession,
    vlan_id: int,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Delete a static VLAN.

    Raises:
        ValueError: If *vlan_id* is 1 (the default VLAN cannot be removed)
            or out of range.
    """
    _check_vlan_id(vlan_id)
    if vlan_id == 1:
        raise ValueError("VLAN 1 cannot be deleted")
    logger.debug("Deleting VLAN %d", vlan_id)
    session.submit_form(
        VLAN,
        {f"remove_{vlan_id}": "on"},
        page(PAGE_VLAN_REMOVE),
        ctx=ctx,
    )
    logger.info("VLAN %d deleted", vlan_id)


# ---------------------------------------------------------------------------
# Port-based VLAN (PVID)
# ---------------------------------------------------------------------------


def list_port_vlan_configs(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> list[PortVlanConfig]:
    html = session.get(VLAN, page(PAGE_VLAN_PORT_BASED), ctx=ctx)
    return parse_port_vlan_configs(html)


def read_port_vlan_config(
    session: HRUISession,
    port: PortRef,
    *,
    ctx: RequestContext | None = None,
) -> PortVlanConfig:
    """Return the PVID settings of one port.

    Raises:
        HRUIPortNotFoundError: If the port is unknown or has no row.
    """
    name = PortResolver(session).snapshot(ctx=ctx).name_of(port)
    for config in list_port_vlan_configs(session, ctx=ctx):
        if config.port == name:
            return config
    raise HRUIPortNotFoundError(name)


def set_port_vlan_config(
    session: HRUISession,
    port: PortRef,
    pvid: int,
    accept_frame_type: str = "All",
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Set the PVID and accepted frame type of one port.

    Raises:
        ValueError: If *pvid* is out of range.
        HRUICodecError: If *accept_frame_type* is unknown.
        HRUIPortNotFoundError: If the port does not exist.
    """
    _check_vlan_id(pvid)
    frame_code = ACCEPT_FRAME_TYPE.encode(accept_frame_type)
    wire = PortResolver(session).wire_id(port, ctx=ctx)
    payload = {
        "cmd": "pvid",
        "portid": str(wire),
        "pvid": str(pvid),
        "vlan_accept_frame_type": frame_code,
    }
    logger.debug("Setting PVID on port %s: %s", port, payload)
    session.submit_form(VLAN, payload, page(PAGE_VLAN_PORT_BASED), ctx=ctx)
    logger.info("Port %s PVID set to %d (%s)", port, pvid, accept_frame_type)
