"""MAC address table operations for HRUI switches.

Payloads:

    ADD STATIC: POST /mac.cgi?page=static
        mac=<MAC>&vlan=<id>&src=<wire id>&cmd=macstatic

    DELETE STATIC: POST /mac.cgi?page=staticdel
        cmd=macstatictbl&del=<MAC>_<vlan>[&del=<MAC>_<vlan>...]

    LEARNING LIMIT: POST /mac_constraint.cgi
        cmd=mac_constraint&portid=<wire id>&state=<0|1>&limit=<n|Unlimited>
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.errors import HRUIDeviceError
from napalm_hrui.client.resolver import PortResolver
from napalm_hrui.client.session import HRUISession
from napalm_hrui.model.mac import MacEntry, MacLimit, StaticMacEntry
from napalm_hrui.model.port import PortRef
from napalm_hrui.parser.mac import parse_mac_limits, parse_mac_table, parse_static_macs
from napalm_hrui.vendor.hrui.endpoints import (
    MAC,
    MAC_CONSTRAINT,
    PAGE_MAC_FWD_TABLE,
    PAGE_MAC_STATIC,
    PAGE_MAC_STATIC_DEL,
    page,
)
from napalm_hrui.vendor.hrui.mappings import encode_bool

logger = logging.getLogger(__name__)

_MAC_RE: re.Pattern[str] = re.compile(r"^[0-9A-Fa-f]{2}([:-])(?:[0-9A-Fa-f]{2}\1){4}[0-9A-Fa-f]{2}$")
_UNLIMITED: str = "Unlimited"
_CONSTRAINT_ERROR_MARKER: str = "Error"


def _check_constraint_response(body: bytes) -> None:
    if _CONSTRAINT_ERROR_MARKER.encode() in body:
        raise HRUIDeviceError(
            message="Switch reported an error setting the MAC limit",
            endpoint=MAC_CONSTRAINT,
        )


def list_static_macs(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> list[StaticMacEntry]:
    return parse_static_macs(session.get(MAC, page(PAGE_MAC_STATIC), ctx=ctx))


def read_mac_table(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> list[MacEntry]:
    """Return the learned and static entries of the forwarding table."""
    return parse_mac_table(session.get(MAC, page(PAGE_MAC_FWD_TABLE), ctx=ctx))


def add_static_mac(
    session: HRUISession,
    mac: str,
    vlan_id: int,
    port: PortRef,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Add a static MAC entry.

    Raises:
        ValueError: If *mac* is not a colon- or dash-separated MAC address.
        HRUIPortNotFoundError: If the port does not exist.
    """
    if not _MAC_RE.match(mac.strip()):
        raise ValueError(f"Invalid MAC address: {mac!r}")
    wire = PortResolver(session).wire_id(port, ctx=ctx)
    payload = {"mac": mac.strip(), "vlan": str(vlan_id), "src": str(wire), "cmd": "macstatic"}
    logger.debug("Adding static MAC: %s", payload)
    session.submit_form(MAC, payload, page(PAGE_MAC_STATIC), ctx=ctx)
    logger.info("Static MAC %s added on VLAN %d, port %s", mac, vlan_id, port)


def delete_static_macs(
    session: HRUISession,
    entries: Sequence[StaticMacEntry],
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Delete static MAC entries in a single request.

    Raises:
        ValueError: If *entries* is empty.
    """
    if not entries:
        raise ValueError("entries must not be empty")
    form_fields: list[tuple[str, str]] = [("cmd", "macstatictbl")]
    form_fields.extend(("del", f"{entry.mac}_{entry.vlan_id}") for entry in entries)
    logger.debug("Deleting static MACs: %s", form_fields)
    session.submit_form(MAC, form_fields, page(PAGE_MAC_STATIC_DEL), ctx=ctx)
    logger.info("%d static MAC entries deleted", len(entries))


def list_mac_limits(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> list[MacLimit]:
    return parse_mac_limits(session.get(MAC_CONSTRAINT, ctx=ctx))


def set_mac_limit(
    session: HRUISession,
    port: PortRef,
    enabled: bool,
    limit: int | None = None,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Set the MAC learning limit of one port.

    Disabling always resets the limit to unlimited.

    Raises:
        HRUIPortNotFoundError: If the port does not exist.
        HRUIDeviceError: If the response reports an error.
    """
    wire = PortResolver(session).wire_id(port, ctx=ctx)
    payload = {
        "cmd": "mac_constraint",
        "portid": str(wire),
        "state": encode_bool(enabled),
        "limit": str(limit) if enabled and limit is not None else _UNLIMITED,
    }
    logger.debug("Setting MAC limit on port %s: %s", port, payload)
    session.submit_form(MAC_CONSTRAINT, payload, check=_check_constraint_response, ctx=ctx)
    logger.info("Port %s MAC limit set to %s", port, payload["limit"])
