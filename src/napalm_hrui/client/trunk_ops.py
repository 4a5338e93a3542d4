"""Trunk (link aggregation) group operations for HRUI switches.

Payloads:

    CONFIGURE: POST /trunk.cgi?page=group
        id=<trunk id>&trunk_type=<0 static|1 LACP>&ports=<port - 1>[&ports=...]&cmd=trunk

    DELETE: POST /trunk.cgi?page=group_remove
        id=<trunk id>&cmd=group_remove

Creating or deleting a group changes the port table used by every other
domain (the trunk appears as a port of its own), which is why port
resolution is never cached.
"""

from __future__ import annotations

import logging

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.errors import HRUIPortNotFoundError
from napalm_hrui.client.resolver import PortResolver
from napalm_hrui.client.session import HRUISession
from napalm_hrui.model.trunk import TrunkConfig
from napalm_hrui.parser.trunk import parse_available_trunks, parse_trunks
from napalm_hrui.vendor.hrui.endpoints import PAGE_TRUNK_GROUP, PAGE_TRUNK_REMOVE, TRUNK, page
from napalm_hrui.vendor.hrui.mappings import TRUNK_TYPE

logger = logging.getLogger(__name__)


def list_available_trunks(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> list[int]:
    """Return the trunk group IDs the switch offers."""
    return parse_available_trunks(session.get(TRUNK, page(PAGE_TRUNK_GROUP), ctx=ctx))


def list_trunks(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> list[TrunkConfig]:
    """Return the configured trunk groups."""
    return parse_trunks(session.get(TRUNK, page(PAGE_TRUNK_GROUP), ctx=ctx))


def read_trunk(
    session: HRUISession,
    trunk_id: int,
    *,
    ctx: RequestContext | None = None,
) -> TrunkConfig:
    """Return one configured trunk group.

    Raises:
        HRUIPortNotFoundError: If the group is not configured.
    """
    for trunk in list_trunks(session, ctx=ctx):
        if trunk.trunk_id == trunk_id:
            return trunk
    raise HRUIPortNotFoundError(f"Trunk{trunk_id}")


def configure_trunk(
    session: HRUISession,
    trunk: TrunkConfig,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Create or replace a trunk group.

    Raises:
        ValueError: If the group has no member ports, or the ID or a member
            port is out of range.
        HRUICodecError: If the trunk type is unknown.
    """
    if not trunk.ports:
        raise ValueError(f"{trunk.name} must have at least one member port")
    type_code = TRUNK_TYPE.encode(trunk.type)
    if trunk.trunk_id not in list_available_trunks(session, ctx=ctx):
        raise ValueError(f"{trunk.name} is not offered by the switch")
    total = PortResolver(session).total_ports(ctx=ctx)
    bad = [p for p in trunk.ports if not 1 <= p <= total]
    if bad:
        raise ValueError(f"Member ports out of range 1-{total}: {bad}")

    form_fields: list[tuple[str, str]] = [
        ("id", str(trunk.trunk_id)),
        ("trunk_type", type_code),
    ]
    form_fields.extend(("ports", str(p - 1)) for p in sorted(set(trunk.ports)))
    form_fields.append(("cmd", "trunk"))
    logger.debug("Setting %s: %s", trunk.name, form_fields)
    session.submit_form(TRUNK, form_fields, page(PAGE_TRUNK_GROUP), ctx=ctx)
    logger.info("%s (%s) configured with ports %s", trunk.name, trunk.type, trunk.ports)


def delete_trunk(
    session: HRUISession,
    trunk_id: int,
    *,
    ctx: RequestContext | None = None,
) -> None:
    logger.debug("Deleting Trunk%d", trunk_id)
    session.submit_form(
        TRUNK,
        {"id": str(trunk_id), "cmd": "group_remove"},
        page(PAGE_TRUNK_REMOVE),
        ctx=ctx,
    )
    logger.info("Trunk%d deleted", trunk_id)
