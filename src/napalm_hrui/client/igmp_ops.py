"""IGMP snooping operations for HRUI switches.

Payloads:

    GLOBAL: POST /igmp.cgi?page=enable_igmp
        enable_igmp=on      (enable)
        <empty body>        (disable)

    STATIC ROUTER PORTS: POST /igmp.cgi?page=igmp_static_router
        cmd=set[&lPort_<n>=on...]
        One ``lPort_<n>`` field (0-based *n*) per enabled port.  Ports left
        out are disabled, so the form always carries the whole table.
"""

from __future__ import annotations

import logging

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.errors import HRUIPortNotFoundError
from napalm_hrui.client.session import HRUISession
from napalm_hrui.model.igmp import IGMPConfig
from napalm_hrui.parser.igmp import parse_igmp_config
from napalm_hrui.vendor.hrui.endpoints import (
    IGMP,
    PAGE_IGMP_DUMP,
    PAGE_IGMP_ENABLE,
    PAGE_IGMP_STATIC_ROUTER,
    page,
)

logger = logging.getLogger(__name__)


def read_igmp_config(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> IGMPConfig:
    """Return global and per-port IGMP snooping state."""
    return parse_igmp_config(session.get(IGMP, page(PAGE_IGMP_DUMP), ctx=ctx))


def set_igmp_snooping(
    session: HRUISession,
    enabled: bool,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Enable or disable IGMP snooping globally."""
    body = "enable_igmp=on" if enabled else ""
    logger.debug("Setting IGMP snooping: %r", body)
    session.submit_form(IGMP, body, page(PAGE_IGMP_ENABLE), ctx=ctx)
    logger.info("IGMP snooping %s", "enabled" if enabled else "disabled")


def _check_port(config: IGMPConfig, port: int) -> None:
    if not 1 <= port <= len(config.ports):
        raise HRUIPortNotFoundError(port)


def read_port_igmp_snooping(
    session: HRUISession,
    port: int,
    *,
    ctx: RequestContext | None = None,
) -> bool:
    """Return the IGMP snooping flag of 1-based *port*.

    Raises:
        HRUIPortNotFoundError: If *port* is outside the IGMP port table.
    """
    config = read_igmp_config(session, ctx=ctx)
    _check_port(config, port)
    return config.port_enabled(port)


def build_igmp_port_payload(ports: list[bool]) -> list[tuple[str, str]]:
    """Build the static router form for the full per-port flag list."""
    fields: list[tuple[str, str]] = [("cmd", "set")]
    fields.extend((f"lPort_{index}", "on") for index, flag in enumerate(ports) if flag)
    return fields


def configure_port_igmp_snooping(
    session: HRUISession,
    port: int,
    enabled: bool,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Enable or disable IGMP snooping on one port.

    The form has no per-port update, so the current table is read, one flag
    is changed and the whole table is submitted.  The read-modify-write runs
    under :attr:`HRUISession.igmp_port_lock`; concurrent calls for different
    ports on the same session are serialized and none of them is lost.

    Args:
        session: Active session.
        port: 1-based port number.
        enabled: Desired flag.
        ctx: Optional deadline/cancellation context.

    Raises:
        HRUIPortNotFoundError: If *port* is outside the IGMP port table.
    """
    with session.igmp_port_lock:
        config = read_igmp_config(session, ctx=ctx)
        _check_port(config, port)
        ports = list(config.ports)
        ports[port - 1] = enabled
        payload = build_igmp_port_payload(ports)
        logger.debug("Setting IGMP static router ports: %s", payload)
        session.submit_form(IGMP, payload, page(PAGE_IGMP_STATIC_ROUTER), ctx=ctx)
    logger.info("IGMP snooping %s on port %d", "enabled" if enabled else "disabled", port)
