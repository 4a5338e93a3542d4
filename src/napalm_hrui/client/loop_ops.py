"""Loop protection and spanning tree operations for HRUI switches.

Payloads:

    LOOP FUNCTION: POST /loop.cgi
        cmd=loop&func_type=<code>&interval_time=<s>&recover_time=<min>

    STP BRIDGE: POST /loop.cgi?page=stp_global
        cmd=stp&version=<0|1>&priority=<n>&maxage=<s>&hello=<s>&delay=<s>

    STP PORT: POST /loop.cgi?page=stp_port
        cmd=stp_port&portid=<wire id>&cost=<n>&priority=<n>&p2p=<v>&edge=<v>

Range checking is left to the switch: out-of-range timers come back as an
inline alert and surface as :exc:`~napalm_hrui.client.errors.HRUIDeviceError`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.errors import HRUIPortNotFoundError
from napalm_hrui.client.resolver import PortResolver
from napalm_hrui.client.session import HRUISession
from napalm_hrui.model.loop import LoopPortStatus, LoopProtocol, STPGlobalSettings, STPPort
from napalm_hrui.model.port import PortRef
from napalm_hrui.parser.loop import (
    parse_loop_protocol,
    parse_stp_global,
    parse_stp_ports,
)
from napalm_hrui.vendor.hrui.endpoints import LOOP, PAGE_STP_GLOBAL, PAGE_STP_PORT, page
from napalm_hrui.vendor.hrui.mappings import LOOP_FUNCTION, STP_VERSION

logger = logging.getLogger(__name__)

# Firmware defaults submitted when no timer is given.
DEFAULT_INTERVAL_TIME: int = 1
DEFAULT_RECOVER_TIME: int = 1


# ---------------------------------------------------------------------------
# Loop protection
# ---------------------------------------------------------------------------


def read_loop_protocol(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> LoopProtocol:
    """Return the loop function, plus timers and port table for Loop Prevention."""
    return parse_loop_protocol(session.get(LOOP, ctx=ctx))


def configure_loop_protocol(
    session: HRUISession,
    function: str,
    interval_time: int | None = None,
    recover_time: int | None = None,
    port_statuses: Sequence[LoopPortStatus] | None = None,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Set the loop protection function.

    Timers are always submitted because the form always carries them; ``None``
    sends the firmware default.  The loop form has no per-port control, so
    *port_statuses* is accepted for symmetry with :func:`read_loop_protocol`
    and never submitted.

    Args:
        session: Active session.
        function: ``"Off"``, ``"Loop Detection"``, ``"Loop Prevention"`` or
            ``"Spanning Tree"``.
        interval_time: Detection interval in seconds.
        recover_time: Recovery time in minutes.
        port_statuses: Per-port flags as read back; not written.
        ctx: Optional deadline/cancellation context.

    Raises:
        HRUICodecError: If *function* is unknown.
    """
    func_code = LOOP_FUNCTION.encode(function)
    if port_statuses:
        logger.debug("Loop port status is read-only; not submitting %d entries", len(port_statuses))

    payload = {
        "cmd": "loop",
        "func_type": func_code,
        "interval_time": str(DEFAULT_INTERVAL_TIME if interval_time is None else interval_time),
        "recover_time": str(DEFAULT_RECOVER_TIME if recover_time is None else recover_time),
    }
    logger.debug("Setting loop protocol: %s", payload)
    session.submit_form(LOOP, payload, ctx=ctx)
    logger.info("Loop protocol set to %s", function)


# ---------------------------------------------------------------------------
# Spanning tree
# ---------------------------------------------------------------------------


def read_stp_settings(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> STPGlobalSettings:
    return parse_stp_global(session.get(LOOP, page(PAGE_STP_GLOBAL), ctx=ctx))


def set_stp_settings(
    session: HRUISession,
    settings: STPGlobalSettings,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Apply the bridge fields of *settings*; root bridge fields are ignored.

    Raises:
        HRUICodecError: If the version is not ``"STP"`` or ``"RSTP"``.
    """
    payload = {
        "cmd": "stp",
        "version": STP_VERSION.encode(settings.version),
        "priority": str(settings.priority),
        "maxage": str(settings.max_age),
        "hello": str(settings.hello_time),
        "delay": str(settings.forward_delay),
    }
    logger.debug("Setting STP bridge: %s", payload)
    session.submit_form(LOOP, payload, page(PAGE_STP_GLOBAL), ctx=ctx)
    logger.info("STP bridge settings applied (%s, priority %d)", settings.version, settings.priority)


def list_stp_ports(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> list[STPPort]:
    return parse_stp_ports(session.get(LOOP, page(PAGE_STP_PORT), ctx=ctx))


def read_stp_port(
    session: HRUISession,
    port: PortRef,
    *,
    ctx: RequestContext | None = None,
) -> STPPort:
    """Return the spanning tree row of one port.

    Raises:
        HRUIPortNotFoundError: If the port is unknown or has no row.
    """
    name = PortResolver(session).snapshot(ctx=ctx).name_of(port)
    for stp_port in list_stp_ports(session, ctx=ctx):
        if stp_port.port == name:
            return stp_port
    raise HRUIPortNotFoundError(name)


def set_stp_port(
    session: HRUISession,
    port: STPPort,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Apply path cost, priority, point-to-point and edge settings of one port.

    Raises:
        HRUIPortNotFoundError: If ``port.port`` does not exist.
    """
    wire = PortResolver(session).wire_id(port.port, ctx=ctx)
    payload = {
        "cmd": "stp_port",
        "portid": str(wire),
        "cost": str(port.path_cost),
        "priority": str(port.priority),
        "p2p": port.p2p,
        "edge": port.edge,
    }
    logger.debug("Setting STP on %s: %s", port.port, payload)
    session.submit_form(LOOP, payload, page(PAGE_STP_PORT), ctx=ctx)
    logger.info("STP settings applied on %s", port.port)
