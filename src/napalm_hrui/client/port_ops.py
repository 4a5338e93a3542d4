"""Port settings and statistics operations for HRUI switches.

Payload:

    CONFIGURE: POST /port.cgi
        cmd=port&portid=<wire id>&state=<0|1>&speed_duplex=<code>&flow=<0|1>

Fields:
    portid:       0-based wire ID from the port selector (trunks included)
    state:        "1" = Enable, "0" = Disable
    speed_duplex: code from the ``speed_duplex`` codec
    flow:         "1" = On, "0" = Off
"""

from __future__ import annotations

import logging

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.errors import HRUIPortNotFoundError
from napalm_hrui.client.resolver import PortTable, parse_port_table
from napalm_hrui.client.session import HRUISession
from napalm_hrui.model.port import Port, PortStatistics
from napalm_hrui.parser.html import parse_html
from napalm_hrui.parser.port import parse_port_statistics, parse_ports
from napalm_hrui.vendor.hrui.endpoints import PAGE_PORT_STATS, PORT, page
from napalm_hrui.vendor.hrui.mappings import FLOW_CONTROL, PORT_STATE, SPEED_DUPLEX

logger = logging.getLogger(__name__)


def list_ports(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> list[Port]:
    """Return settings and link status of every port and trunk."""
    return parse_ports(session.get(PORT, ctx=ctx))


def read_port(
    session: HRUISession,
    name: str,
    *,
    ctx: RequestContext | None = None,
) -> Port:
    """Return one port by display name (e.g. ``"Port 3"``).

    Raises:
        HRUIPortNotFoundError: If no row has that name.
    """
    for port in list_ports(session, ctx=ctx):
        if port.name == name.strip():
            return port
    raise HRUIPortNotFoundError(name)


def _build_port_payload(port: Port, ports: PortTable) -> dict[str, str]:
    """Build the ``port.cgi`` form for *port*.

    Raises:
        HRUIPortNotFoundError: If the port name is unknown.
        HRUICodecError: If the speed/duplex or flow control label is unknown.
    """
    speed_code = SPEED_DUPLEX.encode(port.speed_duplex_config)
    flow_code = FLOW_CONTROL.encode(port.flow_control_config)
    state_code = PORT_STATE.encode("Enable" if port.enabled else "Disable")
    return {
        "cmd": "port",
        "portid": str(ports.wire_id(port.name)),
        "state": state_code,
        "speed_duplex": speed_code,
        "flow": flow_code,
    }


def configure_port(
    session: HRUISession,
    port: Port,
    *,
    ctx: RequestContext | None = None,
) -> Port:
    """Apply the configured fields of *port* and return the port as re-read.

    Only ``enabled``, ``speed_duplex_config`` and ``flow_control_config`` are
    submitted; the ``*_actual`` fields are status and ignored.

    Args:
        session: Active session.
        port: Desired settings; ``port.name`` selects the port.
        ctx: Optional deadline/cancellation context.

    Returns:
        The port as reported by the switch after the change.

    Raises:
        HRUIPortNotFoundError: If the port does not exist.
        HRUICodecError: If a label is unknown.
    """
    doc = parse_html(session.get(PORT, ctx=ctx))
    payload = _build_port_payload(port, parse_port_table(doc))
    logger.debug("Setting %s: %s", port.name, payload)
    session.submit_form(PORT, payload, ctx=ctx)
    logger.info("%s configuration applied", port.name)
    return read_port(session, port.name, ctx=ctx)


def read_port_statistics(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> list[PortStatistics]:
    """Return the packet counters of every port."""
    return parse_port_statistics(session.get(PORT, page(PAGE_PORT_STATS), ctx=ctx))
