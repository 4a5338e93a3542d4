"""Bandwidth control operations for HRUI switches.

Payload:

    POST /port.cgi?page=bwctrl
        cmd=bandwidthcontrol&portid=<wire id>&type=<0 ingress|1 egress>
        &state=<0|1>&rate=<kbps|Unlimited>&submit=+++Apply+++
"""

from __future__ import annotations

import logging

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.resolver import PortResolver
from napalm_hrui.client.session import HRUISession
from napalm_hrui.model.bwctrl import BandwidthControl
from napalm_hrui.model.port import PortRef
from napalm_hrui.parser.bwctrl import UNLIMITED, parse_bandwidth_control
from napalm_hrui.vendor.hrui.endpoints import PAGE_BW_CTRL, PAGE_BW_CTRL_SET, PORT, page
from napalm_hrui.vendor.hrui.mappings import BANDWIDTH_DIRECTION, encode_bool

logger = logging.getLogger(__name__)

# Value of the form's submit button; the CGI ignores requests without it.
_APPLY_BUTTON: str = "   Apply   "


def list_bandwidth_control(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> list[BandwidthControl]:
    """Return ingress/egress limits of every port."""
    return parse_bandwidth_control(session.get(PORT, page(PAGE_BW_CTRL), ctx=ctx))


def configure_bandwidth_control(
    session: HRUISession,
    port: PortRef,
    direction: str,
    enabled: bool,
    rate: int | None = None,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Limit (or stop limiting) traffic in one direction on one port.

    Args:
        session: Active session.
        port: Port ID or display name.
        direction: ``"ingress"`` or ``"egress"``.
        enabled: ``False`` removes the limit.
        rate: Limit in kbps; ``None`` with *enabled* means unlimited.
        ctx: Optional deadline/cancellation context.

    Raises:
        HRUICodecError: If *direction* is unknown.
        HRUIPortNotFoundError: If the port does not exist.
    """
    direction_code = BANDWIDTH_DIRECTION.encode(direction)
    wire = PortResolver(session).wire_id(port, ctx=ctx)
    payload = {
        "cmd": "bandwidthcontrol",
        "portid": str(wire),
        "type": direction_code,
        "state": encode_bool(enabled),
        "rate": str(rate) if enabled and rate is not None else UNLIMITED,
        "submit": _APPLY_BUTTON,
    }
    logger.debug("Setting bandwidth control on port %s: %s", port, payload)
    session.submit_form(PORT, payload, page(PAGE_BW_CTRL_SET), ctx=ctx)
    logger.info(
        "Port %s %s limit set to %s",
        port,
        BANDWIDTH_DIRECTION.decode(direction_code),
        payload["rate"],
    )
