"""Energy Efficient Ethernet operations for HRUI switches.

Payload:

    POST /eee.cgi
        func_type=<0|1>&cmd=loop
        (``cmd=loop`` is what the firmware's own EEE form submits.)
"""

from __future__ import annotations

import logging

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.session import HRUISession
from napalm_hrui.model.eee import EEESettings
from napalm_hrui.parser.eee import parse_eee
from napalm_hrui.vendor.hrui.endpoints import EEE
from napalm_hrui.vendor.hrui.mappings import EEE_STATE

logger = logging.getLogger(__name__)


def read_eee(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> EEESettings:
    return parse_eee(session.get(EEE, ctx=ctx))


def set_eee(
    session: HRUISession,
    enabled: bool,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Enable or disable Energy Efficient Ethernet on all ports."""
    payload = {"func_type": EEE_STATE.encode("Enable" if enabled else "Disable"), "cmd": "loop"}
    logger.debug("Setting EEE: %s", payload)
    session.submit_form(EEE, payload, ctx=ctx)
    logger.info("EEE %s", "enabled" if enabled else "disabled")
