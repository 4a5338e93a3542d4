"""System information and management IP operations for HRUI switches.

Payload:

    IP SETTINGS: POST /ip.cgi
        dhcp_state=<0|1>&ip=<addr>&netmask=<mask>&gateway=<addr>

Changing the management address moves the switch; subsequent requests on
the same session go to the old address and will fail.
"""

from __future__ import annotations

import ipaddress
import logging

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.session import HRUISession
from napalm_hrui.model.system import IPSettings, SystemInfo
from napalm_hrui.parser.system import parse_ip_settings, parse_system_info
from napalm_hrui.vendor.hrui.endpoints import IP_SETTINGS, SYSTEM_INFO
from napalm_hrui.vendor.hrui.mappings import encode_bool

logger = logging.getLogger(__name__)


def read_system_info(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> SystemInfo:
    """Return device model, firmware and addressing information."""
    return parse_system_info(session.get(SYSTEM_INFO, ctx=ctx))


def read_ip_settings(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> IPSettings:
    return parse_ip_settings(session.get(IP_SETTINGS, ctx=ctx))


def _validate_static(settings: IPSettings) -> None:
    try:
        ipaddress.IPv4Address(settings.ip_address)
        ipaddress.IPv4Network(f"0.0.0.0/{settings.netmask}")
        ipaddress.IPv4Address(settings.gateway)
    except ValueError as exc:
        raise ValueError(f"Invalid static IP settings: {exc}") from exc


def set_ip_settings(
    session: HRUISession,
    settings: IPSettings,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Apply management IP settings.

    With DHCP disabled, the address, netmask and gateway must be valid IPv4
    values; with DHCP enabled they are submitted as given.

    Raises:
        ValueError: If a static address field is not valid IPv4.
    """
    if not settings.dhcp_enabled:
        _validate_static(settings)
    payload = {
        "dhcp_state": encode_bool(settings.dhcp_enabled),
        "ip": settings.ip_address,
        "netmask": settings.netmask,
        "gateway": settings.gateway,
    }
    logger.debug("Setting IP settings: %s", payload)
    session.submit_form(IP_SETTINGS, payload, ctx=ctx)
    logger.info(
        "Management IP set to %s",
        "DHCP" if settings.dhcp_enabled else f"{settings.ip_address}/{settings.netmask}",
    )
