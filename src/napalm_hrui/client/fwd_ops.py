"""Storm control and jumbo frame operations for HRUI switches.

Payloads:

    STORM CONTROL: POST /fwd.cgi?page=storm_ctrl
        storm_filter=<type code>&action=<0|1>&cmd=storm
        &portid=Port+1[&portid=Port+2...][&rate=<kbps>]
        Ports are submitted by display name, not by wire ID.  ``rate`` is
        only sent when enabling.

    JUMBO FRAME: POST /fwd.cgi?page=jumboframe
        cmd=jumboframe&jumboframe=<size code>

Neither form reports errors through the status code: storm control answers
an invalid rate with an inline alert, and both answer with a page whose
title is checked to confirm the request landed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.errors import HRUIDeviceError
from napalm_hrui.client.resolver import PortResolver
from napalm_hrui.client.session import HRUISession
from napalm_hrui.model.fwd import StormControlEntry, StormControlPort
from napalm_hrui.model.port import PortRef
from napalm_hrui.parser.fwd import parse_jumbo_frame, parse_max_rate, parse_storm_control
from napalm_hrui.parser.html import cell_text, parse_html
from napalm_hrui.vendor.hrui.endpoints import FWD, PAGE_JUMBO_FRAME, PAGE_STORM_CTRL, page
from napalm_hrui.vendor.hrui.mappings import FRAME_SIZE, STORM_TYPE, encode_bool

logger = logging.getLogger(__name__)

STORM_CONTROL_TITLE: str = "Storm Control"
JUMBO_FRAME_TITLE: str = "Jumbo Frame Setting"


def _check_title(body: bytes, expected: str, endpoint: str) -> None:
    doc = parse_html(body)
    title = doc.find("title")
    if title is None or expected not in cell_text(title):
        raise HRUIDeviceError(
            message=f"Unexpected response page (expected {expected!r})",
            endpoint=endpoint,
        )


def is_storm_control_disabled(rate_kbps: int | None, max_rate_kbps: int) -> bool:
    """Return True if *rate_kbps* means storm control is off.

    A disabled class is shown as ``"Off"`` (parsed as ``None``).  A rate of
    zero or a rate equal to the port maximum is treated as disabled as well,
    which cannot tell an explicit maximal rate apart from "off".
    """
    return rate_kbps is None or rate_kbps == 0 or rate_kbps == max_rate_kbps


def validate_storm_control_rate(rate_kbps: int, max_rate_kbps: int) -> None:
    """Reject rates that the switch would store as "disabled".

    Raises:
        ValueError: If *rate_kbps* is 0 or equals *max_rate_kbps*.
    """
    if rate_kbps == 0 or rate_kbps == max_rate_kbps:
        raise ValueError(
            f"Rate {rate_kbps} kbps is equivalent to disabled "
            f"(0 or the port maximum {max_rate_kbps} kbps)"
        )


# ---------------------------------------------------------------------------
# Storm control
# ---------------------------------------------------------------------------


def read_storm_control(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> list[StormControlEntry]:
    """Return the storm control rates of every port."""
    return parse_storm_control(session.get(FWD, page(PAGE_STORM_CTRL), ctx=ctx))


def read_port_max_rate(
    session: HRUISession,
    port: PortRef,
    *,
    ctx: RequestContext | None = None,
) -> int:
    """Return the maximum storm control rate (kbps) accepted by *port*.

    Raises:
        HRUIPortNotFoundError: If the port does not exist.
        HRUIFieldNotFoundError: If the page shows no rate range for it.
    """
    name = PortResolver(session).snapshot(ctx=ctx).name_of(port)
    return parse_max_rate(session.get(FWD, page(PAGE_STORM_CTRL), ctx=ctx), name)


def read_storm_control_port(
    session: HRUISession,
    port: PortRef,
    storm_type: str,
    *,
    ctx: RequestContext | None = None,
) -> StormControlPort:
    """Return the storm control state of one port for one traffic class.

    A port without a row in the status table is reported as disabled.

    Raises:
        HRUICodecError: If *storm_type* is unknown.
        HRUIPortNotFoundError: If the port does not exist.
    """
    label = STORM_TYPE.canonical(storm_type)
    name = PortResolver(session).snapshot(ctx=ctx).name_of(port)
    html = session.get(FWD, page(PAGE_STORM_CTRL), ctx=ctx)
    max_rate = parse_max_rate(html, name)

    rate: int | None = None
    for entry in parse_storm_control(html):
        if entry.port == name:
            rate = entry.rate_for(label)
            break

    if is_storm_control_disabled(rate, max_rate):
        return StormControlPort(name, label, enabled=False, rate_kbps=None, max_rate_kbps=max_rate)
    return StormControlPort(name, label, enabled=True, rate_kbps=rate, max_rate_kbps=max_rate)


def set_storm_control(
    session: HRUISession,
    storm_type: str,
    ports: Sequence[PortRef],
    enabled: bool,
    rate: int | None = None,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Enable or disable storm control for one traffic class on *ports*.

    Args:
        session: Active session.
        storm_type: ``"Broadcast"``, ``"Known Multicast"``,
            ``"Unknown Unicast"`` or ``"Unknown Multicast"`` (any case).
        ports: Ports to update in one request.
        enabled: ``True`` to apply *rate*, ``False`` to switch the class off.
        rate: Rate in kbps, required when *enabled*.
        ctx: Optional deadline/cancellation context.

    Raises:
        ValueError: If *ports* is empty, or *enabled* without a *rate*, or
            the rate is 0 or a port maximum.
        HRUICodecError: If *storm_type* is unknown.
        HRUIPortNotFoundError: If a port does not exist.
        HRUIDeviceError: If the switch rejects the rate.
    """
    if not ports:
        raise ValueError("ports must not be empty")
    if enabled and rate is None:
        raise ValueError("rate is required when enabling storm control")
    type_code = STORM_TYPE.encode(storm_type)
    table = PortResolver(session).snapshot(ctx=ctx)
    names = [table.name_of(ref) for ref in ports]
    if enabled and rate is not None:
        html = session.get(FWD, page(PAGE_STORM_CTRL), ctx=ctx)
        for name in names:
            validate_storm_control_rate(rate, parse_max_rate(html, name))

    form_fields: list[tuple[str, str]] = [
        ("storm_filter", type_code),
        ("action", encode_bool(enabled)),
        ("cmd", "storm"),
    ]
    form_fields.extend(("portid", name) for name in names)
    if enabled:
        form_fields.append(("rate", str(rate)))

    logger.debug("Setting storm control: %s", form_fields)
    session.submit_form(
        FWD,
        form_fields,
        page(PAGE_STORM_CTRL),
        check=lambda body: _check_title(body, STORM_CONTROL_TITLE, FWD),
        ctx=ctx,
    )
    logger.info(
        "Storm control %s %s on %s",
        STORM_TYPE.decode(type_code),
        f"set to {rate} kbps" if enabled else "disabled",
        ", ".join(names),
    )


# ---------------------------------------------------------------------------
# Jumbo frames
# ---------------------------------------------------------------------------


def read_jumbo_frame(
    session: HRUISession,
    *,
    ctx: RequestContext | None = None,
) -> int:
    """Return the maximum frame size in bytes."""
    return parse_jumbo_frame(session.get(FWD, page(PAGE_JUMBO_FRAME), ctx=ctx))


def set_jumbo_frame(
    session: HRUISession,
    frame_size: int,
    *,
    ctx: RequestContext | None = None,
) -> None:
    """Set the maximum frame size (1522, 1536, 1552, 9216 or 16383 bytes).

    Raises:
        HRUICodecError: If *frame_size* is not supported.
        HRUIDeviceError: If the switch answers with an unexpected page.
    """
    payload = {"cmd": "jumboframe", "jumboframe": FRAME_SIZE.encode(str(frame_size))}
    logger.debug("Setting jumbo frame: %s", payload)
    session.submit_form(
        FWD,
        payload,
        page(PAGE_JUMBO_FRAME),
        check=lambda body: _check_title(body, JUMBO_FRAME_TITLE, FWD),
        ctx=ctx,
    )
    logger.info("Maximum frame size set to %d", frame_size)
