"""Parser for HRUI system pages (info.cgi, ip.cgi)."""

from __future__ import annotations

from napalm_hrui.client.errors import HRUIFieldNotFoundError
from napalm_hrui.model.system import IPSettings, SystemInfo
from napalm_hrui.parser.html import extract_attr, extract_labeled_rows, parse_html

# Maps labels shown on info.cgi to SystemInfo attribute names.
_LABEL_MAP: dict[str, str] = {
    "Device Model": "device_model",
    "MAC Address": "mac_address",
    "IP Address": "ip_address",
    "Netmask": "netmask",
    "Gateway": "gateway",
    "Firmware Version": "firmware_version",
    "Firmware Date": "firmware_date",
    "Hardware Version": "hardware_version",
}


def parse_system_info(html: str | bytes) -> SystemInfo:
    """Parse the system information table on ``info.cgi``.

    The page is a single ``<th>label</th><td>value</td>`` table.  Every pair
    is kept in :attr:`SystemInfo.raw`; known labels also fill typed fields.

    Args:
        html: Raw HTML from ``info.cgi``.

    Returns:
        Populated :class:`~napalm_hrui.model.system.SystemInfo`.
    """
    doc = parse_html(html)
    raw = extract_labeled_rows(doc)
    info = SystemInfo(raw=raw)
    for label, value in raw.items():
        attr = _LABEL_MAP.get(label)
        if attr is not None:
            setattr(info, attr, value)
    return info


def parse_ip_settings(html: str | bytes) -> IPSettings:
    """Parse the management IP form on ``ip.cgi``.

    Raises:
        HRUIFieldNotFoundError: If an address input is missing.
    """
    doc = parse_html(html)
    dhcp = doc.select_one("select[name='dhcp_state'] option[selected]")
    if doc.select_one("select[name='dhcp_state']") is None:
        raise HRUIFieldNotFoundError("No dhcp_state selector on ip.cgi")
    return IPSettings(
        dhcp_enabled=dhcp is not None and str(dhcp.get("value", "0")).strip() == "1",
        ip_address=extract_attr(doc, "input[name='ip']"),
        netmask=extract_attr(doc, "input[name='netmask']"),
        gateway=extract_attr(doc, "input[name='gateway']"),
    )
