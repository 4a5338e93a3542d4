"""Typed models for system information and management IP settings."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SystemInfo:
    """General device information parsed from ``info.cgi``.

    Attributes:
        device_model: Device model string.
        mac_address: Base MAC address of the switch.
        ip_address: Management IP address.
        netmask: Management netmask.
        gateway: Default gateway.
        firmware_version: Firmware version string.
        firmware_date: Firmware build date.
        hardware_version: Hardware revision.
        raw: Every ``label -> value`` pair shown on the page.
    """

    device_model: str = ""
    mac_address: str = ""
    ip_address: str = ""
    netmask: str = ""
    gateway: str = ""
    firmware_version: str = ""
    firmware_date: str = ""
    hardware_version: str = ""
    raw: dict[str, str] = field(default_factory=dict)


@dataclass
class IPSettings:
    """Management IP configuration from ``ip.cgi``.

    Attributes:
        dhcp_enabled: ``True`` if the address is obtained by DHCP.
        ip_address: Static IP address.
        netmask: Subnet mask.
        gateway: Default gateway.
    """

    dhcp_enabled: bool
    ip_address: str = ""
    netmask: str = ""
    gateway: str = ""
