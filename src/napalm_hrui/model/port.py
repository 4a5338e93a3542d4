"""Typed models for port/interface data."""

from __future__ import annotations

from dataclasses import dataclass

# A 1-based port ID or a display name such as "Port 3" or "Trunk2".
PortRef = int | str


@dataclass
class Port:
    """Configuration and status of one port row on ``port.cgi``.

    Attributes:
        name: Display name (e.g. ``"Port 1"`` or ``"Trunk1"``).
        enabled: ``True`` if the port is administratively enabled.
        speed_duplex_config: Configured speed/duplex label (e.g. ``"Auto"``).
        speed_duplex_actual: Negotiated speed/duplex as displayed
            (e.g. ``"1000Full"`` or ``"Link Down"``).
        flow_control_config: Configured flow control label (``"On"``/``"Off"``).
        flow_control_actual: Operational flow control as displayed.
    """

    name: str
    enabled: bool
    speed_duplex_config: str
    speed_duplex_actual: str = ""
    flow_control_config: str = "Off"
    flow_control_actual: str = ""

    @property
    def link_up(self) -> bool:
        actual = self.speed_duplex_actual.strip().lower()
        return bool(actual) and "down" not in actual and actual != "-"


@dataclass
class PortStatistics:
    """Packet counters of one port from ``port.cgi?page=stats``.

    Attributes:
        port: Display name, e.g. ``"Port 1"`` or ``"Trunk1"``.
        enabled: Administrative state.
        link_up: ``True`` if the link is up.
        tx_good: Good packets transmitted.
        tx_bad: Bad packets transmitted.
        rx_good: Good packets received.
        rx_bad: Bad packets received.
    """

    port: str
    enabled: bool
    link_up: bool
    tx_good: int = 0
    tx_bad: int = 0
    rx_good: int = 0
    rx_bad: int = 0
