"""Typed models for MAC address table data."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MacEntry:
    """One learned or static entry of the MAC forwarding table.

    Attributes:
        mac: MAC address as displayed.
        vlan_id: VLAN the address was learned on.
        type: ``"dynamic"`` or ``"static"`` (lower-cased).
        port: Display name (``"Port 3"``, ``"Trunk1"``).
    """

    mac: str
    vlan_id: int
    type: str
    port: str


@dataclass
class StaticMacEntry:
    """A configured static MAC entry.

    Attributes:
        mac: MAC address as displayed.
        vlan_id: VLAN ID.
        port: Display name (``"Port 6"``, ``"Trunk2"``).
    """

    mac: str
    vlan_id: int
    port: str


@dataclass
class MacLimit:
    """Learning limit of one port.

    Attributes:
        port: Display name, e.g. ``"Port 1"``.
        enabled: ``True`` if a numeric limit is enforced.
        limit: Maximum learned addresses, ``None`` when unlimited.
    """

    port: str
    enabled: bool
    limit: int | None
