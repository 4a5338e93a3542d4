"""Typed models for VLAN data."""

from __future__ import annotations

from dataclasses import dataclass, field

from napalm_hrui.model.port import PortRef


@dataclass
class VlanEntry:
    """A static 802.1Q VLAN as shown on ``vlan.cgi?page=static``.

    Port lists hold display names (``"Port 3"``, ``"Trunk2"``).

    Attributes:
        vlan_id: 802.1Q VLAN identifier (1-4094).
        name: Human-readable VLAN name.
        member_ports: All member ports.
        tagged_ports: Ports that carry this VLAN tagged.
        untagged_ports: Ports that carry this VLAN untagged.
    """

    vlan_id: int
    name: str
    member_ports: list[str] = field(default_factory=list)
    tagged_ports: list[str] = field(default_factory=list)
    untagged_ports: list[str] = field(default_factory=list)


@dataclass
class VlanConfig:
    """Desired VLAN state for :func:`~napalm_hrui.client.vlan_ops.set_vlan`.

    Every port not listed is submitted as "not a member".

    Attributes:
        vlan_id: 802.1Q VLAN identifier (1-4094).
        name: Human-readable VLAN name.
        untagged_ports: 1-based port IDs or display names carried untagged.
        tagged_ports: 1-based port IDs or display names carried tagged.
    """

    vlan_id: int
    name: str = ""
    untagged_ports: list[PortRef] = field(default_factory=list)
    tagged_ports: list[PortRef] = field(default_factory=list)


@dataclass
class PortVlanConfig:
    """Port-based VLAN settings (PVID) of one port.

    Attributes:
        port: Display name, e.g. ``"Port 1"``.
        pvid: VLAN assigned to untagged ingress frames.
        accept_frame_type: ``"All"``, ``"Tagged Only"`` or ``"Untagged Only"``.
    """

    port: str
    pvid: int
    accept_frame_type: str
