"""Typed model for IGMP snooping data."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class IGMPConfig:
    """IGMP snooping settings from ``igmp.cgi?page=dump``.

    Attributes:
        enabled: Global IGMP snooping state.
        ports: Static router-port flag per port, index 0 is Port 1.
    """

    enabled: bool
    ports: list[bool] = field(default_factory=list)

    def port_enabled(self, port: int) -> bool:
        """Return the flag of 1-based *port*."""
        return self.ports[port - 1]
