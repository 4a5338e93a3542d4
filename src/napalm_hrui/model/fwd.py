"""Typed models for storm control and jumbo frame data."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class StormControlEntry:
    """Storm control rates of one port, in kbps.

    ``None`` means the traffic class is not limited ("Off"); ``0`` is a
    real rate.

    Attributes:
        port: Display name, e.g. ``"Port 1"``.
        broadcast_kbps: Broadcast rate limit.
        known_multicast_kbps: Known multicast rate limit.
        unknown_unicast_kbps: Unknown unicast rate limit.
        unknown_multicast_kbps: Unknown multicast rate limit.
    """

    port: str
    broadcast_kbps: int | None = None
    known_multicast_kbps: int | None = None
    unknown_unicast_kbps: int | None = None
    unknown_multicast_kbps: int | None = None

    def rate_for(self, storm_type: str) -> int | None:
        """Return the rate for a storm type label (case-insensitive)."""
        key = storm_type.strip().lower()
        return {
            "broadcast": self.broadcast_kbps,
            "known multicast": self.known_multicast_kbps,
            "unknown unicast": self.unknown_unicast_kbps,
            "unknown multicast": self.unknown_multicast_kbps,
        }[key]


@dataclass
class StormControlPort:
    """Storm control state of one port for one traffic class.

    Attributes:
        port: Display name.
        storm_type: Traffic class label, e.g. ``"Broadcast"``.
        enabled: ``False`` when the rate is off or equals the port maximum.
        rate_kbps: Configured rate, ``None`` when disabled.
        max_rate_kbps: Maximum rate the port accepts.
    """

    port: str
    storm_type: str
    enabled: bool
    rate_kbps: int | None
    max_rate_kbps: int
