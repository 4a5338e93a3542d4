"""Typed model for bandwidth control data."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BandwidthControl:
    """Ingress/egress rate limits of one port, in kbps.

    Attributes:
        port: Display name, e.g. ``"Port 1"``.
        ingress_kbps: Ingress limit, ``None`` when unlimited.
        egress_kbps: Egress limit, ``None`` when unlimited.
    """

    port: str
    ingress_kbps: int | None = None
    egress_kbps: int | None = None
