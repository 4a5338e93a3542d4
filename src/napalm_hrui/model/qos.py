"""Typed models for QoS data."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class QoSPortQueue:
    """Priority queue assigned to one port.

    Attributes:
        port: Display name, e.g. ``"Port 1"``.
        queue: 1-based queue number, ``None`` when shown as ``"N/A"``.
    """

    port: str
    queue: int | None


@dataclass
class QoSQueueWeight:
    """Scheduler weight of one egress queue.

    Attributes:
        queue: 1-based queue number.
        weight: Weight 1-15, ``None`` for strict priority.
    """

    queue: int
    weight: int | None
