"""Typed model for trunk/LAG data."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TrunkConfig:
    """A trunk (link aggregation) group.

    Attributes:
        trunk_id: Trunk group number (``Trunk2`` -> 2).
        type: ``"static"`` or ``"LACP"``.
        ports: 1-based member port IDs.
    """

    trunk_id: int
    type: str = "static"
    ports: list[int] = field(default_factory=list)

    @property
    def name(self) -> str:
        return f"Trunk{self.trunk_id}"
