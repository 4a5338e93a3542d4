"""Typed model for Energy Efficient Ethernet settings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EEESettings:
    enabled: bool
