"""Typed models for loop protection and spanning tree data."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LoopPortStatus:
    """Loop prevention state of one port.

    Attributes:
        port: Display name, e.g. ``"Port 1"``.
        enabled: ``True`` if loop prevention is enabled on the port.
        state: State label as displayed (``"Enable"``/``"Disable"``).
        status: Operational status as displayed (e.g. ``"Forwarding"``).
    """

    port: str
    enabled: bool
    state: str = ""
    status: str = ""


@dataclass
class LoopProtocol:
    """Global loop protection settings from ``loop.cgi``.

    Timers and port statuses only apply to ``"Loop Prevention"``; for any
    other function they are ``None``, not zero.

    Attributes:
        function: ``"Off"``, ``"Loop Detection"``, ``"Loop Prevention"`` or
            ``"Spanning Tree"``.
        interval_time: Detection interval in seconds.
        recover_time: Recovery time in minutes.
        port_statuses: Per-port loop prevention table.
    """

    function: str
    interval_time: int | None = None
    recover_time: int | None = None
    port_statuses: list[LoopPortStatus] | None = None


@dataclass
class STPGlobalSettings:
    """Spanning tree bridge settings from ``loop.cgi?page=stp_global``.

    Attributes:
        status: Overall STP status as displayed.
        version: ``"STP"`` or ``"RSTP"``.
        priority: Bridge priority (multiple of 4096).
        max_age: Maximum age in seconds.
        hello_time: Hello time in seconds.
        forward_delay: Forward delay in seconds.
        root_priority: Priority of the root bridge.
        root_mac: MAC address of the root bridge.
        root_path_cost: Path cost to the root bridge.
        root_port: Root port as displayed.
        root_max_age: Root bridge maximum age in seconds.
        root_hello_time: Root bridge hello time in seconds.
        root_forward_delay: Root bridge forward delay in seconds.
    """

    version: str
    priority: int
    max_age: int
    hello_time: int
    forward_delay: int
    status: str = ""
    root_priority: int | None = None
    root_mac: str = ""
    root_path_cost: int | None = None
    root_port: str = ""
    root_max_age: int | None = None
    root_hello_time: int | None = None
    root_forward_delay: int | None = None


@dataclass
class STPPort:
    """Spanning tree settings of one port from ``loop.cgi?page=stp_port``.

    Attributes:
        port: Display name, e.g. ``"Port 1"``.
        state: Port state (e.g. ``"Forwarding"``).
        role: Port role (e.g. ``"Designated"``).
        path_cost: Configured path cost (0 means automatic).
        path_cost_actual: Operational path cost, ``None`` when shown as ``"-"``.
        priority: Port priority.
        p2p: Configured point-to-point setting (``"Auto"``, ``"True"``, ``"False"``).
        p2p_actual: Operational point-to-point status.
        edge: Configured edge port setting.
        edge_actual: Operational edge port status.
    """

    port: str
    state: str = ""
    role: str = ""
    path_cost: int = 0
    path_cost_actual: int | None = None
    priority: int = 128
    p2p: str = "Auto"
    p2p_actual: str = ""
    edge: str = "False"
    edge_actual: str = ""
