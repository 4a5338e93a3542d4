#!/usr/bin/env python3
"""Example: print each static VLAN's per-port membership and every port's PVID.

For every VLAN, each port in the switch's port table is shown as tagged,
untagged or not a member, the same three states ``set_vlan`` writes.

Usage::

    HRUI_HOST=192.168.2.1 python examples/get_vlans.py

Environment variables:
    HRUI_HOST        Switch IP or hostname (required).
    HRUI_USERNAME    Login username (default: admin).
    HRUI_PASSWORD    Login password (default: admin).
"""

from __future__ import annotations

import os
import sys

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.errors import HRUIError
from napalm_hrui.client.resolver import PortResolver
from napalm_hrui.client.session import HRUICredentials, HRUISession
from napalm_hrui.client.vlan_ops import list_port_vlan_configs, list_vlans
from napalm_hrui.model.vlan import VlanEntry


def membership(vlan: VlanEntry, port: str) -> str:
    if port in vlan.tagged_ports:
        return "tagged"
    if port in vlan.untagged_ports:
        return "untagged"
    return "-"


def main() -> None:
    host = os.environ.get("HRUI_HOST", "")
    if not host:
        print("ERROR: HRUI_HOST environment variable is required.", file=sys.stderr)
        sys.exit(1)

    session = HRUISession(
        base_url=host,
        credentials=HRUICredentials(
            os.environ.get("HRUI_USERNAME", "admin"),
            os.environ.get("HRUI_PASSWORD", "admin"),
        ),
    )
    ctx = RequestContext.with_timeout(30.0)
    try:
        ports = PortResolver(session).snapshot(ctx=ctx).names
        for vlan in list_vlans(session, ctx=ctx):
            print(f"VLAN {vlan.vlan_id} ({vlan.name})")
            for port in ports:
                print(f"  {port:<10} {membership(vlan, port)}")

        print("\nPort       PVID  Accepted frames")
        for config in list_port_vlan_configs(session, ctx=ctx):
            print(f"{config.port:<10} {config.pvid:<5} {config.accept_frame_type}")
    except HRUIError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        session.close()


if __name__ == "__main__":
    main()
