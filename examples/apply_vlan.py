#!/usr/bin/env python3
"""Example: create a VLAN and save the configuration on an HRUI switch.

Dry run by default: prints the current VLAN table and the VLAN that would
be written.

Usage::

    HRUI_HOST=192.168.2.1 python examples/apply_vlan.py
    APPLY=1 HRUI_HOST=192.168.2.1 python examples/apply_vlan.py

Environment variables:
    HRUI_HOST        Switch IP or hostname (required).
    HRUI_USERNAME    Login username (default: admin).
    HRUI_PASSWORD    Login password (default: admin).
    APPLY            Set to "1" to write and save (default: dry-run).
"""

from __future__ import annotations

import logging
import os
import sys

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.errors import HRUIError
from napalm_hrui.client.session import HRUICredentials, HRUISession
from napalm_hrui.client.vlan_ops import list_vlans, set_vlan
from napalm_hrui.model.vlan import VlanConfig

DESIRED = VlanConfig(vlan_id=222, name="test222", untagged_ports=[3], tagged_ports=["Port 1"])


def main() -> None:
    host = os.environ.get("HRUI_HOST", "")
    if not host:
        print("ERROR: HRUI_HOST environment variable is required.", file=sys.stderr)
        sys.exit(1)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    session = HRUISession(
        base_url=host,
        credentials=HRUICredentials(
            os.environ.get("HRUI_USERNAME", "admin"),
            os.environ.get("HRUI_PASSWORD", "admin"),
        ),
    )
    ctx = RequestContext.with_timeout(30.0)
    try:
        session.ensure_session(ctx=ctx)
        for vlan in list_vlans(session, ctx=ctx):
            print(f"  VLAN {vlan.vlan_id:<5} {vlan.name:<20} {','.join(vlan.member_ports)}")
        print(f"Desired: {DESIRED}")
        if os.environ.get("APPLY", "0") != "1":
            print("Dry-run only -- set APPLY=1 to apply changes.")
            return
        set_vlan(session, DESIRED, ctx=ctx)
        session.commit(ctx=ctx)
        print("Done.")
    except HRUIError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        session.close()


if __name__ == "__main__":
    main()
