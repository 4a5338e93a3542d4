#!/usr/bin/env python3
"""Example: print an HRUI switch's facts and a one-line-per-port link report.

Goes through the NAPALM driver, so the output matches what NAPALM-based
tooling sees.  Pass ``--json`` for the raw getter dictionaries.

Usage::

    HRUI_HOST=192.168.2.1 python examples/get_facts.py [--json]

Environment variables:
    HRUI_HOST        Switch IP or hostname (required).
    HRUI_USERNAME    Login username (default: admin).
    HRUI_PASSWORD    Login password (default: admin).
    HRUI_PORT        HTTP port (optional).
"""

from __future__ import annotations

import json
import os
import sys

from napalm_hrui.client.errors import HRUIError
from napalm_hrui.driver import HRUIDriver


def main() -> None:
    host = os.environ.get("HRUI_HOST", "")
    if not host:
        print("ERROR: HRUI_HOST environment variable is required.", file=sys.stderr)
        sys.exit(1)
    optional_args: dict[str, object] = {}
    if os.environ.get("HRUI_PORT"):
        optional_args["port"] = int(os.environ["HRUI_PORT"])

    driver = HRUIDriver(
        hostname=host,
        username=os.environ.get("HRUI_USERNAME", "admin"),
        password=os.environ.get("HRUI_PASSWORD", "admin"),
        optional_args=optional_args,
    )
    try:
        driver.open()
        facts = driver.get_facts()
        interfaces = driver.get_interfaces()
    except HRUIError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        driver.close()

    if "--json" in sys.argv[1:]:
        print(json.dumps({"facts": facts, "interfaces": interfaces}, indent=2))
        return

    print(f"{facts['model']}  firmware {facts['os_version']}  MAC {facts['serial_number']}")
    for name, iface in interfaces.items():
        if not iface["is_enabled"]:
            link = "disabled"
        elif iface["is_up"]:
            link = f"up {iface['speed']:g} Mb/s"
        else:
            link = "down"
        print(f"  {name:<10} {link:<16} mtu {iface['mtu']}")


if __name__ == "__main__":
    main()
