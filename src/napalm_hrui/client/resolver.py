"""Port identity resolution: display names to port IDs and back.

The switch identifies ports by a 0-based wire ID in form fields and by a
display name (``"Port 3"``, ``"Trunk2"``) everywhere else.  User-facing APIs
use 1-based IDs; the 0-based ID only appears inside form payloads.

Nothing is cached: creating or deleting a trunk group changes the port
table, so every resolution fetches ``port.cgi`` again.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from bs4 import BeautifulSoup

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.errors import HRUIFieldNotFoundError, HRUIPortNotFoundError
from napalm_hrui.client.session import HRUISession
from napalm_hrui.model.port import PortRef
from napalm_hrui.parser.html import extract_options
from napalm_hrui.vendor.hrui.endpoints import PAGE_TRUNK_GROUP, PORT, TRUNK, page

logger = logging.getLogger(__name__)

_PORT_SELECT: str = 'select[name="portid"] option'
_PHYSICAL_PORT_SELECT: str = "select#portsel option"


@dataclass(frozen=True)
class PortTable:
    """Snapshot of the switch's port selector: display name -> 0-based wire ID."""

    wire_ids: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "wire_ids", MappingProxyType(dict(self.wire_ids)))

    @property
    def names(self) -> list[str]:
        return list(self.wire_ids)

    def __len__(self) -> int:
        return len(self.wire_ids)

    def resolve_id(self, name: str) -> int:
        """Return the 1-based ID of port *name*.

        Raises:
            HRUIPortNotFoundError: If *name* is not in the table.
        """
        try:
            return self.wire_ids[name.strip()] + 1
        except KeyError:
            raise HRUIPortNotFoundError(name) from None

    def resolve_name(self, port_id: int) -> str:
        """Return the display name of 1-based *port_id*.

        Raises:
            HRUIPortNotFoundError: If no port has that ID.
        """
        for name, wire_id in self.wire_ids.items():
            if wire_id == port_id - 1:
                return name
        raise HRUIPortNotFoundError(port_id)

    def wire_id(self, ref: PortRef) -> int:
        """Return the 0-based wire ID for a 1-based ID or a display name."""
        if isinstance(ref, int):
            self.resolve_name(ref)
            return ref - 1
        return self.resolve_id(ref) - 1

    def name_of(self, ref: PortRef) -> str:
        """Return the display name for a 1-based ID or a display name."""
        if isinstance(ref, int):
            return self.resolve_name(ref)
        self.resolve_id(ref)
        return ref.strip()


def parse_port_table(doc: BeautifulSoup) -> PortTable:
    """Build a :class:`PortTable` from the ``portid`` selector on ``port.cgi``.

    Raises:
        HRUIFieldNotFoundError: If the page has no port selector.
    """
    wire_ids: dict[str, int] = {}
    for text, value in extract_options(doc, _PORT_SELECT):
        try:
            wire_ids[text] = int(value)
        except ValueError:
            logger.debug("Skipping port option %r with value %r", text, value)
    if not wire_ids:
        raise HRUIFieldNotFoundError("No port options found on port.cgi")
    return PortTable(wire_ids)


class PortResolver:
    """Resolves port references against the live port table.

    Args:
        session: Active session used for every lookup.
    """

    def __init__(self, session: HRUISession) -> None:
        self._session = session

    def snapshot(self, *, ctx: RequestContext | None = None) -> PortTable:
        """Fetch the port table once, for operations touching many ports."""
        return parse_port_table(self._session.get_document(PORT, ctx=ctx))

    def resolve_id(self, name: str, *, ctx: RequestContext | None = None) -> int:
        """Return the 1-based ID of port *name* (e.g. ``"Port 3"`` -> 3)."""
        return self.snapshot(ctx=ctx).resolve_id(name)

    def resolve_name(self, port_id: int, *, ctx: RequestContext | None = None) -> str:
        """Return the display name of 1-based *port_id*."""
        return self.snapshot(ctx=ctx).resolve_name(port_id)

    def wire_id(self, ref: PortRef, *, ctx: RequestContext | None = None) -> int:
        """Return the 0-based ID to submit for *ref*."""
        return self.snapshot(ctx=ctx).wire_id(ref)

    def total_ports(self, *, ctx: RequestContext | None = None) -> int:
        """Return the number of physical ports (from the trunk member selector)."""
        doc = self._session.get_document(TRUNK, page(PAGE_TRUNK_GROUP), ctx=ctx)
        count = len(doc.select(_PHYSICAL_PORT_SELECT))
        if count == 0:
            raise HRUIFieldNotFoundError("No physical port options found on trunk.cgi")
        return count
