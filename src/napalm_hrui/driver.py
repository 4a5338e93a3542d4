"""HRUI NAPALM driver: top-level NetworkDriver implementation."""

from __future__ import annotations

import logging
import re
from typing import Any

from napalm.base.base import NetworkDriver

from napalm_hrui.client.errors import HRUIError
from napalm_hrui.client.fwd_ops import read_jumbo_frame
from napalm_hrui.client.mac_ops import read_mac_table
from napalm_hrui.client.port_ops import list_ports, read_port_statistics
from napalm_hrui.client.session import HRUICredentials, HRUISession, SessionState
from napalm_hrui.client.system_ops import read_system_info
from napalm_hrui.client.vlan_ops import list_vlans

logger = logging.getLogger(__name__)

_VENDOR: str = "HRUI"

# Negotiated speed as displayed on port.cgi, e.g. "1000Full", "10GFull".
_SPEED_RE: re.Pattern[str] = re.compile(r"^(\d+)\s*([MG])?", re.IGNORECASE)


def _speed_mbps(actual: str) -> float:
    match = _SPEED_RE.match(actual.strip())
    if match is None:
        return 0.0
    value = float(match.group(1))
    if (match.group(2) or "").upper() == "G":
        value *= 1000
    return value


class HRUIDriver(NetworkDriver):  # type: ignore[misc]
    """NAPALM driver for HRUI-firmware web-managed Ethernet switches.

    Talks to the switch through its CGI web interface; HTML responses are
    parsed with BeautifulSoup.  The typed per-domain operations in
    :mod:`napalm_hrui.client` cover everything the NAPALM getters do not.

    Args:
        hostname: IP address or hostname of the switch, optionally including
            the URL scheme (e.g. ``http://192.168.2.1``).
        username: Login username.
        password: Login password.
        timeout: Default request timeout in seconds.
        optional_args: Optional driver configuration overrides.
            Supported keys:

            - ``port`` (int): HTTP port (default 80; 443 when verify_tls=True).
            - ``verify_tls`` (bool): Verify TLS certificates (default ``False``).
            - ``autosave`` (bool): Save to flash after every change
              (default ``False``).
            - ``commit_retries`` (int): Save attempts (default 3).
            - ``commit_retry_delay_s`` (float): Pause between save attempts
              (default 1.0).
    """

    def __init__(
        self,
        hostname: str,
        username: str,
        password: str,
        timeout: int = 60,
        optional_args: dict[str, Any] | None = None,
    ) -> None:
        self.hostname = hostname
        self.username = username
        self.password = password
        self.timeout = timeout
        self.optional_args: dict[str, Any] = optional_args or {}

        self._verify_tls: bool = bool(self.optional_args.get("verify_tls", False))
        self._port: int = int(
            self.optional_args.get(
                "port",
                443 if self._verify_tls else 80,
            )
        )
        self._autosave: bool = bool(self.optional_args.get("autosave", False))
        self._commit_retries: int = int(self.optional_args.get("commit_retries", 3))
        self._commit_retry_delay_s: float = float(
            self.optional_args.get("commit_retry_delay_s", 1.0)
        )
        self._session: HRUISession | None = None

        logger.debug(
            "HRUIDriver initialised: host=%s port=%d user=%s autosave=%s",
            self.hostname,
            self._port,
            self.username,
            self._autosave,
        )

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Create the session and check the credentials against the switch.

        Raises:
            HRUIAuthError: If the switch redirects to its login page.
            HRUITransportError: If the switch cannot be reached.
        """
        base_url = self._build_base_url()
        logger.info("Opening connection to %s", base_url)
        creds = HRUICredentials(username=self.username, password=self.password)
        self._session = HRUISession(
            base_url=base_url,
            credentials=creds,
            autosave=self._autosave,
            timeout_s=float(self.timeout),
            verify_tls=self._verify_tls,
            commit_retries=self._commit_retries,
            commit_retry_delay_s=self._commit_retry_delay_s,
        )
        self._session.ensure_session()

    def close(self) -> None:
        """Close the HTTP session (best-effort; never raises)."""
        if self._session is not None:
            logger.info("Closing connection to %s", self.hostname)
            try:
                self._session.close()
            except Exception:  # noqa: BLE001
                logger.debug("Session close failed (ignored)", exc_info=True)
            finally:
                self._session = None

    def is_alive(self) -> dict[str, bool]:
        """Return liveness status of the HTTP session."""
        return {
            "is_alive": self._session is not None
            and self._session.state is SessionState.AUTHENTICATED
        }

    @property
    def session(self) -> HRUISession:
        """The open session, for the typed operations in :mod:`napalm_hrui.client`."""
        return self._require_session()

    # ------------------------------------------------------------------
    # NAPALM getters
    # ------------------------------------------------------------------

    def get_facts(self) -> dict[str, Any]:
        """Return general device facts conforming to the NAPALM schema.

        The switch reports no uptime or serial number; ``uptime`` is ``-1.0``
        and the base MAC address stands in for the serial number.
        """
        session = self._require_session()
        info = read_system_info(session)
        ports = list_ports(session)
        hostname = info.ip_address or self.hostname
        return {
            "hostname": hostname,
            "fqdn": hostname,
            "vendor": _VENDOR,
            "model": info.device_model or "unknown",
            "serial_number": info.mac_address,
            "os_version": info.firmware_version,
            "uptime": -1.0,
            "interface_list": [port.name for port in ports],
        }

    def get_interfaces(self) -> dict[str, Any]:
        """Return interface information conforming to the NAPALM schema.

        Returns:
            Dict keyed by interface name (e.g. ``"Port 1"``, ``"Trunk1"``).
            ``mtu`` is the switch-wide maximum frame size.
        """
        session = self._require_session()
        ports = list_ports(session)
        mtu = read_jumbo_frame(session)
        result: dict[str, Any] = {}
        for port in ports:
            result[port.name] = {
                "is_up": port.link_up,
                "is_enabled": port.enabled,
                "description": "",
                "last_flapped": -1.0,
                "speed": _speed_mbps(port.speed_duplex_actual) if port.link_up else 0.0,
                "mtu": mtu,
                "mac_address": "",
            }
        return result

    def get_interfaces_counters(self) -> dict[str, Any]:
        """Return packet counters conforming to the NAPALM schema.

        The switch only counts good and bad packets per direction; good
        packets are reported as unicast, bad packets as errors, and counters
        it does not keep are ``-1``.
        """
        session = self._require_session()
        result: dict[str, Any] = {}
        for stats in read_port_statistics(session):
            result[stats.port] = {
                "tx_errors": stats.tx_bad,
                "rx_errors": stats.rx_bad,
                "tx_discards": -1,
                "rx_discards": -1,
                "tx_octets": -1,
                "rx_octets": -1,
                "tx_unicast_packets": stats.tx_good,
                "rx_unicast_packets": stats.rx_good,
                "tx_multicast_packets": -1,
                "rx_multicast_packets": -1,
                "tx_broadcast_packets": -1,
                "rx_broadcast_packets": -1,
            }
        return result

    def get_vlans(self) -> dict[int, Any]:
        """Return VLAN information conforming to the NAPALM schema.

        Returns:
            Dict keyed by VLAN ID, each value being::

                {"name": str, "interfaces": [str, ...]}

            ``interfaces`` lists every member port, tagged or untagged.
        """
        session = self._require_session()
        return {
            vlan.vlan_id: {"name": vlan.name, "interfaces": list(vlan.member_ports)}
            for vlan in sorted(list_vlans(session), key=lambda v: v.vlan_id)
        }

    def get_mac_address_table(self) -> list[dict[str, Any]]:
        """Return the MAC forwarding table conforming to the NAPALM schema."""
        session = self._require_session()
        return [
            {
                "mac": entry.mac,
                "interface": entry.port,
                "vlan": entry.vlan_id,
                "static": entry.type == "static",
                "active": True,
                "moves": -1,
                "last_move": -1.0,
            }
            for entry in read_mac_table(session)
        ]

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def commit_config(self, message: str = "", revert_in: int | None = None) -> None:
        """Save the running configuration to flash.

        Changes made through :mod:`napalm_hrui.client` take effect immediately;
        this only persists them across a reboot.

        Raises:
            NotImplementedError: If *message* or *revert_in* is given.
            HRUICommitError: If every save attempt fails.
        """
        if message or revert_in is not None:
            raise NotImplementedError("Commit messages and timed rollback are not supported")
        self._require_session().commit()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_base_url(self) -> str:
        """Construct the switch base URL from hostname / port / TLS settings."""
        if "://" in self.hostname:
            return self.hostname.rstrip("/")
        scheme = "https" if self._verify_tls else "http"
        default_port = 443 if self._verify_tls else 80
        if self._port == default_port:
            return f"{scheme}://{self.hostname}"
        return f"{scheme}://{self.hostname}:{self._port}"

    def _require_session(self) -> HRUISession:
        """Return the active session or raise :exc:`.HRUIError`."""
        if self._session is None:
            raise HRUIError("Session not open; call open() first.")
        return self._session
