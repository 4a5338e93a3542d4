"""Authenticated HTTP session for HRUI switches."""

from __future__ import annotations

import enum
import hashlib
import logging
import re
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import unquote_plus

from bs4 import BeautifulSoup

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.errors import (
    HRUIAuthError,
    HRUICommitError,
    HRUIDeviceError,
    HRUITransportError,
)
from napalm_hrui.client.http import FormData, HRUIHTTP
from napalm_hrui.parser.html import parse_html
from napalm_hrui.vendor.hrui.endpoints import INDEX, SAVE

logger = logging.getLogger(__name__)

AUTH_COOKIE_NAME: str = "admin"

# Script emitted by every page when the auth cookie is not accepted.
LOGIN_REDIRECT_MARKER: str = 'window.top.location.replace("/login.cgi")'

SAVE_ERROR_MARKER: str = "Error saving configuration"

# Inline form errors are reported as a redirect to alert.cgi?alertmsg=<text>.
_ALERT_RE: re.Pattern[str] = re.compile(r"alert\.cgi\?alertmsg=([^\"'&;)]*)")


class SessionState(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    COOKIE_SET = "cookie_set"
    AUTHENTICATED = "authenticated"
    REJECTED = "rejected"


@dataclass(frozen=True)
class HRUICredentials:
    """Immutable credential pair for an HRUI switch.

    Args:
        username: Login username.
        password: Login password.
    """

    username: str
    password: str

    @property
    def cookie_value(self) -> str:
        """The ``admin`` cookie value: MD5 hex digest of username + password."""
        digest = hashlib.md5(  # noqa: S324 - fixed by the firmware
            (self.username + self.password).encode("utf-8")
        )
        return digest.hexdigest()


def is_login_redirect(html: str | bytes) -> bool:
    """Return True if *html* holds the firmware's redirect-to-login script."""
    soup = parse_html(html)
    return any(
        LOGIN_REDIRECT_MARKER in script.get_text() for script in soup.find_all("script")
    )


def find_alert_message(body: str) -> str | None:
    """Return the inline ``alert.cgi`` error message in *body*, if any."""
    match = _ALERT_RE.search(body)
    if match is None:
        return None
    return unquote_plus(match.group(1)).strip() or "unknown error"


class HRUISession:
    """Manages an authenticated HTTP session to an HRUI switch.

    Wraps :class:`.HRUIHTTP` and adds:

    - Cookie-based pseudo-authentication (the cookie is computed locally,
      the switch never issues one).
    - Lazy validation on the first request: the switch answers a bad cookie
      with HTTP 200 and a login-redirect script, never with 401.
    - Optional autosave: a ``save.cgi`` commit after every form submission
      the switch accepted, retried a bounded number of times.

    Session states move ``UNAUTHENTICATED -> COOKIE_SET -> AUTHENTICATED``, or
    ``COOKIE_SET -> REJECTED``.  ``REJECTED`` is terminal: build a new session
    with different credentials.

    Args:
        base_url: Switch base URL, e.g. ``http://192.168.2.1``.
        credentials: Username/password pair.
        autosave: Commit the configuration after every accepted form submission.
        timeout_s: Request timeout in seconds (default 30).
        verify_tls: Whether to verify TLS certificates (default True).
        commit_retries: Save attempts before giving up (default 3).
        commit_retry_delay_s: Fixed pause between save attempts in seconds.
    """

    def __init__(
        self,
        base_url: str,
        credentials: HRUICredentials,
        autosave: bool = False,
        timeout_s: float = 30.0,
        verify_tls: bool = True,
        commit_retries: int = 3,
        commit_retry_delay_s: float = 1.0,
    ) -> None:
        self._http: HRUIHTTP = HRUIHTTP(
            base_url=base_url,
            timeout_s=timeout_s,
            verify_tls=verify_tls,
        )
        self._credentials: HRUICredentials = credentials
        self.autosave: bool = autosave
        self.commit_retries: int = max(1, commit_retries)
        self.commit_retry_delay_s: float = commit_retry_delay_s
        self._state: SessionState = SessionState.UNAUTHENTICATED
        self._state_lock = threading.Lock()
        # Serializes the read-modify-write of the per-port IGMP table.
        self.igmp_port_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def authenticate(self) -> None:
        """Attach the auth cookie to the session without contacting the switch."""
        with self._state_lock:
            if self._state is SessionState.REJECTED:
                raise HRUIAuthError("Session was rejected by the switch; create a new one")
            self._http.set_cookie(AUTH_COOKIE_NAME, self._credentials.cookie_value)
            if self._state is SessionState.UNAUTHENTICATED:
                self._state = SessionState.COOKIE_SET
        logger.debug("Auth cookie set for %s", self._http.base_url)

    def validate_session(self, *, ctx: RequestContext | None = None) -> None:
        """Check that the switch accepts the auth cookie.

        Raises:
            HRUIAuthError: If ``index.cgi`` answers with the login redirect.
            HRUITransportError: On network failure or non-2xx status.
        """
        with self._state_lock:
            self._validate_locked(ctx)

    def ensure_session(self, *, ctx: RequestContext | None = None) -> None:
        """Authenticate and validate once; later calls return immediately."""
        if self._state is SessionState.AUTHENTICATED:
            return
        if self._state is SessionState.UNAUTHENTICATED:
            self.authenticate()
        with self._state_lock:
            if self._state is not SessionState.AUTHENTICATED:
                self._validate_locked(ctx)

    # ------------------------------------------------------------------
    # Public request methods
    # ------------------------------------------------------------------

    def execute(
        self,
        method: str,
        path: str,
        data: FormData | str | None = None,
        params: dict[str, str] | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> bytes:
        """Issue one authenticated request and return the raw response body.

        No autosave happens here; see :meth:`submit_form`.

        Raises:
            HRUIAuthError: If the session is (or becomes) rejected.
            HRUITransportError: On network failure or non-2xx status.
        """
        self.ensure_session(ctx=ctx)
        resp = self._http.request(method, path, params=params, data=data, ctx=ctx)
        return resp.content

    def get(
        self,
        path: str,
        params: dict[str, str] | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> bytes:
        """Perform an authenticated GET and return the response body."""
        return self.execute("GET", path, params=params, ctx=ctx)

    def get_document(
        self,
        path: str,
        params: dict[str, str] | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> BeautifulSoup:
        """Perform an authenticated GET and return the parsed document."""
        return parse_html(self.get(path, params=params, ctx=ctx))

    def submit_form(
        self,
        path: str,
        fields: FormData | str,
        params: dict[str, str] | None = None,
        *,
        check: Callable[[bytes], None] | None = None,
        ctx: RequestContext | None = None,
    ) -> bytes:
        """POST form *fields* to *path* and return the response body.

        The response is checked for an inline alert, then passed to *check*;
        only a response that passes both is followed by :meth:`commit` when
        :attr:`autosave` is enabled.  A rejected form never reaches flash.

        Args:
            path: CGI path relative to the switch base URL.
            fields: Form fields.  Use a ``list[tuple[str, str]]`` when a key
                must repeat; a ``str`` is sent as a pre-encoded body.
            params: Optional query parameters (usually ``page``).
            check: Optional page-specific validation of the response body;
                it raises to reject the response.
            ctx: Optional deadline/cancellation context.

        Raises:
            HRUIDeviceError: If the switch answers with an inline alert.
            HRUICommitError: If autosave is on and saving fails.
        """
        body = self.execute("POST", path, data=fields, params=params, ctx=ctx)
        message = find_alert_message(body.decode("utf-8", errors="replace"))
        if message is not None:
            raise HRUIDeviceError(message=message, endpoint=path)
        if check is not None:
            check(body)
        if self.autosave:
            self.commit(ctx=ctx)
        return body

    def commit(self, *, ctx: RequestContext | None = None) -> None:
        """Save the running configuration to flash.

        Retries up to :attr:`commit_retries` times with a fixed pause.  A
        transport error or an ``Error saving configuration`` body counts as
        a failed attempt; any other error propagates immediately.

        Raises:
            HRUICommitError: Once every attempt has failed.
            HRUICancelledError: If *ctx* expires or is cancelled between attempts.
        """
        self.ensure_session(ctx=ctx)
        for attempt in range(1, self.commit_retries + 1):
            if ctx is not None:
                ctx.check()
            try:
                resp = self._http.post_form(SAVE, data={"cmd": "save"}, ctx=ctx)
                if SAVE_ERROR_MARKER in resp.text:
                    raise HRUIDeviceError(message=SAVE_ERROR_MARKER, endpoint=SAVE)
            except (HRUITransportError, HRUIDeviceError) as exc:
                logger.warning(
                    "Save attempt %d/%d failed: %s", attempt, self.commit_retries, exc
                )
                if attempt == self.commit_retries:
                    raise HRUICommitError(attempts=attempt, cause=exc) from exc
                self._pause(ctx)
                continue
            logger.info("Configuration saved on %s", self._http.base_url)
            return

    def close(self) -> None:
        """Close the underlying HTTP sessions."""
        self._http.close()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def base_url(self) -> str:
        return self._http.base_url

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _validate_locked(self, ctx: RequestContext | None) -> None:
        if self._state is SessionState.REJECTED:
            raise HRUIAuthError("Session was rejected by the switch; create a new one")
        if self._state is SessionState.UNAUTHENTICATED:
            raise HRUIAuthError("authenticate() must be called before validating")
        resp = self._http.get(INDEX, ctx=ctx)
        if is_login_redirect(resp.content):
            self._state = SessionState.REJECTED
            raise HRUIAuthError(
                f"Switch at {self._http.base_url} redirected to the login page; "
                "check username and password"
            )
        self._state = SessionState.AUTHENTICATED
        logger.debug("Session validated for %s", self._http.base_url)

    def _pause(self, ctx: RequestContext | None) -> None:
        if ctx is not None:
            ctx.sleep(self.commit_retry_delay_s)
        elif self.commit_retry_delay_s > 0:
            time.sleep(self.commit_retry_delay_s)
