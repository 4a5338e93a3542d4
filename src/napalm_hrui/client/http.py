"""Low-level HTTP client wrapper for HRUI CGI endpoints."""

from __future__ import annotations

import importlib.metadata
import logging
import threading

import requests

from napalm_hrui.client.context import RequestContext
from napalm_hrui.client.errors import HRUIRequestError, HRUIResponseError

logger = logging.getLogger(__name__)

try:
    _VERSION: str = importlib.metadata.version("napalm-hrui")
except importlib.metadata.PackageNotFoundError:
    _VERSION = "0.0.0"

_USER_AGENT: str = f"napalm-hrui/{_VERSION}"

FormData = dict[str, str] | list[tuple[str, str]]


def _normalise_base_url(url: str) -> str:
    """Ensure the URL has a scheme and no trailing slash."""
    url = url.rstrip("/")
    if not url.startswith(("http://", "https://")):
        url = "http://" + url
    return url


class HRUIHTTP:
    """Thread-safe HTTP wrapper around :class:`requests.Session`.

    Each thread gets its own :class:`requests.Session`, so concurrent callers
    never share a connection pool or cookie jar.  Cookies set through
    :meth:`set_cookie` are kept on this object and sent explicitly with every
    request.  Transport and HTTP errors are mapped to :mod:`.errors` types.

    Args:
        base_url: Switch base URL, e.g. ``http://192.168.2.1``.
        timeout_s: Request timeout in seconds (default 30).
        verify_tls: Whether to verify TLS certificates (default True).
    """

    def __init__(
        self,
        base_url: str,
        timeout_s: float = 30.0,
        verify_tls: bool = True,
    ) -> None:
        self.base_url: str = _normalise_base_url(base_url)
        self.timeout_s: float = timeout_s
        self.verify_tls: bool = verify_tls
        self._cookies: dict[str, str] = {}
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._sessions_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def set_cookie(self, name: str, value: str) -> None:
        """Attach cookie *name* to every subsequent request."""
        self._cookies = {**self._cookies, name: value}

    @property
    def cookies(self) -> dict[str, str]:
        return dict(self._cookies)

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        data: FormData | str | None = None,
        ctx: RequestContext | None = None,
    ) -> requests.Response:
        """Send one HTTP request to *path* and return the response.

        Args:
            method: HTTP method (``"GET"`` or ``"POST"``).
            path: URL path relative to :attr:`base_url`.
            params: Optional query-string parameters.
            data: Optional body.  A ``dict`` or ``list[tuple[str, str]]`` is
                form-encoded (the list form allows repeated keys); a ``str``
                is sent as an already-encoded form body.
            ctx: Optional deadline/cancellation context.

        Returns:
            The :class:`requests.Response`.

        Raises:
            HRUICancelledError: If *ctx* is cancelled or expired.
            HRUIRequestError: On any transport-level failure.
            HRUIResponseError: On a non-2xx HTTP status code.
        """
        timeout = self.timeout_s
        if ctx is not None:
            ctx.check()
            remaining = ctx.remaining()
            if remaining is not None:
                timeout = min(timeout, remaining)

        headers: dict[str, str] = {}
        if isinstance(data, str):
            headers["Content-Type"] = "application/x-www-form-urlencoded"

        url = self.base_url + path
        try:
            resp = self._thread_session().request(
                method,
                url,
                params=params,
                data=data,
                headers=headers,
                cookies=self._cookies,
                timeout=timeout,
                verify=self.verify_tls,
            )
        except requests.exceptions.RequestException as exc:
            raise HRUIRequestError(url, exc) from exc
        self._raise_for_status(resp)
        return resp

    def get(
        self,
        path: str,
        params: dict[str, str] | None = None,
        ctx: RequestContext | None = None,
    ) -> requests.Response:
        """Send an HTTP GET to *path*.  See :meth:`request`."""
        return self.request("GET", path, params=params, ctx=ctx)

    def post_form(
        self,
        path: str,
        data: FormData | str | None = None,
        params: dict[str, str] | None = None,
        ctx: RequestContext | None = None,
    ) -> requests.Response:
        """Send an HTTP POST with form-encoded *data* to *path*.  See :meth:`request`."""
        return self.request("POST", path, params=params, data=data, ctx=ctx)

    def close(self) -> None:
        """Close every per-thread :class:`requests.Session`."""
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
        self._local = threading.local()

    def __enter__(self) -> HRUIHTTP:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _thread_session(self) -> requests.Session:
        session: requests.Session | None = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": _USER_AGENT})
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    @staticmethod
    def _raise_for_status(resp: requests.Response) -> None:
        if not resp.ok:
            raise HRUIResponseError(resp.status_code, resp.url, resp.text)
