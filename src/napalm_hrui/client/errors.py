"""Custom exceptions for the napalm-hrui HTTP client."""

from __future__ import annotations

from dataclasses import dataclass

# Maximum number of response-body characters kept on transport errors.
BODY_EXCERPT_LEN: int = 200


class HRUIError(Exception):
    """Base exception for all napalm-hrui errors."""


class HRUITransportError(HRUIError):
    """Raised on network failures and non-2xx HTTP responses."""


class HRUIRequestError(HRUITransportError):
    """Raised when a network-level error occurs (connection refused, timeout, etc.)."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Request to {url!r} failed: {cause}")


class HRUIResponseError(HRUITransportError):
    """Raised when the switch returns a non-2xx HTTP status code."""

    def __init__(self, status_code: int, url: str, body: str = "") -> None:
        self.status_code = status_code
        self.url = url
        self.body_excerpt = body[:BODY_EXCERPT_LEN]
        message = f"HTTP {status_code} for {url!r}"
        if self.body_excerpt:
            message += f": {self.body_excerpt!r}"
        super().__init__(message)


class HRUIAuthError(HRUIError):
    """Raised when the switch redirects an authenticated page to the login form."""


class HRUIParseError(HRUIError):
    """Raised when an HTML document cannot be parsed at all."""


class HRUIFieldNotFoundError(HRUIError):
    """Raised when an expected selector, row or selected option is absent."""


class HRUICancelledError(HRUIError):
    """Raised when a request context expires or is cancelled."""


@dataclass
class HRUICodecError(HRUIError):
    """Raised when an enum label or wire code is not known for a domain."""

    domain: str
    value: object

    def __post_init__(self) -> None:
        super().__init__(f"Unknown {self.domain} value: {self.value!r}")


@dataclass
class HRUIPortNotFoundError(HRUIError):
    """Raised when a port name or ID is not present in the live port table."""

    port: object

    def __post_init__(self) -> None:
        super().__init__(f"Port not found: {self.port!r}")


@dataclass
class HRUIDeviceError(HRUIError):
    """Raised when the switch rejects a form submission inline.

    Attributes:
        message: Error text reported by the firmware (from its ``alert.cgi``
            redirect) or a description of the unexpected response.
        endpoint: CGI path the form was submitted to.
    """

    message: str
    endpoint: str

    def __post_init__(self) -> None:
        super().__init__(f"Switch rejected request to {self.endpoint!r}: {self.message}")


@dataclass
class HRUICommitError(HRUIError):
    """Raised when saving the configuration fails after every retry.

    Attributes:
        attempts: Number of save attempts made.
        cause: The error from the last attempt.
    """

    attempts: int
    cause: Exception

    def __post_init__(self) -> None:
        super().__init__(
            f"Saving configuration failed after {self.attempts} attempt(s): {self.cause}"
        )
