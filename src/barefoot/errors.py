"""Barefoot exception hierarchy.

Shared across the router, helpers, and ASGI host so every module
raises and catches the same types.
"""

from dataclasses import dataclass

from barefoot.urls import quote_location


class BarefootError(Exception):
    """Base for all barefoot-specific errors."""


class ConfigurationError(BarefootError):
    """Raised when configuration or a route table is invalid."""


@dataclass(frozen=True, slots=True)
class HTTPError(BarefootError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, helpers, or handlers. The ASGI host catches
    these and turns them into a response with the same status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route pattern matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class CSRFError(HTTPError):
    """403 — a submitted CSRF token did not match the session token."""

    def __init__(self, detail: str = "CSRF token invalid") -> None:
        super().__init__(status=403, detail=detail)


class Redirected(HTTPError):  # noqa: N818
    """302 — stop handling the request and redirect the client.

    Raised by ``redirect_and_exit()``. Carries the percent-encoded
    ``Location`` header so the host can answer without running any
    more handler code.
    """

    def __init__(self, location: str, status: int = 302) -> None:
        super().__init__(status=status, headers=(("Location", quote_location(location)),))

    @property
    def location(self) -> str:
        """The redirect target."""
        return self.headers[0][1]
