"""Request context — the explicit handle every helper works through.

A ``RequestContext`` bundles the request snapshot, the client's session,
and the configuration. The ASGI host creates one per request and passes
it to the handler as the first argument; it is also reachable through
``get_context()`` for code that cannot take it as a parameter.

Thread safety:
    The context lives in a ``ContextVar``, which is task-local under
    asyncio and thread-local under threads. No locks needed.
"""

from __future__ import annotations

from collections.abc import Callable
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from barefoot._internal.types import RouteTable
from barefoot.config import BarefootConfig
from barefoot.csrf import CSRFManager
from barefoot.flash import FlashStore
from barefoot.http.accessors import DEFAULT_IP, get_client_ip, get_headers
from barefoot.http.request import Request
from barefoot.routing.router import route
from barefoot.sessions import Session
from barefoot.urls import UrlBuilder


@dataclass(slots=True)
class RequestContext:
    """Request snapshot plus session handle for one request.

    Usage::

        ctx = RequestContext(Request.from_environ(environ), session)
        ctx.flash.set_message("notice", "Welcome back")
        token = ctx.csrf.get_token("login")
        home = ctx.url("/")
    """

    request: Request
    session: Session
    config: BarefootConfig = field(default_factory=BarefootConfig)
    urls: UrlBuilder = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.urls = UrlBuilder(self.request)

    @property
    def csrf(self) -> CSRFManager:
        """CSRF tokens stored under ``config.csrf_session_key``."""
        return CSRFManager(self.session, self.config.csrf_session_key)

    @property
    def flash(self) -> FlashStore:
        """Flash messages stored under ``config.flash_session_key``."""
        return FlashStore(self.session, self.config.flash_session_key)

    def headers(self) -> dict[str, str]:
        return get_headers(self.request)

    def client_ip(self, default: str = DEFAULT_IP) -> str:
        return get_client_ip(self.request, default)

    def url(self, path: str) -> str:
        return self.urls.make_url_from_path(path)

    def route(self, routes: RouteTable, not_found: Callable[[], Any] | None = None) -> Any:
        return route(self.request, routes, not_found)


# -- Current context --

context_var: ContextVar[RequestContext] = ContextVar("barefoot_context")
"""The current request context. Set by the ASGI host before dispatch."""


def get_context() -> RequestContext:
    """Return the current request context.

    Raises ``LookupError`` if called outside a request.
    """
    return context_var.get()
