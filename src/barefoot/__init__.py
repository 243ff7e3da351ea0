"""Barefoot — streamlined request helpers for Python web handlers.

Regex routing, protocol-relative URLs, header and client IP access,
per-form CSRF tokens, and one-shot flash messages, all working through
an explicit ``RequestContext`` instead of global state.

Helpers on their own::

    from barefoot import RequestContext, Request

    ctx = RequestContext(Request.from_environ(environ), session)
    token = ctx.csrf.get_token("comment")
    notice = ctx.flash.get_message("notice")

As an ASGI app::

    from barefoot import Barefoot

    app = Barefoot([("/", index), (r"/posts/(\\d+)", show_post)], not_found)
"""

__version__ = "0.1.0"
__all__ = [
    "Barefoot",
    "BarefootConfig",
    "BarefootError",
    "CSRFError",
    "CSRFManager",
    "ConfigurationError",
    "FlashStore",
    "HTTPError",
    "NotFound",
    "Redirect",
    "Redirected",
    "Request",
    "RequestContext",
    "Response",
    "Router",
    "UrlBuilder",
    "get_client_ip",
    "get_context",
    "get_headers",
    "literal",
    "redirect_and_exit",
    "route",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import barefoot`` fast while providing a clean top-level API.
    """
    if name == "Barefoot":
        from barefoot.app import Barefoot

        return Barefoot

    if name == "BarefootConfig":
        from barefoot.config import BarefootConfig

        return BarefootConfig

    if name in (
        "BarefootError",
        "CSRFError",
        "ConfigurationError",
        "HTTPError",
        "NotFound",
        "Redirected",
    ):
        from barefoot import errors as _errors

        return getattr(_errors, name)

    if name == "CSRFManager":
        from barefoot.csrf import CSRFManager

        return CSRFManager

    if name == "FlashStore":
        from barefoot.flash import FlashStore

        return FlashStore

    if name == "Request":
        from barefoot.http.request import Request

        return Request

    if name in ("Response", "Redirect", "redirect_and_exit"):
        from barefoot.http import response as _resp

        return getattr(_resp, name)

    if name in ("get_client_ip", "get_headers"):
        from barefoot.http import accessors as _acc

        return getattr(_acc, name)

    if name in ("RequestContext", "get_context"):
        from barefoot import context as _ctx

        return getattr(_ctx, name)

    if name in ("Router", "literal", "route"):
        from barefoot.routing import router as _router

        return getattr(_router, name)

    if name == "UrlBuilder":
        from barefoot.urls import UrlBuilder

        return UrlBuilder

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
