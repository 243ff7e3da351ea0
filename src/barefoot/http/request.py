"""Immutable request snapshot.

Frozen metadata with optional async body access. A request can be built
from an ASGI scope or from a WSGI/CGI environ; either way it carries the
same CGI-style ``meta`` mapping (``HTTP_HOST``, ``REMOTE_ADDR``, ...)
that the request accessors read from.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl

from barefoot._internal.asgi import Receive
from barefoot.http.cookies import parse_cookies
from barefoot.http.headers import Headers

# CGI keeps these two headers outside the HTTP_ namespace
_UNPREFIXED = frozenset({"CONTENT_TYPE", "CONTENT_LENGTH"})


def header_meta_key(name: str) -> str:
    """Map a header name to its CGI metadata key.

    ``X-Forwarded-For`` -> ``HTTP_X_FORWARDED_FOR``;
    ``Content-Type`` -> ``CONTENT_TYPE``.
    """
    key = name.upper().replace("-", "_")
    if key in _UNPREFIXED:
        return key
    return f"HTTP_{key}"


def build_meta(
    method: str,
    path: str,
    query_string: str,
    headers: Headers,
    server: tuple[str, int] | None,
    client: tuple[str, int] | None,
) -> dict[str, str]:
    """Build CGI-style metadata from decoded request parts.

    Header entries keep arrival order. A header sent more than once is
    joined with ``", "``, the way CGI gateways fold repeated fields.
    """
    meta: dict[str, str] = {
        "REQUEST_METHOD": method,
        "PATH_INFO": path,
        "QUERY_STRING": query_string,
    }
    if server is not None:
        meta["SERVER_NAME"] = str(server[0])
        meta["SERVER_PORT"] = str(server[1])
    if client is not None:
        meta["REMOTE_ADDR"] = str(client[0])
        meta["REMOTE_PORT"] = str(client[1])
    for name, value in headers.pairs():
        key = header_meta_key(name)
        meta[key] = f"{meta[key]}, {value}" if key in meta and key.startswith("HTTP_") else value
    return meta


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers, meta) is frozen at creation.
    ``path`` never includes the query string.
    Body is read asynchronously via ``.body()`` and ``.form()``.
    """

    method: str
    path: str
    headers: Headers
    meta: Mapping[str, str]
    query_string: str = ""
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None
    cookies: Mapping[str, str] = field(default_factory=dict)

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)

    # Private: mutable cache for body and parsed form data
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Computed properties --

    @property
    def host(self) -> str:
        """The ``Host`` header, else ``SERVER_NAME[:SERVER_PORT]``."""
        host = self.headers.get("host")
        if host:
            return host
        name = self.meta.get("SERVER_NAME", "")
        port = self.meta.get("SERVER_PORT", "")
        if port and port not in ("80", "443"):
            return f"{name}:{port}"
        return name

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def query(self) -> dict[str, str]:
        """Query parameters; the last value wins for repeated names."""
        return dict(parse_qsl(self.query_string, keep_blank_values=True))

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached — the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks: list[bytes] = []
        if self._receive is not None:
            while True:
                message = await self._receive()
                chunk = message.get("body", b"")
                if chunk:
                    chunks.append(chunk)
                if not message.get("more_body", False):
                    break
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def form(self) -> dict[str, str]:
        """Parse an ``application/x-www-form-urlencoded`` body.

        Returns an empty dict for any other content type.
        """
        if "_form" in self._cache:
            return self._cache["_form"]
        result: dict[str, str] = {}
        ct = self.content_type or ""
        if ct.startswith("application/x-www-form-urlencoded"):
            raw = await self.body()
            result = dict(parse_qsl(raw.decode("latin-1"), keep_blank_values=True))
        self._cache["_form"] = result
        return result

    # -- Factories --

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any], receive: Receive | None = None) -> Request:
        """Create a Request from an ASGI HTTP scope and receive callable."""
        headers = Headers(tuple(scope.get("headers", ())))
        server = scope.get("server")
        client = scope.get("client")
        server_t = (str(server[0]), int(server[1])) if server else None
        client_t = (str(client[0]), int(client[1])) if client else None
        method = scope.get("method", "GET")
        path = scope.get("path", "/")
        query_string = scope.get("query_string", b"").decode("latin-1")
        return cls(
            method=method,
            path=path,
            headers=headers,
            meta=build_meta(method, path, query_string, headers, server_t, client_t),
            query_string=query_string,
            server=server_t,
            client=client_t,
            cookies=parse_cookies(headers.get("cookie", "")),
            _receive=receive,
        )

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any]) -> Request:
        """Create a Request from a WSGI/CGI environ.

        String entries become ``meta`` unchanged, in their original order.
        The body is read eagerly from ``wsgi.input`` when a positive
        ``CONTENT_LENGTH`` is present.
        """
        meta = {key: value for key, value in environ.items() if isinstance(value, str)}
        pairs: list[tuple[str, str]] = []
        for key, value in meta.items():
            if key.startswith("HTTP_"):
                pairs.append((key[5:].replace("_", "-"), value))
            elif key in _UNPREFIXED:
                pairs.append((key.replace("_", "-"), value))
        headers = Headers.from_pairs(pairs)

        server = None
        if "SERVER_NAME" in meta:
            server = (meta["SERVER_NAME"], int(meta.get("SERVER_PORT") or 80))
        client = None
        if "REMOTE_ADDR" in meta:
            client = (meta["REMOTE_ADDR"], int(meta.get("REMOTE_PORT") or 0))

        cache: dict[str, Any] = {}
        stream = environ.get("wsgi.input")
        try:
            length = int(meta.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        if stream is not None and length > 0:
            cache["_body"] = stream.read(length)

        return cls(
            method=meta.get("REQUEST_METHOD", "GET"),
            path=meta.get("PATH_INFO", "") or "/",
            headers=headers,
            meta=meta,
            query_string=meta.get("QUERY_STRING", ""),
            server=server,
            client=client,
            cookies=parse_cookies(meta.get("HTTP_COOKIE", "")),
            _cache=cache,
        )
