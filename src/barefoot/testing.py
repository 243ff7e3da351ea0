"""Async test client for barefoot applications.

Sends requests through the ASGI interface directly (no HTTP involved)
and returns the same ``Response`` type used in production. Cookies set
by the app are kept and sent back on later requests, so session state
carries over like it would in a browser.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from barefoot.app import Barefoot
from barefoot.http.cookies import parse_cookies
from barefoot.http.response import Response


class TestClient:
    """Async test client.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200
    """

    __test__ = False  # Tell pytest this is not a test class

    __slots__ = ("app", "client_addr", "cookies", "host")

    def __init__(
        self,
        app: Barefoot,
        *,
        host: str = "testserver",
        client_addr: str = "127.0.0.1",
    ) -> None:
        self.app = app
        self.host = host
        self.client_addr = client_addr
        self.cookies: dict[str, str] = {}

    async def __aenter__(self) -> TestClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        self.cookies.clear()

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        form: dict[str, str] | None = None,
    ) -> Response:
        """Send a POST request, URL-encoding *form* when given."""
        merged = dict(headers or {})
        if form is not None:
            body = urlencode(form).encode("latin-1")
            merged.setdefault("content-type", "application/x-www-form-urlencoded")
        return await self.request("POST", path, headers=merged, body=body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send an arbitrary request through the ASGI app."""
        path_part, _, query_string = path.partition("?")

        header_map = {"host": self.host}
        if self.cookies:
            header_map["cookie"] = "; ".join(f"{k}={v}" for k, v in self.cookies.items())
        for name, value in (headers or {}).items():
            header_map[name.lower()] = value
        raw_headers = [
            (name.encode("latin-1"), value.encode("latin-1")) for name, value in header_map.items()
        ]

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": (self.host, 80),
            "client": (self.client_addr, 50000),
        }

        request_body = body or b""
        body_sent = False

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": request_body, "more_body": False}
            return {"type": "http.disconnect"}

        status = 200
        response_headers: list[tuple[bytes, bytes]] = []
        body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal status, response_headers
            if message["type"] == "http.response.start":
                status = message["status"]
                response_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                body_parts.append(message.get("body", b""))

        await self.app(scope, receive, send)

        content_type = "text/html; charset=utf-8"
        extra_headers: list[tuple[str, str]] = []
        for name_b, value_b in response_headers:
            name = name_b.decode("latin-1")
            value = value_b.decode("latin-1")
            if name == "content-type":
                content_type = value
            elif name != "content-length":
                extra_headers.append((name, value))
            if name == "set-cookie":
                self.cookies.update(parse_cookies(value.split(";", 1)[0]))

        return Response(
            body=b"".join(body_parts),
            status=status,
            content_type=content_type,
            headers=tuple(extra_headers),
        )
