"""Shared fixtures for building requests without a server."""

from collections.abc import Callable
from typing import Any

import pytest

from barefoot.http.request import Request


def _make_scope(**overrides: Any) -> dict[str, Any]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, Any] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _make_request(
    path: str = "/",
    *,
    headers: list[tuple[str, str]] | None = None,
    **overrides: Any,
) -> Request:
    """Build a Request from string header pairs."""
    raw = [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in headers or []]
    return Request.from_asgi(_make_scope(path=path, headers=raw, **overrides))


@pytest.fixture
def make_scope() -> Callable[..., dict[str, Any]]:
    return _make_scope


@pytest.fixture
def make_request() -> Callable[..., Request]:
    return _make_request
