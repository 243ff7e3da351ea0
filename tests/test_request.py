"""Tests for barefoot.http.request — frozen Request snapshot."""

import dataclasses
import io

import pytest

from barefoot.http.request import Request, header_meta_key


def _make_receive(*bodies: bytes):
    """Create an ASGI receive callable that yields bodies."""
    messages = [
        {"type": "http.request", "body": body, "more_body": i < len(bodies) - 1}
        for i, body in enumerate(bodies)
    ]
    it = iter(messages)

    async def receive():
        return next(it)

    return receive


class TestHeaderMetaKey:
    def test_prefixes_http(self) -> None:
        assert header_meta_key("X-Forwarded-For") == "HTTP_X_FORWARDED_FOR"

    def test_content_headers_unprefixed(self) -> None:
        assert header_meta_key("content-type") == "CONTENT_TYPE"
        assert header_meta_key("Content-Length") == "CONTENT_LENGTH"


class TestFromAsgi:
    def test_basic_fields(self, make_scope) -> None:
        scope = make_scope(method="POST", path="/a/b", query_string=b"x=1&y=2")
        request = Request.from_asgi(scope)
        assert request.method == "POST"
        assert request.path == "/a/b"
        assert request.query_string == "x=1&y=2"
        assert request.query == {"x": "1", "y": "2"}
        assert request.client == ("127.0.0.1", 54321)
        assert request.server == ("localhost", 8000)

    def test_frozen(self, make_request) -> None:
        request = make_request()
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.path = "/other"  # type: ignore[misc]

    def test_meta_has_cgi_keys(self, make_request) -> None:
        request = make_request("/x", headers=[("Host", "example.com")])
        assert request.meta["REQUEST_METHOD"] == "GET"
        assert request.meta["PATH_INFO"] == "/x"
        assert request.meta["REMOTE_ADDR"] == "127.0.0.1"
        assert request.meta["SERVER_NAME"] == "localhost"
        assert request.meta["HTTP_HOST"] == "example.com"

    def test_meta_header_order(self, make_request) -> None:
        request = make_request(headers=[("User-Agent", "t"), ("Accept", "*/*"), ("Host", "h")])
        keys = [k for k in request.meta if k.startswith("HTTP_")]
        assert keys == ["HTTP_USER_AGENT", "HTTP_ACCEPT", "HTTP_HOST"]

    def test_repeated_headers_are_joined(self, make_request) -> None:
        request = make_request(
            headers=[("X-Forwarded-For", "1.1.1.1"), ("X-Forwarded-For", "2.2.2.2")]
        )
        assert request.meta["HTTP_X_FORWARDED_FOR"] == "1.1.1.1, 2.2.2.2"

    def test_no_client(self, make_request) -> None:
        request = make_request(client=None)
        assert request.client is None
        assert "REMOTE_ADDR" not in request.meta

    def test_cookies_parsed(self, make_request) -> None:
        request = make_request(headers=[("Cookie", "a=1; b=2")])
        assert request.cookies == {"a": "1", "b": "2"}


class TestHost:
    def test_from_header(self, make_request) -> None:
        assert make_request(headers=[("Host", "example.com:8080")]).host == "example.com:8080"

    def test_falls_back_to_server(self, make_request) -> None:
        assert make_request().host == "localhost:8000"

    def test_default_port_omitted(self, make_request) -> None:
        assert make_request(server=("example.com", 80)).host == "example.com"


class TestBody:
    async def test_body_is_cached(self, make_scope) -> None:
        request = Request.from_asgi(make_scope(), _make_receive(b"hello ", b"world"))
        assert await request.body() == b"hello world"
        assert await request.body() == b"hello world"

    async def test_no_receive_means_empty_body(self, make_request) -> None:
        assert await make_request().body() == b""

    async def test_urlencoded_form(self, make_scope) -> None:
        scope = make_scope(
            method="POST",
            headers=[(b"content-type", b"application/x-www-form-urlencoded")],
        )
        request = Request.from_asgi(scope, _make_receive(b"_csrf_token=abc&name=x+y"))
        assert await request.form() == {"_csrf_token": "abc", "name": "x y"}

    async def test_other_content_type_gives_empty_form(self, make_scope) -> None:
        scope = make_scope(method="POST", headers=[(b"content-type", b"application/json")])
        request = Request.from_asgi(scope, _make_receive(b"{}"))
        assert await request.form() == {}


class TestFromEnviron:
    def _environ(self, **extra: object) -> dict[str, object]:
        environ: dict[str, object] = {
            "REQUEST_METHOD": "GET",
            "PATH_INFO": "/hello",
            "QUERY_STRING": "q=1",
            "SERVER_NAME": "example.com",
            "SERVER_PORT": "80",
            "REMOTE_ADDR": "10.0.0.1",
            "HTTP_HOST": "example.com",
            "HTTP_X_FORWARDED_FOR": "1.2.3.4",
            "wsgi.url_scheme": "http",
        }
        environ.update(extra)
        return environ

    def test_meta_is_string_entries(self) -> None:
        request = Request.from_environ(self._environ())
        assert request.meta["HTTP_X_FORWARDED_FOR"] == "1.2.3.4"
        assert request.meta["wsgi.url_scheme"] == "http"
        assert request.path == "/hello"
        assert request.query == {"q": "1"}

    def test_headers_rebuilt(self) -> None:
        request = Request.from_environ(self._environ(CONTENT_TYPE="text/plain"))
        assert request.headers["x-forwarded-for"] == "1.2.3.4"
        assert request.headers["content-type"] == "text/plain"
        assert request.host == "example.com"

    def test_client_and_server(self) -> None:
        request = Request.from_environ(self._environ())
        assert request.client == ("10.0.0.1", 0)
        assert request.server == ("example.com", 80)

    def test_empty_path_becomes_root(self) -> None:
        assert Request.from_environ(self._environ(PATH_INFO="")).path == "/"

    async def test_reads_wsgi_input(self) -> None:
        environ = self._environ(
            REQUEST_METHOD="POST",
            CONTENT_TYPE="application/x-www-form-urlencoded",
            CONTENT_LENGTH="5",
        )
        environ["wsgi.input"] = io.BytesIO(b"a=1&b=2")
        request = Request.from_environ(environ)
        assert await request.body() == b"a=1&b"
        assert await request.form() == {"a": "1", "b": ""}
