"""Tests for barefoot.urls — protocol-relative URL builder."""

from barefoot.urls import UrlBuilder, quote_location


class TestUrlBuilder:
    def test_builds_protocol_relative(self, make_request) -> None:
        urls = UrlBuilder(make_request(headers=[("Host", "example.com")]))
        assert urls.make_url_from_path("/about/") == "//example.com/about"

    def test_root(self, make_request) -> None:
        urls = UrlBuilder(make_request(headers=[("Host", "example.com")]))
        assert urls.make_url_from_path("/") == "//example.com/"
        assert urls.make_url_from_path("") == "//example.com/"

    def test_host_with_port(self, make_request) -> None:
        urls = UrlBuilder(make_request(headers=[("Host", "localhost:8000")]))
        assert urls.make_url_from_path("a/b") == "//localhost:8000/a/b"

    def test_base_is_memoized(self, make_request) -> None:
        urls = UrlBuilder(make_request(headers=[("Host", "example.com")]))
        first = urls.base_url
        assert urls.base_url is first

    def test_scoped_to_request(self, make_request) -> None:
        a = UrlBuilder(make_request(headers=[("Host", "a.test")]))
        b = UrlBuilder(make_request(headers=[("Host", "b.test")]))
        assert a.make_url_from_path("x") == "//a.test/x"
        assert b.make_url_from_path("x") == "//b.test/x"

    def test_server_name_fallback(self, make_request) -> None:
        urls = UrlBuilder(make_request(server=("example.org", 443)))
        assert urls.make_url_from_path("x") == "//example.org/x"


class TestQuoteLocation:
    def test_non_ascii_path(self) -> None:
        assert quote_location("/日本") == "/%E6%97%A5%E6%9C%AC"

    def test_ascii_url_unchanged(self) -> None:
        url = "https://example.com/a/b?x=1&y=2#top"
        assert quote_location(url) == url

    def test_existing_escapes_survive(self) -> None:
        assert quote_location("/a%2Fb") == "/a%2Fb"

    def test_space_encoded(self) -> None:
        assert quote_location("/my page") == "/my%20page"
