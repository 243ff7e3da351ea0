"""URL helpers: protocol-relative construction and redirect targets."""

from urllib.parse import quote

from barefoot.http.request import Request

# RFC 3986 reserved characters plus "%", so existing escapes survive
_LOCATION_SAFE = ":/?#[]@!$&'()*+,;=%"


def quote_location(url: str) -> str:
    """Percent-encode *url* for use as a ``Location`` header value.

    Header values travel as latin-1, so non-ASCII paths are sent
    UTF-8 percent-encoded: ``"/日本"`` -> ``"/%E6%97%A5%E6%9C%AC"``.
    Already-encoded URLs pass through unchanged.
    """
    return quote(url, safe=_LOCATION_SAFE)


class UrlBuilder:
    """Build ``//host/path`` URLs for one request.

    The base URL is computed from the request's host on first use and
    reused afterwards. One builder lives on each ``RequestContext``, so
    the memo never outlives the request.
    """

    __slots__ = ("_base_url", "_request")

    def __init__(self, request: Request) -> None:
        self._request = request
        self._base_url: str | None = None

    @property
    def base_url(self) -> str:
        if self._base_url is None:
            self._base_url = f"//{self._request.host}/"
        return self._base_url

    def make_url_from_path(self, path: str) -> str:
        """``"/about/"`` -> ``"//example.com/about"``."""
        return self.base_url + path.strip("/")
