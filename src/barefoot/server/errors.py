"""Error handling for barefoot requests.

Maps HTTPError exceptions and unexpected failures to Response objects.
"""

import logging
import traceback
from html import escape

from barefoot.errors import HTTPError
from barefoot.http.request import Request
from barefoot.http.response import Response

logger = logging.getLogger("barefoot.server")


def handle_http_error(exc: HTTPError, request: Request, *, debug: bool = False) -> Response:
    """Map an HTTPError (including redirects) to a Response."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    if exc.status < 400:
        body = ""
    elif debug and exc.detail:
        body = escape(f"{exc.status}: {exc.detail}")
    else:
        body = escape(exc.detail or f"Error {exc.status}")

    resp = Response(body=body, status=exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, request: Request, *, debug: bool = False) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)
    if debug:
        trace = "".join(traceback.format_exception(exc))
        return Response(body=f"<pre>{escape(trace)}</pre>", status=500)
    return Response(body="Internal Server Error", status=500)
