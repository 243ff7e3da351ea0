"""The Barefoot ASGI application.

Wires the helpers into a request pipeline: build the request snapshot,
load the signed-cookie session, bind a ``RequestContext``, dispatch
through the ordered regex router, and send the response with the
session re-signed onto it.

Usage::

    from barefoot import Barefoot, BarefootConfig, redirect_and_exit

    def index(ctx):
        return f"Hello from {ctx.client_ip()}"

    def show_post(ctx, post_id):
        return f"Post {post_id}"

    def not_found(ctx):
        return "Nothing here", 404

    app = Barefoot(
        [("/", index), (r"/posts/(\\d+)", show_post)],
        not_found,
        config=BarefootConfig.from_env(),
    )

Handlers receive the context first, then the regex captures. They may
be ``def`` or ``async def``.
"""

import logging
from collections.abc import Callable
from typing import Any

from barefoot._internal.asgi import Receive, Scope, Send
from barefoot._internal.invoke import invoke
from barefoot._internal.types import RouteTable
from barefoot.config import BarefootConfig
from barefoot.context import RequestContext, context_var
from barefoot.errors import HTTPError, NotFound
from barefoot.http.request import Request
from barefoot.http.response import Response
from barefoot.routing.router import Router
from barefoot.server.errors import handle_http_error, handle_internal_error
from barefoot.server.negotiation import negotiate
from barefoot.server.sender import send_response
from barefoot.sessions import CookieSessions

logger = logging.getLogger("barefoot.server")


class Barefoot:
    """ASGI application over an ordered route table.

    Raises ``ConfigurationError`` at construction when the route table
    contains an invalid pattern or ``config.secret_key`` is empty.
    """

    __slots__ = ("_not_found", "config", "router", "sessions")

    def __init__(
        self,
        routes: RouteTable,
        not_found: Callable[..., Any] | None = None,
        *,
        config: BarefootConfig | None = None,
    ) -> None:
        self.config = config or BarefootConfig.from_env()
        self.router = Router(routes)
        self.sessions = CookieSessions(self.config)
        self._not_found = not_found

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            msg = f"Unsupported ASGI scope type {scope['type']!r}"
            raise RuntimeError(msg)

        request = Request.from_asgi(scope, receive)
        session = self.sessions.load(request)
        ctx = RequestContext(request, session, self.config)

        token = context_var.set(ctx)
        try:
            response = await self.handle(ctx)
        finally:
            context_var.reset(token)

        await send_response(self.sessions.save(response, session), send)

    async def handle(self, ctx: RequestContext) -> Response:
        """Dispatch one request and turn the outcome into a Response."""
        request = ctx.request
        try:
            try:
                match = self.router.match(request.path)
            except NotFound:
                if self._not_found is None:
                    raise
                result = await invoke(self._not_found, ctx)
            else:
                result = await invoke(match.route.handler, ctx, *match.args)
            return negotiate(result)
        except HTTPError as exc:
            return handle_http_error(exc, request, debug=self.config.debug)
        except Exception as exc:
            return handle_internal_error(exc, request, debug=self.config.debug)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge lifespan startup and shutdown."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                logger.debug("Startup: %d routes", len(self.router.routes))
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
