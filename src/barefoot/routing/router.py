"""Ordered regex router.

Patterns are raw regular-expression fragments, not templates: a
pattern like ``/posts/(\\d+)`` captures the id, and metacharacters such
as ``.`` or ``+`` keep their regex meaning. Use ``literal()`` when a
path must match verbatim.

Routes are tried in insertion order and the first full match wins, so
duplicates are legal and the earlier entry always shadows the later.
"""

import re
from collections.abc import Callable, Mapping
from typing import Any

from barefoot._internal.types import Handler, RouteTable
from barefoot.errors import ConfigurationError, NotFound
from barefoot.http.request import Request
from barefoot.routing.route import Route, RouteMatch


def normalize_path(path: str) -> str:
    """Trim slashes from both ends and prefix exactly one.

    ``""`` -> ``"/"``, ``"a/b/"`` -> ``"/a/b"``, ``"//x//"`` -> ``"/x"``
    """
    return "/" + path.strip("/")


def literal(path: str) -> str:
    """Escape *path* so every character matches itself.

    Slashes need no escaping, so the result still reads like a path::

        router.add(literal("/files/v1.0+beta"), handler)
    """
    return re.escape(path)


def _iter_table(routes: RouteTable) -> list[tuple[str, Handler]]:
    if isinstance(routes, Mapping):
        return list(routes.items())
    return list(routes)


class Router:
    """Ordered route table with linear first-match lookup.

    Usage::

        router = Router([
            ("/", index),
            (r"/posts/(\\d+)", show_post),
        ])
        match = router.match("/posts/7")
        match.dispatch()  # show_post("7")
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: RouteTable = ()) -> None:
        self._routes: list[Route] = []
        for pattern, handler in _iter_table(routes):
            self.add(pattern, handler)

    def add(self, pattern: str, handler: Handler) -> Route:
        """Append a route. It matches only if no earlier route does.

        Raises ``ConfigurationError`` if *pattern* is not a valid regex.
        """
        normalized = normalize_path(pattern)
        try:
            regex = re.compile(normalized)
        except re.error as exc:
            msg = f"Invalid route pattern {pattern!r}: {exc}"
            raise ConfigurationError(msg) from exc
        entry = Route(pattern=normalized, handler=handler, regex=regex)
        self._routes.append(entry)
        return entry

    @property
    def routes(self) -> list[Route]:
        """Registered routes, in priority order."""
        return list(self._routes)

    def match(self, path: str) -> RouteMatch:
        """Match *path* (without query string) against the table.

        Returns the first ``RouteMatch``. Raises ``NotFound`` if no
        pattern matches the whole normalized path.
        """
        target = normalize_path(path)
        for entry in self._routes:
            m = entry.regex.fullmatch(target)
            if m is not None:
                return RouteMatch(route=entry, args=m.groups(""))
        raise NotFound(f"No route matches {target!r}")

    def dispatch(
        self,
        path: str,
        not_found: Callable[..., Any] | None = None,
        *,
        prefix: tuple[Any, ...] = (),
    ) -> Any:
        """Invoke exactly one handler for *path* and return its result.

        The matched handler receives ``*prefix`` then the captures. With
        no match, ``not_found(*prefix)`` runs instead, or ``NotFound``
        propagates when no fallback is given.
        """
        try:
            match = self.match(path)
        except NotFound:
            if not_found is None:
                raise
            return not_found(*prefix)
        return match.dispatch(*prefix)


def route(
    request: Request,
    routes: RouteTable,
    not_found: Callable[[], Any] | None = None,
) -> Any:
    """Dispatch *request* to the first matching route handler.

    The handler is called with the capture groups as positional
    arguments; with no match, ``not_found()`` is called with none.
    Returns whatever the invoked handler returns. Raises ``NotFound``
    when nothing matches and no fallback is given.
    """
    return Router(routes).dispatch(request.path, not_found)
