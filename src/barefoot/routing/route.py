"""Route and RouteMatch frozen dataclasses."""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Route:
    """A route table entry.

    ``pattern`` is the normalized path pattern; ``regex`` is its compiled
    form, anchored at both ends by ``fullmatch``.
    """

    pattern: str
    handler: Callable[..., Any]
    regex: re.Pattern[str] = field(repr=False, compare=False)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``args`` holds the capture groups in order of appearance; groups
    that did not take part in the match are empty strings.
    """

    route: Route
    args: tuple[str, ...]

    def dispatch(self, *prefix: Any) -> Any:
        """Call the matched handler with *prefix* followed by the captures."""
        return self.route.handler(*prefix, *self.args)
