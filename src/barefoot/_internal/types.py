"""Shared type aliases used across barefoot modules."""

from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeAlias

# Route handler, called with the regex capture groups
Handler: TypeAlias = Callable[..., Any]

# A route table: ordered (pattern, handler) pairs or a pattern -> handler dict
RouteTable: TypeAlias = Iterable[tuple[str, Handler]] | Mapping[str, Handler]
