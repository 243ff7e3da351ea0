"""Request headers — a read-only, case-insensitive view.

ASGI hands over ``(name, value)`` byte pairs. They are decoded once, at
construction, into lower-cased names so every lookup is a plain string
comparison.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Case-insensitive header mapping; the first value for a name wins.

    ``pairs()`` still yields every field in arrival order, which is what
    the CGI metadata builder needs to fold repeated headers.
    """

    __slots__ = ("_fields",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        self._fields: tuple[tuple[str, str], ...] = tuple(
            (name.decode("latin-1").lower(), value.decode("latin-1")) for name, value in raw
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> Headers:
        """Build headers from ``(name, value)`` string pairs."""
        return cls((name.encode("latin-1"), value.encode("latin-1")) for name, value in pairs)

    def __getitem__(self, key: str) -> str:
        wanted = key.lower()
        for name, value in self._fields:
            if name == wanted:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        wanted = key.lower()
        return any(name == wanted for name, _ in self._fields)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._fields))

    def __len__(self) -> int:
        return len({name for name, _ in self._fields})

    def __repr__(self) -> str:
        return f"Headers({dict(self)!r})"

    def pairs(self) -> Iterator[tuple[str, str]]:
        """Yield every ``(name, value)`` field, duplicates included."""
        yield from self._fields
