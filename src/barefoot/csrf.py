"""CSRF tokens — per-identifier, session-backed.

Each identifier (typically one per form, e.g. ``"login"``) gets its own
random token, created on first use and kept in the session until it is
unset. Submissions are checked with a constant-time comparison.

Usage::

    csrf = CSRFManager(session)

    # rendering the form
    token = csrf.get_token("login")

    # handling the submit
    csrf.validate_token("login", form.get("_csrf_token"))  # raises CSRFError
"""

import logging
import secrets
from collections.abc import Callable
from typing import Any

from barefoot.errors import CSRFError
from barefoot.sessions import Session, session_namespace

_log = logging.getLogger("barefoot.security")

# Random bytes per token; hex-encoded to twice as many characters
TOKEN_BYTES = 16


class CSRFManager:
    """Issue, check, and revoke CSRF tokens inside one session."""

    __slots__ = ("_namespace", "_session")

    def __init__(self, session: Session, namespace: str = "barefoot_csrf") -> None:
        self._session = session
        self._namespace = namespace

    def get_token(self, id: str) -> str:  # noqa: A002
        """Return the token for *id*, generating it on first request."""
        tokens = session_namespace(self._session, self._namespace, create=True)
        token = tokens.get(id)
        if not token:
            token = secrets.token_hex(TOKEN_BYTES)
            tokens[id] = token
        return token

    def check_token(self, id: str, candidate: Any) -> bool:  # noqa: A002
        """Return whether *candidate* equals the token for *id*.

        Both sides are compared as bytes in constant time; a candidate
        with non-ASCII characters is simply unequal.
        """
        if not isinstance(candidate, str):
            return False
        expected = self.get_token(id).encode("ascii")
        return secrets.compare_digest(expected, candidate.encode("utf-8", "surrogatepass"))

    def validate_token(
        self,
        id: str,  # noqa: A002
        candidate: Any,
        on_invalid: Callable[[], Any] | None = None,
    ) -> None:
        """Reject a request whose *candidate* token does not match.

        Calls *on_invalid* when given; otherwise raises ``CSRFError``
        (403). Returns ``None`` when the token is valid.
        """
        if self.check_token(id, candidate):
            return
        _log.warning("CSRF token mismatch for %r", id)
        if on_invalid is not None:
            on_invalid()
            return
        raise CSRFError

    def unset_token(self, id: str) -> None:  # noqa: A002
        """Forget the token for *id*; the next ``get_token`` makes a new one."""
        tokens = session_namespace(self._session, self._namespace)
        if tokens is not None:
            tokens.pop(id, None)
