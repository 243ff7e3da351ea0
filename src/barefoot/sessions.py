"""Session handles and the signed-cookie session codec.

A session is any ``MutableMapping[str, Any]`` scoped to one client.
The helpers only read and write inside it; the host decides how it is
persisted. ``CookieSessions`` is the host used by ``barefoot.app``:
session data is serialized as JSON and signed using ``itsdangerous``.
"""

import logging
from collections.abc import MutableMapping
from typing import Any, TypeAlias

from itsdangerous import BadData, URLSafeTimedSerializer

from barefoot.config import BarefootConfig
from barefoot.errors import ConfigurationError
from barefoot.http.request import Request
from barefoot.http.response import Response

Session: TypeAlias = MutableMapping[str, Any]

logger = logging.getLogger("barefoot.sessions")


def session_namespace(
    session: Session,
    key: str,
    *,
    create: bool = False,
) -> dict[str, Any] | None:
    """Return the nested dict stored under *key*.

    With *create*, a missing (or non-dict) entry is replaced by an empty
    dict first. Without it, a missing entry returns ``None`` and the
    session is left untouched.
    """
    value = session.get(key)
    if isinstance(value, dict):
        return value
    if not create:
        return None
    value = {}
    session[key] = value
    return value


class CookieSessions:
    """Signed cookie session codec.

    ``load()`` verifies the cookie and returns the session dict (empty
    when the cookie is missing, tampered, or expired). ``save()``
    re-signs the dict onto the response.

    Usage::

        sessions = CookieSessions(BarefootConfig(secret_key="..."))
        session = sessions.load(request)
        ...
        response = sessions.save(response, session)
    """

    __slots__ = ("_config", "_serializer")

    def __init__(self, config: BarefootConfig) -> None:
        if not config.secret_key:
            msg = "BarefootConfig.secret_key must not be empty."
            raise ConfigurationError(msg)
        self._config = config
        self._serializer = URLSafeTimedSerializer(config.secret_key, salt="barefoot.session")

    def load(self, request: Request) -> dict[str, Any]:
        """Deserialize and verify the session cookie."""
        cookie_value = request.cookies.get(self._config.session_cookie)
        if not cookie_value:
            return {}
        try:
            data = self._serializer.loads(cookie_value, max_age=self._config.session_max_age)
        except BadData:
            logger.debug("Rejected session cookie on %s %s", request.method, request.path)
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def dumps(self, session: Session) -> str:
        """Serialize and sign *session* into a cookie value."""
        return self._serializer.dumps(dict(session))

    def save(self, response: Response, session: Session) -> Response:
        """Attach the signed session cookie to *response*."""
        cfg = self._config
        return response.with_cookie(
            cfg.session_cookie,
            self.dumps(session),
            max_age=cfg.session_max_age,
            secure=cfg.session_secure,
            samesite=cfg.session_samesite,
        )
