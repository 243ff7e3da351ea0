"""Barefoot configuration.

BarefootConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

# Environment variables that override the defaults in from_env()
ENV_CSRF_KEY = "BAREFOOT_SESSION_KEY_CSRF"
ENV_FLASH_KEY = "BAREFOOT_SESSION_KEY_FLASH"
ENV_SECRET_KEY = "BAREFOOT_SECRET_KEY"
ENV_DEBUG = "BAREFOOT_DEBUG"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class BarefootConfig:
    """Configuration for the helpers and the ASGI host.

    All fields have defaults. Override what you need::

        config = BarefootConfig(secret_key="s3cr3t", debug=True)

    The two session keys name the namespaces that hold CSRF tokens and
    flash messages, so several applications can share one session.
    """

    # Session namespaces
    csrf_session_key: str = "barefoot_csrf"
    flash_session_key: str = "barefoot_flash"

    # Signed cookie sessions (ASGI host only)
    secret_key: str = ""
    session_cookie: str = "barefoot_session"
    session_max_age: int = 86400  # 24 hours
    session_secure: bool = False
    session_samesite: str = "lax"

    debug: bool = False

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> BarefootConfig:
        """Build a config from ``BAREFOOT_*`` environment variables.

        Empty or missing variables fall back to the field defaults.
        Keyword *overrides* win over the environment.
        """
        env = os.environ if environ is None else environ
        config = cls()
        values: dict[str, Any] = {}
        if env.get(ENV_CSRF_KEY):
            values["csrf_session_key"] = env[ENV_CSRF_KEY]
        if env.get(ENV_FLASH_KEY):
            values["flash_session_key"] = env[ENV_FLASH_KEY]
        if env.get(ENV_SECRET_KEY):
            values["secret_key"] = env[ENV_SECRET_KEY]
        if env.get(ENV_DEBUG):
            values["debug"] = env[ENV_DEBUG].strip().lower() in _TRUTHY
        values.update(overrides)
        return replace(config, **values)
