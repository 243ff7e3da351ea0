"""Flash messages — one-shot values stored in the session.

A message survives until it is read once::

    flash = FlashStore(session)
    flash.set_message("notice", "Saved.")
    flash.get_message("notice")  # "Saved."
    flash.get_message("notice")  # ""
"""

from barefoot.sessions import Session, session_namespace


class FlashStore:
    """Set and consume flash messages inside one session."""

    __slots__ = ("_namespace", "_session")

    def __init__(self, session: Session, namespace: str = "barefoot_flash") -> None:
        self._session = session
        self._namespace = namespace

    def set_message(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any unread message."""
        session_namespace(self._session, self._namespace, create=True)[key] = value

    def get_message(self, key: str, default: str = "") -> str:
        """Return and delete the message under *key*, else *default*."""
        messages = session_namespace(self._session, self._namespace)
        if messages is None or key not in messages:
            return default
        return messages.pop(key)

    def has_message(self, key: str) -> bool:
        """Whether a message is waiting under *key*. Does not consume it."""
        messages = session_namespace(self._session, self._namespace)
        return messages is not None and key in messages
