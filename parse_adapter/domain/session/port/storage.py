"""SessionStorage port - durable key/value storage for the current session."""

from typing import Protocol


class SessionStorage(Protocol):
    """Durable string storage, in the shape of browser ``localStorage``."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def remove(self, key: str) -> None:
        """Delete ``key``. Removing an absent key is not an error."""
        ...
