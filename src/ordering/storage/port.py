"""Key-value storage port.

The cart and the order history are kept the way a browser keeps them: one
serialized JSON string per key. Adapters only move strings around; encoding
and decoding belong to the callers.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract string key-value store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting an absent key is not an error."""
        ...

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class SessionStore(KeyValueStore):
    """View of another store confined to one browser session.

    Every key is prefixed with the session id, so ``cart`` for session
    ``abc`` lands under ``session:abc:cart`` in the backing store.
    """

    def __init__(self, backend: KeyValueStore, session_id: str) -> None:
        self.backend = backend
        self.session_id = session_id

    def _key(self, key: str) -> str:
        return f"session:{self.session_id}:{key}"

    def get(self, key: str) -> str | None:
        return self.backend.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        self.backend.set(self._key(key), value)

    def delete(self, key: str) -> None:
        self.backend.delete(self._key(key))
