"""Storage factory.

Provides get_store() / set_store() to swap implementations:
- RedisStore when REDIS_URL is set
- InMemoryStore otherwise (development and testing)
"""

import os

from ordering.storage.memory_adapter import InMemoryStore
from ordering.storage.port import KeyValueStore, SessionStore
from ordering.storage.redis_adapter import RedisStore

_current_store: KeyValueStore | None = None


def get_store() -> KeyValueStore:
    """Return the process-wide backing store, building it from the environment on first use."""
    global _current_store
    if _current_store is None:
        url = os.getenv("REDIS_URL")
        if url:
            ttl = os.getenv("STOREFRONT_SESSION_TTL")
            _current_store = RedisStore.from_url(url, ttl=int(ttl) if ttl else None)
        else:
            _current_store = InMemoryStore()
    return _current_store


def set_store(store: KeyValueStore) -> None:
    """Override the backing store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_store() -> None:
    """Reset to default store."""
    global _current_store
    _current_store = None


def session_store(session_id: str) -> SessionStore:
    """The backing store, scoped to one browser session."""
    return SessionStore(get_store(), session_id)
