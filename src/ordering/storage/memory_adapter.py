"""In-process key-value store for development and testing."""

from ordering.storage.port import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store. Contents are lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)

    def clear(self) -> None:
        self.data.clear()
