"""Redis-backed key-value store.

Keys are prefixed so one Redis database can be shared with other services.
An optional TTL lets abandoned session carts expire on their own.
"""

import redis
import structlog

from ordering.storage.port import KeyValueStore

logger = structlog.get_logger(__name__)


class RedisStore(KeyValueStore):
    """Key-value store over a synchronous redis-py client."""

    def __init__(self, client: redis.Redis, key_prefix: str = "storefront:", ttl: int | None = None) -> None:
        self.client = client
        self.key_prefix = key_prefix
        self.ttl = ttl

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "storefront:", ttl: int | None = None) -> "RedisStore":
        client = redis.Redis.from_url(url, decode_responses=True, socket_timeout=5.0, socket_connect_timeout=5.0)
        kwargs = client.connection_pool.connection_kwargs
        logger.info(
            "redis_store_configured",
            host=kwargs.get("host"),
            port=kwargs.get("port"),
            db=kwargs.get("db"),
            key_prefix=key_prefix,
        )
        return cls(client, key_prefix=key_prefix, ttl=ttl)

    def _full_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def get(self, key: str) -> str | None:
        value = self.client.get(self._full_key(key))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        self.client.set(self._full_key(key), value, ex=self.ttl)

    def delete(self, key: str) -> None:
        self.client.delete(self._full_key(key))
