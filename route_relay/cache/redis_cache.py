"""Redis-backed route cache implementation."""

from __future__ import annotations

import redis
from redis.connection import parse_url

from .errors import RouteCacheError
from .interfaces import RouteCachePort


def cache_create_redis_client(redis_url: str) -> redis.Redis:
    """Create a pooled Redis client returning decoded strings.

    Args:
        redis_url: Redis connection URL.

    Returns:
        redis.Redis: Client backed by a shared connection pool.

    Raises:
        ValueError: Raised when the Redis URL is blank.
    """

    if not redis_url.strip():
        raise ValueError("redis_url must not be blank")

    return redis.Redis.from_url(redis_url.strip(), encoding="utf-8", decode_responses=True)


class RedisRouteCache(RouteCachePort):
    """Route cache backed by a Redis client."""

    def __init__(self, client: redis.Redis, redis_url: str = ""):
        """Initialize Redis route cache.

        Args:
            client: Redis client with `decode_responses=True`.
            redis_url: Source URL used only for diagnostics labels.

        Raises:
            ValueError: Raised when client is None.
        """

        if client is None:
            raise ValueError("client must not be None")
        self._client = client
        self._redis_url = redis_url.strip()

    def cache_connection_label(self) -> str:
        """Return Redis target without credentials.

        Returns:
            str: `redis://host:port/db` style label.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        if not self._redis_url:
            return "redis://"
        connection_options = parse_url(self._redis_url)
        host = connection_options.get("host", "localhost")
        port = connection_options.get("port", 6379)
        database = connection_options.get("db", 0)
        return f"redis://{host}:{port}/{database}"

    def cache_ping(self) -> None:
        """Verify Redis connectivity with PING.

        Raises:
            RouteCacheError: Raised when Redis is unreachable.
        """

        try:
            self._client.ping()
        except redis.RedisError as error:
            raise RouteCacheError("route cache connectivity check failed") from error

    def cache_get(self, key: str) -> str | None:
        """Read one string value.

        Args:
            key: Cache key.

        Returns:
            str | None: Stored value or None.

        Raises:
            RouteCacheError: Raised when the Redis read fails.
        """

        try:
            return self._client.get(key)
        except redis.RedisError as error:
            raise RouteCacheError(f"route cache read failed for key={key}") from error

    def cache_set(self, key: str, value: str) -> None:
        """Write one string value.

        Args:
            key: Cache key.
            value: Serialized value.

        Raises:
            RouteCacheError: Raised when the Redis write fails.
        """

        try:
            self._client.set(key, value)
        except redis.RedisError as error:
            raise RouteCacheError(f"route cache write failed for key={key}") from error
