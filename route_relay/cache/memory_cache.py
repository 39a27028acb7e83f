"""Process-local route cache used for tests and cache-less deployments."""

from __future__ import annotations

import threading

from .interfaces import RouteCachePort


class InMemoryRouteCache(RouteCachePort):
    """Thread-safe dictionary-backed cache."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}
        self._lock = threading.Lock()

    def cache_connection_label(self) -> str:
        """Return in-process cache label.

        Returns:
            str: Constant `memory://` label.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return "memory://"

    def cache_ping(self) -> None:
        """Report connectivity; a process-local cache is always reachable.

        Returns:
            None: Always returns.

        Raises:
            RouteCacheError: This implementation never raises cache errors.
        """

        return None

    def cache_get(self, key: str) -> str | None:
        """Read one stored value.

        Args:
            key: Cache key.

        Returns:
            str | None: Stored value, or None when absent.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        with self._lock:
            return self._values.get(key)

    def cache_set(self, key: str, value: str) -> None:
        """Store one value, replacing any previous value.

        Args:
            key: Cache key.
            value: Serialized value.

        Returns:
            None: Stores as side effect.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        with self._lock:
            self._values[key] = value
