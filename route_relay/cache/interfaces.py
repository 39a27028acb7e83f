"""Typed interfaces for route cache responsibilities."""

from typing import Protocol


class RouteCachePort(Protocol):
    """Port definition for a plain string key/value cache."""

    def cache_connection_label(self) -> str:
        """Return cache target label for diagnostics.

        Returns:
            str: Human-readable cache target, without credentials.

        Raises:
            RuntimeError: Raised when target metadata is unavailable.
        """

    def cache_ping(self) -> None:
        """Verify cache connectivity.

        Returns:
            None: Returns only when the backend answered.

        Raises:
            RouteCacheError: Raised when the backend is unreachable.
        """

    def cache_get(self, key: str) -> str | None:
        """Return stored value for key, or None when absent.

        Args:
            key: Cache key.

        Returns:
            str | None: Stored value.

        Raises:
            RouteCacheError: Raised when the backend read fails.
        """

    def cache_set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value.

        Args:
            key: Cache key.
            value: Serialized value.

        Returns:
            None: Stores as side effect.

        Raises:
            RouteCacheError: Raised when the backend write fails.
        """
