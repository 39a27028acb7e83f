"""Route storage on top of the key/value cache.

Each path item is stored as JSON under `path:<path>`, and the list of stored
path names is stored as a JSON array under `all_paths`.
"""

from __future__ import annotations

import json
from typing import Any, Final

import structlog

from .errors import RouteCacheError
from .interfaces import RouteCachePort

logger = structlog.get_logger(__name__)

ROUTE_STORE_PATH_KEY_PREFIX: Final[str] = "path:"
ROUTE_STORE_ALL_PATHS_KEY: Final[str] = "all_paths"


def route_store_path_key(path: str) -> str:
    """Return cache key for one API path."""

    return f"{ROUTE_STORE_PATH_KEY_PREFIX}{path}"


class RouteStore:
    """Read and write dereferenced path items through a route cache."""

    def __init__(self, cache: RouteCachePort):
        if cache is None:
            raise ValueError("cache must not be None")
        self._cache = cache

    def route_store_save_paths(self, paths: dict[str, Any]) -> list[str]:
        """Store every path item plus the list of path names.

        Args:
            paths: Mapping of API path to dereferenced path item.

        Returns:
            list[str]: Stored path names in document order.

        Raises:
            RouteCacheError: Raised when a cache write fails.
        """

        for path, path_item in paths.items():
            self._cache.cache_set(route_store_path_key(path), json.dumps(path_item))

        stored_paths = list(paths.keys())
        self._cache.cache_set(ROUTE_STORE_ALL_PATHS_KEY, json.dumps(stored_paths))
        logger.info("route_store_paths_saved", path_count=len(stored_paths))
        return stored_paths

    def route_store_get_path(self, path: str) -> dict[str, Any] | None:
        """Load one stored path item.

        Args:
            path: API path as it appeared in the document.

        Returns:
            dict[str, Any] | None: Path item, or None when not stored.

        Raises:
            RouteCacheError: Raised when the cache read fails or the stored item is corrupt.
        """

        cache_key = route_store_path_key(path)
        stored_value = self._cache.cache_get(cache_key)
        if stored_value is None:
            return None
        path_item = _route_store_decode(cache_key, stored_value)
        if not isinstance(path_item, dict):
            raise RouteCacheError(f"route cache value for key={cache_key} is not a JSON object")
        return path_item

    def route_store_list_paths(self) -> list[str]:
        """Return stored path names, empty when nothing was stored yet.

        Raises:
            RouteCacheError: Raised when the cache read fails or the stored list is corrupt.
        """

        stored_value = self._cache.cache_get(ROUTE_STORE_ALL_PATHS_KEY)
        if stored_value is None:
            return []
        stored_paths = _route_store_decode(ROUTE_STORE_ALL_PATHS_KEY, stored_value)
        if not isinstance(stored_paths, list) or not all(isinstance(path, str) for path in stored_paths):
            raise RouteCacheError(f"route cache value for key={ROUTE_STORE_ALL_PATHS_KEY} is not a list of paths")
        return stored_paths


def _route_store_decode(cache_key: str, stored_value: str) -> Any:
    try:
        return json.loads(stored_value)
    except ValueError as error:
        raise RouteCacheError(f"route cache value for key={cache_key} is not valid JSON") from error
