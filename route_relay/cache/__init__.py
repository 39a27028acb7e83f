"""Route cache package for key/value storage of dereferenced API paths."""

from .errors import RouteCacheError
from .interfaces import RouteCachePort
from .memory_cache import InMemoryRouteCache
from .redis_cache import RedisRouteCache, cache_create_redis_client
from .route_store import ROUTE_STORE_ALL_PATHS_KEY, RouteStore, route_store_path_key

__all__ = [
	"InMemoryRouteCache",
	"ROUTE_STORE_ALL_PATHS_KEY",
	"RedisRouteCache",
	"RouteCacheError",
	"RouteCachePort",
	"RouteStore",
	"cache_create_redis_client",
	"route_store_path_key",
]
