"""Health endpoint router composition for app and route cache checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from route_relay.cache import RouteCacheError, RouteCachePort


def api_create_health_router(route_cache: RouteCachePort) -> APIRouter:
    """Create health-check router with app and route cache connectivity status.

    Args:
        route_cache: Route cache whose connectivity is reported.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when route_cache is invalid.
    """

    if route_cache is None:
        raise ValueError("route_cache must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application and route cache health state.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.

        Raises:
            RuntimeError: Raised if the health payload cannot be produced.
        """

        try:
            route_cache.cache_ping()
            payload = {
                "status": "ok",
                "app": "up",
                "cache": "ok",
                "detail": "route cache connectivity verified",
                "target": route_cache.cache_connection_label(),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_200_OK)
        except RouteCacheError as error:
            payload = {
                "status": "degraded",
                "app": "up",
                "cache": "down",
                "detail": str(error),
                "target": route_cache.cache_connection_label(),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return router
