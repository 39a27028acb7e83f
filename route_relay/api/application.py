"""FastAPI application factory for the route relay service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from route_relay.cache import RouteCachePort, RouteStore
from route_relay.config import AppSettings
from route_relay.jobs import FlowOrchestratorPort

from .routers import api_create_flow_router, api_create_health_router, api_create_openapi_router


def create_api_application(
    settings: AppSettings,
    route_cache: RouteCachePort,
    flow_orchestrator: FlowOrchestratorPort,
    openapi_http_client: httpx.Client,
    shutdown_callbacks: tuple[Callable[[], None], ...] = (),
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings.
        route_cache: Key/value cache holding dereferenced path items.
        flow_orchestrator: Orchestration facade for flow dispatch.
        openapi_http_client: Pooled HTTP client used for OpenAPI URL intake.
        shutdown_callbacks: Resource release callbacks run on application shutdown.

    Returns:
        FastAPI: Framework application instance with all routers mounted.

    Raises:
        ValueError: Raised when router dependencies are invalid.
    """

    @asynccontextmanager
    async def application_lifespan(_application: FastAPI) -> AsyncIterator[None]:
        yield
        for shutdown_callback in shutdown_callbacks:
            shutdown_callback()

    application = FastAPI(title="OpenAPI Route Relay", lifespan=application_lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return minimal service metadata.

        Returns:
            dict[str, str]: Service name, status and environment.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        return {
            "service": "openapi-route-relay",
            "status": "ready",
            "environment": settings.environment_name,
        }

    route_store = RouteStore(cache=route_cache)
    application.include_router(api_create_health_router(route_cache=route_cache))
    application.include_router(
        api_create_openapi_router(
            settings=settings,
            route_store=route_store,
            flow_orchestrator=flow_orchestrator,
            openapi_http_client=openapi_http_client,
        )
    )
    application.include_router(api_create_flow_router(settings=settings, flow_orchestrator=flow_orchestrator))

    return application
