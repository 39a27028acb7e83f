"""Application bootstrap wiring for startup validation and dependency assembly."""

from __future__ import annotations

import httpx
from fastapi import FastAPI

from route_relay.adapters import FlowWebServiceAdapter, PollConfig
from route_relay.api import create_api_application
from route_relay.cache import InMemoryRouteCache, RedisRouteCache, RouteCachePort, cache_create_redis_client
from route_relay.config import AppSettings, config_load_settings
from route_relay.jobs import CompletionPoller, FlowRunOrchestrator
from route_relay.logging_config import logging_configure


def bootstrap_create_http_client() -> httpx.Client:
    """Create one pooled HTTP client safe for concurrent use across threads.

    Returns:
        httpx.Client: Client with connection pooling limits applied.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return httpx.Client(limits=httpx.Limits(max_connections=50, max_keepalive_connections=10))


def bootstrap_create_route_cache(settings: AppSettings) -> RouteCachePort:
    """Build the configured route cache backend.

    Args:
        settings: Validated runtime settings.

    Returns:
        RouteCachePort: Redis-backed or in-memory route cache.

    Raises:
        ValueError: Raised when the Redis URL is blank.
    """

    if settings.cache_backend == "memory":
        return InMemoryRouteCache()
    return RedisRouteCache(client=cache_create_redis_client(settings.redis_url), redis_url=settings.redis_url)


def bootstrap_create_flow_orchestrator(settings: AppSettings, http_client: httpx.Client) -> FlowRunOrchestrator:
    """Build orchestration facade wired to the remote flow web service.

    Args:
        settings: Validated runtime settings.
        http_client: Pooled HTTP client shared by launch and status calls.

    Returns:
        FlowRunOrchestrator: Fully wired orchestration facade.

    Raises:
        ValueError: Raised when adapter configuration is invalid.
    """

    flow_adapter = FlowWebServiceAdapter(
        http_client=http_client,
        base_url=settings.flow_api_base_url,
        request_timeout_seconds=settings.flow_request_timeout_seconds,
    )
    return FlowRunOrchestrator(
        launcher=flow_adapter,
        poller=CompletionPoller(status_fetcher=flow_adapter),
        default_poll_config=PollConfig(
            interval_ms=settings.flow_poll_interval_ms,
            timeout_ms=settings.flow_poll_timeout_ms,
        ),
    )


def bootstrap_create_application() -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings = config_load_settings()
    logging_configure(level=settings.log_level)
    flow_http_client = bootstrap_create_http_client()
    openapi_http_client = bootstrap_create_http_client()
    return create_api_application(
        settings=settings,
        route_cache=bootstrap_create_route_cache(settings),
        flow_orchestrator=bootstrap_create_flow_orchestrator(settings, flow_http_client),
        openapi_http_client=openapi_http_client,
        shutdown_callbacks=(flow_http_client.close, openapi_http_client.close),
    )
