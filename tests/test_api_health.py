"""Tests for API health endpoint behavior.

These tests validate deterministic response behavior for healthy and
cache-unavailable states.
"""

import httpx
from fastapi.testclient import TestClient

from route_relay.api.application import create_api_application
from route_relay.cache import InMemoryRouteCache, RouteCacheError
from route_relay.config import AppSettings


class _FailingRouteCache(InMemoryRouteCache):
    """Test double that simulates a route cache connectivity failure."""

    def cache_connection_label(self) -> str:
        """Return deterministic target label.

        Returns:
            str: Health target label.

        Raises:
            RuntimeError: Never raised by this test double.
        """

        return "redis://cache.test:6379/0"

    def cache_ping(self) -> None:
        """Raise deterministic cache error.

        Returns:
            None: This method does not return.

        Raises:
            RouteCacheError: Always raised by this test double.
        """

        raise RouteCacheError("route cache connectivity check failed")


class _FlowOrchestratorStub:
    """Minimal orchestrator stub for API factory dependency injection."""

    def job_run(self, request, config=None, cancel_token=None):
        raise AssertionError("health tests never dispatch flows")


def _build_settings() -> AppSettings:
    """Create test settings object.

    Returns:
        AppSettings: Deterministic test settings for API creation.

    Raises:
        ValueError: Raised by AppSettings when values are invalid.
    """

    return AppSettings(
        environment_name="test",
        cache_backend="memory",
        flow_api_token="token",
        flow_user_id="user-1",
    )


def _build_client(route_cache) -> TestClient:
    http_client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
    application = create_api_application(_build_settings(), route_cache, _FlowOrchestratorStub(), http_client)
    return TestClient(application)


def test_api_health_returns_success_when_cache_is_available() -> None:
    """Return HTTP 200 and healthy payload when cache ping succeeds.

    Returns:
        None: Assertions validate response behavior.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    client = _build_client(InMemoryRouteCache())

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["app"] == "up"
    assert response.json()["cache"] == "ok"
    assert response.json()["target"] == "memory://"


def test_api_health_returns_service_unavailable_when_cache_is_down() -> None:
    """Return HTTP 503 and degraded payload when cache ping fails.

    Returns:
        None: Assertions validate response behavior.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    client = _build_client(_FailingRouteCache())

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
    assert response.json()["app"] == "up"
    assert response.json()["cache"] == "down"
    assert response.json()["target"] == "redis://cache.test:6379/0"


def test_api_index_returns_service_metadata() -> None:
    """Return service name, readiness and environment from the root route.

    Returns:
        None: Assertions validate response behavior.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    client = _build_client(InMemoryRouteCache())

    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"service": "openapi-route-relay", "status": "ready", "environment": "test"}
