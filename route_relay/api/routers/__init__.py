"""API router package for endpoint composition."""

from .flows import api_create_flow_router
from .health import api_create_health_router
from .openapi_routes import api_create_openapi_router

__all__ = ["api_create_flow_router", "api_create_health_router", "api_create_openapi_router"]
