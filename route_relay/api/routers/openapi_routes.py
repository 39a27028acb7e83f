"""OpenAPI intake and cached-route dispatch router composition."""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog
from fastapi import APIRouter, Body, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from route_relay.adapters import PipelineInput
from route_relay.cache import RouteCacheError, RouteStore
from route_relay.config import AppSettings
from route_relay.jobs import FlowOrchestratorPort
from route_relay.openapi import (
    OpenApiDocumentError,
    OpenApiFetchError,
    OpenApiIntakeResult,
    openapi_fetch_document,
    openapi_formats_for_content_type,
    openapi_intake_document,
    openapi_parse_document_text,
)

from ..flow_dispatch import api_error_response, api_run_flow

logger = structlog.get_logger(__name__)

_INTAKE_SUCCESS_MESSAGE = "Paths stored in cache successfully"


def api_create_openapi_router(
    settings: AppSettings,
    route_store: RouteStore,
    flow_orchestrator: FlowOrchestratorPort,
    openapi_http_client: httpx.Client,
) -> APIRouter:
    """Create router for document intake and cached route dispatch.

    Args:
        settings: Runtime settings.
        route_store: Route store over the key/value cache.
        flow_orchestrator: Orchestration facade used for route dispatch.
        openapi_http_client: Pooled HTTP client used for URL intake.

    Returns:
        APIRouter: Router exposing `/api/full-spec`, `/api/full-spec-from-url` and `/api/paths` endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if route_store is None:
        raise ValueError("route_store must not be None")
    if flow_orchestrator is None:
        raise ValueError("flow_orchestrator must not be None")
    if openapi_http_client is None:
        raise ValueError("openapi_http_client must not be None")

    router = APIRouter(prefix="/api", tags=["openapi"])

    @router.post("/full-spec", response_model=None)
    async def api_openapi_full_spec(request: Request) -> dict[str, object] | JSONResponse:
        """Dereference and store an OpenAPI document sent in the request body.

        JSON is expected unless `Content-Type` is `application/x-yaml` or `text/yaml`.

        Args:
            request: Incoming request carrying the raw document.

        Returns:
            dict[str, object] | JSONResponse: Path summaries or error response.

        Raises:
            RuntimeError: Raised when intake fails unexpectedly.
        """

        request_body = await request.body()
        if not request_body.strip():
            return api_error_response(
                status.HTTP_400_BAD_REQUEST,
                "OPENAPI_REQUIRED",
                "OpenAPI specification is required",
            )

        try:
            document = openapi_parse_document_text(
                request_body,
                allowed_formats=openapi_formats_for_content_type(request.headers.get("content-type")),
            )
            intake_result = await run_in_threadpool(openapi_intake_document, document, route_store)
        except OpenApiDocumentError as error:
            return _api_invalid_document_response(error)
        except RouteCacheError as error:
            return api_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "ROUTE_CACHE_UNAVAILABLE", str(error))

        return _api_serialize_intake_result(intake_result)

    @router.post("/full-spec-from-url", response_model=None)
    def api_openapi_full_spec_from_url(
        payload: dict[str, Any] | None = Body(default=None),
    ) -> dict[str, object] | JSONResponse:
        """Download, dereference and store an OpenAPI document.

        Args:
            payload: JSON body with a `url` field.

        Returns:
            dict[str, object] | JSONResponse: Path summaries or error response.

        Raises:
            RuntimeError: Raised when intake fails unexpectedly.
        """

        url = (payload or {}).get("url")
        if not isinstance(url, str) or not url.strip():
            return api_error_response(status.HTTP_400_BAD_REQUEST, "URL_REQUIRED", "URL is required")

        try:
            document = openapi_fetch_document(
                http_client=openapi_http_client,
                url=url,
                timeout_seconds=settings.openapi_fetch_timeout_seconds,
            )
            intake_result = openapi_intake_document(document, route_store)
        except OpenApiFetchError as error:
            return api_error_response(
                status.HTTP_400_BAD_REQUEST,
                "OPENAPI_FETCH_FAILED",
                "Failed to fetch OpenAPI specification",
                extra={"details": str(error)},
            )
        except OpenApiDocumentError as error:
            return _api_invalid_document_response(error)
        except RouteCacheError as error:
            return api_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "ROUTE_CACHE_UNAVAILABLE", str(error))

        return _api_serialize_intake_result(intake_result)

    @router.get("/paths", response_model=None)
    def api_openapi_dispatch_path(path: str = Query(min_length=1)) -> dict[str, object] | JSONResponse:
        """Send one cached route description to the configured route flow.

        Args:
            path: API path exactly as stored from the document.

        Returns:
            dict[str, object] | JSONResponse: Path plus flow response, or error response.

        Raises:
            RuntimeError: Raised when dispatch fails unexpectedly.
        """

        try:
            path_item = route_store.route_store_get_path(path)
        except RouteCacheError as error:
            return api_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "ROUTE_CACHE_UNAVAILABLE", str(error))

        if path_item is None:
            logger.info("openapi_path_not_found", path=path)
            return api_error_response(status.HTTP_404_NOT_FOUND, "PATH_NOT_FOUND", "Path not found in database")

        pipeline_inputs = [
            PipelineInput(input_name="input", value=json.dumps({"path": path, "data": path_item})),
        ]
        flow_response = api_run_flow(settings, flow_orchestrator, settings.flow_route_flow_type, pipeline_inputs)
        if isinstance(flow_response, JSONResponse):
            return flow_response
        return {"path": path, "flowResponse": flow_response}

    @router.get("/paths/list")
    def api_openapi_list_paths() -> JSONResponse:
        """Return names of every stored path.

        Returns:
            JSONResponse: Stored path names.

        Raises:
            RuntimeError: Raised when the cache read fails unexpectedly.
        """

        try:
            stored_paths = route_store.route_store_list_paths()
        except RouteCacheError as error:
            return api_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "ROUTE_CACHE_UNAVAILABLE", str(error))
        return JSONResponse(content={"paths": stored_paths, "count": len(stored_paths)}, status_code=status.HTTP_200_OK)

    return router


def _api_serialize_intake_result(intake_result: OpenApiIntakeResult) -> dict[str, object]:
    return {
        "paths": intake_result.path_summaries,
        "message": _INTAKE_SUCCESS_MESSAGE,
    }


def _api_invalid_document_response(error: OpenApiDocumentError) -> JSONResponse:
    logger.warning("openapi_document_rejected", error_message=str(error))
    return api_error_response(
        status.HTTP_400_BAD_REQUEST,
        "INVALID_OPENAPI",
        "Invalid OpenAPI specification",
        extra={"details": str(error)},
    )
