"""OpenAPI intake flow: dereference, cache path items, summarize."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from route_relay.cache import RouteStore

from .dereference import openapi_dereference_document
from .path_summary import openapi_summarize_paths

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OpenApiIntakeResult:
    """Result contract for one document intake.

    Attributes:
        stored_paths: Path names written to the route store.
        path_summaries: Per-path operation summaries.
    """

    stored_paths: list[str]
    path_summaries: list[dict[str, object]]


def openapi_intake_document(document: dict[str, Any], route_store: RouteStore) -> OpenApiIntakeResult:
    """Dereference a parsed document and store its path items.

    Args:
        document: Parsed OpenAPI or Swagger document.
        route_store: Route store receiving dereferenced path items.

    Returns:
        OpenApiIntakeResult: Stored path names and summaries.

    Raises:
        OpenApiDocumentError: Raised when the document cannot be dereferenced.
        RouteCacheError: Raised when path items cannot be stored.
    """

    dereferenced_document = openapi_dereference_document(document)
    paths = dereferenced_document.get("paths")
    if not isinstance(paths, dict) or not paths:
        logger.info("openapi_intake_no_paths")
        return OpenApiIntakeResult(stored_paths=[], path_summaries=[])

    stored_paths = route_store.route_store_save_paths(paths)
    return OpenApiIntakeResult(stored_paths=stored_paths, path_summaries=openapi_summarize_paths(paths))
