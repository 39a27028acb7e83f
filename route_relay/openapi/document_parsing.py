"""OpenAPI document text parsing and URL retrieval."""

from __future__ import annotations

import json
from typing import Any, Final

import httpx
import structlog
import yaml

from .errors import OpenApiDocumentError, OpenApiFetchError

logger = structlog.get_logger(__name__)

OPENAPI_YAML_CONTENT_TYPES: Final[frozenset[str]] = frozenset({"application/x-yaml", "text/yaml"})


def openapi_parse_document_text(
    document_text: str | bytes,
    allowed_formats: tuple[str, ...] = ("json", "yaml"),
) -> dict[str, Any]:
    """Parse document text trying each allowed format in order.

    Args:
        document_text: Raw document content.
        allowed_formats: Ordered subset of `json` and `yaml`.

    Returns:
        dict[str, Any]: Parsed document mapping.

    Raises:
        OpenApiDocumentError: Raised when content matches no allowed format, or is not a mapping.
    """

    if not allowed_formats or set(allowed_formats) - {"json", "yaml"}:
        raise ValueError("allowed_formats must be a non-empty subset of: json, yaml")

    if isinstance(document_text, bytes):
        try:
            document_text = document_text.decode("utf-8")
        except UnicodeDecodeError as error:
            raise OpenApiDocumentError("Content is not valid UTF-8 text") from error

    if not document_text.strip():
        raise OpenApiDocumentError("OpenAPI specification is required")

    parsed_document: Any = None
    parsed_format: str | None = None
    for document_format in allowed_formats:
        try:
            parsed_document = _openapi_load_text(document_text, document_format)
        except (ValueError, yaml.YAMLError):
            continue
        parsed_format = document_format
        break

    if parsed_format is None:
        if allowed_formats == ("json",):
            raise OpenApiDocumentError("Content is not valid JSON")
        if allowed_formats == ("yaml",):
            raise OpenApiDocumentError("Content is not valid YAML")
        raise OpenApiDocumentError("Content is neither valid JSON nor YAML")

    if not isinstance(parsed_document, dict):
        raise OpenApiDocumentError("OpenAPI specification must be an object")

    logger.debug("openapi_document_parsed", document_format=parsed_format)
    return parsed_document


def openapi_formats_for_content_type(content_type: str | None) -> tuple[str, ...]:
    """Return parse formats accepted for a request content type.

    YAML media types parse as YAML only; anything else parses as JSON.
    """

    media_type = (content_type or "").split(";", maxsplit=1)[0].strip().lower()
    if media_type in OPENAPI_YAML_CONTENT_TYPES:
        return ("yaml",)
    return ("json",)


def openapi_fetch_document(http_client: httpx.Client, url: str, timeout_seconds: float = 30.0) -> dict[str, Any]:
    """Download and parse one OpenAPI document.

    Args:
        http_client: Pooled HTTP client.
        url: Absolute document URL.
        timeout_seconds: HTTP timeout in seconds.

    Returns:
        dict[str, Any]: Parsed document mapping.

    Raises:
        ValueError: Raised when url is blank.
        OpenApiFetchError: Raised for transport failures and non-success HTTP status.
        OpenApiDocumentError: Raised when downloaded content cannot be parsed.
    """

    normalized_url = url.strip()
    if not normalized_url:
        raise ValueError("url must not be blank")

    logger.info("openapi_document_fetch_started", url=normalized_url)
    try:
        response = http_client.get(normalized_url, timeout=timeout_seconds, follow_redirects=True)
    except httpx.HTTPError as error:
        raise OpenApiFetchError(f"OpenAPI document request failed: {error}") from error

    if response.is_error:
        raise OpenApiFetchError(
            f"OpenAPI document URL returned HTTP {response.status_code}",
            status_code=response.status_code,
        )

    return openapi_parse_document_text(response.content)


def _openapi_load_text(document_text: str, document_format: str) -> Any:
    if document_format == "json":
        return json.loads(document_text)
    if document_format == "yaml":
        return yaml.safe_load(document_text)
    raise ValueError(f"unsupported document_format={document_format}")
