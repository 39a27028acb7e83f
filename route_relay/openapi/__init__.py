"""OpenAPI document intake package."""

from .dereference import openapi_dereference_document, openapi_resolve_pointer
from .document_parsing import (
	OPENAPI_YAML_CONTENT_TYPES,
	openapi_fetch_document,
	openapi_formats_for_content_type,
	openapi_parse_document_text,
)
from .errors import OpenApiDocumentError, OpenApiFetchError
from .intake import OpenApiIntakeResult, openapi_intake_document
from .path_summary import OPENAPI_SUMMARY_METHODS, openapi_summarize_paths

__all__ = [
	"OPENAPI_SUMMARY_METHODS",
	"OPENAPI_YAML_CONTENT_TYPES",
	"OpenApiDocumentError",
	"OpenApiFetchError",
	"OpenApiIntakeResult",
	"openapi_dereference_document",
	"openapi_fetch_document",
	"openapi_formats_for_content_type",
	"openapi_intake_document",
	"openapi_parse_document_text",
	"openapi_resolve_pointer",
	"openapi_summarize_paths",
]
