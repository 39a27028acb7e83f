"""Tests for OpenAPI parsing, dereferencing, summarizing and intake."""

from __future__ import annotations

import httpx
import pytest

from route_relay.cache import InMemoryRouteCache, RouteStore
from route_relay.openapi import (
    OpenApiDocumentError,
    OpenApiFetchError,
    openapi_dereference_document,
    openapi_fetch_document,
    openapi_formats_for_content_type,
    openapi_intake_document,
    openapi_parse_document_text,
    openapi_resolve_pointer,
    openapi_summarize_paths,
)

_PET_DOCUMENT = {
    "openapi": "3.0.0",
    "info": {"title": "Pets", "version": "1.0"},
    "paths": {
        "/pets": {
            "get": {
                "summary": "List pets",
                "description": "Returns all pets",
                "responses": {
                    "200": {
                        "description": "ok",
                        "content": {
                            "application/json": {
                                "schema": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}
                            }
                        },
                    }
                },
            },
            "parameters": [{"$ref": "#/components/parameters/Limit"}],
        },
        "/pets/{petId}": {
            "delete": {"summary": "Delete pet"},
            "options": {"summary": "Preflight"},
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "properties": {"id": {"type": "integer"}, "owner": {"$ref": "#/components/schemas/Owner"}},
            },
            "Owner": {"type": "object", "properties": {"name": {"type": "string"}}},
        },
        "parameters": {"Limit": {"name": "limit", "in": "query"}},
    },
}


def test_openapi_parse_accepts_json_and_yaml() -> None:
    """Parse JSON text and YAML text into mappings.

    Returns:
        None: Assertions validate parsed content.

    Raises:
        AssertionError: Raised when parsing is incorrect.
    """

    assert openapi_parse_document_text('{"openapi": "3.0.0"}') == {"openapi": "3.0.0"}
    assert openapi_parse_document_text(b"openapi: 3.0.0\npaths: {}\n") == {"openapi": "3.0.0", "paths": {}}


def test_openapi_parse_rejects_yaml_when_only_json_allowed() -> None:
    """Reject YAML content when the caller only accepts JSON.

    Returns:
        None: Assertions validate format restriction.

    Raises:
        AssertionError: Raised when disallowed format is accepted.
    """

    with pytest.raises(OpenApiDocumentError, match="not valid JSON"):
        openapi_parse_document_text("openapi: 3.0.0", allowed_formats=("json",))


@pytest.mark.parametrize(
    ("document_text", "message"),
    [
        ("   ", "is required"),
        ("- just\n- a list\n", "must be an object"),
        ("{unbalanced: [", "neither valid JSON nor YAML"),
    ],
)
def test_openapi_parse_rejects_invalid_content(document_text: str, message: str) -> None:
    """Reject blank, non-mapping and unparseable documents.

    Args:
        document_text: Raw input.
        message: Expected error fragment.

    Returns:
        None: Assertions validate error messages.

    Raises:
        AssertionError: Raised when invalid content is accepted.
    """

    with pytest.raises(OpenApiDocumentError, match=message):
        openapi_parse_document_text(document_text)


@pytest.mark.parametrize(
    ("content_type", "expected_formats"),
    [
        ("application/x-yaml", ("yaml",)),
        ("text/yaml; charset=utf-8", ("yaml",)),
        ("application/json", ("json",)),
        (None, ("json",)),
    ],
)
def test_openapi_formats_follow_content_type(content_type: str | None, expected_formats: tuple[str, ...]) -> None:
    """Select YAML only for YAML media types.

    Args:
        content_type: Request content type.
        expected_formats: Expected parse formats.

    Returns:
        None: Assertions validate format selection.

    Raises:
        AssertionError: Raised when format selection is incorrect.
    """

    assert openapi_formats_for_content_type(content_type) == expected_formats


def test_openapi_dereference_inlines_nested_references() -> None:
    """Inline references recursively, including references inside referenced nodes.

    Returns:
        None: Assertions validate dereferenced tree.

    Raises:
        AssertionError: Raised when references remain.
    """

    dereferenced = openapi_dereference_document(_PET_DOCUMENT)

    pets_item = dereferenced["paths"]["/pets"]
    item_schema = pets_item["get"]["responses"]["200"]["content"]["application/json"]["schema"]["items"]
    assert item_schema["properties"]["owner"] == {"type": "object", "properties": {"name": {"type": "string"}}}
    assert pets_item["parameters"] == [{"name": "limit", "in": "query"}]
    assert "$ref" in _PET_DOCUMENT["paths"]["/pets"]["parameters"][0]


def test_openapi_dereference_keeps_circular_reference_node() -> None:
    """Leave self-referencing schemas as reference nodes instead of recursing forever.

    Returns:
        None: Assertions validate cycle handling.

    Raises:
        AssertionError: Raised when cycles are not handled.
    """

    document = {
        "openapi": "3.0.0",
        "components": {
            "schemas": {
                "Node": {"type": "object", "properties": {"next": {"$ref": "#/components/schemas/Node"}}},
            }
        },
        "paths": {"/nodes": {"get": {"schema": {"$ref": "#/components/schemas/Node"}}}},
    }

    dereferenced = openapi_dereference_document(document)

    node_schema = dereferenced["paths"]["/nodes"]["get"]["schema"]
    assert node_schema["type"] == "object"
    assert node_schema["properties"]["next"] == {"$ref": "#/components/schemas/Node"}


def test_openapi_dereference_rejects_unversioned_and_unresolvable_documents() -> None:
    """Reject documents without a version field and dangling references.

    Returns:
        None: Assertions validate document validation.

    Raises:
        AssertionError: Raised when invalid documents are accepted.
    """

    with pytest.raises(OpenApiDocumentError, match="version"):
        openapi_dereference_document({"paths": {}})
    with pytest.raises(OpenApiDocumentError, match="Unresolvable reference"):
        openapi_dereference_document({"swagger": "2.0", "paths": {"/a": {"$ref": "#/definitions/Missing"}}})
    with pytest.raises(OpenApiDocumentError, match="External reference"):
        openapi_dereference_document({"openapi": "3.0.0", "paths": {"/a": {"$ref": "other.yaml#/A"}}})


def test_openapi_resolve_pointer_unescapes_tokens() -> None:
    """Resolve escaped path segments and list indices.

    Returns:
        None: Assertions validate pointer decoding.

    Raises:
        AssertionError: Raised when pointer decoding is incorrect.
    """

    root = {"paths": {"/pets/{id}": {"tags": ["a", "b"]}}}

    assert openapi_resolve_pointer(root, "#/paths/~1pets~1%7Bid%7D/tags/1") == "b"


def test_openapi_summarize_keeps_known_methods_only() -> None:
    """Keep summary and description for the five summarized methods.

    Returns:
        None: Assertions validate summaries.

    Raises:
        AssertionError: Raised when summary contents are incorrect.
    """

    summaries = openapi_summarize_paths(_PET_DOCUMENT["paths"])

    assert summaries == [
        {"path": "/pets", "data": {"get": {"summary": "List pets", "description": "Returns all pets"}}},
        {"path": "/pets/{petId}", "data": {"delete": {"summary": "Delete pet", "description": None}}},
    ]
    assert openapi_summarize_paths(None) == []


def test_openapi_intake_stores_dereferenced_paths() -> None:
    """Store every dereferenced path item and the path list.

    Returns:
        None: Assertions validate stored cache contents.

    Raises:
        AssertionError: Raised when intake storage is incorrect.
    """

    route_store = RouteStore(InMemoryRouteCache())

    intake_result = openapi_intake_document(_PET_DOCUMENT, route_store)

    assert intake_result.stored_paths == ["/pets", "/pets/{petId}"]
    assert route_store.route_store_list_paths() == ["/pets", "/pets/{petId}"]
    assert route_store.route_store_get_path("/pets")["parameters"] == [{"name": "limit", "in": "query"}]
    assert len(intake_result.path_summaries) == 2


def test_openapi_intake_without_paths_stores_nothing() -> None:
    """Return empty result for documents without paths.

    Returns:
        None: Assertions validate empty intake.

    Raises:
        AssertionError: Raised when empty documents write to the cache.
    """

    route_store = RouteStore(InMemoryRouteCache())

    intake_result = openapi_intake_document({"openapi": "3.0.0"}, route_store)

    assert intake_result.stored_paths == []
    assert route_store.route_store_list_paths() == []


def test_openapi_fetch_document_follows_url_and_maps_failures() -> None:
    """Fetch and parse a YAML document, and map HTTP failures.

    Returns:
        None: Assertions validate fetch behavior.

    Raises:
        AssertionError: Raised when fetch results are incorrect.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/openapi.yaml":
            return httpx.Response(200, content=b"openapi: 3.0.0\npaths: {}\n")
        return httpx.Response(404, text="missing")

    http_client = httpx.Client(transport=httpx.MockTransport(_handler))

    assert openapi_fetch_document(http_client, "https://docs.example.test/openapi.yaml") == {
        "openapi": "3.0.0",
        "paths": {},
    }
    with pytest.raises(OpenApiFetchError, match="HTTP 404") as error_info:
        openapi_fetch_document(http_client, "https://docs.example.test/missing.json")
    assert error_info.value.status_code == 404
