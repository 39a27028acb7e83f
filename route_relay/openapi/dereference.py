"""Internal `$ref` resolution for OpenAPI and Swagger documents.

Only same-document JSON-pointer references (`#/...`) are resolved. The result
is a plain tree of dicts and lists that can be serialized to JSON; a reference
that points back into its own resolution chain is left as the `$ref` node.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import unquote

from .errors import OpenApiDocumentError


def openapi_dereference_document(document: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of the document with internal references inlined.

    Args:
        document: Parsed OpenAPI 3.x or Swagger 2.0 document.

    Returns:
        dict[str, Any]: Dereferenced document copy.

    Raises:
        OpenApiDocumentError: Raised for non-mapping documents, a missing version
            field, external references, or unresolvable pointers.
    """

    if not isinstance(document, dict):
        raise OpenApiDocumentError("OpenAPI specification must be an object")
    if "openapi" not in document and "swagger" not in document:
        raise OpenApiDocumentError("OpenAPI specification must declare an `openapi` or `swagger` version")

    return _openapi_resolve_node(node=document, root=document, active_references=())


def openapi_resolve_pointer(root: dict[str, Any], reference: str) -> Any:
    """Resolve one `#/...` JSON pointer against the document root.

    Args:
        root: Document root.
        reference: Reference string, e.g. `#/components/schemas/Pet`.

    Returns:
        Any: Referenced node, not yet dereferenced.

    Raises:
        OpenApiDocumentError: Raised for external references and missing targets.
    """

    if not reference.startswith("#"):
        raise OpenApiDocumentError(f"External reference is not supported: {reference}")

    pointer = reference[1:]
    if pointer in ("", "/"):
        return root
    if not pointer.startswith("/"):
        raise OpenApiDocumentError(f"Invalid JSON pointer reference: {reference}")

    current_node: Any = root
    for raw_token in pointer[1:].split("/"):
        token = unquote(raw_token).replace("~1", "/").replace("~0", "~")
        if isinstance(current_node, dict) and token in current_node:
            current_node = current_node[token]
        elif isinstance(current_node, list) and token.isdigit() and int(token) < len(current_node):
            current_node = current_node[int(token)]
        else:
            raise OpenApiDocumentError(f"Unresolvable reference: {reference}")
    return current_node


def _openapi_resolve_node(node: Any, root: dict[str, Any], active_references: tuple[str, ...]) -> Any:
    """Recursively inline references below one node.

    Args:
        node: Current node.
        root: Document root used for pointer resolution.
        active_references: References currently being expanded above this node.

    Returns:
        Any: Dereferenced copy of the node.

    Raises:
        OpenApiDocumentError: Raised when a reference cannot be resolved.
    """

    if isinstance(node, list):
        return [_openapi_resolve_node(item, root, active_references) for item in node]
    if not isinstance(node, dict):
        return node

    reference = node.get("$ref")
    if not isinstance(reference, str):
        return {key: _openapi_resolve_node(value, root, active_references) for key, value in node.items()}

    if reference in active_references:
        return dict(node)

    resolved_target = _openapi_resolve_node(
        node=openapi_resolve_pointer(root, reference),
        root=root,
        active_references=active_references + (reference,),
    )
    sibling_values = {key: value for key, value in node.items() if key != "$ref"}
    if not sibling_values or not isinstance(resolved_target, dict):
        return resolved_target

    merged_node = dict(resolved_target)
    merged_node.update(_openapi_resolve_node(sibling_values, root, active_references))
    return merged_node
