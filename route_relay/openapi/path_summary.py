"""Compact per-path operation summaries for API responses."""

from __future__ import annotations

from typing import Any, Final

OPENAPI_SUMMARY_METHODS: Final[tuple[str, ...]] = ("get", "post", "put", "delete", "patch")


def openapi_summarize_paths(paths: dict[str, Any] | None) -> list[dict[str, object]]:
    """Summarize operations of every path item.

    Only `get`, `post`, `put`, `delete` and `patch` operations are kept; each
    contributes its `summary` and `description`.

    Args:
        paths: Dereferenced `paths` object, or None when the document has none.

    Returns:
        list[dict[str, object]]: `{path, data}` entries in document order.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not paths:
        return []

    summaries: list[dict[str, object]] = []
    for path, path_item in paths.items():
        methods: dict[str, dict[str, object]] = {}
        if isinstance(path_item, dict):
            for method, operation in path_item.items():
                if method not in OPENAPI_SUMMARY_METHODS or not isinstance(operation, dict):
                    continue
                methods[method] = {
                    "summary": operation.get("summary"),
                    "description": operation.get("description"),
                }
        summaries.append({"path": path, "data": methods})
    return summaries
