"""Typed exceptions for route cache failures."""

from __future__ import annotations


class RouteCacheError(ConnectionError):
    """Cache backend could not be reached or rejected an operation."""
