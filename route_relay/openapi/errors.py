"""Typed exceptions for OpenAPI document intake failures."""

from __future__ import annotations


class OpenApiDocumentError(ValueError):
    """Document could not be parsed or dereferenced."""


class OpenApiFetchError(ConnectionError):
    """Document could not be downloaded from the requested URL.

    Attributes:
        status_code: Optional upstream HTTP status code.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
