from __future__ import annotations

from typing import Optional


class CatalogError(Exception):
    """Base class for every recoverable catalog failure."""


class NotFoundError(CatalogError, LookupError):
    pass


class DuplicateKeyError(CatalogError, ValueError):
    pass


class InvalidStateError(CatalogError, ValueError):
    pass


class MalformedInputError(CatalogError, ValueError):
    """Bad field input, or a data-file line that could not be parsed."""

    def __init__(self, message: str, source: Optional[str] = None, line_number: Optional[int] = None) -> None:
        self.source = source
        self.line_number = line_number
        if source is not None and line_number is not None:
            message = f"{source}:{line_number}: {message}"
        super().__init__(message)
