"""
Custom exceptions for the application.
Following SOLID principles - centralized error handling.

Controllers translate these into HTTP responses in one place
(see ``controllers.book_controller``).
"""

from typing import Any, Optional


class CatalogError(Exception):
    """Base class for catalog domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BookNotFoundError(CatalogError):
    """
    Exception raised when a requested book does not exist,
    looked up either by id or by title.
    """

    def __init__(self, value: Any, field: str = "id"):
        super().__init__(f"Book not found with {field}: {value}")
        self.field = field
        self.value = value


class DuplicateBookError(CatalogError):
    """
    Exception raised when a write would give two books the same
    title or the same ISBN. No partial write happens.
    """

    field: Optional[str] = None

    def __init__(self, value: str, field: Optional[str] = None):
        field = field or self.field or "value"
        super().__init__(f"Book with {field} '{value}' already exists in the library.")
        self.field = field
        self.value = value


class DuplicateTitleError(DuplicateBookError):
    field = "title"


class DuplicateIsbnError(DuplicateBookError):
    field = "ISBN"


class InvalidBookInputError(CatalogError):
    """Structurally invalid argument caught by the service itself."""

    pass
