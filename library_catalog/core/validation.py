"""
Request validation utilities for the book endpoints.

Controllers run these validators before building service input, so
malformed payloads never reach ``BookService``. The service still
rejects blank titles on its own.
"""

import logging
from typing import Any, Dict, List, Optional

from ..domain.entities import (
    AUTHOR_MAX_LENGTH,
    ISBN_MAX_LENGTH,
    ISBN_MIN_LENGTH,
    TITLE_MAX_LENGTH,
)

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised by controllers when a ValidationResult is not valid."""

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.errors: Dict[str, str] = errors or {}


class ValidationResult:
    """Container for validation results."""

    def __init__(self):
        self.errors: Dict[str, str] = {}
        self.warnings: List[str] = []
        self.is_valid: bool = True
        self.cleaned_data: Dict[str, Any] = {}

    def add_error(self, message: str, field: str):
        """Add validation error (first error per field wins)."""
        self.errors.setdefault(field, message)
        self.is_valid = False
        logger.warning(f"Validation error: {field}: {message}")

    def add_warning(self, message: str, field: Optional[str] = None):
        warning_msg = f"{field}: {message}" if field else message
        self.warnings.append(warning_msg)
        logger.info(f"Validation warning: {warning_msg}")

    def raise_if_invalid(self) -> None:
        if not self.is_valid:
            raise ValidationError("Validation failed", self.errors)


class BaseValidator:
    """Base validator with common validation methods."""

    def validate(
        self, data: Dict[str, Any]
    ) -> ValidationResult:  # pragma: no cover - interface definition
        raise NotImplementedError("Subclasses must implement validate")

    @staticmethod
    def validate_required_field(
        value: Any, field_name: str, result: ValidationResult, message: str
    ) -> bool:
        """Validate that a required field is present and not blank."""
        if value is None or (isinstance(value, str) and value.strip() == ""):
            result.add_error(message, field_name)
            return False
        return True

    @staticmethod
    def validate_string(
        value: Any,
        field_name: str,
        result: ValidationResult,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        length_message: Optional[str] = None,
    ) -> Optional[str]:
        """Validate a string field without altering its content."""
        if value is None:
            return None

        if not isinstance(value, str):
            result.add_error("Must be a string", field_name)
            return None

        too_short = min_length is not None and len(value) < min_length
        too_long = max_length is not None and len(value) > max_length
        if too_short or too_long:
            result.add_error(
                length_message or f"Invalid length for {field_name}", field_name
            )
            return None

        return value

    @staticmethod
    def validate_boolean(
        value: Any, field_name: str, result: ValidationResult, default: bool
    ) -> Optional[bool]:
        if value is None:
            return default
        if not isinstance(value, bool):
            result.add_error("Must be true or false", field_name)
            return None
        return value


class BookValidator(BaseValidator):
    """Validator for book create/replace payloads."""

    TITLE_REQUIRED = "Book title is required"
    TITLE_LENGTH = f"Title must be between 1 and {TITLE_MAX_LENGTH} characters"
    AUTHOR_LENGTH = f"Author name must be less than {AUTHOR_MAX_LENGTH} characters"
    ISBN_LENGTH = (
        f"ISBN must be between {ISBN_MIN_LENGTH} and {ISBN_MAX_LENGTH} characters"
    )

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        """Validate book data."""
        result = ValidationResult()

        if not isinstance(data, dict):
            result.add_error("Request body must be a JSON object", "body")
            return result

        title = data.get("title")
        if self.validate_required_field(title, "title", result, self.TITLE_REQUIRED):
            title = self.validate_string(
                title,
                "title",
                result,
                min_length=1,
                max_length=TITLE_MAX_LENGTH,
                length_message=self.TITLE_LENGTH,
            )
            if title is not None:
                result.cleaned_data["title"] = title

        author = self.validate_string(
            data.get("author"),
            "author",
            result,
            max_length=AUTHOR_MAX_LENGTH,
            length_message=self.AUTHOR_LENGTH,
        )
        result.cleaned_data["author"] = author

        isbn = data.get("isbn")
        if isinstance(isbn, str) and isbn.strip() == "":
            result.add_warning("Blank ISBN treated as absent", "isbn")
            isbn = None
        isbn = self.validate_string(
            isbn,
            "isbn",
            result,
            min_length=ISBN_MIN_LENGTH,
            max_length=ISBN_MAX_LENGTH,
            length_message=self.ISBN_LENGTH,
        )
        result.cleaned_data["isbn"] = isbn

        available = self.validate_boolean(
            data.get("available"), "available", result, default=True
        )
        if available is not None:
            result.cleaned_data["available"] = available

        return result


def validate_title_param(value: Optional[str], field_name: str) -> ValidationResult:
    """Validate a title passed as a query parameter (title patch endpoints)."""
    result = ValidationResult()
    if BaseValidator.validate_required_field(
        value, field_name, result, f"{field_name} must not be blank"
    ):
        cleaned = BaseValidator.validate_string(
            value,
            field_name,
            result,
            max_length=TITLE_MAX_LENGTH,
            length_message=BookValidator.TITLE_LENGTH,
        )
        if cleaned is not None:
            result.cleaned_data[field_name] = cleaned
    return result
