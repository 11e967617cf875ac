"""
Book controller for handling HTTP requests following SOLID principles.

This controller:
- Handles HTTP concerns only (Single Responsibility)
- Validates payloads before any service call
- Depends on the service, which depends on the repository abstraction
- Translates domain errors to HTTP responses in one place
"""

from contextlib import contextmanager
from typing import Iterator

from flask import Blueprint, jsonify, request

from ..core.api_utils import error_response
from ..core.exceptions import (
    BookNotFoundError,
    DuplicateBookError,
    InvalidBookInputError,
)
from ..core.limiter_config import READ_LIMIT, WRITE_LIMIT, limiter
from ..core.logging_config import get_logger
from ..core.validation import BookValidator, ValidationError, validate_title_param
from ..db.session import SessionLocal
from ..repositories.book_repository import BookRepository
from ..schemas.dtos import BookRequest
from ..services.book_service import BookService

logger = get_logger(__name__)

books_bp = Blueprint("books", __name__, url_prefix="/api/books")


@contextmanager
def _book_service() -> Iterator[BookService]:
    """One session, repository and service per request."""
    db = SessionLocal()
    try:
        yield BookService(BookRepository(db))
    finally:
        db.close()


def _book_request_from_json() -> BookRequest:
    data = request.get_json(silent=True)
    result = BookValidator().validate(data)
    result.raise_if_invalid()
    return BookRequest.from_dict(result.cleaned_data)


def _title_param(name: str) -> str:
    value = request.args.get(name)
    result = validate_title_param(value, name)
    result.raise_if_invalid()
    return result.cleaned_data[name]


@books_bp.route("", methods=["GET"])
@limiter.limit(READ_LIMIT)
def list_books():
    """List all books."""
    with _book_service() as service:
        books = service.list_books()
    return jsonify([book.to_dict() for book in books]), 200


@books_bp.route("/<int:book_id>", methods=["GET"])
@limiter.limit(READ_LIMIT)
def get_book(book_id: int):
    """Get a book by its ID."""
    with _book_service() as service:
        book = service.get_book(book_id)
    return jsonify(book.to_dict()), 200


@books_bp.route("/<path:title>/availability", methods=["GET"])
@limiter.limit(READ_LIMIT)
def check_availability(title: str):
    """Check whether a book is available, checked out or not in the catalog."""
    with _book_service() as service:
        status = service.check_availability(title)
    return jsonify({"status": status}), 200


@books_bp.route("", methods=["POST"])
@limiter.limit(WRITE_LIMIT)
def add_book():
    """Add a new book."""
    book_request = _book_request_from_json()
    with _book_service() as service:
        created = service.add_book(book_request)
    return jsonify(created.to_dict()), 201


@books_bp.route("/<int:book_id>", methods=["PUT"])
@limiter.limit(WRITE_LIMIT)
def update_book(book_id: int):
    """Replace all details of a book."""
    book_request = _book_request_from_json()
    with _book_service() as service:
        updated = service.update_book(book_id, book_request)
    return jsonify(updated.to_dict()), 200


@books_bp.route("/<int:book_id>/title", methods=["PATCH"])
@limiter.limit(WRITE_LIMIT)
def update_title_by_id(book_id: int):
    """Change only the title of a book, addressed by ID."""
    new_title = _title_param("new_title")
    with _book_service() as service:
        updated = service.update_title_by_id(book_id, new_title)
    return jsonify(updated.to_dict()), 200


@books_bp.route("/title", methods=["PATCH"])
@limiter.limit(WRITE_LIMIT)
def update_title_by_old_title():
    """Change a book's title, addressed by its current title."""
    old_title = _title_param("old_title")
    new_title = _title_param("new_title")
    with _book_service() as service:
        updated = service.update_title_by_old_title(old_title, new_title)
    return jsonify(updated.to_dict()), 200


@books_bp.route("/<int:book_id>", methods=["DELETE"])
@limiter.limit(WRITE_LIMIT)
def delete_book(book_id: int):
    """Delete a book."""
    with _book_service() as service:
        service.delete_book(book_id)
    return "", 204


@books_bp.route("/<int:book_id>/availability", methods=["PATCH"])
@limiter.limit(WRITE_LIMIT)
def toggle_availability(book_id: int):
    """Flip a book between available and checked out."""
    with _book_service() as service:
        updated = service.toggle_availability(book_id)
    return jsonify(updated.to_dict()), 200


# Error handlers for the books blueprint
@books_bp.errorhandler(ValidationError)
def handle_validation_error(error: ValidationError):
    logger.warning(
        "Validation errors", extra={"context": {"errors": error.errors}}
    )
    return error_response(error.message, 400, error.errors)


@books_bp.errorhandler(InvalidBookInputError)
def handle_invalid_input(error: InvalidBookInputError):
    logger.warning(f"Invalid input: {error.message}")
    return error_response(error.message, 400)


@books_bp.errorhandler(BookNotFoundError)
def handle_not_found(error: BookNotFoundError):
    logger.warning(f"Book not found: {error.message}")
    return error_response(error.message, 404)


@books_bp.errorhandler(DuplicateBookError)
def handle_duplicate(error: DuplicateBookError):
    logger.warning(f"Duplicate book: {error.message}")
    return error_response(error.message, 409)
