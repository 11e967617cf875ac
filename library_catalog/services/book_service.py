"""
Book service - catalog business rules.

Enforces title/ISBN uniqueness, runs every read-check-write sequence inside
one repository transaction, turns absence into ``BookNotFoundError`` and maps
domain entities to ``BookResponse``. The service keeps no state of its own;
one instance per request is the normal usage.
"""

from typing import List, Optional

from ..core.exceptions import (
    BookNotFoundError,
    DuplicateIsbnError,
    DuplicateTitleError,
    InvalidBookInputError,
)
from ..core.logging_config import get_logger
from ..domain.entities import Book, missing_book_sentence
from ..domain.interfaces import IBookRepository
from ..schemas.dtos import BookRequest, BookResponse

logger = get_logger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


class BookService:
    def __init__(self, repository: IBookRepository):
        self.repository = repository

    # ----------------------------------------------------------------- reads

    def list_books(self) -> List[BookResponse]:
        logger.info("Retrieving all books")
        return [BookResponse.from_domain(b) for b in self.repository.find_all()]

    def get_book(self, book_id: int) -> BookResponse:
        logger.info("Finding book", extra={"context": {"book_id": book_id}})
        book = self.repository.find_by_id(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return BookResponse.from_domain(book)

    def check_availability(self, title: str) -> str:
        """Availability sentence for ``title``; a missing book is not an error."""
        logger.info("Checking availability", extra={"context": {"title": title}})
        book = self.repository.find_by_title(title)
        if book is None:
            return missing_book_sentence(title)
        return book.availability_status

    # ---------------------------------------------------------------- writes

    def add_book(self, request: BookRequest) -> BookResponse:
        logger.info("Adding new book", extra={"context": {"title": request.title}})
        new_book = self._build_entity(request)

        with self.repository.transaction():
            if self.repository.exists_by_title(new_book.title):
                raise DuplicateTitleError(new_book.title)
            if new_book.has_isbn and self.repository.exists_by_isbn(new_book.isbn):
                raise DuplicateIsbnError(new_book.isbn)
            saved = self.repository.save(new_book)

        logger.info(
            "Book added successfully",
            extra={"context": {"book_id": saved.id, "title": saved.title}},
        )
        return BookResponse.from_domain(saved)

    def update_book(self, book_id: int, request: BookRequest) -> BookResponse:
        """Replace title, author, isbn and availability of an existing book.

        Re-submitting a field's current value never counts as a duplicate.
        """
        logger.info("Updating book", extra={"context": {"book_id": book_id}})
        replacement = self._build_entity(request)

        with self.repository.transaction():
            existing = self._require(book_id)

            if existing.title != replacement.title and self.repository.exists_by_title(
                replacement.title
            ):
                raise DuplicateTitleError(replacement.title)
            if (
                replacement.has_isbn
                and replacement.isbn != existing.isbn
                and self.repository.exists_by_isbn(replacement.isbn)
            ):
                raise DuplicateIsbnError(replacement.isbn)

            replacement.id = existing.id
            replacement.created_at = existing.created_at
            replacement.updated_at = existing.updated_at
            updated = self.repository.save(replacement)

        logger.info(
            "Book updated successfully",
            extra={"context": {"book_id": updated.id, "title": updated.title}},
        )
        return BookResponse.from_domain(updated)

    def update_title_by_id(self, book_id: int, new_title: Optional[str]) -> BookResponse:
        logger.info(
            "Updating book title",
            extra={"context": {"book_id": book_id, "new_title": new_title}},
        )
        if _is_blank(new_title):
            raise InvalidBookInputError("New title cannot be empty")

        with self.repository.transaction():
            existing = self._require(book_id)
            # No self-exemption: renaming a book to its own title is rejected
            if self.repository.exists_by_title(new_title):
                raise DuplicateTitleError(new_title)
            updated = self.repository.save(self._retitled(existing, new_title))

        logger.info(
            "Book title updated successfully",
            extra={"context": {"book_id": updated.id, "title": updated.title}},
        )
        return BookResponse.from_domain(updated)

    def update_title_by_old_title(
        self, old_title: Optional[str], new_title: Optional[str]
    ) -> BookResponse:
        logger.info(
            "Updating book title by current title",
            extra={"context": {"old_title": old_title, "new_title": new_title}},
        )
        if _is_blank(old_title) or _is_blank(new_title):
            raise InvalidBookInputError("Book titles cannot be empty")

        with self.repository.transaction():
            existing = self.repository.find_by_title(old_title)
            if existing is None:
                raise BookNotFoundError(old_title, field="title")
            if self.repository.exists_by_title(new_title):
                raise DuplicateTitleError(new_title)
            updated = self.repository.save(self._retitled(existing, new_title))

        logger.info(
            "Book title updated successfully",
            extra={
                "context": {
                    "book_id": updated.id,
                    "old_title": old_title,
                    "title": updated.title,
                }
            },
        )
        return BookResponse.from_domain(updated)

    def delete_book(self, book_id: int) -> None:
        logger.info("Deleting book", extra={"context": {"book_id": book_id}})
        with self.repository.transaction():
            if not self.repository.exists_by_id(book_id):
                raise BookNotFoundError(book_id)
            self.repository.delete_by_id(book_id)
        logger.info("Book deleted successfully", extra={"context": {"book_id": book_id}})

    def toggle_availability(self, book_id: int) -> BookResponse:
        logger.info("Toggling availability", extra={"context": {"book_id": book_id}})
        with self.repository.transaction():
            book = self._require(book_id)
            book.available = not book.available
            updated = self.repository.save(book)

        logger.info(
            f"Book '{updated.title}' is now "
            f"{'available' if updated.available else 'checked out'}",
            extra={"context": {"book_id": updated.id, "available": updated.available}},
        )
        return BookResponse.from_domain(updated)

    # --------------------------------------------------------------- helpers

    def _require(self, book_id: int) -> Book:
        book = self.repository.find_by_id(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    @staticmethod
    def _build_entity(request: BookRequest) -> Book:
        if _is_blank(request.title):
            raise InvalidBookInputError("Book title is required")
        try:
            return request.to_domain()
        except ValueError as e:
            raise InvalidBookInputError(str(e)) from e

    @staticmethod
    def _retitled(book: Book, new_title: str) -> Book:
        try:
            return Book(
                id=book.id,
                title=new_title,
                author=book.author,
                isbn=book.isbn,
                available=book.available,
                created_at=book.created_at,
                updated_at=book.updated_at,
            )
        except ValueError as e:
            raise InvalidBookInputError(str(e)) from e
