"""
Database seeding.

Adds a small sample catalog through ``BookService`` so seeded data obeys the
same uniqueness rules as API writes. Idempotent: books whose title or ISBN
already exists are skipped.
"""

import logging
from typing import List

from ..core.exceptions import DuplicateBookError
from ..repositories.book_repository import BookRepository
from ..schemas.dtos import BookRequest
from ..services.book_service import BookService
from .session import SessionLocal

logger = logging.getLogger(__name__)

SAMPLE_BOOKS: List[BookRequest] = [
    BookRequest(
        title="The Great Gatsby",
        author="F. Scott Fitzgerald",
        isbn="9780743273565",
    ),
    BookRequest(title="1984", author="George Orwell", isbn="9780451524935"),
    BookRequest(
        title="To Kill a Mockingbird", author="Harper Lee", isbn="9780061120084"
    ),
    BookRequest(title="Pride and Prejudice", author="Jane Austen"),
]


def seed_books(books: List[BookRequest] = SAMPLE_BOOKS) -> int:
    """Add ``books`` to the catalog and return how many were created."""
    created = 0
    with SessionLocal() as db:
        service = BookService(BookRepository(db))
        for book in books:
            try:
                service.add_book(book)
                created += 1
            except DuplicateBookError as e:
                logger.debug(
                    "Seed book skipped",
                    extra={"context": {"title": book.title, "reason": e.message}},
                )
    logger.info(
        "Sample books seeded",
        extra={"context": {"created": created, "skipped": len(books) - created}},
    )
    return created
