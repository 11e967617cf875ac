"""
Domain entities - Pure business logic, no framework dependencies.

Following SOLID principles:
- Single Responsibility: Each entity represents one business concept
- Open/Closed: Entities can be extended without modification
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

TITLE_MAX_LENGTH = 255
AUTHOR_MAX_LENGTH = 255
ISBN_MIN_LENGTH = 10
ISBN_MAX_LENGTH = 20


def availability_sentence(title: str, available: bool) -> str:
    """Human-readable availability status for a book that is in the catalog."""
    if available:
        return f"The book '{title}' is available."
    return f"The book '{title}' is checked out."


def missing_book_sentence(title: str) -> str:
    return f"The book '{title}' is not in the library's collection."


@dataclass
class Book:
    """Domain entity representing a Book in the catalog.

    This is the pure business representation, independent of:
    - Database implementation (SQLAlchemy)
    - HTTP frameworks (Flask)

    ``id``, ``created_at`` and ``updated_at`` are assigned by storage.
    """

    title: str = ""
    author: Optional[str] = None
    isbn: Optional[str] = None
    available: bool = True
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate domain rules."""
        if not self.title or not self.title.strip():
            raise ValueError("Book title is required")
        if len(self.title) > TITLE_MAX_LENGTH:
            raise ValueError(
                f"Title must be between 1 and {TITLE_MAX_LENGTH} characters"
            )
        if self.author is not None and len(self.author) > AUTHOR_MAX_LENGTH:
            raise ValueError(
                f"Author name must be less than {AUTHOR_MAX_LENGTH} characters"
            )
        # Blank ISBN means "no ISBN" and never conflicts with other books
        if self.isbn is not None and not self.isbn.strip():
            self.isbn = None
        if self.isbn is not None and not (
            ISBN_MIN_LENGTH <= len(self.isbn) <= ISBN_MAX_LENGTH
        ):
            raise ValueError(
                f"ISBN must be between {ISBN_MIN_LENGTH} and {ISBN_MAX_LENGTH} characters"
            )

    @property
    def has_isbn(self) -> bool:
        return bool(self.isbn)

    @property
    def availability_status(self) -> str:
        return availability_sentence(self.title, self.available)
