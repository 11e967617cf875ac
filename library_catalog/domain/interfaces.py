"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import List, Optional

from .entities import Book


class IBookReader(ABC):
    """Interface for book read operations - Interface Segregation Principle."""

    @abstractmethod
    def find_by_id(self, book_id: int) -> Optional[Book]:
        """Get book by ID."""
        pass

    @abstractmethod
    def find_by_title(self, title: str) -> Optional[Book]:
        """Get book by exact title."""
        pass

    @abstractmethod
    def find_by_isbn(self, isbn: str) -> Optional[Book]:
        """Get book by exact ISBN."""
        pass

    @abstractmethod
    def exists_by_id(self, book_id: int) -> bool:
        """Check whether a book with this ID exists."""
        pass

    @abstractmethod
    def exists_by_title(self, title: str) -> bool:
        """Check whether any book has this title."""
        pass

    @abstractmethod
    def exists_by_isbn(self, isbn: str) -> bool:
        """Check whether any book has this ISBN."""
        pass

    @abstractmethod
    def find_all(self) -> List[Book]:
        """Get all books in storage order."""
        pass


class IBookWriter(ABC):
    """Interface for book write operations - Interface Segregation Principle."""

    @abstractmethod
    def save(self, book: Book) -> Book:
        """Insert a new book (no id) or fully update an existing one.

        Storage assigns ``id`` and ``created_at`` on insert and refreshes
        ``updated_at`` on every save.
        """
        pass

    @abstractmethod
    def delete_by_id(self, book_id: int) -> None:
        """Delete a book."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """Unit of work: commit on success, roll back and re-raise on failure."""
        pass


class IBookRepository(IBookReader, IBookWriter):
    """Complete book repository interface combining read/write operations."""

    pass
