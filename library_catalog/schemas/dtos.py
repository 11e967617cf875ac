"""
Data Transfer Objects (DTOs) for the book API.

Following SOLID principles:
- Single Responsibility: Each DTO describes one data contract
- Open/Closed: DTOs can be extended without modification
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..domain.entities import Book, availability_sentence


@dataclass
class BookRequest:
    """DTO for book creation and full-update requests."""

    title: str
    author: Optional[str] = None
    isbn: Optional[str] = None
    available: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BookRequest":
        """Build from validator output (``ValidationResult.cleaned_data``)."""
        return cls(
            title=data["title"],
            author=data.get("author"),
            isbn=data.get("isbn"),
            available=data.get("available", True),
        )

    @property
    def has_isbn(self) -> bool:
        return self.isbn is not None and self.isbn.strip() != ""

    def to_domain(self, book_id: Optional[int] = None) -> Book:
        """Create the domain entity; raises ValueError on broken field rules."""
        return Book(
            id=book_id,
            title=self.title,
            author=self.author,
            isbn=self.isbn,
            available=self.available,
        )


@dataclass
class BookResponse:
    """DTO for book API responses. Every stored field is carried verbatim."""

    id: int
    title: str
    author: Optional[str]
    isbn: Optional[str]
    available: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_domain(cls, book: Book) -> "BookResponse":
        """Create response from domain entity."""
        return cls(
            id=book.id,
            title=book.title,
            author=book.author,
            isbn=book.isbn,
            available=book.available,
            created_at=book.created_at,
            updated_at=book.updated_at,
        )

    @property
    def availability_status(self) -> str:
        return availability_sentence(self.title, self.available)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "available": self.available,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "availability_status": self.availability_status,
        }
