import logging
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Iterator, List, Optional

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from ..core.exceptions import BookNotFoundError
from ..db.base import BookModel
from ..db.session import SessionLocal
from ..domain.entities import Book
from ..domain.interfaces import IBookRepository

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the column type stores no tz)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BookRepository(IBookRepository):
    """SQLAlchemy implementation of the book storage operations.

    Writes are flushed, never committed here: ``transaction()`` owns the
    commit/rollback so a service operation's checks and write share one
    database transaction.
    """

    def __init__(self, db_session: Optional[Session] = None):
        self.db = db_session or SessionLocal()

    @contextmanager
    def transaction(self) -> Iterator["BookRepository"]:
        try:
            yield self
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def find_by_id(self, book_id: int) -> Optional[Book]:
        db_book = self.db.get(BookModel, book_id)
        return self._to_domain(db_book) if db_book else None

    def find_by_title(self, title: str) -> Optional[Book]:
        db_book = self.db.scalar(select(BookModel).where(BookModel.title == title))
        return self._to_domain(db_book) if db_book else None

    def find_by_isbn(self, isbn: str) -> Optional[Book]:
        db_book = self.db.scalar(select(BookModel).where(BookModel.isbn == isbn))
        return self._to_domain(db_book) if db_book else None

    def exists_by_id(self, book_id: int) -> bool:
        return bool(self.db.scalar(select(exists().where(BookModel.id == book_id))))

    def exists_by_title(self, title: str) -> bool:
        return bool(self.db.scalar(select(exists().where(BookModel.title == title))))

    def exists_by_isbn(self, isbn: str) -> bool:
        return bool(self.db.scalar(select(exists().where(BookModel.isbn == isbn))))

    def find_all(self) -> List[Book]:
        db_books = self.db.scalars(select(BookModel).order_by(BookModel.id.asc()))
        return [self._to_domain(b) for b in db_books]

    def save(self, book: Book) -> Book:
        now = utcnow()

        if book.id is None:
            db_book = BookModel(
                title=book.title,
                author=book.author,
                isbn=book.isbn,
                available=book.available,
                created_at=now,
                updated_at=now,
            )
            self.db.add(db_book)
        else:
            db_book = self.db.get(BookModel, book.id)
            if db_book is None:
                raise BookNotFoundError(book.id)
            # updated_at must move forward on every save, even within one clock tick
            if db_book.updated_at is not None and now <= db_book.updated_at:
                now = db_book.updated_at + timedelta(microseconds=1)
            db_book.title = book.title
            db_book.author = book.author
            db_book.isbn = book.isbn
            db_book.available = book.available
            db_book.updated_at = now

        self.db.flush()
        self.db.refresh(db_book)
        return self._to_domain(db_book)

    def delete_by_id(self, book_id: int) -> None:
        db_book = self.db.get(BookModel, book_id)
        if db_book:
            self.db.delete(db_book)
            self.db.flush()

    def _to_domain(self, db_book: BookModel) -> Book:
        return Book(
            id=db_book.id,
            title=db_book.title,
            author=db_book.author,
            isbn=db_book.isbn,
            available=bool(db_book.available),
            created_at=db_book.created_at,
            updated_at=db_book.updated_at,
        )
