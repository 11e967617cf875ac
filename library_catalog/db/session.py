import logging
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..core.config import get_database_url, mask_url_password

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all models."""


# Internal lazy globals
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None
_database_url: Optional[str] = None


def _build_engine(database_url: str) -> Engine:
    url = make_url(database_url)

    if url.drivername.startswith("postgresql") or url.drivername.startswith(
        "postgres"
    ):
        # Pooled configuration for production PostgreSQL
        return create_engine(
            database_url,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,  # Detects and refreshes stale connections
            pool_recycle=3600,
            connect_args={
                "application_name": "library_catalog",
                "connect_timeout": 10,
            },
        )

    if url.drivername.startswith("sqlite"):
        if url.database in (None, "", ":memory:"):
            # One shared in-memory database across the process so DDL
            # persists across sessions
            return create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(database_url, connect_args={"check_same_thread": False})

    return create_engine(database_url)


def get_engine() -> Engine:
    """Return a cached SQLAlchemy engine, creating it from DATABASE_URL on
    first call. This allows tests to set DATABASE_URL before the engine is
    constructed."""
    global _engine, _SessionLocal, _database_url
    database_url = get_database_url()
    # If engine not created yet or DATABASE_URL changed, (re)create engine
    if _engine is None or _database_url != database_url:
        if _engine is not None:
            _engine.dispose()
        _engine = _build_engine(database_url)
        _SessionLocal = None
        _database_url = database_url
        logger.debug(
            "SQLAlchemy engine created",
            extra={
                "context": {
                    "url": mask_url_password(database_url),
                    "dialect": _engine.dialect.name,
                }
            },
        )
    return _engine


def get_sessionmaker() -> sessionmaker:
    """Return a cached sessionmaker bound to the lazy engine."""
    global _SessionLocal
    engine = get_engine()
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            bind=engine, autoflush=False, expire_on_commit=False
        )
    return _SessionLocal


def SessionLocal() -> Session:
    """Calling SessionLocal() returns a new Session bound to the current engine."""
    return get_sessionmaker()()


def get_db() -> Iterator[Session]:
    """Yield a session and always close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all tables in database using the lazy engine."""
    # Models must be imported so Base.metadata is populated
    from . import base  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def drop_tables() -> None:
    from . import base  # noqa: F401

    Base.metadata.drop_all(bind=get_engine())


def dispose_engine() -> None:
    global _engine, _SessionLocal, _database_url
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
    _database_url = None
