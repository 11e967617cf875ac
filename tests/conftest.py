"""
Central pytest configuration for the library catalog tests.

Environment is set before any application import so the lazy engine and the
limiter pick up test settings.
"""

import os

# Test database configuration (set early so the lazy engine uses it)
TEST_DATABASE_URL = "sqlite:///:memory:"  # Shared in-memory SQLite (StaticPool)
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["TESTING"] = "true"
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402

from library_catalog.db.session import (  # noqa: E402
    SessionLocal,
    create_tables,
    drop_tables,
)


def pytest_collection_modifyitems(config, items):
    """Add markers based on test file location."""
    for item in items:
        if "unit" in str(item.path):
            item.add_marker(pytest.mark.unit)
        if "integration" in str(item.path):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def database():
    """Fresh schema for one test; dropped afterwards so ids restart."""
    os.environ["DATABASE_URL"] = TEST_DATABASE_URL
    create_tables()
    yield TEST_DATABASE_URL
    drop_tables()


@pytest.fixture
def db_session(database):
    """Provide a database session bound to the test database."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(database):
    """Create a Flask application configured for testing."""
    from library_catalog.main import create_app

    app = create_app({"TESTING": True})
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def gatsby_payload():
    return {
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "isbn": "9780743273565",
        "available": True,
    }
