"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business logic
- interfaces.py: Repository contracts

Following SOLID principles:
- Single Responsibility: Each module has one purpose
- Dependency Inversion: Interfaces define contracts
"""

from .entities import Book
from .interfaces import IBookReader, IBookRepository, IBookWriter

__all__ = [
    # Domain entities
    "Book",
    # Repository interfaces
    "IBookRepository",
    # Segregated interfaces
    "IBookReader",
    "IBookWriter",
]
