"""
Controllers package - HTTP layer (Flask blueprints).
"""

from .book_controller import books_bp
from .health_controller import health_bp

__all__ = [
    "books_bp",
    "health_bp",
]
