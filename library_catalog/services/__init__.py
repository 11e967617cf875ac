# Services package initialization
# This file makes the services directory a Python package
# and allows importing service modules

from . import book_service

__all__ = [
    "book_service",
]
