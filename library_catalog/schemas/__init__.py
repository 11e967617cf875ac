"""
Schemas package - Data Transfer Objects.

This package contains DTOs that define the API contracts
and the mapping between domain entities and responses.
"""

from .dtos import BookRequest, BookResponse

__all__ = [
    "BookRequest",
    "BookResponse",
]
