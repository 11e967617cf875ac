# Core package initialization
# Cross-cutting concerns: configuration, logging, errors, validation

from . import config, exceptions, validation

__all__ = [
    "config",
    "exceptions",
    "validation",
]
