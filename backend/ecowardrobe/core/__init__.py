"""
Core module for the Eco Wardrobe backend.
Contains the error taxonomy and exception handlers.
"""
from .exceptions import (
    WardrobeException,
    DuplicateIdError,
    EmptySelectionError,
    CollaboratorFailure,
    PersistenceFailure,
    NotFoundError,
    ValidationError,
    ErrorResponse,
    wardrobe_exception_handler,
    http_exception_handler,
    generic_exception_handler,
)

__all__ = [
    "WardrobeException",
    "DuplicateIdError",
    "EmptySelectionError",
    "CollaboratorFailure",
    "PersistenceFailure",
    "NotFoundError",
    "ValidationError",
    "ErrorResponse",
    "wardrobe_exception_handler",
    "http_exception_handler",
    "generic_exception_handler",
]
