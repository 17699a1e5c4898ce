"""FastAPI middleware for authentication and error handling."""

from .auth_middleware import get_requester_id, require_requester_id
from .error_handlers import (
    NOTE_ERROR_STATUS,
    http_exception_handler,
    internal_exception_handler,
    note_store_exception_handler,
    register_error_handlers,
    validation_exception_handler,
)

__all__ = [
    "get_requester_id",
    "require_requester_id",
    "register_error_handlers",
    "validation_exception_handler",
    "http_exception_handler",
    "note_store_exception_handler",
    "internal_exception_handler",
    "NOTE_ERROR_STATUS",
]
