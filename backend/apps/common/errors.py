"""Domain errors raised by the service layer.

Services never build HTTP responses. They raise one of these and the API
exception handler turns ``code`` into a status and an error envelope.
"""
from typing import Any, Optional


class ServiceError(Exception):
    code = "SERVER_ERROR"
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None, *, details: Optional[Any] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class NotFoundError(ServiceError):
    code = "NOT_FOUND"
    default_message = "Resource not found"


class DuplicateNameError(ServiceError):
    code = "CONFLICT"
    default_message = "Resource already exists"


class InvalidStateError(ServiceError):
    code = "INVALID_STATE"
    default_message = "Operation not allowed in the current state"


class StorageError(ServiceError):
    code = "SERVER_ERROR"
    default_message = "Storage operation failed"


__all__ = [
    "ServiceError",
    "NotFoundError",
    "DuplicateNameError",
    "InvalidStateError",
    "StorageError",
]
