"""
Domain error types rendered as JSON error bodies by the exception handlers in main.
"""
from typing import Any, Optional
from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP status and an error code."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"
    message: str = "Internal Server Error"

    def __init__(self, code: Optional[str] = None, message: Optional[str] = None, details: Any = None):
        self.code = code or self.code
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    message = "Invalid request"


class AuthRequired(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTH_REQUIRED"
    message = "Login required"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_CREDENTIALS"
    message = "Invalid username or password"


class CsrfFailed(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "CSRF_FAILED"
    message = "CSRF token validation failed"


class NotFound(AppError):
    """Raised for missing resources and for resources owned by someone else."""
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    message = "Not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"
    message = "Already exists"


class StorageNotConfigured(AppError):
    code = "STORAGE_NOT_CONFIGURED"
    message = "Object storage is not configured"
