"""Custom exceptions for the application."""

from fastapi import status


class ApplicationError(Exception):
    """Base exception for application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "unknown"

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a referenced job or tracked application is missing."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"

    def __init__(self, resource: str, identifier: object):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} not found")


class ConflictError(ApplicationError):
    """Raised when a uniqueness constraint rejects a write."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class ValidationError(ApplicationError):
    """Raised for malformed status values, dates and similar input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class AuthenticationError(ApplicationError):
    """Raised when no user identity accompanies the request."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"

    def __init__(self, detail: str = "Not authenticated"):
        self.detail = detail
        super().__init__(detail)


class ForbiddenError(ApplicationError):
    """Raised when the caller does not own the requested record."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"

    def __init__(self, detail: str = "Not enough permissions"):
        self.detail = detail
        super().__init__(detail)


class DatabaseError(ApplicationError):
    """Raised when storage fails underneath an otherwise valid request."""

    def __init__(self, message: str = "Database error"):
        super().__init__(message)


class OperationTimeoutError(ApplicationError):
    """Raised when an external call exceeds its time bound."""

    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    code = "timeout"

    def __init__(self, operation: str, timeout: float):
        self.operation = operation
        self.timeout = timeout
        super().__init__(f"{operation} timed out after {timeout:.1f}s")
