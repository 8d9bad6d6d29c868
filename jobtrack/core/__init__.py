"""Core application components."""

from jobtrack.core.config import settings
from jobtrack.core.exceptions import (
    ApplicationError,
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    OperationTimeoutError,
    ValidationError,
)
from jobtrack.core.storage import Base, async_session, init_models

__all__ = [
    "ApplicationError",
    "AuthenticationError",
    "Base",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "OperationTimeoutError",
    "ValidationError",
    "async_session",
    "init_models",
    "settings",
]
