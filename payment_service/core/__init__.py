"""Core utilities: errors, logging and middleware."""

from payment_service.core.exceptions import (
    AppException,
    DecisionError,
    GuardViolationError,
    NotFoundError,
    StaleRecordError,
    StorageError,
    ValidationError,
)

__all__ = [
    "AppException",
    "DecisionError",
    "GuardViolationError",
    "NotFoundError",
    "StaleRecordError",
    "StorageError",
    "ValidationError",
]
