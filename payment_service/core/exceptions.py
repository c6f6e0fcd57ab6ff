"""Custom application exceptions."""

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception."""

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class ValidationError(AppException):
    """Malformed or incomplete request. Nothing is persisted."""

    def __init__(self, detail: str = "Invalid payment request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFoundError(AppException):
    """Resource not found exception."""

    def __init__(self, resource: str = "Payment", identifier: str | None = None) -> None:
        detail = f"{resource} not found"
        if identifier:
            detail = f"{resource} with ID '{identifier}' not found"
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class GuardViolationError(AppException):
    """Operation requested on a record in an incompatible state."""

    def __init__(self, detail: str = "Operation not allowed for the current payment status") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class StorageError(AppException):
    """Persistence layer failure."""

    def __init__(self, detail: str = "Payment storage is unavailable") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class StaleRecordError(StorageError):
    """Optimistic update lost against a concurrent writer."""

    def __init__(self, record_id: str, expected_version: int) -> None:
        self.record_id = record_id
        self.expected_version = expected_version
        super().__init__(
            f"Payment {record_id} was modified concurrently (expected version {expected_version})"
        )


class DecisionError(AppException):
    """Gateway decision collaborator failed to respond."""

    def __init__(self, gateway: str, detail: str | None = None) -> None:
        message = f"Payment gateway '{gateway}' is unavailable"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=message)
