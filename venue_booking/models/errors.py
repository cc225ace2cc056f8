"""Domain error codes for reservations and persistence."""

from enum import Enum


class ErrorCode(str, Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    RESERVATION_NOT_FOUND = "RESERVATION_NOT_FOUND"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ReservationValidationError(DomainError):
    """Raised when a draft with missing or invalid fields is saved."""

    def __init__(self, missing_fields: list[str]) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message=f"Missing or invalid fields: {', '.join(missing_fields)}",
        )
        self.missing_fields = list(missing_fields)


class ReservationNotFoundError(DomainError):
    """Raised when a reservation id does not exist."""

    def __init__(self, reservation_id: str) -> None:
        super().__init__(
            code=ErrorCode.RESERVATION_NOT_FOUND,
            message="Reservation not found",
        )
        self.reservation_id = reservation_id


class PersistenceError(DomainError):
    """Raised when a store cannot read or write the reservation list."""

    def __init__(self, backend: str, operation: str, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(
            code=ErrorCode.PERSISTENCE_FAILED,
            message=f"{backend} {operation} failed{detail}",
        )
        self.backend = backend
        self.operation = operation
