"""Domain errors raised by the reservation service."""

from fastapi import status


class DomainError(Exception):
    """Base domain error with a user-facing message and HTTP status code."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ReservationValidationError(DomainError):
    """One or more fields failed validation; nothing was written."""

    status_code = 422

    def __init__(self, errors: dict[str, list[str]], message: str = "Validation failed."):
        self.errors = errors
        super().__init__(message)


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Reservation not found."):
        super().__init__(message)


class InvalidPinError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Invalid PIN."):
        super().__init__(message)


class PersistenceError(DomainError):
    """The document store was unreachable or rejected the operation."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str = "Storage unavailable, please try again."):
        super().__init__(message)
