from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(ServiceError):
    """Enrollment or transaction does not exist."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class InvalidRequestError(ServiceError):
    def __init__(self, message: str = "Invalid request format") -> None:
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class InvalidTransitionError(ServiceError):
    """Requested status change is not allowed from the transaction's current status."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status.HTTP_409_CONFLICT)


class StorageError(ServiceError):
    """Persistence collaborator failed; surfaced as-is, never retried."""

    def __init__(self, message: str = "Storage unavailable") -> None:
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE)
