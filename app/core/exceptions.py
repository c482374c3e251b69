from fastapi import HTTPException, status


class SalonSlotsError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(SalonSlotsError):
    """A vendor, schedule or appointment record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidArgumentError(SalonSlotsError):
    """A request argument is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class SlotConflictError(SalonSlotsError):
    """The requested slot is already taken by another booking."""

    status_code = status.HTTP_409_CONFLICT


def to_http_exception(error: SalonSlotsError) -> HTTPException:
    """Translate a service-layer error into the matching HTTP error."""
    return HTTPException(status_code=error.status_code, detail=error.message)
