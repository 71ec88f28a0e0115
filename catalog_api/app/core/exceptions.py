"""
Error kinds raised by the service layer.

Services never raise ``HTTPException`` themselves; they raise one of
the ``ServiceError`` subclasses below and the routers translate them
into HTTP responses.  Every error carries a human readable message.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for business errors.

    ``kind`` names the error category and ``status_code`` is the HTTP
    status the API layer reports for it.
    """

    kind = "service_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidArgumentError(ServiceError):
    """Malformed or out-of-range identifier or input."""

    kind = "invalid_argument"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    """A uniqueness constraint (user email) would be violated."""

    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class StoreUnavailableError(ServiceError):
    """The database could not serve the request.

    Raised by the repositories and propagated untouched through the
    services; it is never retried at the service layer.
    """

    kind = "store_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


# Errors caused by the request itself; routers report them to the client.
CLIENT_ERRORS = (InvalidArgumentError, NotFoundError, ConflictError)
