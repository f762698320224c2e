"""API exception module."""
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from tenderbook.exceptions.store_exception import (
    DuplicateIdError,
    RecordNotFoundError,
    StoreError,
    ValidationError,
)


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
    ):
        super().__init__(status_code=status_code, detail=detail)


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequestError(APIException):
    """Bad request exception."""

    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ConflictError(APIException):
    """Identifier conflict exception."""

    def __init__(self, detail: str = "Identifier already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class UnprocessableError(APIException):
    """Input failed validation exception."""

    def __init__(self, detail: str = "Invalid input"):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


def to_api_exception(exc: StoreError) -> APIException:
    """Translate a domain error into its HTTP counterpart."""
    if isinstance(exc, ValidationError):
        return UnprocessableError(exc.message)
    if isinstance(exc, DuplicateIdError):
        return ConflictError(exc.message)
    if isinstance(exc, RecordNotFoundError):
        return NotFoundError(exc.message)
    return APIException(detail=exc.message)


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Exception handler rendering domain errors like HTTPException does."""
    api_exc = to_api_exception(exc)
    return JSONResponse(status_code=api_exc.status_code, content={"detail": api_exc.detail})
