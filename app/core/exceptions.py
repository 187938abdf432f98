"""
Custom exception classes and JSON error handling.
"""
from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict

from app.core.constants import ErrorMessages


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""
    error: str

    model_config = ConfigDict(frozen=True)


class AppException(Exception):
    """Base application exception."""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(detail)


class InvalidRequestError(AppException):
    """The request is missing a required parameter."""

    def __init__(self, detail: str = ErrorMessages.MISSING_SOURCE):
        super().__init__(status_code=400, detail=detail)


class SourceNotFoundError(AppException):
    """No live source is configured under the requested key."""

    def __init__(self, source_key: str):
        self.source_key = source_key
        super().__init__(status_code=404, detail=ErrorMessages.SOURCE_NOT_FOUND)


class SourceDisabledError(AppException):
    """The live source exists but is disabled."""

    def __init__(self, source_key: str):
        self.source_key = source_key
        super().__init__(status_code=400, detail=ErrorMessages.SOURCE_DISABLED)


class FetchOrParseError(AppException):
    """
    Fetching or parsing the upstream playlist failed.

    Transient from the caller's point of view: the request may be retried
    later. A failed fetch never touches the cache.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(
            status_code=500,
            detail=f"{ErrorMessages.FETCH_FAILED_PREFIX}{message}",
        )


class InternalServerError(AppException):
    """Internal server error exception."""

    def __init__(self, detail: str = ErrorMessages.INTERNAL_FAILURE):
        super().__init__(status_code=500, detail=detail)


def create_error_response(status_code: int, detail: str) -> JSONResponse:
    """Create a JSON error response."""
    error = ErrorResponse(error=detail)
    return JSONResponse(status_code=status_code, content=error.model_dump())


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle AppException and return its JSON error body."""
    return create_error_response(status_code=exc.status_code, detail=exc.detail)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log any unclassified error and hide its details from the client."""
    logger.opt(exception=exc).error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}"
    )
    error = InternalServerError()
    return create_error_response(status_code=error.status_code, detail=error.detail)
