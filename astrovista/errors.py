"""Error taxonomy and the exception handlers that render it."""

import logging
from http import HTTPStatus

import aiosqlite
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from astrovista.services.responses import error_response

logger = logging.getLogger(__name__)


class APIError(Exception):
    status_code = 500
    message = "Internal server error"
    cause = "Unexpected error"

    def __init__(self, cause: str | None = None, message: str | None = None):
        self.cause = cause or self.cause
        self.message = message or self.message
        super().__init__(self.message)

    def to_response(self) -> dict:
        return error_response(self.message, self.cause, self.status_code)


# ── 400: user input ──────────────────────────────────────────────────────────

class ValidationError(APIError):
    status_code = 400
    message = "Invalid request"
    cause = "The request parameters are invalid"


class InvalidDateFormat(ValidationError):
    message = "Invalid date format"
    cause = "Date must be in YYYY-MM-DD format"


class InvalidDateRange(ValidationError):
    message = "Invalid date range"
    cause = "startDate cannot be after endDate"


class InvalidMediaType(ValidationError):
    message = "Invalid media type"
    cause = "Media type must be 'image' or 'video'"


class InvalidSortValue(ValidationError):
    message = "Invalid sort value"
    cause = "sort must be 'asc' or 'desc'"


class InvalidPerPage(ValidationError):
    message = "Invalid perPage value"
    cause = "perPage must be a number less than 200 and greater than 0"


class InvalidPage(ValidationError):
    message = "Invalid page number"
    cause = "Page must be greater than 0"


# ── 4xx: resource state and access ───────────────────────────────────────────

class AuthError(APIError):
    status_code = 401
    message = "Unauthorized"
    cause = "Invalid or missing API key"


class NotFoundError(APIError):
    status_code = 404
    message = "No APOD found"
    cause = "No matching APOD"


class ConflictError(APIError):
    status_code = 409
    message = "APOD already exists"
    cause = "APOD for this date already exists"


class RateLimitError(APIError):
    status_code = 429
    message = "Too many requests"
    cause = "Rate limit exceeded. Please try again later."

    def __init__(self, retry_after: int, cause: str | None = None):
        self.retry_after = retry_after
        super().__init__(cause)


# ── 500: collaborators ───────────────────────────────────────────────────────

class UpstreamError(APIError):
    message = "Upstream error"
    cause = "Failed to fetch APOD from upstream API"


class StoreError(APIError):
    message = "Internal server error"
    cause = "Database error"


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    headers = None
    if isinstance(exc, RateLimitError):
        headers = {"Retry-After": str(exc.retry_after)}

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response(),
        headers=headers,
    )


async def store_error_handler(request: Request, exc: aiosqlite.Error) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return await api_error_handler(request, StoreError())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework errors (unknown route, wrong method) in the same envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(
            HTTPStatus(exc.status_code).phrase,
            str(exc.detail),
            exc.status_code,
        ),
        headers=getattr(exc, "headers", None),
    )
