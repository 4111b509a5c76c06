"""
Domain errors and their HTTP mapping.

Services raise these; routers never build error responses themselves.
`register_exception_handlers()` turns every error into the same JSON body:

    {"error": "<message>"}

Storage errors are the exception to "echo the message": the real cause is
logged here and the client only sees "Internal server error".
"""

import logging
from dataclasses import dataclass

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldError:
    """One violated constraint on one input field."""
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class VideoAPIError(Exception):
    """Base class for errors the API knows how to render."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def client_message(self) -> str:
        return self.message


class ValidationError(VideoAPIError):
    """Input failed field constraints. Raised before any storage call."""

    status_code = 400

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        super().__init__(
            "Validation error: " + "; ".join(str(e) for e in self.errors)
        )


class NotFoundError(VideoAPIError):
    """No active (non-deleted) video with this id."""

    status_code = 404

    def __init__(self, video_id: int):
        self.video_id = video_id
        super().__init__(f"Video with id {video_id} not found")


class StorageError(VideoAPIError):
    """Any persistence failure: connection, constraint violation, etc."""

    status_code = 500

    @property
    def client_message(self) -> str:
        return "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_api_error(request: Request, exc: VideoAPIError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error(
            "Storage error on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc.__cause__ or exc,
        )
    return error_response(exc.status_code, exc.client_message)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: anything not mapped above is a 500 in our error shape."""
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return error_response(500, "Internal server error")


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed JSON, missing fields or bad query params → 400."""
    errors = []
    for err in exc.errors():
        # loc looks like ("body", "title") or ("query", "page")
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        errors.append(FieldError(field, err.get("msg", "invalid value")))
    return error_response(400, str(ValidationError(errors)))


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Keep framework errors (unknown route, wrong method) in our error shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(VideoAPIError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
