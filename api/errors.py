"""Error types raised by handlers and the single place they become HTTP responses."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app_logging.activity_logger import ActivityLogger

logger = ActivityLogger("api")


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequest(ApiError):
    status_code = 400


class UpstreamFailure(ApiError):
    status_code = 500


def error_response(
    status_code: int, message: str, headers: Optional[dict[str, str]] = None
) -> JSONResponse:
    """The one `{"error": message}` body every failure is rendered as."""
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


@asynccontextmanager
async def upstream_call(message: str, event: str, **context) -> AsyncIterator[None]:
    """Log any failure inside the block and re-raise it as UpstreamFailure(message)."""
    try:
        yield
    except ApiError:
        raise
    except Exception as exc:
        logger.error(event, exc=exc, **context)
        raise UpstreamFailure(message) from exc


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code < 500:
        logger.info(
            "request_rejected",
            path=request.url.path,
            status_code=exc.status_code,
            reason=exc.message,
        )
    return error_response(exc.status_code, exc.message)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(
        "request_rejected",
        path=request.url.path,
        status_code=400,
        fields=[".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()],
    )
    return error_response(400, "Invalid payload")


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # unknown paths and methods raised by the router itself
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
