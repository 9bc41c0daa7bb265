"""FastAPI / Starlette wiring for the problem detail mappers."""

from __future__ import annotations

import logging
from typing import Final

from fastapi import FastAPI
from fastapi.exception_handlers import http_exception_handler, request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from prometheus_client import Counter
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from .config import load_options
from .log import configure_logging
from .options import HttpExceptionsOptions
from .problem import ProblemDetailsResult


logger = logging.getLogger(__name__)

PRESERVED_HEADERS: Final[tuple[str, ...]] = ("www-authenticate", "retry-after", "allow")

PROBLEMS_TOTAL = Counter(
    "http_problems_total",
    "Problem detail documents produced",
    ["status", "source"],
)


def _ensure_configured(options: HttpExceptionsOptions | None) -> HttpExceptionsOptions:
    options = options if options is not None else load_options()
    if not options.is_configured:
        options.configure()
    return options


def log_exception(options: HttpExceptionsOptions, exception: BaseException, request: Request, status_code: int) -> None:
    if not options.should_log(exception):
        return

    extra = {
        "path": request.url.path,
        "method": request.method,
        "status_code": status_code,
        "exception_type": type(exception).__name__,
    }
    if status_code >= 500:
        logger.error("Unhandled exception while processing request", extra=extra, exc_info=exception)
    else:
        logger.warning("Request failed with a client error", extra=extra)


def _render(result: ProblemDetailsResult, source: str, headers: dict[str, str] | None = None) -> Response:
    PROBLEMS_TOTAL.labels(status=str(result.status_code), source=source).inc()
    response = result.to_response()
    for key, value in (headers or {}).items():
        response.headers[key] = value
    return response


class HttpExceptionsMiddleware(BaseHTTPMiddleware):
    """Turns exceptions and empty error responses into problem documents.

    Exceptions no mapper accepts are re-raised so the server's own error
    handling still applies.
    """

    def __init__(self, app: ASGIApp, options: HttpExceptionsOptions | None = None) -> None:
        super().__init__(app)
        self.options = _ensure_configured(options)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            response = await call_next(request)
        except Exception as exc:
            result = self.options.try_map_exception(exc, request)
            if result is None:
                logger.debug("No mapper accepted %s", type(exc).__name__, extra={"path": request.url.path})
                raise
            log_exception(self.options, exc, request, result.status_code)
            return _render(result, "exception")

        if not self.options.is_error_response(request, response):
            return response

        result = self.options.try_map_response(response, request)
        if result is None:
            return response

        preserved = {key: response.headers[key] for key in PRESERVED_HEADERS if key in response.headers}
        return _render(result, "response", preserved)


def install(
    app: FastAPI,
    options: HttpExceptionsOptions | None = None,
    *,
    json_logs: bool = False,
) -> HttpExceptionsOptions:
    """Add the middleware and exception handlers to ``app``.

    With ``json_logs`` the package loggers, including the exception log
    written for every mapped failure, are routed through
    :class:`~http_problem_mapper.log.JsonFormatter`.

    FastAPI answers ``HTTPException`` and request validation failures itself
    before any middleware sees them, so dedicated handlers route those through
    the mappers too. Unmapped errors fall back to FastAPI's default handlers.
    """

    options = _ensure_configured(options)
    if json_logs:
        configure_logging()

    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
        result = options.try_map_exception(exc, request)
        if result is None:
            return await http_exception_handler(request, exc)
        log_exception(options, exc, request, result.status_code)
        return _render(result, "exception", dict(exc.headers or {}))

    async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
        result = options.try_map_exception(exc, request)
        if result is None:
            return await request_validation_exception_handler(request, exc)
        log_exception(options, exc, request, result.status_code)
        return _render(result, "exception")

    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_middleware(HttpExceptionsMiddleware, options=options)
    return options


__all__ = ["HttpExceptionsMiddleware", "install", "log_exception", "PROBLEMS_TOTAL"]
