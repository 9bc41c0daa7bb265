"""Default mapper from exceptions to problem details.

Each problem member is derived by its own ``map_*`` method so subclasses can
replace one rule without re-implementing the rest. Every rule consults, in
order, the exception-level override on the options, the context-level
override, and finally its built-in default; the first tier that yields a
value wins.
"""

from __future__ import annotations

import traceback
from typing import TYPE_CHECKING, Any, Callable, Final, TypeVar

from fastapi import HTTPException as FastAPIHTTPException
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from ..errors import OutOfRangeError, require
from ..exceptions import HttpException, ValidationErrorException
from ..exposure import extract_extensions
from ..problem import ERRORS_KEY, EXCEPTION_DETAILS_KEY, ProblemDetails, ProblemDetailsResult
from ..status_codes import get_information_link, get_status_name, is_valid_status
from ..text import format_type_name, is_absolute_uri, to_slug
from .base import ExceptionMapper, request_path

if TYPE_CHECKING:  # pragma: no cover
    from ..options import HttpExceptionsOptions


_T = TypeVar("_T")

_GENERIC_HTTP_EXCEPTIONS: Final[frozenset[type]] = frozenset(
    {HttpException, StarletteHTTPException, FastAPIHTTPException}
)
_MAX_INNER_EXCEPTIONS: Final[int] = 10


def declared_status(exception: BaseException) -> int | None:
    """Return the status code a typed HTTP exception was raised with."""

    if isinstance(exception, (HttpException, StarletteHTTPException)):
        status = getattr(exception, "status_code", None)
        if is_valid_status(status):
            return status
    return None


def serialize_exception(exception: BaseException, *, depth: int = 0) -> dict[str, Any]:
    """Return a JSON friendly description of ``exception`` and its causes."""

    exception_type = type(exception)
    details: dict[str, Any] = {
        "type": f"{exception_type.__module__}.{exception_type.__qualname__}",
        "message": str(exception),
        "stackTrace": [line.rstrip("\n") for line in traceback.format_tb(exception.__traceback__)],
    }

    inner = exception.__cause__
    if inner is None and not exception.__suppress_context__:
        inner = exception.__context__
    if inner is not None and depth < _MAX_INNER_EXCEPTIONS:
        details["innerException"] = serialize_exception(inner, depth=depth + 1)
    return details


class ProblemDetailsExceptionMapper(ExceptionMapper):
    """Maps ``exception_type`` and its subclasses to problem details."""

    def __init__(self, options: "HttpExceptionsOptions", exception_type: type[BaseException] = Exception) -> None:
        super().__init__(options)
        if not (isinstance(exception_type, type) and issubclass(exception_type, BaseException)):
            raise TypeError(f"{exception_type!r} is not an exception type.")
        self.exception_type = exception_type

    def can_map(self, exception_type: type) -> bool:
        return isinstance(exception_type, type) and issubclass(exception_type, self.exception_type)

    def map(self, exception: BaseException, context: Request) -> ProblemDetailsResult:
        require(exception, "exception")
        require(context, "context")

        if not self.can_map(type(exception)):
            raise OutOfRangeError(
                "exception",
                exception,
                f"Exception is not of type {self.exception_type.__name__}.",
            )

        problem = ProblemDetails(
            status=self.map_status(exception, context),
            type=self.map_type(exception, context),
            title=self.map_title(exception, context),
            detail=self.map_detail(exception, context),
            instance=self.map_instance(exception, context),
            extensions=self.map_extensions(exception, context),
        )
        return ProblemDetailsResult(problem)

    def get_declared_status(self, exception: BaseException) -> int | None:
        return declared_status(exception)

    def _override(
        self,
        exception: BaseException,
        context: Request | None,
        exception_mapping: Callable[[BaseException], _T | None] | None,
        context_mapping: Callable[[Request], _T | None] | None,
        accept: Callable[[Any], bool] = bool,
    ) -> _T | None:
        if exception_mapping is not None and exception is not None:
            value = exception_mapping(exception)
            if accept(value):
                return value
        if context_mapping is not None and context is not None:
            value = context_mapping(context)
            if accept(value):
                return value
        return None

    def map_status(self, exception: BaseException, context: Request | None) -> int:
        """Return the override status, the declared HTTP status, or 500."""

        status = self._override(
            exception,
            context,
            self.options.exception_status_mapping,
            self.options.context_status_mapping,
            accept=lambda value: value is not None,
        )
        if status is not None:
            return int(status)

        return self.get_declared_status(exception) or 500

    def map_type(self, exception: BaseException, context: Request | None) -> str:
        """Return a URI classifying the problem.

        Falls back from the overrides to the exception's help link, the status
        code information link of typed HTTP exceptions, the configured default
        help link and finally ``error:<title slug>``.
        """

        uri = self._override(
            exception,
            context,
            self.options.exception_type_mapping,
            self.options.context_type_mapping,
        )
        if uri:
            return str(uri)

        help_link = getattr(exception, "help_link", None)
        if is_absolute_uri(help_link):
            return help_link

        status = self.get_declared_status(exception)
        if status is not None:
            link = get_information_link(status)
            if link:
                return link

        if self.options.default_help_link:
            return self.options.default_help_link

        return f"error:{to_slug(self.map_title(exception, context))}"

    def map_title(self, exception: BaseException, context: Request | None) -> str:
        title = self._override(
            exception,
            context,
            self.options.exception_title_mapping,
            self.options.context_title_mapping,
        )
        if title:
            return title

        if type(exception) in _GENERIC_HTTP_EXCEPTIONS:
            status = self.get_declared_status(exception)
            if status is not None:
                return get_status_name(status)
        return format_type_name(type(exception))

    def map_detail(self, exception: BaseException, context: Request | None) -> str:
        detail = self._override(
            exception,
            context,
            self.options.exception_detail_mapping,
            self.options.context_detail_mapping,
        )
        if detail:
            return detail

        if isinstance(exception, StarletteHTTPException):
            message = exception.detail if isinstance(exception.detail, str) else None
        else:
            message = str(exception)
        return message or self.map_title(exception, context)

    def map_instance(self, exception: BaseException, context: Request | None) -> str | None:
        """Return the help link when it is a valid URI, else the request path."""

        instance = self._override(
            exception,
            context,
            self.options.exception_instance_mapping,
            self.options.context_instance_mapping,
        )
        if instance:
            return instance

        help_link = getattr(exception, "help_link", None)
        if is_absolute_uri(help_link):
            return help_link

        if context is not None:
            return request_path(context)
        return None

    def map_errors(self, exception: BaseException) -> dict[str, list[str]] | None:
        if isinstance(exception, ValidationErrorException):
            return {member: list(messages) for member, messages in exception.errors.items()}
        return None

    def map_extensions(self, exception: BaseException, context: Request | None) -> dict[str, Any]:
        extensions: dict[str, Any] = {}

        if self.options.expose_exception_fields:
            extensions.update(extract_extensions(exception))

        errors = self.map_errors(exception)
        if errors is not None:
            extensions[ERRORS_KEY] = errors

        include_details = self.options.include_exception_details
        if include_details is not None and context is not None and include_details(context):
            extensions[EXCEPTION_DETAILS_KEY] = serialize_exception(exception)

        return extensions


__all__ = ["ProblemDetailsExceptionMapper", "declared_status", "serialize_exception"]
