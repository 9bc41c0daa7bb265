"""Configuration surface and mapper resolution.

:class:`HttpExceptionsOptions` is built once at start-up: override hooks are
assigned, mapper descriptors registered, and :meth:`HttpExceptionsOptions.configure`
turns the descriptors into an ordered, read-only tuple of mappers. Request
handling only reads from it, so a configured instance can be shared by every
in-flight request.

Resolution is first-match-wins over the configured order. Register specific
exception types before general ones; the catch-all ``Exception`` mapper and
the ``ANY_STATUS`` response mapper belong at the end.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from starlette.requests import Request
from starlette.responses import Response

from .mappers.base import ExceptionMapper, ResponseMapper
from .mappers.exception import ProblemDetailsExceptionMapper
from .mappers.response import ANY_STATUS, ProblemDetailsResponseMapper
from .mappers.validation import RequestValidationExceptionMapper
from .problem import ProblemDetailsResult


logger = logging.getLogger(__name__)

ExceptionHook = Callable[[BaseException], Any]
ContextHook = Callable[[Request], Any]


@dataclass(frozen=True)
class ExceptionMapperDescriptor:
    """Registration of a mapper type for an exception type."""

    exception_type: type[BaseException]
    mapper_type: type[ExceptionMapper] = ProblemDetailsExceptionMapper
    order: int = 0
    arguments: Mapping[str, Any] = field(default_factory=dict)

    def create(self, options: "HttpExceptionsOptions") -> ExceptionMapper:
        return self.mapper_type(options, exception_type=self.exception_type, **self.arguments)


@dataclass(frozen=True)
class ResponseMapperDescriptor:
    """Registration of a mapper type for a response status code."""

    status: int = ANY_STATUS
    mapper_type: type[ResponseMapper] = ProblemDetailsResponseMapper
    order: int = 0
    arguments: Mapping[str, Any] = field(default_factory=dict)

    def create(self, options: "HttpExceptionsOptions") -> ResponseMapper:
        return self.mapper_type(options, status=self.status, **self.arguments)


def is_empty_error_response(request: Request, response: Response) -> bool:
    """Return ``True`` for error responses that carry no body."""

    if response.status_code < 400:
        return False
    if "content-type" in response.headers:
        return False
    return response.headers.get("content-length") == "0"


@dataclass
class HttpExceptionsOptions:
    """Override hooks and mapper registrations consumed by the mappers.

    Every ``exception_*_mapping`` hook receives the exception, every
    ``context_*_mapping`` hook the current request. A hook returning ``None``
    or an empty value defers to the next tier; exception hooks are consulted
    before context hooks.
    """

    include_exception_details: Callable[[Request], bool] | None = None
    expose_exception_fields: bool = True
    is_exception_response: Callable[[Request, Response], bool] | None = None
    should_log_exception: Callable[[BaseException], bool] | None = None

    exception_type_mapping: ExceptionHook | None = None
    context_type_mapping: ContextHook | None = None
    exception_instance_mapping: ExceptionHook | None = None
    context_instance_mapping: ContextHook | None = None
    exception_title_mapping: ExceptionHook | None = None
    context_title_mapping: ContextHook | None = None
    exception_status_mapping: ExceptionHook | None = None
    context_status_mapping: ContextHook | None = None
    exception_detail_mapping: ExceptionHook | None = None
    context_detail_mapping: ContextHook | None = None

    default_help_link: str | None = None

    exception_mapper_descriptors: dict[type[BaseException], ExceptionMapperDescriptor] = field(default_factory=dict)
    response_mapper_descriptors: dict[int, ResponseMapperDescriptor] = field(default_factory=dict)
    exception_mappers: tuple[ExceptionMapper, ...] = ()
    response_mappers: tuple[ResponseMapper, ...] = ()

    _configured: bool = field(default=False, init=False, repr=False)

    @property
    def is_configured(self) -> bool:
        return self._configured

    def add_exception_mapper(
        self,
        exception_type: type[BaseException],
        mapper_type: type[ExceptionMapper] = ProblemDetailsExceptionMapper,
        *,
        order: int = 0,
        **arguments: Any,
    ) -> "HttpExceptionsOptions":
        """Register ``mapper_type`` for ``exception_type`` and its subclasses."""

        self.exception_mapper_descriptors[exception_type] = ExceptionMapperDescriptor(
            exception_type=exception_type,
            mapper_type=mapper_type,
            order=order,
            arguments=dict(arguments),
        )
        self._configured = False
        return self

    def add_response_mapper(
        self,
        status: int = ANY_STATUS,
        mapper_type: type[ResponseMapper] = ProblemDetailsResponseMapper,
        *,
        order: int = 0,
        **arguments: Any,
    ) -> "HttpExceptionsOptions":
        """Register ``mapper_type`` for responses with ``status``."""

        self.response_mapper_descriptors[status] = ResponseMapperDescriptor(
            status=status,
            mapper_type=mapper_type,
            order=order,
            arguments=dict(arguments),
        )
        self._configured = False
        return self

    def configure(self) -> "HttpExceptionsOptions":
        """Build the mapper tuples from the registered descriptors.

        When nothing was registered the defaults are installed: validation
        errors, then every ``Exception``, and a response mapper for any status.
        """

        if not self.exception_mapper_descriptors and not self.exception_mappers:
            self.add_exception_mapper(RequestValidationError, RequestValidationExceptionMapper)
            self.add_exception_mapper(PydanticValidationError, RequestValidationExceptionMapper)
            self.add_exception_mapper(Exception)
        if not self.response_mapper_descriptors and not self.response_mappers:
            self.add_response_mapper(ANY_STATUS)

        if self.exception_mapper_descriptors:
            descriptors = sorted(self.exception_mapper_descriptors.values(), key=lambda item: item.order)
            self.exception_mappers = tuple(descriptor.create(self) for descriptor in descriptors)
        if self.response_mapper_descriptors:
            descriptors = sorted(self.response_mapper_descriptors.values(), key=lambda item: item.order)
            self.response_mappers = tuple(descriptor.create(self) for descriptor in descriptors)

        self._configured = True
        logger.debug(
            "Configured problem detail mappers",
            extra={
                "exception_mappers": [type(mapper).__name__ for mapper in self.exception_mappers],
                "response_mappers": [type(mapper).__name__ for mapper in self.response_mappers],
            },
        )
        return self

    def try_map_exception(self, exception: BaseException, context: Request) -> ProblemDetailsResult | None:
        """Return the first mapper result for ``exception`` or ``None``."""

        if not self._configured:
            self.configure()

        for mapper in self.exception_mappers:
            result = mapper.try_map(exception, context)
            if result is not None:
                return result
        return None

    def try_map_response(self, response: Response, context: Request) -> ProblemDetailsResult | None:
        """Return the first mapper result for ``response`` or ``None``."""

        if not self._configured:
            self.configure()

        for mapper in self.response_mappers:
            result = mapper.try_map(response, context)
            if result is not None:
                return result
        return None

    def should_log(self, exception: BaseException) -> bool:
        if self.should_log_exception is None:
            return True
        return bool(self.should_log_exception(exception))

    def is_error_response(self, request: Request, response: Response) -> bool:
        check = self.is_exception_response or is_empty_error_response
        return bool(check(request, response))


__all__ = [
    "HttpExceptionsOptions",
    "ExceptionMapperDescriptor",
    "ResponseMapperDescriptor",
    "is_empty_error_response",
    "ANY_STATUS",
]
