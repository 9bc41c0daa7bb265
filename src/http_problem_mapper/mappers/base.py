"""Contracts shared by exception and response mappers.

A mapper answers two questions: *can* it describe a given exception type (or
status code), and *what* problem document does it produce. ``try_map`` wraps
both so that the resolution loop in :mod:`http_problem_mapper.options` can ask
every candidate in turn without dealing with individual mapper failures.
"""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING

from starlette.requests import Request
from starlette.responses import Response

from ..errors import require
from ..problem import ProblemDetailsResult

if TYPE_CHECKING:  # pragma: no cover
    from ..options import HttpExceptionsOptions


logger = logging.getLogger(__name__)


def request_path(context: Request) -> str | None:
    """Return the path of ``context`` or ``None`` when it has none."""

    url = getattr(context, "url", None)
    path = getattr(url, "path", None)
    return path or None


class ExceptionMapper(abc.ABC):
    """Strategy turning a raised exception into a problem document."""

    def __init__(self, options: "HttpExceptionsOptions") -> None:
        self.options = options

    @abc.abstractmethod
    def can_map(self, exception_type: type) -> bool:
        """Return ``True`` when exceptions of ``exception_type`` are handled."""

    @abc.abstractmethod
    def map(self, exception: BaseException, context: Request) -> ProblemDetailsResult:
        """Map ``exception`` or raise ``OutOfRangeError`` if it is not handled."""

    def try_map(self, exception: BaseException, context: Request) -> ProblemDetailsResult | None:
        """Map ``exception``, returning ``None`` when this mapper declines it."""

        require(exception, "exception")
        require(context, "context")

        if not self.can_map(type(exception)):
            return None

        try:
            return self.map(exception, context)
        except Exception:
            logger.warning(
                "Exception mapper failed; trying the next mapper",
                extra={"mapper": type(self).__name__, "exception_type": type(exception).__name__},
                exc_info=True,
            )
            return None


class ResponseMapper(abc.ABC):
    """Strategy turning an empty error response into a problem document."""

    def __init__(self, options: "HttpExceptionsOptions") -> None:
        self.options = options

    @abc.abstractmethod
    def can_map(self, status: int) -> bool:
        """Return ``True`` when responses with ``status`` are handled."""

    @abc.abstractmethod
    def map(self, response: Response, context: Request) -> ProblemDetailsResult:
        """Map ``response`` or raise ``OutOfRangeError`` if it is not handled."""

    def try_map(self, response: Response, context: Request) -> ProblemDetailsResult | None:
        require(response, "response")
        require(context, "context")

        if not self.can_map(response.status_code):
            return None

        try:
            return self.map(response, context)
        except Exception:
            logger.warning(
                "Response mapper failed; trying the next mapper",
                extra={"mapper": type(self).__name__, "status_code": response.status_code},
                exc_info=True,
            )
            return None


__all__ = ["ExceptionMapper", "ResponseMapper", "request_path"]
