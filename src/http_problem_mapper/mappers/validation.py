"""Mapper for validation errors raised by FastAPI and pydantic."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, Iterable, Mapping

from fastapi.exceptions import RequestValidationError
from starlette.requests import Request

from .exception import ProblemDetailsExceptionMapper

if TYPE_CHECKING:  # pragma: no cover
    from ..options import HttpExceptionsOptions


VALIDATION_STATUS: Final[int] = 400
VALIDATION_DETAIL: Final[str] = "One or more validation errors occurred."


def _member_name(location: Iterable[Any]) -> str:
    parts = [str(part) for part in location]
    return ".".join(parts) if parts else "__root__"


def collect_errors(errors: Iterable[Mapping[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic style error entries by their dotted location."""

    grouped: dict[str, list[str]] = {}
    for error in errors:
        member = _member_name(error.get("loc") or ())
        grouped.setdefault(member, []).append(str(error.get("msg", "")))
    return grouped


class RequestValidationExceptionMapper(ProblemDetailsExceptionMapper):
    """Maps exceptions exposing pydantic-style ``errors()`` to a 400 problem."""

    def __init__(
        self,
        options: "HttpExceptionsOptions",
        exception_type: type[BaseException] = RequestValidationError,
    ) -> None:
        super().__init__(options, exception_type)

    def get_declared_status(self, exception: BaseException) -> int | None:
        return VALIDATION_STATUS

    def map_title(self, exception: BaseException, context: Request | None) -> str:
        title = self._override(
            exception,
            context,
            self.options.exception_title_mapping,
            self.options.context_title_mapping,
        )
        return title or "Validation"

    def map_detail(self, exception: BaseException, context: Request | None) -> str:
        detail = self._override(
            exception,
            context,
            self.options.exception_detail_mapping,
            self.options.context_detail_mapping,
        )
        return detail or VALIDATION_DETAIL

    def map_errors(self, exception: BaseException) -> dict[str, list[str]] | None:
        errors = getattr(exception, "errors", None)
        if not callable(errors):
            return None
        return collect_errors(errors())


__all__ = ["RequestValidationExceptionMapper", "collect_errors", "VALIDATION_STATUS"]
