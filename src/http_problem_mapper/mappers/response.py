"""Default mapper for error responses that carry no body.

Framework middleware (authentication, routing) frequently short-circuits a
request with a bare ``401``/``403``/``404``. This mapper gives such responses
the same problem document shape as mapped exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from starlette.requests import Request
from starlette.responses import Response

from ..errors import OutOfRangeError, require
from ..problem import ProblemDetails, ProblemDetailsResult
from ..status_codes import get_information_link, get_status_name
from ..text import to_slug
from .base import ResponseMapper, request_path

if TYPE_CHECKING:  # pragma: no cover
    from ..options import HttpExceptionsOptions


ANY_STATUS: Final[int] = -1


class ProblemDetailsResponseMapper(ResponseMapper):
    """Maps responses with ``status`` (or any status for ``ANY_STATUS``)."""

    def __init__(self, options: "HttpExceptionsOptions", status: int = ANY_STATUS) -> None:
        super().__init__(options)
        self.status = status

    def can_map(self, status: int) -> bool:
        return self.status == ANY_STATUS or self.status == status

    def map(self, response: Response, context: Request) -> ProblemDetailsResult:
        require(response, "response")
        require(context, "context")

        if not self.can_map(response.status_code):
            raise OutOfRangeError("response", response, f"Response status is not {self.status}.")

        problem = ProblemDetails(
            status=self.map_status(response, context),
            type=self.map_type(response, context),
            title=self.map_title(response, context),
            detail=self.map_detail(response, context),
            instance=self.map_instance(response, context),
        )
        return ProblemDetailsResult(problem)

    def map_status(self, response: Response, context: Request | None) -> int:
        mapping = self.options.context_status_mapping
        if mapping is not None and context is not None:
            status = mapping(context)
            if status is not None:
                return int(status)
        return response.status_code

    def map_title(self, response: Response, context: Request | None) -> str:
        """Return the reason phrase of the status code, or the code itself."""

        mapping = self.options.context_title_mapping
        if mapping is not None and context is not None:
            title = mapping(context)
            if title:
                return title
        return get_status_name(response.status_code)

    def map_detail(self, response: Response, context: Request | None) -> str:
        mapping = self.options.context_detail_mapping
        if mapping is not None and context is not None:
            detail = mapping(context)
            if detail:
                return detail
        return self.map_title(response, context)

    def map_instance(self, response: Response, context: Request | None) -> str | None:
        mapping = self.options.context_instance_mapping
        if mapping is not None and context is not None:
            instance = mapping(context)
            if instance:
                return instance
        if context is not None:
            return request_path(context)
        return None

    def map_type(self, response: Response, context: Request | None) -> str:
        """Return the override, the status code link, the default help link or ``error:<slug>``."""

        mapping = self.options.context_type_mapping
        if mapping is not None and context is not None:
            uri = mapping(context)
            if uri:
                return str(uri)

        link = get_information_link(response.status_code)
        if link:
            return link

        if self.options.default_help_link:
            return self.options.default_help_link

        return f"error:{to_slug(self.map_title(response, context))}"


__all__ = ["ProblemDetailsResponseMapper", "ANY_STATUS"]
