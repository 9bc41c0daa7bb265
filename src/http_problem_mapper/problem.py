"""Problem details payload and the result envelope handed back to the host."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final, Mapping

from starlette.responses import JSONResponse

from .status_codes import is_valid_status


PROBLEM_JSON_MEDIA_TYPE: Final[str] = "application/problem+json"
ERRORS_KEY: Final[str] = "errors"
EXCEPTION_DETAILS_KEY: Final[str] = "exceptionDetails"

_STANDARD_MEMBERS: Final[frozenset[str]] = frozenset({"type", "title", "status", "detail", "instance"})


@dataclass(frozen=True)
class ProblemDetails:
    """Machine readable description of an HTTP error (RFC 7807).

    Parameters
    ----------
    status:
        HTTP status code; always a 3-digit code in the 100-599 range.
    type:
        URI reference classifying the problem. Never empty.
    title:
        Short human readable summary.
    detail:
        Human readable explanation specific to this occurrence.
    instance:
        URI reference (usually the request path) identifying the occurrence.
    extensions:
        Additional members serialised at the top level of the document.
    """

    status: int
    type: str
    title: str
    detail: str
    instance: str | None = None
    extensions: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not is_valid_status(self.status):
            raise ValueError(f"Problem status must be a 3-digit HTTP status code, got {self.status!r}.")
        if not self.type:
            raise ValueError("Problem type must not be empty.")
        object.__setattr__(self, "extensions", MappingProxyType(dict(self.extensions)))

    def __hash__(self) -> int:
        # extension values may be unhashable; equal problems still hash equal
        return hash((self.status, self.type, self.title, self.detail, self.instance))

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation with extensions merged at the top level."""

        payload: dict[str, Any] = {
            "type": self.type,
            "title": self.title,
            "status": self.status,
            "detail": self.detail,
        }
        if self.instance is not None:
            payload["instance"] = self.instance
        for key, value in self.extensions.items():
            if key not in _STANDARD_MEMBERS:
                payload[key] = value
        return payload

    def get_errors(self) -> Mapping[str, list[str]] | None:
        errors = self.extensions.get(ERRORS_KEY)
        return errors if isinstance(errors, Mapping) else None

    def get_exception_details(self) -> Mapping[str, Any] | None:
        details = self.extensions.get(EXCEPTION_DETAILS_KEY)
        return details if isinstance(details, Mapping) else None


@dataclass(frozen=True)
class ProblemDetailsResult:
    """Envelope carrying a problem document and its status code to the host."""

    value: ProblemDetails

    @property
    def status_code(self) -> int:
        return self.value.status

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            self.value.to_dict(),
            status_code=self.status_code,
            media_type=PROBLEM_JSON_MEDIA_TYPE,
        )


__all__ = [
    "ProblemDetails",
    "ProblemDetailsResult",
    "PROBLEM_JSON_MEDIA_TYPE",
    "ERRORS_KEY",
    "EXCEPTION_DETAILS_KEY",
]
