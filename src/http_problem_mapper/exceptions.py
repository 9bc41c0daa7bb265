"""Typed HTTP exceptions understood by the default exception mapper.

Every :class:`HttpException` carries the status code it should be reported
with and a ``help_link`` that defaults to the RFC section for that
code. Application code raises these instead of building responses by hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from .status_codes import get_information_link, get_status_name


class HttpException(Exception):
    """Exception reported to clients with an explicit HTTP status code."""

    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        help_link: str | None = None,
    ) -> None:
        if status_code is not None:
            self.status_code = int(status_code)
        super().__init__(message if message is not None else get_status_name(self.status_code))
        self.help_link = help_link if help_link is not None else get_information_link(self.status_code)

    @property
    def message(self) -> str:
        return str(self)


class BadRequestException(HttpException):
    status_code = 400


class UnauthorizedException(HttpException):
    status_code = 401


class ForbiddenException(HttpException):
    status_code = 403


class NotFoundException(HttpException):
    status_code = 404


class ConflictException(HttpException):
    status_code = 409


class UnprocessableEntityException(HttpException):
    status_code = 422


class ServiceUnavailableException(HttpException):
    status_code = 503


@dataclass(frozen=True)
class ValidationIssue:
    """Structured validation failure: a message and the members it concerns."""

    error_message: str
    member_names: tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.error_message


def _as_message(error: Any) -> str:
    for attribute in ("error_message", "message", "msg"):
        value = getattr(error, attribute, None)
        if isinstance(value, str):
            return value
    if isinstance(error, Mapping):
        value = error.get("msg") or error.get("message")
        if isinstance(value, str):
            return value
    return str(error)


def _as_messages(member_errors: Any) -> list[str]:
    if isinstance(member_errors, (str, Mapping, ValidationIssue)) or not isinstance(member_errors, Iterable):
        return [_as_message(member_errors)]
    return [_as_message(error) for error in member_errors]


def _group_errors(errors: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> dict[str, list[str]]:
    pairs = errors.items() if isinstance(errors, Mapping) else errors
    grouped: dict[str, list[str]] = {}
    for member, member_errors in pairs:
        grouped.setdefault(str(member), []).extend(_as_messages(member_errors))
    return grouped


class ValidationErrorException(BadRequestException):
    """Bad request carrying field-level validation messages.

    ``errors`` is either a mapping of member name to messages or a sequence of
    ``(member, message)`` pairs. A single message stands for a one-item list,
    structured error objects are reduced to their message text and duplicate
    messages are kept as given.
    """

    def __init__(
        self,
        errors: Mapping[str, Any] | Iterable[tuple[str, Any]],
        message: str | None = None,
        *,
        help_link: str | None = None,
    ) -> None:
        super().__init__(message or "One or more validation errors occurred.", help_link=help_link)
        self.errors: dict[str, list[str]] = _group_errors(errors)

    @classmethod
    def for_member(cls, member_name: str, errors: str | Sequence[Any], message: str | None = None) -> "ValidationErrorException":
        return cls({member_name: errors}, message)


__all__ = [
    "HttpException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "UnprocessableEntityException",
    "ServiceUnavailableException",
    "ValidationIssue",
    "ValidationErrorException",
]
