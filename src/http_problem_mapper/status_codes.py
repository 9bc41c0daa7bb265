"""Static lookups from HTTP status codes to names and RFC links."""

from __future__ import annotations

from http import HTTPStatus
from types import MappingProxyType
from typing import Final, Mapping


_RFC7231: Final[str] = "https://tools.ietf.org/html/rfc7231"

STATUS_CODE_LINKS: Final[Mapping[int, str]] = MappingProxyType(
    {
        100: f"{_RFC7231}#section-6.2.1",
        101: f"{_RFC7231}#section-6.2.2",
        200: f"{_RFC7231}#section-6.3.1",
        201: f"{_RFC7231}#section-6.3.2",
        202: f"{_RFC7231}#section-6.3.3",
        203: f"{_RFC7231}#section-6.3.4",
        204: f"{_RFC7231}#section-6.3.5",
        205: f"{_RFC7231}#section-6.3.6",
        206: "https://tools.ietf.org/html/rfc7233#section-4.1",
        300: f"{_RFC7231}#section-6.4.1",
        301: f"{_RFC7231}#section-6.4.2",
        302: f"{_RFC7231}#section-6.4.3",
        303: f"{_RFC7231}#section-6.4.4",
        304: "https://tools.ietf.org/html/rfc7232#section-4.1",
        305: f"{_RFC7231}#section-6.4.5",
        307: f"{_RFC7231}#section-6.4.7",
        400: f"{_RFC7231}#section-6.5.1",
        401: "https://tools.ietf.org/html/rfc7235#section-3.1",
        402: f"{_RFC7231}#section-6.5.2",
        403: f"{_RFC7231}#section-6.5.3",
        404: f"{_RFC7231}#section-6.5.4",
        405: f"{_RFC7231}#section-6.5.5",
        406: f"{_RFC7231}#section-6.5.6",
        407: "https://tools.ietf.org/html/rfc7235#section-3.2",
        408: f"{_RFC7231}#section-6.5.7",
        409: f"{_RFC7231}#section-6.5.8",
        410: f"{_RFC7231}#section-6.5.9",
        411: f"{_RFC7231}#section-6.5.10",
        412: "https://tools.ietf.org/html/rfc7232#section-4.2",
        413: f"{_RFC7231}#section-6.5.11",
        414: f"{_RFC7231}#section-6.5.12",
        415: f"{_RFC7231}#section-6.5.13",
        416: "https://tools.ietf.org/html/rfc7233#section-4.4",
        417: f"{_RFC7231}#section-6.5.14",
        422: "https://tools.ietf.org/html/rfc4918#section-11.2",
        426: f"{_RFC7231}#section-6.5.15",
        429: "https://tools.ietf.org/html/rfc6585#section-4",
        500: f"{_RFC7231}#section-6.6.1",
        501: f"{_RFC7231}#section-6.6.2",
        502: f"{_RFC7231}#section-6.6.3",
        503: f"{_RFC7231}#section-6.6.4",
        504: f"{_RFC7231}#section-6.6.5",
        505: f"{_RFC7231}#section-6.6.6",
    }
)


def get_information_link(status: int) -> str | None:
    """Return the RFC link describing ``status``, if one is known."""

    return STATUS_CODE_LINKS.get(status)


def get_status_name(status: int) -> str:
    """Return the canonical reason phrase for ``status`` or the code as text."""

    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return str(status)


def is_valid_status(status: object) -> bool:
    return isinstance(status, int) and not isinstance(status, bool) and 100 <= status <= 599


__all__ = ["STATUS_CODE_LINKS", "get_information_link", "get_status_name", "is_valid_status"]
