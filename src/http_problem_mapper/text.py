"""String helpers used to derive problem detail members."""

from __future__ import annotations

import re
from typing import Final


_WORD_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_NON_ALPHANUMERIC: Final[re.Pattern[str]] = re.compile(r"[^a-zA-Z0-9]+")
_NAME_SUFFIXES: Final[tuple[str, ...]] = ("Exception", "Error")
_ABSOLUTE_URI: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:\S+$")


def to_slug(value: str) -> str:
    """Return ``value`` lower-cased with word boundaries replaced by hyphens.

    ``"DivideByZero"`` becomes ``"divide-by-zero"`` and ``"Not Found"`` becomes
    ``"not-found"``.
    """

    spaced = _WORD_BOUNDARY.sub("-", value)
    return _NON_ALPHANUMERIC.sub("-", spaced).strip("-").lower()


def to_camel_case(value: str) -> str:
    """Convert an attribute name to lower camelCase (``property_a`` -> ``propertyA``)."""

    parts = [part for part in value.split("_") if part]
    if not parts:
        return value
    head, *tail = parts
    return head[:1].lower() + head[1:] + "".join(part[:1].upper() + part[1:] for part in tail)


def format_type_name(exception_type: type) -> str:
    """Return the class name without its ``Exception``/``Error`` suffix."""

    name = exception_type.__name__
    for suffix in _NAME_SUFFIXES:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name


def is_absolute_uri(value: object) -> bool:
    """Return ``True`` for a well-formed absolute URI such as ``https://host/x`` or ``error:x``."""

    return isinstance(value, str) and _ABSOLUTE_URI.match(value) is not None


__all__ = ["to_slug", "to_camel_case", "format_type_name", "is_absolute_uri"]
