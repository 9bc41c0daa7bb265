"""Opt-in exposure of exception attributes as problem detail extensions.

Exception classes declare which of their attributes may leave the process,
either with the :func:`expose` class decorator or by setting a
``__problem_details__`` tuple. Declarations are merged along the MRO so a
subclass only lists the attributes it adds. Classes that need full control can
implement ``problem_details_extensions()`` and return the pairs themselves.

Only scalar values (``str``, ``bool``, ``int``, ``float``) are emitted; other
values are skipped without error so an exposed attribute can never break the
serialised response.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Final, Mapping, TypeVar

from .text import to_camel_case


logger = logging.getLogger(__name__)

EXPOSED_FIELDS_ATTRIBUTE: Final[str] = "__problem_details__"
SCALAR_TYPES: Final[tuple[type, ...]] = (str, bool, int, float)

_ExceptionT = TypeVar("_ExceptionT", bound=type)


def expose(*field_names: str) -> Callable[[_ExceptionT], _ExceptionT]:
    """Class decorator marking ``field_names`` as exposable problem details."""

    for name in field_names:
        if not name or not name.isidentifier():
            raise ValueError(f"'{name}' is not a valid attribute name.")

    def decorator(cls: _ExceptionT) -> _ExceptionT:
        declared = tuple(cls.__dict__.get(EXPOSED_FIELDS_ATTRIBUTE, ()))
        merged = declared + tuple(name for name in field_names if name not in declared)
        setattr(cls, EXPOSED_FIELDS_ATTRIBUTE, merged)
        return cls

    return decorator


def exposed_fields(exception_type: type) -> tuple[str, ...]:
    """Return every attribute name declared exposable on ``exception_type`` or its bases."""

    names: list[str] = []
    for klass in reversed(exception_type.__mro__):
        for name in klass.__dict__.get(EXPOSED_FIELDS_ATTRIBUTE, ()):
            if name not in names:
                names.append(name)
    return tuple(names)


def _is_scalar(value: object) -> bool:
    return isinstance(value, SCALAR_TYPES)


def extract_extensions(exception: BaseException) -> dict[str, Any]:
    """Build the extension members exposed by ``exception``."""

    provider = getattr(exception, "problem_details_extensions", None)
    if callable(provider):
        pairs: Mapping[str, Any] = provider() or {}
    else:
        pairs = {name: getattr(exception, name, None) for name in exposed_fields(type(exception))}

    extensions: dict[str, Any] = {}
    for name, value in pairs.items():
        if not _is_scalar(value):
            logger.debug(
                "Skipping non-scalar exposed field",
                extra={"exception_type": type(exception).__name__, "field": name},
            )
            continue
        extensions[to_camel_case(name)] = value
    return extensions


__all__ = ["expose", "exposed_fields", "extract_extensions", "EXPOSED_FIELDS_ATTRIBUTE"]
