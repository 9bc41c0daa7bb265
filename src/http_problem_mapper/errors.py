"""Usage errors raised by the mapping core.

``NullArgumentError``
    A required argument (exception, response or request context) was ``None``.

``OutOfRangeError``
    A mapper was asked to map an exception type or status code it does not
    handle.

Both derive from :class:`ValueError` so callers that already guard against bad
arguments keep working. A mapper that merely *declines* an input never raises;
``try_map`` returns ``None`` instead.
"""

from __future__ import annotations


class ProblemMappingError(Exception):
    """Base class for programmer errors surfaced by the mapping core."""


class NullArgumentError(ProblemMappingError, ValueError):
    def __init__(self, argument: str) -> None:
        super().__init__(f"Argument '{argument}' must not be None.")
        self.argument = argument


class OutOfRangeError(ProblemMappingError, ValueError):
    def __init__(self, argument: str, value: object, message: str) -> None:
        super().__init__(message)
        self.argument = argument
        self.value = value


def require(value: object, argument: str) -> None:
    if value is None:
        raise NullArgumentError(argument)


__all__ = ["ProblemMappingError", "NullArgumentError", "OutOfRangeError", "require"]
