"""Environment driven construction of :class:`HttpExceptionsOptions`.

Recognised variables:

``HTTP_PROBLEMS_ENVIRONMENT`` (default ``production``)
    ``development`` enables exception details in problem documents.

``HTTP_PROBLEMS_INCLUDE_EXCEPTION_DETAILS``
    ``true``/``false``; takes precedence over the environment name.

``HTTP_PROBLEMS_EXPOSE_EXCEPTION_FIELDS`` (default ``true``)
    Whether attributes declared with :func:`http_problem_mapper.expose` are
    emitted as extension members.

``HTTP_PROBLEMS_DEFAULT_HELP_LINK``
    Absolute URI used as the problem ``type`` when nothing more specific is
    known.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Final, Mapping

from .options import HttpExceptionsOptions
from .text import is_absolute_uri


logger = logging.getLogger(__name__)

ENVIRONMENT_VAR: Final[str] = "HTTP_PROBLEMS_ENVIRONMENT"
INCLUDE_DETAILS_VAR: Final[str] = "HTTP_PROBLEMS_INCLUDE_EXCEPTION_DETAILS"
EXPOSE_FIELDS_VAR: Final[str] = "HTTP_PROBLEMS_EXPOSE_EXCEPTION_FIELDS"
DEFAULT_HELP_LINK_VAR: Final[str] = "HTTP_PROBLEMS_DEFAULT_HELP_LINK"
DEVELOPMENT: Final[str] = "development"

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


def _parse_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Invalid boolean value for %s; using default", name, extra={"value": raw, "default": default})
    return default


def load_options(environ: Mapping[str, str] | None = None, **overrides: Any) -> HttpExceptionsOptions:
    """Build options from ``environ`` (defaults to :data:`os.environ`).

    Keyword ``overrides`` are passed straight to :class:`HttpExceptionsOptions`
    and win over values read from the environment.
    """

    environ = os.environ if environ is None else environ

    environment = environ.get(ENVIRONMENT_VAR, "production").strip().lower()
    include_details = _parse_bool(environ, INCLUDE_DETAILS_VAR, environment == DEVELOPMENT)
    expose_fields = _parse_bool(environ, EXPOSE_FIELDS_VAR, True)

    default_help_link = environ.get(DEFAULT_HELP_LINK_VAR) or None
    if default_help_link is not None and not is_absolute_uri(default_help_link):
        logger.warning(
            "Ignoring default help link that is not an absolute URI",
            extra={"default_help_link": default_help_link},
        )
        default_help_link = None

    settings: dict[str, Any] = {
        "include_exception_details": (lambda _context: True) if include_details else None,
        "expose_exception_fields": expose_fields,
        "default_help_link": default_help_link,
    }
    settings.update(overrides)
    return HttpExceptionsOptions(**settings)


__all__ = ["load_options", "ENVIRONMENT_VAR", "INCLUDE_DETAILS_VAR", "EXPOSE_FIELDS_VAR", "DEFAULT_HELP_LINK_VAR"]
