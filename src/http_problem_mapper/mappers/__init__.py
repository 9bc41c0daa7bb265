"""Exception and response mapper implementations."""

from .base import ExceptionMapper, ResponseMapper
from .exception import ProblemDetailsExceptionMapper
from .response import ANY_STATUS, ProblemDetailsResponseMapper
from .validation import RequestValidationExceptionMapper

__all__ = [
    "ExceptionMapper",
    "ResponseMapper",
    "ProblemDetailsExceptionMapper",
    "ProblemDetailsResponseMapper",
    "RequestValidationExceptionMapper",
    "ANY_STATUS",
]
