"""Translate exceptions and empty error responses into problem details."""

from __future__ import annotations

from .config import load_options
from .errors import NullArgumentError, OutOfRangeError, ProblemMappingError
from .exceptions import (
    BadRequestException,
    ConflictException,
    ForbiddenException,
    HttpException,
    NotFoundException,
    ServiceUnavailableException,
    UnauthorizedException,
    UnprocessableEntityException,
    ValidationErrorException,
    ValidationIssue,
)
from .exposure import expose, extract_extensions
from .mappers import (
    ANY_STATUS,
    ExceptionMapper,
    ProblemDetailsExceptionMapper,
    ProblemDetailsResponseMapper,
    RequestValidationExceptionMapper,
    ResponseMapper,
)
from .options import ExceptionMapperDescriptor, HttpExceptionsOptions, ResponseMapperDescriptor
from .problem import PROBLEM_JSON_MEDIA_TYPE, ProblemDetails, ProblemDetailsResult

__all__ = [
    "ANY_STATUS",
    "BadRequestException",
    "ConflictException",
    "ExceptionMapper",
    "ExceptionMapperDescriptor",
    "ForbiddenException",
    "HttpException",
    "HttpExceptionsOptions",
    "NotFoundException",
    "NullArgumentError",
    "OutOfRangeError",
    "PROBLEM_JSON_MEDIA_TYPE",
    "ProblemDetails",
    "ProblemDetailsExceptionMapper",
    "ProblemDetailsResponseMapper",
    "ProblemDetailsResult",
    "ProblemMappingError",
    "RequestValidationExceptionMapper",
    "ResponseMapper",
    "ResponseMapperDescriptor",
    "ServiceUnavailableException",
    "UnauthorizedException",
    "UnprocessableEntityException",
    "ValidationErrorException",
    "ValidationIssue",
    "expose",
    "extract_extensions",
    "load_options",
]
