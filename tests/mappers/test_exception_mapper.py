from __future__ import annotations

import pytest
from starlette.exceptions import HTTPException as StarletteHTTPException

from http_problem_mapper import (
    BadRequestException,
    HttpException,
    HttpExceptionsOptions,
    NullArgumentError,
    OutOfRangeError,
    ProblemDetailsExceptionMapper,
    ProblemDetailsResult,
    ValidationErrorException,
    ValidationIssue,
    expose,
)
from http_problem_mapper.status_codes import STATUS_CODE_LINKS


HELP_PAGE = "http://www.example.com/help-page"
HELP_LINK = "https://docs.python.org/3/library/exceptions.html"
BAD_REQUEST_LINK = STATUS_CODE_LINKS[400]


class ApplicationException(Exception):
    pass


class DivideByZeroException(ArithmeticError):
    pass


@expose("property_a", "property_b", "property_c")
class ProblemDetailsAttributeException(HttpException):
    status_code = 300

    def __init__(self, message: str, *, property_a: str, property_b: int, property_c: object) -> None:
        super().__init__(message)
        self.property_a = property_a
        self.property_b = property_b
        self.property_c = property_c
        self.property_d = "not exposed"


def _with_help_link(exception: Exception, help_link: str) -> Exception:
    exception.help_link = help_link
    return exception


@pytest.fixture
def mapper(options: HttpExceptionsOptions) -> ProblemDetailsExceptionMapper:
    return ProblemDetailsExceptionMapper(options)


def _details_mapper(include_details: bool) -> ProblemDetailsExceptionMapper:
    options = HttpExceptionsOptions(include_exception_details=lambda _context: include_details)
    return ProblemDetailsExceptionMapper(options)


def test_map_returns_problem_details(mapper, context):
    result = mapper.map(ApplicationException(), context)

    assert isinstance(result, ProblemDetailsResult)
    assert result.status_code == 500
    problem = result.value
    assert problem.status == 500
    assert problem.title == "Application"
    assert problem.detail == "Application"
    assert problem.type == HELP_PAGE
    assert problem.instance is None
    assert problem.get_exception_details() is None


def test_map_raises_out_of_range_for_unrelated_exception_type(options, context):
    mapper = ProblemDetailsExceptionMapper(options, ApplicationException)

    with pytest.raises(OutOfRangeError):
        mapper.map(NotImplementedError(), context)


def test_map_accepts_subclasses_of_the_configured_type(options, context):
    class SpecificApplicationException(ApplicationException):
        pass

    mapper = ProblemDetailsExceptionMapper(options, ApplicationException)

    assert mapper.can_map(SpecificApplicationException)
    assert mapper.map(SpecificApplicationException(), context).value.title == "SpecificApplication"


def test_map_rejects_missing_arguments(mapper, context):
    with pytest.raises(NullArgumentError):
        mapper.map(None, context)
    with pytest.raises(NullArgumentError):
        mapper.map(ApplicationException(), None)
    with pytest.raises(NullArgumentError):
        mapper.try_map(ApplicationException(), None)


def test_try_map_declines_unrelated_exception_type(options, context):
    mapper = ProblemDetailsExceptionMapper(options, ApplicationException)

    assert mapper.try_map(KeyError("missing"), context) is None


def test_try_map_declines_when_mapping_fails(context):
    def broken(_exception):
        raise RuntimeError("boom")

    mapper = ProblemDetailsExceptionMapper(HttpExceptionsOptions(exception_title_mapping=broken))

    assert mapper.try_map(ApplicationException(), context) is None


def test_map_returns_problem_details_with_help_link(mapper, context):
    exception = _with_help_link(ApplicationException(), HELP_LINK)

    problem = mapper.map(exception, context).value

    assert problem.status == 500
    assert problem.instance == HELP_LINK
    assert problem.type == HELP_LINK


def test_map_includes_exception_details_when_enabled(context):
    try:
        try:
            raise KeyError("inner")
        except KeyError as error:
            raise ApplicationException("outer") from error
    except ApplicationException as exc:
        exception = exc

    problem = _details_mapper(True).map(exception, context).value
    details = problem.get_exception_details()

    assert details is not None
    assert details["type"].endswith("ApplicationException")
    assert details["message"] == "outer"
    assert details["stackTrace"]
    assert details["innerException"]["message"] == "'inner'"


def test_map_omits_exception_details_when_disabled(context):
    problem = _details_mapper(False).map(ApplicationException(), context).value

    assert problem.get_exception_details() is None


def test_map_returns_validation_errors_for_single_member(context):
    exception = ValidationErrorException.for_member("param", ["error1", "error1"])

    problem = _details_mapper(True).map(exception, context).value

    assert problem.status == 400
    assert problem.instance == BAD_REQUEST_LINK
    assert problem.get_errors() == {"param": ["error1", "error1"]}


def test_map_returns_validation_errors_for_multiple_members(context):
    errors_in = {
        "memberName1": ["error1", "error2"],
        "memberName2": ["error1", "error2"],
    }
    exception = ValidationErrorException(errors_in)

    problem = _details_mapper(True).map(exception, context).value
    errors = problem.get_errors()

    assert problem.status == 400
    assert problem.instance == BAD_REQUEST_LINK
    assert errors is not None
    assert len(errors) == 2
    assert all(len(messages) == 2 for messages in errors.values())


def test_map_returns_validation_errors_for_structured_errors(context):
    errors_in = {
        "memberName1": [ValidationIssue("message", ("memberName1",))],
        "memberName2": [ValidationIssue("message", ("memberName2",))],
    }
    exception = ValidationErrorException(errors_in)

    problem = _details_mapper(True).map(exception, context).value

    assert problem.status == 400
    assert problem.get_errors() == {"memberName1": ["message"], "memberName2": ["message"]}


def test_map_returns_validation_errors_for_single_message(context):
    exception = ValidationErrorException.for_member("name", "required")

    problem = _details_mapper(True).map(exception, context).value

    assert exception.errors == {"name": ["required"]}
    assert problem.get_errors() == {"name": ["required"]}


def test_map_returns_validation_errors_for_message_values(context):
    exception = ValidationErrorException({"name": "required", "price": ValidationIssue("must be positive", ("price",))})

    problem = _details_mapper(True).map(exception, context).value

    assert problem.get_errors() == {"name": ["required"], "price": ["must be positive"]}


def test_map_returns_validation_errors_for_field_message_pairs(context):
    exception = ValidationErrorException([("name", "required"), ("price", "must be positive"), ("name", "required")])

    problem = _details_mapper(True).map(exception, context).value

    assert problem.status == 400
    assert problem.get_errors() == {"name": ["required", "required"], "price": ["must be positive"]}


def test_map_exposes_declared_scalar_properties(mapper, make_request):
    exception = ProblemDetailsAttributeException(
        "ProblemDetailsAttributeException has occurred.",
        property_a="AAA",
        property_b=42,
        property_c=["not", "a", "scalar"],
    )

    problem = mapper.map(exception, make_request("/products/1")).value

    assert problem.status == 300
    assert problem.instance is not None
    assert dict(problem.extensions) == {"propertyA": "AAA", "propertyB": 42}
    assert problem.get_exception_details() is None


def test_map_skips_exposed_properties_when_disabled(context):
    mapper = ProblemDetailsExceptionMapper(HttpExceptionsOptions(expose_exception_fields=False))
    exception = ProblemDetailsAttributeException("x", property_a="AAA", property_b=42, property_c=1)

    assert dict(mapper.map(exception, context).value.extensions) == {}


def test_map_is_idempotent(mapper, make_request):
    exception = DivideByZeroException()
    request = make_request("/divide")

    first = mapper.map(exception, request).value
    second = mapper.map(exception, request).value

    assert first == second


def test_map_detail_uses_exception_override(context):
    options = HttpExceptionsOptions(default_help_link=HELP_PAGE, exception_detail_mapping=lambda _ex: "ExceptionDetailMapping")
    mapper = ProblemDetailsExceptionMapper(options)

    assert mapper.map_detail(ApplicationException(), context) == "ExceptionDetailMapping"


def test_map_detail_returns_exception_message(mapper, context):
    assert mapper.map_detail(ApplicationException("Test exception message."), context) == "Test exception message."


def test_map_detail_uses_starlette_detail(mapper, context):
    exception = StarletteHTTPException(status_code=404, detail="Product not found")

    assert mapper.map_detail(exception, context) == "Product not found"


def test_map_instance_uses_exception_override(context):
    uri = "https://example.com/ExceptionInstanceMapping"
    mapper = ProblemDetailsExceptionMapper(HttpExceptionsOptions(exception_instance_mapping=lambda _ex: uri))

    assert mapper.map_instance(ApplicationException(), context) == uri


def test_map_instance_returns_exception_help_link(mapper, context):
    exception = _with_help_link(ApplicationException(), HELP_LINK)

    assert mapper.map_instance(exception, context) == HELP_LINK


def test_map_instance_returns_request_path(mapper, make_request):
    assert mapper.map_instance(ApplicationException(), make_request("/test/123")) == "/test/123"


def test_map_instance_skips_invalid_help_link(mapper, make_request):
    exception = _with_help_link(ApplicationException(), "invalid-link")

    assert mapper.map_instance(exception, make_request("/test/123")) == "/test/123"
    assert mapper.map_instance(exception, make_request()) is None


def test_map_status_uses_exception_override(context):
    mapper = ProblemDetailsExceptionMapper(HttpExceptionsOptions(exception_status_mapping=lambda _ex: 418))

    assert mapper.map_status(ApplicationException(), context) == 418


def test_map_status_returns_internal_server_error(mapper, context):
    assert mapper.map_status(ApplicationException(), context) == 500


def test_map_status_returns_declared_status(mapper, context):
    assert mapper.map_status(HttpException(status_code=400), context) == 400
    assert mapper.map_status(StarletteHTTPException(status_code=409), context) == 409


def test_map_title_uses_exception_override(context):
    mapper = ProblemDetailsExceptionMapper(HttpExceptionsOptions(exception_title_mapping=lambda _ex: "ExceptionTitleMapping"))

    assert mapper.map_title(ApplicationException(), context) == "ExceptionTitleMapping"


def test_map_title_returns_formatted_exception_name(mapper, context):
    assert mapper.map_title(DivideByZeroException(), context) == "DivideByZero"
    assert mapper.map_title(ZeroDivisionError(), context) == "ZeroDivision"


def test_map_title_uses_status_name_for_generic_http_exception(mapper, context):
    assert mapper.map_title(HttpException(status_code=404), context) == "Not Found"


def test_map_type_uses_exception_override(context):
    uri = "https://example.com/ExceptionTypeMapping"
    mapper = ProblemDetailsExceptionMapper(HttpExceptionsOptions(exception_type_mapping=lambda _ex: uri))

    assert mapper.map_type(ApplicationException(), context) == uri


def test_map_type_returns_exception_help_link(mapper, context):
    exception = _with_help_link(ApplicationException(), HELP_LINK)

    assert mapper.map_type(exception, context) == HELP_LINK


def test_map_type_returns_default_help_link_when_help_link_is_invalid(mapper, context):
    exception = _with_help_link(ApplicationException(), "invalid-link")

    assert mapper.map_type(exception, context) == HELP_PAGE


def test_map_type_returns_status_link_for_http_exception(mapper, context):
    assert mapper.map_type(BadRequestException(), context) == BAD_REQUEST_LINK


def test_map_type_returns_status_link_when_http_exception_help_link_is_invalid(mapper, context):
    exception = BadRequestException(help_link="invalid-link")

    assert mapper.map_type(exception, context) == BAD_REQUEST_LINK


def test_map_type_returns_default_help_link_without_help_link(mapper, context):
    assert mapper.map_type(ApplicationException(), context) == HELP_PAGE


def test_map_type_returns_slug_without_default_help_link(context):
    mapper = ProblemDetailsExceptionMapper(HttpExceptionsOptions())

    problem = mapper.map(DivideByZeroException(), context).value

    assert problem.type == "error:divide-by-zero"
    assert problem.title == "DivideByZero"
    assert problem.status == 500


def test_context_override_applies_when_exception_override_is_absent(make_request):
    options = HttpExceptionsOptions(context_title_mapping=lambda request: f"Failed {request.url.path}")
    mapper = ProblemDetailsExceptionMapper(options)

    assert mapper.map_title(ApplicationException(), make_request("/orders")) == "Failed /orders"


def test_exception_override_wins_over_context_override(context):
    options = HttpExceptionsOptions(
        exception_detail_mapping=lambda _ex: "from exception",
        context_detail_mapping=lambda _request: "from context",
    )
    mapper = ProblemDetailsExceptionMapper(options)

    assert mapper.map_detail(ApplicationException("message"), context) == "from exception"


def test_empty_override_falls_through_to_next_tier(context):
    options = HttpExceptionsOptions(
        exception_detail_mapping=lambda _ex: "",
        context_detail_mapping=lambda _request: None,
    )
    mapper = ProblemDetailsExceptionMapper(options)

    assert mapper.map_detail(ApplicationException("message"), context) == "message"


def test_mapper_rejects_non_exception_type(options):
    with pytest.raises(TypeError):
        ProblemDetailsExceptionMapper(options, str)
