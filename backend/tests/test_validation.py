"""
Blog Backend — Request Validation Helper Tests
===============================================

What we test:
    ✅ parse_id accepts base-10 integers and names the resource on failure
    ✅ Framework validation errors collapse to one readable message
"""

import pytest
from fastapi.exceptions import RequestValidationError

from blog_api.exceptions import BadRequestError
from blog_api.validation import describe_validation_error, parse_id


class TestParseId:

    @pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), ("007", 7)])
    def test_numeric(self, raw, expected):
        assert parse_id(raw, "post") == expected

    @pytest.mark.parametrize("raw", ["abc", "1.5", "", "12abc"])
    def test_non_numeric_post(self, raw):
        with pytest.raises(BadRequestError) as exc_info:
            parse_id(raw, "post")
        assert exc_info.value.message == "Invalid post ID"
        assert exc_info.value.field == "postId"

    @pytest.mark.parametrize("raw", ["1_000", " 7 ", "+7", "١٢", "7\n"])
    def test_only_plain_ascii_digits(self, raw):
        with pytest.raises(BadRequestError):
            parse_id(raw, "post")

    @pytest.mark.parametrize("raw", ["0", "-1", "2147483648", "99999999999999999999", "9" * 5000])
    def test_outside_id_range(self, raw):
        with pytest.raises(BadRequestError) as exc_info:
            parse_id(raw, "post")
        assert exc_info.value.message == "Invalid post ID"

    def test_largest_id(self):
        assert parse_id("2147483647", "post") == 2147483647

    def test_non_numeric_comment(self):
        with pytest.raises(BadRequestError) as exc_info:
            parse_id("xyz", "comment")
        assert exc_info.value.message == "Invalid comment ID"


def _error(**entry) -> RequestValidationError:
    return RequestValidationError(errors=[entry])


class TestDescribeValidationError:

    def test_field_error_names_the_field(self):
        exc = _error(type="bool_parsing", loc=("body", "published"), msg="Input should be a valid boolean")
        assert describe_validation_error(exc) == "published: Input should be a valid boolean"

    def test_invalid_json(self):
        exc = _error(type="json_invalid", loc=("body", 1), msg="JSON decode error")
        assert describe_validation_error(exc) == "Invalid JSON body"

    def test_body_not_an_object(self):
        exc = _error(type="model_attributes_type", loc=("body",), msg="Input should be a valid dictionary")
        assert describe_validation_error(exc) == "Request body must be a JSON object"

    def test_missing_body(self):
        exc = _error(type="missing", loc=("body",), msg="Field required")
        assert describe_validation_error(exc) == "Request body is required"

    def test_no_errors(self):
        assert describe_validation_error(RequestValidationError(errors=[])) == "Invalid request"
