"""Tests for shallow schema validation."""

from __future__ import annotations

import pytest

from toolrpc.errors import InvalidParamsError
from toolrpc.schema import matches_type, validate

ADD_SCHEMA = {
    "type": "object",
    "properties": {"a": {"type": "number"}, "b": {"type": "number"}},
    "required": ["a", "b"],
}


class TestValidate:
    """Behavioral coverage for validate()."""

    def test_accepts_matching_object(self) -> None:
        """A value satisfying every constraint passes silently."""
        validate({"a": 1, "b": 2.5}, ADD_SCHEMA)

    def test_non_object_schema_is_not_checked(self) -> None:
        """Schemas for non-object inputs always pass."""
        validate(None, {"type": "string"})
        validate([1, 2], {"type": "array"})
        validate(42, {})

    def test_rejects_null_value(self) -> None:
        """An absent value fails against an object schema."""
        with pytest.raises(InvalidParamsError, match="Expected params object"):
            validate(None, ADD_SCHEMA)

    def test_rejects_non_mapping_value(self) -> None:
        """A list is not an object."""
        with pytest.raises(InvalidParamsError, match="got list"):
            validate([1, 2], ADD_SCHEMA)

    def test_reports_first_missing_required_property(self) -> None:
        """Only the first missing name is reported."""
        with pytest.raises(InvalidParamsError) as error_info:
            validate({}, ADD_SCHEMA)

        assert error_info.value.message == "Missing required property: a"
        assert error_info.value.data == {"property": "a"}

    def test_reports_mistyped_property(self) -> None:
        """A string where a number is declared fails citing that property."""
        with pytest.raises(InvalidParamsError) as error_info:
            validate({"a": 1, "b": "x"}, ADD_SCHEMA)

        assert '"b"' in error_info.value.message
        assert error_info.value.data == {"property": "b", "expected": "number"}

    def test_ignores_undeclared_properties(self) -> None:
        """Extra properties are allowed and unchecked."""
        validate({"a": 1, "b": 2, "c": "anything"}, ADD_SCHEMA)

    def test_unknown_type_tag_matches_anything(self) -> None:
        """Type tags outside the closed set behave as 'any'."""
        schema = {"type": "object", "properties": {"x": {"type": "null"}}}

        validate({"x": [1, {"y": 2}]}, schema)

    def test_property_without_type_is_unchecked(self) -> None:
        """Declared properties lacking a type tag accept any value."""
        schema = {"type": "object", "properties": {"x": {"description": "free"}}}

        validate({"x": 3}, schema)


@pytest.mark.parametrize(
    ("value", "type_tag", "expected"),
    [
        ("text", "string", True),
        (1, "string", False),
        (1, "number", True),
        (1.5, "number", True),
        (True, "number", False),
        (3, "integer", True),
        (3.0, "integer", False),
        (False, "integer", False),
        (False, "boolean", True),
        (0, "boolean", False),
        ({}, "object", True),
        ([], "object", False),
        ([], "array", True),
        ("[]", "array", False),
        (None, "custom", True),
    ],
)
def test_matches_type(value: object, type_tag: str, expected: bool) -> None:
    """Runtime kinds map onto the closed set of type tags."""
    assert matches_type(value, type_tag) is expected
