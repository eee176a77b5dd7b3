import pytest

from fieldguard.constants import ErrorCategory, ErrorMessages, ErrorSeverity
from fieldguard.errors import (
    AppError,
    ErrorKind,
    FieldValidationError,
    SchemaDefinitionError,
    ValidationError,
    format_field_path,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ((), ""),
        (("name",), "name"),
        (("a", "b"), "a.b"),
        (("items", 0, "id"), "items[0].id"),
        ((0,), "[0]"),
        (("matrix", 1, 2), "matrix[1][2]"),
    ],
)
def test_format_field_path(path: tuple, expected: str) -> None:
    assert format_field_path(path) == expected


@pytest.mark.unit
def test_field_validation_error_metadata() -> None:
    error = FieldValidationError(ErrorKind.MINIMUM, ("age",), section="query", detail="最小值 18")

    assert isinstance(error, ValidationError)
    assert error.kind is ErrorKind.MINIMUM
    assert error.message_key == "FIELD_MINIMUM"
    assert error.category is ErrorCategory.VALIDATION
    assert error.severity is ErrorSeverity.LOW
    assert error.recoverable is True
    assert error.message == f"query.age: {ErrorMessages.FIELD_MINIMUM} (最小值 18)"
    assert error.extra == {"kind": "minimum", "field": "age", "section": "query"}


@pytest.mark.unit
def test_in_section_returns_bound_copy() -> None:
    error = FieldValidationError(ErrorKind.REQUIRED, ("id",))

    bound = error.in_section("path")

    assert error.section is None
    assert bound.section == "path"
    assert bound.path == ("id",)
    assert bound.to_dict() == {
        "kind": "required",
        "section": "path",
        "field": "id",
        "message": f"path.id: {ErrorMessages.FIELD_REQUIRED}",
    }


@pytest.mark.unit
def test_root_error_message_has_no_location() -> None:
    assert FieldValidationError(ErrorKind.WRONG_TYPE).message == ErrorMessages.FIELD_WRONG_TYPE


@pytest.mark.unit
def test_every_error_kind_has_a_message() -> None:
    for kind in ErrorKind:
        assert hasattr(ErrorMessages, kind.message_key)


@pytest.mark.unit
def test_schema_definition_error_is_not_recoverable() -> None:
    error = SchemaDefinitionError("bad")

    assert isinstance(error, AppError)
    assert error.category is ErrorCategory.SCHEMA
    assert error.recoverable is False
    assert error.message == "bad"


@pytest.mark.unit
def test_app_error_falls_back_to_message_key() -> None:
    error = ValidationError(message_key="INVALID_REQUEST")

    assert error.message == ErrorMessages.INVALID_REQUEST
    assert str(error) == ErrorMessages.INVALID_REQUEST
