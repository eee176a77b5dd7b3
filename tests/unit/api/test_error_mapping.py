import pytest
from flask import Flask
from werkzeug.exceptions import NotFound

from fieldguard.api.error_mapping import build_error_payload, map_exception_to_status
from fieldguard.api.response_utils import jsonify_unified_error, unified_error_response
from fieldguard.errors import AppError, ErrorKind, FieldValidationError, SchemaDefinitionError, ValidationError


@pytest.mark.unit
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (FieldValidationError(ErrorKind.REQUIRED, ("id",)), 400),
        (ValidationError("bad"), 400),
        (SchemaDefinitionError("bad schema"), 500),
        (AppError("boom"), 500),
        (NotFound(), 404),
        (RuntimeError("x"), 500),
    ],
)
def test_map_exception_to_status(error: Exception, expected: int) -> None:
    assert map_exception_to_status(error) == expected


@pytest.mark.unit
def test_build_error_payload_for_field_error() -> None:
    error = FieldValidationError(ErrorKind.ENUM_NOT_FOUND, ("status",), section="query")

    payload = build_error_payload(error)

    assert payload["success"] is False
    assert payload["error"] is True
    assert payload["message_key"] == "FIELD_ENUM_NOT_FOUND"
    assert payload["category"] == "validation"
    assert payload["recoverable"] is True
    assert payload["kind"] == "enum_not_found"
    assert payload["section"] == "query"
    assert payload["field"] == "status"


@pytest.mark.unit
def test_build_error_payload_for_plain_error_has_no_field() -> None:
    payload = build_error_payload(ValidationError("bad"))

    assert payload["message"] == "bad"
    assert "field" not in payload


@pytest.mark.unit
def test_unified_error_response_uses_mapped_status() -> None:
    payload, status = unified_error_response(SchemaDefinitionError("bad"))

    assert status == 500
    assert payload["message_key"] == "SCHEMA_DEFINITION_ERROR"


@pytest.mark.unit
def test_jsonify_unified_error_builds_response() -> None:
    app = Flask(__name__)

    with app.app_context():
        response, status = jsonify_unified_error(ValidationError("bad"), status_code=422)

    assert status == 422
    assert response.get_json()["message"] == "bad"
