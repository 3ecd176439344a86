# tests/test_errors.py
from ticketing.core.errors import ValidationError


def test_missing_nested_property():
    err = ValidationError.from_errors(
        [{"loc": ("body", "title"), "type": "missing", "msg": "Field required"}]
    )
    assert err.message == "body should have required property 'title'"
    assert err.field == "title"
    assert err.status_code == 400


def test_only_first_error_is_reported():
    err = ValidationError.from_errors(
        [
            {"loc": ("body", "title"), "type": "missing", "msg": "Field required"},
            {"loc": ("body", "body"), "type": "missing", "msg": "Field required"},
        ]
    )
    assert err.field == "title"


def test_unknown_error_type_keeps_pydantic_message():
    err = ValidationError.from_errors(
        [{"loc": ("body", "title"), "type": "value_error", "msg": "Value error, nope"}]
    )
    assert err.message == "body/title Value error, nope"


def test_no_errors():
    assert ValidationError.from_errors([]).message == "body is invalid"


def test_invalid_json_reads_as_a_non_object_body():
    err = ValidationError.from_errors(
        [{"loc": ("body", 1), "type": "json_invalid", "msg": "JSON decode error"}]
    )
    assert err.message == "body should be object"
