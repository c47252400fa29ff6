"""Tests for schema-driven input validation"""

import pytest

from command_center.skills.errors import InvalidInputError
from command_center.skills.validation import build_input_schema, is_type_compatible, validate_input
from tests.fakes import EchoSkill, PipelineHealthStub, StrictSkill


@pytest.mark.parametrize(
    "value,type_tag,expected",
    [
        ("text", "string", True),
        (3, "string", False),
        (3, "integer", True),
        (True, "integer", False),
        (2.5, "integer", False),
        (2, "number", True),
        (2.5, "number", True),
        (False, "number", False),
        (True, "boolean", True),
        (1, "boolean", False),
        ({"a": 1}, "object", True),
        ([1], "object", False),
        ([1, 2], "array", True),
        ("ab", "array", False),
    ],
)
def test_is_type_compatible(value, type_tag, expected):
    assert is_type_compatible(value, type_tag) is expected


def test_empty_schema_accepts_empty_and_none_input():
    skill = PipelineHealthStub()
    assert validate_input(skill, {}) == {}
    assert validate_input(skill, None) == {}


def test_defaults_applied_for_omitted_optional_fields():
    assert validate_input(EchoSkill(), {"message": "hi"}) == {"message": "hi", "repeat": 1}


def test_missing_required_field_named():
    with pytest.raises(InvalidInputError) as exc_info:
        validate_input(EchoSkill(), {"repeat": 2})

    assert exc_info.value.fields == ["message"]
    assert exc_info.value.error_kind == "invalid_input"
    assert "missing required field 'message'" in str(exc_info.value)


def test_none_counts_as_missing():
    with pytest.raises(InvalidInputError) as exc_info:
        validate_input(EchoSkill(), {"message": None})

    assert exc_info.value.fields == ["message"]


def test_wrong_type_rejected():
    with pytest.raises(InvalidInputError) as exc_info:
        validate_input(EchoSkill(), {"message": "hi", "repeat": "twice"})

    assert exc_info.value.fields == ["repeat"]


def test_all_offending_fields_reported():
    with pytest.raises(InvalidInputError) as exc_info:
        validate_input(EchoSkill(), {"repeat": "twice"})

    assert set(exc_info.value.fields) == {"message", "repeat"}


def test_unknown_fields_pass_through_by_default():
    validated = validate_input(EchoSkill(), {"message": "hi", "locale": "en"})
    assert validated["locale"] == "en"


def test_unknown_fields_rejected_when_schema_forbids_extras():
    with pytest.raises(InvalidInputError) as exc_info:
        validate_input(StrictSkill(), {"target": "acme", "extra": 1})

    assert exc_info.value.fields == ["extra"]


def test_input_is_not_mutated():
    supplied = {"message": "hi"}
    validate_input(EchoSkill(), supplied)
    assert supplied == {"message": "hi"}


def test_input_schema_is_draft7_object_schema():
    schema = build_input_schema(EchoSkill())

    assert schema == {
        "type": "object",
        "properties": {
            "message": {"type": "string", "description": ""},
            "repeat": {"type": "integer", "description": "", "default": 1},
        },
        "required": ["message"],
        "additionalProperties": True,
    }
    assert build_input_schema(StrictSkill())["additionalProperties"] is False


def test_type_error_detail_names_field():
    with pytest.raises(InvalidInputError) as exc_info:
        validate_input(EchoSkill(), {"message": "hi", "repeat": True})

    assert exc_info.value.fields == ["repeat"]
    assert "repeat: True is not of type 'integer'" in str(exc_info.value)


def test_declared_fields_reported_before_unknown_ones():
    with pytest.raises(InvalidInputError) as exc_info:
        validate_input(StrictSkill(), {"extra": 1})

    assert exc_info.value.fields == ["target", "extra"]
