"""Input validation against a skill's declared fields, using JSON Schema."""

from collections.abc import Mapping
from typing import Any

from jsonschema import Draft7Validator

from command_center.skills.base import BaseSkill
from command_center.skills.errors import InvalidInputError


def is_type_compatible(value: Any, type_tag: str) -> bool:
    """Check a value against a field type tag using JSON Schema type rules.

    Booleans are not integers or numbers; integral values are numbers.
    """
    return Draft7Validator.TYPE_CHECKER.is_type(value, type_tag)


def build_input_schema(skill: BaseSkill) -> dict[str, Any]:
    """JSON Schema (draft 7) object schema for a skill's input"""
    return {
        "type": "object",
        "properties": {field.name: field.to_jsonschema() for field in skill.input_schema},
        "required": [field.name for field in skill.input_schema if field.required],
        "additionalProperties": skill.allow_extra_fields,
    }


def validate_input(skill: BaseSkill, args: Mapping[str, Any] | None) -> dict[str, Any]:
    """Validate caller input for a skill and apply defaults.

    Every required field must be present (a ``None`` value counts as absent)
    and every supplied declared field must be type-compatible. Unknown fields
    are passed through unless the skill sets ``allow_extra_fields = False``.

    Args:
        skill: Skill whose schema applies
        args: Caller-supplied input, or None for an empty input

    Returns:
        A new dictionary with defaults applied

    Raises:
        InvalidInputError: Listing every offending field name
    """
    supplied = {name: value for name, value in (args or {}).items() if value is not None}
    schema = build_input_schema(skill)
    declared = schema["properties"]

    bad: set[str] = set()
    details: list[str] = []
    for error in Draft7Validator(schema).iter_errors(supplied):
        if error.validator == "required":
            for name in error.validator_value:
                if name not in supplied and name not in bad:
                    bad.add(name)
                    details.append(f"missing required field '{name}'")
        elif error.validator == "additionalProperties":
            for name in supplied:
                if name not in declared and name not in bad:
                    bad.add(name)
                    details.append(f"unexpected field '{name}'")
        elif error.path:
            name = str(error.path[0])
            if name not in bad:
                bad.add(name)
                details.append(f"{name}: {error.message}")
        else:
            details.append(error.message)

    if bad or details:
        # Declared fields first, in schema order, then unknown ones
        ordered = [name for name in declared if name in bad]
        ordered += [name for name in supplied if name in bad and name not in declared]
        raise InvalidInputError(skill.id, ordered, details)

    validated = dict(supplied)
    for field in skill.input_schema:
        if field.name not in validated and field.default is not None:
            validated[field.name] = field.default
    return validated
