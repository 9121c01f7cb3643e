from __future__ import annotations

import logging

import pytest

from core.errors import SchemaDerivationError
from core.schema import (
    EXPECTED_LIST_MESSAGE,
    EXPECTED_TEXT_MESSAGE,
    REQUIRED_MESSAGE,
    FieldKind,
    FieldRule,
    derive_schema,
)
from questions.catalog import load_catalog, parse_catalog


def _questions():
    return parse_catalog(
        [
            {"id": 1, "category": "network", "responseType": "text", "required": True},
            {"id": 2, "category": "network", "responseType": "select", "required": False},
            {
                "id": 3,
                "category": "tools",
                "responseType": "multiselect",
                "required": True,
                "subQuestions": [
                    {"id": 4, "responseType": "checkbox", "required": False},
                    {"id": 5, "responseType": None, "required": True},
                ],
            },
        ]
    )


def test_rules_cover_kind_and_required_crossing() -> None:
    schema = derive_schema(_questions())

    assert dict(schema) == {
        "1": FieldRule(kind=FieldKind.SCALAR, required=True),
        "2": FieldRule(kind=FieldKind.SCALAR, required=False),
        "3": FieldRule(kind=FieldKind.COLLECTION, required=True),
        "4": FieldRule(kind=FieldKind.COLLECTION, required=False),
    }
    assert "5" not in schema
    assert schema.required_ids() == ["1", "3"]


def test_derivation_is_deterministic() -> None:
    questions = load_catalog()

    first = derive_schema(questions)
    second = derive_schema(questions)

    assert first == second
    assert first is not second


def test_duplicate_nested_ids_fail_fast() -> None:
    questions = parse_catalog(
        [
            {
                "id": 7,
                "category": "infra",
                "responseType": "text",
                "required": True,
                "subQuestions": [{"id": 7, "responseType": "text", "required": False}],
            }
        ]
    )

    with pytest.raises(SchemaDerivationError) as excinfo:
        derive_schema(questions)

    assert excinfo.value.duplicates == ("7",)
    assert "7" in str(excinfo.value)


def test_duplicates_can_be_downgraded_to_warnings(caplog: pytest.LogCaptureFixture) -> None:
    questions = parse_catalog(
        [
            {
                "id": 7,
                "category": "infra",
                "responseType": "text",
                "required": True,
                "subQuestions": [{"id": 7, "responseType": "checkbox", "required": False}],
            }
        ]
    )

    with caplog.at_level(logging.WARNING, logger="core.schema"):
        schema = derive_schema(questions, allow_duplicate_ids=True)

    assert schema["7"] == FieldRule(kind=FieldKind.COLLECTION, required=False)
    assert "Duplicate question id '7'" in caplog.text


def test_field_rule_checks() -> None:
    required_text = FieldRule(kind=FieldKind.SCALAR, required=True)
    optional_list = FieldRule(kind=FieldKind.COLLECTION, required=False)

    assert required_text.check(None) == REQUIRED_MESSAGE
    assert required_text.check("") == REQUIRED_MESSAGE
    assert required_text.check("yes") is None
    assert required_text.check(["yes"]) == EXPECTED_TEXT_MESSAGE
    assert optional_list.check([]) is None
    assert optional_list.check(["A"]) is None
    assert optional_list.check("A") == EXPECTED_LIST_MESSAGE


def test_validate_reports_failing_ids() -> None:
    schema = derive_schema(_questions())

    errors = schema.validate({"1": "", "3": ["SIEM"], "4": "oops"})

    assert errors == {"1": REQUIRED_MESSAGE, "4": EXPECTED_LIST_MESSAGE}
    assert schema.validate({"1": ""}, ids=["3"]) == {"3": REQUIRED_MESSAGE}


def test_ensure_raises_field_validation_error() -> None:
    from core.errors import FieldValidationError

    rule = FieldRule(kind=FieldKind.COLLECTION, required=True)

    with pytest.raises(FieldValidationError) as excinfo:
        rule.ensure("3", [])

    assert excinfo.value.question_id == "3"
    assert excinfo.value.localized == REQUIRED_MESSAGE
    rule.ensure("3", ["SIEM"])
