from __future__ import annotations

from questions.catalog import parse_catalog
from questions.grouping import group_by_category
from state.responses import ResponseStore
from wizard.step_status import (
    compute_step_missing,
    iter_step_missing_fields,
    step_question_ids,
    step_required_ids,
)


def _step():
    (group,) = group_by_category(
        parse_catalog(
            [
                {
                    "id": 5,
                    "category": "cyber_insurance",
                    "responseType": "select",
                    "required": True,
                    "subQuestions": [
                        {"id": 15, "responseType": "text", "required": False},
                        {"id": 16, "responseType": None, "required": True},
                        {"id": 17, "responseType": "checkbox", "required": True},
                    ],
                }
            ]
        )
    )
    return group


def test_step_ids_are_flattened_and_exclude_informational_nodes() -> None:
    group = _step()

    assert step_question_ids(group) == ["5", "15", "17"]
    assert step_required_ids(group) == ["5", "17"]


def test_compute_step_missing_splits_required_and_optional() -> None:
    missing = compute_step_missing(_step(), ResponseStore({"5": "Yes"}))

    assert missing.required == ["17"]
    assert missing.optional == ["15"]
    assert tuple(iter_step_missing_fields(missing)) == ("17", "15")

