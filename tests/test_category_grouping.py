from __future__ import annotations

from questions.catalog import parse_catalog
from questions.grouping import group_by_category, step_label, step_labels


def test_groups_preserve_first_seen_order() -> None:
    questions = parse_catalog(
        [
            {"id": 1, "category": "network", "responseType": "text"},
            {"id": 2, "category": "infra", "responseType": "text"},
            {"id": 3, "category": "network", "responseType": "text"},
        ]
    )

    groups = group_by_category(questions)

    assert [group.category for group in groups] == ["network", "infra"]
    assert [question.id for question in groups[0].questions] == ["1", "3"]
    assert [question.id for question in groups[1].questions] == ["2"]


def test_empty_input_yields_no_groups() -> None:
    assert group_by_category([]) == []


def test_step_label_formatting() -> None:
    assert step_label("network") == "Network"
    assert step_label("incident_response") == "Incident response"
    assert step_label("third_party_risk") == "Third party_risk"
    assert step_label("") == ""


def test_step_labels_follow_group_order() -> None:
    questions = parse_catalog(
        [
            {"id": 1, "category": "cyber_insurance", "responseType": "text"},
            {"id": 2, "category": "network", "responseType": "text"},
        ]
    )

    assert step_labels(group_by_category(questions)) == ["Cyber insurance", "Network"]
