"""Partition the catalog into ordered wizard steps."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from models.questionnaire import CategoryGroup, Question


def group_by_category(questions: Iterable[Question]) -> list[CategoryGroup]:
    """Group top-level questions by category in first-seen order."""

    grouped: dict[str, list[Question]] = {}
    for question in questions:
        grouped.setdefault(question.category, []).append(question)
    return [CategoryGroup(category=category, questions=tuple(items)) for category, items in grouped.items()]


def step_label(category: str) -> str:
    """Return the stepper label for ``category`` (``"incident_response"`` -> ``"Incident response"``)."""

    if not category:
        return category
    return f"{category[0].upper()}{category[1:].replace('_', ' ', 1)}"


def step_labels(groups: Sequence[CategoryGroup]) -> list[str]:
    return [step_label(group.category) for group in groups]


__all__ = ["group_by_category", "step_label", "step_labels"]
