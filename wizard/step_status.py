"""Helpers for computing wizard step completion status."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from models.questionnaire import CategoryGroup
from questions.tree import answerable_ids, required_answerable_ids
from state.responses import ResponseStore
from wizard.missing_fields import missing_fields


@dataclass(frozen=True)
class StepMissing:
    """Unanswered required and optional question ids for a wizard step."""

    required: list[str]
    optional: list[str]


def step_question_ids(group: CategoryGroup) -> list[str]:
    """Answerable ids rendered by ``group`` (nested sub-questions included)."""

    return answerable_ids(group.questions)


def step_required_ids(group: CategoryGroup) -> list[str]:
    """Required answerable ids of ``group``, read from the question tree."""

    return required_answerable_ids(group.questions)


def compute_step_missing(group: CategoryGroup, store: ResponseStore) -> StepMissing:
    required_ids = step_required_ids(group)
    required_lookup = set(required_ids)
    optional_ids = [question_id for question_id in step_question_ids(group) if question_id not in required_lookup]
    return StepMissing(
        required=missing_fields(store.data, required_ids),
        optional=missing_fields(store.data, optional_ids),
    )


def iter_step_missing_fields(missing: StepMissing) -> Iterable[str]:
    """Return every unanswered id of a step, required ids first."""

    return tuple(dict.fromkeys([*missing.required, *missing.optional]))


__all__ = [
    "StepMissing",
    "compute_step_missing",
    "iter_step_missing_fields",
    "step_question_ids",
    "step_required_ids",
]
