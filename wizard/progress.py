"""Completion ratio over every required field in the question tree."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from models.questionnaire import CategoryGroup, Question
from questions.tree import count_required, required_answerable_ids
from state.responses import ResponseStore


@dataclass(frozen=True)
class ProgressSnapshot:
    """Filled/required counts and the ratio shown by the progress bar."""

    filled: int
    total_required: int
    ratio: float


def completion_ratio(filled: int, total_required: int) -> float:
    """Return ``filled / total_required`` clamped into [0, 1]; 0 when nothing is required."""

    if total_required <= 0:
        return 0.0
    return max(0.0, min(1.0, filled / total_required))


def compute_progress(questions: Sequence[Question], store: ResponseStore, *, compact: bool = True) -> ProgressSnapshot:
    """Recompute progress after a response change.

    With ``compact`` (the default) blank entries are pruned from ``store``
    first; otherwise the store is only read.
    """

    total = count_required(questions)
    filled = store.prune() if compact else store.count_filled()
    return ProgressSnapshot(filled=filled, total_required=total, ratio=completion_ratio(filled, total))


def step_progress(group: CategoryGroup, store: ResponseStore, *, completed: bool = False) -> float:
    """Share of a step's required answerable questions that are answered."""

    required = required_answerable_ids(group.questions)
    if not required:
        return 1.0 if completed else 0.0
    answered = sum(1 for question_id in required if store.is_filled(question_id))
    return answered / len(required)


def steps_progress(
    groups: Sequence[CategoryGroup],
    store: ResponseStore,
    completed: Collection[int] = (),
) -> list[float]:
    return [step_progress(group, store, completed=index in completed) for index, group in enumerate(groups)]


__all__ = [
    "ProgressSnapshot",
    "completion_ratio",
    "compute_progress",
    "step_progress",
    "steps_progress",
]
