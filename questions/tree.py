"""Single pre-order walk over the question tree and its specialisations."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import TypeVar

from models.questionnaire import Question

T = TypeVar("T")

QuestionPredicate = Callable[[Question], bool]


def walk(questions: Iterable[Question], predicate: QuestionPredicate | None = None) -> Iterator[Question]:
    """Yield every node in pre-order (a question, then its sub-questions).

    ``predicate`` filters what is yielded but never prunes the descent: the
    children of a rejected node are still visited.
    """

    for question in questions:
        if predicate is None or predicate(question):
            yield question
        if question.sub_questions:
            yield from walk(question.sub_questions, predicate)


def flatten(
    questions: Iterable[Question],
    mapper: Callable[[Question], T],
    predicate: QuestionPredicate | None = None,
) -> list[T]:
    """Return ``mapper`` applied to every node accepted by ``predicate``."""

    return [mapper(question) for question in walk(questions, predicate)]


def is_answerable(question: Question) -> bool:
    return question.is_answerable


def is_required(question: Question) -> bool:
    return question.required


def is_required_answerable(question: Question) -> bool:
    return question.required and question.is_answerable


def answerable_ids(questions: Iterable[Question]) -> list[str]:
    """Ids of every node that takes an answer, in pre-order."""

    return flatten(questions, lambda question: question.id, is_answerable)


def required_answerable_ids(questions: Iterable[Question]) -> list[str]:
    """Ids of answerable nodes flagged ``required``."""

    return flatten(questions, lambda question: question.id, is_required_answerable)


def count_required(questions: Iterable[Question]) -> int:
    """Count ``required`` nodes at any depth, informational nodes included."""

    return sum(1 for _ in walk(questions, is_required))


def index_by_id(questions: Iterable[Question]) -> dict[str, Question]:
    """Map ids to nodes; on duplicates the later node wins."""

    return {question.id: question for question in walk(questions)}


def duplicate_ids(questions: Sequence[Question]) -> list[str]:
    """Return ids seen more than once anywhere in the tree, in first-seen order."""

    seen: set[str] = set()
    duplicates: dict[str, None] = {}
    for question in walk(questions):
        if question.id in seen:
            duplicates[question.id] = None
        seen.add(question.id)
    return list(duplicates)


__all__ = [
    "answerable_ids",
    "count_required",
    "duplicate_ids",
    "flatten",
    "index_by_id",
    "is_answerable",
    "is_required",
    "is_required_answerable",
    "required_answerable_ids",
    "walk",
]
