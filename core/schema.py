"""Validation schema derived from the question tree."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from core.errors import FieldValidationError, SchemaDerivationError
from models.questionnaire import Question
from questions.tree import duplicate_ids, is_answerable, walk
from wizard.missing_fields import is_blank
from wizard.types import LocalizedText

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE: LocalizedText = ("Pflichtfeld", "Required")
EXPECTED_TEXT_MESSAGE: LocalizedText = ("Bitte einen einzelnen Wert angeben.", "Please provide a single value.")
EXPECTED_LIST_MESSAGE: LocalizedText = ("Bitte eine Auswahlliste angeben.", "Please provide a list of selections.")


class FieldKind(StrEnum):
    SCALAR = "scalar"
    COLLECTION = "collection"


@dataclass(frozen=True)
class FieldRule:
    """Validation rule for one question id."""

    kind: FieldKind
    required: bool

    def check(self, value: Any) -> LocalizedText | None:
        """Return a localized error for ``value`` or ``None`` when it passes."""

        if is_blank(value):
            return REQUIRED_MESSAGE if self.required else None
        if self.kind is FieldKind.COLLECTION:
            if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
                return EXPECTED_LIST_MESSAGE
            return None
        if not isinstance(value, str):
            return EXPECTED_TEXT_MESSAGE
        return None

    def ensure(self, question_id: str, value: Any) -> None:
        """Raise :class:`FieldValidationError` when ``value`` fails :meth:`check`."""

        error = self.check(value)
        if error is not None:
            raise FieldValidationError(error[1], question_id=question_id, localized=error)


def rule_for(question: Question) -> FieldRule:
    kind = FieldKind.COLLECTION if question.is_collection else FieldKind.SCALAR
    return FieldRule(kind=kind, required=question.required)


class ValidationSchema(Mapping[str, FieldRule]):
    """Read-only mapping of question id to :class:`FieldRule`.

    Equality is structural (inherited from :class:`Mapping`), so two schemas
    derived from the same tree compare equal.
    """

    def __init__(self, rules: Mapping[str, FieldRule]) -> None:
        self._rules = MappingProxyType(dict(rules))

    def __getitem__(self, key: str) -> FieldRule:
        return self._rules[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"ValidationSchema({dict(self._rules)!r})"

    def required_ids(self) -> list[str]:
        return [key for key, rule in self._rules.items() if rule.required]

    def validate(self, responses: Mapping[str, Any], ids: Iterable[str] | None = None) -> dict[str, LocalizedText]:
        """Return ``{id: message}`` for every id in ``ids`` (default: all) that fails."""

        errors: dict[str, LocalizedText] = {}
        for key in self._rules if ids is None else ids:
            rule = self._rules.get(key)
            if rule is None:
                continue
            error = rule.check(responses.get(key))
            if error is not None:
                errors[key] = error
        return errors


def derive_schema(questions: Sequence[Question], *, allow_duplicate_ids: bool = False) -> ValidationSchema:
    """Build the validation schema for every answerable node in ``questions``.

    Raises:
        SchemaDerivationError: If an id occurs more than once in the tree and
            ``allow_duplicate_ids`` is not set. With the flag, the later node's
            rule replaces the earlier one and a warning is logged.
    """

    duplicates = duplicate_ids(questions)
    if duplicates:
        if not allow_duplicate_ids:
            raise SchemaDerivationError(
                f"Duplicate question ids in catalog: {', '.join(duplicates)}",
                duplicates=tuple(duplicates),
            )
        for question_id in duplicates:
            logger.warning("Duplicate question id '%s'; the later node's rule wins", question_id)

    rules: dict[str, FieldRule] = {}
    for question in walk(questions, is_answerable):
        rules[question.id] = rule_for(question)
    return ValidationSchema(rules)


__all__ = [
    "EXPECTED_LIST_MESSAGE",
    "EXPECTED_TEXT_MESSAGE",
    "FieldKind",
    "FieldRule",
    "REQUIRED_MESSAGE",
    "ValidationSchema",
    "derive_schema",
    "rule_for",
]
