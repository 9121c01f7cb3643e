"""Exception hierarchy for the questionnaire engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from wizard.types import LocalizedText


@dataclass
class QuestionnaireError(Exception):
    """Base exception for questionnaire catalog and session failures."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class SchemaDerivationError(QuestionnaireError):
    """Raised when a question tree cannot be turned into a consistent schema."""

    duplicates: Sequence[str] = field(default_factory=tuple)
    details: Mapping[str, Any] | None = None


@dataclass
class FieldValidationError(QuestionnaireError):
    """A single field failed validation; recovered as inline error state."""

    question_id: str = ""
    localized: LocalizedText | None = None


@dataclass
class SubmitError(QuestionnaireError):
    """Raised when the external finalize collaborator fails."""

    original: Exception | None = None


SUBMIT_FAILED_MESSAGE: LocalizedText = (
    "Die Bewertung konnte nicht übermittelt werden. Bitte versuche es erneut.",
    "The assessment could not be submitted. Please try again.",
)


__all__ = [
    "FieldValidationError",
    "QuestionnaireError",
    "SUBMIT_FAILED_MESSAGE",
    "SchemaDerivationError",
    "SubmitError",
]
