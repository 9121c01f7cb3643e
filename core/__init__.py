"""Core schema derivation and error types for the questionnaire engine."""

from .errors import FieldValidationError, QuestionnaireError, SchemaDerivationError, SubmitError
from .schema import FieldKind, FieldRule, ValidationSchema, derive_schema

__all__ = [
    "FieldKind",
    "FieldRule",
    "FieldValidationError",
    "QuestionnaireError",
    "SchemaDerivationError",
    "SubmitError",
    "ValidationSchema",
    "derive_schema",
]
