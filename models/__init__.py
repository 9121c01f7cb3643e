"""Pydantic models for the questionnaire catalog."""

from .questionnaire import CategoryGroup, Question, QuestionCatalog, ResponseType

__all__ = [
    "CategoryGroup",
    "Question",
    "QuestionCatalog",
    "ResponseType",
]
