"""Pydantic models describing the questionnaire catalog."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ResponseType(StrEnum):
    """Answer shapes supported by the questionnaire widgets."""

    TEXT = "text"
    SELECT = "select"
    MULTISELECT = "multiselect"
    CHECKBOX = "checkbox"

    @property
    def is_collection(self) -> bool:
        return self in (ResponseType.MULTISELECT, ResponseType.CHECKBOX)


class Question(BaseModel):
    """Single catalog node; ``response_type=None`` marks an informational header.

    Sub-questions form an ordered, arbitrarily deep tree. A sub-question without
    its own ``category`` inherits the parent's so that every node can be traced
    back to the wizard step that renders it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    category: str = ""
    prompt: str = ""
    description: str | None = None
    response_type: ResponseType | None = Field(default=None, alias="responseType")
    required: bool = False
    options: tuple[str, ...] = ()
    sub_questions: tuple["Question", ...] = Field(default=(), alias="subQuestions")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("sub_questions", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @model_validator(mode="before")
    @classmethod
    def _inherit_category(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        children = data.get("subQuestions", data.get("sub_questions"))
        category = data.get("category")
        if not category or not isinstance(children, list):
            return data
        patched = [
            {**child, "category": category} if isinstance(child, dict) and not child.get("category") else child
            for child in children
        ]
        key = "subQuestions" if "subQuestions" in data else "sub_questions"
        return {**data, key: patched}

    @property
    def is_answerable(self) -> bool:
        return self.response_type is not None

    @property
    def is_collection(self) -> bool:
        return self.response_type is not None and self.response_type.is_collection


class CategoryGroup(BaseModel):
    """Questions sharing a category; each group is rendered as one wizard step."""

    model_config = ConfigDict(frozen=True)

    category: str
    questions: tuple[Question, ...] = ()


class QuestionCatalog(BaseModel):
    """Envelope accepted by :func:`questions.catalog.parse_catalog`."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = ""
    questions: tuple[Question, ...] = ()


__all__ = ["CategoryGroup", "Question", "QuestionCatalog", "ResponseType"]
