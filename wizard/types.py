"""Shared type aliases for the wizard package."""

from __future__ import annotations

from typing import Union


QuestionId = str
ScalarAnswer = str
CollectionAnswer = list[str]
AnswerValue = Union[ScalarAnswer, CollectionAnswer]

# Bilingual text pair (de, en) used throughout the wizard UI
LocalizedText = tuple[str, str]


__all__ = [
    "AnswerValue",
    "CollectionAnswer",
    "LocalizedText",
    "QuestionId",
    "ScalarAnswer",
]
