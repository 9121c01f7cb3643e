"""Utilities for synchronizing Streamlit widget state with the response store."""

from __future__ import annotations

from typing import Any, Iterable, MutableMapping

import streamlit as st

from constants.keys import UIKeys
from models.questionnaire import Question, ResponseType
from questions.tree import walk
from wizard.missing_fields import is_blank
from wizard.types import AnswerValue


def iter_widget_values(question: Question, value: Any) -> Iterable[tuple[str, Any]]:
    """Yield ``(widget_key, widget_value)`` pairs representing ``value`` for ``question``."""

    if question.response_type is ResponseType.CHECKBOX:
        selected = set(value or ())
        for option in question.options:
            yield UIKeys.question_option(question.id, option), option in selected
        return
    if question.response_type is ResponseType.MULTISELECT:
        yield UIKeys.question(question.id), list(value or ())
        return
    if question.response_type is ResponseType.SELECT:
        yield UIKeys.question(question.id), value if value in question.options else None
        return
    yield UIKeys.question(question.id), value if isinstance(value, str) else ""


def read_widget_value(question: Question, state: MutableMapping[str, Any] | None = None) -> AnswerValue:
    """Collect the answer currently held by ``question``'s widgets."""

    session_state = st.session_state if state is None else state
    if question.response_type is ResponseType.CHECKBOX:
        return [option for option in question.options if session_state.get(UIKeys.question_option(question.id, option))]
    raw = session_state.get(UIKeys.question(question.id))
    if question.is_collection:
        return list(raw or [])
    if is_blank(raw):
        return ""
    return str(raw)


def prime_widget_state(
    questions: Iterable[Question],
    responses: Any,
    state: MutableMapping[str, Any] | None = None,
) -> None:
    """Seed widget keys from stored answers without clobbering live widget state."""

    session_state = st.session_state if state is None else state
    for question in walk(questions, lambda node: node.is_answerable):
        for key, value in iter_widget_values(question, responses.get(question.id)):
            if key not in session_state:
                session_state[key] = value


def clear_widget_state(state: MutableMapping[str, Any] | None = None) -> None:
    """Drop every question widget key, e.g. after the session finished."""

    session_state = st.session_state if state is None else state
    for key in [key for key in session_state if isinstance(key, str) and key.startswith(UIKeys.QUESTION_PREFIX)]:
        del session_state[key]


__all__ = [
    "clear_widget_state",
    "iter_widget_values",
    "prime_widget_state",
    "read_widget_value",
]
