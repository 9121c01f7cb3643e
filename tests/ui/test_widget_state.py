from __future__ import annotations

import streamlit as st

from constants.keys import UIKeys
from questions.catalog import parse_catalog
from state.responses import ResponseStore
from wizard.navigation.state import clear_widget_state, prime_widget_state, read_widget_value


def _questions():
    return parse_catalog(
        [
            {"id": 1, "category": "c", "responseType": "text", "required": True},
            {"id": 2, "category": "c", "responseType": "select", "options": ["Yes", "No"]},
            {"id": 3, "category": "c", "responseType": "checkbox", "options": ["SIEM", "EDR"]},
            {
                "id": 4,
                "category": "c",
                "responseType": None,
                "subQuestions": [{"id": 5, "responseType": "multiselect", "options": ["A", "B"]}],
            },
        ]
    )


def test_prime_widget_state_from_responses() -> None:
    store = ResponseStore({"1": "yes", "2": "Maybe", "3": ["EDR"], "5": ["B"]})

    prime_widget_state(_questions(), store)

    assert st.session_state[UIKeys.question("1")] == "yes"
    assert st.session_state[UIKeys.question("2")] is None
    assert st.session_state[UIKeys.question_option("3", "SIEM")] is False
    assert st.session_state[UIKeys.question_option("3", "EDR")] is True
    assert st.session_state[UIKeys.question("5")] == ["B"]
    assert UIKeys.question("4") not in st.session_state


def test_prime_does_not_clobber_live_widgets() -> None:
    st.session_state[UIKeys.question("1")] = "typing"

    prime_widget_state(_questions(), ResponseStore({"1": "stored"}))

    assert st.session_state[UIKeys.question("1")] == "typing"


def test_read_widget_value_by_response_type() -> None:
    text, select, checkbox, header = _questions()
    (multiselect,) = header.sub_questions
    state = {
        UIKeys.question("1"): "  ",
        UIKeys.question("2"): None,
        UIKeys.question_option("3", "SIEM"): True,
        UIKeys.question_option("3", "EDR"): False,
        UIKeys.question("5"): ("A",),
    }

    assert read_widget_value(text, state) == "  "
    assert read_widget_value(select, state) == ""
    assert read_widget_value(checkbox, state) == ["SIEM"]
    assert read_widget_value(multiselect, state) == ["A"]


def test_clear_widget_state_only_drops_question_keys() -> None:
    st.session_state[UIKeys.question("1")] = "x"
    st.session_state[UIKeys.LANG] = "de"

    clear_widget_state()

    assert dict(st.session_state) == {UIKeys.LANG: "de"}
