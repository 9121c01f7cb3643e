from __future__ import annotations

import asyncio
import html
import logging
from typing import Callable

import streamlit as st

from constants.keys import UIKeys
from models.questionnaire import Question, ResponseType
from utils.i18n import (
    COMPLETED_HEADLINE,
    NAV_BACK_LABEL,
    NAV_BLOCKED_HINT,
    NAV_FINISH_LABEL,
    NAV_NEXT_LABEL,
    PROGRESS_CAPTION,
    RESTART_LABEL,
    SUBMITTING_LABEL,
    tr,
)
from wizard.navigation.state import clear_widget_state, prime_widget_state, read_widget_value
from wizard.session import QuestionnaireSession, WizardView
from wizard.submit import Finalize

logger = logging.getLogger(__name__)


_NAVIGATION_STYLE = """
<style>
.wizard-nav-warning {
    display: flex;
    align-items: flex-start;
    gap: 0.45rem;
    margin: 0.45rem auto 0;
    padding: 0.6rem 0.85rem;
    border-radius: 12px;
    border: 1px solid rgba(245, 158, 11, 0.35);
    background: rgba(251, 191, 36, 0.18);
    font-size: 0.92rem;
    line-height: 1.35;
}

.wizard-nav-warning--empty {
    border-color: transparent;
    background: transparent;
    padding: 0;
}

.questionnaire-subquestions {
    margin-left: 1.25rem;
    padding-left: 0.75rem;
    border-left: 2px solid rgba(148, 163, 184, 0.35);
}
</style>
"""


def inject_navigation_style() -> None:
    st.markdown(_NAVIGATION_STYLE, unsafe_allow_html=True)


def _on_answer(session: QuestionnaireSession, question: Question) -> None:
    session.answer(question.id, read_widget_value(question))


def _question_label(question: Question) -> str:
    label = question.prompt or question.id
    return f"{label} *" if question.required else label


def render_question(
    session: QuestionnaireSession,
    question: Question,
    *,
    errors: dict[str, str],
    disabled: bool,
) -> None:
    """Render ``question`` and, indented below it, its sub-questions."""

    label = _question_label(question)
    key = UIKeys.question(question.id)
    callback_args = (session, question)
    if question.response_type is None:
        st.markdown(f"**{html.escape(label)}**")
    elif question.response_type is ResponseType.TEXT:
        st.text_input(label, key=key, on_change=_on_answer, args=callback_args, disabled=disabled)
    elif question.response_type is ResponseType.SELECT:
        st.selectbox(
            label,
            options=list(question.options),
            index=None,
            key=key,
            on_change=_on_answer,
            args=callback_args,
            disabled=disabled,
        )
    elif question.response_type is ResponseType.MULTISELECT:
        st.multiselect(
            label,
            options=list(question.options),
            key=key,
            on_change=_on_answer,
            args=callback_args,
            disabled=disabled,
        )
    else:
        st.markdown(label)
        for option in question.options:
            st.checkbox(
                option,
                key=UIKeys.question_option(question.id, option),
                on_change=_on_answer,
                args=callback_args,
                disabled=disabled,
            )

    if question.description:
        st.caption(question.description)
    error = errors.get(question.id)
    if error:
        st.error(error)

    if question.sub_questions:
        st.markdown('<div class="questionnaire-subquestions">', unsafe_allow_html=True)
        for child in question.sub_questions:
            render_question(session, child, errors=errors, disabled=disabled)
        st.markdown("</div>", unsafe_allow_html=True)


def render_stepper(session: QuestionnaireSession, view: WizardView) -> None:
    """Render one button per step; only completed steps are clickable."""

    if not view.steps:
        return
    columns = st.columns(len(view.steps))
    for index, (column, label) in enumerate(zip(columns, view.steps)):
        done = index in view.completed
        prefix = "✓" if done else str(index + 1)
        with column:
            st.button(
                f"{prefix} {label}",
                key=UIKeys.step(index),
                type="primary" if index == view.active_step else "secondary",
                disabled=not done or view.is_submitting,
                on_click=session.jump,
                args=(index,),
                use_container_width=True,
            )
            st.progress(view.step_progress[index])


def render_progress(session: QuestionnaireSession, view: WizardView, *, lang: str) -> None:
    snapshot = session.progress
    st.progress(view.progress_ratio)
    de, en = PROGRESS_CAPTION
    st.caption(tr(de, en, lang=lang).format(filled=snapshot.filled, total=snapshot.total_required))


def render_validation_warnings(view: WizardView, *, lang: str) -> None:
    hint = tr(*NAV_BLOCKED_HINT, lang=lang) if view.errors else ""
    form_error = view.form_error_message(lang)
    if form_error:
        st.error(form_error)
    warning_class = "wizard-nav-warning" if hint else "wizard-nav-warning wizard-nav-warning--empty"
    st.markdown(f'<div class="{warning_class}">{html.escape(hint)}</div>', unsafe_allow_html=True)


def _submit(session: QuestionnaireSession, finalize: Finalize) -> None:
    outcome = asyncio.run(session.submit(finalize))
    logger.debug("Submit finished with status %s", outcome.status)
    if outcome.ok:
        clear_widget_state()


def render_navigation(session: QuestionnaireSession, view: WizardView, finalize: Finalize, *, lang: str) -> None:
    back_col, _spacer, next_col = st.columns([1, 2, 1])
    with back_col:
        st.button(
            tr(*NAV_BACK_LABEL, lang=lang),
            key=UIKeys.NAV_BACK,
            disabled=view.is_first_step or view.is_submitting,
            on_click=session.back,
            use_container_width=True,
        )
    with next_col:
        if view.is_last_step:
            label = SUBMITTING_LABEL if view.is_submitting else NAV_FINISH_LABEL
            st.button(
                tr(*label, lang=lang),
                key=UIKeys.NAV_FINISH,
                type="primary",
                disabled=not view.can_submit,
                on_click=_submit,
                args=(session, finalize),
                use_container_width=True,
            )
        else:
            st.button(
                tr(*NAV_NEXT_LABEL, lang=lang),
                key=UIKeys.NAV_NEXT,
                type="primary",
                disabled=view.is_submitting,
                on_click=lambda: session.advance(expected_step=view.active_step),
                use_container_width=True,
            )


def render_completion(view: WizardView, on_restart: Callable[[], None], *, lang: str) -> None:
    st.success(tr(*COMPLETED_HEADLINE, lang=lang))
    st.caption(view.finished_target or "")
    st.button(tr(*RESTART_LABEL, lang=lang), key=UIKeys.RESTART, on_click=on_restart)


def render_wizard(
    session: QuestionnaireSession,
    finalize: Finalize,
    *,
    lang: str,
    on_restart: Callable[[], None],
) -> None:
    """Render the full questionnaire for ``session``."""

    inject_navigation_style()
    view = session.view()
    if view.is_finished:
        render_completion(view, on_restart, lang=lang)
        return

    prime_widget_state(view.active_questions, session.responses)
    render_progress(session, view, lang=lang)
    render_stepper(session, view)

    errors = view.error_messages(lang)
    for question in view.active_questions:
        render_question(session, question, errors=errors, disabled=view.is_submitting)

    render_validation_warnings(view, lang=lang)
    render_navigation(session, view, finalize, lang=lang)


__all__ = [
    "inject_navigation_style",
    "render_completion",
    "render_navigation",
    "render_progress",
    "render_question",
    "render_stepper",
    "render_validation_warnings",
    "render_wizard",
]
