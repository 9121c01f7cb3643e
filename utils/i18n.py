"""Simple i18n helper utilities."""

from __future__ import annotations

from typing import Final

import streamlit as st

from config import DEFAULT_LANGUAGE
from constants.keys import UIKeys


QUESTIONNAIRE_TITLE: Final[tuple[str, str]] = (
    "Fragebogen zur Risikoexposition",
    "Risk Exposure Assessment Questionnaire",
)
NAV_BACK_LABEL: Final[tuple[str, str]] = ("◀ Zurück", "◀ Back")
NAV_NEXT_LABEL: Final[tuple[str, str]] = ("Weiter ▶", "Next ▶")
NAV_FINISH_LABEL: Final[tuple[str, str]] = ("Abschließen", "Finish")
NAV_BLOCKED_HINT: Final[tuple[str, str]] = (
    "Bitte fülle die markierten Pflichtfelder aus, bevor du fortfährst.",
    "Please complete the marked required fields before continuing.",
)
SUBMITTING_LABEL: Final[tuple[str, str]] = ("Wird übermittelt…", "Submitting…")
COMPLETED_HEADLINE: Final[tuple[str, str]] = (
    "Vielen Dank! Die Bewertung wurde übermittelt.",
    "Thank you! The assessment has been submitted.",
)
RESTART_LABEL: Final[tuple[str, str]] = ("Neue Bewertung starten", "Start a new assessment")
PROGRESS_CAPTION: Final[tuple[str, str]] = (
    "{filled} von {total} Pflichtangaben ausgefüllt",
    "{filled} of {total} required answers filled",
)


def tr(de: str, en: str, lang: str | None = None) -> str:
    """Return the string matching the current language.

    Args:
        de: German text.
        en: English text.
        lang: Optional language override (``"de"`` or ``"en"``).

    Returns:
        The localized string for the requested language.
    """
    code = lang or st.session_state.get(UIKeys.LANG, DEFAULT_LANGUAGE)
    return de if code == "de" else en


__all__ = [
    "COMPLETED_HEADLINE",
    "NAV_BACK_LABEL",
    "NAV_BLOCKED_HINT",
    "NAV_FINISH_LABEL",
    "NAV_NEXT_LABEL",
    "PROGRESS_CAPTION",
    "QUESTIONNAIRE_TITLE",
    "RESTART_LABEL",
    "SUBMITTING_LABEL",
    "tr",
]
