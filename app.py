# app.py: risk exposure questionnaire (Streamlit entrypoint)
from __future__ import annotations

from pathlib import Path
import sys

import streamlit as st

APP_ROOT = Path(__file__).resolve().parent
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))

from config import Settings, load_settings  # noqa: E402
from constants.keys import StateKeys, UIKeys  # noqa: E402
from core.errors import SchemaDerivationError  # noqa: E402
from utils.i18n import QUESTIONNAIRE_TITLE, tr  # noqa: E402
from utils.logging_context import configure_logging, set_session_id  # noqa: E402
from utils.telemetry import setup_tracing  # noqa: E402
from wizard.navigation.state import clear_widget_state  # noqa: E402
from wizard.navigation.ui import render_wizard  # noqa: E402
from wizard.session import QuestionnaireSession  # noqa: E402
from wizard.submit import demo_finalize  # noqa: E402


def _settings() -> Settings:
    settings = st.session_state.get(StateKeys.SETTINGS)
    if not isinstance(settings, Settings):
        settings = load_settings()
        st.session_state[StateKeys.SETTINGS] = settings
    return settings


def _session(settings: Settings) -> QuestionnaireSession:
    session = st.session_state.get(StateKeys.SESSION)
    if not isinstance(session, QuestionnaireSession):
        session = QuestionnaireSession.from_settings(settings)
        st.session_state[StateKeys.SESSION] = session
    set_session_id(session.session_id)
    return session


def _restart() -> None:
    st.session_state.pop(StateKeys.SESSION, None)
    clear_widget_state()


settings = _settings()
configure_logging(level=settings.log_level)
setup_tracing()
st.session_state.setdefault(UIKeys.LANG, settings.language)
lang = st.session_state[UIKeys.LANG]

st.set_page_config(page_title=tr(*QUESTIONNAIRE_TITLE, lang=lang), page_icon="🛡️", layout="wide")
st.title(tr(*QUESTIONNAIRE_TITLE, lang=lang))

try:
    questionnaire = _session(settings)
except SchemaDerivationError as exc:
    st.error(str(exc))
    st.stop()
else:
    render_wizard(questionnaire, demo_finalize(settings.submit_delay), lang=lang, on_restart=_restart)
