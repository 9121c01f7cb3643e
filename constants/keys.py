class UIKeys:
    """Keys for UI widgets in ``st.session_state``."""

    LANG = "lang"
    QUESTION_PREFIX = "ui.question."
    NAV_BACK = "ui.nav.back"
    NAV_NEXT = "ui.nav.next"
    NAV_FINISH = "ui.nav.finish"
    RESTART = "ui.restart"

    @staticmethod
    def question(question_id: str) -> str:
        return f"{UIKeys.QUESTION_PREFIX}{question_id}"

    @staticmethod
    def question_option(question_id: str, option: str) -> str:
        return f"{UIKeys.QUESTION_PREFIX}{question_id}.{option}"

    @staticmethod
    def step(index: int) -> str:
        return f"ui.stepper.{index}"


class StateKeys:
    """Keys for data stored in ``st.session_state``."""

    SESSION = "questionnaire.session"
    SETTINGS = "questionnaire.settings"
