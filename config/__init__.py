"""Runtime configuration for the risk assessment questionnaire.

Values come from Streamlit secrets first, then from environment variables
(``.env`` files are loaded via ``python-dotenv``):

``QUESTIONNAIRE_CATALOG``
    Path to the question catalog JSON (defaults to the bundled demo catalog).
``QUESTIONNAIRE_LANG``
    ``de`` or ``en``; language of labels and validation messages.
``QUESTIONNAIRE_SUBMIT_DELAY``
    Seconds the bundled demo finalizer waits before reporting success.
``QUESTIONNAIRE_COMPLETION_TARGET``
    Named routing target emitted after a successful submit.
``QUESTIONNAIRE_ALLOW_DUPLICATE_IDS``
    Downgrade duplicate question ids from an error to a logged warning.
``DEBUG_LOGS``
    Toggle verbose debug logging.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")
SUPPORTED_LANGUAGES: tuple[str, ...] = ("de", "en")

DEFAULT_LANGUAGE = "en"
DEFAULT_SUBMIT_DELAY = 2.0
DEFAULT_COMPLETION_TARGET = "questionnaire.completed"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration values.

    Attributes:
        catalog_path: Catalog file to load, ``None`` for the bundled demo.
        language: UI language code.
        submit_delay: Delay of the demo finalize collaborator in seconds.
        completion_target: Named target to navigate to after submit.
        allow_duplicate_ids: Accept duplicate ids (later node wins).
        debug_logs: Toggle verbose debug logging.
    """

    catalog_path: Path | None = None
    language: str = DEFAULT_LANGUAGE
    submit_delay: float = DEFAULT_SUBMIT_DELAY
    completion_target: str = DEFAULT_COMPLETION_TARGET
    allow_duplicate_ids: bool = False
    debug_logs: bool = False

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.debug_logs else logging.INFO


def _is_truthy_flag(value: str | None) -> bool:
    """Return ``True`` when ``value`` matches a truthy environment token."""

    if value is None:
        return False
    return value.strip().lower() in _TRUTHY_ENV_VALUES


def _parse_non_negative_float(value: str | None, *, env_var: str, default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        parsed = float(value)
    except ValueError:
        logger.warning("%s is not a number ('%s'); using %.1f", env_var, value, default)
        return default
    if parsed < 0:
        logger.warning("%s must not be negative ('%s'); using %.1f", env_var, value, default)
        return default
    return parsed


def normalise_language(value: str | None, *, default: str = DEFAULT_LANGUAGE) -> str:
    """Return a supported language code or ``default``."""

    if not value:
        return default
    candidate = value.strip().lower()[:2]
    if candidate in SUPPORTED_LANGUAGES:
        return candidate
    logger.warning("Unsupported QUESTIONNAIRE_LANG '%s'; falling back to '%s'", value, default)
    return default


def _read_secrets() -> dict[str, object]:
    try:
        return dict(st.secrets)
    except Exception:  # pragma: no cover - no secrets.toml outside Streamlit
        return {}


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Load settings from Streamlit secrets or the environment.

    Args:
        env: Optional mapping used instead of secrets and ``os.environ``
            (handy for tests and the CLI).
    """

    if env is None:
        secrets = _read_secrets()

        def _get(key: str) -> str | None:
            secret = secrets.get(key)
            return str(secret) if secret is not None else os.getenv(key)

    else:

        def _get(key: str) -> str | None:
            return env.get(key)

    catalog_raw = (_get("QUESTIONNAIRE_CATALOG") or "").strip()
    target = (_get("QUESTIONNAIRE_COMPLETION_TARGET") or "").strip()
    return Settings(
        catalog_path=Path(catalog_raw) if catalog_raw else None,
        language=normalise_language(_get("QUESTIONNAIRE_LANG")),
        submit_delay=_parse_non_negative_float(
            _get("QUESTIONNAIRE_SUBMIT_DELAY"),
            env_var="QUESTIONNAIRE_SUBMIT_DELAY",
            default=DEFAULT_SUBMIT_DELAY,
        ),
        completion_target=target or DEFAULT_COMPLETION_TARGET,
        allow_duplicate_ids=_is_truthy_flag(_get("QUESTIONNAIRE_ALLOW_DUPLICATE_IDS")),
        debug_logs=_is_truthy_flag(_get("DEBUG_LOGS")),
    )


__all__ = [
    "DEFAULT_COMPLETION_TARGET",
    "DEFAULT_LANGUAGE",
    "DEFAULT_SUBMIT_DELAY",
    "SUPPORTED_LANGUAGES",
    "Settings",
    "load_settings",
    "normalise_language",
]
