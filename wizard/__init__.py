"""Questionnaire wizard engine: steps, progress, navigation and submit."""

from __future__ import annotations

import importlib
from typing import Any

from .types import AnswerValue, LocalizedText, QuestionId

_LAZY_EXPORTS: dict[str, str] = {
    "QuestionnaireSession": "session",
    "WizardView": "session",
    "SubmitOutcome": "submit",
    "SubmitStatus": "submit",
    "demo_finalize": "submit",
    "ProgressSnapshot": "progress",
    "compute_progress": "progress",
    "StepController": "navigation.router",
    "StepTransition": "navigation.router",
}

__all__ = ["AnswerValue", "LocalizedText", "QuestionId", *_LAZY_EXPORTS]


def __getattr__(name: str) -> Any:
    """Import engine modules on first access to avoid circular imports."""

    if name.startswith("__"):
        raise AttributeError(name)
    module_name = _LAZY_EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__} has no attribute {name}")
    module = importlib.import_module(f"{__name__}.{module_name}")
    value: Any = getattr(module, name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:  # pragma: no cover - convenience for REPLs
    return sorted(set(__all__))
