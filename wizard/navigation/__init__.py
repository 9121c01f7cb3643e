"""Step navigation for the questionnaire wizard."""

from __future__ import annotations

from wizard.navigation.router import StepController, StepState, StepTransition

__all__ = [
    "StepController",
    "StepState",
    "StepTransition",
]
