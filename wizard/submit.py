"""Finalize collaborators and submit outcomes."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from config import DEFAULT_SUBMIT_DELAY
from core.errors import SubmitError
from wizard.types import AnswerValue, LocalizedText

logger = logging.getLogger(__name__)

Finalize = Callable[[Mapping[str, AnswerValue]], Awaitable[object]]


class SubmitStatus(StrEnum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    INVALID = "invalid"
    REJECTED = "rejected"


@dataclass(frozen=True)
class SubmitOutcome:
    """Result of :meth:`wizard.session.QuestionnaireSession.submit`.

    ``target`` names the completion view on success; ``error`` carries the
    wrapped failure; ``errors`` lists field errors when validation blocked
    the submit.
    """

    status: SubmitStatus
    target: str | None = None
    error: SubmitError | None = None
    errors: Mapping[str, LocalizedText] = field(default_factory=dict)
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is SubmitStatus.SUCCEEDED


def demo_finalize(delay: float = DEFAULT_SUBMIT_DELAY) -> Finalize:
    """Return a finalizer that waits ``delay`` seconds and reports success."""

    async def _finalize(responses: Mapping[str, AnswerValue]) -> bool:
        logger.info("Finalizing assessment with %d answers", len(responses))
        await asyncio.sleep(delay)
        return True

    return _finalize


__all__ = ["Finalize", "SubmitOutcome", "SubmitStatus", "demo_finalize"]
