"""Explicitly owned questionnaire session: answers, steps, progress and submit."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from config import DEFAULT_COMPLETION_TARGET, Settings
from core.errors import SUBMIT_FAILED_MESSAGE, FieldValidationError, SubmitError
from core.schema import REQUIRED_MESSAGE, ValidationSchema, derive_schema
from models.questionnaire import CategoryGroup, Question
from questions.catalog import load_catalog
from questions.grouping import group_by_category
from questions.tree import index_by_id
from state.responses import ResponseStore
from utils.i18n import tr
from utils.logging_context import current_context, log_context
from utils.telemetry import get_tracer
from wizard.missing_fields import is_blank
from wizard.navigation.router import StepController, StepTransition
from wizard.progress import ProgressSnapshot, compute_progress, steps_progress
from wizard.submit import Finalize, SubmitOutcome, SubmitStatus
from wizard.types import AnswerValue, LocalizedText

logger = logging.getLogger(__name__)

ProgressListener = Callable[[float], None]


@dataclass(frozen=True)
class WizardView:
    """Everything the presentation layer needs to render the wizard."""

    steps: tuple[str, ...]
    active_step: int
    completed: frozenset[int]
    progress_ratio: float
    step_progress: tuple[float, ...]
    active_questions: tuple[Question, ...]
    errors: Mapping[str, LocalizedText] = field(default_factory=dict)
    form_error: LocalizedText | None = None
    is_submitting: bool = False
    is_first_step: bool = True
    is_last_step: bool = False
    can_submit: bool = False
    finished_target: str | None = None

    @property
    def is_finished(self) -> bool:
        return self.finished_target is not None

    def error_messages(self, lang: str | None = None) -> dict[str, str]:
        return {question_id: tr(de, en, lang=lang) for question_id, (de, en) in self.errors.items()}

    def form_error_message(self, lang: str | None = None) -> str | None:
        if self.form_error is None:
            return None
        de, en = self.form_error
        return tr(de, en, lang=lang)


class QuestionnaireSession:
    """Single-user wizard session over a fixed question tree.

    The tree, its step groups and the validation schema are derived once at
    construction; a malformed tree raises
    :class:`~core.errors.SchemaDerivationError` immediately. Answers and step
    state live until submit succeeds or the session is dropped. Field and
    submit failures are kept as view state and never raised to the caller.
    """

    def __init__(
        self,
        questions: Sequence[Question],
        *,
        responses: Mapping[Any, AnswerValue] | None = None,
        allow_duplicate_ids: bool = False,
        completion_target: str = DEFAULT_COMPLETION_TARGET,
        session_id: str | None = None,
    ) -> None:
        self.session_id = session_id or uuid4().hex[:12]
        self._questions: tuple[Question, ...] = tuple(questions)
        self._schema = derive_schema(self._questions, allow_duplicate_ids=allow_duplicate_ids)
        self._groups: tuple[CategoryGroup, ...] = tuple(group_by_category(self._questions))
        self._nodes = index_by_id(self._questions)
        self._store = ResponseStore(responses)
        self._controller = StepController(self._groups, self._store, self._schema)
        self._completion_target = completion_target
        self._listeners: list[ProgressListener] = []
        self._submitting = False
        self._form_error: LocalizedText | None = None
        self._finished_target: str | None = None
        self._progress = compute_progress(self._questions, self._store)
        with log_context(session_id=self.session_id):
            logger.info(
                "Questionnaire session started with %d steps and %d schema fields",
                len(self._groups),
                len(self._schema),
            )

    @classmethod
    def from_settings(cls, settings: Settings, *, responses: Mapping[Any, AnswerValue] | None = None) -> "QuestionnaireSession":
        """Build a session from the catalog configured in ``settings``."""

        return cls(
            load_catalog(settings.catalog_path),
            responses=responses,
            allow_duplicate_ids=settings.allow_duplicate_ids,
            completion_target=settings.completion_target,
        )

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def groups(self) -> tuple[CategoryGroup, ...]:
        return self._groups

    @property
    def schema(self) -> ValidationSchema:
        return self._schema

    @property
    def responses(self) -> ResponseStore:
        return self._store

    @property
    def controller(self) -> StepController:
        return self._controller

    @property
    def progress(self) -> ProgressSnapshot:
        return self._progress

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def finished_target(self) -> str | None:
        return self._finished_target

    @property
    def can_submit(self) -> bool:
        return self._controller.is_last_step and not self._submitting and self._finished_target is None

    def question(self, question_id: Any) -> Question | None:
        return self._nodes.get(str(question_id))

    def subscribe(self, listener: ProgressListener) -> Callable[[], None]:
        """Register ``listener`` for progress ratios; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _refresh_progress(self) -> None:
        self._progress = compute_progress(self._questions, self._store)
        for listener in list(self._listeners):
            listener(self._progress.ratio)

    def answer(self, question_id: Any, value: AnswerValue) -> bool:
        """Record ``value`` for ``question_id`` and recompute progress.

        Returns ``False`` when the answer was not stored: unknown or
        informational ids, a value of the wrong shape (kept as a field error),
        or a session that is submitting or already finished.
        """

        key = str(question_id)
        with log_context(session_id=self.session_id):
            if self._submitting or self._finished_target is not None:
                logger.info("Ignoring answer for '%s' while the session is closed for edits", key)
                return False
            rule = self._schema.get(key)
            if rule is None:
                if self.question(key) is None:
                    logger.warning("Ignoring answer for unknown question '%s'", key)
                else:
                    logger.warning("Ignoring answer for informational question '%s'", key)
                return False
            try:
                if not is_blank(value):
                    rule.ensure(key, value)
            except FieldValidationError as exc:
                self._controller.set_errors({**self._controller.pending_errors, key: exc.localized or REQUIRED_MESSAGE})
                logger.info("Rejected answer for '%s': %s", key, exc)
                return False
            self._store.set(key, value)
            self._controller.clear_error(key)
            self._refresh_progress()
        return True

    def advance(self, *, expected_step: int | None = None) -> StepTransition:
        with log_context(session_id=self.session_id):
            return self._controller.advance(expected_step=expected_step)

    def back(self) -> bool:
        with log_context(session_id=self.session_id):
            return self._controller.back()

    def jump(self, step: int) -> bool:
        with log_context(session_id=self.session_id):
            return self._controller.jump(step)

    def _reject(self, reason: str) -> SubmitOutcome:
        logger.warning("Submit rejected: %s", reason)
        return SubmitOutcome(status=SubmitStatus.REJECTED, reason=reason)

    async def submit(self, finalize: Finalize) -> SubmitOutcome:
        """Validate every answer and hand a snapshot to ``finalize``.

        Only one submit may be in flight; concurrent calls are rejected.
        Failures leave the answers untouched so the user can retry.
        """

        with log_context(session_id=self.session_id):
            if self._submitting:
                return self._reject("a submit is already in flight")
            if self._finished_target is not None:
                return self._reject("session already finished")
            if not self._controller.is_last_step:
                return self._reject("not on the last step")

            errors = self._schema.validate(self._store.data)
            if errors:
                self._controller.set_errors(errors)
                logger.info("Submit blocked by %d invalid fields", len(errors))
                return SubmitOutcome(status=SubmitStatus.INVALID, errors=errors)

            self._submitting = True
            self._form_error = None
            self._controller.lock()
            snapshot = self._store.snapshot()
            try:
                with get_tracer().start_as_current_span("questionnaire.submit") as span:
                    for name, value in current_context().items():
                        span.set_attribute(f"questionnaire.{name}", value)
                    span.set_attribute("questionnaire.answers", len(snapshot))
                    result = await finalize(snapshot)
                if result is False:
                    raise SubmitError("Finalize reported failure")
            except SubmitError as exc:
                return self._fail(exc)
            except Exception as exc:  # external collaborator; converted into form state
                return self._fail(SubmitError(str(exc) or type(exc).__name__, original=exc))
            finally:
                self._submitting = False
                self._controller.unlock()

            self._finish()
            logger.info("Assessment submitted; navigating to '%s'", self._completion_target)
            return SubmitOutcome(status=SubmitStatus.SUCCEEDED, target=self._completion_target)

    def _fail(self, error: SubmitError) -> SubmitOutcome:
        logger.error("Submit failed: %s", error, exc_info=error.original or error)
        de, en = SUBMIT_FAILED_MESSAGE
        self._form_error = (f"{de} ({error.message})", f"{en} ({error.message})")
        return SubmitOutcome(status=SubmitStatus.FAILED, error=error)

    def _finish(self) -> None:
        self._finished_target = self._completion_target
        self._store.clear()
        self._controller.reset()
        self._refresh_progress()

    def view(self) -> WizardView:
        controller = self._controller
        group = controller.active_group
        return WizardView(
            steps=controller.steps,
            active_step=controller.active_step,
            completed=controller.completed,
            progress_ratio=self._progress.ratio,
            step_progress=tuple(steps_progress(self._groups, self._store, controller.completed)),
            active_questions=group.questions if group is not None else (),
            errors=controller.pending_errors,
            form_error=self._form_error,
            is_submitting=self._submitting,
            is_first_step=controller.is_first_step,
            is_last_step=controller.is_last_step,
            can_submit=self.can_submit,
            finished_target=self._finished_target,
        )


__all__ = ["QuestionnaireSession", "WizardView"]
