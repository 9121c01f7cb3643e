"""Step controller: gates Next, Back and step jumps on each step's required answers."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from core.schema import REQUIRED_MESSAGE, ValidationSchema
from models.questionnaire import CategoryGroup
from questions.grouping import step_labels
from state.responses import ResponseStore
from utils.logging_context import log_context
from wizard.step_status import StepMissing, compute_step_missing, iter_step_missing_fields
from wizard.types import LocalizedText

logger = logging.getLogger(__name__)


@dataclass
class StepState:
    """Active step index plus the set of completed step indices."""

    active_step: int = 0
    completed: set[int] = field(default_factory=set)


@dataclass(frozen=True)
class StepTransition:
    """Outcome of a navigation request.

    ``accepted`` is ``True`` when the step passed validation and was marked
    complete; ``to_step`` may still equal ``from_step`` in the terminal state.
    """

    accepted: bool
    from_step: int
    to_step: int
    errors: Mapping[str, LocalizedText] = field(default_factory=dict)

    @property
    def moved(self) -> bool:
        return self.from_step != self.to_step


class StepController:
    """Gate wizard navigation on the required questions of each step."""

    def __init__(
        self,
        groups: Sequence[CategoryGroup],
        store: ResponseStore,
        schema: ValidationSchema,
        *,
        state: StepState | None = None,
    ) -> None:
        self._groups: tuple[CategoryGroup, ...] = tuple(groups)
        self._labels: tuple[str, ...] = tuple(step_labels(self._groups))
        self._store = store
        self._schema = schema
        self._state = state or StepState()
        self._pending_errors: dict[str, LocalizedText] = {}
        self._locked = False

    @property
    def steps(self) -> tuple[str, ...]:
        return self._labels

    @property
    def groups(self) -> tuple[CategoryGroup, ...]:
        return self._groups

    @property
    def active_step(self) -> int:
        return self._state.active_step

    @property
    def active_group(self) -> CategoryGroup | None:
        if not self._groups:
            return None
        return self._groups[self._state.active_step]

    @property
    def completed(self) -> frozenset[int]:
        return frozenset(self._state.completed)

    @property
    def total_steps(self) -> int:
        return len(self._groups)

    @property
    def is_first_step(self) -> bool:
        return self._state.active_step == 0

    @property
    def is_last_step(self) -> bool:
        return self.total_steps > 0 and self._state.active_step == self.total_steps - 1

    @property
    def all_steps_completed(self) -> bool:
        return self.total_steps > 0 and len(self._state.completed) == self.total_steps

    @property
    def pending_errors(self) -> dict[str, LocalizedText]:
        return dict(self._pending_errors)

    @property
    def locked(self) -> bool:
        return self._locked

    def lock(self) -> None:
        """Refuse transitions, e.g. while a submit is in flight."""

        self._locked = True

    def unlock(self) -> None:
        self._locked = False

    def label_for(self, index: int) -> str:
        return self._labels[index] if 0 <= index < len(self._labels) else "-"

    def clear_errors(self) -> None:
        self._pending_errors = {}

    def clear_error(self, question_id: str) -> None:
        self._pending_errors.pop(question_id, None)

    def set_errors(self, errors: Mapping[str, LocalizedText]) -> None:
        self._pending_errors = dict(errors)

    def reset(self) -> None:
        self._state.active_step = 0
        self._state.completed.clear()
        self._pending_errors = {}
        self._locked = False

    def _refused(self, reason: str) -> StepTransition:
        current = self._state.active_step
        logger.debug("Ignoring navigation on step %d: %s", current, reason)
        return StepTransition(accepted=False, from_step=current, to_step=current)

    def _validation_errors(self, missing: StepMissing) -> dict[str, LocalizedText]:
        errors = self._schema.validate(self._store.data, ids=iter_step_missing_fields(missing))
        # required-ness is read from the tree, not the schema
        for question_id in missing.required:
            errors.setdefault(question_id, REQUIRED_MESSAGE)
        return errors

    def _next_index(self, current: int) -> int:
        if not self.is_last_step:
            return current + 1
        if self.all_steps_completed:
            return current
        return next(index for index in range(self.total_steps) if index not in self._state.completed)

    def advance(self, *, expected_step: int | None = None) -> StepTransition:
        """Mark the active step complete and move on when its required answers exist.

        ``expected_step`` is the index the caller rendered; a stale value (a
        repeated click after the step already moved) makes the call a no-op.
        """

        if self._locked:
            return self._refused("navigation locked")
        if not self._groups:
            return self._refused("no steps")
        current = self._state.active_step
        if expected_step is not None and expected_step != current:
            return self._refused(f"stale request for step {expected_step}")

        self.clear_errors()
        group = self._groups[current]
        with log_context(wizard_step=self.label_for(current)):
            missing = compute_step_missing(group, self._store)
            if missing.required:
                errors = self._validation_errors(missing)
                self._pending_errors = errors
                logger.info("Step %d blocked; missing required ids: %s", current, ", ".join(missing.required))
                return StepTransition(accepted=False, from_step=current, to_step=current, errors=dict(errors))

            self._state.completed.add(current)
            target = self._next_index(current)
            self._state.active_step = target
            logger.debug("Step %d completed; active step is now %d", current, target)
        return StepTransition(accepted=True, from_step=current, to_step=target)

    def back(self) -> bool:
        if self._locked or self._state.active_step <= 0:
            return False
        self.clear_errors()
        self._state.active_step -= 1
        logger.debug("Moved back to step %d", self._state.active_step)
        return True

    def jump(self, step: int) -> bool:
        """Activate ``step`` when it has already been completed; otherwise do nothing."""

        if self._locked or step not in self._state.completed:
            return False
        self.clear_errors()
        self._state.active_step = step
        logger.debug("Jumped to completed step %d", step)
        return True


__all__ = ["StepController", "StepState", "StepTransition"]
