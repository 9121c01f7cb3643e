"""In-memory answer store owned by a questionnaire session."""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from types import MappingProxyType
from typing import Any

from wizard.missing_fields import is_blank
from wizard.types import AnswerValue


def _normalise(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return list(value)
    return value


class ResponseStore:
    """Mapping of question id (string key) to the current answer.

    Empty strings and empty collections are equivalent to absence. They may
    sit in the map between edits; :meth:`compact` removes them.
    """

    def __init__(self, initial: Mapping[Any, AnswerValue] | None = None) -> None:
        self._data: dict[str, AnswerValue] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def __contains__(self, question_id: object) -> bool:
        return str(question_id) in self._data

    def __len__(self) -> int:
        return len(self._data)

    @property
    def data(self) -> Mapping[str, AnswerValue]:
        return MappingProxyType(self._data)

    def get(self, question_id: Any, default: Any = None) -> Any:
        return self._data.get(str(question_id), default)

    def set(self, question_id: Any, value: AnswerValue) -> Mapping[str, AnswerValue]:
        """Replace the answer for ``question_id`` and return a read-only view of the map.

        Collections are not merged; a new selection replaces the old one.
        """

        self._data[str(question_id)] = _normalise(value)
        return MappingProxyType(self._data)

    def is_filled(self, question_id: Any) -> bool:
        return not is_blank(self._data.get(str(question_id)))

    def count_filled(self) -> int:
        return sum(1 for value in self._data.values() if not is_blank(value))

    def compact(self) -> list[str]:
        """Drop blank entries and return the removed keys."""

        removed = [key for key, value in self._data.items() if is_blank(value)]
        for key in removed:
            del self._data[key]
        return removed

    def prune(self) -> int:
        """Compact the map, then return the number of filled entries."""

        self.compact()
        return self.count_filled()

    def snapshot(self) -> dict[str, AnswerValue]:
        return deepcopy(self._data)

    def clear(self) -> None:
        self._data.clear()


__all__ = ["ResponseStore"]
