"""Utilities for identifying unanswered questions in a response map."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def is_blank(value: Any) -> bool:
    """Return ``True`` when ``value`` should be treated as missing.

    Absence, the empty string and an empty collection are equivalent; a
    whitespace-only string counts as an answer, matching what the widgets
    submit verbatim.
    """

    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def is_value_present(value: Any) -> bool:
    return not is_blank(value)


def missing_fields(responses: Mapping[str, Any], ids: Iterable[str]) -> list[str]:
    """Return the subset of ``ids`` that are blank or absent in ``responses``."""

    return [question_id for question_id in ids if is_blank(responses.get(question_id))]


__all__ = ["is_blank", "is_value_present", "missing_fields"]
