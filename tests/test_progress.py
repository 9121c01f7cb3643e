from __future__ import annotations

from questions.catalog import parse_catalog
from questions.grouping import group_by_category
from state.responses import ResponseStore
from wizard.progress import completion_ratio, compute_progress, step_progress, steps_progress


def _questions():
    return parse_catalog(
        [
            {"id": 1, "category": "network", "responseType": "text", "required": True},
            {
                "id": 2,
                "category": "network",
                "responseType": None,
                "required": False,
                "subQuestions": [{"id": 3, "responseType": "multiselect", "required": True}],
            },
            {"id": 4, "category": "infra", "responseType": "text", "required": False},
        ]
    )


def test_ratio_is_zero_without_required_fields() -> None:
    questions = parse_catalog([{"id": 1, "category": "c", "responseType": "text", "required": False}])

    snapshot = compute_progress(questions, ResponseStore({"1": "x"}))

    assert snapshot.total_required == 0
    assert snapshot.ratio == 0.0


def test_all_required_filled_gives_full_ratio() -> None:
    snapshot = compute_progress(_questions(), ResponseStore({"1": "yes", "3": ["A"]}))

    assert snapshot.filled == snapshot.total_required == 2
    assert snapshot.ratio == 1.0


def test_progress_prunes_blank_entries() -> None:
    store = ResponseStore({"1": "yes", "3": []})

    snapshot = compute_progress(_questions(), store)

    assert snapshot.ratio == 0.5
    assert "3" not in store


def test_progress_can_run_read_only() -> None:
    store = ResponseStore({"1": "yes", "3": []})

    compute_progress(_questions(), store, compact=False)

    assert "3" in store


def test_optional_answers_never_push_ratio_above_one() -> None:
    store = ResponseStore({"1": "yes", "3": ["A"], "4": "extra"})

    assert compute_progress(_questions(), store).ratio == 1.0
    assert completion_ratio(5, 2) == 1.0


def test_required_informational_nodes_count_towards_total() -> None:
    questions = parse_catalog([{"id": "h", "category": "c", "responseType": None, "required": True}])

    assert compute_progress(questions, ResponseStore()).total_required == 1


def test_step_progress() -> None:
    network, infra = group_by_category(_questions())
    store = ResponseStore({"1": "yes"})

    assert step_progress(network, store) == 0.5
    assert step_progress(infra, store) == 0.0
    assert step_progress(infra, store, completed=True) == 1.0
    assert steps_progress([network, infra], store, completed={1}) == [0.5, 1.0]
