from __future__ import annotations

import asyncio
from collections.abc import Mapping

from core.errors import SubmitError
from core.schema import REQUIRED_MESSAGE
from questions.catalog import parse_catalog
from wizard.session import QuestionnaireSession
from wizard.submit import SubmitStatus, demo_finalize


def _session_on_last_step(catalog, responses=None) -> QuestionnaireSession:
    session = QuestionnaireSession(
        parse_catalog(catalog),
        responses=responses if responses is not None else {"1": "yes"},
        completion_target="risk.completed",
    )
    session.advance()
    return session


def test_submit_requires_last_step(two_step_catalog) -> None:
    session = QuestionnaireSession(parse_catalog(two_step_catalog), responses={"1": "yes"})

    outcome = asyncio.run(session.submit(demo_finalize(0)))

    assert outcome.status is SubmitStatus.REJECTED
    assert outcome.reason == "not on the last step"


def test_successful_submit_navigates_and_discards_state(two_step_catalog) -> None:
    session = _session_on_last_step(two_step_catalog)
    received: list[Mapping[str, object]] = []

    async def _finalize(responses: Mapping[str, object]) -> bool:
        received.append(responses)
        return True

    outcome = asyncio.run(session.submit(_finalize))

    assert outcome.ok is True
    assert outcome.target == "risk.completed"
    assert received == [{"1": "yes"}]
    view = session.view()
    assert view.is_finished is True
    assert view.finished_target == "risk.completed"
    assert len(session.responses) == 0
    assert session.can_submit is False


def test_submit_validates_every_step(two_step_catalog) -> None:
    session = _session_on_last_step(two_step_catalog)
    session.answer(1, "")

    outcome = asyncio.run(session.submit(demo_finalize(0)))

    assert outcome.status is SubmitStatus.INVALID
    assert outcome.errors == {"1": REQUIRED_MESSAGE}
    assert session.view().errors == {"1": REQUIRED_MESSAGE}


def test_failed_finalize_keeps_answers_and_allows_retry(two_step_catalog) -> None:
    session = _session_on_last_step(two_step_catalog)

    async def _broken(_responses: Mapping[str, object]) -> bool:
        raise RuntimeError("backend down")

    failed = asyncio.run(session.submit(_broken))

    assert failed.status is SubmitStatus.FAILED
    assert isinstance(failed.error, SubmitError)
    assert isinstance(failed.error.original, RuntimeError)
    assert session.is_submitting is False
    assert session.controller.locked is False
    assert session.responses.get("1") == "yes"
    message = session.view().form_error_message("en")
    assert message is not None and "backend down" in message

    retried = asyncio.run(session.submit(demo_finalize(0)))

    assert retried.ok is True
    assert session.view().form_error is None


def test_finalize_reporting_false_is_a_failure(two_step_catalog) -> None:
    session = _session_on_last_step(two_step_catalog)

    async def _declined(_responses: Mapping[str, object]) -> bool:
        return False

    outcome = asyncio.run(session.submit(_declined))

    assert outcome.status is SubmitStatus.FAILED
    assert session.finished_target is None


def test_second_submit_while_pending_is_rejected(two_step_catalog) -> None:
    session = _session_on_last_step(two_step_catalog)
    calls: list[int] = []

    async def _scenario():
        gate = asyncio.Event()

        async def _slow(_responses: Mapping[str, object]) -> bool:
            calls.append(1)
            await gate.wait()
            return True

        first = asyncio.create_task(session.submit(_slow))
        await asyncio.sleep(0)
        assert session.is_submitting is True
        assert session.view().can_submit is False
        assert session.back() is False
        assert session.answer(1, "changed") is False
        second = await session.submit(_slow)
        gate.set()
        return await first, second

    first, second = asyncio.run(_scenario())

    assert first.ok is True
    assert second.status is SubmitStatus.REJECTED
    assert calls == [1]


def test_submit_after_finish_is_rejected(two_step_catalog) -> None:
    session = _session_on_last_step(two_step_catalog)
    asyncio.run(session.submit(demo_finalize(0)))

    outcome = asyncio.run(session.submit(demo_finalize(0)))

    assert outcome.status is SubmitStatus.REJECTED
