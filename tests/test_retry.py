"""
Tests for the backoff retry executor.
"""

import httpx
import pytest

from balance_game.retry import BackoffRetryExecutor


class SleepRecorder:
    """Replacement for asyncio.sleep that records the requested waits."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class ScriptedAction:
    """Action returning (or raising) one scripted outcome per call."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    async def __call__(self) -> httpx.Response:
        outcome = self.outcomes[self.calls]
        self.calls += 1
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(outcome)


@pytest.fixture
def sleep():
    return SleepRecorder()


def make_executor(sleep, max_attempts=3, rng=lambda: 0.0):
    return BackoffRetryExecutor(
        max_attempts=max_attempts,
        base_delay=1.0,
        max_jitter=1.0,
        sleep=sleep,
        rng=rng,
    )


async def test_success_on_first_attempt(sleep):
    action = ScriptedAction(200)

    response = await make_executor(sleep).call(action)

    assert response.status_code == 200
    assert action.calls == 1
    assert sleep.delays == []


async def test_recovers_after_transient_statuses(sleep):
    """Two 503s followed by a 200 succeed on the third attempt."""
    action = ScriptedAction(503, 429, 200)

    response = await make_executor(sleep).call(action)

    assert response.status_code == 200
    assert action.calls == 3
    assert sleep.delays == [1.0, 2.0]


async def test_exhaustion_returns_none(sleep):
    action = ScriptedAction(503, 503, 503)

    response = await make_executor(sleep).call(action)

    assert response is None
    assert action.calls == 3
    # No wait after the final attempt
    assert len(sleep.delays) == 2


async def test_waits_are_non_decreasing(sleep):
    action = ScriptedAction(*([503] * 5))

    await make_executor(sleep, max_attempts=5, rng=lambda: 0.999).call(action)

    assert len(sleep.delays) == 4
    assert all(a <= b for a, b in zip(sleep.delays, sleep.delays[1:]))


async def test_non_transient_status_returned_without_retry(sleep):
    action = ScriptedAction(400, 200)

    response = await make_executor(sleep).call(action)

    assert response.status_code == 400
    assert action.calls == 1
    assert sleep.delays == []


async def test_network_errors_are_retried(sleep):
    action = ScriptedAction(httpx.ConnectError("connection refused"), 200)

    response = await make_executor(sleep).call(action)

    assert response.status_code == 200
    assert action.calls == 2


async def test_other_exceptions_propagate(sleep):
    action = ScriptedAction(RuntimeError("boom"), 200)

    with pytest.raises(RuntimeError):
        await make_executor(sleep).call(action)
    assert action.calls == 1


def test_backoff_delay_includes_jitter():
    executor = BackoffRetryExecutor(max_attempts=3, base_delay=1.0, max_jitter=1.0, rng=lambda: 0.5)

    assert executor.backoff_delay(0) == pytest.approx(1.5)
    assert executor.backoff_delay(2) == pytest.approx(4.5)


def test_rejects_zero_attempts():
    with pytest.raises(ValueError):
        BackoffRetryExecutor(max_attempts=0)
