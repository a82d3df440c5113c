"""Tests for roomgen.inference.polling: cadence, transient failures and deadline."""

from __future__ import annotations

import asyncio
import time

import pytest

from conftest import FakeInferenceClient, POLL_URL
from roomgen.inference import InferenceOutcome, OutcomeKind, PollFailedError, PollingCoordinator, SubmittedRequest

REQUEST = SubmittedRequest("pred-1", POLL_URL)


class ManualClock:
    """Virtual time: ``sleep`` advances the clock instead of waiting."""

    def __init__(self) -> None:
        self.now = 100.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def make_poller(client, clock: ManualClock, interval: float = 1.0, deadline: float = 10.0) -> PollingCoordinator:
    return PollingCoordinator(client, interval=interval, deadline=deadline, clock=clock, sleep=clock.sleep)


class TestPollingCoordinator:
    async def test_returns_success_once_observed(self):
        clock = ManualClock()
        client = FakeInferenceClient(
            poll_results=[
                InferenceOutcome.pending(),
                InferenceOutcome.pending(),
                InferenceOutcome.succeeded("https://out.test/1.png"),
            ]
        )
        outcome = await make_poller(client, clock).wait(REQUEST)

        assert outcome.kind is OutcomeKind.SUCCEEDED
        assert outcome.output_url == "https://out.test/1.png"
        assert client.poll_calls == 3
        assert clock.sleeps == [1.0, 1.0]

    async def test_returns_failure_with_reason(self):
        clock = ManualClock()
        client = FakeInferenceClient(poll_results=[InferenceOutcome.failed("CUDA out of memory")])
        outcome = await make_poller(client, clock).wait(REQUEST)
        assert outcome.kind is OutcomeKind.FAILED
        assert outcome.reason == "CUDA out of memory"

    async def test_transient_poll_errors_are_retried(self):
        clock = ManualClock()
        client = FakeInferenceClient(
            poll_results=[
                PollFailedError("502"),
                PollFailedError("timeout"),
                InferenceOutcome.succeeded("https://out.test/2.png"),
            ]
        )
        outcome = await make_poller(client, clock).wait(REQUEST)
        assert outcome.kind is OutcomeKind.SUCCEEDED
        assert client.poll_calls == 3

    async def test_times_out_at_deadline(self):
        clock = ManualClock()
        client = FakeInferenceClient()
        outcome = await make_poller(client, clock, interval=1.0, deadline=5.0).wait(REQUEST)

        assert outcome.kind is OutcomeKind.TIMED_OUT
        # checks at t=0..5, never past the deadline
        assert client.poll_calls == 6
        assert clock.now - 100.0 <= 5.0

    async def test_persistent_poll_errors_end_in_timeout(self):
        clock = ManualClock()
        client = FakeInferenceClient(poll_results=[PollFailedError("down")] * 50)
        outcome = await make_poller(client, clock, interval=2.0, deadline=6.0).wait(REQUEST)
        assert outcome.kind is OutcomeKind.TIMED_OUT
        assert client.poll_calls == 4

    async def test_slow_status_call_shortens_the_sleep(self):
        clock = ManualClock()

        class SlowClient(FakeInferenceClient):
            async def poll_once(self, request):
                clock.now += 0.25
                return await super().poll_once(request)

        client = SlowClient(poll_results=[InferenceOutcome.pending(), InferenceOutcome.succeeded("u")])
        await make_poller(client, clock).wait(REQUEST)
        assert clock.sleeps == [0.75]

    async def test_no_new_check_once_a_slow_call_passes_the_deadline(self):
        clock = ManualClock()

        class SlowClient(FakeInferenceClient):
            async def poll_once(self, request):
                clock.now += 7.0
                return await super().poll_once(request)

        client = SlowClient()
        outcome = await make_poller(client, clock, interval=1.0, deadline=5.0).wait(REQUEST)

        assert outcome.kind is OutcomeKind.TIMED_OUT
        assert client.poll_calls == 1
        assert clock.sleeps == []

    async def test_hung_status_call_is_cut_off_at_deadline(self):
        class HangingClient(FakeInferenceClient):
            async def poll_once(self, request):
                await super().poll_once(request)
                await asyncio.sleep(2.0)
                return InferenceOutcome.pending()

        client = HangingClient()
        poller = PollingCoordinator(client, interval=0.05, deadline=0.3)

        started = time.monotonic()
        outcome = await poller.wait(REQUEST)
        elapsed = time.monotonic() - started

        assert outcome.kind is OutcomeKind.TIMED_OUT
        assert elapsed < 0.6
        assert client.poll_calls == 1

    async def test_per_call_overrides(self):
        clock = ManualClock()
        client = FakeInferenceClient()
        outcome = await make_poller(client, clock).wait(REQUEST, interval=0.5, deadline=1.0)
        assert outcome.kind is OutcomeKind.TIMED_OUT
        assert client.poll_calls == 3

    async def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            await make_poller(FakeInferenceClient(), ManualClock()).wait(REQUEST, interval=0)
