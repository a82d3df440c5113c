"""Fixed-cadence polling of a dispatched prediction."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from .client import InferenceClient
from .exceptions import PollFailedError
from .models import InferenceOutcome, SubmittedRequest

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PollingCoordinator:
    """Polls until the prediction succeeds, fails or the deadline passes.

    A failed or unanswered status check counts as ``pending``; the deadline
    is the only limit on consecutive failures. Each check is bounded by the
    time left before the deadline, so a hung provider cannot stretch the
    wait. Nothing is locked while waiting.
    """

    client: InferenceClient
    interval: float = 0.5
    deadline: float = 60.0
    clock: Callable[[], float] = time.monotonic
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    async def wait(
        self,
        request: SubmittedRequest,
        *,
        interval: Optional[float] = None,
        deadline: Optional[float] = None,
    ) -> InferenceOutcome:
        interval = self.interval if interval is None else interval
        deadline = self.deadline if deadline is None else deadline
        if interval <= 0:
            raise ValueError("interval must be positive")

        started = self.clock()
        attempt = 0
        while True:
            attempt += 1
            tick = self.clock()
            # the last check still gets one interval to answer
            budget = max(deadline - (tick - started), interval)
            try:
                outcome = await asyncio.wait_for(self.client.poll_once(request), timeout=budget)
            except PollFailedError as exc:
                logger.warning(
                    "Status check %d for prediction %s failed: %s",
                    attempt,
                    request.prediction_id,
                    exc,
                )
                outcome = InferenceOutcome.pending()
            except asyncio.TimeoutError:
                logger.warning(
                    "Status check %d for prediction %s got no answer within %.1fs",
                    attempt,
                    request.prediction_id,
                    budget,
                )
                outcome = InferenceOutcome.pending()

            if outcome.is_terminal:
                logger.info(
                    "Prediction %s %s after %d status check(s)",
                    request.prediction_id,
                    outcome.kind.value,
                    attempt,
                )
                return outcome

            elapsed = self.clock() - started
            next_tick = tick + interval
            if elapsed >= deadline or next_tick - started > deadline:
                logger.warning(
                    "Prediction %s still pending after %.1fs, giving up",
                    request.prediction_id,
                    elapsed,
                )
                return InferenceOutcome.timed_out()
            await self.sleep(max(0.0, next_tick - self.clock()))
