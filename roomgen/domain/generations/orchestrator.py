"""Generation use case: reserve a credit, dispatch, poll, reconcile."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from roomgen.domain.credits import CreditLedger, InsufficientCreditError, UserNotFoundError
from roomgen.domain.prompts import build_prompt
from roomgen.inference import (
    DispatchFailedError,
    InferenceClient,
    InferenceOutcome,
    OutcomeKind,
    PollingCoordinator,
    StyleParams,
)

from .exceptions import (
    GenerationFailedError,
    InvalidRequestError,
    OutOfCreditsError,
    UnknownUserError,
)
from .models import Generation, GenerationRequest, GenerationResult, GenerationStatus
from .service import JobStore

logger = logging.getLogger(__name__)

DEMO_MESSAGE = "Demo mode - showing original image"


@dataclass(slots=True)
class GenerationOrchestrator:
    """Runs one generate request from validation to a reconciled job record.

    Credit handling follows a create-reserve-act-compensate order: the job
    row exists before the debit, and the debit is refunded only when the
    provider refused the dispatch. A prediction that was accepted and then
    failed keeps its debit.
    """

    ledger: CreditLedger
    job_store: JobStore
    style_params: StyleParams
    inference_client: Optional[InferenceClient] = None
    poller: Optional[PollingCoordinator] = None
    prompt_builder: Callable[[str, str], str] = build_prompt
    profile_name: Optional[str] = None
    _inflight: set[asyncio.Task] = field(default_factory=set, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.inference_client is not None and self.poller is None:
            self.poller = PollingCoordinator(self.inference_client)

    @property
    def demo_mode(self) -> bool:
        return self.inference_client is None

    async def run(self, request: GenerationRequest) -> GenerationResult:
        """Like :meth:`generate`, but keeps going if the caller is cancelled.

        A dispatched prediction cannot be cheaply cancelled, so the
        orchestration runs to completion even when the client disconnects.
        """
        task = asyncio.ensure_future(self.generate(request))
        self._inflight.add(task)
        task.add_done_callback(self._forget)
        return await asyncio.shield(task)

    async def drain(self) -> None:
        """Wait for orchestrations that outlived their callers."""
        if self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    def _forget(self, task: asyncio.Task) -> None:
        self._inflight.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.debug("Generation task ended with %r", task.exception())

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        self._validate(request)
        user_id = request.user_id

        try:
            balance = await self.ledger.get_balance(user_id)
        except UserNotFoundError as exc:
            raise UnknownUserError() from exc
        if balance <= 0:
            raise OutOfCreditsError()

        prompt = self.prompt_builder(request.style, request.room_type)
        job = await self.job_store.create(
            user_id=user_id,
            image_url=request.image_url,
            style=request.style,
            room_type=request.room_type,
            prompt=prompt,
            model_profile=None if self.demo_mode else self.profile_name,
        )
        try:
            await self.ledger.debit(user_id, job_id=job.id)
        except (InsufficientCreditError, UserNotFoundError) as exc:
            # balance moved between the check and the debit; nothing was spent
            logger.warning("Debit for job %s rejected: %r", job.id, exc)
            await self.job_store.update(job.id, GenerationStatus.FAILED, error_message="insufficient credit")
            raise OutOfCreditsError() from exc

        if self.inference_client is None:
            logger.warning("Inference API token not configured, returning demo response for job %s", job.id)
            await self.job_store.update(job.id, GenerationStatus.COMPLETED, result_url=request.image_url)
            return GenerationResult(
                job_id=job.id,
                status=GenerationStatus.COMPLETED,
                generated_image_url=request.image_url,
                message=DEMO_MESSAGE,
            )

        try:
            submission = await self.inference_client.submit(request.image_url, prompt, self.style_params)
        except DispatchFailedError as exc:
            logger.error("Dispatch for job %s failed, refunding: %s", job.id, exc)
            await self.job_store.update(job.id, GenerationStatus.FAILED, error_message=str(exc))
            await self.ledger.credit(user_id, 1, job_id=job.id, description="Refund for failed dispatch")
            raise GenerationFailedError() from exc

        if submission.prediction_id:
            await self.job_store.record_prediction(job.id, submission.prediction_id)
        if submission.is_finished:
            logger.info("Prediction %s for job %s finished on submit", submission.prediction_id, job.id)
            outcome = submission.immediate
        else:
            outcome = await self.poller.wait(submission)
        return await self._reconcile(job, outcome)

    async def _reconcile(self, job: Generation, outcome: InferenceOutcome) -> GenerationResult:
        if outcome.kind is OutcomeKind.SUCCEEDED:
            stored = await self.job_store.update(job.id, GenerationStatus.COMPLETED, result_url=outcome.output_url)
            logger.info("Job %s completed", job.id)
            return GenerationResult(
                job_id=job.id,
                status=stored.status,
                generated_image_url=stored.generated_image_url,
            )
        if outcome.kind is OutcomeKind.FAILED:
            # the prediction ran, so the credit stays spent
            logger.error("Prediction for job %s failed: %s", job.id, outcome.reason)
            await self.job_store.update(job.id, GenerationStatus.FAILED, error_message=outcome.reason)
            raise GenerationFailedError()
        logger.info("Job %s still processing after polling deadline", job.id)
        return GenerationResult(job_id=job.id, status=GenerationStatus.PROCESSING)

    @staticmethod
    def _validate(request: GenerationRequest) -> None:
        missing = [
            name
            for name, value in (
                ("imageUrl", request.image_url),
                ("style", request.style),
                ("roomType", request.room_type),
                ("userId", request.user_id),
            )
            if not value
        ]
        if missing:
            raise InvalidRequestError(f"Missing required fields: {', '.join(missing)}")
