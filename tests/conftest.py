"""Shared pytest fixtures for roomgen tests."""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator, Callable, Optional

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from roomgen.core.config import DatabaseSettings, InferenceSettings, PollingSettings, Settings
from roomgen.domain.credits import CreditLedger
from roomgen.domain.generations import GenerationOrchestrator, JobStore, StatusReporter
from roomgen.inference import (
    InferenceOutcome,
    PollingCoordinator,
    StyleParams,
    SubmittedRequest,
)
from roomgen.infrastructure.database import build_engine, build_session_factory, init_db

POLL_URL = "https://api.replicate.test/v1/predictions/pred-1"


class FakeInferenceClient:
    """Scripted stand-in for the provider client.

    ``poll_results`` is consumed one entry per status check; an exception
    entry is raised instead of returned. Once exhausted every check is pending.
    """

    def __init__(
        self,
        *,
        submission: Optional[SubmittedRequest] = None,
        submit_error: Optional[Exception] = None,
        poll_results=(),
    ) -> None:
        self.submission = submission or SubmittedRequest("pred-1", POLL_URL)
        self.submit_error = submit_error
        self.poll_results = list(poll_results)
        self.submitted: list[tuple[str, str, StyleParams]] = []
        self.poll_calls = 0

    async def submit(self, image_url: str, prompt: str, params: StyleParams) -> SubmittedRequest:
        self.submitted.append((image_url, prompt, params))
        if self.submit_error is not None:
            raise self.submit_error
        return self.submission

    async def poll_once(self, request: SubmittedRequest) -> InferenceOutcome:
        self.poll_calls += 1
        result = self.poll_results.pop(0) if self.poll_results else InferenceOutcome.pending()
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Test settings: throwaway sqlite file, demo mode, fast polling."""
    return Settings(
        _env_file=None,
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'roomgen.db'}"),
        inference=InferenceSettings(),
        polling=PollingSettings(interval=0.01, deadline=0.2),
    )


@pytest.fixture
async def session_factory(settings: Settings) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = build_engine(settings.database)
    await init_db(engine)
    try:
        yield build_session_factory(engine)
    finally:
        await engine.dispose()


@pytest.fixture
def ledger(session_factory) -> CreditLedger:
    return CreditLedger(session_factory)


@pytest.fixture
def job_store(session_factory) -> JobStore:
    return JobStore(session_factory)


@pytest.fixture
def status_reporter(job_store: JobStore) -> StatusReporter:
    return StatusReporter(job_store)


@pytest.fixture
def style_params(settings: Settings) -> StyleParams:
    return StyleParams(**settings.inference.resolve_profile().model_dump())


@pytest.fixture
def make_orchestrator(
    settings: Settings,
    ledger: CreditLedger,
    job_store: JobStore,
    style_params: StyleParams,
) -> Callable[..., GenerationOrchestrator]:
    """Build an orchestrator around a fake client (``None`` for demo mode)."""

    def factory(client: Optional[FakeInferenceClient] = None, deadline: float = 0.2) -> GenerationOrchestrator:
        poller = PollingCoordinator(client, interval=0.01, deadline=deadline) if client else None
        return GenerationOrchestrator(
            ledger=ledger,
            job_store=job_store,
            style_params=style_params,
            inference_client=client,
            poller=poller,
            profile_name=settings.inference.active_profile,
        )

    return factory
