"""Dependency container wiring the core services once at process start."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from roomgen.core.config import Settings, get_settings
from roomgen.domain.credits import CreditLedger
from roomgen.domain.generations import GenerationOrchestrator, JobStore, StatusReporter
from roomgen.inference import PollingCoordinator, ReplicateClient, StyleParams
from roomgen.infrastructure.database import build_engine, build_session_factory, init_db

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    ledger: CreditLedger
    job_store: JobStore
    status_reporter: StatusReporter
    orchestrator: GenerationOrchestrator
    inference_client: Optional[ReplicateClient] = None

    async def init_infrastructure(self) -> None:
        """Create tables when the environment allows it (migrations preferred)."""
        if self.settings.database.create_tables:
            await init_db(self.engine)

    async def aclose(self) -> None:
        await self.orchestrator.drain()
        if self.inference_client is not None:
            await self.inference_client.aclose()
        await self.engine.dispose()


def build_container(
    settings: Optional[Settings] = None,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
) -> ApplicationContainer:
    """Validate configuration and construct every collaborator exactly once.

    Raises ``ConfigurationError`` when required settings are missing.
    """
    settings = settings or get_settings()
    settings.validate_required()
    profile = settings.inference.resolve_profile()

    engine = build_engine(settings.database, debug=settings.debug)
    session_factory = build_session_factory(engine)
    ledger = CreditLedger(session_factory)
    job_store = JobStore(session_factory)

    inference_client: Optional[ReplicateClient] = None
    poller: Optional[PollingCoordinator] = None
    if settings.inference.demo_mode:
        logger.warning("INFERENCE__API_TOKEN not configured, generations run in demo mode")
    else:
        inference_client = ReplicateClient(
            settings.inference.api_token.get_secret_value(),
            base_url=settings.inference.base_url,
            timeout=settings.inference.request_timeout,
            prefer_wait=settings.inference.prefer_wait,
            http_client=http_client,
        )
        poller = PollingCoordinator(
            inference_client,
            interval=settings.polling.interval,
            deadline=settings.polling.deadline,
        )
        logger.info("Using inference profile %s", settings.inference.active_profile)

    orchestrator = GenerationOrchestrator(
        ledger=ledger,
        job_store=job_store,
        style_params=StyleParams(**profile.model_dump()),
        inference_client=inference_client,
        poller=poller,
        profile_name=settings.inference.active_profile,
    )
    return ApplicationContainer(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        ledger=ledger,
        job_store=job_store,
        status_reporter=StatusReporter(job_store),
        orchestrator=orchestrator,
        inference_client=inference_client,
    )


__all__ = ["ApplicationContainer", "build_container"]
