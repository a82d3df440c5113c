"""Durable generation job records and read-only status lookups."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from roomgen.db.models import Generation as GenerationModel
from roomgen.infrastructure.database import session_scope
from roomgen.infrastructure.database.repositories.generation_repository import SqlGenerationRepository

from .exceptions import JobNotFoundError
from .models import Generation, GenerationStatus
from .repository import GenerationRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class JobStore:
    session_factory: async_sessionmaker[AsyncSession]
    repository_factory: Callable[[AsyncSession], GenerationRepository] = SqlGenerationRepository

    async def create(
        self,
        *,
        user_id: str,
        image_url: str,
        style: str,
        room_type: str,
        prompt: str,
        model_profile: Optional[str] = None,
    ) -> Generation:
        async with session_scope(self.session_factory) as session:
            model = await self.repository_factory(session).create_job(
                user_id=user_id,
                original_image_url=image_url,
                style=style,
                room_type=room_type,
                prompt=prompt,
                model_profile=model_profile,
            )
        return self._to_job(model)

    async def record_prediction(self, job_id: str, prediction_id: str) -> Generation:
        """Attach the provider prediction id; allowed in any status."""
        async with session_scope(self.session_factory) as session:
            model = await self.repository_factory(session).set_prediction(job_id, prediction_id)
        if model is None:
            raise JobNotFoundError()
        return self._to_job(model)

    async def update(
        self,
        job_id: str,
        status: GenerationStatus,
        *,
        result_url: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> Generation:
        """Record a terminal outcome.

        The write only applies while the job is still ``processing``; once a
        job is terminal, later updates leave it untouched and return the
        stored record, so racing writers cannot overwrite the first outcome.
        """
        status = GenerationStatus(status)
        if not status.is_terminal:
            return await self.get(job_id)
        async with session_scope(self.session_factory) as session:
            repository = self.repository_factory(session)
            model = await repository.finish_job(
                job_id,
                status=status.value,
                generated_image_url=result_url if status is GenerationStatus.COMPLETED else None,
                error_message=error_message if status is GenerationStatus.FAILED else None,
            )
            if model is None:
                model = await repository.get_job(job_id)
                if model is None:
                    raise JobNotFoundError()
                logger.debug("Job %s already %s, ignoring %s", job_id, model.status, status.value)
        return self._to_job(model)

    async def get(self, job_id: str) -> Generation:
        async with session_scope(self.session_factory) as session:
            model = await self.repository_factory(session).get_job(job_id)
        if model is None:
            raise JobNotFoundError()
        return self._to_job(model)

    async def list_for_user(self, user_id: str, limit: int = 50, offset: int = 0) -> list[Generation]:
        async with session_scope(self.session_factory) as session:
            models = await self.repository_factory(session).list_jobs(user_id, limit, offset)
        return [self._to_job(model) for model in models]

    @staticmethod
    def _to_job(model: GenerationModel) -> Generation:
        return Generation(
            id=model.id,
            user_id=model.user_id,
            original_image_url=model.original_image_url,
            generated_image_url=model.generated_image_url,
            prompt=model.prompt,
            style=model.style,
            room_type=model.room_type,
            status=GenerationStatus(model.status),
            error_message=model.error_message,
            created_at=model.created_at,
            updated_at=model.updated_at,
            prediction_id=model.prediction_id,
            model_profile=model.model_profile,
        )


@dataclass(slots=True)
class StatusReporter:
    """Side-effect free view of job state for out-of-band client polling."""

    job_store: JobStore

    async def get(self, job_id: str) -> Generation:
        return await self.job_store.get(job_id)
