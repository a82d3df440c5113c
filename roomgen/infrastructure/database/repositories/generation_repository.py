"""SQLAlchemy implementation for GenerationRepository"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import desc, select, update
from sqlalchemy.sql import func

from roomgen.db.models import Generation
from roomgen.domain.common import AsyncRepository

PROCESSING = "processing"


class SqlGenerationRepository(AsyncRepository[Generation]):
    model = Generation

    async def create_job(
        self,
        *,
        user_id: str,
        original_image_url: str,
        style: str,
        room_type: str,
        prompt: str,
        model_profile: str | None = None,
    ) -> Generation:
        job = Generation(
            user_id=user_id,
            original_image_url=original_image_url,
            style=style,
            room_type=room_type,
            prompt=prompt,
            model_profile=model_profile,
            status=PROCESSING,
        )
        return await self.add(job)

    async def get_job(self, job_id: str) -> Generation | None:
        return await self.get(job_id)

    async def list_jobs(self, user_id: str, limit: int, offset: int) -> Sequence[Generation]:
        stmt = (
            select(Generation)
            .where(Generation.user_id == user_id)
            .order_by(desc(Generation.created_at))
            .offset(offset)
            .limit(limit)
        )
        return await self.all(stmt)

    async def set_prediction(self, job_id: str, prediction_id: str) -> Generation | None:
        stmt = (
            update(Generation)
            .where(Generation.id == job_id)
            .values(prediction_id=prediction_id, updated_at=func.now())
            .execution_options(synchronize_session="fetch")
            .returning(Generation)
        )
        return await self.first(stmt)

    async def finish_job(
        self,
        job_id: str,
        *,
        status: str,
        generated_image_url: str | None,
        error_message: str | None,
    ) -> Generation | None:
        """Move a ``processing`` job to a terminal state; ``None`` if nothing matched."""
        stmt = (
            update(Generation)
            .where(Generation.id == job_id, Generation.status == PROCESSING)
            .values(
                status=status,
                generated_image_url=generated_image_url,
                error_message=error_message,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session="fetch")
            .returning(Generation)
        )
        return await self.first(stmt)
