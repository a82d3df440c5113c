"""Protocol for generation job persistence"""

from __future__ import annotations

from typing import Protocol, Sequence

from roomgen.db.models import Generation as GenerationModel


class GenerationRepository(Protocol):
    async def create_job(
        self,
        *,
        user_id: str,
        original_image_url: str,
        style: str,
        room_type: str,
        prompt: str,
        model_profile: str | None = None,
    ) -> GenerationModel:
        ...

    async def get_job(self, job_id: str) -> GenerationModel | None:
        ...

    async def list_jobs(self, user_id: str, limit: int, offset: int) -> Sequence[GenerationModel]:
        ...

    async def set_prediction(self, job_id: str, prediction_id: str) -> GenerationModel | None:
        ...

    async def finish_job(
        self,
        job_id: str,
        *,
        status: str,
        generated_image_url: str | None,
        error_message: str | None,
    ) -> GenerationModel | None:
        ...
