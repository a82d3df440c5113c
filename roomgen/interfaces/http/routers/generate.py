"""Generate endpoint and job status lookups."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from roomgen.domain.generations import (
    Generation,
    GenerationError,
    GenerationOrchestrator,
    GenerationRequest,
    JobNotFoundError,
    JobStore,
    StatusReporter,
)
from roomgen.infrastructure.database import StoreUnavailableError
from roomgen.interfaces.http.deps import get_job_store, get_orchestrator, get_status_reporter
from roomgen.interfaces.http.errors import http_error, internal_error
from roomgen.schemas import (
    GenerateRequest,
    GenerateResponse,
    GenerationListResponse,
    GenerationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/generate",
    response_model=GenerateResponse,
    response_model_exclude_none=True,
    summary="Restyle a room photo for one credit",
)
async def generate(
    payload: GenerateRequest,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> GenerateResponse:
    request = GenerationRequest(
        image_url=payload.image_url,
        style=payload.style,
        room_type=payload.room_type,
        user_id=payload.user_id,
    )
    try:
        result = await orchestrator.run(request)
    except GenerationError as exc:
        raise http_error(exc) from exc
    except StoreUnavailableError as exc:
        logger.error("Generation API error: %s", exc)
        raise internal_error() from exc
    return GenerateResponse(
        id=result.job_id,
        status=result.status.value,
        generated_image_url=result.generated_image_url,
        message=result.message,
    )


@router.get(
    "/generate",
    response_model=GenerationResponse,
    summary="Check generation status by query parameter",
)
async def generation_status(
    id: Optional[str] = Query(default=None),
    reporter: StatusReporter = Depends(get_status_reporter),
) -> GenerationResponse:
    if not id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "InvalidRequest", "message": "Generation ID required"},
        )
    return await _lookup(id, reporter)


@router.get(
    "/generations/{job_id}",
    response_model=GenerationResponse,
    summary="Get a generation job",
)
async def get_generation(
    job_id: str,
    reporter: StatusReporter = Depends(get_status_reporter),
) -> GenerationResponse:
    return await _lookup(job_id, reporter)


@router.get(
    "/generations",
    response_model=GenerationListResponse,
    summary="List a user's generations, newest first",
)
async def list_generations(
    user_id: str = Query(..., min_length=1),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    job_store: JobStore = Depends(get_job_store),
) -> GenerationListResponse:
    try:
        jobs = await job_store.list_for_user(user_id, limit, offset)
    except StoreUnavailableError as exc:
        raise internal_error() from exc
    return GenerationListResponse(
        total=len(jobs),
        generations=[_to_generation_response(job) for job in jobs],
    )


async def _lookup(job_id: str, reporter: StatusReporter) -> GenerationResponse:
    try:
        job = await reporter.get(job_id)
    except JobNotFoundError as exc:
        raise http_error(exc) from exc
    except StoreUnavailableError as exc:
        raise internal_error() from exc
    return _to_generation_response(job)


def _to_generation_response(job: Generation) -> GenerationResponse:
    return GenerationResponse(
        id=job.id,
        user_id=job.user_id,
        original_image_url=job.original_image_url,
        generated_image_url=job.generated_image_url,
        prompt=job.prompt,
        style=job.style,
        room_type=job.room_type,
        status=job.status.value,
        error_message=job.error_message,
        prediction_id=job.prediction_id,
        model_profile=job.model_profile,
        created_at=job.created_at,
        updated_at=job.updated_at,
    )
