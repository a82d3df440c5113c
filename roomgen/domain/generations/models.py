"""Domain representations for generation jobs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class GenerationStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not GenerationStatus.PROCESSING


@dataclass(slots=True)
class Generation:
    id: str
    user_id: str
    original_image_url: str
    generated_image_url: Optional[str]
    prompt: Optional[str]
    style: Optional[str]
    room_type: Optional[str]
    status: GenerationStatus
    error_message: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    prediction_id: Optional[str] = None
    model_profile: Optional[str] = None


@dataclass(slots=True)
class GenerationRequest:
    image_url: Optional[str]
    style: Optional[str]
    room_type: Optional[str]
    user_id: Optional[str]


@dataclass(slots=True)
class GenerationResult:
    job_id: str
    status: GenerationStatus
    generated_image_url: Optional[str] = None
    message: Optional[str] = None
