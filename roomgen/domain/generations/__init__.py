"""Generation job domain exports"""

from .exceptions import (
    GenerationError,
    GenerationFailedError,
    InvalidRequestError,
    JobNotFoundError,
    OutOfCreditsError,
    UnknownUserError,
)
from .models import Generation, GenerationRequest, GenerationResult, GenerationStatus
from .orchestrator import GenerationOrchestrator
from .service import JobStore, StatusReporter

__all__ = [
    "Generation",
    "GenerationError",
    "GenerationFailedError",
    "GenerationOrchestrator",
    "GenerationRequest",
    "GenerationResult",
    "GenerationStatus",
    "InvalidRequestError",
    "JobNotFoundError",
    "JobStore",
    "OutOfCreditsError",
    "StatusReporter",
    "UnknownUserError",
]
