"""External inference provider access and polling."""

from .client import InferenceClient, ReplicateClient
from .exceptions import DispatchFailedError, InferenceError, PollFailedError
from .models import InferenceOutcome, OutcomeKind, StyleParams, SubmittedRequest
from .polling import PollingCoordinator

__all__ = [
    "DispatchFailedError",
    "InferenceClient",
    "InferenceError",
    "InferenceOutcome",
    "OutcomeKind",
    "PollFailedError",
    "PollingCoordinator",
    "ReplicateClient",
    "StyleParams",
    "SubmittedRequest",
]
