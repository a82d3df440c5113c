"""Inference provider errors."""

from __future__ import annotations


class InferenceError(Exception):
    """Base class for provider communication failures."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DispatchFailedError(InferenceError):
    """Submitting a prediction failed: network error, non-2xx or malformed payload."""


class PollFailedError(InferenceError):
    """A single status check failed; callers may retry on the next tick."""
