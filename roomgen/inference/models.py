"""Value objects exchanged with the inference provider."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class StyleParams:
    """Provider tuning knobs derived from configuration, never from user input."""

    model_version: str
    guidance_scale: float
    prompt_strength: float
    num_inference_steps: int
    negative_prompt: str
    scheduler: str = "K_EULER"
    num_outputs: int = 1

    def to_input(self, image_url: str, prompt: str) -> dict[str, Any]:
        payload = asdict(self)
        payload.pop("model_version")
        payload.update(image=image_url, prompt=prompt)
        return payload


class OutcomeKind(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True, slots=True)
class InferenceOutcome:
    kind: OutcomeKind
    output_url: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def pending(cls) -> "InferenceOutcome":
        return cls(OutcomeKind.PENDING)

    @classmethod
    def succeeded(cls, output_url: str) -> "InferenceOutcome":
        return cls(OutcomeKind.SUCCEEDED, output_url=output_url)

    @classmethod
    def failed(cls, reason: str) -> "InferenceOutcome":
        return cls(OutcomeKind.FAILED, reason=reason)

    @classmethod
    def timed_out(cls) -> "InferenceOutcome":
        return cls(OutcomeKind.TIMED_OUT)

    @property
    def is_terminal(self) -> bool:
        return self.kind in (OutcomeKind.SUCCEEDED, OutcomeKind.FAILED)


@dataclass(frozen=True, slots=True)
class SubmittedRequest:
    """Handle for one dispatched prediction, valid for a single orchestration.

    ``immediate`` is set when the provider finished the prediction inside the
    submit call, in which case there is nothing to poll.
    """

    prediction_id: Optional[str]
    poll_url: Optional[str]
    immediate: Optional[InferenceOutcome] = None

    @property
    def is_finished(self) -> bool:
        return self.immediate is not None
