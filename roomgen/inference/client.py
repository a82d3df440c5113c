"""Replicate predictions API client."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import httpx

from .exceptions import DispatchFailedError, PollFailedError
from .models import InferenceOutcome, StyleParams, SubmittedRequest

logger = logging.getLogger(__name__)

PENDING_STATUSES = frozenset({"starting", "processing", "queued"})
FAILED_STATUSES = frozenset({"failed", "canceled"})


class InferenceClient(Protocol):
    async def submit(self, image_url: str, prompt: str, params: StyleParams) -> SubmittedRequest:
        ...

    async def poll_once(self, request: SubmittedRequest) -> InferenceOutcome:
        ...


class ReplicateClient:
    """Thin async wrapper over ``POST /predictions`` and the prediction ``get`` URL.

    No retries happen here: a dispatch failure is terminal for the job, and
    poll retries are paced by :class:`PollingCoordinator`.
    """

    def __init__(
        self,
        api_token: str,
        *,
        base_url: str = "https://api.replicate.com/v1",
        timeout: float = 60.0,
        prefer_wait: bool = True,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not api_token:
            raise ValueError("api_token is required")
        self.prefer_wait = prefer_wait
        self._headers = {
            "Authorization": f"Bearer {api_token}",
            "Content-Type": "application/json",
        }
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def submit(self, image_url: str, prompt: str, params: StyleParams) -> SubmittedRequest:
        headers = dict(self._headers)
        if self.prefer_wait:
            headers["Prefer"] = "wait"
        body = {
            "version": params.model_version,
            "input": params.to_input(image_url, prompt),
        }
        try:
            response = await self._client.post("/predictions", json=body, headers=headers)
        except httpx.HTTPError as exc:
            raise DispatchFailedError(f"Replicate request failed: {exc}") from exc

        if response.is_error:
            detail = _error_detail(response)
            logger.error("Replicate API error %s: %s", response.status_code, detail)
            raise DispatchFailedError(
                f"Replicate API error: {detail}",
                status_code=response.status_code,
            )

        data = _json_object(response)
        if data is None:
            raise DispatchFailedError("Replicate returned a malformed prediction payload")
        return parse_submission(data)

    async def poll_once(self, request: SubmittedRequest) -> InferenceOutcome:
        if request.immediate is not None:
            return request.immediate
        if not request.poll_url:
            raise PollFailedError("prediction has no status URL")
        try:
            response = await self._client.get(request.poll_url, headers=self._headers)
        except httpx.HTTPError as exc:
            raise PollFailedError(f"status request failed: {exc}") from exc
        if response.is_error:
            raise PollFailedError(
                f"Failed to fetch prediction status: {_error_detail(response)}",
                status_code=response.status_code,
            )
        data = _json_object(response)
        if data is None:
            raise PollFailedError("malformed prediction status payload")
        return parse_status(data)


def parse_submission(data: dict[str, Any]) -> SubmittedRequest:
    """Interpret a create-prediction response.

    Either the prediction already finished (``Prefer: wait`` fast path) or it
    is still running and carries a ``urls.get`` status address.
    """
    status = data.get("status")
    output = first_output(data.get("output"))
    urls = data.get("urls") if isinstance(data.get("urls"), dict) else {}
    poll_url = urls.get("get")
    prediction_id = data.get("id")

    if status == "succeeded" and output:
        return SubmittedRequest(prediction_id, poll_url, InferenceOutcome.succeeded(output))
    if status in FAILED_STATUSES:
        reason = str(data.get("error") or f"prediction {status}")
        return SubmittedRequest(prediction_id, poll_url, InferenceOutcome.failed(reason))
    if poll_url:
        return SubmittedRequest(prediction_id, poll_url)
    if output:
        return SubmittedRequest(prediction_id, None, InferenceOutcome.succeeded(output))
    raise DispatchFailedError("No prediction URL returned")


def parse_status(data: dict[str, Any]) -> InferenceOutcome:
    status = data.get("status")
    if status in PENDING_STATUSES:
        return InferenceOutcome.pending()
    if status == "succeeded":
        output = first_output(data.get("output"))
        if output:
            return InferenceOutcome.succeeded(output)
        return InferenceOutcome.failed("prediction succeeded without output")
    if status in FAILED_STATUSES:
        return InferenceOutcome.failed(str(data.get("error") or "Prediction failed"))
    raise PollFailedError(f"unexpected prediction status {status!r}")


def first_output(output: Any) -> Optional[str]:
    if isinstance(output, list):
        output = output[0] if output else None
    if isinstance(output, str) and output:
        return output
    return None


def _json_object(response: httpx.Response) -> Optional[dict[str, Any]]:
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _error_detail(response: httpx.Response) -> str:
    data = _json_object(response)
    if data and data.get("detail"):
        return str(data["detail"])
    return response.reason_phrase or "Unknown error"
