import httpx
from clonesome.config import ProviderConfig
from clonesome.errors import SubmissionError, TransportError, ValidationError
from clonesome.models import GenerationRequest, JobHandle, JobState, JobStatus
from clonesome.providers.base_provider import BaseJobProvider
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# Replicate prediction statuses mapped onto the engine's job states.
STATUS_MAP = {
    "starting": JobState.PENDING,
    "processing": JobState.RUNNING,
    "succeeded": JobState.SUCCEEDED,
    "failed": JobState.FAILED,
    "canceled": JobState.FAILED,
}


class ReplicateProvider(BaseJobProvider):
    def __init__(
        self,
        provider_config: ProviderConfig,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = provider_config
        self.headers = {"Content-Type": "application/json"}
        if self.config.api_token:
            self.headers["Authorization"] = f"Bearer {self.config.api_token}"
        self._owns_client = client is None
        self.async_client = client or httpx.AsyncClient(
            timeout=self.config.request_timeout
        )

    def build_payload(self, request: GenerationRequest, prompt: str) -> dict:
        return {
            "version": self.config.model_version,
            "input": {
                "prompt": prompt,
                "width": request.width,
                "height": request.height,
                "num_inference_steps": self.config.num_inference_steps,
                "randomize_seed": self.config.randomize_seed,
            },
        }

    async def submit(self, request: GenerationRequest, prompt: str) -> JobHandle:
        if not request.prompt or not request.prompt.strip():
            raise ValidationError("Prompt is required")

        url = f"{str(self.config.base_url).rstrip('/')}/predictions"
        payload = self.build_payload(request, prompt)
        logger.debug(f"Submitting prediction to {url} with version {payload['version']}")
        try:
            response = await self.async_client.post(
                url, json=payload, headers=self.headers
            )
        except httpx.HTTPError as e:
            raise TransportError(f"Could not reach provider at {url}: {e}") from e

        if not response.is_success:
            logger.error(
                f"Provider rejected submission: {response.status_code} - {response.text}"
            )
            raise SubmissionError(
                f"Submission failed with status {response.status_code}",
                http_status=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SubmissionError(
                "Provider returned a non-JSON submission response",
                http_status=response.status_code,
                body=response.text,
            ) from e

        if not isinstance(data, dict):
            raise SubmissionError(
                "Provider returned a submission response that is not a JSON object",
                http_status=response.status_code,
                body=response.text,
            )
        job_id = data.get("id")
        urls = data.get("urls")
        status_url = urls.get("get") if isinstance(urls, dict) else None
        if not job_id or not isinstance(status_url, str) or not status_url:
            raise SubmissionError(
                f"Provider did not return a job id and status URL: {data}",
                http_status=response.status_code,
                body=response.text,
            )
        logger.info(f"Submitted prediction {job_id}")
        return JobHandle(id=str(job_id), status_url=status_url)

    async def get_status(self, handle: JobHandle) -> JobStatus:
        try:
            response = await self.async_client.get(
                handle.status_url, headers=self.headers
            )
        except httpx.HTTPError as e:
            raise TransportError(f"Status query for {handle.id} failed: {e}") from e

        if not response.is_success:
            raise TransportError(
                f"Status query for {handle.id} returned {response.status_code}: {response.text}"
            )
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                f"Status query for {handle.id} returned invalid JSON"
            ) from e
        if not isinstance(data, dict):
            raise TransportError(
                f"Status query for {handle.id} returned a non-object JSON document"
            )
        return parse_status(data)

    async def close(self):
        if self._owns_client:
            await self.async_client.aclose()


def parse_status(data: dict) -> JobStatus:
    """Normalise a prediction document into a JobStatus."""
    raw_status = data.get("status")
    state = STATUS_MAP.get(raw_status, JobState.RUNNING)

    if state is JobState.FAILED:
        if raw_status == "canceled":
            reason = "Prediction was canceled"
        else:
            reason = data.get("error") or "Image generation failed"
        return JobStatus(state=state, reason=str(reason))

    artifacts = []
    if state is JobState.SUCCEEDED:
        output = data.get("output")
        if isinstance(output, str):
            artifacts = [output]
        elif output:
            artifacts = [str(item) for item in output]
    return JobStatus(state=state, artifacts=artifacts)
