from clonesome.config import ProviderConfig, settings
from clonesome.errors import (
    CloneSomeError,
    EmptyArtifactError,
    GenerationCancelledError,
    GenerationError,
    PollTimeoutError,
)
from clonesome.models import GenerationRequest, GenerationResult, JobHandle, JobState, JobStatus
from clonesome.prompts import enhance_prompt
from clonesome.providers.base_provider import BaseJobProvider
from clonesome.providers.replicate_provider import ReplicateProvider
from typing import List, Optional
import asyncio
import logging

logger = logging.getLogger(__name__)


async def poll_job(
    provider: BaseJobProvider,
    handle: JobHandle,
    poll_interval: float = 1.0,
    max_attempts: int = 120,
    poll_timeout: Optional[float] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> JobStatus:
    """Drive a job to a terminal state.

    Queries the status endpoint at most ``max_attempts`` times, sleeping
    ``poll_interval`` seconds between queries. Raises ``GenerationError`` when
    the provider reports failure, ``PollTimeoutError`` when the attempt or
    wall-clock budget runs out and ``GenerationCancelledError`` when
    ``cancel_event`` is set between iterations. Transport errors from the
    provider propagate unchanged and are not retried.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + poll_timeout if poll_timeout is not None else None

    for attempt in range(1, max_attempts + 1):
        if cancel_event is not None and cancel_event.is_set():
            raise GenerationCancelledError(
                f"Polling of job {handle.id} was cancelled after {attempt - 1} attempts"
            )

        status = await provider.get_status(handle)
        if status.is_terminal:
            if status.state is JobState.FAILED:
                logger.warning(f"Job {handle.id} failed: {status.reason}")
                raise GenerationError(status.reason or "Image generation failed")
            logger.info(f"Job {handle.id} succeeded after {attempt} status queries")
            return status

        logger.debug(f"Job {handle.id} is {status.state.value} (attempt {attempt})")
        if attempt == max_attempts:
            break
        delay = poll_interval
        if deadline is not None:
            remaining = deadline - loop.time()
            if remaining <= 0:
                raise PollTimeoutError(
                    f"Job {handle.id} did not finish within {poll_timeout}s", attempt
                )
            # Never sleep past the deadline.
            delay = min(poll_interval, remaining)
        await asyncio.sleep(delay)

    raise PollTimeoutError(
        f"Job {handle.id} did not finish after {max_attempts} status queries",
        max_attempts,
    )


def extract_artifact(artifacts: List[str]) -> str:
    if not artifacts:
        raise EmptyArtifactError("Provider reported success but returned no images")
    return artifacts[0]


async def run_generation(
    request: GenerationRequest,
    provider: BaseJobProvider,
    config: Optional[ProviderConfig] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> str:
    """Submit, poll and extract. Returns the image URL or raises a CloneSomeError."""
    config = config or settings.provider
    prompt = enhance_prompt(request.prompt, request.style)
    handle = await provider.submit(request, prompt)
    status = await poll_job(
        provider,
        handle,
        poll_interval=config.poll_interval,
        max_attempts=config.max_poll_attempts,
        poll_timeout=config.poll_timeout,
        cancel_event=cancel_event,
    )
    return extract_artifact(status.artifacts)


async def generate_image_core(
    request: GenerationRequest,
    provider: Optional[BaseJobProvider] = None,
    config: Optional[ProviderConfig] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> GenerationResult:
    config = config or settings.provider
    owns_provider = provider is None
    if owns_provider:
        provider = ReplicateProvider(config)
    try:
        image_url = await run_generation(
            request, provider, config=config, cancel_event=cancel_event
        )
        return GenerationResult(success=True, image_url=image_url)
    except GenerationCancelledError:
        logger.info("Image generation cancelled by caller")
        raise
    except CloneSomeError as e:
        logger.error(f"Image generation failed ({type(e).__name__}): {e}")
        return GenerationResult(success=False, error=str(e), status_code=e.status_code)
    except Exception as e:
        logger.exception(f"An unexpected error occurred in generate_image_core: {e}")
        return GenerationResult(
            success=False, error="Failed to generate image", status_code=500
        )
    finally:
        if owns_provider:
            await provider.close()
