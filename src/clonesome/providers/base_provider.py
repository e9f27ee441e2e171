from abc import ABC, abstractmethod
from clonesome.models import GenerationRequest, JobHandle, JobStatus


class BaseJobProvider(ABC):
    @abstractmethod
    async def submit(self, request: GenerationRequest, prompt: str) -> JobHandle:
        """
        Creates a generation job for the request, using ``prompt`` as the final
        prompt text. Returns the handle used to poll the job.
        """
        pass

    @abstractmethod
    async def get_status(self, handle: JobHandle) -> JobStatus:
        """Queries the job's status endpoint once."""
        pass

    async def close(self):
        pass
