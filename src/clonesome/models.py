from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional


class GenerationRequest(BaseModel):
    prompt: str = ""
    style: Optional[str] = "realistic"
    width: int = Field(1024, gt=0)
    height: int = Field(1024, gt=0)


class JobState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


TERMINAL_STATES = frozenset({JobState.SUCCEEDED, JobState.FAILED})


class JobStatus(BaseModel):
    state: JobState
    artifacts: List[str] = []
    reason: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES


class JobHandle(BaseModel):
    id: str
    status_url: str


class GenerationResult(BaseModel):
    success: bool
    image_url: Optional[str] = None
    error: Optional[str] = None
    status_code: int = 200

    def to_response(self) -> dict:
        """Render the caller-facing JSON body."""
        if self.success:
            return {"success": True, "imageUrl": self.image_url}
        return {"success": False, "error": self.error}


class ChatMessage(BaseModel):
    content: str
    is_character: bool = False


class ChatRequest(BaseModel):
    message: str = ""
    character_personality: str = Field("", alias="characterPersonality")
    conversation_history: List[ChatMessage] = Field(
        default_factory=list, alias="conversationHistory"
    )

    model_config = {"populate_by_name": True}
