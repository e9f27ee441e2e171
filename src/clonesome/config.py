from pydantic import BaseModel, HttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
import os


class ProviderConfig(BaseModel):
    api_token: Optional[str] = Field(
        None, description="Bearer token for the image generation provider."
    )
    base_url: HttpUrl = Field(
        "https://api.replicate.com/v1",
        description="Base URL of the predictions API.",
        validate_default=True,
    )
    model_version: str = Field(
        "evalstate/flux1_schnell", description="Model version to run."
    )
    num_inference_steps: int = Field(4, ge=1)
    randomize_seed: bool = True
    poll_interval: float = Field(
        1.0, ge=0, description="Seconds to wait between status queries."
    )
    max_poll_attempts: int = Field(
        120, ge=1, description="Status queries allowed before giving up."
    )
    poll_timeout: Optional[float] = Field(
        None, gt=0, description="Optional wall-clock budget for polling, in seconds."
    )
    request_timeout: float = Field(30.0, gt=0)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CLONESOME__",
        env_nested_delimiter="__",
        extra="ignore",
    )

    output_dir: str = Field(
        "generated_images", description="Directory for images saved by the CLI."
    )
    log_level: str = Field("WARNING", description="Root logging level for the CLI.")
    provider: ProviderConfig = ProviderConfig()


settings = Settings()

# The hosting environment usually exposes the provider token under its own name.
if not settings.provider.api_token:
    token = os.environ.get("REPLICATE_API_TOKEN")
    if token:
        settings.provider.api_token = token
