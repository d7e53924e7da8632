"""Configuration management for DeepSeek2OpenAI."""
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=6000, description="Server port")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # Upstream Configuration
    deepseek_base_url: str = Field(
        default="https://api.deepseek.com/v1",
        description="DeepSeek API base URL"
    )
    timeout: Optional[float] = Field(default=120, description="Upstream timeout in seconds")

    # Translation Behaviour
    default_model: str = Field(
        default="gpt-3.5-turbo",
        description="Model used when the request does not name one"
    )
    raw_response: bool = Field(
        default=False,
        description="Return upstream JSON bodies without reshaping"
    )
    openai_extensions: bool = Field(
        default=True,
        description="Include OpenAI compatibility fields in responses"
    )
    sse_ping_interval: int = Field(default=15, description="SSE ping interval in seconds")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    def get_completions_url(self) -> str:
        """Get the upstream chat completions endpoint."""
        return f"{self.deepseek_base_url.rstrip('/')}/chat/completions"


# Global settings instance
settings = Settings()
