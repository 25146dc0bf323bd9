"""Configuration objects and constants for the todo agent."""
from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the todo agent.

    Values can be overridden through environment variables with the
    ``TODO_AGENT_`` prefix or via a local ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TODO_AGENT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    model: str = Field(
        default="gpt-4o",
        description="Model identifier used for language model invocations.",
    )
    api_key: Optional[str] = Field(
        default=None,
        description="API key for the OpenAI compatible endpoint.",
    )
    base_url: Optional[str] = Field(
        default=None,
        description="Base URL for OpenAI compatible APIs.",
    )
    temperature: float = Field(default=0.0)
    max_tokens: int = Field(default=256)
    max_iterations: int = Field(
        default=25,
        ge=1,
        description="Maximum number of model calls within one agent run.",
    )
    storage_backend: Literal["memory", "google"] = Field(
        default="memory",
        description="Todo storage backend.",
    )
    token_path: Path = Field(
        default_factory=lambda: Path.cwd() / "token.json",
        description="Where the authorized Google credentials are persisted.",
    )
    credentials_path: Path = Field(
        default_factory=lambda: Path.cwd() / "credentials.json",
        description="OAuth client secrets used for the first consent flow.",
    )
    task_list_title: Optional[str] = Field(
        default=None,
        description="Google task list to use; the first list when unset.",
    )
    response_language: str = Field(
        default="Deutsch",
        description="Language the assistant reads, writes and thinks in.",
    )
    log_level: str = Field(default="WARNING")
    log_format: Literal["console", "json"] = Field(default="console")


settings = Settings()
