"""Configuration schema using Pydantic."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApprovalsConfig(BaseModel):
    """Pending approval bookkeeping configuration."""
    stale_after_seconds: int = 600  # Drop unanswered approvals after 10 minutes
    max_pending: int = 100
    max_command_chars: int = 3000  # Command preview length in chat


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class Config(BaseSettings):
    """Root configuration for execgram."""
    approvals: ApprovalsConfig = Field(default_factory=ApprovalsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="EXECGRAM_",
        env_nested_delimiter="__",
    )
