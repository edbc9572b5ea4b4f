"""Configuration loading for the intake server.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from intake.adapters.notification.system_event import DEFAULT_SEARCH_PATH
from intake.core.messages import DEFAULT_FOLLOW_UP

DEFAULT_FORM_PATH = Path(__file__).parent / "static" / "index.html"


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # HTTP listener
    bind_address: str = Field(
        default="127.0.0.1",
        description="Address to listen on (loopback only by default)",
    )
    port: int = Field(
        default=3000,
        description="Port to listen on (0 picks a free port)",
    )

    # Storage and form
    storage_dir: str = Field(
        default="./memory/intakes",
        description="Directory for intake record files",
    )
    form_file_path: str = Field(
        default=str(DEFAULT_FORM_PATH),
        description="Static HTML onboarding form served at GET /",
    )

    # Chat webhook
    webhook_url: str = Field(
        default="",
        description="Discord-compatible webhook URL (empty disables the relay)",
    )
    webhook_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for the webhook POST",
    )
    brand_name: str = Field(
        default="Swift Studio",
        description="Studio name shown in the webhook footer",
    )

    # System event command
    system_event_enabled: bool = Field(
        default=True,
        description="Run the system event command after each intake",
    )
    system_event_executable: str = Field(
        default="openclaw",
        description="Command invoked as '<executable> system event'",
    )
    system_event_mode: str = Field(
        default="now",
        description="Value passed to --mode",
    )
    system_event_timeout_seconds: float = Field(
        default=5.0,
        description="Hard timeout for the system event command",
    )
    system_event_path: str = Field(
        default=DEFAULT_SEARCH_PATH,
        description="PATH given to the system event command",
    )
    follow_up_instructions: str = Field(
        default=DEFAULT_FOLLOW_UP,
        description="Sentence appended to the system event text",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Ensure port is in valid range."""
        if v < 0 or v > 65535:
            raise ValueError("port must be between 0 and 65535")
        return v

    @field_validator("webhook_timeout_seconds", "system_event_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensure timeouts are positive."""
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("webhook_url")
    @classmethod
    def validate_webhook_url(cls, v: str) -> str:
        """Ensure a configured webhook URL is absolute http(s)."""
        v = v.strip()
        if v and not v.startswith(("https://", "http://")):
            raise ValueError("webhook_url must start with https:// or http://")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
