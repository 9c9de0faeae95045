from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dndref.constants import DEFAULT_TIMEOUT, DEFAULT_UPSTREAMS, DEFAULT_USER_AGENT, LOG_LEVELS

__all__ = ["Config"]


class Config(BaseSettings):
    """Settings loaded from `DNDREF_*` environment variables or a `.env` file."""

    model_config = SettingsConfigDict(
        env_prefix="DNDREF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    upstreams: list[str] = Field(
        default_factory=lambda: list(DEFAULT_UPSTREAMS),
        description="Upstream base URLs, tried in order",
    )
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Per-attempt timeout")
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = Field(default="INFO")

    @field_validator("upstreams")
    @classmethod
    def _normalize_upstreams(cls, value: list[str]) -> list[str]:
        urls = [url.strip().rstrip("/") for url in value if url.strip()]
        if not urls:
            raise ValueError("At least one upstream base URL is required")
        return urls

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level, expected one of: {', '.join(LOG_LEVELS)}")
        return level
