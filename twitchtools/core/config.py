"""Application configuration using Pydantic Settings"""

import logging
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Twitch app credentials (client-credentials flow only)
    twitch_client_id: str = Field(default="", description="Twitch application Client ID")
    twitch_client_secret: str = Field(default="", description="Twitch application Client Secret")

    # Upstream endpoints
    helix_url: str = Field(default="https://api.twitch.tv/helix", description="Helix API base URL")
    oauth_url: str = Field(default="https://id.twitch.tv/oauth2", description="Twitch OAuth base URL")
    tmi_url: str = Field(default="https://tmi.twitch.tv", description="TMI chatters base URL")

    # Upstream behaviour
    token_safety_margin: int = Field(
        default=60, description="Seconds subtracted from the app token lifetime"
    )
    http_timeout: float = Field(default=10.0, description="Upstream request timeout in seconds")
    strict_error_status: bool = Field(
        default=False, description="Map each error kind to its own HTTP status instead of 500"
    )

    # Environment
    environment: str = Field(default="production", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, description="Server port")
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["*"], description="Allowed CORS origins, comma-separated"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            logger.warning(f"Invalid log level '{v}', defaulting to INFO")
            return "INFO"
        return v_upper

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Accept ``CORS_ORIGINS`` as a comma-separated string"""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def has_twitch_credentials(self) -> bool:
        """Both Twitch client id and secret are set"""
        return bool(self.twitch_client_id and self.twitch_client_secret)

    @property
    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
