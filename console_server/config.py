"""Server configuration via pydantic-settings."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "info"
LOG_LEVELS = ("critical", "error", "warning", "info", "debug")

# GAE_ENV value that selects the alpha console build
ALPHA_ENV = "standard"

ALPHA_DIR = "console-alpha"
DEFAULT_DIR = "dist"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Deployment environment indicator, set by the hosting platform
    GAE_ENV: str = ""

    PORT: int = DEFAULT_PORT
    HOST: str = "0.0.0.0"
    LOG_LEVEL: str = DEFAULT_LOG_LEVEL

    @field_validator("PORT", mode="before")
    @classmethod
    def _parse_port(cls, value):
        """Fall back to the default port when the override is not a number."""
        try:
            return int(value)
        except (TypeError, ValueError):
            return DEFAULT_PORT

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _parse_log_level(cls, value):
        level = str(value).strip().lower()
        return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL

    @property
    def is_alpha(self) -> bool:
        return self.GAE_ENV == ALPHA_ENV

    @property
    def asset_root(self) -> Path:
        """Directory holding the built console, relative to the working dir."""
        return Path(ALPHA_DIR if self.is_alpha else DEFAULT_DIR)

    @property
    def index_path(self) -> Path:
        return self.asset_root / "index.html"


def get_settings() -> Settings:
    """Read settings from the process environment."""
    return Settings()
