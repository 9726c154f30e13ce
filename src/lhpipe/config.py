"""Environment settings for lhpipe.

Values are read once per process from ``JX_*`` environment variables
(or a local ``.env`` file) and cached.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="JX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Editor used when --editor is not given (JX_EDITOR)
    editor: str = ""

    # Cache of checked-out step libraries for uses: references (JX_CACHE_DIR)
    cache_dir: Path | None = Field(default=None)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings cache (useful for testing)."""
    global _settings
    _settings = None
