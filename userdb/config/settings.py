"""
Configuration Settings
======================

Centralized configuration using Pydantic V2 Settings.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from userdb.core.constants import DATABASE_NAME


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_env: str = Field(default="development")
    app_debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    data_dir: Path = Field(default=Path("./data"))
    database_name: str = Field(default=DATABASE_NAME, min_length=1)
    database_url: Optional[str] = Field(default=None)
    worker_threads: int = Field(default=1, ge=1)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the logging level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return level

    @property
    def database_path(self) -> Path:
        """Location of the store file inside the private data directory."""
        return self.data_dir / self.database_name

    @property
    def resolved_database_url(self) -> str:
        """SQLAlchemy URL, either the explicit override or the file-backed default."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.database_path}"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
