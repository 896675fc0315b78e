"""
Configuration management using Pydantic Settings.
Loads environment variables from .env file with validation.
"""

from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent.parent / ".env",
        env_file_encoding="utf-8",
        env_prefix="ATLAS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Reference data
    data_dir_override: str = Field(
        default="",
        description="Directory holding conditions.json and company.json"
    )
    conditions_file: str = Field(default="conditions.json")
    company_file: str = Field(default="company.json")

    # Exports
    export_version: str = Field(
        default="ppt-v1.0.0",
        description="Version tag written into client input exports"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)

    # Logging
    log_level: str = Field(default="INFO")

    # Paths (computed)
    @property
    def project_root(self) -> Path:
        """Get project root directory."""
        return Path(__file__).parent.parent

    @property
    def data_dir(self) -> Path:
        """Get data directory path."""
        if self.data_dir_override:
            return Path(self.data_dir_override)
        return self.project_root / "data"

    @property
    def conditions_path(self) -> Path:
        return self.data_dir / self.conditions_file

    @property
    def company_path(self) -> Path:
        return self.data_dir / self.company_file


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
