"""Application configuration loaded from environment and config files."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class DirectusConfig(BaseSettings):
    """Connection settings for the target Directus instance."""

    model_config = {"env_prefix": "DIRECTUS_"}

    url: str = "http://localhost:8055"
    setup_token: str | None = None
    api_prefix: str = "/api"
    timeout_seconds: int = 30
    token_lifetime_minutes: int = 15
    token_refresh_margin_minutes: int = 5

    @property
    def api_base_url(self) -> str:
        """Base URL every API path is resolved against."""
        prefix = self.api_prefix.strip("/")
        base = self.url.rstrip("/")
        return f"{base}/{prefix}" if prefix else base


class SchemaConfig(BaseSettings):
    """Static collection schema configuration."""

    model_config = {"env_prefix": "DIRECTUS_SCHEMA_"}

    path: str | None = None


class BackupConfig(BaseSettings):
    """Backup sink configuration."""

    model_config = {"env_prefix": "DIRECTUS_BACKUP_"}

    output_dir: str = "backups"


class Settings(BaseSettings):
    """Root settings."""

    model_config = {"env_prefix": "DIRECTUS_SETUP_"}

    log_level: str = "INFO"
    confirm_cleanup: bool = False

    directus: DirectusConfig = Field(default_factory=DirectusConfig)
    collections: SchemaConfig = Field(default_factory=SchemaConfig)
    backup: BackupConfig = Field(default_factory=BackupConfig)
