"""Application settings and configuration management."""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingSettings(BaseSettings):
    """Embedding backend settings."""

    genai_api_key: SecretStr = SecretStr("")
    embedding_model_name: str = "gemini-embedding-001"
    embedding_dimension: int = Field(default=3072, ge=1)
    embedding_task_type: str = "CLUSTERING"

    # Rate-limit retry settings
    embedding_max_retries: int = Field(default=5, ge=1)
    embedding_cooldown_seconds: float = Field(default=60.0, ge=0.0)

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="allow"
    )


class SourceSettings(BaseSettings):
    """Preprint feed settings."""

    arxiv_base_url: str = "http://export.arxiv.org/api"
    arxiv_pace_seconds: float = Field(default=3.0, ge=0.0)
    biorxiv_base_url: str = "https://api.biorxiv.org"
    biorxiv_pace_seconds: float = Field(default=0.0, ge=0.0)

    # HTTP connection settings
    http_timeout: float = 30.0  # seconds

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="allow"
    )


class Settings(BaseSettings):
    """Main application settings."""

    # Application metadata
    app_name: str = "preprint-recommender"
    app_version: str = "1.0.0"

    # Sub-settings
    embedding: EmbeddingSettings = EmbeddingSettings()
    sources: SourceSettings = SourceSettings()

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="allow"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance with all configuration loaded.
    """
    return Settings()
