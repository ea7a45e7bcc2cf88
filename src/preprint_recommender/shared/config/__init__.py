"""Configuration for the preprint recommender."""

from .run_config import (
    DEFAULT_CONFIG_FILENAME,
    RunConfig,
    load_config_file,
    merge_config,
)
from .settings import EmbeddingSettings, Settings, SourceSettings, get_settings

__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "RunConfig",
    "load_config_file",
    "merge_config",
    "EmbeddingSettings",
    "Settings",
    "SourceSettings",
    "get_settings",
]
