"""Run configuration loaded from a JSON file and merged with CLI options.

The file uses the same keys as the command-line flags, in camelCase
(``seedFolder``, ``arxivCategories``, ``lookBack`` ...) or snake_case.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from preprint_recommender.shared.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILENAME = "preprint-recommender-config.json"


class RunConfig(BaseModel):
    """Options for a single recommendation run.

    Every field is optional here; defaults are applied by the CLI once the
    file and the command line have been merged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    seed_folder: str | None = Field(
        None, validation_alias=AliasChoices("seed_folder", "seedFolder")
    )
    arxiv_categories: list[str] | None = Field(
        None, validation_alias=AliasChoices("arxiv_categories", "arxivCategories")
    )
    biorxiv_categories: list[str] | None = Field(
        None,
        validation_alias=AliasChoices("biorxiv_categories", "biorxivCategories"),
    )
    look_back_days: int | None = Field(
        None,
        validation_alias=AliasChoices("look_back_days", "lookBackDays", "lookBack"),
    )
    offset_days: int | None = Field(
        None, validation_alias=AliasChoices("offset_days", "offsetDays")
    )
    max_results: int | None = Field(
        None, validation_alias=AliasChoices("max_results", "maxResults")
    )
    verbose: bool | None = None


def load_config_file(config_path: str | Path | None = None) -> RunConfig:
    """Load run configuration from a JSON file.

    Args:
        config_path: Path to the config file. Defaults to
            ``preprint-recommender-config.json`` in the working directory.

    Returns:
        The parsed configuration, or an empty one if the file is missing
        or cannot be parsed.
    """
    path = Path(config_path) if config_path else Path.cwd() / DEFAULT_CONFIG_FILENAME

    if not path.exists():
        logger.debug("config_file_not_found", path=str(path))
        return RunConfig()

    try:
        content = json.loads(path.read_text(encoding="utf-8"))
        return RunConfig.model_validate(content)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.warning("config_file_invalid", path=str(path), error=str(e))
        return RunConfig()


def merge_config(file_config: RunConfig, cli_options: dict[str, Any]) -> RunConfig:
    """Merge file configuration with CLI options.

    CLI options take precedence, but only when they were explicitly given
    (i.e. are not ``None``).

    Args:
        file_config: Configuration loaded from file.
        cli_options: Options passed via CLI, keyed by field name.

    Returns:
        Merged configuration.
    """
    overrides = {
        name: value
        for name, value in cli_options.items()
        if name in RunConfig.model_fields and value is not None
    }
    return file_config.model_copy(update=overrides)
