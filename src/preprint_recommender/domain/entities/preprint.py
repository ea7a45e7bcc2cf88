"""Preprint entity representing a candidate paper fetched from a feed."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import Field, field_validator, model_validator

from preprint_recommender.shared.utils.timezone import ensure_aware

from .base import EmbeddableDocument


class PreprintSource(StrEnum):
    """Supported preprint servers."""

    ARXIV = "arxiv"
    BIORXIV = "biorxiv"


class Preprint(EmbeddableDocument):
    """A candidate paper awaiting relevance scoring.

    Two preprints with the same ``identity`` are the same paper.

    Attributes:
        identity: Canonical URL or ID, unique per source; the dedup key
        title: Paper title
        abstract: Paper abstract
        authors: Author names in display order
        published: Publication timestamp (timezone aware)
        link: URL shown to the user
        source: Preprint server the record came from
        category: Category the record was fetched for
        embedding: Embedding vector, absent until generated
    """

    identity: str = Field(..., min_length=1, description="Canonical URL or ID")
    authors: list[str] = Field(default_factory=list, description="Author names")
    published: datetime = Field(..., description="Publication timestamp")
    link: str = Field("", description="URL to the paper")
    source: PreprintSource = Field(..., description="Preprint server")
    category: str | None = Field(None, description="Category fetched from")

    @field_validator("authors")
    @classmethod
    def validate_authors(cls, v: list[str]) -> list[str]:
        """Strip author names and drop empty entries."""
        return [name.strip() for name in v if name and name.strip()]

    @field_validator("published")
    @classmethod
    def validate_published(cls, v: datetime) -> datetime:
        """Interpret naive timestamps as local time."""
        return ensure_aware(v)

    @model_validator(mode="before")
    @classmethod
    def default_link(cls, data: Any) -> Any:
        """Fall back to the identity when no display link is given."""
        if isinstance(data, dict) and not data.get("link"):
            data = {**data, "link": data.get("identity", "")}
        return data
