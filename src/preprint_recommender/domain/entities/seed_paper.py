"""Seed paper entity: a paper the user declared interest in."""

from pydantic import Field

from .base import EmbeddableDocument


class SeedPaper(EmbeddableDocument):
    """A user-curated paper defining the interest profile.

    Seeds carry no identity key; within a run they are matched and grouped
    by object identity.
    """

    source_path: str | None = Field(
        None, description="Seed file the paper was loaded from"
    )
