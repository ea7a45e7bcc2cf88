"""Match value objects produced by the similarity matcher.

These are derived per run and never persisted.
"""

from pydantic import BaseModel, ConfigDict, Field

from preprint_recommender.domain.entities import Preprint, SeedPaper


class MatchResult(BaseModel):
    """A candidate that cleared the similarity threshold.

    Attributes:
        candidate: The matching preprint
        matched_seed: Seed paper with the highest cosine similarity
        raw_similarity: Cosine similarity to the matched seed
        rescaled_similarity: Distance above the threshold on a 0-100 scale
    """

    model_config = ConfigDict(frozen=True)

    candidate: Preprint
    matched_seed: SeedPaper
    raw_similarity: float = Field(..., description="Cosine similarity")
    rescaled_similarity: float = Field(
        ..., ge=0.0, description="Distance above threshold, 0-100"
    )


class SeedMatchGroup(BaseModel):
    """All matches sharing one seed, best first."""

    model_config = ConfigDict(frozen=True)

    seed: SeedPaper
    matches: list[MatchResult] = Field(default_factory=list)
