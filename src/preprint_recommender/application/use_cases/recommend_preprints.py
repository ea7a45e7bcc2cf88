"""Recommend preprints use case.

This module runs the full recommendation pipeline: fetch candidates from
every configured preprint server, load and embed the seed papers, derive
the adaptive threshold and group the matching candidates by seed.
"""

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from preprint_recommender.application.ports import (
    PreprintSourcePort,
    SeedLoaderPort,
)
from preprint_recommender.application.use_cases.embed_documents import (
    EmbedDocumentsUseCase,
)
from preprint_recommender.application.use_cases.fetch_preprints import (
    FetchPreprintsUseCase,
    deduplicate_preprints,
)
from preprint_recommender.domain.entities import Preprint
from preprint_recommender.domain.services import (
    SimilarityMatcher,
    compute_date_window,
    similarity_threshold,
)
from preprint_recommender.domain.value_objects import SeedMatchGroup
from preprint_recommender.shared.exceptions import (
    InvalidRequestError,
    NotEnoughSeedsError,
)
from preprint_recommender.shared.utils.logger import get_logger

logger = get_logger(__name__)

#: Receives (stage, completed, total); stage is "candidates" or "seeds"
StageProgressCallback = Callable[[str, int, int], None]


class RecommendationRequest(BaseModel):
    """Parameters of a single recommendation run."""

    model_config = ConfigDict(frozen=True)

    seed_folder: Path
    arxiv_categories: list[str] = Field(default_factory=list)
    biorxiv_categories: list[str] = Field(default_factory=list)
    look_back_days: int = 1
    offset_days: int = 0
    max_results: int = 500

    @model_validator(mode="after")
    def check_parameters(self) -> "RecommendationRequest":
        """Reject runs that could never produce candidates."""
        if not self.arxiv_categories and not self.biorxiv_categories:
            raise InvalidRequestError(
                "categories",
                "at least one of arxiv_categories or biorxiv_categories "
                "must be provided",
            )
        if self.look_back_days < 1:
            raise InvalidRequestError("look_back_days", "must be at least 1")
        if self.offset_days < 0:
            raise InvalidRequestError("offset_days", "must not be negative")
        if self.max_results < 1:
            raise InvalidRequestError("max_results", "must be at least 1")
        return self

    @property
    def categories_by_source(self) -> dict[str, list[str]]:
        return {
            "arxiv": self.arxiv_categories,
            "biorxiv": self.biorxiv_categories,
        }


class RecommendationReport(BaseModel):
    """Outcome of a recommendation run."""

    model_config = ConfigDict(frozen=True)

    total_candidates: int = Field(..., ge=0)
    total_seeds: int = Field(..., ge=0)
    embedded_seeds: int = Field(..., ge=0)
    threshold: float
    groups: list[SeedMatchGroup] = Field(default_factory=list)

    @property
    def total_matches(self) -> int:
        return sum(len(group.matches) for group in self.groups)

    def as_rows(self) -> dict[str, list[dict[str, Any]]]:
        """Flatten the groups for display, keyed by seed title.

        Seeds sharing a title are listed under the same key.
        """
        rows: dict[str, list[dict[str, Any]]] = {}
        for group in self.groups:
            rows.setdefault(group.seed.title, []).extend(
                {
                    "title": match.candidate.title,
                    "score": round(match.rescaled_similarity, 2),
                    "link": match.candidate.link,
                }
                for match in group.matches
            )
        return rows


class RecommendPreprintsUseCase:
    """Use case orchestrating a complete recommendation run."""

    def __init__(
        self,
        sources: dict[str, PreprintSourcePort],
        seed_loader: SeedLoaderPort,
        embedder: EmbedDocumentsUseCase,
        matcher: SimilarityMatcher | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the use case with its collaborators.

        Args:
            sources: Source adapters keyed by source name ("arxiv", "biorxiv")
            seed_loader: Loader for the seed paper folder
            embedder: Embedding use case with retry handling
            matcher: Similarity matcher, a default one if omitted
            sleep: Coroutine used for pacing source requests
        """
        self._sources = sources
        self._seed_loader = seed_loader
        self._embedder = embedder
        self._matcher = matcher or SimilarityMatcher()
        self._sleep = sleep

    async def execute(
        self,
        request: RecommendationRequest,
        progress: StageProgressCallback | None = None,
    ) -> RecommendationReport:
        """Run the pipeline end to end.

        Args:
            request: Validated run parameters
            progress: Optional embedding progress callback

        Returns:
            Report with the grouped matches and stage counts

        Raises:
            SeedFolderError: If the seed folder does not exist
            EmbeddingServiceError: If the embedding backend fails
            EmbeddingRetriesExhaustedError: If a document stays rate limited
            NotEnoughSeedsError: If fewer than two seeds could be embedded
        """
        window = compute_date_window(request.look_back_days, request.offset_days)
        logger.info(
            "recommendation_started",
            window_start=window.start.isoformat(),
            window_end=window.end.isoformat(),
            seed_folder=str(request.seed_folder),
        )

        candidates = await self._fetch_candidates(request, window)
        logger.info("candidates_fetched", count=len(candidates))

        seeds = await self._seed_loader.load(request.seed_folder)
        logger.info("seeds_loaded", count=len(seeds))
        # Every loaded seed ends up embedded or the run fails, so this is final.
        if len(seeds) < 2:
            raise NotEnoughSeedsError(embedded_seeds=len(seeds))

        candidates = await self._embedder.embed_all(
            candidates, progress=self._stage(progress, "candidates")
        )
        seeds = await self._embedder.embed_all(
            seeds, progress=self._stage(progress, "seeds")
        )
        embedded_seeds = sum(1 for seed in seeds if seed.has_embedding)

        threshold = similarity_threshold(seeds)
        logger.info(
            "threshold_computed",
            threshold=round(threshold, 4),
            embedded_seeds=embedded_seeds,
        )

        groups = self._matcher.match(candidates, seeds, threshold)
        report = RecommendationReport(
            total_candidates=len(candidates),
            total_seeds=len(seeds),
            embedded_seeds=embedded_seeds,
            threshold=threshold,
            groups=groups,
        )
        logger.info(
            "recommendation_completed",
            matches=report.total_matches,
            groups=len(report.groups),
        )
        return report

    async def _fetch_candidates(self, request, window) -> list[Preprint]:
        candidates: list[Preprint] = []
        for name, categories in request.categories_by_source.items():
            if not categories:
                continue
            source = self._sources.get(name)
            if source is None:
                logger.warning("source_not_configured", source=name)
                continue
            fetcher = FetchPreprintsUseCase(source, sleep=self._sleep)
            candidates.extend(
                await fetcher.execute(
                    categories, window=window, max_results=request.max_results
                )
            )
        return deduplicate_preprints(candidates)

    @staticmethod
    def _stage(progress: StageProgressCallback | None, stage: str):
        if progress is None:
            return None
        return lambda completed, total: progress(stage, completed, total)

    async def close(self) -> None:
        """Close every source adapter."""
        for source in self._sources.values():
            await source.close()
