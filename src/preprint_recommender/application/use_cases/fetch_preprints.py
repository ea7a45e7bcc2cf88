"""Fetch preprints use case.

This module merges the categories of one preprint server into a single,
deduplicated list of candidates. Categories and pages are requested one at
a time with a fixed pause in between to stay under upstream rate limits.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Sequence

from preprint_recommender.application.ports.preprint_source_port import (
    PreprintSourcePort,
)
from preprint_recommender.domain.entities import Preprint
from preprint_recommender.domain.value_objects import DateWindow
from preprint_recommender.shared.exceptions import SourceFetchError
from preprint_recommender.shared.utils.logger import get_logger

logger = get_logger(__name__)


def deduplicate_preprints(papers: Iterable[Preprint]) -> list[Preprint]:
    """Drop duplicate preprints, keeping the last record seen per identity."""
    unique: dict[str, Preprint] = {}
    for paper in papers:
        unique[paper.identity] = paper
    return list(unique.values())


class FetchPreprintsUseCase:
    """Use case for fetching and merging the categories of one source."""

    def __init__(
        self,
        source: PreprintSourcePort,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the use case.

        Args:
            source: Preprint server adapter
            sleep: Coroutine used for pacing requests
        """
        self.source = source
        self._sleep = sleep
        self._requests_made = 0

    async def execute(
        self,
        categories: Sequence[str],
        *,
        window: DateWindow,
        max_results: int = 500,
    ) -> list[Preprint]:
        """Fetch every category sequentially and merge the results.

        A category that fails contributes no preprints; the others are
        still fetched.

        Args:
            categories: Categories to fetch, in order
            window: Publication window applied by the source
            max_results: Per-request cap forwarded to the source

        Returns:
            Preprints from all categories, deduplicated by identity
        """
        all_papers: list[Preprint] = []

        for category in categories:
            try:
                papers = await self._fetch_category(
                    category, window=window, max_results=max_results
                )
            except SourceFetchError as e:
                logger.warning(
                    "category_fetch_failed",
                    source=self.source.name,
                    category=category,
                    error=str(e),
                )
                continue

            logger.info(
                "category_fetched",
                source=self.source.name,
                category=category,
                count=len(papers),
            )
            all_papers.extend(papers)

        merged = deduplicate_preprints(all_papers)
        logger.info(
            "source_merged",
            source=self.source.name,
            fetched=len(all_papers),
            unique=len(merged),
        )
        return merged

    async def _fetch_category(
        self, category: str, *, window: DateWindow, max_results: int
    ) -> list[Preprint]:
        """Fetch all pages of a category until the reported total is reached."""
        papers: list[Preprint] = []
        cursor = 0

        while True:
            await self._pace()
            page = await self.source.fetch_page(
                category, window=window, cursor=cursor, max_results=max_results
            )
            papers.extend(page.papers)
            cursor += page.fetched

            if page.total is None or page.fetched == 0 or cursor >= page.total:
                return papers

            logger.debug(
                "fetching_next_page",
                source=self.source.name,
                category=category,
                cursor=cursor,
                total=page.total,
            )

    async def _pace(self) -> None:
        """Wait between requests, except before the very first one."""
        if self._requests_made and self.source.pace_seconds > 0:
            await self._sleep(self.source.pace_seconds)
        self._requests_made += 1
