"""
Port interface for preprint feeds.

Each preprint server is wrapped by an adapter that returns one page of
normalized ``Preprint`` entities per call.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field

from preprint_recommender.domain.entities import Preprint
from preprint_recommender.domain.value_objects import DateWindow


class SourcePage(BaseModel):
    """One page of results from a preprint feed.

    Attributes:
        papers: Normalized preprints on this page that fall in the window
        fetched: Number of raw records on the page, before window filtering
        total: Total records reported by the source, or None when the
            source is not paginated
    """

    model_config = ConfigDict(frozen=True)

    papers: list[Preprint] = Field(default_factory=list)
    fetched: int = Field(0, ge=0)
    total: int | None = Field(None, ge=0)


class PreprintSourcePort(ABC):
    """Abstract interface for a preprint server."""

    #: Short source name used in logs
    name: str = "source"

    #: Seconds to wait between consecutive requests to this source
    pace_seconds: float = 0.0

    @abstractmethod
    async def fetch_page(
        self,
        category: str,
        *,
        window: DateWindow,
        cursor: int = 0,
        max_results: int = 500,
    ) -> SourcePage:
        """Fetch one page of a category and normalize it.

        Args:
            category: Category to query (e.g. "cs.AI", "bioinformatics")
            window: Only preprints published inside this window are returned
            cursor: Offset of the first record to fetch
            max_results: Maximum number of records per request, where the
                source supports it

        Returns:
            The page of normalized preprints.

        Raises:
            SourceFetchError: On any transport, status or parse failure.
        """
        pass

    async def close(self) -> None:
        """Release network resources held by the adapter."""
        return None
