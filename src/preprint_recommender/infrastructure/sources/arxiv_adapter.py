"""
arXiv feed adapter.

Queries the arXiv export API for the newest submissions of a category and
normalizes the Atom entries into ``Preprint`` entities.
"""

from calendar import timegm
from datetime import UTC, datetime

import feedparser
import httpx
from pydantic import ValidationError

from preprint_recommender.application.ports.preprint_source_port import (
    PreprintSourcePort,
    SourcePage,
)
from preprint_recommender.domain.entities import Preprint, PreprintSource
from preprint_recommender.domain.value_objects import DateWindow
from preprint_recommender.infrastructure.sources.normalization import as_list
from preprint_recommender.shared.exceptions import SourceFetchError
from preprint_recommender.shared.utils.logger import get_logger

logger = get_logger(__name__)

ARXIV_ERROR_MARKER = "/api/errors"


class ArxivSourceAdapter(PreprintSourcePort):
    """Adapter for the arXiv export API.

    The API is queried once per category, newest first; results are not
    paginated further.
    """

    name = "arxiv"

    def __init__(
        self,
        base_url: str = "http://export.arxiv.org/api",
        pace_seconds: float = 3.0,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the arXiv adapter.

        Args:
            base_url: Base URL of the export API
            pace_seconds: Pause between consecutive requests
            timeout: HTTP timeout in seconds
            client: Optional pre-configured HTTP client
        """
        self.base_url = base_url.rstrip("/")
        self.pace_seconds = pace_seconds
        self.timeout = timeout
        self._client = client

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def fetch_page(
        self,
        category: str,
        *,
        window: DateWindow,
        cursor: int = 0,
        max_results: int = 500,
    ) -> SourcePage:
        """Fetch the newest submissions of a category.

        Args:
            category: arXiv category, e.g. "cs.AI"
            window: Publication window; entries outside it are dropped
            cursor: Offset of the first entry
            max_results: Maximum number of entries to request

        Returns:
            Page with the in-window preprints. ``total`` is always None.

        Raises:
            SourceFetchError: If the request or the feed parsing fails
        """
        params = {
            "search_query": f"cat:{category}",
            "start": cursor,
            "max_results": max_results,
            "sortBy": "submittedDate",
            "sortOrder": "descending",
        }
        logger.debug("fetching_arxiv_category", category=category, cursor=cursor)

        try:
            response = await self._ensure_client().get(
                f"{self.base_url}/query", params=params
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise SourceFetchError(self.name, category, str(e)) from e

        feed = feedparser.parse(response.text)
        if feed.bozo and not feed.entries:
            raise SourceFetchError(
                self.name, category, f"malformed feed: {feed.get('bozo_exception')}"
            )

        papers = []
        for entry in feed.entries:
            if ARXIV_ERROR_MARKER in entry.get("id", ""):
                raise SourceFetchError(
                    self.name, category, entry.get("summary", "API error")
                )
            paper = self._to_preprint(entry, category)
            if paper is not None and window.contains(paper.published):
                papers.append(paper)

        logger.debug(
            "arxiv_page_parsed",
            category=category,
            entries=len(feed.entries),
            in_window=len(papers),
        )
        return SourcePage(papers=papers, fetched=len(feed.entries), total=None)

    def _to_preprint(
        self, entry: feedparser.FeedParserDict, category: str
    ) -> Preprint | None:
        """Convert a feed entry, or return None if it is unusable."""
        published = self._parse_date(entry)
        if published is None:
            logger.warning("arxiv_entry_without_date", identity=entry.get("id"))
            return None

        authors = [
            author.get("name", "") if isinstance(author, dict) else str(author)
            for author in as_list(entry.get("authors"))
        ]
        try:
            return Preprint(
                identity=entry.get("id", ""),
                title=entry.get("title", ""),
                abstract=entry.get("summary", ""),
                authors=authors,
                published=published,
                link=entry.get("id", ""),
                source=PreprintSource.ARXIV,
                category=category,
            )
        except ValidationError as e:
            logger.warning(
                "arxiv_entry_skipped", identity=entry.get("id"), error=str(e)
            )
            return None

    @staticmethod
    def _parse_date(entry: feedparser.FeedParserDict) -> datetime | None:
        for field in ("published_parsed", "updated_parsed"):
            time_struct = entry.get(field)
            if time_struct:
                return datetime.fromtimestamp(timegm(time_struct), tz=UTC)
        return None

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
