"""
bioRxiv feed adapter.

Queries the bioRxiv details API for a date range and category. The API
returns at most 100 records per call and reports the overall total, so
callers page through it with the cursor.
"""

from datetime import date
from typing import Any

import httpx
from pydantic import ValidationError

from preprint_recommender.application.ports.preprint_source_port import (
    PreprintSourcePort,
    SourcePage,
)
from preprint_recommender.domain.entities import Preprint, PreprintSource
from preprint_recommender.domain.value_objects import DateWindow
from preprint_recommender.shared.exceptions import SourceFetchError
from preprint_recommender.shared.utils.logger import get_logger
from preprint_recommender.shared.utils.timezone import local_midnight

logger = get_logger(__name__)

BIORXIV_CONTENT_URL = "https://www.biorxiv.org/content"
BIORXIV_PAGE_SIZE = 100


class BiorxivSourceAdapter(PreprintSourcePort):
    """Adapter for the bioRxiv details API."""

    name = "biorxiv"

    def __init__(
        self,
        base_url: str = "https://api.biorxiv.org",
        pace_seconds: float = 0.0,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
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
        max_results: int = BIORXIV_PAGE_SIZE,
    ) -> SourcePage:
        """Fetch one page of a category for the window's calendar dates.

        ``max_results`` is ignored; the API page size is fixed.

        Raises:
            SourceFetchError: If the request fails or the payload is malformed
        """
        url = (
            f"{self.base_url}/details/biorxiv/"
            f"{window.start:%Y-%m-%d}/{window.end:%Y-%m-%d}/{cursor}"
        )
        logger.debug("fetching_biorxiv_category", category=category, cursor=cursor)

        try:
            response = await self._ensure_client().get(
                url, params={"category": category}
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise SourceFetchError(self.name, category, str(e)) from e
        except ValueError as e:
            raise SourceFetchError(self.name, category, f"invalid JSON: {e}") from e

        collection, total = self._unpack(payload, category)

        papers = []
        for record in collection:
            paper = self._to_preprint(record, category)
            if paper is not None and window.contains(paper.published):
                papers.append(paper)

        return SourcePage(papers=papers, fetched=len(collection), total=total)

    def _unpack(self, payload: Any, category: str) -> tuple[list[Any], int]:
        """Extract the record list and the reported total from a response."""
        if not isinstance(payload, dict):
            raise SourceFetchError(self.name, category, "response is not an object")

        collection = payload.get("collection") or []
        if not isinstance(collection, list):
            raise SourceFetchError(self.name, category, "'collection' is not a list")

        messages = payload.get("messages") or [{}]
        try:
            total = int(messages[0].get("total", 0))
        except (AttributeError, TypeError, ValueError) as e:
            raise SourceFetchError(
                self.name, category, f"invalid total in messages: {e}"
            ) from e

        return collection, total

    def _to_preprint(self, record: Any, category: str) -> Preprint | None:
        """Convert a collection record, or return None if it is unusable."""
        if not isinstance(record, dict):
            logger.warning("biorxiv_record_skipped", reason="not an object")
            return None

        link = f"{BIORXIV_CONTENT_URL}/{record.get('doi')}v{record.get('version')}"
        try:
            published = local_midnight(date.fromisoformat(str(record.get("date"))))
            return Preprint(
                identity=link,
                title=record.get("title") or "",
                abstract=record.get("abstract") or "",
                authors=(record.get("authors") or "").split(";"),
                published=published,
                link=link,
                source=PreprintSource.BIORXIV,
                category=category,
            )
        except (ValidationError, ValueError) as e:
            logger.warning("biorxiv_record_skipped", identity=link, error=str(e))
            return None

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
