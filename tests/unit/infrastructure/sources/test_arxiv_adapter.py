"""Unit tests for the arXiv feed adapter."""

from datetime import datetime, timezone

import httpx
import pytest

from preprint_recommender.domain.entities import PreprintSource
from preprint_recommender.domain.value_objects import DateWindow
from preprint_recommender.infrastructure.sources import ArxivSourceAdapter
from preprint_recommender.shared.exceptions import SourceFetchError

ATOM_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>arXiv Query</title>
  <entry>
    <id>http://arxiv.org/abs/2405.00001v1</id>
    <published>2024-05-14T17:59:00Z</published>
    <updated>2024-05-14T17:59:00Z</updated>
    <title>Scaling Laws
      for Protein Models</title>
    <summary>  We study scaling
  laws.  </summary>
    <author><name>Ada Lovelace</name></author>
    <author><name>Alan Turing</name></author>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/2405.00002v1</id>
    <published>2024-05-14T08:00:00Z</published>
    <title>Single Author Paper</title>
    <summary>Only one author here.</summary>
    <author><name>Grace Hopper</name></author>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/2405.00003v1</id>
    <published>2024-05-12T08:00:00Z</published>
    <title>Too Old</title>
    <summary>Outside the window.</summary>
    <author><name>Someone</name></author>
  </entry>
</feed>
"""

ERROR_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <entry>
    <id>http://arxiv.org/api/errors#incorrect_id_format</id>
    <title>Error</title>
    <summary>incorrect id format</summary>
  </entry>
</feed>
"""


@pytest.fixture
def window():
    return DateWindow(
        start=datetime(2024, 5, 14, tzinfo=timezone.utc),
        end=datetime(2024, 5, 14, 23, 59, 59, 999000, tzinfo=timezone.utc),
    )


def make_adapter(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ArxivSourceAdapter(base_url="http://arxiv.test/api", client=client)


class TestArxivSourceAdapter:
    """Test cases for ArxivSourceAdapter."""

    @pytest.mark.asyncio
    async def test_fetch_page_parses_entries(self, window):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, text=ATOM_FEED)

        adapter = make_adapter(handler)

        page = await adapter.fetch_page("cs.AI", window=window, max_results=50)

        assert page.fetched == 3
        assert page.total is None
        assert [paper.identity for paper in page.papers] == [
            "http://arxiv.org/abs/2405.00001v1",
            "http://arxiv.org/abs/2405.00002v1",
        ]
        first = page.papers[0]
        assert first.title == "Scaling Laws for Protein Models"
        assert first.abstract == "We study scaling laws."
        assert first.authors == ["Ada Lovelace", "Alan Turing"]
        assert first.link == first.identity
        assert first.published == datetime(2024, 5, 14, 17, 59, tzinfo=timezone.utc)
        assert first.source == PreprintSource.ARXIV
        assert first.category == "cs.AI"
        assert page.papers[1].authors == ["Grace Hopper"]

        params = requests[0].url.params
        assert requests[0].url.path == "/api/query"
        assert params["search_query"] == "cat:cs.AI"
        assert params["start"] == "0"
        assert params["max_results"] == "50"
        assert params["sortBy"] == "submittedDate"
        assert params["sortOrder"] == "descending"

    @pytest.mark.asyncio
    async def test_http_error_raises_source_fetch_error(self, window):
        adapter = make_adapter(lambda request: httpx.Response(503))

        with pytest.raises(SourceFetchError) as exc_info:
            await adapter.fetch_page("cs.AI", window=window)

        assert exc_info.value.source == "arxiv"
        assert exc_info.value.category == "cs.AI"

    @pytest.mark.asyncio
    async def test_transport_error_raises_source_fetch_error(self, window):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SourceFetchError):
            await make_adapter(handler).fetch_page("cs.AI", window=window)

    @pytest.mark.asyncio
    async def test_api_error_entry_raises(self, window):
        adapter = make_adapter(lambda request: httpx.Response(200, text=ERROR_FEED))

        with pytest.raises(SourceFetchError, match="incorrect id format"):
            await adapter.fetch_page("bad", window=window)

    @pytest.mark.asyncio
    async def test_malformed_feed_raises(self, window):
        adapter = make_adapter(
            lambda request: httpx.Response(200, text="Service unavailable")
        )

        with pytest.raises(SourceFetchError):
            await adapter.fetch_page("cs.AI", window=window)

    @pytest.mark.asyncio
    async def test_empty_feed_gives_empty_page(self, window):
        empty = (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<feed xmlns="http://www.w3.org/2005/Atom"><title>x</title></feed>'
        )
        adapter = make_adapter(lambda request: httpx.Response(200, text=empty))

        page = await adapter.fetch_page("cs.AI", window=window)

        assert page.papers == []
        assert page.fetched == 0

    @pytest.mark.asyncio
    async def test_close_releases_client(self, window):
        adapter = make_adapter(lambda request: httpx.Response(200, text=ATOM_FEED))

        await adapter.close()

        assert adapter._client is None
