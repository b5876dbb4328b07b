"""Test the RSS feed fetcher."""
from datetime import datetime, timezone

import httpx
import pytest

from infinite_runway.errors import SourceFetchError
from infinite_runway.ingestion.rss import RSSFeedFetcher
from tests.fixtures.sources import rss_feed

FEED_URL = "https://example.com/feed/"


def feed_client(body: str, status: int = 200) -> httpx.AsyncClient:
    transport = httpx.MockTransport(lambda request: httpx.Response(status, text=body))
    return httpx.AsyncClient(transport=transport)


class TestRSSFeedFetcher:

    @pytest.mark.asyncio
    async def test_keeps_feed_order(self, settings):
        async with feed_client(rss_feed(["A", "B", "C"])) as client:
            items = await RSSFeedFetcher("Example AI", FEED_URL, settings, client).fetch_recent()

        assert [item.title for item in items] == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_truncates_to_cap(self, settings):
        async with feed_client(rss_feed(["A", "B", "C", "D", "E"])) as client:
            items = await RSSFeedFetcher("Example AI", FEED_URL, settings, client).fetch_recent()

        assert [item.title for item in items] == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_entry_mapping(self, settings):
        async with feed_client(rss_feed(["A"])) as client:
            [item] = await RSSFeedFetcher("Example AI", FEED_URL, settings, client).fetch_recent()

        assert item.id == "example-ai-https://example.com/a"
        assert item.url == "https://example.com/a"
        assert item.source == "Example AI"
        assert item.content == "Story A & more"
        assert item.published_at == datetime(2026, 10, 12, 9, 0, tzinfo=timezone.utc)
        assert "ai" in item.tags

    @pytest.mark.asyncio
    async def test_untitled_entries_skipped(self, settings):
        body = rss_feed(["A", "B"]).replace("<title>A</title>", "")
        async with feed_client(body) as client:
            items = await RSSFeedFetcher("Example AI", FEED_URL, settings, client).fetch_recent()

        assert [item.title for item in items] == ["B"]

    @pytest.mark.asyncio
    async def test_empty_feed(self, settings):
        async with feed_client(rss_feed([])) as client:
            items = await RSSFeedFetcher("Example AI", FEED_URL, settings, client).fetch_recent()

        assert items == []

    @pytest.mark.asyncio
    async def test_http_error_raises_source_error(self, settings):
        async with feed_client("not found", status=404) as client:
            with pytest.raises(SourceFetchError, match="Example AI"):
                await RSSFeedFetcher("Example AI", FEED_URL, settings, client).fetch_recent()
