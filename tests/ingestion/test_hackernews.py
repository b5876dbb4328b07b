"""Test the Hacker News fetcher."""
import httpx
import pytest

from infinite_runway.errors import SourceFetchError
from infinite_runway.ingestion.hackernews import HackerNewsFetcher
from tests.fixtures.sources import hn_story

TOP_STORIES = "/v0/topstories.json"


def hn_transport(story_ids, stories=None, failing=()):
    """Mock Firebase API: story details default to hn_story(id)."""
    stories = stories or {}

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == TOP_STORIES:
            return httpx.Response(200, json=story_ids)
        story_id = int(path.rsplit("/", 1)[-1].removesuffix(".json"))
        if story_id in failing:
            return httpx.Response(500, text="boom")
        return httpx.Response(200, json=stories.get(story_id, hn_story(story_id)))

    return httpx.MockTransport(handler)


class TestHackerNewsFetcher:

    @pytest.mark.asyncio
    async def test_caps_results_at_configured_max(self, settings):
        """Five top stories with the default cap of three yields the first three."""
        async with httpx.AsyncClient(transport=hn_transport([1, 2, 3, 4, 5])) as client:
            items = await HackerNewsFetcher(settings, client).fetch_recent()

        assert [item.id for item in items] == ["hn-1", "hn-2", "hn-3"]
        for item in items:
            assert item.title
            assert item.url
            assert item.source == "Hacker News"

    @pytest.mark.asyncio
    async def test_fewer_stories_than_cap(self, settings):
        async with httpx.AsyncClient(transport=hn_transport([7, 8])) as client:
            items = await HackerNewsFetcher(settings, client).fetch_recent()

        assert len(items) == 2

    @pytest.mark.asyncio
    async def test_explicit_max_results(self, settings):
        async with httpx.AsyncClient(transport=hn_transport([1, 2, 3, 4, 5])) as client:
            items = await HackerNewsFetcher(settings, client).fetch_recent(max_results=1)

        assert [item.id for item in items] == ["hn-1"]

    @pytest.mark.asyncio
    async def test_failed_detail_lookup_skips_only_that_story(self, settings):
        transport = hn_transport([1, 2, 3], failing={2})
        async with httpx.AsyncClient(transport=transport) as client:
            items = await HackerNewsFetcher(settings, client).fetch_recent()

        assert [item.id for item in items] == ["hn-1", "hn-3"]

    @pytest.mark.asyncio
    async def test_story_without_url_or_text_skipped(self, settings):
        stories = {2: hn_story(2, url=None)}
        async with httpx.AsyncClient(transport=hn_transport([1, 2, 3], stories)) as client:
            items = await HackerNewsFetcher(settings, client).fetch_recent()

        assert [item.id for item in items] == ["hn-1", "hn-3"]

    @pytest.mark.asyncio
    async def test_text_post_links_to_discussion(self, settings):
        stories = {9: hn_story(9, url=None, text="<p>Ask HN: what <i>LLM</i> tools do you use?</p>")}
        async with httpx.AsyncClient(transport=hn_transport([9], stories)) as client:
            items = await HackerNewsFetcher(settings, client).fetch_recent()

        assert items[0].url == "https://news.ycombinator.com/item?id=9"
        assert items[0].content == "Ask HN: what LLM tools do you use?"
        assert "llm" in items[0].tags

    @pytest.mark.asyncio
    async def test_link_post_content_summarizes_story(self, settings):
        async with httpx.AsyncClient(transport=hn_transport([4])) as client:
            items = await HackerNewsFetcher(settings, client).fetch_recent()

        assert items[0].content == "Story 4. Posted by pg with 104 points and 10 comments."

    @pytest.mark.asyncio
    async def test_top_stories_failure_raises(self, settings):
        transport = httpx.MockTransport(lambda request: httpx.Response(503))
        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(SourceFetchError) as exc_info:
                await HackerNewsFetcher(settings, client).fetch_recent()

        assert exc_info.value.source == "Hacker News"
