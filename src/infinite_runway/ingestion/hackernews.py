import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from ..models.scraped_item import ScrapedItem
from .base import BaseFetcher
from .scoring import extract_tags
from .text import clean_text

logger = logging.getLogger(__name__)


class HackerNewsFetcher(BaseFetcher):
    """Top stories from the Hacker News Firebase API.

    One request lists the story ids, then one request per id resolves the
    details. Detail lookups run concurrently and fail independently.
    """

    name = "Hacker News"

    TOP_STORIES_URL = "https://hacker-news.firebaseio.com/v0/topstories.json"
    ITEM_URL = "https://hacker-news.firebaseio.com/v0/item/{id}.json"
    DISCUSSION_URL = "https://news.ycombinator.com/item?id={id}"

    async def _fetch(self, client: httpx.AsyncClient, limit: int) -> List[ScrapedItem]:
        response = await client.get(self.TOP_STORIES_URL)
        response.raise_for_status()
        story_ids = response.json()[:limit]

        results = await asyncio.gather(
            *(self._fetch_story(client, story_id) for story_id in story_ids),
            return_exceptions=True,
        )

        items: List[ScrapedItem] = []
        for story_id, result in zip(story_ids, results):
            if isinstance(result, Exception):
                logger.warning(f"Failed to fetch story {story_id}: {result}")
                continue
            if isinstance(result, BaseException):
                raise result
            if result is not None:
                items.append(result)

        if story_ids and len(items) < len(story_ids):
            logger.info(f"Hacker News: kept {len(items)}/{len(story_ids)} stories")
        return items

    async def _fetch_story(self, client: httpx.AsyncClient, story_id: int) -> Optional[ScrapedItem]:
        response = await client.get(self.ITEM_URL.format(id=story_id))
        response.raise_for_status()
        data = response.json()

        if not data or not data.get("title") or not (data.get("url") or data.get("text")):
            return None
        return self._to_item(data)

    def _to_item(self, data: Dict[str, Any]) -> ScrapedItem:
        title = data["title"]
        content = clean_text(data.get("text")) or (
            f"{title}. Posted by {data.get('by', 'unknown')} with {data.get('score', 0)} points "
            f"and {data.get('descendants') or 0} comments."
        )
        published = (
            datetime.fromtimestamp(data["time"], tz=timezone.utc)
            if data.get("time") else datetime.now(timezone.utc)
        )

        return ScrapedItem(
            id=f"hn-{data['id']}",
            title=title,
            content=content,
            url=data.get("url") or self.DISCUSSION_URL.format(id=data["id"]),
            source=self.name,
            published_at=published,
            tags=extract_tags(f"{title} {content}"),
        )
