import calendar
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

import feedparser
import httpx

from ..config import Settings
from ..errors import SourceFetchError
from ..models.scraped_item import ScrapedItem
from .base import BaseFetcher
from .scoring import extract_tags
from .text import clean_text, slugify

logger = logging.getLogger(__name__)


class RSSFeedFetcher(BaseFetcher):
    """Entries of an RSS/Atom feed at a fixed URL, in feed order."""

    def __init__(self, name: str, url: str, settings: Settings, client: Optional[httpx.AsyncClient] = None) -> None:
        super().__init__(settings, client)
        self.name = name
        self.url = url

    async def _fetch(self, client: httpx.AsyncClient, limit: int) -> List[ScrapedItem]:
        response = await client.get(self.url)
        response.raise_for_status()

        feed = feedparser.parse(response.text)
        if feed.bozo and not feed.entries:
            raise SourceFetchError(self.name, f"malformed feed: {feed.get('bozo_exception')}")

        items: List[ScrapedItem] = []
        for entry in feed.entries:
            if not entry.get("title") or not entry.get("link"):
                continue
            items.append(self._entry_to_item(entry))
            if len(items) >= limit:
                break
        return items

    def _entry_to_item(self, entry: Any) -> ScrapedItem:
        title = entry["title"]
        raw = entry.get("summary") or ""
        if not raw and entry.get("content"):
            raw = entry["content"][0].get("value", "")
        categories = " ".join(tag.get("term", "") for tag in entry.get("tags", []))

        return ScrapedItem(
            id=f"{slugify(self.name)}-{entry.get('id') or entry['link']}",
            title=title,
            content=clean_text(raw),
            url=entry["link"],
            source=self.name,
            published_at=self._published(entry),
            tags=extract_tags(f"{title} {categories}"),
        )

    @staticmethod
    def _published(entry: Any) -> datetime:
        parsed = entry.get("published_parsed") or entry.get("updated_parsed")
        if parsed:
            # feedparser normalizes to UTC struct_time
            return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
        return datetime.now(timezone.utc)
