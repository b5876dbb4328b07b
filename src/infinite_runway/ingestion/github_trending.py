import logging
import re
from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup, Tag

from ..config import Settings
from ..models.scraped_item import ScrapedItem
from .base import BaseFetcher
from .scoring import extract_tags

logger = logging.getLogger(__name__)


class GitHubTrendingFetcher(BaseFetcher):
    """Repositories listed on the GitHub trending page.

    Parsed by structural selector; a markup change upstream yields an
    empty result rather than an error.
    """

    BASE_URL = "https://github.com"
    ROW_SELECTOR = ".Box-row"

    def __init__(
        self,
        settings: Settings,
        client: Optional[httpx.AsyncClient] = None,
        url: str = "https://github.com/trending",
        name: str = "GitHub Trending",
    ) -> None:
        super().__init__(settings, client)
        self.url = url
        self.name = name

    async def _fetch(self, client: httpx.AsyncClient, limit: int) -> List[ScrapedItem]:
        response = await client.get(self.url, headers={"User-Agent": self.settings.user_agent})
        response.raise_for_status()

        soup = BeautifulSoup(response.text, "html.parser")
        rows = soup.select(self.ROW_SELECTOR)
        if not rows:
            logger.warning(f"{self.name}: no rows matched '{self.ROW_SELECTOR}'")

        items: List[ScrapedItem] = []
        for row in rows:
            item = self._parse_row(row)
            if item:
                items.append(item)
            if len(items) >= limit:
                break
        return items

    def _parse_row(self, row: Tag) -> Optional[ScrapedItem]:
        link = row.select_one("h2 a")
        if link is None:
            return None
        # "owner /\n  repo" -> "owner / repo"
        title = " ".join(link.get_text().split())
        if not title:
            return None

        description_el = row.select_one("p")
        description = " ".join(description_el.get_text().split()) if description_el else ""
        star = row.select_one(".octicon-star")
        stars = " ".join(star.parent.get_text().split()) if star is not None and star.parent else ""

        content = description or "Trending repository on GitHub"
        if stars:
            content = f"{content}. Stars: {stars}"

        item_id = re.sub(r'[^\w-]', '-', title)
        return ScrapedItem(
            id=f"github-{item_id}",
            title=title,
            content=content,
            url=urljoin(self.BASE_URL, link.get("href", "")),
            source=self.name,
            published_at=datetime.now(timezone.utc),
            tags=extract_tags(f"{title} {description}"),
        )
