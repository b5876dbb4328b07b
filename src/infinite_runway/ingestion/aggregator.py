import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

import httpx
from pydantic import BaseModel, Field

from ..config import Settings
from ..errors import SourceFetchError
from ..models.newsletter import NewsletterType
from ..models.scraped_item import ScrapedItem
from .base import BaseFetcher
from .scoring import score_items
from .sources import build_fetchers

logger = logging.getLogger(__name__)


class AggregationResult(BaseModel):
    """Scored items from every source that answered, plus per-source outcome."""

    items: List[ScrapedItem] = Field(default_factory=list)
    counts: Dict[str, int] = Field(default_factory=dict, description="Items per successful source")
    failures: Dict[str, str] = Field(default_factory=dict, description="Error message per failed source")

    @property
    def sources(self) -> List[str]:
        return list(self.counts)


class ContentAggregator:
    """Runs a set of fetchers and merges their items.

    A failing fetcher is logged and skipped; the others still contribute.
    """

    def __init__(self, fetchers: Sequence[BaseFetcher]):
        self.fetchers = list(fetchers)

    @classmethod
    def for_newsletter(
        cls,
        settings: Settings,
        edition: NewsletterType,
        client: Optional[httpx.AsyncClient] = None,
    ) -> "ContentAggregator":
        return cls(build_fetchers(settings, edition, client))

    async def collect(self, edition: NewsletterType, now: Optional[datetime] = None) -> AggregationResult:
        now = now or datetime.now(timezone.utc)
        result = AggregationResult()
        collected: List[ScrapedItem] = []

        for fetcher in self.fetchers:
            try:
                items = await fetcher.fetch_recent()
            except SourceFetchError as e:
                logger.error(f"Error scraping {fetcher.name}: {e}")
                result.failures[fetcher.name] = str(e)
                continue
            result.counts[fetcher.name] = len(items)
            collected.extend(items)

        result.items = score_items(collected, edition, now)
        logger.info(
            f"📊 Aggregation: {len(result.items)} items from {len(result.counts)} sources, "
            f"{len(result.failures)} failed"
        )
        return result
