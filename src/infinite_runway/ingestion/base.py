from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional
import logging

import httpx

from ..config import Settings
from ..errors import SourceFetchError
from ..models.scraped_item import ScrapedItem

logger = logging.getLogger(__name__)


class BaseFetcher(ABC):
    """Abstract base class for all single-source fetchers."""

    name: str = "unknown"

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None) -> None:
        """
        Args:
            settings: Process settings (timeouts, item cap, user agent)
            client: Shared HTTP client; a private one is opened per fetch when omitted
        """
        self.settings = settings
        self._client = client

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(
            timeout=self.settings.request_timeout,
            headers={"User-Agent": self.settings.user_agent},
            follow_redirects=True,
        ) as client:
            yield client

    async def fetch_recent(self, max_results: Optional[int] = None) -> List[ScrapedItem]:
        """
        Fetch the newest items from the source.

        Args:
            max_results: Max items to return (defaults to settings.fetch_max_items)

        Returns:
            Items in source order, at most max_results long

        Raises:
            SourceFetchError: If the request or the parse fails
        """
        limit = max_results or self.settings.fetch_max_items
        try:
            async with self._session() as client:
                items = await self._fetch(client, limit)
        except SourceFetchError:
            raise
        except httpx.HTTPError as e:
            logger.error(f"{self.name} request failed: {e}")
            raise SourceFetchError(self.name, f"request failed: {e}") from e
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"{self.name} returned an unexpected payload: {e}")
            raise SourceFetchError(self.name, f"unexpected payload: {e}") from e

        items = items[:limit]
        logger.info(f"{self.name}: {len(items)} items fetched")
        return items

    @abstractmethod
    async def _fetch(self, client: httpx.AsyncClient, limit: int) -> List[ScrapedItem]:
        """Source-specific request and mapping into ScrapedItems."""
