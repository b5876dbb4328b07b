from enum import Enum
from typing import List, Optional, Sequence

import httpx
from pydantic import BaseModel, Field

from ..config import Settings
from ..models.newsletter import NewsletterType
from .base import BaseFetcher
from .github_trending import GitHubTrendingFetcher
from .hackernews import HackerNewsFetcher
from .rss import RSSFeedFetcher


class SourceKind(str, Enum):
    API = "api"
    RSS = "rss"
    HTML = "html"


class SourceDefinition(BaseModel):
    """A content source and the editions it feeds."""

    name: str
    url: str
    kind: SourceKind
    newsletter_types: List[NewsletterType] = Field(default_factory=list)

    def serves(self, edition: NewsletterType) -> bool:
        return not self.newsletter_types or edition in self.newsletter_types


DEFAULT_SOURCES: List[SourceDefinition] = [
    # Weekly digest
    SourceDefinition(
        name="Hacker News",
        url=HackerNewsFetcher.TOP_STORIES_URL,
        kind=SourceKind.API,
        newsletter_types=[NewsletterType.WEEKLY_DIGEST],
    ),
    SourceDefinition(
        name="TechCrunch AI",
        url="https://techcrunch.com/category/artificial-intelligence/feed/",
        kind=SourceKind.RSS,
        newsletter_types=[NewsletterType.WEEKLY_DIGEST, NewsletterType.BUSINESS_CAREERS],
    ),
    SourceDefinition(
        name="VentureBeat AI",
        url="https://venturebeat.com/category/ai/feed/",
        kind=SourceKind.RSS,
        newsletter_types=[NewsletterType.WEEKLY_DIGEST, NewsletterType.INNOVATION_REPORT],
    ),
    # Innovation report
    SourceDefinition(
        name="GitHub Trending",
        url="https://github.com/trending",
        kind=SourceKind.HTML,
        newsletter_types=[NewsletterType.INNOVATION_REPORT],
    ),
    SourceDefinition(
        name="Product Hunt AI",
        url="https://www.producthunt.com/topics/artificial-intelligence/feed",
        kind=SourceKind.RSS,
        newsletter_types=[NewsletterType.INNOVATION_REPORT],
    ),
    SourceDefinition(
        name="Papers With Code",
        url="https://paperswithcode.com/feed",
        kind=SourceKind.RSS,
        newsletter_types=[NewsletterType.INNOVATION_REPORT],
    ),
    # Business & careers
    SourceDefinition(
        name="AI Jobs",
        url="https://ai-jobs.net/feed/",
        kind=SourceKind.RSS,
        newsletter_types=[NewsletterType.BUSINESS_CAREERS],
    ),
    SourceDefinition(
        name="The Information",
        url="https://www.theinformation.com/feed",
        kind=SourceKind.RSS,
        newsletter_types=[NewsletterType.BUSINESS_CAREERS, NewsletterType.WEEKLY_DIGEST],
    ),
]


def build_fetcher(source: SourceDefinition, settings: Settings, client: Optional[httpx.AsyncClient] = None) -> BaseFetcher:
    """
    Raises:
        ValueError: For API or HTML sources without an adapter
    """
    if source.kind is SourceKind.RSS:
        return RSSFeedFetcher(source.name, source.url, settings, client)
    if source.kind is SourceKind.API and source.name == HackerNewsFetcher.name:
        return HackerNewsFetcher(settings, client)
    if source.kind is SourceKind.HTML and source.name == "GitHub Trending":
        return GitHubTrendingFetcher(settings, client, url=source.url, name=source.name)
    raise ValueError(f"No {source.kind.value} fetcher implemented for: {source.name}")


def build_fetchers(
    settings: Settings,
    edition: NewsletterType,
    client: Optional[httpx.AsyncClient] = None,
    sources: Sequence[SourceDefinition] = DEFAULT_SOURCES,
) -> List[BaseFetcher]:
    """Fetchers for every source that serves the given (resolved) edition."""
    return [build_fetcher(source, settings, client) for source in sources if source.serves(edition)]
