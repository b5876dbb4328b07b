from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Set


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScrapedItem(BaseModel):
    """One normalized unit of external content gathered by a fetcher."""

    id: str = Field(..., description="Source-prefixed identifier, e.g. hn-12345")
    title: str
    content: str = Field(default="", description="Plain text excerpt")
    url: str
    source: str = Field(..., description="Display name of the origin, e.g. Hacker News")
    published_at: datetime = Field(default_factory=_utcnow)
    relevance_score: float = Field(default=0.0, ge=0.0, le=100.0)
    tags: Set[str] = Field(default_factory=set)
    used: bool = Field(default=False, description="Already incorporated into a publication")

    def mark_used(self) -> None:
        self.used = True
