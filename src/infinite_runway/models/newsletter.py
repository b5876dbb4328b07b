from enum import Enum
from datetime import date as date_type
from typing import List, Optional
from pydantic import BaseModel, Field

from .publication import SponsorInfo
from .scraped_item import ScrapedItem


class NewsletterType(str, Enum):
    """Newsletter editions. AUTO picks an edition from the weekday."""

    WEEKLY_DIGEST = "weekly-digest"
    INNOVATION_REPORT = "innovation-report"
    BUSINESS_CAREERS = "business-careers"
    AUTO = "auto"

    def resolve(self, on: date_type) -> "NewsletterType":
        """Concrete edition for ``on``.

        Monday and Tuesday publish the weekly digest, Wednesday and Thursday
        the innovation report, Friday through Sunday business & careers.
        """
        if self is not NewsletterType.AUTO:
            return self
        weekday = on.weekday()
        if weekday <= 1:
            return NewsletterType.WEEKLY_DIGEST
        if weekday <= 3:
            return NewsletterType.INNOVATION_REPORT
        return NewsletterType.BUSINESS_CAREERS


class GenerationRequest(BaseModel):
    """Input to the Generation Client for one pipeline run."""

    type: NewsletterType
    date: date_type
    scraped_content: List[ScrapedItem] = Field(default_factory=list)
    sponsor_info: Optional[SponsorInfo] = None

    def edition(self) -> NewsletterType:
        return self.type.resolve(self.date)
