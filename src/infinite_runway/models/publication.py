from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from datetime import date, datetime
from typing import List, Optional

SLUG_PATTERN = r'^[a-z0-9]+(?:-[a-z0-9]+)*$'

# Accepted long-form date layouts, tried after ISO parsing
DATE_FORMATS = [
    "%B %d, %Y",   # December 10, 2023
    "%b %d, %Y",   # Dec 10, 2023
    "%d %B %Y",    # 10 December 2023
    "%m/%d/%Y",    # 12/10/2023
]


def parse_publish_date(value) -> date:
    """Parse a publication date.

    Raises:
        ValueError: If the value matches none of the accepted layouts
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported publish date type: {type(value).__name__}")

    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unparseable publish date: {value!r}")


class SponsorInfo(BaseModel):
    """Sponsor block rendered alongside an essay."""

    model_config = ConfigDict(frozen=True)

    name: str
    logo: str
    link: str
    description: Optional[str] = None
    cta_text: Optional[str] = None
    cta_link: Optional[str] = None


class PublicationRecord(BaseModel):
    """One essay or newsletter issue as consumed by the page-rendering layer."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    description: str
    image_url: str
    slug: str = Field(..., pattern=SLUG_PATTERN, description="Unique, URL-safe key")
    author_name: str
    author_image_url: Optional[str] = None
    publish_date: date
    content: str = Field(..., description="HTML body")
    excerpt: Optional[str] = Field(default=None, description="Plain-text lead for listings")
    tags: List[str] = Field(default_factory=list)
    reading_time: Optional[str] = None
    featured: bool = False
    sponsor_info: Optional[SponsorInfo] = None

    @field_validator('publish_date', mode='before')
    @classmethod
    def coerce_publish_date(cls, v):
        """Accept ISO strings and long-form dates such as 'December 10, 2023'."""
        return parse_publish_date(v)

    @computed_field
    @property
    def display_date(self) -> str:
        return f"{self.publish_date:%B} {self.publish_date.day}, {self.publish_date.year}"
