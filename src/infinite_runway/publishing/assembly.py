from datetime import date
from typing import Optional

from ..config import Settings
from ..models.newsletter import NewsletterType
from ..models.publication import PublicationRecord, SponsorInfo
from .html import clean_generated_html, excerpt, reading_time

TITLES = {
    NewsletterType.WEEKLY_DIGEST: "Weekly AI Digest",
    NewsletterType.INNOVATION_REPORT: "AI Innovation Report",
    NewsletterType.BUSINESS_CAREERS: "AI Business & Careers",
}

DESCRIPTIONS = {
    NewsletterType.WEEKLY_DIGEST: "Your weekly roundup of AI news, funding, and industry insights",
    NewsletterType.INNOVATION_REPORT: "The latest AI tools, research, and technical breakthroughs",
    NewsletterType.BUSINESS_CAREERS: "AI job opportunities, business applications, and career insights",
}

IMAGE_TOPICS = {
    NewsletterType.WEEKLY_DIGEST: "AI industry landscape and business growth",
    NewsletterType.INNOVATION_REPORT: "cutting-edge AI technology and innovation",
    NewsletterType.BUSINESS_CAREERS: "AI careers and professional development",
}

TAGS = {
    NewsletterType.WEEKLY_DIGEST: ["newsletter", "weekly-digest", "ai", "business"],
    NewsletterType.INNOVATION_REPORT: ["newsletter", "innovation-report", "ai", "research"],
    NewsletterType.BUSINESS_CAREERS: ["newsletter", "business-careers", "ai", "careers"],
}


def newsletter_slug(edition: NewsletterType, on: date) -> str:
    return f"{edition.value}-{on.isoformat()}"


def newsletter_title(edition: NewsletterType, on: date) -> str:
    return f"{TITLES[edition]} - {on:%B} {on.day}, {on.year}"


def build_publication(
    edition: NewsletterType,
    on: date,
    raw_content: str,
    image_url: str,
    settings: Settings,
    sponsor_info: Optional[SponsorInfo] = None,
) -> PublicationRecord:
    """Publication record for a generated newsletter issue."""
    content = clean_generated_html(raw_content)
    return PublicationRecord(
        title=newsletter_title(edition, on),
        description=DESCRIPTIONS[edition],
        image_url=image_url,
        slug=newsletter_slug(edition, on),
        author_name=settings.author_name,
        author_image_url=settings.author_image_url,
        publish_date=on,
        content=content,
        excerpt=excerpt(content),
        tags=TAGS[edition],
        reading_time=reading_time(content),
        sponsor_info=sponsor_info,
    )
