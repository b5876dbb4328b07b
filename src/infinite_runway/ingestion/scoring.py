"""
Keyword tagging and relevance scoring for scraped items.

Score = source reliability + recency bonus + AI keyword hits x2
        + edition keyword hits x1.5 + tag count, capped at 100.
"""
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Set

from ..models.newsletter import NewsletterType
from ..models.scraped_item import ScrapedItem

COMMON_TAGS = [
    'ai', 'ml', 'machine-learning', 'deep-learning', 'neural-network',
    'gpt', 'llm', 'transformer', 'diffusion', 'computer-vision',
    'nlp', 'robotics', 'automation', 'data-science', 'startup',
    'funding', 'investment', 'tech', 'innovation', 'research',
]

AI_KEYWORDS = ['ai', 'artificial intelligence', 'machine learning', 'gpt', 'llm', 'neural']

SOURCE_SCORES: Dict[str, float] = {
    'Hacker News': 8,
    'TechCrunch AI': 9,
    'VentureBeat AI': 8,
    'GitHub Trending': 7,
    'Product Hunt AI': 7,
    'Papers With Code': 9,
    'The Information': 9,
    'AI Jobs': 6,
}
DEFAULT_SOURCE_SCORE = 5

EDITION_KEYWORDS: Dict[NewsletterType, List[str]] = {
    NewsletterType.WEEKLY_DIGEST: [
        'funding', 'investment', 'startup', 'acquisition', 'ipo', 'revenue', 'valuation',
    ],
    NewsletterType.INNOVATION_REPORT: [
        'open-source', 'github', 'api', 'sdk', 'framework', 'library', 'tool', 'release',
    ],
    NewsletterType.BUSINESS_CAREERS: [
        'hiring', 'job', 'career', 'salary', 'remote', 'team', 'culture', 'growth',
    ],
}
EDITION_MULTIPLIER = 1.5
MAX_SCORE = 100.0


def extract_tags(text: str) -> Set[str]:
    """Vocabulary tags whose word (or hyphen-less form) occurs in text."""
    lower = text.lower()
    return {
        tag for tag in COMMON_TAGS
        if tag in lower or tag.replace('-', ' ') in lower
    }


def _recency_bonus(published_at: datetime, now: datetime) -> float:
    if published_at.tzinfo is None:
        published_at = published_at.replace(tzinfo=timezone.utc)
    age_hours = (now - published_at).total_seconds() / 3600
    if age_hours < 24:
        return 5
    if age_hours < 48:
        return 3
    if age_hours < 168:
        return 1
    return 0


def score_item(item: ScrapedItem, edition: NewsletterType, now: Optional[datetime] = None) -> float:
    now = now or datetime.now(timezone.utc)
    text = f"{item.title} {item.content}".lower()

    score = SOURCE_SCORES.get(item.source, DEFAULT_SOURCE_SCORE)
    score += _recency_bonus(item.published_at, now)
    score += sum(1 for kw in AI_KEYWORDS if kw in text) * 2
    keywords = EDITION_KEYWORDS.get(edition, [])
    score += sum(1 for kw in keywords if kw in text) * EDITION_MULTIPLIER
    score += len(item.tags)
    return min(float(score), MAX_SCORE)


def score_items(items: Iterable[ScrapedItem], edition: NewsletterType, now: Optional[datetime] = None) -> List[ScrapedItem]:
    """Scored copies of items, highest first. Ties keep their input order."""
    now = now or datetime.now(timezone.utc)
    scored = [
        item.model_copy(update={"relevance_score": score_item(item, edition, now)})
        for item in items
    ]
    return sorted(scored, key=lambda item: item.relevance_score, reverse=True)
