"""
The combined set of publication records served by the site.

Records come from explicit content providers (hand-authored essays, the
generated-newsletter store). A missing provider contributes nothing; a
repeated slug is an error.
"""
import logging
import math
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from ..errors import DuplicateSlugError
from ..models.publication import PublicationRecord

logger = logging.getLogger(__name__)


class ContentProvider(Protocol):
    def load(self) -> Sequence[PublicationRecord]:
        ...


class StaticContentProvider:
    """Provider over a fixed, in-memory list of records."""

    def __init__(self, records: Sequence[PublicationRecord]):
        self._records = list(records)

    def load(self) -> Sequence[PublicationRecord]:
        return list(self._records)


class PublicationCatalog:
    """Publication records ordered newest first, indexed by slug."""

    def __init__(self, providers: Sequence[ContentProvider]):
        self.providers = list(providers)
        self._records: List[PublicationRecord] = []
        self._by_slug: Dict[str, PublicationRecord] = {}
        self.refresh()

    def refresh(self) -> None:
        """
        Reload every provider.

        Raises:
            DuplicateSlugError: If two records share a slug
        """
        records: List[PublicationRecord] = []
        by_slug: Dict[str, PublicationRecord] = {}
        for provider in self.providers:
            for record in provider.load():
                if record.slug in by_slug:
                    raise DuplicateSlugError(record.slug)
                by_slug[record.slug] = record
                records.append(record)

        # sorted() is stable: same-day records keep provider order
        self._records = sorted(records, key=lambda r: r.publish_date, reverse=True)
        self._by_slug = by_slug
        logger.info(f"Catalog loaded {len(self._records)} publications from {len(self.providers)} providers")

    def all(self) -> List[PublicationRecord]:
        return list(self._records)

    def get_by_slug(self, slug: str) -> Optional[PublicationRecord]:
        return self._by_slug.get(slug)

    def paginate(self, page: int = 1, per_page: int = 9) -> Tuple[List[PublicationRecord], int]:
        """Records on a 1-based page and the total page count."""
        if page < 1 or per_page < 1:
            raise ValueError("page and per_page must be positive")
        start = (page - 1) * per_page
        total_pages = math.ceil(len(self._records) / per_page)
        return self._records[start:start + per_page], total_pages

    def search(self, query: str) -> List[PublicationRecord]:
        """Case-insensitive match on title, description or content. Blank query matches nothing."""
        needle = (query or "").strip().lower()
        if not needle:
            return []
        return [
            record for record in self._records
            if needle in record.title.lower()
            or needle in record.description.lower()
            or needle in record.content.lower()
        ]
