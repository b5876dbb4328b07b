import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError

from ..errors import DuplicateSlugError
from ..models.publication import PublicationRecord

logger = logging.getLogger(__name__)


class NewsletterStore:
    """Generated newsletters persisted as one JSON document per slug."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def path_for(self, slug: str) -> Path:
        return self.directory / f"{slug}.json"

    def exists(self, slug: str) -> bool:
        return self.path_for(slug).exists()

    def save(self, record: PublicationRecord) -> Path:
        """
        Raises:
            DuplicateSlugError: If a newsletter with the same slug is already stored
        """
        path = self.path_for(record.slug)
        if path.exists():
            raise DuplicateSlugError(record.slug)
        self.directory.mkdir(parents=True, exist_ok=True)
        path.write_text(record.model_dump_json(indent=2), encoding="utf-8")
        logger.info(f"Saved newsletter {record.slug} to {path}")
        return path

    def load(self) -> List[PublicationRecord]:
        """All readable stored newsletters. Unreadable documents are logged and skipped."""
        if not self.directory.exists():
            return []

        records: List[PublicationRecord] = []
        for path in sorted(self.directory.glob("*.json")):
            try:
                records.append(PublicationRecord.model_validate_json(path.read_text(encoding="utf-8")))
            except (OSError, ValidationError) as e:
                logger.error(f"Error loading newsletter from {path}: {e}")
        return records
