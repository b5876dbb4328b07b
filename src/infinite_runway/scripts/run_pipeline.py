import argparse
import asyncio
import logging
import sys
from datetime import date
from typing import Optional

from dotenv import load_dotenv

from infinite_runway.config import load_settings
from infinite_runway.errors import RunwayError
from infinite_runway.generation.client import GenerationClient
from infinite_runway.models.newsletter import NewsletterType
from infinite_runway.orchestration.newsletter_graph import NewsletterGraph
from infinite_runway.publishing.store import NewsletterStore
from infinite_runway.utils.logging import AuditLogger, configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate one Infinite Runway newsletter issue")
    parser.add_argument(
        "--type",
        default=NewsletterType.AUTO.value,
        choices=[t.value for t in NewsletterType],
        help="Newsletter edition (auto picks by weekday)",
    )
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="Issue date (YYYY-MM-DD)")
    parser.add_argument("--dry-run", action="store_true", help="Generate without saving")
    return parser.parse_args(argv)


async def run_pipeline(args: argparse.Namespace) -> int:
    settings = load_settings()
    configure_logging(settings.log_level)

    logger.info("Starting Infinite Runway newsletter pipeline")
    missing = settings.missing_generation_settings()
    if missing:
        logger.error(f"Missing generation settings: {', '.join(missing)}")
        return 2

    graph = NewsletterGraph(
        settings,
        GenerationClient(settings),
        NewsletterStore(settings.newsletters_dir),
        audit=AuditLogger("pipeline", settings.log_dir),
    )

    try:
        record = await graph.run(
            NewsletterType(args.type), on=args.date, sponsor_info=settings.sponsor, dry_run=args.dry_run,
        )
    except RunwayError as e:
        logger.error(f"❌ Newsletter generation failed: {e}")
        return 1

    if record is None:
        logger.warning("No content scraped; nothing generated")
        return 1

    print("\n" + "=" * 50)
    print(f"TITLE: {record.title}")
    print(f"SLUG: {record.slug}")
    print(f"READING TIME: {record.reading_time}")
    print("=" * 50)
    return 0


def main() -> None:
    load_dotenv()
    sys.exit(asyncio.run(run_pipeline(parse_args())))


if __name__ == "__main__":
    main()
