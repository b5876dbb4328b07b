"""Query every content source once and report what came back."""
import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from infinite_runway.config import load_settings
from infinite_runway.errors import SourceFetchError
from infinite_runway.ingestion.sources import DEFAULT_SOURCES, build_fetcher
from infinite_runway.utils.logging import configure_logging

logger = logging.getLogger(__name__)


async def check_sources(max_results: int) -> int:
    settings = load_settings()
    configure_logging(settings.log_level)

    failures = 0
    for source in DEFAULT_SOURCES:
        fetcher = build_fetcher(source, settings)
        print(f"📡 Testing {source.name}...")
        try:
            items = await fetcher.fetch_recent(max_results=max_results)
        except SourceFetchError as e:
            failures += 1
            print(f"❌ {source.name} failed: {e}\n")
            continue

        print(f"✅ {source.name}: {len(items)} items fetched")
        for i, item in enumerate(items, 1):
            print(f"   {i}. {item.title}")
        print()

    print(f"Done: {len(DEFAULT_SOURCES) - failures}/{len(DEFAULT_SOURCES)} sources answered")
    return failures


def main() -> None:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Check newsletter content sources")
    parser.add_argument("--max-results", type=int, default=3)
    args = parser.parse_args()
    failures = asyncio.run(check_sources(args.max_results))
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
