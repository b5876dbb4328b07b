"""Report missing generation settings and check the hosted model."""
import asyncio
import logging
import sys

from dotenv import load_dotenv

from infinite_runway.config import load_settings
from infinite_runway.errors import ConfigurationError
from infinite_runway.generation.client import GenerationClient
from infinite_runway.utils.logging import configure_logging

logger = logging.getLogger(__name__)


async def check_connection() -> int:
    settings = load_settings()
    configure_logging(settings.log_level)

    missing = settings.missing_generation_settings()
    for name in missing:
        print(f"❌ {name.upper()} is not set")
    if missing:
        return 2

    try:
        client = GenerationClient(settings)
    except ConfigurationError as e:
        print(f"❌ {e}")
        return 2

    if await client.test_connection():
        print(f"✅ Azure OpenAI deployment '{settings.azure_openai_deployment_name}' is reachable")
        return 0
    print("❌ Azure OpenAI connection test failed")
    return 1


def main() -> None:
    load_dotenv()
    sys.exit(asyncio.run(check_connection()))


if __name__ == "__main__":
    main()
