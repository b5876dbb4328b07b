import re
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)


def clean_text(raw: str | None, max_length: int = 1000) -> str:
    """Strip markup and entities, collapse whitespace, trim to max_length."""
    if not raw:
        return ""
    text = BeautifulSoup(raw, "html.parser").get_text(" ")
    return " ".join(text.split())[:max_length]


def slugify(value: str) -> str:
    """Lowercase, hyphen-separated, URL-safe form of value."""
    return re.sub(r'[^a-z0-9]+', '-', value.lower()).strip('-')
