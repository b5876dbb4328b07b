"""Post-processing of model-generated HTML."""
import math
import re

from bs4 import BeautifulSoup

FENCE_PATTERN = re.compile(r"```(?:html)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
BODY_PATTERN = re.compile(r"<body[^>]*>(.*?)</body>", re.DOTALL | re.IGNORECASE)
H1_PATTERN = re.compile(r"<h1[^>]*>.*?</h1>", re.DOTALL | re.IGNORECASE)
WORDS_PER_MINUTE = 200


def clean_generated_html(text: str) -> str:
    """Reduce a model reply to the article body.

    Unwraps a fenced code block, keeps only the <body> contents of a full
    document and drops the first <h1> (the page renders its own title).
    """
    cleaned = text.strip()
    fence = FENCE_PATTERN.search(cleaned)
    if fence:
        cleaned = fence.group(1).strip()
    body = BODY_PATTERN.search(cleaned)
    if body:
        cleaned = body.group(1).strip()
    return H1_PATTERN.sub("", cleaned, count=1).strip()


def plain_text(html: str) -> str:
    return " ".join(BeautifulSoup(html, "html.parser").get_text(" ").split())


def excerpt(html: str, length: int = 200) -> str:
    text = plain_text(html)
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "..."


def reading_time(html: str) -> str:
    words = len(plain_text(html).split())
    return f"{max(1, math.ceil(words / WORDS_PER_MINUTE))} min read"
