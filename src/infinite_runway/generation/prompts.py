"""Prompt templates for newsletter text and cover images."""
from typing import List

from ..models.newsletter import GenerationRequest, NewsletterType
from ..models.scraped_item import ScrapedItem

SYSTEM_PROMPTS = {
    NewsletterType.WEEKLY_DIGEST: (
        "You are an expert AI newsletter writer creating a comprehensive weekly digest for executives, "
        "investors, and tech leaders. Your writing style is professional, insightful, and data-driven. "
        "You focus on strategic implications and business value. "
        "Format the content in clean HTML with proper headings and paragraphs."
    ),
    NewsletterType.INNOVATION_REPORT: (
        "You are a technical AI newsletter writer creating content for developers, engineers, and technical "
        "professionals. Your writing style is technically accurate yet accessible, with practical examples "
        "and code snippets where relevant. Focus on new tools, frameworks, and technical breakthroughs. "
        "Format in HTML with code blocks using <pre> tags."
    ),
    NewsletterType.BUSINESS_CAREERS: (
        "You are a business-focused AI newsletter writer creating content for professionals, job seekers, "
        "and entrepreneurs. Your writing style is practical, inspiring, and action-oriented. Focus on "
        "real-world applications and career opportunities. Include actionable advice and success stories. "
        "Format in HTML with clear sections."
    ),
}

IMAGE_STYLE = (
    "Create a retro-futuristic illustration for an AI newsletter about {topic}. "
    "Style: 1980s aesthetic with modern twist, neon gradients (purple, blue, pink), geometric patterns. "
    "Elements: Abstract neural networks, data flows, digital grid patterns. "
    "Mood: Optimistic, innovative, cutting-edge technology. "
    "Composition: Clean, professional, suitable for newsletter header."
)

IMAGE_ACCENTS = {
    NewsletterType.WEEKLY_DIGEST: "Add subtle business/finance elements like graphs or charts in the background.",
    NewsletterType.INNOVATION_REPORT: "Include code-like elements, circuit patterns, or technical diagrams.",
    NewsletterType.BUSINESS_CAREERS: "Incorporate growth symbols, upward arrows, or career progression elements.",
}

EXCERPT_LENGTH = 200


def select_items(items: List[ScrapedItem], limit: int) -> List[ScrapedItem]:
    """Top items by relevance; ties keep their scrape order."""
    return sorted(items, key=lambda item: item.relevance_score, reverse=True)[:limit]


def build_content_prompt(request: GenerationRequest, items: List[ScrapedItem]) -> str:
    edition = request.edition()
    context = "\n".join(
        f"- {item.title} ({item.source}): {item.content[:EXCERPT_LENGTH]}..." for item in items
    )

    prompt = f"""Create a compelling newsletter based on these recent AI developments:

{context}

Requirements:
- Length: 2,500 words
- Include an engaging introduction
- Cover 5-7 main topics with analysis
- Add a "Key Takeaways" section
- Include relevant statistics and data points
- Maintain consistent tone for {edition.value} audience
- Format in clean HTML with <h2> headings, <p> paragraphs and <ul>/<li> for takeaways
"""
    if request.sponsor_info:
        prompt += f"- Naturally mention our sponsor {request.sponsor_info.name} where relevant\n"
    return prompt


def build_image_prompt(topic: str, edition: NewsletterType) -> str:
    accent = IMAGE_ACCENTS.get(edition, "")
    return f"{IMAGE_STYLE.format(topic=topic)} {accent} No text or words in the image."
