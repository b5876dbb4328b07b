"""Test prompt construction."""
from datetime import date

from infinite_runway.generation.prompts import build_content_prompt, build_image_prompt, select_items
from infinite_runway.models.newsletter import GenerationRequest, NewsletterType
from tests.fixtures.sources import make_item


class TestPrompts:

    def test_select_items_by_relevance(self):
        items = [make_item("a", relevance_score=1), make_item("b", relevance_score=3), make_item("c", relevance_score=2)]
        assert [item.id for item in select_items(items, 2)] == ["b", "c"]

    def test_content_prompt_truncates_excerpts(self):
        item = make_item(content="x" * 500)
        request = GenerationRequest(type=NewsletterType.WEEKLY_DIGEST, date=date(2026, 10, 19), scraped_content=[item])

        prompt = build_content_prompt(request, [item])

        assert "x" * 200 + "..." in prompt
        assert "x" * 201 not in prompt
        assert "weekly-digest audience" in prompt

    def test_image_prompt_has_edition_accent(self):
        prompt = build_image_prompt("AI tools", NewsletterType.INNOVATION_REPORT)
        assert "AI tools" in prompt
        assert "circuit patterns" in prompt
        assert prompt.endswith("No text or words in the image.")
