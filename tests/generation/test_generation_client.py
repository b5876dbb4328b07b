"""Test the Azure OpenAI generation client with mocked SDK clients."""
from datetime import date
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from infinite_runway.errors import ConfigurationError, EmptyGenerationRequestError, GenerationError
from infinite_runway.generation.client import GenerationClient
from infinite_runway.models.newsletter import GenerationRequest, NewsletterType
from infinite_runway.models.publication import SponsorInfo
from tests.fixtures.sources import make_item


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def image_response(b64_json=None, url=None):
    return SimpleNamespace(data=[SimpleNamespace(b64_json=b64_json, url=url)])


def connection_error():
    return openai.APIConnectionError(request=httpx.Request("POST", "https://example.openai.azure.com"))


class TestGenerationClient:

    @pytest.fixture
    def text_client(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=completion("<h2>This week</h2><p>...</p>"))
        return client

    @pytest.fixture
    def image_client(self):
        client = MagicMock()
        client.images.generate = AsyncMock(return_value=image_response(b64_json="aGVsbG8="))
        return client

    @pytest.fixture
    def client(self, settings, text_client, image_client):
        return GenerationClient(settings, text_client=text_client, image_client=image_client)

    @pytest.mark.asyncio
    async def test_empty_request_fails_without_calling_api(self, client, text_client):
        request = GenerationRequest(type=NewsletterType.WEEKLY_DIGEST, date=date(2026, 10, 19))

        with pytest.raises(EmptyGenerationRequestError):
            await client.generate_newsletter_content(request)

        text_client.chat.completions.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_content_generation(self, client, text_client, settings):
        items = [make_item("hn-1", title="OpenAI ships new model"), make_item("hn-2", title="Robotics funding round")]
        request = GenerationRequest(type=NewsletterType.WEEKLY_DIGEST, date=date(2026, 10, 19), scraped_content=items)

        content = await client.generate_newsletter_content(request)

        assert content == "<h2>This week</h2><p>...</p>"
        kwargs = text_client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == settings.azure_openai_deployment_name
        assert kwargs["temperature"] == settings.llm_temperature
        assert kwargs["max_tokens"] == settings.llm_max_tokens
        system, user = kwargs["messages"]
        assert "executives" in system["content"]
        assert "OpenAI ships new model (Hacker News)" in user["content"]
        assert "Robotics funding round" in user["content"]

    @pytest.mark.asyncio
    async def test_auto_request_uses_resolved_edition_prompt(self, client, text_client):
        # 2026-10-21 is a Wednesday
        request = GenerationRequest(type=NewsletterType.AUTO, date=date(2026, 10, 21), scraped_content=[make_item()])

        await client.generate_newsletter_content(request)

        system = text_client.chat.completions.create.await_args.kwargs["messages"][0]
        assert "developers" in system["content"]

    @pytest.mark.asyncio
    async def test_prompt_items_marked_used(self, settings, text_client, image_client):
        client = GenerationClient(settings.model_copy(update={"max_prompt_items": 2}), text_client, image_client)
        items = [
            make_item("hn-1", relevance_score=10),
            make_item("hn-2", relevance_score=90),
            make_item("hn-3", relevance_score=50),
        ]
        request = GenerationRequest(type=NewsletterType.WEEKLY_DIGEST, date=date(2026, 10, 19), scraped_content=items)

        await client.generate_newsletter_content(request)

        assert [item.used for item in items] == [False, True, True]

    @pytest.mark.asyncio
    async def test_sponsor_mentioned_in_prompt(self, client, text_client):
        sponsor = SponsorInfo(name="Acme Cloud", logo="/images/acme.svg", link="https://acme.example")
        request = GenerationRequest(
            type=NewsletterType.WEEKLY_DIGEST, date=date(2026, 10, 19),
            scraped_content=[make_item()], sponsor_info=sponsor,
        )

        await client.generate_newsletter_content(request)

        user = text_client.chat.completions.create.await_args.kwargs["messages"][1]
        assert "Acme Cloud" in user["content"]

    @pytest.mark.asyncio
    async def test_api_error_becomes_generation_error(self, client, text_client):
        text_client.chat.completions.create.side_effect = connection_error()
        items = [make_item()]
        request = GenerationRequest(type=NewsletterType.WEEKLY_DIGEST, date=date(2026, 10, 19), scraped_content=items)

        with pytest.raises(GenerationError):
            await client.generate_newsletter_content(request)
        assert items[0].used is False

    @pytest.mark.asyncio
    async def test_empty_completion_is_an_error(self, client, text_client):
        text_client.chat.completions.create.return_value = completion("")
        request = GenerationRequest(type=NewsletterType.WEEKLY_DIGEST, date=date(2026, 10, 19), scraped_content=[make_item()])

        with pytest.raises(GenerationError):
            await client.generate_newsletter_content(request)

    @pytest.mark.asyncio
    async def test_base64_image_returned_as_data_uri(self, client, image_client, settings):
        url = await client.generate_newsletter_image("AI careers", NewsletterType.BUSINESS_CAREERS)

        assert url == "data:image/png;base64,aGVsbG8="
        kwargs = image_client.images.generate.await_args.kwargs
        assert kwargs["model"] == settings.azure_image_deployment_name
        assert kwargs["n"] == 1
        assert "AI careers" in kwargs["prompt"]

    @pytest.mark.asyncio
    async def test_hosted_image_url_returned(self, client, image_client):
        image_client.images.generate.return_value = image_response(url="https://cdn.example/cover.png")

        url = await client.generate_newsletter_image("AI tools", NewsletterType.INNOVATION_REPORT)

        assert url == "https://cdn.example/cover.png"

    @pytest.mark.asyncio
    async def test_image_failure_raises(self, client, image_client):
        image_client.images.generate.side_effect = connection_error()

        with pytest.raises(GenerationError):
            await client.generate_newsletter_image("AI tools", NewsletterType.INNOVATION_REPORT)

    @pytest.mark.asyncio
    async def test_missing_image_payload_raises(self, client, image_client):
        image_client.images.generate.return_value = SimpleNamespace(data=[])

        with pytest.raises(GenerationError):
            await client.generate_newsletter_image("AI tools", NewsletterType.INNOVATION_REPORT)

    @pytest.mark.asyncio
    async def test_connection_check(self, client, text_client):
        assert await client.test_connection() is True

        text_client.chat.completions.create.side_effect = connection_error()
        assert await client.test_connection() is False


class TestClientConstruction:

    def test_missing_endpoint_is_configuration_error(self, settings):
        with pytest.raises(ConfigurationError):
            GenerationClient(settings.model_copy(update={"azure_openai_endpoint": None}))

    def test_missing_key_is_configuration_error(self, settings, monkeypatch):
        configured = settings.model_copy(update={
            "azure_openai_endpoint": "https://example.openai.azure.com",
            "azure_openai_api_key": None,
        })
        monkeypatch.setattr(
            "infinite_runway.generation.client.get_secret",
            MagicMock(side_effect=ValueError("Secret azure_openai_api_key not found")),
        )
        with pytest.raises(ConfigurationError, match="azure_openai_api_key"):
            GenerationClient(configured)
