import logging
import time
from typing import Optional

import openai

from ..config import Settings
from ..errors import ConfigurationError, EmptyGenerationRequestError, GenerationError
from ..models.newsletter import GenerationRequest, NewsletterType
from ..utils.secrets import get_secret
from .prompts import SYSTEM_PROMPTS, build_content_prompt, build_image_prompt, select_items

logger = logging.getLogger(__name__)


class GenerationClient:
    """Wrapper around the hosted Azure OpenAI completion and image endpoints."""

    def __init__(
        self,
        settings: Settings,
        text_client: Optional[openai.AsyncAzureOpenAI] = None,
        image_client: Optional[openai.AsyncAzureOpenAI] = None,
    ) -> None:
        """
        Args:
            settings: Process settings with the Azure endpoints and deployments
            text_client: Preconfigured completion client (built from settings when omitted)
            image_client: Preconfigured image client (built from settings when omitted)

        Raises:
            ConfigurationError: If a client must be built and settings are incomplete
        """
        self.settings = settings
        self.deployment = settings.azure_openai_deployment_name or ""
        self.image_deployment = settings.azure_image_deployment_name or ""
        self.text_client = text_client or self._build_text_client()
        self.image_client = image_client or self._build_image_client()

    def _build_text_client(self) -> openai.AsyncAzureOpenAI:
        if not self.settings.azure_openai_endpoint or not self.deployment:
            raise ConfigurationError("Missing required Azure OpenAI config: endpoint or deployment name")
        try:
            api_key = get_secret("azure_openai_api_key", self.settings.azure_openai_api_key)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        logger.info(f"Initialized Azure OpenAI client: deployment={self.deployment}")
        return openai.AsyncAzureOpenAI(
            azure_endpoint=self.settings.azure_openai_endpoint,
            api_key=api_key,
            api_version=self.settings.azure_openai_api_version,
            timeout=self.settings.request_timeout * 4,
        )

    def _build_image_client(self) -> openai.AsyncAzureOpenAI:
        if not self.settings.azure_image_endpoint or not self.image_deployment:
            raise ConfigurationError("Missing required Azure image config: endpoint or deployment name")
        try:
            api_key = get_secret("azure_image_api_key", self.settings.azure_image_api_key)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        logger.info(f"Initialized Azure image client: deployment={self.image_deployment}")
        return openai.AsyncAzureOpenAI(
            azure_endpoint=self.settings.azure_image_endpoint,
            api_key=api_key,
            api_version=self.settings.azure_image_api_version,
            timeout=self.settings.request_timeout * 4,
        )

    async def generate_newsletter_content(self, request: GenerationRequest) -> str:
        """
        Draft the newsletter body as HTML.

        Items included in the prompt are marked used once the model answers.

        Raises:
            EmptyGenerationRequestError: If the request has no scraped content
            GenerationError: If the hosted call fails or returns no text
        """
        if not request.scraped_content:
            raise EmptyGenerationRequestError(
                f"No scraped content for {request.type.value} on {request.date.isoformat()}"
            )

        edition = request.edition()
        items = select_items(request.scraped_content, self.settings.max_prompt_items)
        messages = [
            {"role": "system", "content": SYSTEM_PROMPTS[edition]},
            {"role": "user", "content": build_content_prompt(request, items)},
        ]

        request_ts = time.time()
        logger.info(f"LLM_REQUEST provider=azure deployment={self.deployment} items={len(items)} edition={edition.value}")
        try:
            response = await self.text_client.chat.completions.create(
                model=self.deployment,
                messages=messages,
                temperature=self.settings.llm_temperature,
                max_tokens=self.settings.llm_max_tokens,
                top_p=0.95,
                frequency_penalty=0.5,
                presence_penalty=0.5,
            )
        except openai.OpenAIError as e:
            duration_ms = int((time.time() - request_ts) * 1000)
            logger.error(f"LLM_RESPONSE provider=azure deployment={self.deployment} status=error duration_ms={duration_ms} error={str(e)[:100]}")
            raise GenerationError(f"Azure OpenAI content generation failed: {e}") from e

        duration_ms = int((time.time() - request_ts) * 1000)
        content = response.choices[0].message.content if response.choices else None
        if not content:
            logger.error(f"LLM_RESPONSE provider=azure deployment={self.deployment} status=empty duration_ms={duration_ms}")
            raise GenerationError("Azure OpenAI returned an empty completion")

        logger.info(f"LLM_RESPONSE provider=azure deployment={self.deployment} status=success duration_ms={duration_ms}")
        for item in items:
            item.mark_used()
        return content

    async def generate_newsletter_image(self, topic: str, newsletter_type: NewsletterType) -> str:
        """
        Generate a cover image.

        Returns:
            A data URI for base64 replies, otherwise the hosted image URL

        Raises:
            GenerationError: If the hosted call fails or returns no image
        """
        prompt = build_image_prompt(topic, newsletter_type)
        request_ts = time.time()
        logger.info(f"IMAGE_REQUEST provider=azure deployment={self.image_deployment} topic={topic!r}")
        try:
            response = await self.image_client.images.generate(
                model=self.image_deployment,
                prompt=prompt,
                n=1,
                size=self.settings.image_size,
                quality="medium",
                output_format="png",
            )
        except openai.OpenAIError as e:
            logger.error(f"IMAGE_RESPONSE provider=azure status=error error={str(e)[:100]}")
            raise GenerationError(f"Azure OpenAI image generation failed: {e}") from e

        duration_ms = int((time.time() - request_ts) * 1000)
        image = response.data[0] if response.data else None
        if image is not None and image.b64_json:
            logger.info(f"IMAGE_RESPONSE provider=azure status=success format=b64 duration_ms={duration_ms}")
            return f"data:image/png;base64,{image.b64_json}"
        if image is not None and image.url:
            logger.info(f"IMAGE_RESPONSE provider=azure status=success format=url duration_ms={duration_ms}")
            return image.url
        raise GenerationError("Azure OpenAI returned no image")

    async def test_connection(self) -> bool:
        """Liveness check against the completion deployment. Never raises."""
        try:
            await self.text_client.chat.completions.create(
                model=self.deployment,
                messages=[{"role": "user", "content": "Test connection"}],
                max_tokens=5,
            )
            return True
        except openai.OpenAIError as e:
            logger.error(f"Azure OpenAI connection test failed: {e}")
            return False
