from datetime import date
from typing import Any, Callable, List, Optional, TypedDict, cast
import logging
import time

from langgraph.graph import StateGraph, END

from ..config import Settings
from ..errors import DuplicateSlugError, GenerationError
from ..generation.client import GenerationClient
from ..generation.prompts import build_content_prompt, select_items
from ..ingestion.aggregator import AggregationResult, ContentAggregator
from ..models.newsletter import GenerationRequest, NewsletterType
from ..models.publication import PublicationRecord, SponsorInfo
from ..models.scraped_item import ScrapedItem
from ..publishing.assembly import IMAGE_TOPICS, build_publication, newsletter_slug
from ..publishing.images import CoverImageStore
from ..publishing.store import NewsletterStore
from ..utils.logging import AuditLogger

logger = logging.getLogger(__name__)

AggregatorFactory = Callable[[NewsletterType], ContentAggregator]


class NewsletterState(TypedDict):
    edition: NewsletterType
    date: date
    sponsor_info: Optional[SponsorInfo]
    dry_run: bool
    aggregation: Optional[AggregationResult]
    items: List[ScrapedItem]
    prompt: Optional[str]
    content: Optional[str]
    image_url: Optional[str]
    record: Optional[PublicationRecord]


class NewsletterGraph:
    """One newsletter issue: collect -> draft -> illustrate -> publish.

    Runs without scraped content stop after collection. A failed draft
    aborts the run and nothing is published; a failed cover image falls
    back to the default image.
    """

    def __init__(
        self,
        settings: Settings,
        generation_client: GenerationClient,
        store: NewsletterStore,
        aggregator_factory: Optional[AggregatorFactory] = None,
        audit: Optional[AuditLogger] = None,
        images: Optional[CoverImageStore] = None,
    ) -> None:
        self.settings = settings
        self.generation_client = generation_client
        self.store = store
        self.aggregator_factory = aggregator_factory or (
            lambda edition: ContentAggregator.for_newsletter(settings, edition)
        )
        self.audit = audit
        self.images = images or CoverImageStore(settings.images_dir, settings.images_url_path)
        self.workflow = self._build_graph()

    def _build_graph(self) -> Any:
        workflow = StateGraph(NewsletterState)

        # Nodes
        workflow.add_node("collect", self.collect_node)
        workflow.add_node("draft", self.draft_node)
        workflow.add_node("illustrate", self.illustrate_node)
        workflow.add_node("publish", self.publish_node)

        # Edges
        workflow.set_entry_point("collect")

        workflow.add_conditional_edges(
            "collect",
            self.check_content,
            {
                "ready": "draft",
                "empty": END
            }
        )

        workflow.add_edge("draft", "illustrate")
        workflow.add_edge("illustrate", "publish")
        workflow.add_edge("publish", END)

        return workflow.compile()

    async def collect_node(self, state: NewsletterState) -> NewsletterState:
        aggregator = self.aggregator_factory(state["edition"])
        result = await aggregator.collect(state["edition"])
        return {**state, "aggregation": result, "items": result.items}

    async def draft_node(self, state: NewsletterState) -> NewsletterState:
        request = GenerationRequest(
            type=state["edition"],
            date=state["date"],
            scraped_content=state["items"],
            sponsor_info=state["sponsor_info"],
        )
        # Same selection the client sends; kept for the audit trail
        prompt = build_content_prompt(request, select_items(state["items"], self.settings.max_prompt_items))
        content = await self.generation_client.generate_newsletter_content(request)
        return {**state, "prompt": prompt, "content": content}

    async def illustrate_node(self, state: NewsletterState) -> NewsletterState:
        edition = state["edition"]
        topic = IMAGE_TOPICS[edition]
        try:
            image_data = await self.generation_client.generate_newsletter_image(topic, edition)
            if state["dry_run"]:
                image_url = image_data
            else:
                image_url = await self.images.save(image_data, newsletter_slug(edition, state["date"]))
        except GenerationError as e:
            logger.warning(f"Image generation failed, using default image: {e}")
            image_url = self.settings.default_image_url
        return {**state, "image_url": image_url}

    def publish_node(self, state: NewsletterState) -> NewsletterState:
        if not state["content"]:
            raise ValueError("No content to publish")

        record = build_publication(
            state["edition"],
            state["date"],
            state["content"],
            state["image_url"] or self.settings.default_image_url,
            self.settings,
            sponsor_info=state["sponsor_info"],
        )
        if state["dry_run"]:
            logger.info(f"Dry run: not saving {record.slug}")
        else:
            self.store.save(record)
        return {**state, "record": record}

    def check_content(self, state: NewsletterState) -> str:
        return "ready" if state["items"] else "empty"

    def _audit(self, event_type: str, level: str, input_text: Optional[str] = None, **details: Any) -> None:
        if self.audit:
            self.audit.log_event(event_type, level, input_text=input_text, details=details)

    async def run(
        self,
        newsletter_type: NewsletterType,
        on: Optional[date] = None,
        sponsor_info: Optional[SponsorInfo] = None,
        dry_run: bool = False,
    ) -> Optional[PublicationRecord]:
        """
        Generate and publish one issue.

        Returns:
            The publication record, or None when no source produced content

        Raises:
            DuplicateSlugError: If the issue for this edition and date already exists
            GenerationError: If drafting fails
        """
        on = on or date.today()
        edition = newsletter_type.resolve(on)
        slug = newsletter_slug(edition, on)
        if not dry_run and self.store.exists(slug):
            raise DuplicateSlugError(slug)

        logger.info(f"🚀 Generating {edition.value} for {on.isoformat()} (dry_run={dry_run})")
        self._audit("newsletter_generation_started", "info", slug=slug, edition=edition.value)
        started = time.time()

        initial_state = NewsletterState(
            edition=edition,
            date=on,
            sponsor_info=sponsor_info,
            dry_run=dry_run,
            aggregation=None,
            items=[],
            prompt=None,
            content=None,
            image_url=None,
            record=None,
        )
        try:
            final_state = await self.workflow.ainvoke(initial_state)
        except Exception as e:
            logger.error(f"Newsletter generation failed: {e}")
            self._audit("newsletter_generation_failed", "critical", slug=slug, error=str(e))
            raise

        aggregation = final_state.get("aggregation")
        record = cast(Optional[PublicationRecord], final_state.get("record"))
        if record is None:
            logger.warning(f"No content scraped for {edition.value}; nothing generated")
            self._audit(
                "newsletter_generation_skipped", "info", slug=slug,
                failures=aggregation.failures if aggregation else {},
            )
            return None

        self._audit(
            "newsletter_generation_completed", "success",
            input_text=final_state.get("prompt"),
            slug=record.slug,
            generation_seconds=round(time.time() - started, 2),
            scraped_items=len(final_state["items"]),
            sources=aggregation.sources if aggregation else [],
            dry_run=dry_run,
        )
        logger.info(f"✅ Newsletter {record.slug} generated")
        return record
