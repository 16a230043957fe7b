"""Prospect-and-generate pipeline that turns keywords into draft articles."""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from ..editorial import ArticleStore
from ..errors import GenerationError, InvalidRequestError, NewsdeskError
from ..generation import ContentProvider, GenerationStats
from ..models import Article, ArticleStatus, GenerationParams, ProspectRequest, SourceLink

logger = logging.getLogger(__name__)
console = Console()


class PipelineStage:
    """Represents a pipeline stage."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.stats: Dict = {}

    def start(self):
        """Mark stage as started."""
        self.start_time = time.time()

    def complete(self, stats: Optional[Dict] = None):
        """Mark stage as completed successfully."""
        self.end_time = time.time()
        self.success = True
        if stats:
            self.stats.update(stats)

    def fail(self, error: str):
        """Mark stage as failed."""
        self.end_time = time.time()
        self.success = False
        self.error = error

    @property
    def duration(self) -> float:
        """Get stage duration in seconds."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


@dataclass
class TopicOutcome:
    """Result of generating one article: either an article or an error."""
    index: int
    topic: str
    article: Optional[Article] = None
    step: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.article is not None


class BatchRun:
    """
    State of a single generate call: stage timings, stats and the batch.

    Each call to ``BatchGenerator.generate`` works on its own run, so
    overlapping calls on one generator never share progress or stats.
    """

    def __init__(self) -> None:
        self.stages: List[PipelineStage] = [
            PipelineStage("prospect", "Prospecting topics"),
            PipelineStage("generate", "Generating articles"),
            PipelineStage("commit", "Adding articles to the board"),
        ]
        self.stats = GenerationStats()
        self.articles: List[Article] = []

    @property
    def started(self) -> bool:
        return any(stage.start_time is not None for stage in self.stages)

    def print_summary(self, error: Optional[NewsdeskError] = None) -> None:
        """Print pipeline execution summary."""
        table = Table(title="Generation Summary")
        table.add_column("Stage", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Duration", style="yellow")
        table.add_column("Details", style="dim")

        for stage in self.stages:
            if stage.start_time is None:
                status = "[dim]-[/dim]"
            else:
                status = "[green]✓[/green]" if stage.success else "[red]✗[/red]"
            duration = f"{stage.duration:.1f}s" if stage.duration > 0 else "-"

            details = ""
            if stage.success and stage.stats:
                if stage.name == "prospect":
                    details = (
                        f"{stage.stats.get('topics', 0)} topics "
                        f"({stage.stats.get('kept', 0)} kept), "
                        f"{stage.stats.get('sources', 0)} sources"
                    )
                elif stage.name == "generate":
                    details = f"{stage.stats.get('articles', 0)} articles"
                elif stage.name == "commit":
                    details = f"{stage.stats.get('collection_size', 0)} articles on the board"
            elif stage.error:
                details = escape(stage.error)

            table.add_row(stage.name.title(), status, duration, details)

        console.print(table)
        if error is None:
            console.print(
                f"[dim]{self.stats.api_calls} API calls, {self.stats.tokens_used} tokens, "
                f"{self.stats.processing_time:.1f}s[/dim]"
            )


class BatchGenerator:
    """
    Runs one prospect-and-generate batch against a content provider.

    Provider calls are made strictly one after another: the topic search,
    then for each kept topic its text and then its image. The batch is
    committed to the store only when every topic succeeded.
    """

    def __init__(
        self,
        provider: ContentProvider,
        store: ArticleStore,
        show_progress: bool = False,
    ) -> None:
        self.provider = provider
        self.store = store
        self.show_progress = show_progress

    async def _generate_for_topic(
        self,
        index: int,
        topic: str,
        sources: Sequence[SourceLink],
        params: GenerationParams,
    ) -> TopicOutcome:
        """Generate text and image for one topic."""
        step = "text"
        try:
            text = await self.provider.generate_article_text(topic, params.tone, params.target_length)
            step = "image"
            image = await self.provider.generate_image(text.title)
        except Exception as e:
            logger.error("Topic %d failed during %s generation: %s", index, step, e)
            return TopicOutcome(index=index, topic=topic, step=step, error=str(e))

        article = Article(
            title=text.title,
            content=text.content,
            image_url=image.to_data_uri(),
            image_prompt=image.prompt,
            status=ArticleStatus.DRAFT,
            source_urls=tuple(sources),
            topic=topic,
        )
        return TopicOutcome(index=index, topic=topic, article=article)

    async def generate(
        self,
        request: ProspectRequest,
        params: Optional[GenerationParams] = None,
        run: Optional[BatchRun] = None,
    ) -> List[Article]:
        """
        Prospect topics and turn up to ``params.count`` of them into drafts.

        Args:
            request: Keywords and time range to prospect
            params: Tone, length and article count
            run: Receives stage timings and stats for this call; pass one in
                to inspect or print them afterwards, even on failure

        Returns:
            The committed batch of new DRAFT articles

        Raises:
            InvalidRequestError: If no non-blank keyword was given
            GenerationError: If prospecting or any generation step failed;
                nothing is added to the store in that case
        """
        params = params or GenerationParams()
        keywords = request.active_keywords
        if not keywords:
            raise InvalidRequestError("Please provide at least one keyword.")

        run = run if run is not None else BatchRun()
        stats = run.stats
        start_time = time.time()
        usage_before = self.provider.get_usage_stats()
        prospect_stage, generate_stage, commit_stage = run.stages

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
            disable=not self.show_progress,
        ) as progress:

            # Stage 1: Prospect topics
            task = progress.add_task(prospect_stage.description, total=1)
            prospect_stage.start()
            try:
                prospect = await self.provider.prospect_topics(keywords, request.time_range)
            except Exception as e:
                prospect_stage.fail(str(e))
                raise GenerationError(f"Failed to prospect news: {e}") from e

            topics = [t.topic for t in prospect.topics[:params.count]]
            sources = tuple(prospect.sources)
            stats.topics_found = len(prospect.topics)
            stats.sources_found = len(sources)
            prospect_stage.complete({
                "topics": len(prospect.topics),
                "kept": len(topics),
                "sources": len(sources),
            })
            progress.advance(task, 1)

            # Stage 2: Generate one article per topic, in order
            progress.remove_task(task)
            task = progress.add_task(generate_stage.description, total=len(topics))
            generate_stage.start()

            batch: List[Article] = []
            for index, topic in enumerate(topics, 1):
                progress.update(task, description=f"Generating article {index}/{len(topics)}")
                outcome = await self._generate_for_topic(index, topic, sources, params)
                if not outcome.ok:
                    message = (
                        f"Article {outcome.index} of {len(topics)} failed during "
                        f"{outcome.step} generation: {outcome.error}"
                    )
                    generate_stage.fail(message)
                    raise GenerationError(message, topic_index=outcome.index, step=outcome.step)
                batch.append(outcome.article)
                progress.advance(task, 1)

            generate_stage.complete({"articles": len(batch)})

            # Stage 3: Commit the whole batch
            progress.remove_task(task)
            task = progress.add_task(commit_stage.description, total=1)
            commit_stage.start()
            self.store.add_batch(batch)
            run.articles = batch
            commit_stage.complete({"collection_size": len(self.store)})
            progress.advance(task, 1)

        # Provider counters are cumulative; report this call's share
        usage = self.provider.get_usage_stats()
        stats.topics_processed = len(batch)
        stats.tokens_used = usage.get("total_tokens", 0) - usage_before.get("total_tokens", 0)
        stats.api_calls = usage.get("api_calls", 0) - usage_before.get("api_calls", 0)
        stats.processing_time = time.time() - start_time

        logger.info("Generated %d article(s) from %d topic(s)", len(batch), stats.topics_found)
        return batch

    def generate_sync(
        self,
        request: ProspectRequest,
        params: Optional[GenerationParams] = None,
        run: Optional[BatchRun] = None,
    ) -> List[Article]:
        """Synchronous wrapper for generate."""
        return asyncio.run(self.generate(request, params, run))

    async def regenerate_image(self, article_id: str) -> Optional[Article]:
        """
        Replace an article's image with a fresh one for its current title.

        Returns:
            The updated article, or None if the id is unknown

        Raises:
            GenerationError: If image generation failed; the article is unchanged
        """
        article = self.store.get(article_id)
        if article is None:
            return None

        try:
            image = await self.provider.generate_image(article.title)
        except Exception as e:
            logger.error("Failed to regenerate image for %s: %s", article_id, e)
            raise GenerationError(f"Failed to regenerate image: {e}", step="image") from e

        return self.store.replace_image(article_id, image.to_data_uri(), image.prompt)

    def regenerate_image_sync(self, article_id: str) -> Optional[Article]:
        """Synchronous wrapper for regenerate_image."""
        return asyncio.run(self.regenerate_image(article_id))
