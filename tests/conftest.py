"""Shared fixtures for newsdesk tests."""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest

from newsdesk.editorial import ArticleStore, PublicationStamp
from newsdesk.errors import ProviderError
from newsdesk.generation import ArticleText, ContentProvider, GeneratedImage, ProspectResult
from newsdesk.models import Article, ArticleStatus, SourceLink


class ScriptedProvider(ContentProvider):
    """Content provider returning canned results, with programmable failures."""

    def __init__(
        self,
        topics: Optional[List[str]] = None,
        sources: Optional[List[Dict[str, str]]] = None,
        fail_prospect: bool = False,
        fail_text_on: Optional[int] = None,
        fail_image_on: Optional[int] = None,
    ) -> None:
        self.topics = topics if topics is not None else ["Topic A", "Topic B", "Topic C"]
        self.sources = sources if sources is not None else [
            {"uri": "https://news.example/a", "title": "Source A"},
            {"uri": "https://news.example/b", "title": "Source B"},
        ]
        self.fail_prospect = fail_prospect
        self.fail_text_on = fail_text_on
        self.fail_image_on = fail_image_on
        self.calls = []
        self.text_calls = 0
        self.image_calls = 0

    async def prospect_topics(self, keywords, time_range):
        self.calls.append(("prospect", tuple(keywords), time_range))
        if self.fail_prospect:
            raise ProviderError("quota exceeded")
        return ProspectResult(
            topics=[{"topic": t} for t in self.topics],
            sources=self.sources,
        )

    async def generate_article_text(self, topic, tone, target_length):
        self.text_calls += 1
        self.calls.append(("text", topic, tone, target_length))
        if self.fail_text_on == self.text_calls:
            raise ProviderError("network down")
        return ArticleText(title=f"Title for {topic}", content=f"Body for {topic}")

    async def generate_image(self, title):
        self.image_calls += 1
        self.calls.append(("image", title))
        if self.fail_image_on == self.image_calls:
            raise ProviderError("image model unavailable")
        return GeneratedImage(
            image_bytes=f"img-{self.image_calls}".encode(),
            prompt=f"Prompt for {title} #{self.image_calls}",
        )

    def get_usage_stats(self):
        return {"total_tokens": 0, "api_calls": len(self.calls), "model": "scripted"}


class FakeClock:
    """Clock that advances one minute per reading."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(minutes=1)
        return value


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def stamp(clock):
    return PublicationStamp("https://news.example/articles/{id}", clock=clock)


@pytest.fixture
def store(stamp):
    return ArticleStore(stamp=stamp)


@pytest.fixture
def provider():
    return ScriptedProvider()


def make_article(**overrides) -> Article:
    """Build a DRAFT article with sensible defaults."""
    fields = {
        "title": "Record flow at Iguazu Falls",
        "content": "The falls reached record flow this week.",
        "image_url": "data:image/jpeg;base64,AAAA",
        "image_prompt": "Photo of the falls",
        "topic": "Iguazu Falls water flow",
        "source_urls": [SourceLink(uri="https://news.example/falls", title="Falls")],
    }
    fields.update(overrides)
    return Article(**fields)


def assert_publication_invariant(article: Article) -> None:
    published = article.is_published
    assert (article.published_url is not None) == published
    assert (article.published_at is not None) == published
