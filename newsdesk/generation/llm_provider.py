"""Content provider interface and implementations."""

import base64
import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import openai
from openai import AsyncOpenAI
from pydantic import ValidationError

from ..config import NewsroomConfig
from ..errors import ProviderError, ProviderResponseError
from ..models import UNKNOWN_SOURCE_TITLE, Tone
from .models import ArticleText, GeneratedImage, ProspectResult

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?```$", re.DOTALL | re.IGNORECASE)


def strip_code_fences(raw_text: str) -> str:
    """Remove a markdown code fence wrapped around a payload, if any."""
    text = raw_text.strip()
    match = _FENCE_PATTERN.match(text)
    if match:
        text = match.group(1).strip()
    return text


def parse_llm_json(raw_text: Optional[str]) -> Any:
    """
    Parse JSON from a model response that may include markdown code fences.

    Raises:
        ProviderResponseError: If the payload is empty or not valid JSON
    """
    if not raw_text or not raw_text.strip():
        raise ProviderResponseError("Empty response from content provider")

    try:
        return json.loads(strip_code_fences(raw_text))
    except json.JSONDecodeError as e:
        raise ProviderResponseError(f"Response is not valid JSON: {e}")


def parse_prospect_payload(raw_text: Optional[str]) -> ProspectResult:
    """
    Parse a prospecting response.

    Accepts either a list of ``{"topic": ...}`` objects or an object with a
    ``topics`` list and an optional ``sources`` list of ``{"uri", "title"}``.
    """
    data = parse_llm_json(raw_text)
    if isinstance(data, list):
        data = {"topics": data, "sources": []}
    if not isinstance(data, dict) or not isinstance(data.get("topics"), list):
        raise ProviderResponseError("Expected a list of topics in prospecting response")

    # Drop citations without a URI; untitled ones get the default title
    sources = []
    for s in data.get("sources") or []:
        if not isinstance(s, dict) or not isinstance(s.get("uri"), str) or not s["uri"].strip():
            continue
        title = s.get("title")
        if not isinstance(title, str) or not title.strip():
            title = UNKNOWN_SOURCE_TITLE
        sources.append({"uri": s["uri"], "title": title})
    try:
        return ProspectResult(topics=data["topics"], sources=sources)
    except ValidationError as e:
        raise ProviderResponseError(f"Malformed prospecting response: {e}")


def parse_article_payload(raw_text: Optional[str]) -> ArticleText:
    """Parse an article-text response into title and content."""
    data = parse_llm_json(raw_text)
    try:
        return ArticleText.model_validate(data)
    except ValidationError as e:
        raise ProviderResponseError(f"Malformed article response: {e}")


class ContentProvider(ABC):
    """Abstract base class for generative content providers."""

    @abstractmethod
    async def prospect_topics(self, keywords: List[str], time_range: str) -> ProspectResult:
        """
        Find the most relevant recent news for the keywords.

        Args:
            keywords: Non-blank search keywords
            time_range: Free-form time range descriptor

        Returns:
            Ordered topics and ordered citation sources
        """
        pass

    @abstractmethod
    async def generate_article_text(
        self,
        topic: str,
        tone: Tone,
        target_length: int,
    ) -> ArticleText:
        """
        Write a news article about a topic.

        Args:
            topic: Topic summary
            tone: Article voice
            target_length: Approximate word count

        Returns:
            Headline and body
        """
        pass

    @abstractmethod
    async def generate_image(self, title: str) -> GeneratedImage:
        """Generate an illustration for an article headline."""
        pass

    @abstractmethod
    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        pass


class OpenAIProvider(ContentProvider):
    """OpenAI implementation of the content provider."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        image_model: str = "dall-e-3",
        image_size: str = "1792x1024",
        base_url: Optional[str] = None,
        newsroom: Optional[NewsroomConfig] = None,
    ) -> None:
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Chat model used for topics and article text
            image_model: Image model used for illustrations
            image_size: Requested image size
            base_url: Custom base URL (for testing)
            newsroom: Outlet details woven into prompts
        """
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        self.model = model
        self.image_model = image_model
        self.image_size = image_size
        self.newsroom = newsroom or NewsroomConfig()
        self.total_tokens = 0
        self.api_calls = 0

    async def _complete(self, messages: List[Dict[str, str]], **kwargs) -> str:
        """Run a chat completion and return the message text."""
        self.api_calls += 1
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                **kwargs,
            )
        except openai.OpenAIError as e:
            raise ProviderError(f"Content provider request failed: {e}") from e

        if response.usage:
            self.total_tokens += response.usage.total_tokens

        if not response.choices or response.choices[0].message.content is None:
            raise ProviderResponseError("Content provider returned no message")
        return response.choices[0].message.content.strip()

    async def prospect_topics(self, keywords: List[str], time_range: str) -> ProspectResult:
        """Prospect topics using OpenAI."""
        prompt = f"""Act as a news aggregator for {self.newsroom.region}.
Find the most relevant news about "{', '.join(keywords)}" {time_range}.
Identify the 3 most significant stories. For each one, give a concise one-sentence summary to use as a topic.

Respond ONLY with a JSON object with two keys:
- "topics": an array of objects, each with a "topic" key
- "sources": an array of objects with "uri" and "title" keys for the pages you relied on

Example: {{"topics": [{{"topic": "Summary of story 1"}}], "sources": [{{"uri": "https://...", "title": "..."}}]}}"""

        logger.debug("Prospecting topics for %s (%s)", keywords, time_range)
        text = await self._complete(
            [{"role": "user", "content": prompt}],
            temperature=0.3,
        )
        return parse_prospect_payload(text)

    async def generate_article_text(
        self,
        topic: str,
        tone: Tone,
        target_length: int,
    ) -> ArticleText:
        """Generate article text using OpenAI."""
        system = (
            f"You are a professional journalist writing for a local news outlet called "
            f"'{self.newsroom.outlet_name}' in {self.newsroom.region}. Your audience is the "
            f"local community. Keep the language clear, objective and relevant to readers "
            f"in the region. Write in {self.newsroom.language}."
        )
        prompt = f"""Based on the following topic: "{topic}", write a news article.
- Tone: {tone.value}
- Length: approximately {target_length} words.
- The article needs a catchy headline and an informative body.
- Respond with a JSON object with the keys "title" and "content". Do not use markdown inside the JSON."""

        text = await self._complete(
            [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            temperature=0.7,
            response_format={"type": "json_object"},
            # Rough estimate: 1 word ~= 1.5 tokens, plus JSON overhead
            max_tokens=min(int(target_length * 1.5) + 200, 4000),
        )
        return parse_article_payload(text)

    async def generate_image(self, title: str) -> GeneratedImage:
        """Generate an illustration using the OpenAI images API."""
        prompt = (
            f'Minimalist, elegant news photograph for an article titled: "{title}". '
            f"The image should be relevant to the context of {self.newsroom.region}. "
            f"Photorealistic style."
        )

        self.api_calls += 1
        try:
            response = await self.client.images.generate(
                model=self.image_model,
                prompt=prompt,
                n=1,
                size=self.image_size,
                response_format="b64_json",
            )
        except openai.OpenAIError as e:
            raise ProviderError(f"Image generation failed: {e}") from e

        if not response.data or not response.data[0].b64_json:
            raise ProviderResponseError("Image provider returned no image")

        try:
            image_bytes = base64.b64decode(response.data[0].b64_json)
        except ValueError as e:
            raise ProviderResponseError(f"Image payload is not valid base64: {e}")

        return GeneratedImage(image_bytes=image_bytes, prompt=prompt)

    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        return {
            "total_tokens": self.total_tokens,
            "api_calls": self.api_calls,
            "model": self.model,
            "image_model": self.image_model,
        }


# JPEG start/end markers only; enough for a placeholder data URI
_PLACEHOLDER_JPEG = b"\xff\xd8\xff\xd9"


class MockContentProvider(ContentProvider):
    """Mock content provider for offline runs."""

    def __init__(self, topic_count: int = 3) -> None:
        """Initialize mock provider."""
        self.topic_count = topic_count
        self.calls = []

    async def prospect_topics(self, keywords: List[str], time_range: str) -> ProspectResult:
        """Mock topic prospecting."""
        self.calls.append(("prospect", tuple(keywords)))

        lead = keywords[0] if keywords else "the region"
        return ProspectResult(
            topics=[
                {"topic": f"Mock story {i + 1} about {lead} {time_range}"}
                for i in range(self.topic_count)
            ],
            sources=[
                {"uri": "https://example.com/news/1", "title": "Example News"},
                {"uri": "https://example.com/news/2", "title": "Example Daily"},
            ],
        )

    async def generate_article_text(
        self,
        topic: str,
        tone: Tone,
        target_length: int,
    ) -> ArticleText:
        """Mock article generation."""
        self.calls.append(("text", topic))

        return ArticleText(
            title=f"{topic[:60]}",
            content=(
                f"[{tone.value}, ~{target_length} words] "
                f"Mock article body covering: {topic}"
            ),
        )

    async def generate_image(self, title: str) -> GeneratedImage:
        """Mock image generation."""
        self.calls.append(("image", title))

        return GeneratedImage(
            image_bytes=_PLACEHOLDER_JPEG,
            prompt=f'Mock illustration for "{title}"',
        )

    def get_usage_stats(self) -> Dict:
        """Get mock usage statistics."""
        return {
            "total_tokens": 0,
            "api_calls": len(self.calls),
            "model": "mock",
            "image_model": "mock",
        }
