"""Topic prospecting, article text and image generation."""

from .llm_provider import (
    ContentProvider,
    MockContentProvider,
    OpenAIProvider,
    parse_article_payload,
    parse_llm_json,
    parse_prospect_payload,
    strip_code_fences,
)
from .models import ArticleText, GeneratedImage, GenerationStats, ProspectResult, Topic

__all__ = [
    "ContentProvider",
    "OpenAIProvider",
    "MockContentProvider",
    "ArticleText",
    "GeneratedImage",
    "GenerationStats",
    "ProspectResult",
    "Topic",
    "parse_article_payload",
    "parse_llm_json",
    "parse_prospect_payload",
    "strip_code_fences",
]
