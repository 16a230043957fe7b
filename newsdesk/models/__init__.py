"""Data models for newsdesk."""

from .article import (
    UNKNOWN_SOURCE_TITLE,
    WORKFLOW_ORDER,
    Article,
    ArticleStatus,
    SourceLink,
    Tone,
    new_article_id,
)
from .request import (
    GenerationParams,
    MAX_ARTICLES_PER_BATCH,
    ProspectRequest,
    TIME_RANGE_PRESETS,
    resolve_time_range,
)

__all__ = [
    "Article",
    "ArticleStatus",
    "SourceLink",
    "Tone",
    "WORKFLOW_ORDER",
    "UNKNOWN_SOURCE_TITLE",
    "new_article_id",
    "GenerationParams",
    "ProspectRequest",
    "MAX_ARTICLES_PER_BATCH",
    "TIME_RANGE_PRESETS",
    "resolve_time_range",
]
