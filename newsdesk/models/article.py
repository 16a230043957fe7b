"""Article model and the enumerations it depends on."""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import Field, model_validator

from .base import RecordModel


class ArticleStatus(str, Enum):
    """Editorial workflow status."""

    DRAFT = "DRAFT"
    REVIEW = "REVIEW"
    APPROVED = "APPROVED"
    PUBLISHED = "PUBLISHED"
    CANCELLED = "CANCELLED"

    @classmethod
    def from_string(cls, value: str) -> "ArticleStatus":
        """Convert a case-insensitive string to ArticleStatus."""
        for status in cls:
            if status.value == value.strip().upper():
                return status
        raise ValueError(f"Unknown status: {value}")


# Board column order
WORKFLOW_ORDER: Tuple[ArticleStatus, ...] = (
    ArticleStatus.DRAFT,
    ArticleStatus.REVIEW,
    ArticleStatus.APPROVED,
    ArticleStatus.PUBLISHED,
    ArticleStatus.CANCELLED,
)


class Tone(str, Enum):
    """Stylistic voice for generated articles."""

    NEUTRAL = "Neutral"
    OPTIMISTIC = "Optimistic"
    CRITICAL = "Critical"
    SERIOUS = "Serious"
    ANIMATED = "Animated"


UNKNOWN_SOURCE_TITLE = "Unknown source"


class SourceLink(RecordModel):
    """Citation collected while prospecting topics."""

    uri: str = Field(..., description="Source URL")
    title: str = Field(UNKNOWN_SOURCE_TITLE, description="Source title")


def new_article_id() -> str:
    """Return a fresh, never reused article id."""
    return f"art_{uuid.uuid4().hex}"


class Article(RecordModel):
    """Generated news article under editorial review."""

    id: str = Field(default_factory=new_article_id, description="Opaque unique id")
    title: str = Field(..., description="Headline")
    content: str = Field(..., description="Article body")
    image_url: str = Field(..., description="Illustration as a data URI")
    image_prompt: str = Field(..., description="Prompt that produced image_url")
    status: ArticleStatus = Field(ArticleStatus.DRAFT, description="Workflow status")
    source_urls: Tuple[SourceLink, ...] = Field(
        default_factory=tuple, description="Citations from prospecting"
    )
    topic: str = Field(..., description="Originating topic")
    published_url: Optional[str] = Field(None, description="Public URL once published")
    published_at: Optional[datetime] = Field(None, description="First publication time")

    @model_validator(mode="after")
    def check_publication_fields(self) -> "Article":
        """Publication fields exist exactly while the article is published."""
        published = self.status == ArticleStatus.PUBLISHED
        if published != (self.published_url is not None) or published != (
            self.published_at is not None
        ):
            raise ValueError(
                "published_url and published_at must be set if and only if "
                "status is PUBLISHED"
            )
        return self

    @property
    def is_published(self) -> bool:
        return self.status == ArticleStatus.PUBLISHED
