"""Filtered views over the article collection."""

from datetime import date
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..models import Article, ArticleStatus


class ArticleFilter(BaseModel):
    """Conjunction of optional filters; unset parts match everything."""

    status: Optional[ArticleStatus] = Field(None, description="Exact status")
    text: Optional[str] = Field(None, description="Case-insensitive match on topic or title")
    published_on: Optional[date] = Field(None, description="Date part of published_at")

    @field_validator("status", "text", "published_on", mode="before")
    @classmethod
    def blank_is_unset(cls, v, info):
        if isinstance(v, str):
            if not v.strip():
                return None
            if info.field_name == "status":
                return ArticleStatus.from_string(v)
        return v

    def matches(self, article: Article) -> bool:
        if self.status is not None and article.status != self.status:
            return False

        if self.text is not None:
            needle = self.text.lower()
            if needle not in article.topic.lower() and needle not in article.title.lower():
                return False

        if self.published_on is not None:
            if article.published_at is None or article.published_at.date() != self.published_on:
                return False

        return True

    def apply(self, articles: Iterable[Article]) -> List[Article]:
        return [a for a in articles if self.matches(a)]
