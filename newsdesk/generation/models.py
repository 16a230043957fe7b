"""Data models exchanged with the content provider."""

import base64
from typing import List

from pydantic import BaseModel, Field

from ..models import SourceLink


class Topic(BaseModel):
    """Candidate news topic."""

    topic: str = Field(..., min_length=1, description="One-sentence summary of the story")


class ProspectResult(BaseModel):
    """Topics and citations returned by one prospecting call."""

    topics: List[Topic] = Field(default_factory=list, description="Candidate topics, in order")
    sources: List[SourceLink] = Field(default_factory=list, description="Citations, in order")


class ArticleText(BaseModel):
    """Generated headline and body."""

    title: str = Field(..., description="Headline")
    content: str = Field(..., description="Body text")


class GeneratedImage(BaseModel):
    """Generated illustration with the prompt that produced it."""

    image_bytes: bytes = Field(..., description="Raw JPEG bytes")
    prompt: str = Field(..., description="Prompt sent to the image model")
    mime_type: str = Field("image/jpeg", description="Image MIME type")

    def to_data_uri(self) -> str:
        """Encode the image as an embeddable data URI."""
        encoded = base64.b64encode(self.image_bytes).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class GenerationStats(BaseModel):
    """Statistics for one generation batch."""

    topics_found: int = Field(0, description="Topics returned by prospecting")
    topics_processed: int = Field(0, description="Topics turned into articles")
    sources_found: int = Field(0, description="Citations returned by prospecting")
    tokens_used: int = Field(0, description="Total tokens used")
    api_calls: int = Field(0, description="Number of API calls made")
    processing_time: float = Field(0.0, description="Processing time in seconds")
