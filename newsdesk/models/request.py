"""Request models for the prospect-and-generate pipeline."""

from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from .article import Tone

# Presets offered by the dashboard; any other string is passed through as-is.
TIME_RANGE_PRESETS: Dict[str, str] = {
    "6h": "in the last 6 hours",
    "12h": "in the last 12 hours",
    "24h": "in the last 24 hours",
    "3d": "in the last 3 days",
    "7d": "in the last 7 days",
    "15d": "in the last 15 days",
    "30d": "in the last 30 days",
}

MAX_ARTICLES_PER_BATCH = 5


def resolve_time_range(value: str) -> str:
    """Expand a preset name into its descriptor."""
    return TIME_RANGE_PRESETS.get(value, value)


class ProspectRequest(BaseModel):
    """What to look for when prospecting topics."""

    keywords: List[str] = Field(default_factory=list, description="Search keywords")
    time_range: str = Field(TIME_RANGE_PRESETS["24h"], description="Time range descriptor")

    @field_validator("time_range")
    @classmethod
    def expand_preset(cls, v: str) -> str:
        return resolve_time_range(v)

    @property
    def active_keywords(self) -> List[str]:
        """Keywords with whitespace trimmed and blanks dropped."""
        return [k.strip() for k in self.keywords if k and k.strip()]


class GenerationParams(BaseModel):
    """How each article in a batch is generated."""

    tone: Tone = Field(Tone.NEUTRAL, description="Article voice")
    target_length: int = Field(150, description="Target word count", ge=1)
    count: int = Field(3, description="Articles per batch", ge=1, le=MAX_ARTICLES_PER_BATCH)
