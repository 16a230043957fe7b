"""Configuration models."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..models import MAX_ARTICLES_PER_BATCH, TIME_RANGE_PRESETS, Tone


class LLMConfig(BaseModel):
    """Content provider configuration."""

    provider: str = Field("openai", description="Content provider (openai, mock)")
    model: str = Field("gpt-4o-mini", description="Text model name")
    image_model: str = Field("dall-e-3", description="Image model name")
    image_size: str = Field("1792x1024", description="Generated image size")
    api_key_env: Optional[str] = Field("OPENAI_API_KEY", description="Environment variable for API key")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    base_url: Optional[str] = Field(None, description="Base URL for API")

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        v = v.lower()
        if v not in ("openai", "mock"):
            raise ValueError(f"Unknown provider: {v}")
        return v


class NewsroomConfig(BaseModel):
    """Who the articles are written for."""

    outlet_name: str = Field("Sul News", description="Publication name used in prompts")
    region: str = Field("Foz do Iguaçu, Brazil", description="Region the outlet covers")
    language: str = Field("Brazilian Portuguese", description="Language of generated text")


class ProspectDefaults(BaseModel):
    """Default prospecting parameters."""

    keywords: List[str] = Field(
        default_factory=lambda: ["Foz do Iguaçu", "Cataratas", "Itaipu"],
        description="Default keywords",
    )
    time_range: str = Field(TIME_RANGE_PRESETS["24h"], description="Default time range")


class GenerationDefaults(BaseModel):
    """Default generation parameters."""

    tone: Tone = Field(Tone.NEUTRAL, description="Default tone")
    target_length: int = Field(150, description="Default target word count", ge=1)
    count: int = Field(3, description="Default articles per batch", ge=1, le=MAX_ARTICLES_PER_BATCH)


class WorkflowConfig(BaseModel):
    """Editorial workflow policy."""

    published_url_template: str = Field(
        "https://sulnews.example.com/articles/{id}",
        description="Public URL assigned on publication, formatted with the article id",
    )
    strict_lookups: bool = Field(False, description="Raise on unknown article ids")
    terminal_cancelled: bool = Field(False, description="Forbid leaving CANCELLED")

    @field_validator("published_url_template")
    @classmethod
    def validate_template(cls, v: str) -> str:
        try:
            v.format(id="x")
        except (KeyError, IndexError) as e:
            raise ValueError(f"Invalid published_url_template: {e}")
        return v


class ConfigModel(BaseModel):
    """Main configuration model."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    newsroom: NewsroomConfig = Field(default_factory=NewsroomConfig)
    prospect_defaults: ProspectDefaults = Field(default_factory=ProspectDefaults)
    generation_defaults: GenerationDefaults = Field(default_factory=GenerationDefaults)
    workflow: WorkflowConfig = Field(default_factory=WorkflowConfig)
