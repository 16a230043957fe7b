"""Content provider selection from configuration."""

from rich.console import Console

from ..config import Config
from ..generation import ContentProvider, MockContentProvider, OpenAIProvider

console = Console()


def build_provider(config: Config) -> ContentProvider:
    """Get configured content provider."""
    llm_config = config.get_llm_config()

    if llm_config.get("provider") == "mock":
        return MockContentProvider()

    api_key = llm_config.get("api_key")
    if not api_key:
        console.print("[yellow]Warning: No OpenAI API key found. Using mock content provider.[/yellow]")
        return MockContentProvider()

    return OpenAIProvider(
        api_key=api_key,
        model=llm_config.get("model", "gpt-4o-mini"),
        image_model=llm_config.get("image_model", "dall-e-3"),
        image_size=llm_config.get("image_size", "1792x1024"),
        base_url=llm_config.get("base_url"),
        newsroom=config.config.newsroom,
    )
