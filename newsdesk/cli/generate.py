"""Generate command implementation."""

from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from ..config import DEFAULT_CONFIG_PATH, Config
from ..editorial import ArticleStore
from ..errors import NewsdeskError
from ..models import GenerationParams, ProspectRequest, Tone
from ..pipeline import BatchGenerator, BatchRun, build_provider
from .board import print_board

console = Console()


def generate_command(
    keywords: Optional[List[str]] = typer.Option(
        None,
        "--keyword",
        "-k",
        help="Keyword to prospect (repeatable). Default: from config",
    ),
    time_range: Optional[str] = typer.Option(
        None,
        "--time-range",
        "-t",
        help="Time range: 6h, 12h, 24h, 3d, 7d, 15d, 30d or free text. Default: from config",
    ),
    tone: Optional[Tone] = typer.Option(None, "--tone", help="Article tone"),
    length: Optional[int] = typer.Option(None, "--length", "-l", help="Target words per article"),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Articles to generate (1-5)"),
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Configuration file",
    ),
) -> None:
    """Prospect news and generate a batch of draft articles."""
    try:
        config = Config(config_path)
        defaults = config.config

        request = ProspectRequest(
            keywords=keywords if keywords else defaults.prospect_defaults.keywords,
            time_range=time_range or defaults.prospect_defaults.time_range,
        )
        params = GenerationParams(
            tone=tone or defaults.generation_defaults.tone,
            target_length=length if length is not None else defaults.generation_defaults.target_length,
            count=count if count is not None else defaults.generation_defaults.count,
        )
    except (ValueError, ValidationError) as e:
        console.print(f"[red]Invalid options: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    store = ArticleStore.from_config(defaults.workflow)
    generator = BatchGenerator(build_provider(config), store, show_progress=True)
    run = BatchRun()

    try:
        generator.generate_sync(request, params, run)
    except NewsdeskError as e:
        if run.started:
            run.print_summary(error=e)
        console.print(f"[red]Generation failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Generation interrupted by user[/yellow]")
        raise typer.Exit(1)

    run.print_summary()
    print_board(store, console)
