"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..config import DEFAULT_CONFIG_PATH, ConfigModel, LLMConfig, save_config

console = Console()


def init_command(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Configuration file to create",
    ),
    provider: str = typer.Option("openai", "--provider", help="Content provider (openai, mock)"),
    model: str = typer.Option("gpt-4o-mini", "--model", help="Text model name"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Write a default newsdesk configuration file."""
    console.print(Panel.fit("📰 Newsdesk - Initialization", style="bold blue"))

    if config_path.exists() and not force:
        console.print(f"[red]❌ Config already exists: {config_path} (use --force to overwrite)[/red]")
        raise typer.Exit(1)

    try:
        config = ConfigModel(llm=LLMConfig(provider=provider, model=model))
    except ValueError as e:
        console.print(f"[red]❌ Invalid option: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    console.print(
        Panel(
            f"[green]✅ Newsdesk initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n\n"
            f"Next steps:\n"
            f"1. Set LLM API key: [bold]export {config.llm.api_key_env}=your_key[/bold]\n"
            f"2. Run: [bold]newsdesk generate -k \"Itaipu\"[/bold]",
            style="green",
        )
    )
