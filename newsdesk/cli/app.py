"""Main CLI application."""

import logging

import typer
from dotenv import load_dotenv
from rich.logging import RichHandler

# Load .env file if it exists
load_dotenv()

from .generate import generate_command
from .init import init_command

app = typer.Typer(
    name="newsdesk",
    help="Newsdesk - AI news prospecting and editorial workflow",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


# Register commands
app.command("init")(init_command)
app.command("generate")(generate_command)


if __name__ == "__main__":
    app()
