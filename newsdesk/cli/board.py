"""Rich rendering of the editorial board."""

from typing import Dict, Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..editorial import ArticleStore
from ..models import Article, ArticleStatus, WORKFLOW_ORDER

COLUMN_TITLES: Dict[ArticleStatus, str] = {
    ArticleStatus.DRAFT: "New Drafts",
    ArticleStatus.REVIEW: "In Review",
    ArticleStatus.APPROVED: "Approved",
    ArticleStatus.PUBLISHED: "Published",
    ArticleStatus.CANCELLED: "Cancelled",
}


def _card(article: Article) -> str:
    lines = [f"[bold]{escape(article.title)}[/bold]", f"[dim]{escape(article.topic)}[/dim]"]
    if article.is_published:
        lines.append(f"[link={article.published_url}]{article.published_url}[/link]")
    if article.source_urls:
        lines.append(f"[dim]{len(article.source_urls)} source(s)[/dim]")
    return "\n".join(lines)


def build_board_table(store: ArticleStore, articles: Optional[Iterable[Article]] = None) -> Table:
    """One column per workflow status, one card per article."""
    columns = store.board(articles)
    counts = {status: len(items) for status, items in columns.items()}

    table = Table(title="Editorial Board", show_lines=True, expand=True)
    for status in WORKFLOW_ORDER:
        table.add_column(f"{COLUMN_TITLES[status]} ({counts[status]})", vertical="top")

    depth = max(counts.values(), default=0)
    for row in range(depth):
        table.add_row(*[
            _card(columns[status][row]) if row < len(columns[status]) else ""
            for status in WORKFLOW_ORDER
        ])
    return table


def build_counts_table(store: ArticleStore) -> Table:
    """Article totals per status."""
    table = Table(title="Status Counts")
    table.add_column("Status", style="cyan")
    table.add_column("Articles", justify="right", style="bold")
    for status, count in store.status_counts().items():
        table.add_row(COLUMN_TITLES[status], str(count))
    return table


def print_board(store: ArticleStore, console: Console) -> None:
    console.print(build_board_table(store))
    console.print(build_counts_table(store))
