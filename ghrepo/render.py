"""
Rendering functions for ghrepo output.

This module handles all pretty-printing and table formatting.
Services return data, this module makes it human-readable.
"""

import json
from datetime import datetime
from typing import Iterable, List, Optional

from rich.table import Table
from rich.console import Console
from rich import box

from .domain import RepositoryRecord
from .listing import SORT_FIELD_DESCRIPTIONS

console = Console()

CHECK = "✅"
CROSS = "❌"

# (header, width, justify)
REPO_COLUMNS = [
    ("Repository", 35, "left"),
    ("Owner", 15, "left"),
    ("Created", 15, "right"),
    ("Pushed", 15, "right"),
    ("Archived", 10, "center"),
    ("Private", 10, "center"),
]


def format_date(value: Optional[datetime]) -> str:
    """Truncate a timestamp to the day."""
    return value.strftime("%Y-%m-%d") if value else ""


def format_flag(value: bool) -> str:
    return CHECK if value else CROSS


def repo_row(repo: RepositoryRecord) -> List[str]:
    """The six table cells for one repository."""
    return [
        repo.name,
        repo.owner or "Unknown",
        format_date(repo.created_at),
        format_date(repo.pushed_at),
        format_flag(repo.archived),
        format_flag(repo.private),
    ]


def build_repo_table(repos: Iterable[RepositoryRecord]) -> Table:
    table = Table(
        box=box.SQUARE,
        show_header=True,
        header_style="bold magenta"
    )

    for header, width, justify in REPO_COLUMNS:
        table.add_column(header, width=width, justify=justify)

    for repo in repos:
        table.add_row(*repo_row(repo))

    return table


def render_repo_table(repos: List[RepositoryRecord], target: Optional[Console] = None) -> None:
    """
    Render repositories as a fixed six-column table.

    Args:
        repos: Records in display order
        target: Console to print to (module console by default)
    """
    target = target or console
    if not repos:
        target.print("[yellow]No repositories found.[/yellow]")
        return

    target.print(build_repo_table(repos))


def render_repo_jsonl(repos: Iterable[RepositoryRecord]) -> None:
    """Print one JSON object per repository."""
    for repo in repos:
        print(json.dumps(repo.to_dict(), ensure_ascii=False), flush=True)


def render_sort_fields(target: Optional[Console] = None) -> None:
    """List the keys accepted by --sort."""
    target = target or console
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold magenta")
    table.add_column("Key", style="cyan")
    table.add_column("Description")

    for sort_field, description in SORT_FIELD_DESCRIPTIONS.items():
        table.add_row(sort_field.value, description)

    target.print(table)
    target.print("Use FIELD or FIELD:asc / FIELD:desc, e.g. --sort pushed:desc")
