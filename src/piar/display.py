"""
Rich display layer - diagnostics, draft summary and logging for piar runs.

Everything here writes to stderr; stdout carries only the PR URL.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from piar.render import PullRequestDraft

# ── Theme ──────────────────────────────────────────────────

PIAR_THEME = Theme({
    "piar.title": "bold bright_blue",
    "piar.success": "bold green",
    "piar.error": "bold red",
    "piar.branch": "bold magenta",
    "piar.muted": "dim white",
})

console = Console(theme=PIAR_THEME, stderr=True)


def setup_logging(level: str = "WARNING") -> None:
    """Configure rich-powered logging for the entire application."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    verbose = numeric <= logging.DEBUG
    logging.basicConfig(
        level=numeric,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                rich_tracebacks=True,
                tracebacks_show_locals=verbose,
                show_path=verbose,
            )
        ],
        force=True,
    )


# ── Draft summary ──────────────────────────────────────────


def print_draft_summary(draft: PullRequestDraft) -> None:
    """Show what is about to be submitted."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold", min_width=8)
    table.add_column()
    table.add_row("Repo", f"{escape(draft.owner)}/{escape(draft.repo)}")
    table.add_row("Base", Text(draft.base, style="piar.branch"))
    table.add_row("Head", Text(draft.head, style="piar.branch"))
    table.add_row("Title", Text(draft.title or "(empty)"))
    table.add_row("Draft", "yes" if draft.draft else "no")

    console.print(Panel(table, title="[piar.title]Pull Request[/]", border_style="bright_blue"))


def status_spinner(message: str = "Creating pull request...") -> Status:
    """Get a Rich Status spinner for the submission call."""
    return console.status(message, spinner="dots")


# ── Error display ──────────────────────────────────────────


def print_error(message: str, detail: str = "") -> None:
    """Print a formatted error."""
    err = Text()
    err.append("ERROR: ", style="piar.error")
    err.append(message)
    if detail:
        err.append(f"\n{detail}", style="piar.muted")
    console.print(Panel(err, border_style="red"))


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(Text(f"  {message}", style="piar.success"))
