"""CLI entry point - open a pull request interactively."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from dotenv import find_dotenv, load_dotenv

from piar.config import PiarConfig, Settings, find_repo_root
from piar.display import (
    print_draft_summary,
    print_error,
    print_success,
    setup_logging,
    status_spinner,
)
from piar.errors import CommandExecutionFailure, PiarError
from piar.orchestrator import Orchestrator

app = typer.Typer(
    name="piar",
    help="Answer a few questions, get a pull request.",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.command()
def create() -> None:
    """Pick base/compare branches, describe the change and open the PR on GitHub."""
    load_dotenv(find_dotenv(usecwd=True))
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    cwd = Path.cwd()
    root = find_repo_root(cwd) or cwd

    try:
        settings.require()
        config = PiarConfig.discover(root)
        orch = Orchestrator(settings, config, root)
        draft = orch.prepare()
    except CommandExecutionFailure as e:
        print_error(str(e), e.stderr)
        raise typer.Exit(1)
    except PiarError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_draft_summary(draft)

    # SubmissionFailure propagates.
    with status_spinner():
        url = asyncio.run(orch.submit(draft))

    print_success("Pull request created")
    typer.echo(url)


def main():
    app()


if __name__ == "__main__":
    main()
