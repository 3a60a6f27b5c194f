"""
Submission orchestrator - one run from branch listing to pull request.

Flow:
1. Check prerequisites (env values, config file), before touching git
2. List branches once and build the inventory
3. Build the question pipeline
4. Ask every question (the only point that waits on the user)
5. Render title/body into a PullRequestDraft
6. Create the PR via the GitHub API, exactly once
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from piar.branches import BranchInventory
from piar.config import PiarConfig, Settings
from piar.errors import MissingConfiguration
from piar.integrations.github_client import GitHubClient
from piar.prompter import ask_questions
from piar.questions import Question, build_questions
from piar.render import PullRequestDraft, build_draft, load_renderer
from piar.tools import BranchSource, GitTools

logger = logging.getLogger("piar.orchestrator")

AskFn = Callable[[Sequence[Question]], dict[str, Any]]


class Orchestrator:
    """Orchestrates a piar run from branch listing to PR URL."""

    def __init__(
        self,
        settings: Settings,
        config: PiarConfig | None,
        repo_root: Path,
        branch_source: BranchSource | None = None,
        ask: AskFn | None = None,
        client_factory: Callable[[Settings, PiarConfig], GitHubClient] | None = None,
    ):
        self.settings = settings
        self.config = config
        self.repo_root = Path(repo_root)
        self.branch_source = branch_source
        self.ask = ask or ask_questions
        self.client_factory = client_factory or _default_client

    def check_prerequisites(self) -> PiarConfig:
        self.settings.require()
        if self.config is None:
            raise MissingConfiguration("config file not found")
        return self.config

    def inventory(self, config: PiarConfig) -> BranchInventory:
        source = self.branch_source or GitTools(self.repo_root, config.git)
        raw = source.list_branches()
        if config.git.source == "local":
            # local listings carry no remote prefixes
            return BranchInventory.from_output(raw, remote=None, excluded_remotes=())
        return BranchInventory.from_output(
            raw, remote=config.git.remote, excluded_remotes=config.git.excluded_remotes
        )

    def prepare(self) -> PullRequestDraft:
        """Everything up to (not including) the PR creation call."""
        config = self.check_prerequisites()
        renderer = load_renderer(config.renderer, config.ticket_url)

        inventory = self.inventory(config)
        questions = build_questions(inventory, config.questions)
        answers = self.ask(questions)
        logger.debug("Answers: %s", answers)

        return build_draft(answers, self.settings.owner, self.settings.repo, renderer)

    async def submit(self, draft: PullRequestDraft) -> str:
        """Create the pull request and return its web URL."""
        client = self.client_factory(self.settings, self.check_prerequisites())
        try:
            pr = await client.create_pull_request(
                title=draft.title,
                head=draft.head,
                base=draft.base,
                body=draft.body,
                draft=draft.draft,
            )
        finally:
            await client.close()
        logger.info("Created PR #%s", pr.number)
        return pr.html_url

    def run(self) -> str:
        draft = self.prepare()
        return asyncio.run(self.submit(draft))


def _default_client(settings: Settings, config: PiarConfig) -> GitHubClient:
    return GitHubClient(
        token=settings.token,
        owner=settings.owner,
        repo=settings.repo,
        api_url=config.github.api_url,
    )
