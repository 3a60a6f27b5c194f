"""PR title/body rendering and the draft that gets submitted."""

from __future__ import annotations

import importlib
import inspect
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from piar.errors import MissingConfiguration
from piar.questions import DOCUMENTATION_CHOICES, PR_TYPES

DEFAULT_TICKET_URL = "https://rankmi.myjetbrains.com/youtrack/issue/{ticket}"

Answers = Mapping[str, Any]


@runtime_checkable
class PullRequestRenderer(Protocol):
    def title(self, answers: Answers) -> str: ...

    def body(self, answers: Answers) -> str: ...


def check(flag: bool) -> str:
    return "x" if flag else " "


class ChecklistRenderer:
    """Default renderer: markdown checklists driven by the default questions."""

    def __init__(self, ticket_url: str = DEFAULT_TICKET_URL):
        self.ticket_url = ticket_url

    def title(self, answers: Answers) -> str:
        description = answers.get("description") or ""
        ticket = answers.get("ticket")
        if ticket:
            return f"[{ticket}] {description}"
        return description

    def ticket_link(self, ticket: str | None) -> str:
        if not ticket:
            return ""
        url = self.ticket_url.replace("{ticket}", ticket)
        return f"[{ticket}]({url})"

    def body(self, answers: Answers) -> str:
        selected = set(answers.get("type") or ())
        tests = answers.get("tests")
        documentation = answers.get("documentation")

        type_lines = "\n".join(f"- [{check(c.value in selected)}] {c.label}" for c in PR_TYPES)
        doc_lines = "\n".join(
            f"- [{check(documentation == c.value)}] {c.label}" for c in DOCUMENTATION_CHOICES
        )

        return f"""
# What type of PR is this? (check all applicable)
{type_lines}

## Description

{answers.get("description") or ""}

## Related Tickets & Documents

{self.ticket_link(answers.get("ticket"))}

## Mobile & Desktop Screenshots/Recordings

Add images or videos

## Added tests?

- [{check(tests is True)}] 👍 yes
- [{check(tests is None)}] 🙅 no, because they aren't needed
- [{check(tests is False)}] 🙋 no, because I need help

## Added to documentation?

{doc_lines}

## [optional] Are there any post-deployment tasks we need to perform?
{answers.get("postDeployment") or ""}
"""


def load_renderer(reference: str | None, ticket_url: str = DEFAULT_TICKET_URL) -> PullRequestRenderer:
    """
    Resolve a ``package.module:attribute`` renderer from the config file.

    Classes are instantiated without arguments; any other object is used as
    is. Without a reference the checklist renderer is returned.
    """
    if not reference:
        return ChecklistRenderer(ticket_url)

    module_name, _, attr = reference.partition(":")
    if not attr:
        raise MissingConfiguration(f"renderer must look like 'module:attribute', got {reference!r}")
    try:
        target = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise MissingConfiguration(f"renderer {reference!r} not found: {e}") from e

    renderer = target() if inspect.isclass(target) else target
    if not isinstance(renderer, PullRequestRenderer):
        raise MissingConfiguration(f"renderer {reference!r} must define title() and body()")
    return renderer


@dataclass(frozen=True)
class PullRequestDraft:
    """Everything the GitHub API needs to open the pull request."""

    owner: str
    repo: str
    base: str
    head: str
    draft: bool
    title: str
    body: str


def build_draft(answers: Answers, owner: str, repo: str, renderer: PullRequestRenderer) -> PullRequestDraft:
    return PullRequestDraft(
        owner=owner,
        repo=repo,
        base=answers["base"],
        head=f"{owner}:{answers['compare']}",
        draft=bool(answers.get("draft")),
        title=renderer.title(answers),
        body=renderer.body(answers),
    )
