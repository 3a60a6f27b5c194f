"""
GitHub integration for piar.

Pull request creation over the REST API via httpx (no heavy PyGithub dep).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from piar.errors import SubmissionFailure

logger = logging.getLogger("piar.github")

_API = "https://api.github.com"


@dataclass
class PRInfo:
    """Pull request information."""

    url: str
    number: int
    html_url: str
    state: str
    title: str
    draft: bool
    branch: str
    base: str


def _error_message(resp: httpx.Response) -> str:
    """GitHub's ``message`` plus any ``errors[].message`` details."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    message = data.get("message", resp.reason_phrase)
    details = [e.get("message") or e.get("code", "") for e in data.get("errors", []) if isinstance(e, dict)]
    if details:
        message = f"{message} ({'; '.join(d for d in details if d)})"
    return message


class GitHubClient:
    """Async GitHub API client using httpx."""

    def __init__(
        self,
        token: str,
        owner: str = "",
        repo: str = "",
        api_url: str = _API,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.token = token
        self.owner = owner
        self.repo = repo
        self.api_url = api_url.rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.api_url,
                headers=self._headers,
                timeout=30.0,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def create_pull_request(
        self,
        title: str,
        head: str,
        base: str = "main",
        body: str = "",
        draft: bool = False,
    ) -> PRInfo:
        """Create a pull request. Raises SubmissionFailure if GitHub rejects it."""
        client = await self._ensure_client()
        logger.debug("Creating PR %s -> %s on %s/%s", head, base, self.owner, self.repo)
        resp = await client.post(
            f"/repos/{self.owner}/{self.repo}/pulls",
            json={
                "title": title,
                "head": head,
                "base": base,
                "body": body,
                "draft": draft,
            },
        )
        if resp.is_error:
            raise SubmissionFailure(resp.status_code, _error_message(resp))
        data = resp.json()
        return PRInfo(
            url=data["url"],
            number=data["number"],
            html_url=data["html_url"],
            state=data["state"],
            title=data["title"],
            draft=data.get("draft", draft),
            branch=head,
            base=base,
        )
