"""Configuration for piar runs: environment settings and the discovered config file."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from piar.errors import InvalidConfiguration, MissingConfiguration
from piar.questions import Question, check_unique_keys
from piar.render import DEFAULT_TICKET_URL

logger = logging.getLogger("piar.config")

CONFIG_CANDIDATES = (".piar.yaml", "piar.yaml", ".piar/config.yaml")


class Settings(BaseModel):
    """Values read from the environment (or a ``.env`` file)."""

    repo: str = Field(default="", description="GitHub repository name (PIAR_REPO)")
    owner: str = Field(default="", description="GitHub owner (PIAR_OWNER)")
    token: str = Field(default="", description="GitHub access token (PIAR_GITHUB_TOKEN)")
    log_level: str = Field(default="WARNING", description="PIAR_LOG_LEVEL")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            repo=env.get("PIAR_REPO", ""),
            owner=env.get("PIAR_OWNER", ""),
            token=env.get("PIAR_GITHUB_TOKEN", ""),
            log_level=env.get("PIAR_LOG_LEVEL", "WARNING"),
        )

    def require(self) -> None:
        """Raise MissingConfiguration for the first absent value."""
        for value, name in (
            (self.repo, "PIAR_REPO"),
            (self.owner, "PIAR_OWNER"),
            (self.token, "PIAR_GITHUB_TOKEN"),
        ):
            if not value:
                raise MissingConfiguration(f"{name} variable not found")


class GitConfig(BaseModel):
    """Where branches are listed from."""

    source: Literal["remote", "local"] = Field(
        default="remote",
        description="remote: git branch -r | local: git branch",
    )
    remote: str = "origin"
    excluded_remotes: list[str] = Field(default_factory=lambda: ["upstream"])


class GitHubConfig(BaseModel):
    """GitHub API configuration."""

    api_url: str = Field(default="https://api.github.com", description="REST API root (GitHub Enterprise)")


class PiarConfig(BaseModel):
    """Full piar configuration file."""

    git: GitConfig = Field(default_factory=GitConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    ticket_url: str = Field(default=DEFAULT_TICKET_URL, description="Ticket link template, {ticket} is replaced")
    renderer: str | None = Field(default=None, description="'module:attribute' title/body renderer")
    questions: list[Question] = Field(
        default_factory=list,
        description="Questions asked after the branch questions (replace the default ones)",
    )

    @model_validator(mode="after")
    def _check_question_keys(self) -> PiarConfig:
        check_unique_keys(self.questions)
        return self

    @classmethod
    def from_file(cls, path: Path) -> PiarConfig:
        """Load config from YAML file."""
        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return cls.model_validate(data)
        except (yaml.YAMLError, ValidationError) as e:
            raise InvalidConfiguration(f"invalid config file {path}:\n{e}") from e

    @classmethod
    def discover(cls, repo_root: Path, home: Path | None = None) -> PiarConfig | None:
        """Find the config file in the repo, then in the home directory."""
        home = home or Path.home()
        candidates = [repo_root / name for name in CONFIG_CANDIDATES]
        candidates.append(home / ".piar" / "config.yaml")
        for p in candidates:
            if p.is_file():
                logger.debug("Using config file %s", p)
                return cls.from_file(p)
        return None


def find_repo_root(start: Path) -> Path | None:
    """Find git repo root from start path."""
    p = start.resolve()
    for _ in range(20):
        if (p / ".git").exists():
            return p
        parent = p.parent
        if parent == p:
            break
        p = parent
    return None
