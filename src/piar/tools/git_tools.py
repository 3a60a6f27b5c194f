"""Git operations - read-only branch listing."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Protocol

from piar.config import GitConfig
from piar.errors import CommandExecutionFailure

logger = logging.getLogger("piar.git")


class BranchSource(Protocol):
    def list_branches(self) -> bytes: ...


class GitTools:
    """Runs git in the repository and lists its branches."""

    def __init__(self, repo_path: Path, config: GitConfig):
        self.repo_path = Path(repo_path)
        self.config = config

    def _run(self, *args: str) -> bytes:
        command = ["git", *args]
        logger.debug("Running %s in %s", shlex.join(command), self.repo_path)
        try:
            result = subprocess.run(command, cwd=self.repo_path, capture_output=True, check=True)
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.decode("utf-8", errors="replace").strip() if e.stderr else ""
            raise CommandExecutionFailure(shlex.join(command), stderr) from e
        except OSError as e:
            raise CommandExecutionFailure(shlex.join(command), str(e)) from e
        return result.stdout

    def list_branches(self) -> bytes:
        if self.config.source == "local":
            return self._run("branch")
        return self._run("branch", "-r")
