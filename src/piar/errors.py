"""Errors raised by piar runs. Every one of them aborts the run."""

from __future__ import annotations


class PiarError(Exception):
    """Base class for reported, fatal piar conditions."""


class MissingConfiguration(PiarError):
    """A required environment value or the config file is absent."""


class InvalidConfiguration(PiarError):
    """The config file exists but cannot be parsed or validated."""


class CommandExecutionFailure(PiarError):
    """A git invocation exited non-zero."""

    def __init__(self, command: str, stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(f"Error executing command {command}")


class EmptyInventory(PiarError):
    """The branch listing produced no usable branches."""

    def __init__(self, message: str = "Branches not found"):
        super().__init__(message)


class NoCurrentBranch(PiarError):
    """No HEAD marker in the branch listing."""

    def __init__(self, message: str = "Current branch not found"):
        super().__init__(message)


class PromptCancelled(PiarError):
    """The user interrupted the question pipeline."""

    def __init__(self, message: str = "Cancelled by user, no pull request created"):
        super().__init__(message)


class SubmissionFailure(Exception):
    """GitHub rejected the pull request. Not a PiarError: it is never caught."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"GitHub API error {status_code}: {message}")
