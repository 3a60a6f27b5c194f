"""Deterministic tools: git."""

from piar.tools.git_tools import BranchSource, GitTools

__all__ = ["BranchSource", "GitTools"]
