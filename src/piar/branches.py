"""
Branch inventory - turn raw ``git branch`` output into branch choices.

Two listing formats are understood:

  remote (``git branch -r``)   origin/HEAD -> origin/main
                               origin/main
                               origin/feature/login
  local  (``git branch``)      * feature/login
                                 main

HEAD-pointer entries (``HEAD -> <name>`` once normalized, or ``* <name>``)
identify the current branch and are never offered as choices themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from piar.errors import EmptyInventory, NoCurrentBranch

logger = logging.getLogger("piar.branches")

POINTER = "->"
CURRENT_MARKER = "* "
WORKTREE_MARKER = "+ "


def _strip_prefix(name: str, prefix: str | None) -> str:
    if prefix and name.startswith(prefix):
        return name[len(prefix):]
    return name


def _normalize(line: str, remote: str | None) -> str:
    prefix = f"{remote}/" if remote else None
    if POINTER in line:
        pointer, _, target = line.partition(POINTER)
        return f"{_strip_prefix(pointer.strip(), prefix)} {POINTER} {_strip_prefix(target.strip(), prefix)}"
    if line.startswith(WORKTREE_MARKER):
        line = line[len(WORKTREE_MARKER):].strip()
    return _strip_prefix(line, prefix)


def is_head_pointer(entry: str) -> bool:
    return POINTER in entry or entry.startswith(CURRENT_MARKER)


def list_branches(
    raw: str | bytes,
    remote: str | None = "origin",
    excluded_remotes: Iterable[str] = ("upstream",),
) -> list[str]:
    """
    Parse a branch listing into normalized, de-duplicated entries.

    Lines starting with an excluded remote are dropped and the ``remote`` prefix is
    stripped. HEAD-pointer entries are kept (normalized) so the current branch
    can still be found. Raises EmptyInventory when nothing is left.
    """
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    excluded = [f"{name}/" for name in excluded_remotes]

    entries: list[str] = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        if any(line.startswith(marker) for marker in excluded):
            continue
        entry = _normalize(line, remote)
        if entry and entry not in entries:
            entries.append(entry)

    if not entries:
        raise EmptyInventory()
    return entries


def current_branch(entries: Sequence[str]) -> str:
    """Return the branch the HEAD marker points at."""
    pointers = [e for e in entries if is_head_pointer(e)]
    # Prefer the configured remote's HEAD (its prefix is already stripped).
    pointers.sort(key=lambda e: not (e.startswith(f"HEAD {POINTER}") or e.startswith(CURRENT_MARKER)))

    for entry in pointers:
        if entry.startswith(CURRENT_MARKER):
            name = entry[len(CURRENT_MARKER):].strip()
            if name.startswith("("):
                # detached HEAD: "(HEAD detached at 1a2b3c)"
                continue
        else:
            name = entry.partition(POINTER)[2].strip()
        if name:
            return name

    raise NoCurrentBranch()


def selectable_branches(entries: Sequence[str]) -> list[str]:
    """Entries minus HEAD pointers, in listing order."""
    return [e for e in entries if not is_head_pointer(e)]


@dataclass(frozen=True)
class BranchInventory:
    """Branches discovered by a single listing."""

    entries: tuple[str, ...]
    branches: tuple[str, ...]
    current: str

    @classmethod
    def from_output(
        cls,
        raw: str | bytes,
        remote: str | None = "origin",
        excluded_remotes: Iterable[str] = ("upstream",),
    ) -> BranchInventory:
        entries = list_branches(raw, remote=remote, excluded_remotes=excluded_remotes)
        current = current_branch(entries)
        branches = selectable_branches(entries)
        if not branches:
            raise EmptyInventory("No base branches found")
        logger.debug("Inventory: current=%s branches=%s", current, branches)
        return cls(entries=tuple(entries), branches=tuple(branches), current=current)


def compare_branches(inventory: BranchInventory) -> list[str]:
    """Selectable branches, with the current branch first if it was left out."""
    branches = list(inventory.branches)
    if inventory.current not in branches:
        branches.insert(0, inventory.current)
    return branches
