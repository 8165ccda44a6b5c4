"""Worktree listing and removal."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from git_scripts.git.utils import run_git

logger = logging.getLogger(__name__)

_BRANCH_PREFIX = "refs/heads/"


@dataclass
class WorktreeRecord:
    """One entry of ``git worktree list --porcelain``."""
    path: str
    head: str = ""
    branch: Optional[str] = None   # None when detached
    is_main: bool = False
    locked: bool = False

    @property
    def display_branch(self) -> str:
        return self.branch or "detached"


def parse_worktree_list(output: str) -> List[WorktreeRecord]:
    """Parse porcelain output; records are separated by blank lines."""
    records = []
    current = None

    for line in output.splitlines() + [""]:
        if not line:
            if current is not None:
                records.append(current)
            current = None
            continue

        key, _, value = line.partition(" ")
        if key == "worktree":
            current = WorktreeRecord(path=value, is_main=not records)
        elif current is None:
            continue
        elif key == "HEAD":
            current.head = value
        elif key == "branch":
            current.branch = value[len(_BRANCH_PREFIX):] if value.startswith(_BRANCH_PREFIX) else value
        elif key == "locked":
            current.locked = True

    return records


def list_worktrees(cwd: Optional[Path] = None) -> List[WorktreeRecord]:
    """List all worktrees; the first record is the primary checkout."""
    result = run_git("worktree", "list", "--porcelain", cwd=cwd, check=True)
    return parse_worktree_list(result.stdout)


def remove_worktree(
    record: WorktreeRecord,
    force: bool = False,
    cwd: Optional[Path] = None,
) -> None:
    """Remove a worktree.

    Args:
        record: Worktree to remove
        force: Discard uncommitted changes; a locked worktree gets a
            second --force, which git requires to remove it

    Raises:
        ExternalToolError: git refused to remove it
    """
    cmd = ["worktree", "remove"]
    if force:
        cmd.append("--force")
        if record.locked:
            cmd.append("--force")
    cmd.append(record.path)
    run_git(*cmd, cwd=cwd, check=True)
    logger.info("Removed worktree %s", record.path)


def prune_worktrees(cwd: Optional[Path] = None) -> None:
    """Drop administrative data for worktrees whose directories are gone."""
    run_git("worktree", "prune", cwd=cwd, check=True)
