"""History squash engine.

Collapses a contiguous run of commits into one by handing git's
interactive rebase a pre-written todo list (oldest commit picked, the rest
fixed up into it), then rewording the result with the caller's message.
The todo file is written to a temporary path and always removed.
"""

import logging
import os
import shlex
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from git_scripts.core.errors import InvalidRangeError, UsageError
from git_scripts.git.history import (
    CommitRange,
    CommitRef,
    commit_message,
    select_range,
)
from git_scripts.git.utils import ExternalToolError, relay_git, run_git

logger = logging.getLogger(__name__)

MIN_SQUASH_COMMITS = 2


class MessageSource(str, Enum):
    """Where the squashed commit's message comes from."""
    EXPLICIT = "explicit"
    LATEST = "latest"      # current HEAD
    OLDEST = "oldest"      # Nth commit back, i.e. the first in the range


@dataclass
class RewritePlan:
    """Todo list for a squash: first commit picked, the rest folded in."""
    base: str
    commits: List[CommitRef] = field(default_factory=list)

    @classmethod
    def from_range(cls, commit_range: CommitRange) -> "RewritePlan":
        if len(commit_range) < MIN_SQUASH_COMMITS:
            raise InvalidRangeError(
                f"Squashing needs at least {MIN_SQUASH_COMMITS} commits, "
                f"got {len(commit_range)}",
                size=len(commit_range),
            )
        return cls(base=commit_range.base, commits=list(commit_range.commits))

    def todo_lines(self) -> List[str]:
        first, rest = self.commits[0], self.commits[1:]
        lines = [f"pick {first.hash} {first.subject}"]
        lines.extend(f"fixup {c.hash} {c.subject}" for c in rest)
        return lines

    def render(self) -> str:
        return "\n".join(self.todo_lines()) + "\n"


def choose_message(
    commit_range: CommitRange,
    source: MessageSource,
    message: Optional[str] = None,
    cwd: Optional[Path] = None,
) -> str:
    """Resolve the final message before history is rewritten."""
    if source is MessageSource.EXPLICIT:
        if not message or not message.strip():
            raise UsageError("A non-empty message is required")
        return message
    if source is MessageSource.LATEST:
        return commit_message("HEAD", cwd=cwd)
    return commit_message(commit_range.commits[0].hash, cwd=cwd)


def apply_plan(plan: RewritePlan, message: str, cwd: Optional[Path] = None) -> str:
    """Run the rebase described by plan and reword the squashed commit.

    Returns:
        Hash of the new squashed commit

    Raises:
        ExternalToolError: The rebase failed (it has been aborted) or the
            reword failed
    """
    fd, todo_path = tempfile.mkstemp(prefix="git-scripts-todo-", suffix=".txt")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(plan.render())

        env = os.environ.copy()
        env["GIT_SEQUENCE_EDITOR"] = f"cp {shlex.quote(todo_path)}"
        env["GIT_EDITOR"] = "true"

        logger.info("Squashing %d commits onto %s", len(plan.commits), plan.base[:8])
        result = run_git("rebase", "-i", plan.base, cwd=cwd, env=env, timeout=None)
        if result.returncode != 0:
            run_git("rebase", "--abort", cwd=cwd)
            raise ExternalToolError(
                (result.stderr or result.stdout).strip() or "git rebase failed",
                returncode=result.returncode,
                stderr=result.stderr,
            )
    finally:
        os.unlink(todo_path)

    run_git("commit", "--amend", "--no-verify", "-m", message, cwd=cwd, check=True)
    head = run_git("rev-parse", "HEAD", cwd=cwd, check=True)
    return head.stdout.strip()


def squash(
    count: Optional[int] = None,
    boundary: Optional[str] = None,
    source: MessageSource = MessageSource.EXPLICIT,
    message: Optional[str] = None,
    cwd: Optional[Path] = None,
) -> str:
    """Squash the last ``count`` commits, or all commits after ``boundary``.

    Returns:
        Hash of the new squashed commit
    """
    if count is not None and 0 < count < MIN_SQUASH_COMMITS:
        raise InvalidRangeError(
            f"Squashing needs at least {MIN_SQUASH_COMMITS} commits, got {count}",
            size=count,
        )
    commit_range = select_range(count=count, boundary=boundary, cwd=cwd)
    plan = RewritePlan.from_range(commit_range)
    final_message = choose_message(commit_range, source, message, cwd=cwd)
    return apply_plan(plan, final_message, cwd=cwd)


def interactive_rebase(base: str, cwd: Optional[Path] = None) -> None:
    """Open git's own interactive rebase on everything after base."""
    relay_git("rebase", "-i", base, cwd=cwd)
