"""Commit history queries and the commit-range selector.

All functions query git afresh; nothing about HEAD or branches is cached.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from git_scripts.core.errors import InsufficientHistoryError, UsageError
from git_scripts.git.utils import run_git, rev_parse

logger = logging.getLogger(__name__)

# ASCII unit separator; cannot appear in a hash and is rare in subjects
_FIELD_SEP = "\x1f"


@dataclass
class CommitRef:
    """A commit hash plus its subject line."""
    hash: str
    subject: str = ""

    @property
    def short_hash(self) -> str:
        return self.hash[:8]


@dataclass
class CommitRange:
    """Commits strictly after ``base`` up to HEAD, oldest first."""
    base: str
    commits: List[CommitRef] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.commits)

    def newest_first(self) -> List[CommitRef]:
        return list(reversed(self.commits))


def commit_count(ref: str = "HEAD", cwd: Optional[Path] = None) -> int:
    """Number of first-parent commits reachable from ref (0 when unborn)."""
    result = run_git("rev-list", "--count", "--first-parent", ref, cwd=cwd)
    if result.returncode != 0:
        return 0
    return int(result.stdout.strip())


def list_commits(revision_range: str, cwd: Optional[Path] = None) -> List[CommitRef]:
    """List first-parent commits in a revision range, oldest first."""
    result = run_git(
        "log", "--reverse", "--first-parent",
        f"--pretty=format:%H{_FIELD_SEP}%s",
        revision_range,
        cwd=cwd, check=True
    )
    commits = []
    for line in result.stdout.splitlines():
        if not line:
            continue
        hash_id, _, subject = line.partition(_FIELD_SEP)
        commits.append(CommitRef(hash=hash_id, subject=subject))
    return commits


def select_range(
    count: Optional[int] = None,
    boundary: Optional[str] = None,
    cwd: Optional[Path] = None,
) -> CommitRange:
    """Select the commits after a boundary, up to HEAD.

    Args:
        count: Take the last ``count`` commits; the boundary is HEAD~count
        boundary: Reference whose descendants up to HEAD are selected

    Raises:
        UsageError: Neither or both of count/boundary given, or count < 1
        InsufficientHistoryError: Fewer than count + 1 commits exist
    """
    if (count is None) == (boundary is None):
        raise UsageError("Specify exactly one of a commit count or a boundary reference")

    if count is not None:
        if count < 1:
            raise UsageError("N must be a positive integer")
        available = commit_count("HEAD", cwd=cwd)
        if available < count + 1:
            raise InsufficientHistoryError(
                f"Need at least {count + 1} commits to select the last {count}, "
                f"but HEAD has {available}",
                requested=count,
                available=available,
            )
        boundary = f"HEAD~{count}"

    base = rev_parse(boundary, cwd)
    if base is None:
        raise UsageError(f"Unknown branch or commit: {boundary}")

    commits = list_commits(f"{base}..HEAD", cwd=cwd)
    logger.debug("Selected %d commits after %s", len(commits), base[:8])
    return CommitRange(base=base, commits=commits)


def commit_message(ref: str = "HEAD", cwd: Optional[Path] = None) -> str:
    """Full commit message of ref, without trailing newlines."""
    result = run_git("log", "-1", "--format=%B", ref, cwd=cwd, check=True)
    return result.stdout.rstrip("\n")


def first_commit(cwd: Optional[Path] = None) -> Optional[str]:
    """Oldest root commit reachable from HEAD."""
    result = run_git("rev-list", "--max-parents=0", "HEAD", cwd=cwd)
    roots = result.stdout.split()
    if result.returncode != 0 or not roots:
        return None
    # rev-list is newest first, so the last root is the oldest
    return roots[-1]


def merge_base(a: str, b: str = "HEAD", cwd: Optional[Path] = None) -> Optional[str]:
    result = run_git("merge-base", a, b, cwd=cwd)
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def upstream_branch(cwd: Optional[Path] = None) -> Optional[str]:
    """Configured upstream of the current branch (e.g. "origin/main")."""
    result = run_git(
        "rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{upstream}",
        cwd=cwd
    )
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def remote_branches(cwd: Optional[Path] = None) -> List[str]:
    """Remote-tracking branch names such as "origin/main"."""
    # Full refnames: the short form of refs/remotes/origin/HEAD is just "origin"
    result = run_git("for-each-ref", "--format=%(refname)", "refs/remotes/", cwd=cwd)
    if result.returncode != 0:
        return []
    prefix = "refs/remotes/"
    return [
        name.strip()[len(prefix):] for name in result.stdout.splitlines()
        if name.strip().startswith(prefix) and not name.strip().endswith("/HEAD")
    ]


def local_branches(cwd: Optional[Path] = None) -> List[str]:
    result = run_git(
        "for-each-ref", "--format=%(refname:short)", "refs/heads/", cwd=cwd
    )
    if result.returncode != 0:
        return []
    return [name.strip() for name in result.stdout.splitlines() if name.strip()]


def has_uncommitted_changes(cwd: Optional[Path] = None) -> bool:
    """True if the index or working tree differs from HEAD (untracked included)."""
    result = run_git("status", "--porcelain", cwd=cwd, check=True)
    return bool(result.stdout.strip())


def commit_has_changes(ref: str, cwd: Optional[Path] = None) -> bool:
    """True if ref changes any file relative to its first parent."""
    result = run_git("diff", "--quiet", f"{ref}~1", ref, cwd=cwd)
    return result.returncode != 0
