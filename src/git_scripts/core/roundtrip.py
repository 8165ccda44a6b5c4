"""Move commits into the stash and back without losing their messages.

commits_to_stash() peels commits off the top of the branch one at a time:
each is reset (keeping its changes), and its message, encoded with the
marker codec, becomes the stash description. stash_to_commits() walks the
stash stack from the top, decoding each description back into the commit
message.

Restoring newest-first is what restores chronological order: the newest
commit is stashed first and so ends up deepest in the stack.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from git_scripts.core import codec
from git_scripts.core.errors import GitScriptsError, NoUpstreamError, UsageError
from git_scripts.git.history import (
    CommitRange,
    commit_has_changes,
    commit_message,
    has_uncommitted_changes,
    list_commits,
    upstream_branch,
)
from git_scripts.git.stash import apply_stash, drop_stash, list_stashes, push_stash, top_stash
from git_scripts.git.utils import get_current_branch, rev_parse, run_git

logger = logging.getLogger(__name__)


@dataclass
class RoundTripResult:
    """Aggregate outcome of a batch of stash/commit conversions."""
    requested: int = 0
    messages: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    error: Optional[str] = None
    info: Optional[str] = None

    @property
    def processed(self) -> int:
        return len(self.messages)

    @property
    def skipped(self) -> int:
        return self.requested - self.processed - len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed


def resolve_upstream(remote: str = "origin", cwd: Optional[Path] = None) -> str:
    """Boundary for stash-commits: the upstream, else <remote>/<branch>.

    Raises:
        NoUpstreamError: Neither exists
    """
    upstream = upstream_branch(cwd)
    if upstream:
        return upstream

    branch = get_current_branch(cwd)
    candidate = f"{remote}/{branch}"
    if rev_parse(f"refs/remotes/{candidate}", cwd):
        return candidate
    raise NoUpstreamError(
        f"No upstream configured and remote branch {candidate} does not exist"
    )


def commits_to_stash(
    all_commits: bool = False,
    remote: str = "origin",
    cwd: Optional[Path] = None,
) -> RoundTripResult:
    """Turn the newest commit (or every commit) ahead of upstream into stash entries."""
    upstream = resolve_upstream(remote, cwd)
    ahead = CommitRange(base=upstream, commits=list_commits(f"{upstream}..HEAD", cwd=cwd))
    if not ahead:
        return RoundTripResult(info=f"No local commits ahead of {upstream}")

    if has_uncommitted_changes(cwd):
        raise UsageError(
            "Working tree has uncommitted changes; commit or stash them first"
        )

    targets = ahead.newest_first()
    if not all_commits:
        targets = targets[:1]
    result = RoundTripResult(requested=len(targets))

    for commit in targets:
        try:
            head = rev_parse("HEAD", cwd)
            if head != commit.hash:
                raise UsageError(
                    f"HEAD moved to {(head or '?')[:8]}, expected {commit.short_hash}"
                )
            if not commit_has_changes(commit.hash, cwd):
                raise UsageError(
                    f"Commit {commit.short_hash} has no changes to stash"
                )
            message = commit_message(commit.hash, cwd=cwd)
            run_git("reset", "HEAD~1", cwd=cwd, check=True)
            push_stash(codec.encode(message), cwd=cwd)
        except GitScriptsError as e:
            logger.debug("Stashing %s failed: %s", commit.short_hash, e)
            result.failed.append(commit.short_hash)
            result.error = str(e)
            # Every later commit sits below this one; stop here
            break
        logger.info("Stashed %s", commit.short_hash)
        result.messages.append(message)

    return result


def stash_to_commits(
    all_entries: bool = False,
    no_verify: bool = False,
    cwd: Optional[Path] = None,
) -> RoundTripResult:
    """Turn the top stash entry (or all of them) into commits.

    Each entry is applied, committed and only then dropped, so a failed
    commit leaves the entry, and the message it carries, on the stack.
    """
    count = len(list_stashes(cwd))
    if count == 0:
        return RoundTripResult(info="No stash items available")

    result = RoundTripResult(requested=count if all_entries else 1)

    for _ in range(result.requested):
        entry = top_stash(cwd)
        if entry is None:
            break
        message = codec.decode(entry.message)
        try:
            apply_stash(entry.ref, cwd)
            run_git("add", "-A", cwd=cwd, check=True)
            args = ["commit", "-m", message]
            if no_verify:
                args.append("--no-verify")
            run_git(*args, cwd=cwd, check=True)
            drop_stash(entry.ref, cwd)
        except GitScriptsError as e:
            logger.debug("Committing %s failed: %s", entry.ref, e)
            result.failed.append(entry.ref)
            result.error = f"{e}\n{entry.ref} is still in the stash; its message is:\n{message}"
            break
        logger.info("Committed %s", entry.ref)
        result.messages.append(message)

    return result
