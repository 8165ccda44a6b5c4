"""Git access layer for git-scripts."""

from git_scripts.git.utils import (
    run_git,
    relay_git,
    is_git_repo,
    get_current_branch,
    rev_parse,
    GitError,
    GitNotInstalledError,
    GitTimeoutError,
    ExternalToolError,
    DEFAULT_GIT_TIMEOUT,
)
from git_scripts.git.history import (
    CommitRef,
    CommitRange,
    select_range,
    list_commits,
    commit_message,
    first_commit,
)
from git_scripts.git.stash import StashEntry, list_stashes
from git_scripts.git.worktree import (
    WorktreeRecord,
    list_worktrees,
    remove_worktree,
    prune_worktrees,
)

__all__ = [
    "run_git",
    "relay_git",
    "is_git_repo",
    "get_current_branch",
    "rev_parse",
    "GitError",
    "GitNotInstalledError",
    "GitTimeoutError",
    "ExternalToolError",
    "DEFAULT_GIT_TIMEOUT",
    "CommitRef",
    "CommitRange",
    "select_range",
    "list_commits",
    "commit_message",
    "first_commit",
    "StashEntry",
    "list_stashes",
    "WorktreeRecord",
    "list_worktrees",
    "remove_worktree",
    "prune_worktrees",
]
