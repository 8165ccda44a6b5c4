"""Shared Git runner for git-scripts.

Every git invocation in the project goes through run_git() (captured
output) or relay_git() (output relayed straight to the terminal), so the
rest of the code never spawns processes itself.
"""

import logging
import subprocess
from pathlib import Path
from typing import Dict, Optional

from git_scripts.core.errors import GitScriptsError

logger = logging.getLogger(__name__)

# Default timeout for captured git operations (seconds)
DEFAULT_GIT_TIMEOUT = 60


# =============================================================================
# Exceptions
# =============================================================================

class GitError(GitScriptsError):
    """Base exception for Git operations."""
    pass


class GitNotInstalledError(GitError):
    """Git is not installed or not in PATH."""
    pass


class GitTimeoutError(GitError):
    """Git command timed out."""

    def __init__(self, message: str, timeout: int):
        super().__init__(message)
        self.timeout = timeout


class ExternalToolError(GitError):
    """Git command failed with non-zero exit code."""

    def __init__(self, message: str, returncode: int, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


_NOT_INSTALLED = (
    "Git is not installed or not in PATH. "
    "Please install git: https://git-scm.com/downloads"
)


# =============================================================================
# Core Functions
# =============================================================================

def run_git(
    *args,
    cwd: Optional[Path] = None,
    check: bool = False,
    timeout: Optional[int] = DEFAULT_GIT_TIMEOUT,
    env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    """Run a git command and capture its output.

    Args:
        *args: Git command arguments
        cwd: Working directory
        check: Raise exception on failure
        timeout: Command timeout in seconds (None waits indefinitely)
        env: Full environment for the child process (defaults to ours)

    Returns:
        CompletedProcess result

    Raises:
        GitNotInstalledError: If git is not installed
        GitTimeoutError: If command times out
        ExternalToolError: If check=True and command fails
    """
    cmd = ["git"] + list(args)
    cmd_str = " ".join(cmd)
    logger.debug("Running: %s", cmd_str)

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd or Path.cwd(),
            capture_output=True,
            text=True,
            timeout=timeout,
            env=env,
        )
    except FileNotFoundError:
        raise GitNotInstalledError(_NOT_INSTALLED)
    except subprocess.TimeoutExpired:
        raise GitTimeoutError(
            f"Git command timed out after {timeout}s: {cmd_str}",
            timeout=timeout
        )

    if check and result.returncode != 0:
        logger.debug("%s exited with %d", cmd_str, result.returncode)
        raise ExternalToolError(
            result.stderr.strip() or f"Git command failed: {cmd_str}",
            returncode=result.returncode,
            stderr=result.stderr
        )
    return result


def relay_git(
    *args,
    cwd: Optional[Path] = None,
    env: Optional[Dict[str, str]] = None,
) -> None:
    """Run a git command with its streams attached to the terminal.

    Used for interactive or long-running operations (rebase -i, push,
    merge). No timeout is applied.

    Raises:
        GitNotInstalledError: If git is not installed
        ExternalToolError: If the command exits non-zero
    """
    cmd = ["git"] + list(args)
    cmd_str = " ".join(cmd)
    logger.debug("Relaying: %s", cmd_str)

    try:
        result = subprocess.run(cmd, cwd=cwd or Path.cwd(), env=env)
    except FileNotFoundError:
        raise GitNotInstalledError(_NOT_INSTALLED)

    if result.returncode != 0:
        raise ExternalToolError(
            f"{cmd_str} exited with status {result.returncode}",
            returncode=result.returncode
        )


def is_git_repo(path: Optional[Path] = None) -> bool:
    """Check if path is inside a Git repository.

    Note:
        Returns False if git is not installed (does not raise).
    """
    try:
        result = run_git("rev-parse", "--git-dir", cwd=path, timeout=10)
        return result.returncode == 0
    except (GitError, OSError):
        return False


def get_current_branch(path: Optional[Path] = None) -> str:
    """Get current Git branch name ("HEAD" when detached).

    Raises:
        ExternalToolError: If not inside a repository
    """
    result = run_git("rev-parse", "--abbrev-ref", "HEAD", cwd=path, check=True)
    return result.stdout.strip()


def rev_parse(ref: str, path: Optional[Path] = None) -> Optional[str]:
    """Resolve a reference to a commit hash, or None if it does not exist."""
    result = run_git("rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}", cwd=path)
    if result.returncode != 0:
        return None
    return result.stdout.strip()
