"""Shared test fixtures for git-scripts.

Provides:
- git_workspace: Temporary real git repo on branch main with one commit
- tracked_workspace: git_workspace whose main tracks a bare origin remote
- make_commit: Helper that writes a file and commits it
- git: Helper that runs git in a directory and returns stdout
- cli_runner: Click CliRunner for invoking commands
- mock_git_basic: pytest-subprocess fixture pre-configured for git commands
"""

import subprocess

import pytest
from click.testing import CliRunner


def _git(cwd, *args) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git():
    """Run git in a directory and return its stripped stdout."""
    return _git


@pytest.fixture
def git_workspace(tmp_path):
    """Create a temporary workspace that is a real git repo.

    The repo is on branch ``main`` with a single "Initial commit".
    """
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init")
    _git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(repo, "config", "user.email", "test@test.com")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "commit.gpgsign", "false")

    (repo / "README.md").write_text("# Test Project\n")
    _git(repo, "add", "-A")
    _git(repo, "commit", "-m", "Initial commit")
    return repo


@pytest.fixture
def tracked_workspace(git_workspace, tmp_path):
    """git_workspace with main pushed to, and tracking, a bare origin."""
    remote = tmp_path / "origin.git"
    _git(tmp_path, "init", "--bare", str(remote))
    _git(git_workspace, "remote", "add", "origin", str(remote))
    _git(git_workspace, "push", "-u", "origin", "main")
    return git_workspace


@pytest.fixture
def make_commit():
    """Write a file and commit it; returns the new commit hash."""

    def _make_commit(repo, filename, message, content=None):
        (repo / filename).write_text(content if content is not None else f"{filename}\n")
        _git(repo, "add", "-A")
        _git(repo, "commit", "-m", message)
        return _git(repo, "rev-parse", "HEAD")

    return _make_commit


@pytest.fixture
def cli_runner():
    """Click CliRunner for testing CLI commands."""
    return CliRunner()


@pytest.fixture
def mock_git_basic(fp):
    """Mock basic git commands using pytest-subprocess.

    Pre-registers common git operations. Use `fp` directly
    for custom subprocess mocking in individual tests.
    """
    fp.register(
        ["git", "rev-parse", "--git-dir"],
        stdout=".git\n",
    )
    fp.register(
        ["git", "rev-parse", "--abbrev-ref", "HEAD"],
        stdout="main\n",
    )
    fp.register(
        ["git", "rev-parse", "HEAD"],
        stdout="abc123def456\n",
    )
    fp.register(
        ["git", "status", "--porcelain"],
        stdout="",
    )
    return fp
