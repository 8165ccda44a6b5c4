"""Tests for git_scripts.git.utils module."""

import subprocess
from pathlib import Path

import pytest

from git_scripts.core.errors import GitScriptsError
from git_scripts.git import utils
from git_scripts.git.utils import (
    is_git_repo,
    get_current_branch,
    relay_git,
    rev_parse,
    run_git,
    ExternalToolError,
    GitError,
    GitNotInstalledError,
    GitTimeoutError,
)


class TestIsGitRepo:
    """Tests for is_git_repo()."""

    def test_returns_true_for_git_repo(self, git_workspace):
        assert is_git_repo(git_workspace) is True

    def test_returns_false_for_non_repo(self, tmp_path):
        assert is_git_repo(tmp_path) is False

    def test_returns_false_for_nonexistent_path(self):
        assert is_git_repo(Path("/nonexistent/path")) is False


class TestGetCurrentBranch:
    """Tests for get_current_branch()."""

    def test_returns_branch_name(self, git_workspace):
        assert get_current_branch(git_workspace) == "main"

    def test_raises_for_non_repo(self, tmp_path):
        with pytest.raises(GitError):
            get_current_branch(tmp_path)


class TestRevParse:
    """Tests for rev_parse()."""

    def test_resolves_head(self, git_workspace, git):
        assert rev_parse("HEAD", git_workspace) == git(git_workspace, "rev-parse", "HEAD")

    def test_resolves_branch(self, git_workspace, git):
        assert rev_parse("main", git_workspace) == git(git_workspace, "rev-parse", "HEAD")

    def test_unknown_ref_returns_none(self, git_workspace):
        assert rev_parse("no-such-branch", git_workspace) is None


class TestRunGit:
    """Tests for run_git()."""

    def test_runs_command(self, git_workspace):
        result = run_git("status", cwd=git_workspace)
        assert result.returncode == 0

    def test_check_raises_on_failure(self, git_workspace):
        with pytest.raises(ExternalToolError) as exc_info:
            run_git("checkout", "nonexistent-branch", cwd=git_workspace, check=True)
        assert exc_info.value.returncode != 0
        assert "nonexistent-branch" in exc_info.value.stderr

    def test_failure_without_check_returns_result(self, git_workspace):
        result = run_git("checkout", "nonexistent-branch", cwd=git_workspace)
        assert result.returncode != 0

    def test_returns_stdout(self, git_workspace):
        result = run_git("rev-parse", "--git-dir", cwd=git_workspace)
        assert ".git" in result.stdout

    def test_errors_share_base_class(self):
        assert issubclass(ExternalToolError, GitScriptsError)
        assert issubclass(GitNotInstalledError, GitError)


class TestRunGitMocked:
    """Tests for run_git() with mocked subprocess."""

    def test_mock_git_output(self, fp):
        fp.register(
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            stdout="feature/test\n",
        )
        result = run_git("rev-parse", "--abbrev-ref", "HEAD")
        assert result.stdout.strip() == "feature/test"

    def test_diagnostic_is_git_stderr(self, fp):
        fp.register(
            ["git", "push"],
            returncode=1,
            stderr="! [rejected] main -> main (non-fast-forward)\n",
        )
        with pytest.raises(ExternalToolError) as exc_info:
            run_git("push", check=True)
        assert str(exc_info.value) == "! [rejected] main -> main (non-fast-forward)"
        assert exc_info.value.returncode == 1

    def test_basic_mock(self, mock_git_basic):
        assert get_current_branch() == "main"
        assert is_git_repo() is True

    def test_git_not_installed(self, monkeypatch):
        def missing(*args, **kwargs):
            raise FileNotFoundError("git")

        monkeypatch.setattr(utils.subprocess, "run", missing)
        with pytest.raises(GitNotInstalledError):
            run_git("status")
        assert is_git_repo() is False

    def test_timeout(self, monkeypatch):
        def slow(cmd, **kwargs):
            raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

        monkeypatch.setattr(utils.subprocess, "run", slow)
        with pytest.raises(GitTimeoutError) as exc_info:
            run_git("fetch", timeout=5)
        assert exc_info.value.timeout == 5


class TestRelayGit:
    """Tests for relay_git()."""

    def test_success(self, git_workspace):
        relay_git("status", "--short", cwd=git_workspace)

    def test_failure_raises(self, git_workspace):
        with pytest.raises(ExternalToolError) as exc_info:
            relay_git("checkout", "nonexistent-branch", cwd=git_workspace)
        assert "exited with status" in str(exc_info.value)

    def test_mocked_exit_status(self, fp):
        fp.register(["git", "merge", "--no-edit", "topic"], returncode=1)
        with pytest.raises(ExternalToolError) as exc_info:
            relay_git("merge", "--no-edit", "topic")
        assert exc_info.value.returncode == 1
