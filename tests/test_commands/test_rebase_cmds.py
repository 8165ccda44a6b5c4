"""Tests for rebase-to-base and rebase-n."""

import pytest

from git_scripts.commands.rebase import rebase_n_cmd, rebase_to_base_cmd


def _subjects(git, repo):
    return git(repo, "log", "--format=%s").splitlines()


@pytest.fixture
def abcd(git_workspace, make_commit, git, monkeypatch):
    """Repo with commits A (root), B, C, D, used as the working directory."""
    hashes = {"A": git(git_workspace, "rev-parse", "HEAD")}
    for name in ("B", "C", "D"):
        hashes[name] = make_commit(git_workspace, f"{name.lower()}.txt", f"commit {name}")
    monkeypatch.chdir(git_workspace)
    return git_workspace, hashes


class TestRebaseN:
    """Tests for rebase-n (grn)."""

    def test_squash_with_message(self, cli_runner, abcd, git):
        repo, hashes = abcd
        result = cli_runner.invoke(rebase_n_cmd, ["-m", "X", "2"])

        assert result.exit_code == 0, result.output
        assert _subjects(git, repo) == ["X", "commit B", "Initial commit"]
        assert git(repo, "rev-parse", "HEAD~1") == hashes["B"]
        assert (repo / "c.txt").exists() and (repo / "d.txt").exists()

    def test_latest_message(self, cli_runner, abcd, git):
        repo, _ = abcd
        result = cli_runner.invoke(rebase_n_cmd, ["-h", "3"])
        assert result.exit_code == 0, result.output
        assert _subjects(git, repo) == ["commit D", "Initial commit"]

    def test_oldest_message(self, cli_runner, abcd, git):
        repo, _ = abcd
        result = cli_runner.invoke(rebase_n_cmd, ["-t", "2"])
        assert result.exit_code == 0, result.output
        assert _subjects(git, repo) == ["commit C", "commit B", "Initial commit"]

    def test_range_of_one_rejected(self, cli_runner, abcd, git):
        repo, hashes = abcd
        result = cli_runner.invoke(rebase_n_cmd, ["-m", "X", "1"])
        assert result.exit_code == 1
        assert "at least 2 commits" in result.output
        assert git(repo, "rev-parse", "HEAD") == hashes["D"]

    def test_insufficient_history(self, cli_runner, abcd):
        result = cli_runner.invoke(rebase_n_cmd, ["-m", "X", "4"])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_modes_are_exclusive(self, cli_runner, abcd):
        result = cli_runner.invoke(rebase_n_cmd, ["-h", "-t", "2"])
        assert result.exit_code == 1
        assert "mutually exclusive" in result.output

    def test_not_a_number(self, cli_runner, abcd):
        result = cli_runner.invoke(rebase_n_cmd, ["three"])
        assert result.exit_code == 1

    def test_zero(self, cli_runner, abcd):
        result = cli_runner.invoke(rebase_n_cmd, ["0"])
        assert result.exit_code == 1
        assert "positive integer" in result.output

    def test_interactive(self, cli_runner, abcd, git, monkeypatch):
        repo, hashes = abcd
        # Accept the todo list unchanged
        monkeypatch.setenv("GIT_SEQUENCE_EDITOR", "true")
        result = cli_runner.invoke(rebase_n_cmd, ["2"])
        assert result.exit_code == 0, result.output
        assert git(repo, "rev-parse", "HEAD") == hashes["D"]

    def test_help_is_long_option_only(self, cli_runner):
        result = cli_runner.invoke(rebase_n_cmd, ["--help"])
        assert result.exit_code == 0
        assert "-t" in result.output

        # -h is the latest-message flag, so N is missing
        result = cli_runner.invoke(rebase_n_cmd, ["-h"])
        assert result.exit_code == 1


class TestRebaseToBase:
    """Tests for rebase-to-base (grh)."""

    def test_squash_to_first_commit(self, cli_runner, abcd, git):
        repo, hashes = abcd
        result = cli_runner.invoke(rebase_to_base_cmd, ["-m", "everything"])

        assert result.exit_code == 0, result.output
        assert "first commit" in result.output
        assert _subjects(git, repo) == ["everything", "Initial commit"]
        assert git(repo, "rev-parse", "HEAD~1") == hashes["A"]

    def test_squash_since_local_base(self, cli_runner, git_workspace, make_commit, git, monkeypatch):
        fork = make_commit(git_workspace, "a.txt", "on main")
        git(git_workspace, "checkout", "-b", "feature")
        make_commit(git_workspace, "b.txt", "feature 1")
        make_commit(git_workspace, "c.txt", "feature 2")
        monkeypatch.chdir(git_workspace)

        result = cli_runner.invoke(rebase_to_base_cmd, ["-m", "feature"])

        assert result.exit_code == 0, result.output
        assert _subjects(git, git_workspace) == ["feature", "on main", "Initial commit"]
        assert git(git_workspace, "rev-parse", "HEAD~1") == fork

    def test_squash_since_upstream(self, cli_runner, tracked_workspace, make_commit, git, monkeypatch):
        pushed = git(tracked_workspace, "rev-parse", "HEAD")
        make_commit(tracked_workspace, "a.txt", "local 1")
        make_commit(tracked_workspace, "b.txt", "local 2")
        monkeypatch.chdir(tracked_workspace)

        result = cli_runner.invoke(rebase_to_base_cmd, ["-m", "local work"])

        assert result.exit_code == 0, result.output
        assert git(tracked_workspace, "rev-parse", "HEAD~1") == pushed

    def test_single_commit_is_informational(self, cli_runner, git_workspace, make_commit, git, monkeypatch):
        make_commit(git_workspace, "a.txt", "only one")
        head = git(git_workspace, "rev-parse", "HEAD")
        monkeypatch.chdir(git_workspace)

        result = cli_runner.invoke(rebase_to_base_cmd, ["-m", "X"])

        assert result.exit_code == 0
        assert "nothing to rebase" in result.output
        assert git(git_workspace, "rev-parse", "HEAD") == head

    def test_interactive(self, cli_runner, abcd, git, monkeypatch):
        repo, hashes = abcd
        monkeypatch.setenv("GIT_SEQUENCE_EDITOR", "true")
        result = cli_runner.invoke(rebase_to_base_cmd, [])
        assert result.exit_code == 0, result.output
        assert git(repo, "rev-parse", "HEAD") == hashes["D"]

    def test_help(self, cli_runner):
        result = cli_runner.invoke(rebase_to_base_cmd, ["-h"])
        assert result.exit_code == 0
