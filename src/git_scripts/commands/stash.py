"""gcs / gsc - move local commits into the stash and back."""

import sys
from pathlib import Path

import click
from rich.markup import escape

from git_scripts.commands.common import (
    ShortcutCommand,
    console,
    error,
    handle_errors,
    require_repo,
)
from git_scripts.core.config import load_config
from git_scripts.core.roundtrip import RoundTripResult, commits_to_stash, stash_to_commits


def _first_line(message: str) -> str:
    return message.split("\n", 1)[0]


def _report(result: RoundTripResult, done: str) -> None:
    """Print the batch summary; exit 1 if any item failed."""
    if result.info:
        console.print(f"[dim]Info:[/] {result.info}")
        return

    for message in result.messages:
        console.print(f"[green]✓[/] {done}: {escape(_first_line(message))}")

    if result.ok:
        return

    error(f"{result.failed[0]}: {result.error}")
    console.print("\n[bold]Summary[/]")
    console.print(f"  Processed: {result.processed}")
    console.print(f"  Failed: {len(result.failed)}")
    if result.skipped:
        console.print(f"  Not processed: {result.skipped}")
    sys.exit(1)


@click.command("stash-commits", cls=ShortcutCommand)
@click.option("--all", "-a", "all_commits", is_flag=True, help="Stash every commit ahead of upstream")
def stash_commits_cmd(all_commits: bool):
    """Move local commits into the stash, keeping their messages.

    Takes the newest commit ahead of the upstream branch (or all of them
    with -a), resets it and stashes its changes with the commit message
    as the stash description. Restore with unstash-commits.

    \b
    Examples:
      gcs        # Stash the latest local commit
      gcs -a     # Stash every commit not yet pushed
    """
    with handle_errors():
        cwd = Path.cwd()
        require_repo(cwd)
        config = load_config(cwd)
        if all_commits:
            console.print("Stashing all local commits...")
        result = commits_to_stash(all_commits=all_commits, remote=config.remote, cwd=cwd)
        _report(result, "Stashed commit")
        if result.processed:
            console.print("\nView them with [cyan]git stash list[/], restore with [cyan]gsc[/]")


@click.command("unstash-commits", cls=ShortcutCommand)
@click.option("--all", "-a", "all_entries", is_flag=True, help="Commit every stash entry")
@click.option("--no-verify", "-n", is_flag=True, help="Skip pre-commit and commit-msg hooks")
def unstash_commits_cmd(all_entries: bool, no_verify: bool):
    """Turn stash entries back into commits.

    Applies the top stash entry (or every entry with -a, most recent
    first), stages the result and commits it with the message recorded
    by stash-commits. An entry leaves the stash only once its commit
    succeeds.

    \b
    Examples:
      gsc        # Commit the latest stash entry
      gsc -a     # Commit all stash entries
    """
    with handle_errors():
        cwd = Path.cwd()
        require_repo(cwd)
        result = stash_to_commits(all_entries=all_entries, no_verify=no_verify, cwd=cwd)
        _report(result, "Committed")
