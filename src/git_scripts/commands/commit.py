"""gac / gph / gpf - stage everything, commit, and optionally push."""

from pathlib import Path
from typing import Optional, Sequence

import click

from git_scripts.commands.common import (
    ShortcutCommand,
    console,
    handle_errors,
    join_message,
    require_repo,
)
from git_scripts.git.utils import relay_git, run_git


def stage_and_commit(
    words: Sequence[str],
    no_verify: bool = False,
    cwd: Optional[Path] = None,
) -> None:
    message = join_message(words)
    require_repo(cwd)
    run_git("add", "-A", cwd=cwd, check=True)
    args = ["commit", "-m", message]
    if no_verify:
        args.append("--no-verify")
    # Relayed so hook output reaches the terminal
    relay_git(*args, cwd=cwd)


@click.command("add-commit", cls=ShortcutCommand)
@click.argument("message", nargs=-1, required=True)
@click.option("--no-verify", "-n", is_flag=True, help="Skip pre-commit and commit-msg hooks")
def add_commit_cmd(message: tuple, no_verify: bool):
    """Stage all changes and commit them.

    Equivalent to: git add -A && git commit -m "MESSAGE"

    \b
    Examples:
      gac "feat: add new feature"
      gac fix: resolve bug
      gac -n "wip: skip hooks"
    """
    with handle_errors():
        stage_and_commit(message, no_verify=no_verify, cwd=Path.cwd())


@click.command("push", cls=ShortcutCommand)
@click.argument("message", nargs=-1, required=True)
def push_cmd(message: tuple):
    """Stage all changes, commit them and push.

    Equivalent to: git add -A && git commit -m "MESSAGE" && git push

    \b
    Examples:
      gph "feat: add new feature"
    """
    with handle_errors():
        cwd = Path.cwd()
        stage_and_commit(message, cwd=cwd)
        relay_git("push", cwd=cwd)
        console.print("[green]✓[/] Pushed")


@click.command("force-push", cls=ShortcutCommand)
@click.argument("message", nargs=-1, required=True)
def force_push_cmd(message: tuple):
    """Stage all changes, commit them and force push.

    Equivalent to: git add -A && git commit -m "MESSAGE" && git push -f

    \b
    Examples:
      gpf "fix: rewrite history"
    """
    with handle_errors():
        cwd = Path.cwd()
        stage_and_commit(message, cwd=cwd)
        relay_git("push", "-f", cwd=cwd)
        console.print("[green]✓[/] Force pushed")
