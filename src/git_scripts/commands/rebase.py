"""grh / grn - squash branch history.

rebase-to-base squashes everything since the branch left its base
branch; rebase-n squashes the last N commits. Without a message option
both open git's interactive rebase instead.
"""

from pathlib import Path
from typing import Optional

import click

from git_scripts.commands.common import (
    ShortcutCommand,
    console,
    handle_errors,
    require_repo,
)
from git_scripts.core.base import find_base
from git_scripts.core.config import load_config
from git_scripts.core.errors import UsageError
from git_scripts.core.squash import (
    MIN_SQUASH_COMMITS,
    MessageSource,
    interactive_rebase,
    squash,
)
from git_scripts.git.history import first_commit, select_range


@click.command("rebase-to-base", cls=ShortcutCommand)
@click.option("--message", "-m", help="Squash into a single commit with this message")
def rebase_to_base_cmd(message: Optional[str]):
    """Rebase everything since the base branch.

    The base is the merge base with the upstream branch, else the tip of
    a remote main/master/develop branch, else the merge base with a local
    one. With no base at all the repository's first commit is used.

    \b
    Examples:
      grh                   # Interactive rebase since the base
      grh -m "feat: login"  # Squash it all into one commit
    """
    with handle_errors():
        cwd = Path.cwd()
        require_repo(cwd)
        config = load_config(cwd)

        base = find_base(cwd, priority=config.base_branches, preferred_remote=config.remote)
        if base is not None:
            boundary, label = base.commit, f"{base.branch} ({base.short_commit})"
        else:
            boundary = first_commit(cwd)
            if boundary is None:
                raise UsageError("No commits found on current branch")
            label = f"first commit ({boundary[:8]})"

        commits = select_range(boundary=boundary, cwd=cwd)
        if len(commits) < MIN_SQUASH_COMMITS:
            console.print(
                f"[dim]Info:[/] {len(commits)} commit(s) since {label}, nothing to rebase"
            )
            return

        if message is None:
            console.print(f"Rebasing {len(commits)} commits onto {label}...")
            interactive_rebase(boundary, cwd=cwd)
            console.print("[green]✓[/] Rebase completed")
            return

        console.print(f"Squashing {len(commits)} commits onto {label}...")
        head = squash(boundary=boundary, source=MessageSource.EXPLICIT, message=message, cwd=cwd)
        console.print(f"[green]✓[/] Squashed into [cyan]{head[:8]}[/]")


@click.command(
    "rebase-n",
    cls=ShortcutCommand,
    # -h selects the latest-message mode here
    context_settings={"help_option_names": ["--help"]},
)
@click.argument("n", type=int)
@click.option("-h", "latest", is_flag=True, help="Squash, keeping the latest commit's message")
@click.option("-t", "oldest", is_flag=True, help="Squash, keeping the oldest commit's message")
@click.option("--message", "-m", help="Squash with this message")
def rebase_n_cmd(n: int, latest: bool, oldest: bool, message: Optional[str]):
    """Rebase or squash the last N commits.

    \b
    Examples:
      grn 3            # Interactive rebase of the last 3 commits
      grn -h 3         # Squash them, keeping HEAD's message
      grn -t 3         # Squash them, keeping the message of HEAD~2
      grn -m "msg" 3   # Squash them with a new message
    """
    with handle_errors():
        cwd = Path.cwd()
        require_repo(cwd)

        modes = [latest, oldest, message is not None]
        if sum(modes) > 1:
            raise UsageError("Options -h, -t and -m are mutually exclusive")

        if not any(modes):
            commits = select_range(count=n, cwd=cwd)
            console.print(f"Starting interactive rebase for the last {len(commits)} commits...")
            interactive_rebase(commits.base, cwd=cwd)
            console.print("[green]✓[/] Rebase completed")
            return

        if latest:
            source = MessageSource.LATEST
        elif oldest:
            source = MessageSource.OLDEST
        else:
            source = MessageSource.EXPLICIT

        console.print(f"Squashing the last {n} commits...")
        head = squash(count=n, source=source, message=message, cwd=cwd)
        console.print(f"[green]✓[/] Squashed into [cyan]{head[:8]}[/]")
