"""gcr - remove untracked files and directories."""

from pathlib import Path

import click

from git_scripts.commands.common import ShortcutCommand, console, handle_errors, require_repo
from git_scripts.git.utils import relay_git


@click.command("clean", cls=ShortcutCommand)
def clean_cmd():
    """Remove all untracked files and directories, ignored ones included.

    Equivalent to: git clean -fdx
    """
    with handle_errors():
        cwd = Path.cwd()
        require_repo(cwd)
        relay_git("clean", "-fdx", cwd=cwd)
        console.print("[green]✓[/] Git repository cleaned")
