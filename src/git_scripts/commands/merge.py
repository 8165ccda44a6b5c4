"""gme - merge a branch or commit into the current branch."""

from pathlib import Path

import click

from git_scripts.commands.common import ShortcutCommand, handle_errors, require_repo
from git_scripts.core.errors import UsageError
from git_scripts.git.utils import relay_git, rev_parse


@click.command("merge", cls=ShortcutCommand)
@click.argument("ref")
@click.option("--no-ff", is_flag=True, help="Always create a merge commit")
@click.option("--edit", "-e", is_flag=True, help="Edit the merge message")
def merge_cmd(ref: str, no_ff: bool, edit: bool):
    """Merge REF into the current branch.

    \b
    Examples:
      gme feature/login
      gme --no-ff -e develop
    """
    with handle_errors():
        cwd = Path.cwd()
        require_repo(cwd)
        if rev_parse(ref, cwd) is None:
            raise UsageError(f"Unknown branch or commit: {ref}")

        args = ["merge"]
        if no_ff:
            args.append("--no-ff")
        args.append("--edit" if edit else "--no-edit")
        args.append(ref)
        relay_git(*args, cwd=cwd)
