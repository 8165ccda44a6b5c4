"""gcw - remove the repository's secondary worktrees."""

import sys
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from git_scripts.commands.common import (
    ShortcutCommand,
    console,
    error,
    handle_errors,
    require_repo,
)
from git_scripts.core.errors import GitScriptsError
from git_scripts.git.worktree import list_worktrees, prune_worktrees, remove_worktree


@click.command("remove-worktrees", cls=ShortcutCommand)
@click.option("--force", "-f", is_flag=True, help="Remove worktrees even with uncommitted changes")
@click.option("--all", "-a", "include_main", is_flag=True, help="Include the main worktree (dangerous)")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def remove_worktrees_cmd(force: bool, include_main: bool, yes: bool):
    """Remove all worktrees except the main one.

    \b
    Examples:
      gcw        # Remove secondary worktrees (asks first)
      gcw -f     # Also remove worktrees with uncommitted changes
      gcw -y     # Do not ask
      gcw -a     # Include the main worktree

    Worktree directories are deleted. Back up anything important first.
    """
    with handle_errors():
        cwd = Path.cwd()
        require_repo(cwd)

        worktrees = list_worktrees(cwd)
        main = [wt for wt in worktrees if wt.is_main]
        candidates = [wt for wt in worktrees if include_main or not wt.is_main]

        if not include_main:
            for wt in main:
                console.print(f"[dim]Skipping main worktree: {escape(wt.path)}[/]")

        if not candidates:
            console.print("[dim]No worktrees to remove[/]")
            return

        table = Table(title="Worktrees to remove")
        table.add_column("Path", style="cyan")
        table.add_column("Branch")
        table.add_column("HEAD")
        table.add_column("")
        for wt in candidates:
            flags = []
            if wt.is_main:
                flags.append("[red]MAIN[/]")
            if wt.locked:
                flags.append("[yellow]locked[/]")
            table.add_row(escape(wt.path), escape(wt.display_branch), wt.head[:8], " ".join(flags))
        console.print(table)

        if not yes and not click.confirm("Remove these worktrees?"):
            console.print("Operation cancelled")
            return

        removed = 0
        failed = 0
        for wt in candidates:
            try:
                remove_worktree(wt, force=force, cwd=cwd)
            except GitScriptsError as e:
                error(f"Failed to remove {wt.path}: {e}")
                failed += 1
                continue
            console.print(f"[green]✓[/] Removed {escape(wt.path)}")
            removed += 1

        prune_worktrees(cwd)

        console.print("\n[bold]Summary[/]")
        console.print(f"  Removed: {removed} worktree(s)")
        if failed:
            console.print(f"  Failed: {failed} worktree(s)")
            sys.exit(1)
