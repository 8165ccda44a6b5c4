"""Main CLI entry point for git-scripts."""

import click

from git_scripts.commands.clean import clean_cmd
from git_scripts.commands.commit import add_commit_cmd, force_push_cmd, push_cmd
from git_scripts.commands.common import CONTEXT_SETTINGS, setup_logging
from git_scripts.commands.merge import merge_cmd
from git_scripts.commands.rebase import rebase_n_cmd, rebase_to_base_cmd
from git_scripts.commands.stash import stash_commits_cmd, unstash_commits_cmd
from git_scripts.commands.worktree import remove_worktrees_cmd


class ScriptsGroup(click.Group):
    """click.Group that exits 1 on usage errors, like its commands."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


@click.group(cls=ScriptsGroup, context_settings=CONTEXT_SETTINGS)
@click.version_option(version="0.1.0", prog_name="git-scripts")
@click.option("--verbose", "-v", is_flag=True, help="Log every git invocation to stderr")
def main(verbose: bool):
    """git-scripts - shortcuts for everyday git chores.

    Every command is also installed as its own short script.

    \b
    Committing:
      gac   add-commit        Stage everything and commit
      gph   push              Stage, commit and push
      gpf   force-push        Stage, commit and force push
      gme   merge             Merge a branch or commit

    \b
    History:
      grh   rebase-to-base    Rebase or squash since the base branch
      grn   rebase-n          Rebase or squash the last N commits
      gcs   stash-commits     Move local commits into the stash
      gsc   unstash-commits   Turn stash entries back into commits

    \b
    Cleanup:
      gcr   clean             Remove untracked files
      gcw   remove-worktrees  Remove secondary worktrees
    """
    setup_logging(verbose)


# Committing
main.add_command(add_commit_cmd, name="add-commit")
main.add_command(push_cmd, name="push")
main.add_command(force_push_cmd, name="force-push")
main.add_command(merge_cmd, name="merge")

# History
main.add_command(rebase_to_base_cmd, name="rebase-to-base")
main.add_command(rebase_n_cmd, name="rebase-n")
main.add_command(stash_commits_cmd, name="stash-commits")
main.add_command(unstash_commits_cmd, name="unstash-commits")

# Cleanup
main.add_command(clean_cmd, name="clean")
main.add_command(remove_worktrees_cmd, name="remove-worktrees")


if __name__ == "__main__":
    main()
