"""Plumbing shared by every shortcut command.

Each shortcut is a ShortcutCommand: it configures logging when invoked on
its own (as ``gac``, ``grn``, ...) and turns click's usage errors into
exit status 1 like every other failure.
"""

import logging
import os
import sys
from contextlib import contextmanager
from typing import Iterator, Sequence

import click
from rich.console import Console
from rich.markup import escape

from git_scripts.core.errors import GitScriptsError, UsageError
from git_scripts.git.utils import is_git_repo

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

VERBOSE_ENV = "GIT_SCRIPTS_VERBOSE"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr; DEBUG when verbose, else WARNING.

    Only the first call configures anything, so a subcommand invoked
    through the group keeps the group's level.
    """
    if not verbose:
        verbose = os.environ.get(VERBOSE_ENV, "").lower() in ("1", "true", "yes")
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


class ShortcutCommand(click.Command):
    """click.Command that exits 1 on usage errors."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("context_settings", CONTEXT_SETTINGS)
        super().__init__(*args, **kwargs)

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise

    def invoke(self, ctx):
        setup_logging()
        return super().invoke(ctx)


def error(message: str) -> None:
    err_console.print(f"[red]Error:[/] {escape(message)}")


@contextmanager
def handle_errors() -> Iterator[None]:
    """Report any failure on stderr and exit 1."""
    try:
        yield
    except GitScriptsError as e:
        error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/]")
        sys.exit(1)
    except (click.exceptions.Exit, click.Abort, SystemExit):
        raise
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        error(str(e) or type(e).__name__)
        sys.exit(1)


def join_message(words: Sequence[str]) -> str:
    """Join message words given as separate arguments with single spaces.

    Raises:
        UsageError: The message is empty
    """
    message = " ".join(words)
    if not message.strip():
        raise UsageError("Please provide a commit message, for example: \"feat: xxx\"")
    return message


def require_repo(cwd) -> None:
    """Raises UsageError unless cwd is inside a git repository."""
    if not is_git_repo(cwd):
        raise UsageError("Not a git repository")
