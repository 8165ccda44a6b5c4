"""Stash stack queries and mutations."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from git_scripts.git.utils import run_git

# git prepends "On <branch>: " to messages given with -m, and
# "WIP on <branch>: " to stashes created without one
_HEADER = re.compile(r"^(?:WIP on|On) [^:]*: ")


@dataclass
class StashEntry:
    """One entry of the stash stack (index 0 is the most recent)."""
    index: int
    description: str

    @property
    def ref(self) -> str:
        return f"stash@{{{self.index}}}"

    @property
    def message(self) -> str:
        """Description without the header git adds."""
        return strip_header(self.description)


def strip_header(description: str) -> str:
    return _HEADER.sub("", description, count=1)


def list_stashes(cwd: Optional[Path] = None) -> List[StashEntry]:
    # %s is the stash commit's own subject; the reflog subject (%gs)
    # has runs of whitespace squeezed to one space
    result = run_git("stash", "list", "--format=%s", cwd=cwd, check=True)
    return [
        StashEntry(index=i, description=line)
        for i, line in enumerate(result.stdout.splitlines())
    ]


def top_stash(cwd: Optional[Path] = None) -> Optional[StashEntry]:
    entries = list_stashes(cwd)
    return entries[0] if entries else None


def push_stash(message: str, include_untracked: bool = True, cwd: Optional[Path] = None) -> None:
    args = ["stash", "push"]
    if include_untracked:
        args.append("--include-untracked")
    args.extend(["-m", message])
    run_git(*args, cwd=cwd, check=True)


def apply_stash(ref: str = "stash@{0}", cwd: Optional[Path] = None) -> None:
    run_git("stash", "apply", ref, cwd=cwd, check=True)


def drop_stash(ref: str = "stash@{0}", cwd: Optional[Path] = None) -> None:
    run_git("stash", "drop", ref, cwd=cwd, check=True)
