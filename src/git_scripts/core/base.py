"""Best-effort discovery of the branch a feature branch diverged from.

Attempts, first success wins:

1. the current branch's upstream: merge base with HEAD
2. remote branches named after an integration branch (main, master,
   develop by default, in that order): the branch tip
3. local branches with the same names: merge base with HEAD

A candidate is only accepted if it differs from HEAD. When several
integration branches exist with diverging histories the first name in
the priority list wins; this is a naming heuristic, not a proof of
ancestry. Callers fall back to the repository's first commit when no
base is found.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from git_scripts.git.history import (
    local_branches,
    merge_base,
    remote_branches,
    upstream_branch,
)
from git_scripts.git.utils import get_current_branch, rev_parse

logger = logging.getLogger(__name__)

DEFAULT_BASE_BRANCHES = ("main", "master", "develop")


@dataclass
class BaseRef:
    """A base branch and the commit the rewrite should start from."""
    branch: str
    commit: str
    source: str  # upstream, remote or local

    @property
    def short_commit(self) -> str:
        return self.commit[:8]


def _order_remotes(branches: List[str], preferred_remote: str) -> List[str]:
    """Sort remote branches so the preferred remote comes first."""
    return sorted(branches, key=lambda b: (b.split("/", 1)[0] != preferred_remote, b))


def find_base(
    cwd: Optional[Path] = None,
    priority: Sequence[str] = DEFAULT_BASE_BRANCHES,
    preferred_remote: str = "origin",
) -> Optional[BaseRef]:
    """Find the base of the current branch, or None."""
    head = rev_parse("HEAD", cwd)
    if head is None:
        return None

    upstream = upstream_branch(cwd)
    if upstream:
        ancestor = merge_base(upstream, "HEAD", cwd=cwd)
        if ancestor and ancestor != head:
            logger.debug("Base from upstream %s at %s", upstream, ancestor[:8])
            return BaseRef(branch=upstream, commit=ancestor, source="upstream")

    remotes = _order_remotes(remote_branches(cwd), preferred_remote)
    for name in priority:
        for remote_branch in remotes:
            if remote_branch.split("/", 1)[-1] != name:
                continue
            tip = rev_parse(remote_branch, cwd)
            if tip and tip != head:
                logger.debug("Base from remote %s at %s", remote_branch, tip[:8])
                return BaseRef(branch=remote_branch, commit=tip, source="remote")

    current = get_current_branch(cwd)
    local = set(local_branches(cwd))
    for name in priority:
        if name == current or name not in local:
            continue
        ancestor = merge_base(name, "HEAD", cwd=cwd)
        if ancestor and ancestor != head:
            logger.debug("Base from local %s at %s", name, ancestor[:8])
            return BaseRef(branch=name, commit=ancestor, source="local")

    logger.debug("No base branch found")
    return None
