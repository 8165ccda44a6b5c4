"""Configuration for git-scripts.

Defaults live in ScriptsConfig. They can be overridden per repository with
git config keys under the ``git-scripts`` section, and per invocation with
environment variables:

    git-scripts.remote        GIT_SCRIPTS_REMOTE         (default: origin)
    git-scripts.baseBranches  GIT_SCRIPTS_BASE_BRANCHES  (default: main,master,develop)

Nothing is cached; load_config() re-reads git config every time.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

from git_scripts.core.errors import UsageError
from git_scripts.git.utils import run_git

logger = logging.getLogger(__name__)

CONFIG_SECTION = "git-scripts"

# git config keys are case-insensitive and reported lowercased
_GIT_KEYS = {
    "remote": "remote",
    "basebranches": "base_branches",
}

_ENV_KEYS = {
    "GIT_SCRIPTS_REMOTE": "remote",
    "GIT_SCRIPTS_BASE_BRANCHES": "base_branches",
}


@dataclass
class ScriptsConfig:
    """Tunable values for git-scripts commands."""
    # Remote used when a branch has no configured upstream
    remote: str = "origin"

    # Integration branch names, most preferred first
    base_branches: Tuple[str, ...] = ("main", "master", "develop")

    def __post_init__(self):
        if isinstance(self.base_branches, str):
            self.base_branches = _split_names(self.base_branches)
        else:
            self.base_branches = tuple(self.base_branches)
        if not self.remote or any(c.isspace() for c in self.remote):
            raise UsageError(f"Invalid remote name: {self.remote!r}")
        if not self.base_branches:
            raise UsageError("base_branches must name at least one branch")

    @classmethod
    def from_dict(cls, data: dict) -> "ScriptsConfig":
        return cls(**{
            k: v for k, v in data.items()
            if k in cls.__dataclass_fields__
        })


def _split_names(value: str) -> Tuple[str, ...]:
    return tuple(name.strip() for name in value.split(",") if name.strip())


def _read_git_config(cwd: Optional[Path]) -> Dict[str, str]:
    result = run_git(
        "config", "--get-regexp", rf"^{CONFIG_SECTION}\.", cwd=cwd
    )
    # Exit status 1 just means no keys are set
    if result.returncode != 0:
        return {}

    values = {}
    for line in result.stdout.splitlines():
        key, _, value = line.partition(" ")
        field_name = _GIT_KEYS.get(key[len(CONFIG_SECTION) + 1:].lower())
        if field_name:
            values[field_name] = value.strip()
        else:
            logger.debug("Ignoring unknown config key %s", key)
    return values


def load_config(cwd: Optional[Path] = None) -> ScriptsConfig:
    """Build the effective configuration for a repository."""
    values = _read_git_config(cwd)
    for env_key, field_name in _ENV_KEYS.items():
        if os.environ.get(env_key):
            values[field_name] = os.environ[env_key]

    config = ScriptsConfig.from_dict(values)
    logger.debug("Configuration: %s", config)
    return config
