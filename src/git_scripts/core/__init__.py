"""Core modules for git-scripts.

This package contains the logic behind the commands:
- errors: Error taxonomy shared by every layer
- codec: Message marker codec used by the stash round trip
- squash, base, roundtrip, config: history rewriting and its inputs

Only the git-independent modules are re-exported here; the others import
the git layer, which itself depends on errors.
"""

from git_scripts.core.errors import (
    GitScriptsError,
    UsageError,
    InsufficientHistoryError,
    NoUpstreamError,
    InvalidRangeError,
)
from git_scripts.core.codec import (
    encode,
    decode,
    TOKENS,
    TOKEN_TABLE_VERSION,
)

__all__ = [
    "GitScriptsError",
    "UsageError",
    "InsufficientHistoryError",
    "NoUpstreamError",
    "InvalidRangeError",
    "encode",
    "decode",
    "TOKENS",
    "TOKEN_TABLE_VERSION",
]
