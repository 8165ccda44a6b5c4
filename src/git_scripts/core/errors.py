"""Error taxonomy for git-scripts.

Every failure that ends a command derives from GitScriptsError, so the
command layer can report it uniformly (message on stderr, exit status 1).
Errors raised by the git runner itself live in git_scripts.git.utils.
"""


class GitScriptsError(Exception):
    """Base exception for all git-scripts failures."""
    pass


class UsageError(GitScriptsError):
    """Bad or missing arguments; the message names the violated constraint."""
    pass


class InsufficientHistoryError(GitScriptsError):
    """Not enough commits for the requested range."""

    def __init__(self, message: str, requested: int = 0, available: int = 0):
        super().__init__(message)
        self.requested = requested
        self.available = available


class NoUpstreamError(GitScriptsError):
    """No tracking branch or remote reference configured."""
    pass


class InvalidRangeError(GitScriptsError):
    """Commit range below the minimum size for the operation."""

    def __init__(self, message: str, size: int = 0):
        super().__init__(message)
        self.size = size
