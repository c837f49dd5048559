"""Exceptions raised by the git write-back client."""

from collections.abc import Sequence
from pathlib import Path

from gitops_writeback.gateway.executor.types import ExecutionFailure


class GitClientError(Exception):
    """Base class for every error raised by this package."""


# ============================================================================
# URL validation
# ============================================================================


class GitURLError(GitClientError, ValueError):
    """A repository URL was rejected before any git command ran."""


class EmptyGitURLError(GitURLError):
    """Raised when the repository URL is empty."""


class InvalidGitURLError(GitURLError):
    """Raised when the string is not shaped like a git URL."""


class UnsupportedTransportError(GitURLError):
    """Raised when a well-formed URL uses a transport other than SSH."""


class GitURLParseError(GitURLError):
    """Raised when a string cannot be parsed as any git URL form."""


class EmptyRepoPathError(GitURLError):
    """Raised when a parsed URL has no path segment to name the repository."""


# ============================================================================
# Client state and filesystem
# ============================================================================


class NoWorkingDirectoryError(GitClientError):
    """Raised when an operation needs a cloned repository and none exists."""


class TempDirCreationError(GitClientError):
    """Raised when the temporary clone directory cannot be created."""


class DirCreationError(GitClientError):
    """Raised when the clone target directory cannot be created."""


class RefsReadError(GitClientError):
    """Raised when the branch heads directory cannot be listed."""


# ============================================================================
# git subprocess failures
# ============================================================================


class GitCommandError(GitClientError, RuntimeError):
    """A git invocation failed.

    Attributes:
        args_run: Arguments passed to git
        cwd: Directory git ran in (None for the process working directory)
        failure: The executor's failure result
    """

    operation = "git command"

    def __init__(self, args_run: Sequence[str], cwd: Path | None, failure: ExecutionFailure) -> None:
        self.args_run = tuple(args_run)
        self.cwd = cwd
        self.failure = failure
        location = str(cwd) if cwd is not None else "current directory"
        super().__init__(f"{self.operation} failed in {location}: {failure.message}")


class CloneFailedError(GitCommandError):
    operation = "clone"


class CheckoutFailedError(GitCommandError):
    operation = "checkout"


class AddFailedError(GitCommandError):
    operation = "add"


class DiffCheckFailedError(GitCommandError):
    operation = "staged diff check"


class ConfigFailedError(GitCommandError):
    operation = "config"


class CommitFailedError(GitCommandError):
    operation = "commit"


class PushFailedError(GitCommandError):
    operation = "push"
