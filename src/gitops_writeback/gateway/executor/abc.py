"""Abstract interface for running external commands."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from gitops_writeback.gateway.executor.types import (
    ExecutionResult,
    ProcessExitError,
    ProcessLaunchError,
)


class Executor(ABC):
    """Runs a named command with arguments in a working directory.

    All implementations (real and fake) must implement this interface.
    Environment overrides are fixed at construction time and apply to
    every invocation.
    """

    @abstractmethod
    def execute(
        self,
        command: str,
        *,
        cwd: Path | None,
        args: Sequence[str],
    ) -> ExecutionResult | ProcessExitError | ProcessLaunchError:
        """Run a command and wait for it to finish.

        Args:
            command: Executable name (e.g. "git")
            cwd: Working directory, or None for the current process directory
            args: Arguments passed to the command

        Returns:
            ExecutionResult on exit status 0, ProcessExitError on any other
            exit status, ProcessLaunchError if the process never completed
        """
        ...
