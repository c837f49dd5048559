"""Discriminated union types for process execution.

ExecutionResult | ProcessExitError | ProcessLaunchError follow the
NonIdealState pattern: callers match on the type instead of catching
exceptions, so "ran and exited non-zero" stays distinguishable from
"never ran at all".
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ExecutionResult:
    """Success result: the process exited with status 0."""

    stdout: str
    stderr: str


@dataclass(frozen=True)
class ProcessExitError:
    """The process ran and exited with a non-zero status. Implements NonIdealState."""

    command: str
    args: tuple[str, ...]
    cwd: Path | None
    exit_code: int
    stdout: str
    stderr: str

    @property
    def error_type(self) -> str:
        return "exit-status"

    @property
    def message(self) -> str:
        detail = self.stderr.strip() or self.stdout.strip()
        base = f"'{_format_command(self.command, self.args)}' exited with status {self.exit_code}"
        if detail:
            return f"{base}: {detail}"
        return base


@dataclass(frozen=True)
class ProcessLaunchError:
    """The process could not be started or did not finish. Implements NonIdealState."""

    command: str
    args: tuple[str, ...]
    cwd: Path | None
    reason: str

    @property
    def error_type(self) -> str:
        return "launch-failed"

    @property
    def message(self) -> str:
        return f"could not run '{_format_command(self.command, self.args)}': {self.reason}"


ExecutionFailure = ProcessExitError | ProcessLaunchError


def _format_command(command: str, args: tuple[str, ...]) -> str:
    return " ".join([command, *args])
