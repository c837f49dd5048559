"""Fake implementation of Executor for testing."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from gitops_writeback.gateway.executor.abc import Executor
from gitops_writeback.gateway.executor.types import (
    ExecutionResult,
    ProcessExitError,
    ProcessLaunchError,
)


@dataclass(frozen=True)
class ExecCall:
    """Record of an execute operation."""

    command: str
    cwd: Path | None
    args: tuple[str, ...]


SideEffect = Callable[[ExecCall], None]


def _matches(args: tuple[str, ...], prefix: tuple[str, ...]) -> bool:
    return args[: len(prefix)] == prefix


class FakeExecutor(Executor):
    """In-memory fake implementation for testing.

    Constructor Injection: outcomes are configured per argument prefix.
    Mutation Tracking: every execute call is recorded for assertions.

    Outcome resolution for a call, in order:
    1. the first prefix in launch_failures matching the args -> ProcessLaunchError
    2. the first prefix in exit_codes matching the args -> that status
    3. otherwise exit status 0

    Side effects (keyed by first argument, e.g. "clone") only run for calls
    that resolve to exit status 0.
    """

    def __init__(
        self,
        *,
        exit_codes: dict[tuple[str, ...], int] | None = None,
        launch_failures: set[tuple[str, ...]] | None = None,
        side_effects: dict[str, SideEffect] | None = None,
    ) -> None:
        self._exit_codes = exit_codes if exit_codes is not None else {}
        self._launch_failures = launch_failures if launch_failures is not None else set()
        self._side_effects = side_effects if side_effects is not None else {}
        self._calls: list[ExecCall] = []

    def execute(
        self,
        command: str,
        *,
        cwd: Path | None,
        args: Sequence[str],
    ) -> ExecutionResult | ProcessExitError | ProcessLaunchError:
        call = ExecCall(command=command, cwd=cwd, args=tuple(args))
        self._calls.append(call)

        for prefix in self._launch_failures:
            if _matches(call.args, prefix):
                return ProcessLaunchError(
                    command=command, args=call.args, cwd=cwd, reason="fake launch failure"
                )

        exit_code = 0
        for prefix, code in self._exit_codes.items():
            if _matches(call.args, prefix):
                exit_code = code
                break

        if exit_code != 0:
            return ProcessExitError(
                command=command,
                args=call.args,
                cwd=cwd,
                exit_code=exit_code,
                stdout="",
                stderr=f"fake exit status {exit_code}",
            )

        if call.args and call.args[0] in self._side_effects:
            self._side_effects[call.args[0]](call)
        return ExecutionResult(stdout="", stderr="")

    # ============================================================================
    # Mutation Tracking Properties
    # ============================================================================

    @property
    def calls(self) -> list[ExecCall]:
        """Read-only access to execute calls for test assertions."""
        return list(self._calls)

    @property
    def executed_args(self) -> list[tuple[str, ...]]:
        """Arguments of every call, in order."""
        return [call.args for call in self._calls]


def simulate_clone(*, branches: list[str]) -> SideEffect:
    """Side effect for "clone" that lays out .git/refs/heads in the target dir.

    Args:
        branches: Branch names the cloned repository should contain.
            An empty list simulates cloning an empty remote.
    """

    def _clone(call: ExecCall) -> None:
        target = Path(call.args[-1])
        heads = target / ".git" / "refs" / "heads"
        heads.mkdir(parents=True, exist_ok=True)
        for branch in branches:
            (heads / branch).write_text("0" * 40 + "\n", encoding="utf-8")

    return _clone
