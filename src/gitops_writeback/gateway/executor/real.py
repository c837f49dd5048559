"""Production implementation of Executor using subprocess."""

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from gitops_writeback.gateway.executor.abc import Executor
from gitops_writeback.gateway.executor.types import (
    ExecutionResult,
    ProcessExitError,
    ProcessLaunchError,
)

logger = logging.getLogger(__name__)


def copied_env_with_overrides(env_overrides: Mapping[str, str]) -> dict[str, str]:
    """Copy os.environ for a git subprocess and apply overrides.

    GIT_TERMINAL_PROMPT=0 keeps git from blocking on a credential prompt
    when running unattended.
    """
    env = os.environ.copy()
    env["GIT_TERMINAL_PROMPT"] = "0"
    env.update(env_overrides)
    return env


class RealExecutor(Executor):
    """Runs commands with subprocess.run and captures their output."""

    def __init__(
        self,
        *,
        env_overrides: Mapping[str, str] | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        """Create a RealExecutor.

        Args:
            env_overrides: Variables added to the inherited environment
            timeout_seconds: Per-invocation limit, or None to wait indefinitely
        """
        self._env_overrides = dict(env_overrides) if env_overrides is not None else {}
        self._timeout_seconds = timeout_seconds

    @property
    def env_overrides(self) -> dict[str, str]:
        return dict(self._env_overrides)

    def execute(
        self,
        command: str,
        *,
        cwd: Path | None,
        args: Sequence[str],
    ) -> ExecutionResult | ProcessExitError | ProcessLaunchError:
        arg_tuple = tuple(args)
        try:
            result = subprocess.run(
                [command, *arg_tuple],
                cwd=cwd,
                env=copied_env_with_overrides(self._env_overrides),
                capture_output=True,
                text=True,
                check=False,
                timeout=self._timeout_seconds,
            )
        except subprocess.TimeoutExpired:
            return ProcessLaunchError(
                command=command,
                args=arg_tuple,
                cwd=cwd,
                reason=f"timed out after {self._timeout_seconds} seconds",
            )
        except OSError as e:
            # Missing executable or working directory
            return ProcessLaunchError(command=command, args=arg_tuple, cwd=cwd, reason=str(e))

        if result.returncode != 0:
            logger.debug("%s exited with status %d", command, result.returncode)
            return ProcessExitError(
                command=command,
                args=arg_tuple,
                cwd=cwd,
                exit_code=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )
        return ExecutionResult(stdout=result.stdout, stderr=result.stderr)
