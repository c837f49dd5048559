"""Dependencies shared by CLI commands.

Tests pass their own CliContext as `obj` so commands run against fakes.
"""

from collections.abc import Callable
from dataclasses import dataclass

from gitops_writeback.git.client import ClientParams, GitClient, create_git_client


@dataclass(frozen=True)
class CliContext:
    """Factories the CLI commands use instead of constructing gateways directly."""

    client_factory: Callable[[ClientParams], GitClient]


def create_context() -> CliContext:
    """Create the production context backed by the real git binary."""
    return CliContext(client_factory=create_git_client)
