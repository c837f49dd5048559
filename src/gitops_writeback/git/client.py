"""Git write-back client.

This module sequences the git operations a GitOps write-back needs:
clone (with optional empty-repository bootstrap), add, commit, push and
removal of the local copy.

Architecture:
- TmpCloner: Abstract interface for consumers that only need cloning
- GitClient: Runs git through an injected Executor
- create_git_client: Builds a GitClient on a RealExecutor from ClientParams
"""

import logging
import shutil
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from gitops_writeback.gateway.executor.abc import Executor
from gitops_writeback.gateway.executor.real import RealExecutor
from gitops_writeback.gateway.executor.types import (
    ExecutionResult,
    ProcessExitError,
    ProcessLaunchError,
)
from gitops_writeback.git import commands
from gitops_writeback.git.errors import (
    AddFailedError,
    CheckoutFailedError,
    CloneFailedError,
    CommitFailedError,
    ConfigFailedError,
    DiffCheckFailedError,
    DirCreationError,
    GitClientError,
    GitCommandError,
    NoWorkingDirectoryError,
    PushFailedError,
    RefsReadError,
    TempDirCreationError,
)
from gitops_writeback.git.url import validate_url

logger = logging.getLogger(__name__)

GIT_COMMAND = "git"


@dataclass(frozen=True)
class ClientParams:
    """Arguments used to create a new GitClient.

    Attributes:
        private_ssh_key_path: Key used for every SSH connection git makes
        timeout_seconds: Limit for each git invocation, None for no limit
    """

    private_ssh_key_path: Path | None = None
    timeout_seconds: float | None = None


@dataclass(frozen=True)
class CloneOptions:
    """Options for cloning a git repository.

    Attributes:
        url: Repository URL
        branch: Branch to switch to after cloning, None to stay on the default
        bootstrap: Create the branch if the repository is empty
    """

    url: str
    branch: str | None = None
    bootstrap: bool = False


@dataclass(frozen=True)
class GitOptions:
    """Repository and identity settings as supplied by a caller."""

    url: str
    branch: str | None = None
    user: str | None = None
    email: str | None = None

    def validate_url(self) -> None:
        """Raise a GitURLError if url is not a supported SSH git URL."""
        validate_url(self.url)


@dataclass(frozen=True)
class Unbound:
    """No repository has been cloned by this client yet."""


@dataclass(frozen=True)
class Bound:
    """The client operates on the repository at path."""

    path: Path


WorkingDirectory = Unbound | Bound


class TmpCloner(ABC):
    """Clones git repositories into temporary directories."""

    @abstractmethod
    def clone_repo_in_tmp_dir(self, tmp_dir_prefix: str, options: CloneOptions) -> Path:
        """Clone a repository into a new temporary directory.

        Returns:
            Path of the created directory
        """
        ...


def build_git_env(params: ClientParams) -> dict[str, str]:
    """Environment overrides applied to every git invocation."""
    env: dict[str, str] = {}
    if params.private_ssh_key_path is not None:
        env["GIT_SSH_COMMAND"] = f"ssh -i {params.private_ssh_key_path}"
    return env


def create_git_client(params: ClientParams) -> "GitClient":
    """Return a client that runs the real git binary configured from params."""
    executor = RealExecutor(
        env_overrides=build_git_env(params),
        timeout_seconds=params.timeout_seconds,
    )
    return GitClient(executor)


class GitClient(TmpCloner):
    """Performs git operations on a single working directory.

    Not safe for concurrent use: the working directory binding is plain
    mutable state. Use one client per repository session.
    """

    def __init__(self, executor: Executor, *, working_dir: Path | None = None) -> None:
        """Create a GitClient around an already configured executor.

        Args:
            executor: Runs the git binary
            working_dir: Existing checkout to operate on. When None the client
                is unbound until a clone succeeds.
        """
        self._executor = executor
        self._working_dir: WorkingDirectory = (
            Bound(working_dir) if working_dir is not None else Unbound()
        )

    @property
    def working_directory(self) -> WorkingDirectory:
        return self._working_dir

    # ============================================================================
    # Clone
    # ============================================================================

    def clone_repo_in_tmp_dir(self, tmp_dir_prefix: str, options: CloneOptions) -> Path:
        """Clone options.url into a fresh temporary directory and switch branch.

        The directory is not removed if cloning or checkout fails afterwards.

        Raises:
            TempDirCreationError: If the temporary directory cannot be created
            CloneFailedError: If git clone fails
            CheckoutFailedError: If switching to options.branch fails
            RefsReadError: If bootstrap is requested and refs cannot be read
        """
        try:
            clone_dir = Path(tempfile.mkdtemp(prefix=tmp_dir_prefix))
        except OSError as e:
            raise TempDirCreationError(f"cannot create temporary directory: {e}") from e

        try:
            self._clone_repo_in_path(clone_dir, options)
        except GitClientError as e:
            e.add_note(f"clone directory left in place: {clone_dir}")
            raise
        return clone_dir

    def clone_repo_in_path(self, clone_path: Path, options: CloneOptions) -> None:
        """Behave like clone_repo_in_tmp_dir but clone into clone_path.

        clone_path and its missing parents are created first.

        Raises:
            DirCreationError: If the directory cannot be created
        """
        try:
            clone_path.mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as e:
            raise DirCreationError(f"unable to create directory for cloning: {e}") from e
        self._clone_repo_in_path(clone_path, options)

    def _clone_repo_in_path(self, clone_path: Path, options: CloneOptions) -> None:
        self._run_git(
            commands.clone_args(options.url, str(clone_path)),
            cwd=None,
            error_cls=CloneFailedError,
        )

        # Bind only after the clone so later commands never run in a
        # directory that is not yet a repository
        self._working_dir = Bound(clone_path)

        if options.branch is None or options.branch == "":
            return

        create = False
        if options.bootstrap:
            create = self.is_repo_empty()
            if create:
                logger.info("Repository is empty, creating branch %s", options.branch)
        self._run_git(
            commands.checkout_args(options.branch, create=create),
            cwd=clone_path,
            error_cls=CheckoutFailedError,
        )

    def is_repo_empty(self) -> bool:
        """Return True if the repository has no branches.

        Raises:
            NoWorkingDirectoryError: If no repository is bound
            RefsReadError: If .git/refs/heads cannot be listed
        """
        heads_dir = self._require_working_dir() / ".git" / "refs" / "heads"
        try:
            entries = list(heads_dir.iterdir())
        except OSError as e:
            raise RefsReadError(f"unable to read branch heads in {heads_dir}: {e}") from e
        return len(entries) == 0

    # ============================================================================
    # Add, commit, push
    # ============================================================================

    def add(self, *files: str) -> None:
        """Stage the given paths (git add -- <files...>)."""
        self._run_git(
            commands.add_args(list(files)),
            cwd=self._require_working_dir(),
            error_cls=AddFailedError,
        )

    def commit(self, message: str, user: str, email: str) -> bool:
        """Commit staged changes, if there are any.

        Returns:
            True if a commit was created, False if the index matched HEAD

        Raises:
            DiffCheckFailedError: If the staged diff check could not run
            ConfigFailedError: If setting user.email or user.name fails
            CommitFailedError: If git commit fails
        """
        cwd = self._require_working_dir()
        diff_args = commands.staged_diff_check_args()
        diff_result = self._execute(diff_args, cwd=cwd)
        if isinstance(diff_result, ExecutionResult):
            logger.info("Nothing to commit (the repository contained identical files), moving on")
            return False
        if isinstance(diff_result, ProcessLaunchError):
            raise DiffCheckFailedError(diff_args, cwd, diff_result)

        # Identity is repository-local and set only on commit. Without it git
        # uses global config, or fails with "Please tell me who you are".
        if email != "":
            self._run_git(
                commands.config_args("user.email", email), cwd=cwd, error_cls=ConfigFailedError
            )
        if user != "":
            self._run_git(
                commands.config_args("user.name", user), cwd=cwd, error_cls=ConfigFailedError
            )

        self._run_git(
            commands.commit_args(message, user=user, email=email),
            cwd=cwd,
            error_cls=CommitFailedError,
        )
        return True

    def push(self) -> None:
        """Push to the upstream of the current branch."""
        self._run_git(
            commands.push_args(), cwd=self._require_working_dir(), error_cls=PushFailedError
        )

    # ============================================================================
    # Cleanup
    # ============================================================================

    def delete_local_repo(self) -> None:
        """Delete the local copy of the repository, including its directory.

        The client stays bound to the deleted path.

        Raises:
            NoWorkingDirectoryError: If no repository was ever cloned
        """
        path = self._require_working_dir()
        if path.exists():
            shutil.rmtree(path)

    # ============================================================================
    # Helpers
    # ============================================================================

    def _require_working_dir(self) -> Path:
        match self._working_dir:
            case Bound(path=path):
                return path
            case Unbound():
                raise NoWorkingDirectoryError("no cloned directory; clone a repository first")

    def _execute(
        self, args: Sequence[str], *, cwd: Path | None
    ) -> ExecutionResult | ProcessExitError | ProcessLaunchError:
        logger.debug("running git %s in %s", list(args), cwd)
        return self._executor.execute(GIT_COMMAND, cwd=cwd, args=args)

    def _run_git(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None,
        error_cls: type[GitCommandError],
    ) -> None:
        result = self._execute(args, cwd=cwd)
        if not isinstance(result, ExecutionResult):
            raise error_cls(args, cwd, result)
