"""Publish local files to a git repository in one clone/commit/push cycle."""

import logging
import shutil
import tempfile
from pathlib import Path

import click

from gitops_writeback.cli.context import CliContext
from gitops_writeback.git.client import ClientParams, CloneOptions, GitClient
from gitops_writeback.git.errors import GitClientError
from gitops_writeback.git.url import validate_url

logger = logging.getLogger(__name__)


@click.command("publish")
@click.option("--url", required=True, help="SSH URL of the repository")
@click.option("--branch", required=True, help="Branch to commit to")
@click.option(
    "--bootstrap",
    is_flag=True,
    help="Create the branch if the repository has no branches yet",
)
@click.option(
    "--ssh-key",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="GITOPS_SSH_KEY",
    default=None,
    help="Private key for SSH authentication",
)
@click.option("--message", "-m", required=True, help="Commit message")
@click.option("--user", default="", help="Commit author name")
@click.option("--email", default="", help="Commit author email")
@click.option("--prefix", default="gitops-", show_default=True, help="Temp directory prefix")
@click.option("--timeout", type=float, default=None, help="Seconds allowed per git command")
@click.option("--keep", is_flag=True, help="Keep the local clone after publishing")
@click.argument(
    "sources",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.pass_obj
def publish_cmd(
    ctx: CliContext,
    *,
    url: str,
    branch: str,
    bootstrap: bool,
    ssh_key: Path | None,
    message: str,
    user: str,
    email: str,
    prefix: str,
    timeout: float | None,
    keep: bool,
    sources: tuple[Path, ...],
) -> None:
    """Copy SOURCES into the repository root, commit and push them."""
    try:
        validate_url(url)
    except GitClientError as e:
        raise click.ClickException(str(e)) from e

    seen: dict[str, Path] = {}
    for source in sources:
        if source.name in seen:
            raise click.ClickException(
                f"'{source}' and '{seen[source.name]}' would both be written to '{source.name}'"
            )
        seen[source.name] = source

    client = ctx.client_factory(
        ClientParams(private_ssh_key_path=ssh_key, timeout_seconds=timeout)
    )
    try:
        clone_dir = Path(tempfile.mkdtemp(prefix=prefix))
    except OSError as e:
        raise click.ClickException(f"cannot create temporary directory: {e}") from e

    try:
        _publish(
            client,
            clone_dir=clone_dir,
            url=url,
            branch=branch,
            bootstrap=bootstrap,
            message=message,
            user=user,
            email=email,
            sources=sources,
        )
    except GitClientError as e:
        if keep:
            raise click.ClickException(f"{e} (clone directory kept at {clone_dir})") from e
        raise click.ClickException(str(e)) from e
    finally:
        if not keep:
            _remove_clone_dir(clone_dir)


def _publish(
    client: GitClient,
    *,
    clone_dir: Path,
    url: str,
    branch: str,
    bootstrap: bool,
    message: str,
    user: str,
    email: str,
    sources: tuple[Path, ...],
) -> None:
    client.clone_repo_in_path(
        clone_dir, CloneOptions(url=url, branch=branch, bootstrap=bootstrap)
    )
    logger.info("Cloned %s into %s", url, clone_dir)

    names: list[str] = []
    for source in sources:
        shutil.copy2(source, clone_dir / source.name)
        names.append(source.name)
    client.add(*names)

    if not client.commit(message, user, email):
        click.echo("Nothing to commit")
        return

    client.push()
    click.echo(f"Pushed {len(names)} file(s) to {branch}")


def _remove_clone_dir(clone_dir: Path) -> None:
    """Remove the clone whether or not git got far enough to populate it."""
    if not clone_dir.exists():
        return
    try:
        shutil.rmtree(clone_dir)
    except OSError as e:
        # Runs in a finally block; an exception here would hide the real failure
        logger.warning("Could not remove clone directory %s: %s", clone_dir, e)
