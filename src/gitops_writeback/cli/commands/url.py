"""Repository URL inspection commands."""

import click

from gitops_writeback.git.errors import GitURLError
from gitops_writeback.git.url import repo_name, validate_url


@click.command("validate-url")
@click.argument("url")
def validate_url_cmd(url: str) -> None:
    """Check that URL is a well-formed SSH git URL."""
    try:
        validate_url(url)
    except GitURLError as e:
        raise click.ClickException(str(e)) from e
    click.echo("ok")


@click.command("repo-name")
@click.argument("url")
def repo_name_cmd(url: str) -> None:
    """Print the short name of the repository at URL."""
    try:
        name = repo_name(url)
    except GitURLError as e:
        raise click.ClickException(str(e)) from e
    click.echo(name)
