import logging

import click

from gitops_writeback.cli.commands.publish import publish_cmd
from gitops_writeback.cli.commands.url import repo_name_cmd, validate_url_cmd
from gitops_writeback.cli.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="gitops-writeback")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Clone git repositories, commit changes and push them back."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()


cli.add_command(publish_cmd)
cli.add_command(repo_name_cmd)
cli.add_command(validate_url_cmd)


def main() -> None:
    """CLI entry point used by the `gitops-writeback` console script."""
    cli()
