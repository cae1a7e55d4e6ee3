"""depmap CLI - module resolution and dependency locators."""

import logging
import os

import click

from .commands.locator import locator as locator_group
from .commands.modules import modules as modules_group
from .config import ENV_DEBUG
from .config import TRUTHY
from .logging_setup import init_json_logging

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.version_option(package_name="depmap-cli")
@click.option("--debug", is_flag=True, help="Log debug details to the JSONL log")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="JSONL log path")
@click.pass_context
def cli(ctx: click.Context, debug: bool, log_file: str | None):
    """depmap - find your modules and name your dependencies."""
    if debug or os.environ.get(ENV_DEBUG, "").strip().lower() in TRUTHY:
        level = "DEBUG"
    else:
        level = None
    init_json_logging(path=log_file, level=level)
    logger.debug(f"Starting depmap (subcommand={ctx.invoked_subcommand})")

    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


cli.add_command(modules_group)
cli.add_command(locator_group)


def main():
    cli()


if __name__ == "__main__":
    main()
