"""Locator commands: build, canonicalize and inspect dependency keys."""

from __future__ import annotations

import click
from rich.table import Table

from ..config import ConfigError
from ..config import load_cli_config
from ..console import console
from ..locators import Locator
from ..locators import make_locator
from ..locators import normalize_git_project
from ..paths import create_settings_manager
from ..utils.error_format import escape_markup
from ..utils.error_format import format_error_message


@click.group(invoke_without_command=True)
@click.pass_context
def locator(ctx: click.Context):
    """Build and inspect dependency locators."""
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@locator.command("make")
@click.argument("fetcher")
@click.argument("project")
@click.argument("revision")
def locator_make(fetcher: str, project: str, revision: str):
    """Print the locator for FETCHER, PROJECT and REVISION.

    Examples:

        \b
        depmap locator make git git@github.com:org/repo.git v1.2.0
        depmap locator make npm lodash 4.17.21
    """
    click.echo(make_locator(fetcher, project, revision))


@locator.command("normalize")
@click.argument("project")
def locator_normalize(project: str):
    """Print the canonical form of a git PROJECT remote."""
    click.echo(normalize_git_project(project))


@locator.command("parse")
@click.argument("text", metavar="LOCATOR")
def locator_parse(text: str):
    """Split LOCATOR into fetcher, project and revision."""
    parsed = Locator.parse(text)

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Fetcher", escape_markup(parsed.fetcher))
    table.add_row("Project", escape_markup(parsed.project))
    table.add_row("Revision", escape_markup(parsed.revision))
    table.add_row("Canonical", escape_markup(parsed.key))
    console.print(table)


@locator.command("project")
def locator_project():
    """Print the locator of the configured project."""
    try:
        config = load_cli_config(create_settings_manager())
    except ConfigError as e:
        console.print(f"[red]{escape_markup(format_error_message(e, include_type=False))}[/red]")
        raise SystemExit(1) from e

    if not config.project:
        console.print("[yellow]No project configured. Set 'project' in .depmap/settings.yaml[/yellow]")
        raise SystemExit(1)

    click.echo(config.project_locator().key)
