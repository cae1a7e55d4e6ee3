"""Module commands: inspect, declare and discover buildable units."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from ..console import console
from ..module_resolution import ModuleConfig
from ..module_resolution import ModuleType
from ..module_resolution import PathResolutionError
from ..module_resolution import UnknownModuleTypeError
from ..module_resolution import discover_modules
from ..paths import ScopeType
from ..paths import create_module_factory
from ..paths import create_settings_manager
from ..paths import get_settings_scope
from ..services import LocalFileService
from ..utils.error_format import escape_markup
from ..utils.error_format import format_error_message


def _parse_type(value: str | None) -> ModuleType | None:
    if value is None:
        return None
    try:
        return ModuleType.parse(value)
    except UnknownModuleTypeError as e:
        raise click.BadParameter(str(e)) from e


def _load_configs() -> list[ModuleConfig]:
    try:
        return create_settings_manager().get_module_configs()
    except ValidationError as e:
        console.print(f"[red]Invalid module declaration:[/red] {escape_markup(format_error_message(e, include_type=False))}")
        raise click.Abort() from e


@click.group(invoke_without_command=True)
@click.pass_context
def modules(ctx: click.Context):
    """Manage the modules declared for this project."""
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@modules.command("list")
@click.option("--type", "-t", "type_filter", help="Only show modules of this type")
@click.option("--strict", is_flag=True, help="Exit non-zero if any module fails to resolve")
def modules_list(type_filter: str | None, strict: bool):
    """Resolve declared modules and show where their targets live."""
    wanted = _parse_type(type_filter)
    configs = [c for c in _load_configs() if wanted is None or c.type == wanted]

    if not configs:
        console.print("[dim]No modules declared. Add one with 'depmap modules add' or 'depmap modules discover --save'.[/dim]")
        return

    untyped = [c for c in configs if c.type is None]
    for conf in untyped:
        console.print(f"[yellow]Skipping {escape_markup(conf.path)}: no module type declared[/yellow]")

    resolution = create_module_factory().new_all(c for c in configs if c.type is not None)
    files = LocalFileService()

    if resolution.modules:
        table = Table(title="Modules", show_header=True, header_style="bold cyan")
        table.add_column("Name", style="green")
        table.add_column("Type", style="yellow")
        table.add_column("Dir", style="magenta")
        table.add_column("Target")

        for mod in resolution.modules:
            dir_str = escape_markup(mod.dir)
            if not files.has_folder(mod.dir):
                dir_str += " [red](missing)[/red]"
            table.add_row(escape_markup(mod.name), mod.type.value, dir_str, escape_markup(mod.target))

        console.print(table)

    for conf, error in resolution.failures:
        console.print(f"[red]✗ {escape_markup(conf.name or conf.path)}:[/red] {escape_markup(format_error_message(error))}")

    if strict and resolution.failures:
        raise SystemExit(1)


@modules.command("show")
@click.argument("name")
def modules_show(name: str):
    """Show one resolved module by name or path."""
    configs = _load_configs()
    conf = next((c for c in configs if (c.name or c.path) == name or c.path == name), None)

    if conf is None:
        console.print(f"[red]Module '{escape_markup(name)}' is not declared[/red]")
        raise SystemExit(1)
    if conf.type is None:
        console.print(f"[red]Module '{escape_markup(name)}' has no type declared[/red]")
        raise SystemExit(1)

    try:
        mod = create_module_factory().new(conf.type, conf)
    except PathResolutionError as e:
        console.print(f"[red]{escape_markup(format_error_message(e))}[/red]")
        raise SystemExit(1) from e

    panel_content = f"""[bold]Name:[/bold] {escape_markup(mod.name)}
[bold]Type:[/bold] {mod.type.value}
[bold]Dir:[/bold] {escape_markup(mod.dir)}
[bold]Target:[/bold] {escape_markup(mod.target)}
[bold]Configured path:[/bold] {escape_markup(conf.path)}"""
    console.print(Panel(panel_content, title=f"Module: {escape_markup(mod.name)}", border_style="cyan"))


@modules.command("add")
@click.argument("module_type", metavar="TYPE")
@click.argument("path")
@click.option("--name", "-n", default="", help="Display name (defaults to PATH)")
@click.option("--local", "scope_flag", flag_value="local", help="Add locally (just you)")
@click.option("--project", "scope_flag", flag_value="project", help="Add for project (team)")
@click.option("--global", "scope_flag", flag_value="global", help="Add globally (all projects)")
def modules_add(module_type: str, path: str, name: str, scope_flag: ScopeType | None):
    """Declare a module of TYPE at PATH.

    PATH may be the module directory or its manifest file.

    Examples:

        \b
        depmap modules add nodejs web/package.json
        depmap modules add golang ./cmd/server --name server
    """
    parsed = _parse_type(module_type)
    scope = get_settings_scope(scope_flag)
    conf = ModuleConfig(type=parsed, path=path, name=name)

    create_settings_manager().add_module(conf, scope=scope)
    console.print(f"[green]✓ Added {parsed.value} module {escape_markup(path)}[/green] [dim]({scope})[/dim]")


@modules.command("remove")
@click.argument("path")
@click.option("--type", "-t", "module_type", help="Only remove the declaration of this type")
@click.option("--local", "scope_flag", flag_value="local", help="Remove from local")
@click.option("--project", "scope_flag", flag_value="project", help="Remove from project")
@click.option("--global", "scope_flag", flag_value="global", help="Remove from global")
def modules_remove(path: str, module_type: str | None, scope_flag: ScopeType | None):
    """Remove the module declared at PATH."""
    parsed = _parse_type(module_type)
    scope = get_settings_scope(scope_flag)

    if create_settings_manager().remove_module(path, parsed, scope=scope):
        console.print(f"[green]✓ Removed {escape_markup(path)}[/green] [dim]({scope})[/dim]")
    else:
        console.print(f"[yellow]No module declared at {escape_markup(path)} in {scope} settings[/yellow]")


@modules.command("discover")
@click.argument("directory", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--max-depth", default=4, show_default=True, help="Directory levels to scan")
@click.option("--save", is_flag=True, help="Declare discovered modules in settings")
@click.option("--local", "scope_flag", flag_value="local", help="Save locally (just you)")
@click.option("--project", "scope_flag", flag_value="project", help="Save for project (team)")
@click.option("--global", "scope_flag", flag_value="global", help="Save globally (all projects)")
def modules_discover(directory: Path, max_depth: int, save: bool, scope_flag: ScopeType | None):
    """Find manifest files under DIRECTORY and propose modules for them."""
    found = discover_modules(directory, max_depth=max_depth)

    if not found:
        console.print(f"[dim]No manifest files found under {escape_markup(directory)}[/dim]")
        return

    table = Table(title="Discovered Modules", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="green")
    table.add_column("Type", style="yellow")
    table.add_column("Path", style="magenta")
    for conf in found:
        table.add_row(escape_markup(conf.name), conf.type.value if conf.type else "", escape_markup(conf.path))
    console.print(table)

    if save:
        scope = get_settings_scope(scope_flag)
        settings = create_settings_manager()
        for conf in found:
            settings.add_module(conf, scope=scope)
        console.print(f"[green]✓ Saved {len(found)} module(s)[/green] [dim]({scope})[/dim]")
