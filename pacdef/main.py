"""
pacdef — CLI entrypoint.

Usage:
    pacdef --help
    pacdef sync
    pacdef clean
    pacdef unmanaged
    pacdef groups
    pacdef edit base desktop
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from pacdef import __version__
from pacdef.backends.base import Backend, BackendError
from pacdef.backends.registry import BackendRegistry
from pacdef.core.config.groups import load_groups
from pacdef.core.config.loader import (
    ConfigError,
    Settings,
    config_dir,
    group_dir,
    load_settings,
    settings_file,
)
from pacdef.core.engine.reconcile import ToDoPerBackend
from pacdef.core.models.group import Group
from pacdef.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="pacdef")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Only show errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config-dir",
    "config_path",
    type=click.Path(file_okay=False),
    default=None,
    help="Configuration directory (default: $XDG_CONFIG_HOME/pacdef).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """pacdef — declarative package management across package managers."""
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = Path(config_path) if config_path else config_dir()

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get("PACDEF_LOG_FILE"),
        log_file_level=os.environ.get("PACDEF_LOG_FILE_LEVEL"),
    )


# ── Helpers ─────────────────────────────────────────────────────


def _error_chain(err: BaseException) -> str:
    """Message of an exception followed by its causes."""
    parts = []
    current: BaseException | None = err
    while current is not None:
        text = str(current)
        if text:
            parts.append(text)
        current = current.__cause__
    return ": ".join(parts)


def _fail(err: BaseException) -> None:
    click.secho(f"❌ {_error_chain(err)}", fg="red")
    sys.exit(1)


def _settings(ctx: click.Context) -> Settings:
    if "settings" not in ctx.obj:
        ctx.obj["settings"] = load_settings(settings_file(ctx.obj["config_dir"]))
    return ctx.obj["settings"]


def _groups(ctx: click.Context) -> frozenset[Group]:
    settings = _settings(ctx)
    return load_groups(
        group_dir(ctx.obj["config_dir"]),
        warn_not_symlinks=settings.warn_not_symlinks,
    )


def _backends(ctx: click.Context) -> list[Backend]:
    """Backends for this run; tests may supply their own via ``obj``."""
    if ctx.obj.get("backends") is not None:
        return list(ctx.obj["backends"])
    return BackendRegistry(_settings(ctx)).enumerate()


def _print_packages(todo: ToDoPerBackend, indent: str = "") -> None:
    for section, packages in todo.summary():
        click.echo(f"{indent}{section}")
        for package in packages:
            click.echo(f"{indent}  {package}")


def _ask(noconfirm: bool) -> bool:
    return noconfirm or click.confirm("Continue?", default=True)


def _report(outcome: str) -> None:
    if outcome == "nothing_to_do":
        click.echo("nothing to do")
    elif outcome == "declined":
        click.secho("Aborted, nothing changed.", fg="yellow")
    elif outcome == "done":
        click.secho("✅ Done.", fg="green", bold=True)


# ── Reconcile ───────────────────────────────────────────────────


@cli.command()
@click.option("--noconfirm", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def sync(ctx: click.Context, noconfirm: bool) -> None:
    """Install declared packages that are missing."""
    from pacdef.core.use_cases.reconcile import sync_packages

    def confirm(todo: ToDoPerBackend) -> bool:
        click.echo("Would install the following packages:")
        _print_packages(todo, indent="  ")
        click.echo()
        return _ask(noconfirm)

    try:
        result = sync_packages(_groups(ctx), _backends(ctx), confirm)
    except (ConfigError, BackendError) as e:
        _fail(e)
        return

    _report(result.outcome)


@cli.command()
@click.option("--noconfirm", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def clean(ctx: click.Context, noconfirm: bool) -> None:
    """Remove explicitly installed packages that no group declares."""
    from pacdef.core.use_cases.reconcile import clean_packages

    def confirm(todo: ToDoPerBackend) -> bool:
        click.echo("Would remove the following packages and their dependencies:")
        _print_packages(todo, indent="  ")
        click.echo()
        return _ask(noconfirm)

    try:
        result = clean_packages(_groups(ctx), _backends(ctx), confirm)
    except (ConfigError, BackendError) as e:
        _fail(e)
        return

    _report(result.outcome)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def unmanaged(ctx: click.Context, as_json: bool) -> None:
    """Show explicitly installed packages that no group declares."""
    from pacdef.core.use_cases.reconcile import show_unmanaged

    try:
        result = show_unmanaged(_groups(ctx), _backends(ctx))
    except ConfigError as e:
        _fail(e)
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    _print_packages(result.todo)


# ── Groups ──────────────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def groups(ctx: click.Context, as_json: bool) -> None:
    """List declared groups."""
    from pacdef.core.use_cases.groups import list_groups

    try:
        names = list_groups(_groups(ctx))
    except ConfigError as e:
        _fail(e)
        return

    if as_json:
        click.echo(json.dumps(names, indent=2))
        return

    for name in names:
        click.echo(name)


@cli.command()
@click.argument("group", nargs=-1, required=True)
@click.option("--editor", default=None, help="Editor command (default: $EDITOR).")
@click.pass_context
def edit(ctx: click.Context, group: tuple[str, ...], editor: str | None) -> None:
    """Open group files in an editor."""
    from pacdef.core.use_cases.groups import edit_group_files

    try:
        edit_group_files(group_dir(ctx.obj["config_dir"]), group, editor=editor)
    except ConfigError as e:
        _fail(e)


# ── Info ────────────────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def backends(ctx: click.Context, as_json: bool) -> None:
    """Show supported backends and whether their tools are installed."""
    try:
        status = BackendRegistry(_settings(ctx)).backend_status()
    except ConfigError as e:
        _fail(e)
        return

    if as_json:
        click.echo(json.dumps(status, indent=2))
        return

    for section, info in status.items():
        icon = "✅" if info["available"] else "❌"
        click.echo(f"   {icon} {section}")


@cli.command()
def version() -> None:
    """Show the pacdef version."""
    click.echo(f"pacdef, version: {__version__}")


if __name__ == "__main__":
    cli()
