"""CLI entry point for composewiz."""

import io
import os
import sys
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.table import Table

from composewiz import __version__
from composewiz.catalog import DEFAULT_HARDWARE, SERVICES, get_service
from composewiz.config import load_settings, validate_settings
from composewiz.dialogs import backend_names
from composewiz.envfile import PROFILES_KEY, EnvFileStore
from composewiz.models import HardwareProfile


def _get_console(ctx) -> Console:
    """Create a Rich console respecting --no-color, with UTF-8 forced on Windows."""
    no_color = ctx.obj.get("no_color", False)
    # Force UTF-8 output to avoid Windows cp1252 encoding errors with Rich
    if sys.platform == "win32":
        out = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
        return Console(file=out, no_color=no_color, force_terminal=True)
    return Console(no_color=no_color)


def _get_settings(ctx, **overrides) -> dict:
    """Load settings from --config (or default), apply CLI overrides, validate.

    Exits with status 1 on invalid settings.
    """
    path = ctx.obj.get("config_path")
    try:
        settings = load_settings(Path(path) if path else None)
    except (ValueError, OSError, yaml.YAMLError) as e:
        click.secho(f"Could not load settings: {e}", fg="red")
        raise SystemExit(1)

    for key, value in overrides.items():
        if value is not None:
            settings[key] = value

    errors = validate_settings(settings)
    if errors:
        click.secho("Invalid settings:", fg="red")
        for err in errors:
            click.echo(f"  - {err}")
        raise SystemExit(1)
    return settings


@click.group(invoke_without_command=True)
@click.option("--config", "config_path", type=click.Path(), default=None,
              help="Path to settings file.")
@click.option("--no-color", is_flag=True, help="Disable colored output.")
@click.pass_context
def cli(ctx, config_path, no_color):
    """composewiz - choose the optional services docker compose will start."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["no_color"] = no_color
    ctx.color = False if no_color else None
    if ctx.invoked_subcommand is None:
        # ctx.invoke only fills in plain defaults, so read the envvars here.
        ctx.invoke(select_cmd,
                   env_file=os.environ.get("COMPOSEWIZ_ENV_FILE") or None,
                   backend=os.environ.get("COMPOSEWIZ_BACKEND") or None)


@cli.command()
def version():
    """Show composewiz version."""
    click.echo(f"composewiz {__version__}")


@cli.command("select")
@click.option("--env-file", type=click.Path(dir_okay=False), default=None,
              envvar="COMPOSEWIZ_ENV_FILE",
              help="The .env file that receives COMPOSE_PROFILES.")
@click.option("--backend", type=click.Choice(backend_names()), default=None,
              envvar="COMPOSEWIZ_BACKEND",
              help="Dialog tool used to draw the prompts.")
@click.option("--no-backup", is_flag=True, help="Do not keep a .bak copy of the env file.")
@click.pass_context
def select_cmd(ctx, env_file, backend, no_backup):
    """Interactive service selection wizard."""
    from composewiz.logging_setup import setup_logging
    from composewiz.wizard import require_dialog, run_wizard

    settings = _get_settings(
        ctx, env_file=env_file, backend=backend,
        backup=False if no_backup else None,
    )
    # No files, not even the log, are touched until a dialog backend is usable.
    dialog = require_dialog(settings["backend"])
    logger = setup_logging()
    logger.info("wizard started with %s dialog backend", dialog.name)

    store = EnvFileStore(Path(settings["env_file"]), backup=settings["backup"])
    run_wizard(store, dialog=dialog)


@cli.command("show")
@click.option("--env-file", type=click.Path(dir_okay=False), default=None,
              envvar="COMPOSEWIZ_ENV_FILE",
              help="The .env file to read COMPOSE_PROFILES from.")
@click.pass_context
def show_cmd(ctx, env_file):
    """Show which profiles the env file currently enables."""
    console = _get_console(ctx)
    settings = _get_settings(ctx, env_file=env_file)
    store = EnvFileStore(Path(settings["env_file"]))

    if not store.exists():
        console.print(f"[yellow]{store} does not exist.[/yellow] "
                      "Run [bold]composewiz select[/bold] to create it.")
        raise SystemExit(1)

    value = store.get(PROFILES_KEY)
    if value is None:
        console.print(f"[yellow]{PROFILES_KEY} is not set in {store}.[/yellow]")
        return

    console.print(f"{PROFILES_KEY}={value}")
    tags = [t.strip() for t in value.split(",") if t.strip()]
    if not tags:
        console.print("[dim]No optional profiles — only core services will run.[/dim]")
        return

    hardware_values = {hw.value for hw in HardwareProfile}
    table = Table(title=f"Active profiles — {store}")
    table.add_column("Profile", style="cyan")
    table.add_column("Description")
    for tag in tags:
        svc = get_service(tag)
        if svc is not None:
            table.add_row(tag, svc.description)
        elif tag in hardware_values:
            table.add_row(tag, f"Ollama — {HardwareProfile(tag).description}")
        else:
            table.add_row(tag, "[yellow]not in the service catalog[/yellow]")
    console.print(table)


@cli.command("catalog")
@click.pass_context
def catalog_cmd(ctx):
    """List the selectable services and Ollama hardware profiles."""
    console = _get_console(ctx)

    table = Table(title="Services")
    table.add_column("Tag", style="cyan")
    table.add_column("Description")
    table.add_column("Default")
    for svc in SERVICES:
        table.add_row(svc.tag, svc.description,
                      "[green]on[/green]" if svc.default_enabled else "[dim]off[/dim]")
    console.print(table)

    hw_table = Table(title="Ollama hardware profiles")
    hw_table.add_column("Profile", style="cyan")
    hw_table.add_column("Description")
    hw_table.add_column("Default")
    for hw in HardwareProfile:
        hw_table.add_row(hw.value, hw.description,
                         "[green]yes[/green]" if hw is DEFAULT_HARDWARE else "")
    console.print(hw_table)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
