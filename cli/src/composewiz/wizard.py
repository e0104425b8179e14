"""Interactive service selection wizard."""

import logging
from typing import List, Optional, Union

import click

from composewiz.catalog import CORE_SERVICES, checklist_options
from composewiz.dialogs import BaseDialog, DialogUnavailable, get_dialog
from composewiz.envfile import ConfigStore
from composewiz.models import CANCELLED, Cancelled, ResolvedProfiles
from composewiz.resolver import ProfileResolver

logger = logging.getLogger("composewiz")

SELECTION_TITLE = "Service Selection Wizard"
SELECTION_TEXT = (
    "Choose the services you want to deploy.\n"
    "Use ARROW KEYS to navigate, SPACEBAR to select/deselect, ENTER to confirm."
)

_RULE = "-" * 68


def _rule() -> None:
    click.echo(_RULE)


def require_dialog(backend: str) -> BaseDialog:
    """Return a usable dialog backend or exit with status 1.

    Runs before anything touches the env file.
    """
    try:
        dialog = get_dialog(backend)
    except DialogUnavailable as e:
        logger.error("dialog backend unavailable (%s): %s", backend, e)
        _rule()
        click.secho(f"ERROR: {e}", fg="red", bold=True)
        if e.hint:
            click.echo(e.hint)
        click.echo("Please install the missing tool and try again.")
        _rule()
        raise SystemExit(1)
    logger.info("using %s dialog backend", dialog.name)
    return dialog


def select_services(dialog: BaseDialog) -> Union[List[str], Cancelled]:
    """Show the service checklist seeded with the catalog defaults."""
    return dialog.select_multiple(SELECTION_TITLE, SELECTION_TEXT, checklist_options())


def _core_only_message() -> str:
    return f"Only core services ({', '.join(CORE_SERVICES)}) will be started."


def _handle_cancel(resolver: ProfileResolver) -> None:
    """Clear COMPOSE_PROFILES so a previous run's selection does not linger."""
    logger.info("service selection cancelled by user")
    _rule()
    click.echo("INFO: Service selection cancelled by user. Exiting wizard.")
    click.echo(f"COMPOSE_PROFILES will be left empty. {_core_only_message()}")
    _rule()
    resolver.write("")


def _print_selection(resolved: ResolvedProfiles) -> None:
    _rule()
    if resolved.is_empty:
        click.echo("INFO: No optional services selected.")
    else:
        click.echo("INFO: You have selected the following service profiles to be deployed:")
        for line in resolved.summary_lines():
            click.echo(line)
    _rule()


def _print_outcome(store: ConfigStore, resolved: ResolvedProfiles) -> None:
    click.secho(f"INFO: COMPOSE_PROFILES has been set in '{store}'.", fg="green")
    if resolved.is_empty:
        click.echo(_core_only_message())
    else:
        click.echo(f"The following Docker Compose profiles will be active: {resolved.value}")
    _rule()


def run_wizard(
    store: ConfigStore,
    backend: str = "auto",
    dialog: Optional[BaseDialog] = None,
) -> Optional[ResolvedProfiles]:
    """Walk the user through service selection and persist the result.

    Returns the resolved profiles, or ``None`` if the checklist was cancelled.
    Exits with status 1 if no dialog backend can run.
    """
    if dialog is None:
        dialog = require_dialog(backend)
    resolver = ProfileResolver(dialog, store)

    selection = select_services(dialog)
    if selection is CANCELLED:
        _handle_cancel(resolver)
        return None
    logger.info("services selected: %s", ",".join(selection) or "(none)")

    resolved = resolver.resolve(selection)
    _print_selection(resolved)
    resolver.write(resolved.value)
    _print_outcome(store, resolved)
    return resolved
