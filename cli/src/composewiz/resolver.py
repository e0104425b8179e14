"""Turn a service selection into the COMPOSE_PROFILES value and persist it."""

import logging
from typing import List, Optional, Tuple

import click

from composewiz.catalog import DEFAULT_HARDWARE, OLLAMA_TAG, hardware_options
from composewiz.dialogs import BaseDialog
from composewiz.envfile import PROFILES_KEY, ConfigStore
from composewiz.models import CANCELLED, HardwareProfile, ResolvedProfiles

logger = logging.getLogger("composewiz")

HARDWARE_TITLE = "Ollama Hardware Profile"
HARDWARE_TEXT = (
    "Choose the hardware profile for Ollama. "
    "This will be added to your Docker Compose profiles."
)


def partition(selection: List[str]) -> Tuple[bool, List[str]]:
    """Split a selection into (ollama selected?, every other tag in order)."""
    others = [tag for tag in selection if tag != OLLAMA_TAG]
    return len(others) != len(selection), others


class ProfileResolver:
    """Resolves the Ollama special case and writes the profiles line.

    Both collaborators are injected: ``dialog`` asks the hardware question
    and ``store`` is the env file (or an in-memory stand-in).
    """

    def __init__(self, dialog: BaseDialog, store: ConfigStore):
        self.dialog = dialog
        self.store = store

    def choose_hardware(self) -> Optional[HardwareProfile]:
        """Ask which hardware Ollama should run on.  ``None`` if cancelled."""
        choice = self.dialog.select_one(
            HARDWARE_TITLE, HARDWARE_TEXT, hardware_options(), DEFAULT_HARDWARE.value,
        )
        if choice is CANCELLED:
            return None
        try:
            return HardwareProfile(choice)
        except ValueError:
            logger.warning("dialog returned unknown hardware profile %r", choice)
            return None

    def resolve(self, selection: List[str]) -> ResolvedProfiles:
        ollama_selected, others = partition(selection)
        resolved = ResolvedProfiles(services=others)
        if not ollama_selected:
            return resolved

        resolved.hardware = self.choose_hardware()
        if resolved.hardware is not None:
            click.echo(f"INFO: Ollama hardware profile selected: {resolved.hardware.value}")
            logger.info("ollama hardware profile: %s", resolved.hardware.value)
        else:
            click.echo(
                "INFO: Ollama hardware profile selection cancelled or no choice made. "
                "Ollama will not be configured with a specific hardware profile."
            )
            logger.info("ollama hardware prompt cancelled; ollama dropped")
        return resolved

    def write(self, value: str) -> None:
        """Persist ``COMPOSE_PROFILES=<value>`` as the store's only profiles line.

        Creates the store if it is missing, with a warning.
        """
        if self.store.ensure_exists():
            click.secho(
                f"WARNING: '{self.store}' not found. Created it.",
                fg="yellow",
            )
            logger.warning("env file %s did not exist; created it", self.store)
        self.store.set_line(PROFILES_KEY, value)
        logger.info("%s=%s written to %s", PROFILES_KEY, value, self.store)
