"""questionary dialog backend (prompt_toolkit based, pure Python)."""

import sys
from typing import List, Tuple, Union

import questionary

from composewiz.dialogs import BaseDialog, register
from composewiz.models import CANCELLED, Cancelled


@register("questionary")
class QuestionaryDialog(BaseDialog):

    unavailable_hint = (
        "The questionary backend needs an interactive terminal.\n"
        "Run the wizard from a terminal session rather than a pipe or cron job."
    )

    @property
    def name(self) -> str:
        return "questionary"

    def available(self) -> bool:
        return sys.stdin.isatty() and sys.stdout.isatty()

    def select_multiple(
        self, title: str, text: str, options: List[Tuple[str, str, bool]],
    ) -> Union[List[str], Cancelled]:
        choices = [
            questionary.Choice(title=f"{tag} — {label}", value=tag, checked=checked)
            for tag, label, checked in options
        ]
        try:
            selected = questionary.checkbox(f"{title}: {text}", choices=choices).ask()
        except (EOFError, KeyboardInterrupt):
            return CANCELLED

        if selected is None:
            return CANCELLED
        # Keep checklist order.
        order = [tag for tag, _, _ in options]
        return sorted(selected, key=order.index)

    def select_one(
        self, title: str, text: str, options: List[Tuple[str, str]], default: str,
    ) -> Union[str, Cancelled]:
        choices = [
            questionary.Choice(title=f"{tag} — {label}", value=tag)
            for tag, label in options
        ]
        try:
            chosen = questionary.select(
                f"{title}: {text}", choices=choices, default=default,
            ).ask()
        except (EOFError, KeyboardInterrupt):
            return CANCELLED

        if chosen is None:
            return CANCELLED
        return chosen
