"""whiptail dialog backend (newt-based, ships with Debian/Ubuntu)."""

import os
import shlex
import shutil
import subprocess
import sys
from typing import List, Tuple, Union

from composewiz.dialogs import BaseDialog, register
from composewiz.models import CANCELLED, Cancelled

# Box geometry: height, width, list height.
CHECKLIST_SIZE = (22, 78, 10)
RADIOLIST_SIZE = (15, 78, 3)


@register("whiptail")
class WhiptailDialog(BaseDialog):

    unavailable_hint = (
        "This tool is required for the interactive service selection.\n"
        "On Debian/Ubuntu, you can install it using: sudo apt-get install whiptail\n"
        "It also needs an interactive terminal; do not pipe or redirect the wizard."
    )

    @property
    def name(self) -> str:
        return "whiptail"

    def available(self) -> bool:
        # Without a terminal whiptail exits 255, which would read as a cancel.
        return (shutil.which("whiptail") is not None
                and sys.stdin.isatty() and sys.stdout.isatty())

    def _run(self, args: List[str]) -> Union[str, Cancelled]:
        """Run whiptail and return what it printed on stderr.

        whiptail draws on the terminal and reports the selection on stderr;
        any non-zero exit (Cancel, Esc) means the user dismissed the box.
        """
        env = {**os.environ, "DEBIAN_FRONTEND": "dialog"}
        proc = subprocess.run(
            ["whiptail"] + args,
            stderr=subprocess.PIPE, text=True, env=env,
        )
        if proc.returncode != 0:
            return CANCELLED
        return proc.stderr.strip()

    def select_multiple(
        self, title: str, text: str, options: List[Tuple[str, str, bool]],
    ) -> Union[List[str], Cancelled]:
        height, width, list_height = CHECKLIST_SIZE
        args = ["--title", title, "--checklist", text,
                str(height), str(width), str(list_height)]
        for tag, label, checked in options:
            args += [tag, label, "ON" if checked else "OFF"]

        output = self._run(args)
        if output is CANCELLED:
            return CANCELLED
        # Output looks like: "n8n" "flowise" "monitoring"
        return shlex.split(output)

    def select_one(
        self, title: str, text: str, options: List[Tuple[str, str]], default: str,
    ) -> Union[str, Cancelled]:
        height, width, list_height = RADIOLIST_SIZE
        args = ["--title", title, "--radiolist", text,
                str(height), str(width), str(list_height)]
        for tag, label in options:
            args += [tag, label, "ON" if tag == default else "OFF"]

        output = self._run(args)
        if output is CANCELLED or not output:
            return CANCELLED
        return output
