"""Read-modify-write access to the ``.env`` file docker compose reads."""

import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

PROFILES_KEY = "COMPOSE_PROFILES"


class ConfigStore(ABC):
    """A flat ``KEY=value`` store holding one authoritative line per key.

    Lines are split on LF only.  A line from a CRLF file keeps its
    trailing CR so it is written back unchanged.
    """

    @abstractmethod
    def exists(self) -> bool:
        ...

    @abstractmethod
    def ensure_exists(self) -> bool:
        """Create the store if missing.  Returns ``True`` if it was created."""
        ...

    @abstractmethod
    def read_lines(self) -> List[str]:
        ...

    @abstractmethod
    def write_lines(self, lines: List[str]) -> None:
        ...

    def get(self, key: str) -> Optional[str]:
        """Return the value of ``key``, or ``None`` if no line sets it.

        If the key appears more than once the last line wins, as it does
        for docker compose.
        """
        prefix = f"{key}="
        value = None
        for line in self.read_lines():
            if line.startswith(prefix):
                value = line[len(prefix):]
                if value.endswith("\r"):
                    value = value[:-1]
        return value

    def set_line(self, key: str, value: str) -> None:
        """Drop every ``key=`` line and append exactly one ``key=value``.

        Other lines are kept untouched and in order.
        """
        prefix = f"{key}="
        kept = [line for line in self.read_lines() if not line.startswith(prefix)]
        # Match the line ending of the file we are appending to.
        eol = "\r" if kept and kept[-1].endswith("\r") else ""
        kept.append(f"{key}={value}{eol}")
        self.write_lines(kept)


class EnvFileStore(ConfigStore):
    """:class:`ConfigStore` backed by a text file on disk.

    Writes go to a temporary file in the same directory which then replaces
    the original, so an interrupted write never leaves a half-edited file.
    With ``backup`` enabled the previous content is kept as ``<name>.bak``.
    """

    def __init__(self, path: Path, backup: bool = True):
        self.path = Path(path)
        self.backup = backup

    def __repr__(self) -> str:
        return f"EnvFileStore({str(self.path)!r})"

    def __str__(self) -> str:
        return str(self.path)

    def exists(self) -> bool:
        return self.path.exists()

    def ensure_exists(self) -> bool:
        if self.path.exists():
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch()
        return True

    def read_lines(self) -> List[str]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8", newline="") as f:
            content = f.read()
        if not content:
            return []
        lines = content.split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines

    def backup_path(self) -> Path:
        return self.path.with_name(self.path.name + ".bak")

    def write_lines(self, lines: List[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self.backup and self.path.exists() and self.path.stat().st_size > 0:
            shutil.copy2(self.path, self.backup_path())

        content = "".join(f"{line}\n" for line in lines)
        fd, tmp = tempfile.mkstemp(dir=str(self.path.parent), prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            if self.path.exists():
                shutil.copymode(self.path, tmp)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
