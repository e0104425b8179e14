"""Dialog backend registry.

A dialog backend draws the interactive checklist and radio list.  The
wizard only talks to :class:`BaseDialog`, so tests can hand it a scripted
fake instead of a real terminal.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Tuple, Type, Union

from composewiz.models import Cancelled

_registry: Dict[str, Type["BaseDialog"]] = {}

# Order in which "auto" tries the registered backends.
AUTO_ORDER = ("whiptail", "questionary")


class DialogUnavailable(Exception):
    """The requested dialog backend cannot run in this environment."""

    def __init__(self, message: str, hint: str = ""):
        super().__init__(message)
        self.hint = hint


def register(name: str):
    """Decorator to register a dialog class under a given name."""
    def decorator(cls):
        _registry[name] = cls
        return cls
    return decorator


def get_dialog_classes() -> Dict[str, Type["BaseDialog"]]:
    """Return all registered dialog classes."""
    from composewiz.dialogs import qprompt  # noqa: F401
    from composewiz.dialogs import whiptail  # noqa: F401
    return dict(_registry)


def backend_names() -> List[str]:
    return ["auto"] + list(AUTO_ORDER)


def get_dialog(name: str = "auto") -> "BaseDialog":
    """Instantiate a usable dialog backend.

    Raises ``ValueError`` for an unknown name and :class:`DialogUnavailable`
    when no matching backend can run here.
    """
    classes = get_dialog_classes()
    if name == "auto":
        for candidate in AUTO_ORDER:
            dialog = classes[candidate]()
            if dialog.available():
                return dialog
        raise DialogUnavailable(
            "No interactive dialog tool is available.",
            hint=classes[AUTO_ORDER[0]].unavailable_hint,
        )

    if name not in classes:
        raise ValueError(
            f"Unknown dialog backend '{name}'. "
            f"Valid backends: {', '.join(backend_names())}"
        )
    dialog = classes[name]()
    if not dialog.available():
        raise DialogUnavailable(
            f"The '{name}' dialog backend is not available.",
            hint=dialog.unavailable_hint,
        )
    return dialog


class BaseDialog(ABC):
    """Abstract base class for interactive prompt backends."""

    unavailable_hint = ""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def available(self) -> bool:
        """Return ``True`` if this backend can prompt in the current environment."""
        ...

    @abstractmethod
    def select_multiple(
        self, title: str, text: str, options: List[Tuple[str, str, bool]],
    ) -> Union[List[str], Cancelled]:
        """Show a checklist of ``(tag, label, checked)`` rows.

        Returns the checked tags in list order, or ``CANCELLED``.
        """
        ...

    @abstractmethod
    def select_one(
        self, title: str, text: str, options: List[Tuple[str, str]], default: str,
    ) -> Union[str, Cancelled]:
        """Show a radio list of ``(tag, label)`` rows with ``default`` pre-selected.

        Returns the chosen tag, or ``CANCELLED``.
        """
        ...
