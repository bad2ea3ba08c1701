"""Interactive prompt subpackage."""

from branchflow.core.prompt.abc import SEPARATOR, MenuChoice, MenuEntry, Prompter
from branchflow.core.prompt.real import ClickPrompter

__all__ = [
    "SEPARATOR",
    "ClickPrompter",
    "MenuChoice",
    "MenuEntry",
    "Prompter",
]
