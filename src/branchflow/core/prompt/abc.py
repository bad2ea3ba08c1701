"""Interactive prompt interface.

Every suspension point of a session (menu choice, confirmation, free-text
input) goes through a Prompter so that sessions can be scripted in tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class MenuChoice:
    """A selectable menu entry: display label plus the value returned on selection."""

    name: str
    value: str


class Separator:
    """Visual divider between groups of menu entries. Never selectable."""

    def __repr__(self) -> str:
        return "SEPARATOR"


SEPARATOR = Separator()

MenuEntry = MenuChoice | Separator


class Prompter(ABC):
    """Abstract interface for interactive user prompts."""

    @abstractmethod
    def select(self, message: str, choices: list[MenuEntry]) -> str:
        """Ask the user to pick one entry.

        Args:
            message: Question shown above the menu
            choices: Entries in display order; separators are shown but not selectable

        Returns:
            The value of the selected MenuChoice
        """
        ...

    @abstractmethod
    def confirm(self, message: str, *, default: bool) -> bool:
        """Ask a yes/no question."""
        ...

    @abstractmethod
    def text(self, message: str, *, default: str = "") -> str:
        """Ask for free-text input. Returns the stripped answer (possibly empty)."""
        ...
