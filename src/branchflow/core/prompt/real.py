"""Production Prompter built on click prompts."""

import click

from branchflow.core.prompt.abc import MenuChoice, MenuEntry, Prompter


class ClickPrompter(Prompter):
    """Prompter that renders numbered menus and reads answers from the terminal."""

    def select(self, message: str, choices: list[MenuEntry]) -> str:
        selectable: list[MenuChoice] = []
        click.echo(message, err=True)
        for entry in choices:
            if isinstance(entry, MenuChoice):
                selectable.append(entry)
                click.echo(f"  {len(selectable):>2}) {entry.name}", err=True)
            else:
                click.echo(click.style("  " + "─" * 20, fg="bright_black"), err=True)

        if not selectable:
            raise ValueError("Menu has no selectable entries")

        index = click.prompt(
            "Select",
            type=click.IntRange(1, len(selectable)),
            err=True,
        )
        return selectable[index - 1].value

    def confirm(self, message: str, *, default: bool) -> bool:
        return click.confirm(message, default=default, err=True)

    def text(self, message: str, *, default: str = "") -> str:
        answer = click.prompt(message, default=default, show_default=bool(default), err=True)
        return str(answer).strip()
