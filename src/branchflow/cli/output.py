"""Output utilities for CLI commands with clear intent.

All user-facing text is routed to stderr so stdout stays free for anything a
caller may want to capture.
"""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    """Write a line of user-facing output to stderr."""
    click.echo(message, err=True, nl=nl)
