"""Startup checks that stop the CLI with a red "Error:" line and exit code 1."""

import shutil
from collections.abc import Callable
from typing import TypeVar

import click

from branchflow.cli.output import user_output

T = TypeVar("T")


class Ensure:
    """Fail-fast checks run before the session starts."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Stop with error_message unless condition holds.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            user_output(click.style("Error: ", fg="red") + error_message)
            raise SystemExit(1)

    @staticmethod
    def succeeds(
        operation: Callable[[], T],
        error_message: str,
        exception_type: type[Exception] = Exception,
    ) -> T:
        """Run operation, turning a raised exception into a styled error and exit.

        Args:
            operation: Zero-argument callable to run
            error_message: Shown after the red "Error: " prefix, followed by the
                exception text
            exception_type: Exception class to catch; others propagate

        Returns:
            The operation's return value

        Raises:
            SystemExit: If operation raised exception_type (with exit code 1)
        """
        try:
            return operation()
        except exception_type as e:
            user_output(click.style("Error: ", fg="red") + f"{error_message}: {e}")
            raise SystemExit(1) from e

    @staticmethod
    def git_installed() -> None:
        """Ensure the git executable is on PATH."""
        Ensure.invariant(shutil.which("git") is not None, "git is not installed or not on PATH")
