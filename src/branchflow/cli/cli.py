import logging
import os
from pathlib import Path

import click

from branchflow.cli.ensure import Ensure
from branchflow.cli.session import run_session
from branchflow.core.config import ConfigError
from branchflow.core.context import create_context
from branchflow.core.git.real import RealGit
from branchflow.core.helpers import ensure_repository
from branchflow.core.prompt.real import ClickPrompter

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

# Enable debug logging if BRANCHFLOW_DEBUG environment variable is set
if os.environ.get("BRANCHFLOW_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="branchflow")
@click.option(
    "--flow",
    "flow_override",
    default=None,
    help="Branching convention to use instead of the configured one "
    "(git-flow, github-flow, gitlab-flow, no-flow).",
)
@click.pass_context
def cli(ctx: click.Context, flow_override: str | None) -> None:
    """Walk through a branching workflow interactively."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        Ensure.git_installed()
        cwd = Path.cwd()
        git = RealGit()
        prompter = ClickPrompter()
        ensure_repository(git, prompter, cwd)
        ctx.obj = Ensure.succeeds(
            lambda: create_context(
                cwd=cwd, flow_override=flow_override, git=git, prompter=prompter
            ),
            "Invalid branchflow configuration",
            exception_type=ConfigError,
        )

    run_session(ctx.obj)


def main() -> None:
    """CLI entry point used by the `branchflow` console script."""
    cli()
