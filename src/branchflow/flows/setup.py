"""Write the active configuration to the repository's config file."""

import click

from branchflow.cli.output import user_output
from branchflow.core.config import save_workflow_config
from branchflow.core.context import FlowContext


def setup(ctx: FlowContext) -> None:
    path = save_workflow_config(ctx.config)
    user_output(f"Configuration written to {click.style(str(path), fg='cyan')}")
