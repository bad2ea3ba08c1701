"""Create a short-lived branch from the branch its type is based on."""

import click

from branchflow.cli.output import user_output
from branchflow.core.branches import base_on_branch
from branchflow.core.context import FlowContext
from branchflow.core.helpers import prompt_prefix
from branchflow.core.messages import t
from branchflow.core.prompt.abc import MenuChoice


def new_branch(ctx: FlowContext) -> None:
    branch_types = list(ctx.config.branches.short_lived)
    if not branch_types:
        user_output(click.style(f"Flow '{ctx.config.flow}' defines no branch types", fg="red"))
        return

    prefix = ctx.prompter.select(
        f"{prompt_prefix(ctx)} {t('title.chooseBranchType')}",
        [MenuChoice(name=name, value=name) for name in branch_types],
    )
    suffix = ctx.prompter.text(f"{prompt_prefix(ctx)} {t('title.branchName')}")
    if not suffix:
        return

    branch = f"{prefix}{ctx.config.branches.infix}{suffix}"
    ctx.git.create_branch(ctx.repo_root, branch, base_on_branch(branch, ctx.config))
