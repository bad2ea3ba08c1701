"""Rebase the current branch onto the branch it is based on."""

import logging

from branchflow.core.branches import base_on_branch
from branchflow.core.conflicts import check_conflict_string
from branchflow.core.context import FlowContext
from branchflow.core.helpers import prompt_prefix
from branchflow.core.messages import t
from branchflow.core.prompt.abc import MenuChoice

logger = logging.getLogger(__name__)


def resolve_rebase(ctx: FlowContext) -> None:
    """Continue or abort an in-progress rebase, as the user chooses."""
    choice = ctx.prompter.select(
        f"{prompt_prefix(ctx)} {t('status.rebaseInProgress')}",
        [
            MenuChoice(name="continue", value="continue"),
            MenuChoice(name="abort", value="abort"),
        ],
    )
    if choice == "abort":
        ctx.git.rebase_abort(ctx.repo_root)
        return

    if ctx.config.check_conflict_string:
        check_conflict_string(ctx, None)
    ctx.git.rebase_continue(ctx.repo_root)


def rebase(ctx: FlowContext) -> None:
    if ctx.git.is_rebasing(ctx.repo_root):
        resolve_rebase(ctx)
        return

    current = ctx.git.get_current_branch(ctx.repo_root)
    if current is None:
        return

    onto = base_on_branch(current, ctx.config)
    if onto == current:
        logger.debug("%s is its own base, nothing to rebase", current)
        return

    ctx.git.rebase(ctx.repo_root, onto)
