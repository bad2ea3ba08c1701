"""Switch to another local branch."""

from branchflow.core.action_types import ActionId
from branchflow.core.context import FlowContext
from branchflow.core.helpers import choose_branch


def switch_branch(ctx: FlowContext) -> None:
    current = ctx.git.get_current_branch(ctx.repo_root)
    target = choose_branch(ctx, current, [], ActionId.SWITCH_BRANCH)
    if target is None or target == current:
        return
    ctx.git.checkout_branch(ctx.repo_root, target)
