"""Bring a branch up to date with the branch it is based on."""

from branchflow.core.action_types import ActionId
from branchflow.core.branches import base_on_branch
from branchflow.core.conflicts import StatusResult, check_status
from branchflow.core.context import FlowContext
from branchflow.core.helpers import choose_branch
from branchflow.flows.commit import commit_work_tree


def sync_branch(ctx: FlowContext) -> None:
    current = ctx.git.get_current_branch(ctx.repo_root)
    target = choose_branch(ctx, current, [], ActionId.SYNC_BRANCH)
    if target is None:
        return
    if target != current:
        ctx.git.checkout_branch(ctx.repo_root, target)

    base = base_on_branch(target, ctx.config)
    if base == target:
        return

    try:
        ctx.git.merge(ctx.repo_root, base)
    except RuntimeError:
        if not ctx.git.get_conflicts(ctx.repo_root):
            raise
        if check_status(ctx) is StatusResult.COMMIT:
            commit_work_tree(ctx)
