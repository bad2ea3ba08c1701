"""Check repository state and finish whatever a conflict interrupted."""

from branchflow.core.conflicts import StatusResult, check_status
from branchflow.core.context import FlowContext
from branchflow.flows.commit import commit_work_tree
from branchflow.flows.rebase import resolve_rebase


def check(ctx: FlowContext) -> None:
    result = check_status(ctx)

    if result is StatusResult.REBASE:
        resolve_rebase(ctx)
    elif result is StatusResult.COMMIT:
        commit_work_tree(ctx)
