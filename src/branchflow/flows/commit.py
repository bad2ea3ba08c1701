"""Commit pending changes on the current branch."""

from branchflow.core.context import FlowContext
from branchflow.core.helpers import can_commit, prompt_prefix, restore_stash
from branchflow.core.messages import t


def commit_work_tree(ctx: FlowContext) -> None:
    """Commit the work tree as it stands, e.g. a resolved merge.

    Leaves the pre-action stash in place for the post-action hook to restore.
    """
    if not can_commit(ctx):
        return

    message = ctx.prompter.text(f"{prompt_prefix(ctx)} {t('title.commitMessage')}")
    if not message:
        return

    ctx.git.commit_all(ctx.repo_root, message)


def commit(ctx: FlowContext) -> None:
    # Changes were shelved by the pre-action hook
    restore_stash(ctx)
    commit_work_tree(ctx)
