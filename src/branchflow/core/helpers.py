"""Small interactive helpers shared by the flows."""

import logging
from pathlib import Path

import click

from branchflow.cli.output import user_output
from branchflow.core.context import FlowContext
from branchflow.core.git.abc import Git
from branchflow.core.messages import t
from branchflow.core.prompt.abc import MenuChoice, Prompter

logger = logging.getLogger(__name__)

# Message of the stash entry taken by the pre-action hook
SESSION_STASH_MESSAGE = "branchflow: pre-action stash"


def prompt_prefix(ctx: FlowContext, name: str | None = None) -> str:
    """Format ``[branch]`` for prompt messages, defaulting to the current branch."""
    branch = name or ctx.git.get_current_branch(ctx.repo_root) or "HEAD"
    return f"[{click.style(branch, fg='magenta')}]"


def ensure_repository(git: Git, prompter: Prompter, cwd: Path) -> None:
    """Offer ``git init`` when cwd is not inside a repository.

    Raises:
        SystemExit: With code 0 when the user declines
    """
    if git.is_repository(cwd):
        return

    if prompter.confirm(t("status.notRepository"), default=False):
        git.init(cwd)
    else:
        raise SystemExit(0)


def can_commit(ctx: FlowContext) -> bool:
    """Check whether a manual commit is currently permitted.

    Returns False when there is nothing to commit, or when the current
    branch is protected. Prints the reason in both cases.
    """
    if not ctx.git.has_changes(ctx.repo_root):
        user_output(t("status.noCommit"))
        return False

    current = ctx.git.get_current_branch(ctx.repo_root)
    if current in ctx.config.branches.protected:
        user_output(click.style(t("status.protectedBranch"), fg="yellow"))
        return False

    return True


def clean_up(ctx: FlowContext) -> None:
    ctx.git.gc(ctx.repo_root)


def remove_stale_branches(ctx: FlowContext) -> list[str]:
    """Delete local branches whose upstream is gone. Returns the deleted names."""
    stale = ctx.git.list_stale_branches(ctx.repo_root)
    if not stale:
        user_output(t("status.noStaleBranch"))
        return []

    for branch in stale:
        ctx.git.delete_branch(ctx.repo_root, branch)
    user_output(t("status.staleBranchesRemoved", branches=", ".join(stale)))
    return stale


def choose_branch(
    ctx: FlowContext, current: str | None, ignore: list[str], action: str
) -> str | None:
    """Let the user pick a local branch, current branch listed first.

    Args:
        ctx: Session context
        current: Current branch name (labelled in the menu)
        ignore: Branch names to leave out
        action: Action key used in the prompt, e.g. "switch-branch"

    Returns:
        Selected branch name, or None when no branch is eligible
    """
    branches = [b for b in ctx.git.list_local_branches(ctx.repo_root) if b not in ignore]
    action_label = t(f"actions.{action}")

    if not branches:
        user_output(click.style(f"\n {t('status.noBranchTo', action=action_label)}", fg="red"))
        return None

    choices: list[MenuChoice] = []
    for branch in branches:
        if branch == current:
            label = f"{branch} ({t('status.currentBranch')})"
            choices.insert(0, MenuChoice(name=label, value=branch))
        else:
            choices.append(MenuChoice(name=branch, value=branch))

    message = f"{prompt_prefix(ctx)} {t('title.chooseBranch', action=action_label)}"
    selected = ctx.prompter.select(message, list(choices))
    logger.debug("Branch chosen for %s: %s", action, selected)
    return selected


def has_session_stash(ctx: FlowContext) -> bool:
    """Check whether stash@{0} is the entry taken by the pre-action hook.

    Entries the user stashed before the session are never reported.
    """
    latest = ctx.git.get_latest_stash_message(ctx.repo_root)
    return latest is not None and latest.endswith(f": {SESSION_STASH_MESSAGE}")


def restore_stash(ctx: FlowContext) -> bool:
    """Pop the stash taken before the action so the handler sees pending changes.

    Returns True if the session stash was restored.
    """
    if not has_session_stash(ctx):
        return False
    ctx.git.stash_pop(ctx.repo_root)
    return True
