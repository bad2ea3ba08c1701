"""Conflict resolution loop.

check_status() reads the repository once and classifies it:

- REBASE: a rebase is in progress; the caller's rebase handling takes over
- COMMIT: conflicted files were resolved by the user; a commit is expected
- CLEAN: nothing blocks forward progress

Unresolved conflicts block the session: declining the "resolved?" prompt
exits the process with status 0.
"""

import logging
from enum import StrEnum

import click

from branchflow.cli.output import user_output
from branchflow.core.context import FlowContext
from branchflow.core.helpers import prompt_prefix
from branchflow.core.messages import t

logger = logging.getLogger(__name__)


class StatusResult(StrEnum):
    REBASE = "rebase"
    COMMIT = "commit"
    CLEAN = "clean"


def _print_findings(title_key: str, items: list[str]) -> None:
    user_output(t(title_key))
    user_output(click.style("\n".join(f"  {item}" for item in items), fg="red"))


def _confirm_resolved(ctx: FlowContext, branch: str | None) -> bool:
    user_output()
    message = f"{prompt_prefix(ctx, branch)} {t('status.conflictsResolved')}"
    return ctx.prompter.confirm(message, default=True)


def check_conflict_string(ctx: FlowContext, branch: str | None) -> None:
    """Block until no conflict markers remain in tracked files.

    Rescans after every confirmation; there is no retry limit.

    Raises:
        SystemExit: With code 0 when the user declines
    """
    while True:
        markers = ctx.git.get_conflict_markers(ctx.repo_root)
        if not markers:
            return

        logger.debug("Conflict markers remaining: %d", len(markers))
        _print_findings("status.conflictStringsFound", markers)
        if not _confirm_resolved(ctx, branch):
            raise SystemExit(0)


def check_status(ctx: FlowContext) -> StatusResult:
    """Classify repository state, driving the user through merge conflicts.

    Raises:
        SystemExit: With code 0 when the user declines to resolve conflicts
    """
    if ctx.git.is_rebasing(ctx.repo_root):
        return StatusResult.REBASE

    branch = ctx.git.get_current_branch(ctx.repo_root)
    conflicts = ctx.git.get_conflicts(ctx.repo_root)

    if conflicts:
        _print_findings("status.conflictsFound", conflicts)
        if not _confirm_resolved(ctx, branch):
            raise SystemExit(0)
        if ctx.config.check_conflict_string:
            check_conflict_string(ctx, branch)
        return StatusResult.COMMIT

    if ctx.config.check_conflict_string:
        check_conflict_string(ctx, branch)
    return StatusResult.CLEAN
