"""Version resolution: find a next version whose tag is not taken yet."""

import logging
from dataclasses import replace

import click

from branchflow.cli.output import user_output
from branchflow.core.context import FlowContext
from branchflow.core.messages import t
from branchflow.core.version.abc import VersionBumpOptions, VersionEngineError

logger = logging.getLogger(__name__)


def bump_version(
    ctx: FlowContext, options: VersionBumpOptions, version: str | None = None
) -> str | None:
    """Run the version engine from `version`, or from the latest tag.

    Engine failures are reported and yield None instead of propagating.
    Whether a tag is created depends on ``options.dry_run``.
    """
    current = version
    if current is None:
        latest = ctx.git.get_latest_tag(ctx.repo_root)
        if latest is not None:
            current = latest.removeprefix(options.tag_prefix)

    try:
        return ctx.version_engine.bump(ctx.repo_root, replace(options, current=current))
    except VersionEngineError as e:
        user_output(click.style(t("status.bumpFailed", message=str(e)), fg="red"))
        return None


def next_valid_version(
    ctx: FlowContext, options: VersionBumpOptions, version: str | None = None
) -> str | None:
    """Compute the next version whose tag does not exist yet.

    Only dry runs of the engine are made. When the candidate tag is taken the
    user is asked for another version to bump from; an empty answer aborts.

    Returns:
        The free version, or None when the engine failed or the user aborted
    """
    dry_run = replace(options, dry_run=True)
    seed = version

    while True:
        candidate = bump_version(ctx, dry_run, seed)
        if candidate is None:
            return None

        tag = f"{options.tag_prefix}{candidate}"
        if tag not in ctx.git.list_tags(ctx.repo_root):
            return candidate

        logger.debug("Tag %s already exists", tag)
        seed = ctx.prompter.text(t("status.tagExists", tag=tag))
        if not seed:
            return None
