"""Tag a new release after finding a version whose tag is free."""

import click

from branchflow.cli.output import user_output
from branchflow.core.context import FlowContext
from branchflow.core.helpers import prompt_prefix
from branchflow.core.messages import t
from branchflow.core.prompt.abc import MenuChoice
from branchflow.core.version.abc import VersionBumpOptions
from branchflow.core.version.real import RELEASE_TYPES
from branchflow.core.versions import bump_version, next_valid_version

AUTO_RELEASE = "auto"


def release(ctx: FlowContext) -> None:
    release_type = ctx.prompter.select(
        f"{prompt_prefix(ctx)} {t('title.releaseType')}",
        [MenuChoice(name=name, value=name) for name in (AUTO_RELEASE, *RELEASE_TYPES)],
    )
    options = VersionBumpOptions(
        tag_prefix=ctx.config.tag_prefix,
        release_as=None if release_type == AUTO_RELEASE else release_type,
    )

    version = next_valid_version(ctx, options)
    if version is None:
        return

    tag = f"{ctx.config.tag_prefix}{version}"
    if not ctx.prompter.confirm(f"{prompt_prefix(ctx)} Release {tag}?", default=True):
        return

    # Real bump is pinned to the validated version
    pinned = VersionBumpOptions(tag_prefix=ctx.config.tag_prefix, release_as=version)
    released = bump_version(ctx, pinned)
    if released is not None:
        user_output(click.style(f"Released {tag}", fg="green"))
