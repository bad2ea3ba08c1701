"""Branch taxonomy: classify a branch by name prefix.

A branch named ``<prefix><infix><suffix>`` whose prefix is registered under
``branches.short-lived`` is based on / merged into the branches registered
for that prefix. Any other branch (long-lived or unrecognized) falls back to
the trunk, so both resolvers are total.
"""

from typing import Literal

from branchflow.core.config import WorkflowConfig


def branch_prefix(branch: str, config: WorkflowConfig) -> str:
    """Return the substring before the first infix occurrence (the whole name if absent)."""
    return branch.split(config.branches.infix, 1)[0]


def _resolve(branch: str, config: WorkflowConfig, target: Literal["base_on", "merge_to"]) -> str:
    branch_type = config.branches.short_lived.get(branch_prefix(branch, config))
    if branch_type is None:
        return config.branches.main
    return getattr(branch_type, target)


def base_on_branch(branch: str, config: WorkflowConfig) -> str:
    """Branch that `branch` should be created from."""
    return _resolve(branch, config, "base_on")


def merge_to_branch(branch: str, config: WorkflowConfig) -> str:
    """Branch that `branch` should be merged into."""
    return _resolve(branch, config, "merge_to")
