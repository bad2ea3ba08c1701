"""Builders for WorkflowConfig values used across tests."""

from pathlib import Path
from typing import Any

from branchflow.core.config import WorkflowConfig, build_workflow_config

TEST_ROOT = Path("/repo")


def make_config(**user: Any) -> WorkflowConfig:
    """Build a validated WorkflowConfig from user overrides.

    Keyword names are the config file keys (``tagPrefix``, ``branches``, ...).

    Example:
        >>> config = make_config(flow="git-flow", checkConflictString=False)
    """
    return build_workflow_config(TEST_ROOT, user)
