"""Closed set of action identifiers understood by the session dispatcher."""

from enum import StrEnum


class ActionId(StrEnum):
    """Top-level actions that may appear in ``actions`` or ``hooks``."""

    CHECK = "check"
    STATUS = "status"
    COMMIT = "commit"
    REBASE = "rebase"
    SETUP = "setup"
    HELPERS = "helpers"
    EXIT = "exit"
    SWITCH_BRANCH = "switch-branch"
    NEW_BRANCH = "new branch"
    SYNC_BRANCH = "sync branch"
    RELEASE = "release"


class HelperId(StrEnum):
    """Sub-actions offered under the ``helpers`` menu entry."""

    REMOVE_STALE_BRANCHES = "remove-stale-branches"
    CLEAN_UP = "clean-up"


# Marker allowed in configured action lists to force a visual divider
SEPARATOR_MARKER = "---"

HELPERS_PREFIX = f"{ActionId.HELPERS}:"


def helper_action_key(helper: HelperId) -> str:
    """Canonical dispatch key of a helper sub-action, e.g. ``helpers:clean-up``."""
    return f"{HELPERS_PREFIX}{helper}"
