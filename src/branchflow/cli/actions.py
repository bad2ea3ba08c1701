"""Dispatch table from action keys to handlers.

Keys are ActionId values, or ``helpers:<HelperId>`` for helper sub-actions.
``exit`` and ``helpers`` have no handler: the session loop consumes them.
"""

from collections.abc import Callable

from branchflow.core.action_types import ActionId, HelperId, helper_action_key
from branchflow.core.context import FlowContext
from branchflow.core.helpers import clean_up, remove_stale_branches
from branchflow.flows.check import check
from branchflow.flows.commit import commit
from branchflow.flows.new_branch import new_branch
from branchflow.flows.rebase import rebase
from branchflow.flows.release import release
from branchflow.flows.setup import setup
from branchflow.flows.status import status
from branchflow.flows.switch_branch import switch_branch
from branchflow.flows.sync_branch import sync_branch

ActionHandler = Callable[[FlowContext], object]

ACTION_HANDLERS: dict[ActionId, ActionHandler] = {
    ActionId.CHECK: check,
    ActionId.STATUS: status,
    ActionId.COMMIT: commit,
    ActionId.REBASE: rebase,
    ActionId.SETUP: setup,
    ActionId.SWITCH_BRANCH: switch_branch,
    ActionId.NEW_BRANCH: new_branch,
    ActionId.SYNC_BRANCH: sync_branch,
    ActionId.RELEASE: release,
}

HELPER_HANDLERS: dict[HelperId, ActionHandler] = {
    HelperId.REMOVE_STALE_BRANCHES: remove_stale_branches,
    HelperId.CLEAN_UP: clean_up,
}

_HANDLERS_BY_KEY: dict[str, ActionHandler] = {
    **{str(action): handler for action, handler in ACTION_HANDLERS.items()},
    **{helper_action_key(helper): handler for helper, handler in HELPER_HANDLERS.items()},
}


def resolve_handler(action_key: str) -> ActionHandler | None:
    """Look up the handler for an action key, or None if there is none."""
    return _HANDLERS_BY_KEY.get(action_key)
