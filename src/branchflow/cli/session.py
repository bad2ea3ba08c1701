"""Interactive session: choose an action, run it between sync hooks, repeat.

Every dispatched action is bracketed the same way:

1. action_hook_pre: stash tracked and untracked changes, fetch all remotes
2. the handler
3. action_hook_post: pop that stash if it is still there, even if the handler
   or the fetch raised

Failures are reported and the menu is shown again. Only the ``exit`` action
(or a SystemExit raised at a refused confirmation) ends the session.
"""

import logging
import traceback

import click

from branchflow.cli.actions import resolve_handler
from branchflow.cli.output import user_output
from branchflow.core.action_types import SEPARATOR_MARKER, ActionId, HelperId, helper_action_key
from branchflow.core.config import WorkflowConfig
from branchflow.core.context import FlowContext
from branchflow.core.helpers import SESSION_STASH_MESSAGE, has_session_stash, prompt_prefix
from branchflow.core.messages import t
from branchflow.core.prompt.abc import SEPARATOR, MenuChoice, MenuEntry

logger = logging.getLogger(__name__)


def _menu_entry(name: str) -> MenuEntry:
    if name == SEPARATOR_MARKER:
        return SEPARATOR
    return MenuChoice(name=t(f"actions.{name}"), value=name)


def build_menu(config: WorkflowConfig) -> list[MenuEntry]:
    """Menu entries: pre hooks, divider, actions, divider, post hooks.

    Dividers are only added next to non-empty hook lists.
    """
    entries: list[MenuEntry] = []
    if config.hooks.pre:
        entries.extend(_menu_entry(name) for name in config.hooks.pre)
        entries.append(SEPARATOR)
    entries.extend(_menu_entry(name) for name in config.actions)
    if config.hooks.post:
        entries.append(SEPARATOR)
        entries.extend(_menu_entry(name) for name in config.hooks.post)
    return entries


def build_helper_menu() -> list[MenuEntry]:
    return [MenuChoice(name=t(f"actions.{helper_action_key(h)}"), value=h) for h in HelperId]


def select_action(ctx: FlowContext) -> str:
    """Prompt for the next action and return its dispatch key."""
    prefix = f"{prompt_prefix(ctx)}[{click.style(ctx.config.flow, fg='yellow')}]"
    selection = ctx.prompter.select(f"{prefix} {t('title.chooseAction')}:", build_menu(ctx.config))

    if selection == ActionId.HELPERS:
        helper = ctx.prompter.select(t("title.chooseHelper"), build_helper_menu())
        return helper_action_key(HelperId(helper))

    return selection


def action_hook_pre(ctx: FlowContext) -> None:
    """Stash the work tree, then fetch. A failed fetch restores the stash."""
    ctx.git.stash_push(ctx.repo_root, SESSION_STASH_MESSAGE)
    try:
        ctx.git.fetch_all(ctx.repo_root)
    except Exception:
        action_hook_post(ctx)
        raise


def action_hook_post(ctx: FlowContext) -> None:
    """Pop the pre-action stash if it is still on top of the stash list."""
    if has_session_stash(ctx):
        ctx.git.stash_pop(ctx.repo_root)


def dispatch(ctx: FlowContext, action_key: str) -> bool:
    """Run one action between the sync hooks.

    Returns:
        True if the action completed, False if it failed or has no handler
    """
    handler = resolve_handler(action_key)
    if handler is None:
        logger.debug("No handler registered for action %r", action_key)
        return False

    logger.debug("Dispatching action %r", action_key)
    try:
        action_hook_pre(ctx)
        try:
            handler(ctx)
        finally:
            action_hook_post(ctx)
    except Exception as e:
        user_output(click.style(f"Error: {e}", fg="red"))
        user_output("".join(traceback.format_exception(e)))
        return False

    if ctx.config.logs.done:
        user_output(click.style(f"{t('title.done')}: {t(f'actions.{action_key}')}\n", fg="green"))
    return True


def run_session(ctx: FlowContext) -> None:
    """Show the action menu until the user picks exit."""
    while True:
        action_key = select_action(ctx)
        if action_key == ActionId.EXIT:
            logger.debug("Session ended by user")
            return
        dispatch(ctx, action_key)
