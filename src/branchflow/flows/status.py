"""Show a summary of the repository state."""

from rich.console import Console
from rich.table import Table

from branchflow.core.branches import base_on_branch, merge_to_branch
from branchflow.core.context import FlowContext


def _yes_no(value: bool) -> str:
    return "[yellow]yes[/yellow]" if value else "no"


def build_status_table(ctx: FlowContext) -> Table:
    git = ctx.git
    root = ctx.repo_root
    branch = git.get_current_branch(root)

    table = Table(title=f"Flow: {ctx.config.flow}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Branch", branch or "(detached)")
    if branch is not None:
        table.add_row("Based on", base_on_branch(branch, ctx.config))
        table.add_row("Merges to", merge_to_branch(branch, ctx.config))
        table.add_row("Protected", _yes_no(branch in ctx.config.branches.protected))
    table.add_row("Pending changes", _yes_no(git.has_changes(root) or git.has_stashes(root)))
    table.add_row("Rebasing", _yes_no(git.is_rebasing(root)))
    conflicts = git.get_conflicts(root)
    table.add_row("Conflicts", "[red]" + ", ".join(conflicts) + "[/red]" if conflicts else "none")
    table.add_row("Latest tag", git.get_latest_tag(root) or "none")
    return table


def status(ctx: FlowContext, console: Console | None = None) -> None:
    if console is None:
        console = Console(stderr=True)
    console.print(build_status_table(ctx))
