"""Git implementation backed by the git executable.

Commands whose failure is an expected answer (no tags, detached HEAD) run with
check=False; all others raise RuntimeError through run_subprocess_with_context.
"""

import subprocess
from pathlib import Path

from branchflow.core.git.abc import Git
from branchflow.core.subprocess import run_subprocess_with_context

# Start and end markers of an unresolved hunk; the "=======" divider is not matched
CONFLICT_MARKER_PATTERN = r"^(<{7}|>{7})( |$)"

# ============================================================================
# Production Implementation
# ============================================================================


class RealGit(Git):
    """Runs one git command per operation in the repository root."""

    def is_repository(self, cwd: Path) -> bool:
        """Check whether cwd is inside a git work tree."""
        result = subprocess.run(
            ["git", "rev-parse", "--is-inside-work-tree"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        return result.returncode == 0 and result.stdout.strip() == "true"

    def get_repository_root(self, cwd: Path) -> Path:
        """Get the top-level directory of the work tree containing cwd."""
        result = run_subprocess_with_context(
            ["git", "rev-parse", "--show-toplevel"],
            operation_context="find repository root",
            cwd=cwd,
        )
        return Path(result.stdout.strip())

    def init(self, cwd: Path) -> None:
        """Create an empty repository in cwd."""
        run_subprocess_with_context(
            ["git", "init"],
            operation_context="initialize repository",
            cwd=cwd,
        )

    def get_current_branch(self, repo_root: Path) -> str | None:
        """Get the currently checked-out branch."""
        result = subprocess.run(
            ["git", "symbolic-ref", "--quiet", "--short", "HEAD"],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None

        return result.stdout.strip() or None

    def has_changes(self, repo_root: Path) -> bool:
        """Check if the work tree has uncommitted changes."""
        result = run_subprocess_with_context(
            ["git", "status", "--porcelain"],
            operation_context="check for uncommitted changes",
            cwd=repo_root,
        )
        return bool(result.stdout.strip())

    def is_rebasing(self, repo_root: Path) -> bool:
        """Check if a rebase is in progress."""
        for state_dir in ["rebase-merge", "rebase-apply"]:
            result = run_subprocess_with_context(
                ["git", "rev-parse", "--git-path", state_dir],
                operation_context=f"locate {state_dir} state",
                cwd=repo_root,
            )
            path = Path(result.stdout.strip())
            if not path.is_absolute():
                path = repo_root / path
            if path.exists():
                return True
        return False

    def get_conflicts(self, repo_root: Path) -> list[str]:
        """List paths with unresolved merge conflicts."""
        result = run_subprocess_with_context(
            ["git", "diff", "--name-only", "--diff-filter=U"],
            operation_context="list conflicted files",
            cwd=repo_root,
        )
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def get_conflict_markers(self, repo_root: Path) -> list[str]:
        """List leftover conflict markers in tracked files."""
        result = run_subprocess_with_context(
            ["git", "grep", "-n", "-I", "-E", CONFLICT_MARKER_PATTERN],
            operation_context="scan for conflict markers",
            cwd=repo_root,
            check=False,
        )
        # git grep exits 1 when nothing matches
        if result.returncode == 1:
            return []
        if result.returncode != 0:
            raise RuntimeError(
                f"Failed to scan for conflict markers\nstderr: {result.stderr.strip()}"
            )
        return [line for line in result.stdout.splitlines() if line.strip()]

    def list_local_branches(self, repo_root: Path) -> list[str]:
        """List all local branch names in the repository."""
        result = run_subprocess_with_context(
            ["git", "branch", "--format=%(refname:short)"],
            operation_context="list local branches",
            cwd=repo_root,
        )
        return [line.strip() for line in result.stdout.strip().split("\n") if line.strip()]

    def list_stale_branches(self, repo_root: Path) -> list[str]:
        """List local branches whose upstream branch no longer exists."""
        result = run_subprocess_with_context(
            [
                "git",
                "for-each-ref",
                "--format=%(refname:short)%09%(upstream:track)",
                "refs/heads",
            ],
            operation_context="list stale branches",
            cwd=repo_root,
        )
        stale: list[str] = []
        for line in result.stdout.splitlines():
            name, _, track = line.partition("\t")
            if track.strip() == "[gone]":
                stale.append(name.strip())
        return stale

    def get_latest_tag(self, repo_root: Path) -> str | None:
        """Get the most recent tag reachable from HEAD."""
        result = subprocess.run(
            ["git", "describe", "--tags", "--abbrev=0"],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def list_tags(self, repo_root: Path) -> list[str]:
        """List all tags in the repository."""
        result = run_subprocess_with_context(
            ["git", "tag", "--list"],
            operation_context="list tags",
            cwd=repo_root,
        )
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def has_stashes(self, repo_root: Path) -> bool:
        """Check if the stash list is non-empty."""
        result = run_subprocess_with_context(
            ["git", "stash", "list"],
            operation_context="list stashes",
            cwd=repo_root,
        )
        return bool(result.stdout.strip())

    def get_latest_stash_message(self, repo_root: Path) -> str | None:
        """Get the subject of the most recent stash entry."""
        result = run_subprocess_with_context(
            ["git", "stash", "list", "--max-count=1", "--format=%s"],
            operation_context="read latest stash",
            cwd=repo_root,
        )
        return result.stdout.strip() or None

    def list_commit_subjects_since(self, repo_root: Path, ref: str | None) -> list[str]:
        """List commit messages reachable from HEAD but not from ref."""
        revision = f"{ref}..HEAD" if ref else "HEAD"
        result = subprocess.run(
            ["git", "log", "--format=%B%x00", revision],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        # An unborn HEAD has no history to read
        if result.returncode != 0:
            return []
        return [entry.strip() for entry in result.stdout.split("\x00") if entry.strip()]

    def stash_push(self, repo_root: Path, message: str) -> None:
        """Stash tracked and untracked changes under message."""
        run_subprocess_with_context(
            ["git", "stash", "push", "-u", "-m", message],
            operation_context="stash changes",
            cwd=repo_root,
        )

    def stash_pop(self, repo_root: Path) -> None:
        """Restore the most recent stash entry."""
        run_subprocess_with_context(
            ["git", "stash", "pop"],
            operation_context="pop stash",
            cwd=repo_root,
        )

    def fetch_all(self, repo_root: Path) -> None:
        """Fetch all remotes with pruning."""
        run_subprocess_with_context(
            ["git", "fetch", "--all", "--prune"],
            operation_context="fetch all remotes",
            cwd=repo_root,
        )

    def checkout_branch(self, repo_root: Path, branch: str) -> None:
        """Checkout an existing branch."""
        run_subprocess_with_context(
            ["git", "checkout", branch],
            operation_context=f"checkout branch '{branch}'",
            cwd=repo_root,
        )

    def create_branch(self, repo_root: Path, branch: str, start_point: str) -> None:
        """Create and checkout a new branch."""
        run_subprocess_with_context(
            ["git", "checkout", "-b", branch, start_point],
            operation_context=f"create branch '{branch}' from '{start_point}'",
            cwd=repo_root,
        )

    def delete_branch(self, repo_root: Path, branch: str) -> None:
        """Force-delete a local branch."""
        run_subprocess_with_context(
            ["git", "branch", "-D", branch],
            operation_context=f"delete branch '{branch}'",
            cwd=repo_root,
        )

    def gc(self, repo_root: Path) -> None:
        """Run garbage collection."""
        run_subprocess_with_context(
            ["git", "gc"],
            operation_context="run garbage collection",
            cwd=repo_root,
        )

    def commit_all(self, repo_root: Path, message: str) -> None:
        """Stage every change and commit."""
        run_subprocess_with_context(
            ["git", "add", "--all"],
            operation_context="stage changes",
            cwd=repo_root,
        )
        run_subprocess_with_context(
            ["git", "commit", "-m", message],
            operation_context="commit changes",
            cwd=repo_root,
        )

    def rebase(self, repo_root: Path, onto: str) -> None:
        """Rebase the current branch onto another branch."""
        run_subprocess_with_context(
            ["git", "rebase", onto],
            operation_context=f"rebase onto '{onto}'",
            cwd=repo_root,
        )

    def rebase_continue(self, repo_root: Path) -> None:
        """Continue an in-progress rebase."""
        run_subprocess_with_context(
            ["git", "-c", "core.editor=true", "rebase", "--continue"],
            operation_context="continue rebase",
            cwd=repo_root,
        )

    def rebase_abort(self, repo_root: Path) -> None:
        """Abort an in-progress rebase."""
        run_subprocess_with_context(
            ["git", "rebase", "--abort"],
            operation_context="abort rebase",
            cwd=repo_root,
        )

    def merge(self, repo_root: Path, branch: str) -> None:
        """Merge branch into the current branch."""
        run_subprocess_with_context(
            ["git", "merge", "--no-edit", branch],
            operation_context=f"merge '{branch}'",
            cwd=repo_root,
        )

    def create_tag(self, repo_root: Path, tag: str, message: str) -> None:
        """Create an annotated tag on HEAD."""
        run_subprocess_with_context(
            ["git", "tag", "-a", tag, "-m", message],
            operation_context=f"create tag '{tag}'",
            cwd=repo_root,
        )
