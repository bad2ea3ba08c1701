"""Repository status reads and mutation primitives used by the flows.

- Git: the interface every flow depends on
- RealGit: shells out to the git executable (see real.py)
- FakeGit: in-memory state for tests (tests/fakes/git.py)

Every read goes back to the repository; nothing is cached between calls.
"""

from abc import ABC, abstractmethod
from pathlib import Path

# ============================================================================
# Abstract Interface
# ============================================================================


class Git(ABC):
    """Operations a session performs against one repository.

    Reads take no locks and return fresh state; mutations raise RuntimeError
    when git fails. Implementations carry no test setup methods.
    """

    # ------------------------------------------------------------------
    # Repository discovery
    # ------------------------------------------------------------------

    @abstractmethod
    def is_repository(self, cwd: Path) -> bool:
        """Check whether cwd is inside a git work tree."""
        ...

    @abstractmethod
    def get_repository_root(self, cwd: Path) -> Path:
        """Get the top-level directory of the work tree containing cwd."""
        ...

    @abstractmethod
    def init(self, cwd: Path) -> None:
        """Create an empty repository in cwd."""
        ...

    # ------------------------------------------------------------------
    # Status reads
    # ------------------------------------------------------------------

    @abstractmethod
    def get_current_branch(self, repo_root: Path) -> str | None:
        """Get the currently checked-out branch, or None when HEAD is detached."""
        ...

    @abstractmethod
    def has_changes(self, repo_root: Path) -> bool:
        """Check if the work tree has uncommitted changes.

        Returns:
            True if there are any staged, modified, or untracked files
        """
        ...

    @abstractmethod
    def is_rebasing(self, repo_root: Path) -> bool:
        """Check if a rebase is in progress."""
        ...

    @abstractmethod
    def get_conflicts(self, repo_root: Path) -> list[str]:
        """List paths with unresolved merge conflicts (empty when none)."""
        ...

    @abstractmethod
    def get_conflict_markers(self, repo_root: Path) -> list[str]:
        """List leftover conflict markers in tracked files.

        Each entry is formatted as ``path:line: marker``. Empty when none.
        """
        ...

    @abstractmethod
    def list_local_branches(self, repo_root: Path) -> list[str]:
        """List all local branch names in the repository."""
        ...

    @abstractmethod
    def list_stale_branches(self, repo_root: Path) -> list[str]:
        """List local branches whose upstream branch no longer exists."""
        ...

    @abstractmethod
    def get_latest_tag(self, repo_root: Path) -> str | None:
        """Get the most recent tag reachable from HEAD, or None if untagged."""
        ...

    @abstractmethod
    def list_tags(self, repo_root: Path) -> list[str]:
        """List all tags in the repository."""
        ...

    @abstractmethod
    def has_stashes(self, repo_root: Path) -> bool:
        """Check if the stash list is non-empty."""
        ...

    @abstractmethod
    def get_latest_stash_message(self, repo_root: Path) -> str | None:
        """Get the subject of stash@{0}, e.g. "On main: wip", or None with no stash."""
        ...

    @abstractmethod
    def list_commit_subjects_since(self, repo_root: Path, ref: str | None) -> list[str]:
        """List commit subjects and bodies reachable from HEAD but not from ref.

        Args:
            repo_root: Path to the repository root
            ref: Starting ref (exclusive). None lists the whole history.
        """
        ...

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @abstractmethod
    def stash_push(self, repo_root: Path, message: str) -> None:
        """Stash tracked and untracked changes under message (``git stash push -u -m``).

        Creates no entry when the work tree is clean.
        """
        ...

    @abstractmethod
    def stash_pop(self, repo_root: Path) -> None:
        """Restore the most recent stash entry."""
        ...

    @abstractmethod
    def fetch_all(self, repo_root: Path) -> None:
        """Fetch all remotes, pruning refs that no longer exist remotely."""
        ...

    @abstractmethod
    def checkout_branch(self, repo_root: Path, branch: str) -> None:
        """Checkout an existing branch."""
        ...

    @abstractmethod
    def create_branch(self, repo_root: Path, branch: str, start_point: str) -> None:
        """Create and checkout a new branch starting at start_point."""
        ...

    @abstractmethod
    def delete_branch(self, repo_root: Path, branch: str) -> None:
        """Force-delete a local branch (``git branch -D``)."""
        ...

    @abstractmethod
    def gc(self, repo_root: Path) -> None:
        """Run garbage collection on the repository."""
        ...

    @abstractmethod
    def commit_all(self, repo_root: Path, message: str) -> None:
        """Stage every change (including untracked files) and commit."""
        ...

    @abstractmethod
    def rebase(self, repo_root: Path, onto: str) -> None:
        """Rebase the current branch onto another branch."""
        ...

    @abstractmethod
    def rebase_continue(self, repo_root: Path) -> None:
        """Continue an in-progress rebase."""
        ...

    @abstractmethod
    def rebase_abort(self, repo_root: Path) -> None:
        """Abort an in-progress rebase."""
        ...

    @abstractmethod
    def merge(self, repo_root: Path, branch: str) -> None:
        """Merge branch into the current branch."""
        ...

    @abstractmethod
    def create_tag(self, repo_root: Path, tag: str, message: str) -> None:
        """Create an annotated tag on HEAD."""
        ...
