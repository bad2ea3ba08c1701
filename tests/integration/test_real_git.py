"""Integration tests for RealGit against throwaway repositories.

These run real git commands in tmp_path and are skipped when git is not
installed.
"""

import shutil
import subprocess
from pathlib import Path

import pytest
from click.testing import CliRunner

from branchflow.cli.cli import cli
from branchflow.cli.session import dispatch
from branchflow.core.config import build_workflow_config
from branchflow.core.context import FlowContext
from branchflow.core.git.real import RealGit
from tests.fakes.prompter import FakePrompter

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True
    )
    return result.stdout


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    _git(tmp_path, "init", "-b", "main")
    _git(tmp_path, "config", "user.email", "dev@example.com")
    _git(tmp_path, "config", "user.name", "Dev")
    _git(tmp_path, "config", "commit.gpgsign", "false")
    (tmp_path / "README.md").write_text("hello\n", encoding="utf-8")
    _git(tmp_path, "add", "README.md")
    _git(tmp_path, "commit", "-m", "chore: initial commit")
    return tmp_path


def test_repository_discovery(repo: Path, tmp_path_factory: pytest.TempPathFactory) -> None:
    git = RealGit()
    outside = tmp_path_factory.mktemp("outside")

    assert git.is_repository(repo)
    assert not git.is_repository(outside)
    assert git.get_repository_root(repo).resolve() == repo.resolve()


def test_stash_round_trip_includes_untracked_files(repo: Path) -> None:
    git = RealGit()
    (repo / "notes.txt").write_text("draft\n", encoding="utf-8")

    assert git.has_changes(repo)
    git.stash_push(repo, "branchflow: pre-action stash")
    assert not git.has_changes(repo)
    assert git.get_latest_stash_message(repo) == "On main: branchflow: pre-action stash"

    git.stash_pop(repo)
    assert (repo / "notes.txt").exists()
    assert not git.has_stashes(repo)


def test_stash_on_clean_tree_creates_no_entry(repo: Path) -> None:
    git = RealGit()

    git.stash_push(repo, "wip")

    assert not git.has_stashes(repo)
    assert git.get_latest_stash_message(repo) is None


def test_branches_and_commits(repo: Path) -> None:
    git = RealGit()

    git.create_branch(repo, "feature/login", "main")
    (repo / "login.py").write_text("print('login')\n", encoding="utf-8")
    git.commit_all(repo, "feat: login")

    assert git.get_current_branch(repo) == "feature/login"
    assert git.list_local_branches(repo) == ["feature/login", "main"]
    assert git.list_commit_subjects_since(repo, "main") == ["feat: login"]

    git.checkout_branch(repo, "main")
    git.delete_branch(repo, "feature/login")
    assert git.list_local_branches(repo) == ["main"]


def test_tags(repo: Path) -> None:
    git = RealGit()
    assert git.get_latest_tag(repo) is None

    git.create_tag(repo, "v0.1.0", "chore(release): 0.1.0")

    assert git.get_latest_tag(repo) == "v0.1.0"
    assert git.list_tags(repo) == ["v0.1.0"]


def test_merge_conflict_is_reported(repo: Path) -> None:
    git = RealGit()
    git.create_branch(repo, "feature/readme", "main")
    (repo / "README.md").write_text("feature\n", encoding="utf-8")
    git.commit_all(repo, "docs: feature readme")
    git.checkout_branch(repo, "main")
    (repo / "README.md").write_text("main\n", encoding="utf-8")
    git.commit_all(repo, "docs: main readme")
    git.checkout_branch(repo, "feature/readme")

    with pytest.raises(RuntimeError, match="Failed to merge 'main'"):
        git.merge(repo, "main")

    assert git.get_conflicts(repo) == ["README.md"]
    assert not git.is_rebasing(repo)


def test_conflict_markers_in_tracked_files(repo: Path) -> None:
    git = RealGit()
    assert git.get_conflict_markers(repo) == []

    (repo / "app.py").write_text(
        "<<<<<<< HEAD\nx = 1\n=======\nx = 2\n>>>>>>> feature\n", encoding="utf-8"
    )
    _git(repo, "add", "app.py")

    markers = git.get_conflict_markers(repo)
    assert len(markers) == 2
    assert markers[0].startswith("app.py:1:")


def test_rebase_state_is_detected(repo: Path) -> None:
    git = RealGit()
    git.create_branch(repo, "feature/readme", "main")
    (repo / "README.md").write_text("feature\n", encoding="utf-8")
    git.commit_all(repo, "docs: feature readme")
    git.checkout_branch(repo, "main")
    (repo / "README.md").write_text("main\n", encoding="utf-8")
    git.commit_all(repo, "docs: main readme")
    git.checkout_branch(repo, "feature/readme")

    with pytest.raises(RuntimeError):
        git.rebase(repo, "main")

    assert git.is_rebasing(repo)
    git.rebase_abort(repo)
    assert not git.is_rebasing(repo)


def test_invalid_config_exits_before_session(repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (repo / ".branchflow.toml").write_text('actions = ["deploy"]\n', encoding="utf-8")
    monkeypatch.chdir(repo)

    result = CliRunner().invoke(cli, [])

    assert result.exit_code == 1
    assert "Invalid branchflow configuration: Unknown action 'deploy'" in result.output


class _ResolvingPrompter(FakePrompter):
    """Scripted prompter that resolves README.md when asked to confirm."""

    def __init__(self, repo: Path, **answers) -> None:
        super().__init__(**answers)
        self._repo = repo

    def confirm(self, message: str, *, default: bool) -> bool:
        (self._repo / "README.md").write_text("resolved\n", encoding="utf-8")
        _git(self._repo, "add", "README.md")
        return super().confirm(message, default=default)


def test_sync_conflict_commit_excludes_work_in_progress(repo: Path) -> None:
    git = RealGit()
    git.create_branch(repo, "feature/readme", "main")
    (repo / "README.md").write_text("feature\n", encoding="utf-8")
    git.commit_all(repo, "docs: feature readme")
    git.checkout_branch(repo, "main")
    (repo / "README.md").write_text("main\n", encoding="utf-8")
    git.commit_all(repo, "docs: main readme")
    git.checkout_branch(repo, "feature/readme")
    (repo / "wip.txt").write_text("unfinished\n", encoding="utf-8")

    prompter = _ResolvingPrompter(
        repo, selections=["feature/readme"], confirms=[True], texts=["merge main"]
    )
    ctx = FlowContext.for_test(build_workflow_config(repo, {}), git=git, prompter=prompter)

    assert dispatch(ctx, "sync branch") is True

    committed = _git(repo, "show", "--name-only", "--format=", "HEAD").split()
    assert committed == ["README.md"]
    assert (repo / "wip.txt").read_text(encoding="utf-8") == "unfinished\n"
    assert not git.has_stashes(repo)


def test_older_stash_survives_action_on_clean_tree(repo: Path) -> None:
    git = RealGit()
    (repo / "experiment.txt").write_text("idea\n", encoding="utf-8")
    _git(repo, "stash", "push", "-u", "-m", "experiment")
    ctx = FlowContext.for_test(build_workflow_config(repo, {}), git=git)

    assert dispatch(ctx, "helpers:clean-up") is True

    assert git.get_latest_stash_message(repo) == "On main: experiment"
    assert not (repo / "experiment.txt").exists()
