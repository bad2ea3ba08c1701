from branchflow.core.context import FlowContext
from branchflow.core.helpers import SESSION_STASH_MESSAGE
from branchflow.flows.commit import commit
from tests.fakes.git import FakeGit
from tests.fakes.prompter import FakePrompter
from tests.test_utils.config import make_config


def test_commit_restores_stashed_changes_then_commits() -> None:
    # the pre-action hook has already stashed the work
    git = FakeGit(
        current_branch="feature/login", stashes=[f"On feature/login: {SESSION_STASH_MESSAGE}"]
    )
    prompter = FakePrompter(texts=["feat: login form"])
    ctx = FlowContext.for_test(make_config(), git=git, prompter=prompter)

    commit(ctx)

    assert git.operations == [("stash_pop",), ("commit_all", "feat: login form")]


def test_commit_on_protected_branch_is_refused() -> None:
    git = FakeGit(current_branch="main", changes=True)
    prompter = FakePrompter()
    ctx = FlowContext.for_test(make_config(), git=git, prompter=prompter)

    commit(ctx)

    assert git.operations == []
    assert prompter.prompt_count == 0


def test_empty_message_skips_commit() -> None:
    git = FakeGit(current_branch="fix/typo", changes=True)
    ctx = FlowContext.for_test(make_config(), git=git, prompter=FakePrompter(texts=[""]))

    commit(ctx)

    assert "commit_all" not in git.operation_names


def test_commit_on_clean_tree_keeps_older_user_stash() -> None:
    git = FakeGit(current_branch="feature/login", stashes=["On feature/login: experiment"])
    prompter = FakePrompter()
    ctx = FlowContext.for_test(make_config(), git=git, prompter=prompter)

    commit(ctx)

    assert git.operations == []
    assert git.stash_count == 1
