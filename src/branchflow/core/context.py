"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from branchflow.core.config import WorkflowConfig, load_workflow_config
from branchflow.core.git.abc import Git
from branchflow.core.git.real import RealGit
from branchflow.core.prompt.abc import Prompter
from branchflow.core.prompt.real import ClickPrompter
from branchflow.core.version.abc import VersionEngine
from branchflow.core.version.real import SemverEngine


@dataclass(frozen=True)
class FlowContext:
    """Immutable context holding all dependencies for a session.

    Created at CLI entry point and threaded through every action handler.
    Frozen to prevent accidental modification at runtime.
    """

    git: Git
    prompter: Prompter
    version_engine: VersionEngine
    config: WorkflowConfig
    cwd: Path  # Current working directory at CLI invocation

    @property
    def repo_root(self) -> Path:
        return self.config.root

    @staticmethod
    def for_test(
        config: WorkflowConfig,
        git: Git | None = None,
        prompter: Prompter | None = None,
        version_engine: VersionEngine | None = None,
        cwd: Path | None = None,
    ) -> "FlowContext":
        """Create test context with fakes for every unspecified integration.

        Example:
            >>> git = FakeGit(current_branch="feature/login", changes=True)
            >>> ctx = FlowContext.for_test(config, git=git)
        """
        from tests.fakes.git import FakeGit
        from tests.fakes.prompter import FakePrompter
        from tests.fakes.version_engine import FakeVersionEngine

        return FlowContext(
            git=git if git is not None else FakeGit(),
            prompter=prompter if prompter is not None else FakePrompter(),
            version_engine=version_engine if version_engine is not None else FakeVersionEngine(),
            config=config,
            cwd=cwd if cwd is not None else config.root,
        )


def create_context(
    *,
    cwd: Path | None = None,
    flow_override: str | None = None,
    git: Git | None = None,
    prompter: Prompter | None = None,
) -> FlowContext:
    """Create production context with real implementations.

    The repository root must already exist (see ensure_repository()); its
    config files are read once here.

    Raises:
        ConfigError: If the assembled configuration is invalid
    """
    cwd = cwd or Path.cwd()
    git = git or RealGit()
    root = git.get_repository_root(cwd)
    config = load_workflow_config(root, flow_override=flow_override)

    return FlowContext(
        git=git,
        prompter=prompter or ClickPrompter(),
        version_engine=SemverEngine(git),
        config=config,
        cwd=cwd,
    )
