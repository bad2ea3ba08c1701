"""Version-bump engine interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


class VersionEngineError(RuntimeError):
    """Raised when the engine cannot compute or apply a version."""


@dataclass(frozen=True)
class VersionBumpOptions:
    """Options passed through to the version engine.

    Attributes:
        tag_prefix: Prefix prepended to versions to form tag names (e.g. "v")
        dry_run: Compute the next version without tagging
        current: Version to bump from; None starts from 0.0.0
        release_as: "major", "minor", "patch" or an exact version; None infers
            the release type from commit messages
        prerelease: Prerelease token (e.g. "rc"); None for a final release
    """

    tag_prefix: str = ""
    dry_run: bool = False
    current: str | None = None
    release_as: str | None = None
    prerelease: str | None = None


class VersionEngine(ABC):
    """Computes, and unless dry-running applies, the next version."""

    @abstractmethod
    def bump(self, repo_root: Path, options: VersionBumpOptions) -> str:
        """Return the next version (without tag prefix).

        Raises:
            VersionEngineError: If the current version is invalid or tagging fails
        """
        ...
