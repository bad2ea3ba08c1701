"""Fake VersionEngine for testing.

Next versions come from a lookup table keyed by the current version, so tests
control exactly which candidate each bump produces.
"""

from pathlib import Path

from branchflow.core.version.abc import VersionBumpOptions, VersionEngine, VersionEngineError
from branchflow.core.version.real import RELEASE_TYPES


class FakeVersionEngine(VersionEngine):
    """Table-driven engine that records every call.

    This class has NO public setup methods. All state is provided via constructor
    or captured during execution.
    """

    def __init__(
        self,
        *,
        next_versions: dict[str | None, str] | None = None,
        error: VersionEngineError | None = None,
    ) -> None:
        """Create engine.

        Args:
            next_versions: current version (None for untagged) -> next version
            error: Raised from every bump() call when set
        """
        self._next_versions = dict(next_versions or {})
        self._error = error
        self._bump_calls: list[VersionBumpOptions] = []

    def bump(self, repo_root: Path, options: VersionBumpOptions) -> str:
        self._bump_calls.append(options)
        if self._error is not None:
            raise self._error
        if options.release_as is not None and options.release_as not in RELEASE_TYPES:
            return options.release_as
        if options.current not in self._next_versions:
            raise VersionEngineError(f"'{options.current}' is not a semantic version")
        return self._next_versions[options.current]

    @property
    def bump_calls(self) -> list[VersionBumpOptions]:
        """Options passed to each bump() call. For test assertions only."""
        return self._bump_calls.copy()
