"""Production version engine built on the semver library.

The next version is chosen from ``release_as`` when given (a release type or
an exact version), otherwise the release type is inferred from
conventional-commit messages since the latest tag:

- ``BREAKING CHANGE`` in a body, or ``type!:`` in a subject → major
- ``feat:`` / ``feat(scope):`` → minor
- anything else → patch
"""

import logging
import re
from pathlib import Path

import semver

from branchflow.core.git.abc import Git
from branchflow.core.version.abc import VersionBumpOptions, VersionEngine, VersionEngineError

logger = logging.getLogger(__name__)

RELEASE_TYPES = ("major", "minor", "patch")

_BREAKING_SUBJECT = re.compile(r"^\w+(\([^)]*\))?!:")
_FEATURE_SUBJECT = re.compile(r"^feat(\([^)]*\))?:")


def infer_release_type(messages: list[str]) -> str:
    """Pick the release type implied by a list of commit messages."""
    release = "patch"
    for message in messages:
        subject = message.splitlines()[0] if message else ""
        if "BREAKING CHANGE" in message or _BREAKING_SUBJECT.match(subject):
            return "major"
        if _FEATURE_SUBJECT.match(subject):
            release = "minor"
    return release


def _parse(version: str) -> semver.Version:
    try:
        return semver.Version.parse(version)
    except ValueError as e:
        raise VersionEngineError(f"'{version}' is not a semantic version") from e


class SemverEngine(VersionEngine):
    """Bumps versions with semver and tags the repository through Git."""

    def __init__(self, git: Git) -> None:
        self._git = git

    def _next_version(self, repo_root: Path, options: VersionBumpOptions) -> semver.Version:
        release = options.release_as
        if release is not None and release not in RELEASE_TYPES:
            return _parse(release)

        current = _parse(options.current or "0.0.0")

        if release is None:
            since = f"{options.tag_prefix}{options.current}" if options.current else None
            release = infer_release_type(self._git.list_commit_subjects_since(repo_root, since))

        if not options.prerelease:
            return current.next_version(release)
        if current.prerelease:
            return current.bump_prerelease(options.prerelease)
        return current.next_version(release).bump_prerelease(options.prerelease)

    def bump(self, repo_root: Path, options: VersionBumpOptions) -> str:
        version = str(self._next_version(repo_root, options))
        logger.debug("Next version from %s: %s", options.current, version)

        if not options.dry_run:
            tag = f"{options.tag_prefix}{version}"
            try:
                self._git.create_tag(repo_root, tag, f"chore(release): {version}")
            except RuntimeError as e:
                raise VersionEngineError(str(e)) from e

        return version
