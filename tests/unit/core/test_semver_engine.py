"""Tests for SemverEngine and release type inference."""

from pathlib import Path

import pytest

from branchflow.core.version.abc import VersionBumpOptions, VersionEngineError
from branchflow.core.version.real import SemverEngine, infer_release_type
from tests.fakes.git import FakeGit

REPO = Path("/repo")


@pytest.mark.parametrize(
    ("messages", "expected"),
    [
        ([], "patch"),
        (["fix: handle empty tag list"], "patch"),
        (["fix: a", "feat: b"], "minor"),
        (["feat(cli): add --flow"], "minor"),
        (["refactor!: drop config v1"], "major"),
        (["feat: new api\n\nBREAKING CHANGE: removes old api"], "major"),
        (["docs: readme", "chore: bump"], "patch"),
    ],
)
def test_infer_release_type(messages: list[str], expected: str) -> None:
    assert infer_release_type(messages) == expected


def test_inferred_bump_reads_commits_since_latest_tag() -> None:
    git = FakeGit(commit_messages=["feat: add release flow"])
    engine = SemverEngine(git)

    version = engine.bump(REPO, VersionBumpOptions(tag_prefix="v", dry_run=True, current="1.4.2"))

    assert version == "1.5.0"
    assert git.operations == []


def test_untagged_repository_starts_from_zero() -> None:
    engine = SemverEngine(FakeGit())

    assert engine.bump(REPO, VersionBumpOptions(dry_run=True)) == "0.0.1"


@pytest.mark.parametrize(
    ("release_as", "expected"),
    [("major", "2.0.0"), ("minor", "1.5.0"), ("patch", "1.4.3"), ("3.0.0", "3.0.0")],
)
def test_explicit_release(release_as: str, expected: str) -> None:
    engine = SemverEngine(FakeGit(commit_messages=["feat!: everything"]))
    options = VersionBumpOptions(dry_run=True, current="1.4.2", release_as=release_as)

    assert engine.bump(REPO, options) == expected


def test_prerelease_bumps() -> None:
    engine = SemverEngine(FakeGit())

    first = engine.bump(
        REPO, VersionBumpOptions(dry_run=True, current="1.0.0", release_as="minor", prerelease="rc")
    )
    second = engine.bump(
        REPO, VersionBumpOptions(dry_run=True, current="1.1.0-rc.1", prerelease="rc")
    )

    assert first == "1.1.0-rc.1"
    assert second == "1.1.0-rc.2"


def test_bump_creates_prefixed_tag() -> None:
    git = FakeGit()
    engine = SemverEngine(git)

    engine.bump(REPO, VersionBumpOptions(tag_prefix="v", current="0.9.0", release_as="minor"))

    assert git.operations == [("create_tag", "v0.10.0")]


def test_invalid_current_version_raises() -> None:
    engine = SemverEngine(FakeGit())

    with pytest.raises(VersionEngineError, match="'banana' is not a semantic version"):
        engine.bump(REPO, VersionBumpOptions(dry_run=True, current="banana"))


def test_exact_release_ignores_unparseable_current_version() -> None:
    engine = SemverEngine(FakeGit())
    options = VersionBumpOptions(dry_run=True, current="banana", release_as="2.0.0")

    assert engine.bump(REPO, options) == "2.0.0"


def test_tagging_failure_is_wrapped() -> None:
    git = FakeGit(failures={"create_tag": RuntimeError("tag exists")})
    engine = SemverEngine(git)

    with pytest.raises(VersionEngineError, match="tag exists"):
        engine.bump(REPO, VersionBumpOptions(current="1.0.0", release_as="patch"))
