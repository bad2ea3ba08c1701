from branchflow.core.context import FlowContext
from branchflow.flows.release import release
from tests.fakes.git import FakeGit
from tests.fakes.prompter import FakePrompter
from tests.fakes.version_engine import FakeVersionEngine
from tests.test_utils.config import make_config


def _ctx(git, prompter, engine):
    return FlowContext.for_test(
        make_config(tagPrefix="v"), git=git, prompter=prompter, version_engine=engine
    )


def test_release_tags_validated_version(capsys) -> None:
    git = FakeGit(tags=["v1.0.0"])
    engine = FakeVersionEngine(next_versions={"1.0.0": "1.1.0"})
    prompter = FakePrompter(selections=["minor"], confirms=[True])

    release(_ctx(git, prompter, engine))

    dry_run, final = engine.bump_calls
    assert dry_run.dry_run is True
    assert dry_run.release_as == "minor"
    assert final.dry_run is False
    assert final.release_as == "1.1.0"
    assert prompter.confirm_calls[0].endswith("Release v1.1.0?")
    assert "Released v1.1.0" in capsys.readouterr().err


def test_auto_release_lets_engine_infer_type() -> None:
    engine = FakeVersionEngine(next_versions={"1.0.0": "1.0.1"})
    prompter = FakePrompter(selections=["auto"], confirms=[False])

    release(_ctx(FakeGit(tags=["v1.0.0"]), prompter, engine))

    assert engine.bump_calls[0].release_as is None
    # declined, so only the dry run happened
    assert len(engine.bump_calls) == 1


def test_release_aborted_at_taken_tag() -> None:
    engine = FakeVersionEngine(next_versions={"1.0.0": "1.1.0"})
    prompter = FakePrompter(selections=["minor"], texts=[""])

    release(_ctx(FakeGit(tags=["v1.1.0", "v1.0.0"]), prompter, engine))

    assert len(engine.bump_calls) == 1
    assert prompter.confirm_calls == []
