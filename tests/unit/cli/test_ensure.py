"""Tests for the Ensure error helpers."""

import pytest

from branchflow.cli.ensure import Ensure
from branchflow.core.config import ConfigError


def test_invariant_passes_silently(capsys) -> None:
    Ensure.invariant(True, "never shown")
    assert capsys.readouterr().err == ""


def test_invariant_failure_exits_with_styled_error(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        Ensure.invariant(False, "something is off")

    assert exc_info.value.code == 1
    assert "Error: something is off" in capsys.readouterr().err


def test_succeeds_returns_value() -> None:
    assert Ensure.succeeds(lambda: 42, "unused") == 42


def test_succeeds_converts_matching_exception(capsys) -> None:
    def load():
        raise ConfigError("Unknown action 'deploy'")

    with pytest.raises(SystemExit) as exc_info:
        Ensure.succeeds(load, "Invalid configuration", exception_type=ConfigError)

    assert exc_info.value.code == 1
    assert "Error: Invalid configuration: Unknown action 'deploy'" in capsys.readouterr().err


def test_succeeds_propagates_other_exceptions() -> None:
    def load():
        raise KeyError("flow")

    with pytest.raises(KeyError):
        Ensure.succeeds(load, "Invalid configuration", exception_type=ConfigError)
