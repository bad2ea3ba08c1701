"""Run external commands, turning failures into RuntimeError with context."""

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any


def _describe_failure(
    operation_context: str, cmd: Sequence[str], e: subprocess.CalledProcessError
) -> str:
    lines = [
        f"Failed to {operation_context}",
        f"Command: {' '.join(str(arg) for arg in cmd)}",
        f"Exit code: {e.returncode}",
    ]
    for stream_name, output in (("stdout", e.stdout), ("stderr", e.stderr)):
        if output and output.strip():
            lines.append(f"{stream_name}: {output.strip()}")
    return "\n".join(lines)


def run_subprocess_with_context(
    cmd: Sequence[str],
    operation_context: str,
    cwd: Path | None = None,
    check: bool = True,
    **kwargs: Any,
) -> subprocess.CompletedProcess[str]:
    """Run cmd with captured text output.

    Args:
        cmd: Command and arguments to execute
        operation_context: What the command does, phrased to follow
            "Failed to", e.g. "checkout branch 'main'"
        cwd: Working directory for the command
        check: Raise on non-zero exit (default: True)
        **kwargs: Passed through to subprocess.run()

    Raises:
        RuntimeError: If the command exits non-zero (when check is set) or
            the executable is missing. The original error is chained.
    """
    try:
        return subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=check,
            **kwargs,
        )
    except subprocess.CalledProcessError as e:
        raise RuntimeError(_describe_failure(operation_context, cmd, e)) from e
    except FileNotFoundError as e:
        raise RuntimeError(
            f"Command not found while trying to {operation_context}: {cmd[0]}"
        ) from e
