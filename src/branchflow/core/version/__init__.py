"""Version-bump engine subpackage."""

from branchflow.core.version.abc import VersionBumpOptions, VersionEngine, VersionEngineError
from branchflow.core.version.real import SemverEngine

__all__ = [
    "SemverEngine",
    "VersionBumpOptions",
    "VersionEngine",
    "VersionEngineError",
]
