"""Git operations subpackage.

This subpackage provides abstractions over git operations with support for
testing via fakes.
"""

from branchflow.core.git.abc import Git
from branchflow.core.git.real import RealGit

__all__ = [
    "Git",
    "RealGit",
]
