"""
Ports (interfaces) used by the application layer.

The service depends on this Protocol instead of GitOperations directly, so
tests can swap in an in-memory fake.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from whatdo.domain.shared.result import Result


class VersionControl(Protocol):
    """Branch and commit operations on the repository holding the document."""

    def current_branch(self) -> Result[str, str]: ...
    def branch_exists(self, name: str) -> Result[bool, str]: ...
    def checkout_new_branch(self, name: str, push: bool = False) -> Result[None, str]: ...
    def checkout_branch(self, name: str) -> Result[None, str]: ...

    def merge(self, target: str, push: bool = False) -> Result[None, str]:
        """Merge the current branch into ``target``, leaving ``target`` checked out."""
        ...

    def commit(self, paths: Iterable[Path], message: str, push: bool = False) -> Result[None, str]: ...
    def has_unstaged_changes(self) -> Result[bool, str]: ...
    def default_branch_name(self) -> Result[str, str]: ...
