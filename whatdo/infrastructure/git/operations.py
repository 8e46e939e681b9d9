"""Git operations wrapper with Result-based error handling.

Implements the VersionControl port by running the ``git`` binary in a
subprocess. Every command is logged at DEBUG level.
"""

import logging
import subprocess
from collections.abc import Iterable
from pathlib import Path

from whatdo.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class GitOperations:
    """Git operations with Result-based error handling.

    Example:
        git = GitOperations(Path("/path/to/repo"))
        result = git.current_branch()
        if isinstance(result, Ok):
            print(result.value)
    """

    def __init__(self, path: Path | None = None, timeout: int = 60) -> None:
        """Initialize git operations.

        Args:
            path: Working directory for git commands. Defaults to the
                process working directory.
            timeout: Timeout in seconds for each git command.
        """
        self._path = path
        self._timeout = timeout

    def _run(self, *args: str) -> Result[subprocess.CompletedProcess[str], str]:
        """Run a git command, returning the completed process whatever its exit code."""
        command = ["git", *args]
        logger.debug("$ %s", " ".join(command))
        try:
            completed = subprocess.run(
                command,
                cwd=str(self._path) if self._path else None,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            return Err(f"Git command timed out: {' '.join(command)}")
        except OSError as e:
            return Err(f"Git command failed: {e}")

        logger.debug("exit %d: %s", completed.returncode, completed.stdout.strip())
        return Ok(completed)

    def _simple(self, *args: str) -> Result[str, str]:
        """Run a git command that must succeed and return its trimmed stdout."""
        result = self._run(*args)
        if isinstance(result, Err):
            return result

        completed = result.value
        if completed.returncode != 0:
            message = completed.stderr.strip() or f"git {args[0]} failed"
            return Err(message)
        return Ok(completed.stdout.strip())

    def get_root(self) -> Result[Path, str]:
        """Get the top-level directory of the repository."""
        result = self._simple("rev-parse", "--show-toplevel")
        if isinstance(result, Err):
            return Err(f"Not a git repository: {result.error}")
        return Ok(Path(result.value))

    def current_branch(self) -> Result[str, str]:
        """Get the name of the checked out branch."""
        return self._simple("rev-parse", "--abbrev-ref", "HEAD")

    def branch_exists(self, name: str) -> Result[bool, str]:
        """Check whether a local or remote branch called ``name`` exists."""
        result = self._run("show-branch", name)
        if isinstance(result, Err):
            return result
        return Ok(result.value.returncode == 0)

    def checkout_new_branch(self, name: str, push: bool = False) -> Result[None, str]:
        """Create and checkout a new branch, optionally pushing it upstream."""
        result = self._simple("checkout", "-b", name)
        if isinstance(result, Err):
            return result
        if push:
            pushed = self._simple("push", "-u", "origin", name)
            if isinstance(pushed, Err):
                return pushed
        return Ok(None)

    def checkout_branch(self, name: str) -> Result[None, str]:
        """Checkout an existing branch."""
        result = self._simple("checkout", name)
        if isinstance(result, Err):
            return result
        return Ok(None)

    def merge(self, target: str, push: bool = False) -> Result[None, str]:
        """Merge the current branch into ``target``, leaving ``target`` checked out."""
        current = self.current_branch()
        if isinstance(current, Err):
            return current

        for args in (("checkout", target), ("merge", current.value)):
            result = self._simple(*args)
            if isinstance(result, Err):
                return result
        if push:
            pushed = self._simple("push")
            if isinstance(pushed, Err):
                return pushed
        return Ok(None)

    def commit(self, paths: Iterable[Path], message: str, push: bool = False) -> Result[None, str]:
        """Commit exactly ``paths`` with ``message``.

        The index is reset first so unrelated staged changes are not swept
        into the commit.
        """
        result = self._simple("reset")
        if isinstance(result, Err):
            return result
        for path in paths:
            added = self._simple("add", str(path))
            if isinstance(added, Err):
                return added

        committed = self._simple("commit", "-m", message)
        if isinstance(committed, Err):
            return committed
        if push:
            pushed = self._simple("push")
            if isinstance(pushed, Err):
                return pushed
        return Ok(None)

    def has_unstaged_changes(self) -> Result[bool, str]:
        """Check whether the work tree has any uncommitted changes."""
        result = self._simple("status", "--porcelain=v1")
        if isinstance(result, Err):
            return result
        return Ok(len(result.value) > 0)

    def default_branch_name(self) -> Result[str, str]:
        """Get the name of the remote's default branch (e.g. ``main``)."""
        refreshed = self._simple("remote", "set-head", "origin", "-a")
        if isinstance(refreshed, Err):
            return refreshed
        result = self._simple("rev-parse", "--abbrev-ref", "origin/HEAD")
        if isinstance(result, Err):
            return result
        return Ok(result.value.removeprefix("origin/"))
