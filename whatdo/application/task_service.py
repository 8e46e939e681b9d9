"""Whatdo application service.

Orchestrates each command: load the whole tree, run domain functions,
write the tree back when it changed and drive git. Every public method
returns a Result; nothing here prints.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from whatdo.application.ports import VersionControl
from whatdo.domain.shared import Err, Ok, Result
from whatdo.domain.task import (
    CURRENT,
    ViewLine,
    Whatdo,
    WhatdoAdded,
    WhatdoDeleted,
    WhatdoFinished,
    WhatdoStarted,
    delete,
    find,
    find_active,
    find_nearest_ancestor_with_property,
    initial_whatdo_tree,
    insert,
    make_filter,
    render_tree,
    upcoming,
)
from whatdo.infrastructure.storage import WhatdoRepository, project_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WhatdoStatus:
    """Everything ``wd status`` shows, computed from one load of the tree.

    Attributes:
        active: The whatdo for the current branch, if any.
        lines: The filtered tree view.
        upcoming: The next whatdos to work on.
    """

    active: Whatdo | None
    lines: list[ViewLine]
    upcoming: list[Whatdo]


class WhatdoService:
    """Runs whatdo commands against one document and one git repository.

    Example:
        service = WhatdoService(root / "WHATDO.yaml", GitOperations(root))
        result = service.upcoming(amount=3)
        if isinstance(result, Ok):
            for whatdo in result.value:
                print(whatdo)
    """

    def __init__(
        self,
        path: Path,
        git: VersionControl,
        repository: WhatdoRepository | None = None,
        push: bool = False,
    ) -> None:
        """Initialize the service.

        Args:
            path: Location of the whatdo document.
            git: Version control used for branches and commits.
            repository: Repository to load and save with. Creates one if not provided.
            push: Default for pushing branches, commits and merges.
        """
        self.path = path
        self._git = git
        self._repository = repository or WhatdoRepository()
        self._push = push

    # =========================================================================
    # Helpers
    # =========================================================================

    def load(self) -> Result[Whatdo, str]:
        """Load the whole tree."""
        return self._repository.load(self.path)

    def _save(self, root: Whatdo) -> Result[None, str]:
        return self._repository.save(self.path, root)

    def current_branch(self) -> str | None:
        """Name of the checked out branch, or None when git cannot tell."""
        result = self._git.current_branch()
        if isinstance(result, Err):
            logger.warning("Could not determine current branch: %s", result.error)
            return None
        return result.value

    def _branch_exists(self, name: str) -> bool:
        result = self._git.branch_exists(name)
        if isinstance(result, Err):
            logger.warning("Could not check branch %r: %s", name, result.error)
            return False
        return result.value

    # =========================================================================
    # Queries
    # =========================================================================

    def get(self, whatdo_id: str) -> Result[Whatdo, str]:
        """Look up one whatdo by id."""
        loaded = self.load()
        if isinstance(loaded, Err):
            return loaded

        whatdo = find(loaded.value, whatdo_id)
        if whatdo is None:
            return Err(f"Whatdo '{whatdo_id}' not found")
        return Ok(whatdo)

    def upcoming(
        self,
        amount: int | None = None,
        tags: Iterable[str] = (),
        priorities: Iterable[int] = (),
    ) -> Result[list[Whatdo], str]:
        """Get the whatdos to work on next, work under the active whatdo first."""
        loaded = self.load()
        if isinstance(loaded, Err):
            return loaded
        return Ok(upcoming(loaded.value, self.current_branch(), amount, tags, priorities))

    def status(
        self,
        tags: Iterable[str] = (),
        priorities: Iterable[int] = (),
        transitive: bool = True,
        amount: int | None = None,
    ) -> Result[WhatdoStatus, str]:
        """Get the active whatdo, the filtered tree view and the next whatdos.

        Args:
            tags: Only show whatdos (or descendants of whatdos) with these tags.
            priorities: Only show whatdos (or descendants of whatdos) with
                these priorities.
            transitive: Also show whatdos under a matching whatdo.
            amount: Maximum number of upcoming whatdos, or None for all.

        Returns:
            Ok(WhatdoStatus) if successful, Err(str) if the document cannot
            be loaded.
        """
        loaded = self.load()
        if isinstance(loaded, Err):
            return loaded
        root = loaded.value
        branch = self.current_branch()

        return Ok(
            WhatdoStatus(
                active=find_active(root, branch),
                lines=render_tree(root, make_filter(tags, priorities), transitive),
                upcoming=upcoming(root, branch, amount, tags, priorities),
            )
        )

    # =========================================================================
    # Commands
    # =========================================================================

    def init(self) -> Result[Whatdo, str]:
        """Write the tutorial tree if no document exists yet."""
        if self._repository.exists(self.path):
            return Err(f"{self.path} already exists")

        root = initial_whatdo_tree(project_name(self.path))
        saved = self._save(root)
        if isinstance(saved, Err):
            return saved
        return Ok(root)

    def add(
        self,
        whatdo_id: str,
        summary: str | None = None,
        tags: list[str] | None = None,
        priority: int | None = None,
        parent: str | None = None,
        branch_name: str | None = None,
    ) -> Result[WhatdoAdded, str]:
        """Create a whatdo under ``parent`` and save the tree.

        ``parent`` may be an id, ``CURRENT`` for the active whatdo, or None
        for the root.
        """
        try:
            new = Whatdo(
                id=whatdo_id,
                summary=summary,
                tags=tags or None,
                priority=priority,
                branch_name=branch_name,
            )
        except ValidationError as e:
            return Err(f"Invalid whatdo: {e}")

        loaded = self.load()
        if isinstance(loaded, Err):
            return loaded
        root = loaded.value

        branch = self.current_branch() if parent == CURRENT else None
        inserted = insert(root, new, parent, branch)
        if isinstance(inserted, Err):
            return inserted

        saved = self._save(inserted.value)
        if isinstance(saved, Err):
            return saved

        if parent is None:
            parent_id = root.id
        elif parent == CURRENT:
            # insert succeeded, so the active whatdo exists
            parent_id = find_active(root, branch).id
        else:
            parent_id = parent
        return Ok(WhatdoAdded(whatdo_id=new.id, parent_id=parent_id))

    def _checkout(self, whatdo: Whatdo, push: bool | None) -> Result[WhatdoStarted, str]:
        branch = whatdo.reference_name
        exists = self._git.branch_exists(branch)
        if isinstance(exists, Err):
            return exists

        if exists.value:
            result = self._git.checkout_branch(branch)
        else:
            result = self._git.checkout_new_branch(branch, self._push if push is None else push)
        if isinstance(result, Err):
            return result

        return Ok(WhatdoStarted(whatdo=whatdo, branch=branch, created=not exists.value))

    def start(self, whatdo_id: str, push: bool | None = None) -> Result[WhatdoStarted, str]:
        """Checkout the branch for a whatdo, creating it if needed."""
        found = self.get(whatdo_id)
        if isinstance(found, Err):
            return found
        return self._checkout(found.value, push)

    def start_next(
        self,
        amount: int | None = None,
        tags: Iterable[str] = (),
        priorities: Iterable[int] = (),
        push: bool | None = None,
    ) -> Result[tuple[WhatdoStarted | None, list[Whatdo]], str]:
        """Start the first upcoming whatdo.

        Returns:
            Ok((event, rest)) where ``event`` is None if there is nothing left
            to do and ``rest`` holds the following upcoming whatdos, up to
            ``amount`` whatdos in total. Err(str) if loading or git fails.
        """
        loaded = self.load()
        if isinstance(loaded, Err):
            return loaded

        found = upcoming(loaded.value, self.current_branch(), amount, tags, priorities)
        if not found:
            return Ok((None, []))

        started = self._checkout(found[0], push)
        if isinstance(started, Err):
            return started
        return Ok((started.value, found[1:]))

    def delete(self, whatdo_id: str, resolved: bool = False) -> Result[WhatdoDeleted, str]:
        """Remove a whatdo and its subtree and save the tree."""
        loaded = self.load()
        if isinstance(loaded, Err):
            return loaded
        root = loaded.value

        whatdo = find(root, whatdo_id)
        if whatdo is None:
            return Err(f"Whatdo '{whatdo_id}' not found")

        deleted = delete(root, whatdo_id)
        if isinstance(deleted, Err):
            return deleted

        saved = self._save(deleted.value)
        if isinstance(saved, Err):
            return saved

        return Ok(
            WhatdoDeleted(
                whatdo_id=whatdo.id,
                summary=whatdo.display_summary,
                resolved=resolved,
            )
        )

    def resolve(self, whatdo_id: str) -> Result[WhatdoDeleted, str]:
        """Mark a whatdo as done, which removes it."""
        return self.delete(whatdo_id, resolved=True)

    def merge_target(self, root: Whatdo, whatdo_id: str) -> Result[str, str]:
        """Branch that work on ``whatdo_id`` merges into.

        The nearest ancestor (below the root) whose branch exists, otherwise
        the repository's default branch.
        """
        ancestor = find_nearest_ancestor_with_property(
            root,
            whatdo_id,
            lambda w: w is not root and self._branch_exists(w.reference_name),
        )
        if ancestor is not None:
            return Ok(ancestor.reference_name)
        return self._git.default_branch_name()

    def finish(self, push: bool | None = None) -> Result[WhatdoFinished, str]:
        """Resolve the active whatdo, commit the document and merge the branch.

        The document is written before git runs. If a git step fails the
        edit stays on disk and the error is returned.
        """
        push = self._push if push is None else push

        loaded = self.load()
        if isinstance(loaded, Err):
            return loaded
        root = loaded.value

        branch = self._git.current_branch()
        if isinstance(branch, Err):
            return branch

        active = find_active(root, branch.value)
        if active is None:
            return Err(f"No active whatdo for branch '{branch.value}'")

        dirty = self._git.has_unstaged_changes()
        if isinstance(dirty, Err):
            return dirty
        if dirty.value:
            return Err("There are uncommitted changes; commit or stash them before finishing")

        target = self.merge_target(root, active.id)
        if isinstance(target, Err):
            return target

        deleted = delete(root, active.id)
        if isinstance(deleted, Err):
            return deleted

        saved = self._save(deleted.value)
        if isinstance(saved, Err):
            return saved

        committed = self._git.commit([self.path], f"Finish {active.id}", push)
        if isinstance(committed, Err):
            return Err(f"Saved {self.path} but commit failed: {committed.error}")

        merged = self._git.merge(target.value, push)
        if isinstance(merged, Err):
            return Err(f"Committed but merge into '{target.value}' failed: {merged.error}")

        return Ok(
            WhatdoFinished(
                whatdo_id=active.id,
                summary=active.display_summary,
                branch=branch.value,
                merged_into=target.value,
            )
        )
