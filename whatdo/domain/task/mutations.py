"""Structural rewrites of the whatdo tree.

Every function returns a new tree and leaves its input untouched, so a
failed operation never leaves a half-edited tree behind.
"""

from collections.abc import Callable

from whatdo.domain.shared.result import Err, Ok, Result

from .index import find, find_active, iter_whatdos
from .models import Whatdo

# Parent marker meaning "the whatdo for the current branch". Not a valid id.
CURRENT = "@"


def map_whatdos(root: Whatdo, f: Callable[[Whatdo], Whatdo]) -> Whatdo:
    """Rebuild the tree bottom-up, applying ``f`` to every whatdo.

    ``f`` receives each whatdo with its children already transformed.
    """
    new_children = [map_whatdos(child, f) for child in root.children]
    return f(root.model_copy(update={"children": new_children}))


def insert(
    root: Whatdo,
    new: Whatdo,
    parent_id: str | None = None,
    current_branch: str | None = None,
) -> Result[Whatdo, str]:
    """Add ``new`` as the last child of a parent.

    Args:
        root: The whole tree.
        new: The whatdo to add.
        parent_id: Id of the parent, ``CURRENT`` for the active whatdo, or
            None for the root.
        current_branch: Name of the checked out branch, used with ``CURRENT``.

    Returns:
        Ok(new tree), or Err(str) if the id or reference name is taken or
        the parent cannot be found.
    """
    taken: set[str] = set()
    for existing in iter_whatdos(root):
        taken.add(existing.id)
        taken.add(existing.reference_name)

    if new.id in taken:
        return Err(f"Whatdo '{new.id}' already exists")
    if new.reference_name in taken:
        return Err(f"Reference name '{new.reference_name}' is already used")

    if parent_id is None:
        parent = root
    elif parent_id == CURRENT:
        parent = find_active(root, current_branch)
        if parent is None:
            return Err("No active whatdo to add to")
    else:
        parent = find(root, parent_id)
        if parent is None:
            return Err(f"Parent whatdo '{parent_id}' not found")

    target = parent.id

    def append(node: Whatdo) -> Whatdo:
        if node.id != target:
            return node
        return node.model_copy(update={"children": [*node.children, new]})

    return Ok(map_whatdos(root, append))


def delete(root: Whatdo, whatdo_id: str) -> Result[Whatdo, str]:
    """Remove a whatdo, its subtree and every queue reference to them.

    Queue references can sit anywhere in the tree, so the whole tree is
    rewritten rather than just the parent.

    Returns:
        Ok(new tree), or Err(str) if the id is the root or not found.
    """
    if root.id == whatdo_id:
        return Err("Cannot delete the root whatdo")

    target = find(root, whatdo_id)
    if target is None:
        return Err(f"Whatdo '{whatdo_id}' not found")

    removed = {w.id for w in iter_whatdos(target)}

    def prune(node: Whatdo) -> Whatdo:
        update: dict = {}
        if any(child.id == whatdo_id for child in node.children):
            update["children"] = [c for c in node.children if c.id != whatdo_id]
        if node.queue is not None and removed.intersection(node.queue):
            update["queue"] = [q for q in node.queue if q not in removed]
        return node.model_copy(update=update) if update else node

    return Ok(map_whatdos(root, prune))
