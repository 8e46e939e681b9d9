"""Read-only lookups over a whatdo tree.

All searches follow structural children only. Queue entries are references
and are never followed here.
"""

from collections.abc import Callable, Iterator

from .models import Whatdo

Predicate = Callable[[Whatdo], bool]


def iter_whatdos(root: Whatdo) -> Iterator[Whatdo]:
    """Yield ``root`` and every descendant in depth-first pre-order."""
    yield root
    for child in root.children:
        yield from iter_whatdos(child)


def find_with_parent(
    root: Whatdo,
    predicate: Predicate,
) -> tuple[Whatdo, Whatdo | None] | None:
    """Find the first whatdo matching ``predicate`` along with its parent.

    Args:
        root: The tree to search. The root itself is a candidate.
        predicate: Function (whatdo) -> bool

    Returns:
        ``(match, parent)``, where parent is None if the match is ``root``,
        or None when nothing matches.
    """
    if predicate(root):
        return root, None

    def search(node: Whatdo) -> tuple[Whatdo, Whatdo | None] | None:
        for child in node.children:
            if predicate(child):
                return child, node
            found = search(child)
            if found:
                return found
        return None

    return search(root)


def find(root: Whatdo, whatdo_id: str) -> Whatdo | None:
    """Find a whatdo by id, or None."""
    found = find_with_parent(root, lambda w: w.id == whatdo_id)
    return found[0] if found else None


def find_descendant(node: Whatdo, whatdo_id: str) -> Whatdo | None:
    """Find a strict descendant of ``node`` by id."""
    for child in node.children:
        found = find(child, whatdo_id)
        if found:
            return found
    return None


def find_nearest_ancestor_with_property(
    root: Whatdo,
    start_id: str,
    prop: Predicate,
) -> Whatdo | None:
    """Walk up from ``start_id`` to the closest ancestor satisfying ``prop``.

    Each step looks the parent up again from the root, which is fine for
    the size of a task list.

    Returns:
        The nearest matching ancestor, or None if the walk reaches the root
        without a match or ``start_id`` is not in the tree.
    """
    current_id = start_id
    while True:
        found = find_with_parent(root, lambda w, target=current_id: w.id == target)
        if found is None:
            return None
        _, parent = found
        if parent is None:
            return None
        if prop(parent):
            return parent
        current_id = parent.id


def find_active(root: Whatdo, branch: str | None) -> Whatdo | None:
    """Find the whatdo being worked on for the given branch.

    The root is never active, even if its id happens to equal the branch.
    """
    if not branch:
        return None
    for whatdo in iter_whatdos(root):
        if whatdo is not root and whatdo.reference_name == branch:
            return whatdo
    return None
