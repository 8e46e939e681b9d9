"""Work ordering over the whatdo tree.

Decides what to work on next. Leaves are the unit of work; groupings are
expanded queued descendants first, then remaining children by priority.
All functions here are pure apart from logging unresolved queue entries.
"""

import logging
from collections.abc import Callable, Iterable

from .index import find_active, find_descendant
from .models import Whatdo

logger = logging.getLogger(__name__)

Filter = Callable[[Whatdo], bool]


# =============================================================================
# Filters
# =============================================================================


def make_filter(
    tags: Iterable[str] = (),
    priorities: Iterable[int] = (),
) -> Filter:
    """Build the tag/priority filter used by ``next`` and ``ls``.

    An empty tag set or priority set places no constraint on that field.

    Args:
        tags: Accept whatdos sharing at least one of these tags.
        priorities: Accept whatdos whose priority is one of these.

    Returns:
        Predicate function (whatdo) -> bool
    """
    tag_set = set(tags)
    priority_set = set(priorities)

    def predicate(whatdo: Whatdo) -> bool:
        if tag_set and not tag_set.intersection(whatdo.tags or ()):
            return False
        if priority_set and whatdo.priority not in priority_set:
            return False
        return True

    return predicate


def match_all(whatdo: Whatdo) -> bool:
    """Filter that accepts every whatdo."""
    return True


# =============================================================================
# Ordering
# =============================================================================


def priority_order(children: list[Whatdo]) -> list[Whatdo]:
    """Order siblings by ascending priority.

    Siblings without a priority come after every prioritized sibling.
    ``sorted`` is stable, so ties keep document order.
    """
    return sorted(
        children,
        key=lambda w: (w.priority is None, w.priority if w.priority is not None else 0),
    )


def sort(
    node: Whatdo,
    predicate: Filter,
    visited: set[str],
    ancestor_matched: bool = False,
) -> list[Whatdo]:
    """Compute the ordered leaves under ``node`` that pass the filter.

    A whatdo passes if it or any ancestor on the walk matched ``predicate``.
    ``visited`` is shared by the whole walk and guarantees that no id is
    emitted twice, even when it is reachable through a queue and through
    nesting.

    Args:
        node: Whatdo to expand.
        predicate: Filter function (whatdo) -> bool
        visited: Ids already emitted or expanded. Updated in place.
        ancestor_matched: Whether an ancestor of ``node`` passed the filter.

    Returns:
        Leaves in recommended work order.
    """
    self_matched = ancestor_matched or predicate(node)
    result: list[Whatdo] = []

    if node.queue is not None:
        for queued_id in node.queue:
            if queued_id in visited:
                continue
            queued = find_descendant(node, queued_id)
            if queued is None:
                logger.warning("Queue of %r refers to unknown whatdo %r", node.id, queued_id)
                continue
            result.extend(sort(queued, predicate, visited, self_matched))
            visited.add(queued_id)

    if node.is_leaf():
        if self_matched and node.id not in visited:
            result.append(node)
        return result

    # Whatever the queue did not cover follows in priority order
    for child in priority_order(node.children):
        if child.id in visited:
            continue
        result.extend(sort(child, predicate, visited, self_matched))
        visited.add(child.id)

    return result


# =============================================================================
# High-Level Operations
# =============================================================================


def upcoming(
    root: Whatdo,
    current_branch: str | None = None,
    amount: int | None = None,
    tags: Iterable[str] = (),
    priorities: Iterable[int] = (),
) -> list[Whatdo]:
    """Get the whatdos to work on next.

    Work under the active whatdo (the one whose reference name is the
    current branch) comes first, followed by the rest of the tree. Neither
    the root nor the active whatdo is ever listed.

    Args:
        root: The whole tree.
        current_branch: Name of the checked out branch, if known.
        amount: Maximum number of whatdos to return, or None for all.
        tags: Only include whatdos (or descendants of whatdos) with these tags.
        priorities: Only include whatdos (or descendants of whatdos) with
            these priorities.

    Returns:
        Whatdos in recommended work order.
    """
    predicate = make_filter(tags, priorities)
    active = find_active(root, current_branch)
    # the root is never work, even once it has no children left
    visited: set[str] = {root.id}

    result: list[Whatdo] = []
    if active is not None:
        visited.add(active.id)
        result.extend(sort(active, predicate, visited))
    result.extend(sort(root, predicate, visited))

    if amount is not None:
        return result[:amount]
    return result
