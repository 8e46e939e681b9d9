"""Filtered tree view.

Produces the lines of an indented view of the tree restricted to whatdos
matching a filter. Ancestors of a match are kept as dimmed context lines so
the match can be located in the tree. Lines are plain data; colors and
indentation characters are left to the interface layer.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .models import Whatdo


class LineStyle(str, Enum):
    """How a view line should be displayed."""

    FULL = "full"
    TRANSITIVE = "transitive"
    CONTEXT = "context"


@dataclass(frozen=True)
class ViewLine:
    """One line of a tree view.

    Attributes:
        depth: Nesting level, 0 for children of the root.
        whatdo: The whatdo shown on this line.
        style: FULL for direct matches, TRANSITIVE for whatdos under a match,
            CONTEXT for ancestors shown only to locate a match.
    """

    depth: int
    whatdo: Whatdo
    style: LineStyle


def render_tree(
    root: Whatdo,
    predicate: Callable[[Whatdo], bool],
    transitive: bool = False,
) -> list[ViewLine]:
    """Render the part of the tree relevant to ``predicate``.

    The whole tree is walked in pre-order. Whatdos that do not match are
    held on a stack of deferred ancestors and only emitted (as CONTEXT) once
    a descendant turns out to match. The root is walked but never emitted.

    Args:
        root: The whole tree.
        predicate: Filter function (whatdo) -> bool
        transitive: Also show descendants of matching whatdos.

    Returns:
        View lines in display order.
    """
    lines: list[ViewLine] = []
    deferred: list[tuple[int, Whatdo]] = []

    def visit(node: Whatdo, depth: int, ancestor_matched: bool) -> None:
        direct = predicate(node)
        matched = direct or (transitive and ancestor_matched)

        if matched and deferred:
            for deferred_depth, ancestor in deferred:
                lines.append(ViewLine(deferred_depth, ancestor, LineStyle.CONTEXT))
            deferred.clear()

        if direct:
            lines.append(ViewLine(depth, node, LineStyle.FULL))
        elif matched:
            lines.append(ViewLine(depth, node, LineStyle.TRANSITIVE))
        else:
            deferred.append((depth, node))

        for child in node.children:
            visit(child, depth + 1, ancestor_matched or direct)

        if deferred and deferred[-1][1] is node:
            deferred.pop()

    for child in root.children:
        visit(child, 0, False)

    return lines
