"""Task domain - the whatdo tree and its algorithms.

All exports are pure (no I/O, no side effects).

Key Types:
    Whatdo - Tree node, a unit of work or a grouping
    ViewLine - One line of a filtered tree view
    LineStyle - How a view line is displayed

Lookup Functions:
    find - Find a whatdo by id
    find_with_parent - Find the first match and its parent
    find_nearest_ancestor_with_property - Walk up to a matching ancestor
    find_active - Whatdo for the current branch

Traversal Functions:
    sort - Ordered leaves under a node
    upcoming - What to work on next
    make_filter - Tag/priority filter

Rewrites:
    insert - Add a whatdo under a parent
    delete - Remove a whatdo and queue references to it

Domain Events:
    WhatdoAdded, WhatdoStarted, WhatdoDeleted, WhatdoFinished
"""

from .events import WhatdoAdded, WhatdoDeleted, WhatdoFinished, WhatdoStarted
from .index import (
    find,
    find_active,
    find_descendant,
    find_nearest_ancestor_with_property,
    find_with_parent,
    iter_whatdos,
)
from .models import Whatdo, deslugify
from .mutations import CURRENT, delete, insert, map_whatdos
from .rendering import LineStyle, ViewLine, render_tree
from .sample import initial_whatdo_tree
from .traversal import make_filter, match_all, priority_order, sort, upcoming
from .validation import slugify, validate_id, validate_tag

__all__ = [
    # Models
    "Whatdo",
    "deslugify",
    "initial_whatdo_tree",
    # Validation
    "validate_id",
    "validate_tag",
    "slugify",
    # Lookup
    "iter_whatdos",
    "find",
    "find_descendant",
    "find_with_parent",
    "find_nearest_ancestor_with_property",
    "find_active",
    # Traversal
    "make_filter",
    "match_all",
    "priority_order",
    "sort",
    "upcoming",
    # Rendering
    "LineStyle",
    "ViewLine",
    "render_tree",
    # Rewrites
    "CURRENT",
    "insert",
    "delete",
    "map_whatdos",
    # Events
    "WhatdoAdded",
    "WhatdoStarted",
    "WhatdoDeleted",
    "WhatdoFinished",
]
