"""Whatdo domain events.

Immutable records returned by the application layer after a command has
changed the tree or the checked out branch.
"""

from whatdo.domain.shared.events import DomainEvent

from .models import Whatdo


class WhatdoAdded(DomainEvent):
    """A whatdo was inserted under a parent."""

    whatdo_id: str
    parent_id: str


class WhatdoStarted(DomainEvent):
    """Work began on a whatdo by checking out its branch.

    ``whatdo`` is the started whatdo as loaded. ``created`` is False when
    the branch already existed.
    """

    whatdo: Whatdo
    branch: str
    created: bool


class WhatdoDeleted(DomainEvent):
    """A whatdo was removed from the tree.

    ``resolved`` distinguishes a whatdo marked done from one thrown away.
    """

    whatdo_id: str
    summary: str
    resolved: bool = False


class WhatdoFinished(DomainEvent):
    """The active whatdo was resolved, committed and merged."""

    whatdo_id: str
    summary: str
    branch: str
    merged_into: str
