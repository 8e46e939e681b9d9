"""Shared domain building blocks: Result values and the base event."""

from whatdo.domain.shared.events import DomainEvent
from whatdo.domain.shared.result import Err, Ok, Result

__all__ = [
    "Ok",
    "Err",
    "Result",
    "DomainEvent",
]
