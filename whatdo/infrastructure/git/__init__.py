"""Git infrastructure for whatdo.

Provides a subprocess wrapper around git with Result-based error handling.
"""

from whatdo.infrastructure.git.operations import GitOperations

__all__ = [
    "GitOperations",
]
