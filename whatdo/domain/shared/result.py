"""Result values for explicit error handling.

Operations that can fail in an expected way (a missing whatdo, a duplicate
id, a git command exiting non-zero) return either ``Ok`` or ``Err`` instead
of raising. Callers branch with ``isinstance``:

    >>> result = delete(tree, "write-docs")
    >>> if isinstance(result, Err):
    ...     print_error(result.error)
    ... else:
    ...     tree = result.value
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: Description of what went wrong.
    """

    error: E


# Union rather than | because TypeVar aliases need it at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007
