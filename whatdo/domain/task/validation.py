"""Lexical rules for whatdo identifiers and tags."""

import re

ID_PATTERN = re.compile(r"[A-Za-z0-9_/-]+")
TAG_PATTERN = re.compile(r"[a-z0-9_-]+")


def validate_id(value: str) -> str:
    """Return ``value`` if it is a valid whatdo id.

    Ids may contain ASCII letters, digits, ``_``, ``/`` and ``-``. Slashes
    are allowed so that ids can double as branch names like ``feature/x``.

    Raises:
        ValueError: If the id is empty or contains any other character.
    """
    if not ID_PATTERN.fullmatch(value):
        raise ValueError(f"Invalid whatdo id {value!r}: must match {ID_PATTERN.pattern}")
    return value


def validate_tag(value: str) -> str:
    """Return ``value`` if it is a valid tag.

    Raises:
        ValueError: If the tag is empty or has characters outside ``[a-z0-9_-]``.
    """
    if not TAG_PATTERN.fullmatch(value):
        raise ValueError(f"Invalid tag {value!r}: must match {TAG_PATTERN.pattern}")
    return value


def slugify(value: str) -> str:
    """Turn an arbitrary name into a valid id by replacing bad characters with ``-``."""
    slug = re.sub(r"[^A-Za-z0-9_/-]", "-", value)
    return slug or "root"
