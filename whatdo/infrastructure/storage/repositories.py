"""Repository for the whatdo document.

Converts between the YAML document and the ``Whatdo`` tree and wraps file
operations with Result-based error handling.

Document format: the file holds the root whatdo's value. A value is either
a string (summary only), null (no fields) or a mapping with the optional
keys ``summary``, ``priority``, ``tags``, ``branch_name``, ``queue`` and
``whatdos`` (a mapping of child id to value).
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from whatdo.domain.shared.result import Err, Ok, Result
from whatdo.domain.task.models import Whatdo
from whatdo.domain.task.validation import slugify
from whatdo.infrastructure.storage.yaml_storage import YamlStorage

logger = logging.getLogger(__name__)

KNOWN_KEYS = ("summary", "priority", "tags", "branch_name", "queue", "whatdos")


class DocumentError(ValueError):
    """The document is structurally invalid."""


# =============================================================================
# Parsing
# =============================================================================


def _parse_string_list(owner: str, key: str, value: Any) -> list[str]:
    if not isinstance(value, list):
        raise DocumentError(f"Expected '{key}' of '{owner}' to be a sequence")
    for item in value:
        if not isinstance(item, str):
            raise DocumentError(f"Expected every item of '{key}' of '{owner}' to be a string")
    return list(value)


def _parse_children(owner: str, value: Any) -> list[Whatdo]:
    if not isinstance(value, dict):
        raise DocumentError(f"Expected 'whatdos' of '{owner}' to be a mapping")
    children = []
    for key, child in value.items():
        if not isinstance(key, str):
            raise DocumentError(f"Expected whatdo ids under '{owner}' to be strings, got {key!r}")
        children.append(parse_whatdo(key, child))
    return children


def parse_whatdo(whatdo_id: str, value: Any) -> Whatdo:
    """Build a whatdo (and its subtree) from a document value.

    Raises:
        DocumentError: If a value has the wrong shape or type.
        ValidationError: If an id or tag is invalid.
    """
    if isinstance(value, str):
        return Whatdo(id=whatdo_id, summary=value)
    if value is None:
        return Whatdo(id=whatdo_id)
    if not isinstance(value, dict):
        raise DocumentError(f"Whatdo '{whatdo_id}' must be a string or a mapping")

    for key in value:
        if key not in KNOWN_KEYS:
            logger.warning("Ignoring unknown key %r in whatdo %r", key, whatdo_id)

    summary = value.get("summary")
    if summary is not None and not isinstance(summary, str):
        raise DocumentError(f"Expected 'summary' of '{whatdo_id}' to be a string")

    priority = value.get("priority")
    if priority is not None and (isinstance(priority, bool) or not isinstance(priority, int)):
        raise DocumentError(f"Expected 'priority' of '{whatdo_id}' to be an integer")

    branch_name = value.get("branch_name")
    if branch_name is not None and not isinstance(branch_name, str):
        raise DocumentError(f"Expected 'branch_name' of '{whatdo_id}' to be a string")

    tags = value.get("tags")
    queue = value.get("queue")
    children = value.get("whatdos")

    return Whatdo(
        id=whatdo_id,
        summary=summary,
        priority=priority,
        branch_name=branch_name,
        tags=None if tags is None else _parse_string_list(whatdo_id, "tags", tags),
        queue=None if queue is None else _parse_string_list(whatdo_id, "queue", queue),
        children=[] if children is None else _parse_children(whatdo_id, children),
    )


def check_unique_ids(root: Whatdo) -> None:
    """Raise DocumentError if any id appears twice in the tree."""
    seen: set[str] = set()

    def walk(node: Whatdo) -> None:
        if node.id in seen:
            raise DocumentError(f"Duplicate whatdo id '{node.id}'")
        seen.add(node.id)
        for child in node.children:
            walk(child)

    walk(root)


def parse_document(project: str, data: Any) -> Result[Whatdo, str]:
    """Parse a whole document into a tree rooted at ``project``.

    Returns:
        Ok(Whatdo) with the root, or Err(str) describing the first problem.
    """
    try:
        root = parse_whatdo(project, data)
        check_unique_ids(root)
        return Ok(root)
    except DocumentError as e:
        return Err(str(e))
    except ValidationError as e:
        return Err(f"Invalid whatdo data: {e}")


# =============================================================================
# Serialization
# =============================================================================


def serialize_whatdo(whatdo: Whatdo) -> str | dict[str, Any]:
    """Convert a whatdo (and its subtree) to a document value.

    Summary-only whatdos use the one-line string form. Everything else is
    a mapping that omits unset fields.
    """
    if whatdo.terse:
        return whatdo.summary

    data: dict[str, Any] = {}
    if whatdo.summary is not None:
        data["summary"] = whatdo.summary
    if whatdo.priority is not None:
        data["priority"] = whatdo.priority
    if whatdo.tags is not None:
        data["tags"] = list(whatdo.tags)
    if whatdo.branch_name is not None:
        data["branch_name"] = whatdo.branch_name
    if whatdo.queue is not None:
        data["queue"] = list(whatdo.queue)
    if whatdo.children:
        data["whatdos"] = {child.id: serialize_whatdo(child) for child in whatdo.children}
    return data


# =============================================================================
# Repository
# =============================================================================


def project_name(path: Path) -> str:
    """Id of the root whatdo: the name of the directory holding the document."""
    return slugify(path.resolve().parent.name)


class WhatdoRepository:
    """Repository for the whatdo tree.

    Loads and saves the whole tree as one YAML document.
    """

    def __init__(self, storage: YamlStorage | None = None) -> None:
        """Initialize the repository.

        Args:
            storage: YamlStorage instance to use. Creates new one if not provided.
        """
        self._storage = storage or YamlStorage()

    def load(self, path: Path) -> Result[Whatdo, str]:
        """Load the tree stored at ``path``.

        Returns:
            Ok(Whatdo) with the root if successful, Err(str) if the file is
            missing, unreadable or invalid.
        """
        result = self._storage.load_yaml(path)
        if isinstance(result, Err):
            return result

        parsed = parse_document(project_name(path), result.value)
        if isinstance(parsed, Err):
            return Err(f"Invalid whatdo file {path}: {parsed.error}")
        return parsed

    def save(self, path: Path, root: Whatdo) -> Result[None, str]:
        """Write the whole tree to ``path``.

        The root id is not stored; it is derived from the directory on load.
        """
        return self._storage.save_yaml(path, serialize_whatdo(root))

    def exists(self, path: Path) -> bool:
        """Check if a whatdo file exists at ``path``."""
        return path.exists()
