"""Storage infrastructure for whatdo.

YAML file I/O and the repository that maps the document to the tree.
"""

from whatdo.infrastructure.storage.repositories import (
    DocumentError,
    WhatdoRepository,
    parse_document,
    parse_whatdo,
    project_name,
    serialize_whatdo,
)
from whatdo.infrastructure.storage.yaml_storage import YamlStorage

__all__ = [
    "DocumentError",
    "WhatdoRepository",
    "YamlStorage",
    "parse_document",
    "parse_whatdo",
    "project_name",
    "serialize_whatdo",
]
