"""YAML file storage with Result-based error handling.

A thin wrapper around file I/O for YAML documents, returning Result types
instead of raising exceptions. Knows nothing about whatdos.
"""

from pathlib import Path
from typing import Any

import yaml

from whatdo.domain.shared.result import Err, Ok, Result


class _BlockDumper(yaml.SafeDumper):
    """Safe dumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


_BlockDumper.add_representer(str, _represent_str)


class YamlStorage:
    """Low-level YAML file I/O.

    Example:
        storage = YamlStorage()
        result = storage.load_yaml(Path("WHATDO.yaml"))
        if isinstance(result, Ok):
            data = result.value
        else:
            print(f"Error: {result.error}")
    """

    def load_yaml(self, path: Path) -> Result[Any, str]:
        """Load YAML data from a file.

        Args:
            path: Path to the YAML file to read.

        Returns:
            Ok(data) if successful, Err(str) with error message if failed.
            An empty file loads as Ok(None).
        """
        try:
            if not path.exists():
                return Err(f"File not found: {path}")

            content = path.read_text(encoding="utf-8")
            return Ok(yaml.safe_load(content))

        except yaml.YAMLError as e:
            return Err(f"Invalid YAML in {path}: {e}")
        except PermissionError:
            return Err(f"Permission denied reading {path}")
        except OSError as e:
            return Err(f"Error reading {path}: {e}")

    def dump_yaml(self, data: Any) -> str:
        """Serialize data to YAML text, keeping mapping order."""
        return yaml.dump(
            data,
            Dumper=_BlockDumper,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )

    def save_yaml(self, path: Path, data: Any) -> Result[None, str]:
        """Save data to a YAML file, replacing its contents.

        Args:
            path: Path to the YAML file to write.
            data: Plain data (dicts, lists, strings, ints) to serialize.

        Returns:
            Ok(None) if successful, Err(str) with error message if failed.
        """
        try:
            content = self.dump_yaml(data)
        except yaml.YAMLError as e:
            return Err(f"Data not YAML serializable: {e}")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            return Ok(None)

        except PermissionError:
            return Err(f"Permission denied writing {path}")
        except OSError as e:
            return Err(f"Error writing {path}: {e}")
