"""User configuration for whatdo.

Stored in ``~/.whatdo/config.json``. Set ``WHATDO_CONFIG_DIR`` to use a
different directory.
"""

import json
import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class WhatdoConfig(BaseModel):
    """User preferences.

    Attributes:
        file_name: Name of the whatdo document at the repository root.
        push: Push branches and commits to ``origin`` by default.
        next_amount: How many upcoming whatdos ``status`` shows.
        git_timeout: Timeout in seconds for each git command.
        log_level: Console log level when ``--verbose`` is not given.
    """

    file_name: str = "WHATDO.yaml"
    push: bool = False
    next_amount: int = 3
    git_timeout: int = 60
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


def get_config_dir() -> Path:
    """Get the whatdo config directory."""
    override = os.environ.get("WHATDO_CONFIG_DIR")
    if override:
        return Path(override)
    return Path.home() / ".whatdo"


def get_config() -> WhatdoConfig:
    """Load the user configuration, falling back to defaults."""
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return WhatdoConfig(**data)
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning("Ignoring invalid config %s: %s", config_file, e)
    return WhatdoConfig()
