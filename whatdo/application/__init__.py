"""Application layer: command orchestration and the ports it depends on."""

from whatdo.application.ports import VersionControl
from whatdo.application.task_service import WhatdoService, WhatdoStatus

__all__ = [
    "VersionControl",
    "WhatdoService",
    "WhatdoStatus",
]
