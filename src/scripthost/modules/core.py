"""Core utility module: logging functions and version globals for scripts.

Runs first (priority 0) so modules registered after it can rely on the
script-side Log functions being present.
"""

from __future__ import annotations

import logging
from typing import Any

from scripthost import __version__
from scripthost.modules.base import BaseApiModule

script_logger = logging.getLogger("scripthost.scripts")


class CoreApiModule(BaseApiModule):
    """Exposes Log/LogWarning/LogError and SCRIPTHOST_VERSION to scripts."""

    name = "core"
    priority = 0

    def __init__(self, prefix: str = "[Lua]") -> None:
        self._prefix = prefix

    def register_api(self, engine: Any) -> None:
        g = engine.globals
        g["SCRIPTHOST_VERSION"] = __version__
        g["Log"] = self.log
        g["LogWarning"] = self.log_warning_from_script
        g["LogError"] = self.log_error_from_script

    def log(self, message: Any) -> None:
        script_logger.info(f"{self._prefix} {message}")

    def log_warning_from_script(self, message: Any) -> None:
        script_logger.warning(f"{self._prefix} {message}")

    def log_error_from_script(self, message: Any) -> None:
        script_logger.error(f"{self._prefix} {message}")
