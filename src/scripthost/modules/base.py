"""API module interface for scripthost.

Every module must extend ApiModule and implement at minimum:
- name (class attribute or property)
- register_api(engine)

Modules receive the shared interpreter engine handle during
register_api() and bind their script-facing functions into it.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from typing import Any

DEFAULT_PRIORITY = 100


class ModuleState(str, enum.Enum):
    """Lifecycle state of a module as tracked by its registry."""
    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    INITIALIZED = "initialized"
    SHUT_DOWN = "shut_down"


class ApiModule(ABC):
    """Base class all script API modules must extend.

    Subclasses must define:
    - name: str      - unique identifier within a registry

    And implement:
    - register_api(engine) - bind functions/values into the interpreter

    Optional overrides:
    - priority      - lower values initialize first (default 100)
    - deprecated    - informational flag, never blocks registration
    - initialize()  - prepare internal state before register_api()
    - shutdown()    - release resources
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique module name."""

    @property
    def priority(self) -> int:
        """Loading priority. Lower numbers load first."""
        return DEFAULT_PRIORITY

    @property
    def deprecated(self) -> bool:
        return False

    def initialize(self) -> None:
        """Prepare internal state. Called before register_api().

        Default implementation is a no-op. Override if needed.
        """

    @abstractmethod
    def register_api(self, engine: Any) -> None:
        """Register all script-facing functions with the engine."""

    def shutdown(self) -> None:
        """Release resources. Called in reverse priority order."""


class BaseApiModule(ApiModule):
    """Convenience base: named after the class, with prefixed log helpers."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def _logger(self) -> logging.Logger:
        return logging.getLogger(type(self).__module__)

    def log_info(self, message: str) -> None:
        self._logger.info(f"[{self.name}] {message}")

    def log_warning(self, message: str) -> None:
        self._logger.warning(f"[{self.name}] {message}")

    def log_error(self, message: str) -> None:
        self._logger.error(f"[{self.name}] {message}")
