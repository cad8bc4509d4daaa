"""Module registry - registration, lifecycle, and ordering.

Handles the full module lifecycle against one interpreter instance:
  register() -> initialize_all() -> [initialized] -> shutdown_all()

Modules initialize in (priority, registration order) and shut down in the
exact reverse. A module that raises from any lifecycle hook is logged and
skipped; the rest of the registry keeps going.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from scripthost.errors import DuplicateModuleError, ModuleLifecycleError
from scripthost.modules.base import ApiModule, ModuleState

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=ApiModule)


class ModuleRegistry:
    """Owns the API modules bound to a single interpreter engine."""

    def __init__(self, engine: Any) -> None:
        if engine is None:
            raise ValueError("ModuleRegistry requires an engine handle")
        self._engine = engine
        self._modules: dict[str, ApiModule] = {}
        self._sequence: dict[str, int] = {}
        self._priorities: dict[str, int] = {}
        self._deprecated: set[str] = set()
        self._states: dict[str, ModuleState] = {}
        self._failed: set[str] = set()
        self._errors: dict[str, ModuleLifecycleError] = {}
        self._next_seq = 0
        self._initialized = False

    @property
    def engine(self) -> Any:
        return self._engine

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def modules(self) -> tuple[ApiModule, ...]:
        """Registered modules in registration order."""
        return tuple(self._modules.values())

    @property
    def failed(self) -> frozenset[str]:
        return frozenset(self._failed)

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, module: ApiModule) -> bool:
        """Register a module.

        Returns False (and leaves the registry untouched) if the object is
        not an ApiModule, its name or priority is invalid, or its name is
        already taken. Name, priority and deprecated are read once here. When
        the registry is already initialized the module is initialized
        immediately.
        """
        if not isinstance(module, ApiModule):
            logger.warning(f"Refusing to register {module!r}: not an ApiModule")
            return False

        try:
            name, priority, deprecated = self._read_contract(module)
        except Exception as e:
            logger.warning(f"Refusing to register {type(module).__name__}: {e}")
            return False

        try:
            self._check_unique(name)
        except DuplicateModuleError as e:
            logger.warning(f"{e}. Ignoring duplicate registration.")
            return False

        self._modules[name] = module
        self._sequence[name] = self._next_seq
        self._priorities[name] = priority
        self._next_seq += 1
        self._states[name] = ModuleState.REGISTERED
        logger.info(f"Module registered: {name} (priority {priority})")

        if deprecated:
            self._deprecated.add(name)
            logger.warning(f"Module '{name}' is deprecated")

        if self._initialized:
            if self._bring_up(name, module):
                logger.info(f"Late-initialized module: {name}")

        return True

    @staticmethod
    def _read_contract(module: ApiModule) -> tuple[str, int, bool]:
        """Read name, priority and deprecated once; raises if invalid."""
        name = module.name
        if not isinstance(name, str) or not name:
            raise TypeError(f"module name must be a non-empty str, got {name!r}")
        priority = module.priority
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise TypeError(f"priority of '{name}' must be an int, got {priority!r}")
        return name, priority, bool(module.deprecated)

    def _check_unique(self, name: str) -> None:
        if name in self._modules:
            raise DuplicateModuleError(name)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize_all(self) -> dict[str, bool]:
        """Initialize every pending module in priority order.

        Returns:
            Dict mapping module name to success (True/False). Empty if the
            registry was already initialized.
        """
        if self._initialized:
            return {}

        results: dict[str, bool] = {}
        for name in self.initialization_order():
            if self._states[name] == ModuleState.INITIALIZED:
                continue
            results[name] = self._bring_up(name, self._modules[name])
            if results[name]:
                logger.info(f"Initialized module: {name}")

        self._initialized = True
        ok = sum(1 for v in results.values() if v)
        logger.info(f"Module registry initialized: {ok}/{len(results)} modules")
        return results

    def shutdown_all(self) -> None:
        """Shut down initialized modules in reverse initialization order."""
        if not self._initialized:
            return

        for name in reversed(self.initialization_order()):
            if self._states[name] != ModuleState.INITIALIZED:
                continue
            try:
                self._modules[name].shutdown()
                logger.info(f"Shut down module: {name}")
            except Exception as e:
                self._record_failure(name, "shutdown", e)
            finally:
                self._states[name] = ModuleState.SHUT_DOWN

        self._initialized = False

    def _bring_up(self, name: str, module: ApiModule) -> bool:
        """Run initialize() then register_api(). Returns success."""
        phase = "initialize"
        try:
            module.initialize()
            phase = "register_api"
            module.register_api(self._engine)
        except Exception as e:
            self._record_failure(name, phase, e)
            return False

        self._states[name] = ModuleState.INITIALIZED
        self._failed.discard(name)
        self._errors.pop(name, None)
        return True

    def _record_failure(self, name: str, phase: str, exc: Exception) -> None:
        err = ModuleLifecycleError(name, phase, exc)
        self._errors[name] = err
        self._failed.add(name)
        logger.error(str(err))
        logger.debug(f"Traceback for {phase} failure", exc_info=exc)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def initialization_order(self) -> list[str]:
        """Module names sorted by (priority, registration order)."""
        return sorted(
            self._modules,
            key=lambda n: (self._priorities[n], self._sequence[n]),
        )

    def get_module(self, name: str) -> ApiModule | None:
        """Get a module by name, or None if not found."""
        return self._modules.get(name)

    def find_module(self, module_type: type[T]) -> T | None:
        """First registered module that is an instance of module_type."""
        for module in self._modules.values():
            if isinstance(module, module_type):
                return module
        return None

    def state_of(self, name: str) -> ModuleState:
        return self._states.get(name, ModuleState.UNREGISTERED)

    def last_error(self, name: str) -> ModuleLifecycleError | None:
        return self._errors.get(name)

    def describe(self, name: str) -> dict | None:
        """Status info for one module, or None if not registered."""
        if name not in self._modules:
            return None
        state = self._states[name]
        if name in self._failed and state != ModuleState.SHUT_DOWN:
            status = "failed"
        else:
            status = state.value

        err = self._errors.get(name)
        return {
            "name": name,
            "priority": self._priorities[name],
            "deprecated": name in self._deprecated,
            "state": state.value,
            "status": status,
            "error": str(err) if err else None,
        }

    def list_modules(self) -> list[dict]:
        """List all modules with status info, in initialization order."""
        return [self.describe(name) for name in self.initialization_order()]
