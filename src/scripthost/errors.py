"""Error taxonomy for the scripting host.

None of these escape the public registry or diagnostics operations; they
are raised internally, recorded and logged at the boundary.
"""

from __future__ import annotations


class ScriptHostError(Exception):
    """Base class for errors raised inside scripthost."""


class DuplicateModuleError(ScriptHostError):
    """Raised when a module name is already taken in a registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Module '{name}' is already registered")
        self.name = name


class ModuleLifecycleError(ScriptHostError):
    """A module's initialize, register_api or shutdown raised.

    Wraps the original exception so the registry can keep the last failure
    per module without re-raising it.
    """

    def __init__(self, module_name: str, phase: str, cause: BaseException) -> None:
        super().__init__(f"Module '{module_name}' failed during {phase}: {cause}")
        self.module_name = module_name
        self.phase = phase
        self.cause = cause


class SourceUnavailableError(ScriptHostError):
    """The script source could not be read for code context."""
