"""Script host - one interpreter engine, its module registry, and diagnostics.

The host owns the engine handle and passes it down to modules through the
registry. Script failures raised as ScriptRuntimeError are turned into
diagnostic reports instead of propagating into the host application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from loguru import logger

from scripthost.app.config import Settings, settings as default_settings
from scripthost.diagnostics.report import ScriptErrorReporter
from scripthost.interpreter import ScriptRuntimeError
from scripthost.modules.base import ApiModule
from scripthost.modules.core import CoreApiModule
from scripthost.modules.registry import ModuleRegistry


class ScriptHost:
    """Binds a ModuleRegistry and error reporting to one engine."""

    def __init__(
        self,
        engine: Any,
        settings: Settings | None = None,
        with_core: bool = True,
    ) -> None:
        self.settings = settings or default_settings
        self.registry = ModuleRegistry(engine)
        if with_core:
            self.registry.register(CoreApiModule())

    @property
    def engine(self) -> Any:
        return self.registry.engine

    def register(self, module: ApiModule) -> bool:
        return self.registry.register(module)

    def start(self) -> dict[str, bool]:
        """Initialize all registered modules."""
        logger.info(f"{self.settings.app_name}: initializing {len(self.registry)} modules")
        results = self.registry.initialize_all()
        failed = [name for name, ok in results.items() if not ok]
        if failed:
            logger.warning(f"Modules failed to initialize: {', '.join(failed)}")
        return results

    def stop(self) -> None:
        logger.info(f"{self.settings.app_name}: shutting down modules")
        self.registry.shutdown_all()

    def resolve_script_path(self, script_path: str | Path | None) -> Path | None:
        if script_path is None:
            return None
        path = Path(script_path)
        if not path.is_absolute():
            path = self.settings.scripts_dir / path
        return path

    def reporter_for(self, script_name: str, script_path: str | Path | None = None) -> ScriptErrorReporter:
        return ScriptErrorReporter(
            script_name,
            self.resolve_script_path(script_path),
            context_before=self.settings.context_lines_before,
            context_after=self.settings.context_lines_after,
            show_hints=self.settings.show_hints,
        )

    def run_script(
        self,
        func: Callable[..., Any],
        script_name: str,
        script_path: str | Path | None = None,
        *args: Any,
        context: str = "Error running script",
    ) -> Any:
        """Call into a script, reporting any ScriptRuntimeError.

        Returns the call's result, or None if the script failed.
        """
        try:
            return func(*args)
        except ScriptRuntimeError as e:
            self.reporter_for(script_name, script_path).report(e, context)
            logger.warning(f"Script '{script_name}' failed: {e.decorated_message}")
            return None
