"""Tests for the core utility module."""

import logging
from types import SimpleNamespace


def _engine():
    return SimpleNamespace(globals={})


class TestCoreApiModule:

    def test_loads_first(self):
        from scripthost.modules.core import CoreApiModule
        m = CoreApiModule()
        assert m.name == "core"
        assert m.priority == 0

    def test_registers_globals(self):
        from scripthost import __version__
        from scripthost.modules.core import CoreApiModule
        engine = _engine()
        CoreApiModule().register_api(engine)
        assert engine.globals["SCRIPTHOST_VERSION"] == __version__
        for fn in ("Log", "LogWarning", "LogError"):
            assert callable(engine.globals[fn])

    def test_script_log_functions_prefix(self, caplog):
        from scripthost.modules.core import CoreApiModule
        engine = _engine()
        CoreApiModule().register_api(engine)

        with caplog.at_level(logging.INFO, logger="scripthost.scripts"):
            engine.globals["Log"]("hello")
            engine.globals["LogError"]("bad thing")

        assert "[Lua] hello" in caplog.text
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert errors[0].getMessage() == "[Lua] bad thing"

    def test_initializes_before_default_priority_modules(self):
        from scripthost.modules.base import BaseApiModule
        from scripthost.modules.core import CoreApiModule
        from scripthost.modules.registry import ModuleRegistry

        seen = []

        class NeedsLog(BaseApiModule):
            def register_api(self, engine):
                seen.append("Log" in engine.globals)

        reg = ModuleRegistry(_engine())
        reg.register(NeedsLog())
        reg.register(CoreApiModule())
        reg.initialize_all()

        assert reg.initialization_order() == ["core", "NeedsLog"]
        assert seen == [True]
