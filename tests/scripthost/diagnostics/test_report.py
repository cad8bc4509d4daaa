"""Tests for the error diagnostics report."""

import logging

import pytest
from unittest.mock import MagicMock

from scripthost.diagnostics.report import ScriptErrorReporter
from scripthost.errors import SourceUnavailableError
from scripthost.interpreter import CallStackFrame, ScriptRuntimeError, SourceRef

SCRIPT = """\
local shop = {}

function shop.open()
    Log("opening")
    doThing()
    return true
end

return shop
"""


@pytest.fixture
def script_file(tmp_path):
    path = tmp_path / "shop.lua"
    path.write_text(SCRIPT)
    return path


def _nil_call_error(call_stack=None):
    return ScriptRuntimeError(
        "shop.lua:5: attempt to call a nil value (global 'doThing')",
        call_stack,
    )


class TestBuildReport:

    def test_full_report(self, script_file):
        reporter = ScriptErrorReporter("shop", script_file)
        err = _nil_call_error([
            CallStackFrame("shop.open", SourceRef("shop.lua", 5)),
            CallStackFrame(None, SourceRef("main.lua", 12)),
        ])

        report = reporter.build_report(err, "Error loading script")

        assert report.line_number == 5
        assert report.code_context is not None
        assert [cl.number for cl in report.code_context.lines] == [3, 4, 5, 6, 7]
        assert report.frames[0].is_error_site
        assert report.hints[0].identifiers == ("doThing",)

        lines = report.lines()
        assert lines[0] == (
            "Error loading script in script 'shop': "
            "shop.lua:5: attempt to call a nil value (global 'doThing')"
        )
        assert ">>> 005:     doThing()" in lines
        assert "  [ERROR] at shop.open (shop.lua:5)" in lines
        assert "          at <anonymous_function> (main.lua:12)" in lines

    def test_sections_in_fixed_order(self, script_file):
        report = ScriptErrorReporter("shop", script_file).build_report(_nil_call_error())
        lines = report.lines()
        idx_ctx = lines.index("--- Error near line 5 in shop ---")
        idx_stack = lines.index("Stack trace:")
        idx_hint = next(i for i, l in enumerate(lines) if l.startswith("[Hint]"))
        assert 0 < idx_ctx < idx_stack < idx_hint

    def test_empty_stack_uses_script_level_frame(self, script_file):
        report = ScriptErrorReporter("shop", script_file).build_report(_nil_call_error())
        assert "  [ERROR] at <script_level> (shop:5)" in report.lines()

    def test_no_line_prefix_omits_code_context(self, script_file):
        provider = MagicMock(return_value=SCRIPT)
        reporter = ScriptErrorReporter("shop", script_file, source_provider=provider)

        report = reporter.build_report(ScriptRuntimeError("attempt to index a nil value"))

        assert report.line_number is None
        assert report.code_context is None
        provider.assert_not_called()
        lines = report.lines()
        assert "  <Stack trace not available>" in lines
        assert not any(l.startswith("---") for l in lines)
        assert lines[-2].startswith("[Hint]")

    def test_unreadable_file_omits_code_context(self, tmp_path):
        reporter = ScriptErrorReporter("gone", tmp_path / "gone.lua")
        report = reporter.build_report(_nil_call_error())
        assert report.line_number == 5
        assert report.code_context is None
        assert report.hints

    def test_provider_crash_is_contained(self, caplog):
        provider = MagicMock(side_effect=UnicodeDecodeError("utf-8", b"", 0, 1, "bad"))
        reporter = ScriptErrorReporter("shop", "shop.lua", source_provider=provider)
        report = reporter.build_report(_nil_call_error())
        assert report.code_context is None
        assert "Could not read script file" in caplog.text

    def test_provider_unavailable(self):
        provider = MagicMock(side_effect=SourceUnavailableError("no file"))
        reporter = ScriptErrorReporter("shop", None, source_provider=provider)
        report = reporter.build_report(_nil_call_error())
        assert report.code_context is None
        assert report.frames

    def test_line_beyond_file(self, script_file):
        err = ScriptRuntimeError("shop.lua:99: attempt to concatenate a nil value")
        report = ScriptErrorReporter("shop", script_file).build_report(err)
        assert report.line_number == 99
        assert report.code_context is None

    def test_plain_exception(self):
        report = ScriptErrorReporter("x").build_report(RuntimeError("x.lua:2: bad argument #1"))
        assert report.line_number == 2
        assert report.message == "x.lua:2: bad argument #1"

    def test_empty_message(self):
        report = ScriptErrorReporter("x").build_report(ScriptRuntimeError(""))
        assert report.message == "Unknown script error"
        assert report.line_number is None

    def test_hints_can_be_disabled(self, script_file):
        reporter = ScriptErrorReporter("shop", script_file, show_hints=False)
        assert reporter.build_report(_nil_call_error()).hints == []

    def test_to_dict(self, script_file):
        data = ScriptErrorReporter("shop", script_file).build_report(_nil_call_error()).to_dict()
        assert data["line"] == 5
        assert data["script"] == "shop"
        assert [c["error"] for c in data["code_context"]].count(True) == 1
        assert data["stack"][0]["function"] == "<script_level>"
        assert data["hints"][0]["identifiers"] == ["doThing"]


class TestReport:

    def test_logs_every_line(self, script_file, caplog):
        reporter = ScriptErrorReporter("shop", script_file)
        with caplog.at_level(logging.ERROR, logger="scripthost.diagnostics.report"):
            report = reporter.report(_nil_call_error())

        logged = [r.getMessage() for r in caplog.records if r.name == "scripthost.diagnostics.report"]
        assert logged == report.lines()

    def test_bytes_message_is_decoded(self):
        err = ScriptRuntimeError(b"x.lua:3: attempt to call a nil value (global 'go\xff')")
        report = ScriptErrorReporter("x").report(err)
        assert report.line_number == 3
        assert report.message.startswith("x.lua:3: attempt to call a nil value")
        assert "�" in report.message
        assert report.hints

    def test_non_string_message_is_stringified(self):
        err = ScriptRuntimeError("placeholder")
        err.decorated_message = 42
        report = ScriptErrorReporter("x").report(err)
        assert report.message == "42"
        assert report.line_number is None

    def test_none_message_is_unknown(self):
        report = ScriptErrorReporter("x").build_report(ScriptRuntimeError(None))
        assert report.message == "Unknown script error"
        assert report.lines()[0] == "Error running script in script 'x': Unknown script error"

    def test_line_parse_failure_is_contained(self, monkeypatch, caplog):
        import scripthost.diagnostics.report as report_mod

        monkeypatch.setattr(report_mod, "parse_line_number", MagicMock(side_effect=RuntimeError("bad")))
        report = ScriptErrorReporter("x").report(_nil_call_error())
        assert report.line_number is None
        assert report.code_context is None
        assert "Could not parse line number" in caplog.text

    def test_never_raises_on_garbage(self):
        err = ScriptRuntimeError("::::")
        err.call_stack = object()  # not iterable
        report = ScriptErrorReporter("x").report(err)
        assert report.frames == []
        assert report.line_number is None
