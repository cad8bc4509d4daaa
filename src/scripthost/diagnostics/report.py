"""Error diagnostics engine - structured reports for script failures.

Combines the source locator, stack reconstructor and hint engine into one
report per failure:

    <context> in script '<name>': <decorated message>
    --- Error near line N in <name> ---
    >>> 007: ...
    --- End of code context ---
    Stack trace:
      [ERROR] at func (file.lua:7)
    [Hint] ...

Every section is built independently. A section that cannot be produced is
left out; building the report never raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from scripthost.diagnostics.hints import Hint, match_hints
from scripthost.diagnostics.locator import (
    CodeContext,
    extract_code_context,
    parse_line_number,
    read_source,
)
from scripthost.diagnostics.stack import RenderedFrame, format_stack, render_stack
from scripthost.errors import SourceUnavailableError

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown script error"

SourceProvider = Callable[[Any], str]


@dataclass
class ErrorReport:
    """Diagnostic report for a single script failure."""
    context: str
    script_name: str
    message: str
    line_number: Optional[int] = None
    code_context: Optional[CodeContext] = None
    frames: list[RenderedFrame] = field(default_factory=list)
    hints: list[Hint] = field(default_factory=list)

    @property
    def header(self) -> str:
        return f"{self.context} in script '{self.script_name}': {self.message}"

    def lines(self) -> list[str]:
        out = [self.header]
        if self.code_context is not None:
            out.extend(self.code_context.render(self.script_name))
        out.extend(format_stack(self.frames))
        for hint in self.hints:
            out.extend(hint.render())
        return out

    def format(self) -> str:
        return "\n".join(self.lines())

    def to_dict(self) -> dict:
        return {
            "context": self.context,
            "script": self.script_name,
            "message": self.message,
            "line": self.line_number,
            "code_context": [
                {"line": cl.number, "text": cl.text, "error": cl.is_error}
                for cl in self.code_context.lines
            ] if self.code_context else None,
            "stack": [
                {"function": f.function, "location": f.location, "error": f.is_error_site}
                for f in self.frames
            ],
            "hints": [
                {"summary": h.summary, "advice": h.advice, "identifiers": list(h.identifiers)}
                for h in self.hints
            ],
        }


class ScriptErrorReporter:
    """Builds and logs error reports for one script.

    Args:
        script_name: Display name used in the header and fallback frame.
        script_path: File the script was loaded from, for code context.
        source_provider: Returns the file's text or raises
            SourceUnavailableError. Defaults to reading from disk.
        context_before: Source lines shown above the failing line.
        context_after: Source lines shown below the failing line.
        show_hints: Attach heuristic hints to reports.
    """

    def __init__(
        self,
        script_name: str,
        script_path: str | Path | None = None,
        source_provider: SourceProvider = read_source,
        context_before: int = 2,
        context_after: int = 2,
        show_hints: bool = True,
    ) -> None:
        self.script_name = script_name
        self.script_path = script_path
        self._source_provider = source_provider
        self._context_before = context_before
        self._context_after = context_after
        self._show_hints = show_hints

    def build_report(
        self,
        error: BaseException,
        context: str = "Error running script",
    ) -> ErrorReport:
        message = _decorated_message(error)
        report = ErrorReport(context=context, script_name=self.script_name, message=message)

        try:
            report.line_number = parse_line_number(message)
        except Exception as e:
            logger.warning(f"Could not parse line number for {self.script_name}: {e}")

        if report.line_number is not None:
            try:
                source = self._source_provider(self.script_path)
                report.code_context = extract_code_context(
                    source, report.line_number,
                    before=self._context_before, after=self._context_after,
                )
            except SourceUnavailableError as e:
                logger.debug(f"No code context for {self.script_name}: {e}")
            except Exception as e:
                logger.warning(
                    f"Could not read script file '{self.script_path}' to show error context: {e}"
                )

        try:
            report.frames = render_stack(
                getattr(error, "call_stack", None), self.script_name, report.line_number,
            )
        except Exception as e:
            logger.warning(f"Could not render stack trace for {self.script_name}: {e}")

        if self._show_hints:
            try:
                report.hints = match_hints(message)
            except Exception as e:
                logger.warning(f"Hint matching failed for {self.script_name}: {e}")

        return report

    def report(
        self,
        error: BaseException,
        context: str = "Error running script",
    ) -> ErrorReport:
        """Build a report and log every line of it at ERROR level."""
        report = self.build_report(error, context)
        for line in report.lines():
            logger.error(line)
        return report


def _decorated_message(error: BaseException) -> str:
    if hasattr(error, "decorated_message"):
        message = error.decorated_message
    else:
        message = str(error)

    if message is None:
        return UNKNOWN_ERROR
    if isinstance(message, (bytes, bytearray)):
        message = bytes(message).decode("utf-8", errors="replace")
    elif not isinstance(message, str):
        message = str(message)
    return message or UNKNOWN_ERROR
