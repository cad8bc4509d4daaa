"""Source locator - failing line number and surrounding code window.

Interpreter messages are decorated as ``"<source>:<line>: <message>"``,
e.g. ``"test.lua:5: attempt to call a nil value (global 'prnt')"`` or
``"(string):1: attempt to call global 'missing_func' (a nil value)"``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from scripthost.errors import SourceUnavailableError


@dataclass(frozen=True)
class ContextLine:
    number: int          # 1-based
    text: str
    is_error: bool


@dataclass(frozen=True)
class CodeContext:
    """A contiguous slice of source lines around a failing line."""
    line_number: int
    lines: tuple[ContextLine, ...]

    def render(self, script_name: str) -> list[str]:
        out = [f"--- Error near line {self.line_number} in {script_name} ---"]
        for cl in self.lines:
            marker = ">>>" if cl.is_error else "   "
            out.append(f"{marker} {cl.number:03d}: {cl.text}")
        out.append("--- End of code context ---")
        return out


def parse_line_number(message: str | None) -> int | None:
    """Line number between the first and second colon, or None."""
    if not message:
        return None

    first = message.find(":")
    if first <= 0:
        return None
    second = message.find(":", first + 1)
    if second < 0:
        return None

    try:
        return int(message[first + 1:second].strip())
    except ValueError:
        return None


def extract_code_context(
    source_text: str | None,
    line_number: int | None,
    before: int = 2,
    after: int = 2,
) -> CodeContext | None:
    """Window of lines around line_number (1-based), clamped to the file."""
    if not source_text or line_number is None or line_number < 1:
        return None

    lines = source_text.split("\n")
    if line_number > len(lines):
        return None

    start = max(0, line_number - 1 - before)
    end = min(len(lines) - 1, line_number - 1 + after)
    window = tuple(
        ContextLine(number=i + 1, text=lines[i].rstrip(), is_error=(i + 1 == line_number))
        for i in range(start, end + 1)
    )
    return CodeContext(line_number=line_number, lines=window)


def read_source(path: str | Path | None) -> str:
    """Default source provider: full text of a script file.

    Raises SourceUnavailableError if the file is missing or unreadable.
    """
    if not path:
        raise SourceUnavailableError("No script path given")
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise SourceUnavailableError(f"Cannot read {p}: {e}") from e
