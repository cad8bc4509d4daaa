"""Stack reconstructor - renders interpreter call stacks."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional, Sequence

from scripthost.interpreter import CallStackFrame, SourceRef

ANONYMOUS = "<anonymous_function>"
UNKNOWN_LOCATION = "<unknown_location>"
SCRIPT_LEVEL = "<script_level>"


@dataclass(frozen=True)
class RenderedFrame:
    function: str
    location: str
    is_error_site: bool = False

    def render(self) -> str:
        highlight = "[ERROR] " if self.is_error_site else "        "
        return f"  {highlight}at {self.function} ({self.location})"


def render_location(location: Optional[SourceRef]) -> str:
    if location is None:
        return UNKNOWN_LOCATION
    return f"{PurePath(str(location.source_id)).name}:{location.line}"


def render_stack(
    call_stack: Sequence[CallStackFrame] | None,
    script_name: str,
    error_line: int | None,
) -> list[RenderedFrame]:
    """Frames innermost first; the first one is flagged as the error site.

    With no captured frames but a known line, a single script-level frame is
    synthesized. With neither, the result is empty.
    """
    if call_stack:
        return [
            RenderedFrame(
                function=frame.name or ANONYMOUS,
                location=render_location(frame.location),
                is_error_site=(i == 0),
            )
            for i, frame in enumerate(call_stack)
        ]
    if error_line is not None:
        return [RenderedFrame(SCRIPT_LEVEL, f"{script_name}:{error_line}", True)]
    return []


def format_stack(frames: Sequence[RenderedFrame]) -> list[str]:
    lines = ["Stack trace:"]
    if not frames:
        lines.append("  <Stack trace not available>")
    else:
        lines.extend(f.render() for f in frames)
    return lines
