"""Interpreter boundary types.

The interpreter itself is external. Adapters around it raise
ScriptRuntimeError when a script fails, carrying the interpreter's
decorated message and the captured call stack (innermost frame first).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class SourceRef:
    """A position inside a chunk of script source."""
    source_id: Any               # chunk name, file name or numeric index
    line: int


@dataclass(frozen=True)
class CallStackFrame:
    """One entry of the interpreter's captured call history."""
    name: Optional[str] = None
    location: Optional[SourceRef] = None


class ScriptRuntimeError(Exception):
    """Raised by interpreter adapters when script execution fails.

    Args:
        decorated_message: Pre-formatted message, usually
            ``"<source>:<line>: <message>"``.
        call_stack: Captured frames, innermost first.
    """

    def __init__(
        self,
        decorated_message: str,
        call_stack: list[CallStackFrame] | None = None,
    ) -> None:
        super().__init__(decorated_message)
        self.decorated_message = decorated_message
        self.call_stack: list[CallStackFrame] = list(call_stack or [])
