"""Script error diagnostics.

Turns interpreter exceptions into readable reports: source context around
the failing line, the reconstructed call stack, and remediation hints.
"""

from scripthost.diagnostics.hints import Hint, match_hints, extract_identifier
from scripthost.diagnostics.locator import CodeContext, parse_line_number, extract_code_context, read_source
from scripthost.diagnostics.report import ErrorReport, ScriptErrorReporter
from scripthost.diagnostics.stack import RenderedFrame, render_stack, format_stack

__all__ = [
    "Hint",
    "match_hints",
    "extract_identifier",
    "CodeContext",
    "parse_line_number",
    "extract_code_context",
    "read_source",
    "ErrorReport",
    "ScriptErrorReporter",
    "RenderedFrame",
    "render_stack",
    "format_stack",
]
