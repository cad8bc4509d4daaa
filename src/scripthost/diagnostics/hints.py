"""Hint engine - heuristic remediation hints for common script errors.

Every rule is tested against the raw message; each rule that matches
contributes its own hint block.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

GLOBAL_PREFIX = "(global '"
FIELD_PREFIX = "(field '"


@dataclass(frozen=True)
class HintRule:
    needle: str
    summary: str
    advice: str
    exclude: str | None = None
    identifier_prefixes: tuple[str, ...] = ()

    def matches(self, message: str) -> bool:
        if self.needle not in message:
            return False
        return self.exclude is None or self.exclude not in message


@dataclass(frozen=True)
class Hint:
    summary: str
    advice: str
    identifiers: tuple[str, ...] = field(default_factory=tuple)

    def render(self) -> list[str]:
        lines = [f"[Hint] {self.summary}", f"       {self.advice}"]
        for ident in self.identifiers:
            lines.append(f"       The problematic identifier might be: '{ident}'")
        return lines


RULES: tuple[HintRule, ...] = (
    HintRule(
        needle="attempt to call a nil value",
        summary="Trying to call something that isn't a function.",
        advice="Check for typos in function names or if the variable holds the wrong value.",
        identifier_prefixes=(GLOBAL_PREFIX, FIELD_PREFIX),
    ),
    HintRule(
        needle="attempt to index a nil value",
        summary="Trying to access a field (e.g., table.field) or method on something that is nil.",
        advice="Check if the variable was assigned correctly before use.",
        identifier_prefixes=(FIELD_PREFIX, GLOBAL_PREFIX),
    ),
    HintRule(
        needle="attempt to perform arithmetic on",
        summary="Trying to do math (+, -, *, /) on a value that isn't a number (maybe nil or string).",
        advice="Ensure variables hold numbers. Use tonumber() to convert strings if needed.",
    ),
    HintRule(
        needle="attempt to concatenate",
        summary="Trying to join strings (..) with a value that isn't a string or number (maybe nil).",
        advice="Ensure variables hold strings/numbers. Use tostring() to convert if needed.",
    ),
    HintRule(
        needle="bad argument",
        summary="Called a function with the wrong type of argument (e.g., expected number, got string).",
        advice="Check the function's documentation or definition for required argument types.",
    ),
    HintRule(
        # "attempt to call a string/table/number value"
        needle="attempt to call a",
        exclude="nil value",
        summary="Trying to call something that is not a function (e.g., calling a string variable like a function).",
        advice="Make sure the variable you are calling actually holds a function.",
    ),
)


def extract_identifier(message: str, prefix: str, suffix: str = "'") -> str | None:
    """Text between prefix and the next suffix, or None."""
    start = message.find(prefix)
    if start < 0:
        return None
    start += len(prefix)
    end = message.find(suffix, start)
    if end <= start:
        return None
    return message[start:end]


def match_hints(message: str | None, rules: tuple[HintRule, ...] = RULES) -> list[Hint]:
    if not message:
        return []

    hints: list[Hint] = []
    for rule in rules:
        if not rule.matches(message):
            continue
        idents: list[str] = []
        for prefix in rule.identifier_prefixes:
            ident = extract_identifier(message, prefix)
            if ident and ident not in idents:
                idents.append(ident)
                logger.debug(f"Identifier extracted from script error: {ident!r}")
        hints.append(Hint(rule.summary, rule.advice, tuple(idents)))
    return hints
