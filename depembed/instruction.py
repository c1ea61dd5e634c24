"""Wildcard instructions used by Embed-Dependency clauses.

An instruction is written in the packager's pattern syntax:

    ``.``   literal dot
    ``*``   any run of characters
    ``?``   at most one character
    ``!``   (leading) negate the match

Every other character is passed to the regular expression unchanged, so
``compile|runtime`` works as an alternation. A pattern ending in ``.*`` also
matches its bare prefix, e.g. ``com.acme.*`` matches ``com.acme``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from depembed.exceptions import ConfigurationError

_NEGATION = "!"
_TRAILING_WILDCARD = r"\..*"


def _translate(expression: str) -> str:
    out: list[str] = []
    for ch in expression:
        if ch == ".":
            out.append(r"\.")
        elif ch == "*":
            out.append(".*")
        elif ch == "?":
            out.append(".?")
        else:
            out.append(ch)
    regex = "".join(out)
    if regex.endswith(_TRAILING_WILDCARD):
        regex += "|" + regex[: -len(_TRAILING_WILDCARD)]
    return regex


@dataclass(frozen=True)
class Instruction:
    """A compiled match pattern with its negation flag."""

    expression: str
    regex: re.Pattern[str]
    negated: bool = False

    @classmethod
    def compile(cls, expression: str) -> Instruction:
        return _compile(expression)

    def matches(self, value: str) -> bool:
        """Raw match of *value*, ignoring the negation flag."""
        return self.regex.fullmatch(value) is not None

    def accepts(self, value: str) -> bool:
        """Match of *value* with the negation flag applied."""
        return self.matches(value) != self.negated


@lru_cache(maxsize=256)
def _compile(expression: str) -> Instruction:
    negated = expression.startswith(_NEGATION)
    body = expression[len(_NEGATION):] if negated else expression
    try:
        regex = re.compile(_translate(body))
    except re.error as e:
        raise ConfigurationError(f"Invalid pattern '{expression}': {e}") from e
    return Instruction(expression=expression, regex=regex, negated=negated)
