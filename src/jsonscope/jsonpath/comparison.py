"""
Filter expressions for JSONPath [?...] brackets.

Only a single condition is supported: @.<prop> <op> <literal>. The parser is
a hand scanner producing a Comparison; anything else parses to None, which
the evaluator treats as "matches nothing".
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import StrEnum

from ..dom import JsonValue


class Op(StrEnum):
    EQ = "=="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="


# Longest first so ">=" is not read as ">"
_OPERATORS: list[tuple[str, Op]] = [
    ("==", Op.EQ),
    ("!=", Op.NE),
    (">=", Op.GE),
    ("<=", Op.LE),
    ("=", Op.EQ),
    (">", Op.GT),
    ("<", Op.LT),
]

_EQUALITY = (Op.EQ, Op.NE)


@dataclass(frozen=True)
class Comparison:
    """@.prop op literal, with the literal already unquoted."""
    prop: str
    op: Op
    literal: str

    def test(self, item: JsonValue) -> bool:
        """True if item is an object holding prop and the comparison holds."""
        if not isinstance(item, dict) or self.prop not in item:
            return False
        actual = item[self.prop]
        if self.op in _EQUALITY:
            equal = stringify(actual) == self.literal
            return equal if self.op is Op.EQ else not equal

        left = to_number(actual)
        right = to_number(self.literal)
        if self.op is Op.GT:
            return left > right
        if self.op is Op.LT:
            return left < right
        if self.op is Op.GE:
            return left >= right
        return left <= right


def stringify(value: JsonValue) -> str:
    """String form used by equality filters: true/false/null, integral floats without .0."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def to_number(value: JsonValue) -> float:
    """Numeric coercion for ordering filters. Non-numeric input becomes NaN (never compares true)."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def _unquote(literal: str) -> str:
    if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "'\"":
        return literal[1:-1]
    return literal


def parse_comparison(expression: str) -> Comparison | None:
    """
    Parse the body of a filter bracket, e.g. "?(@.price < 10)" or "?@.name=='x'".

    Returns None when the body is not a single @.prop op literal condition.
    """
    text = expression.strip()
    if text.startswith("?"):
        text = text[1:].strip()
    while text.startswith("(") and text.endswith(")"):
        text = text[1:-1].strip()

    if not text.startswith("@."):
        return None
    i = 2
    start = i
    while i < len(text) and (text[i].isalnum() or text[i] == "_"):
        i += 1
    prop = text[start:i]
    if not prop:
        return None

    rest = text[i:].lstrip()
    for symbol, op in _OPERATORS:
        if rest.startswith(symbol):
            literal = rest[len(symbol):].strip()
            if not literal:
                return None
            return Comparison(prop=prop, op=op, literal=_unquote(literal))
    return None
