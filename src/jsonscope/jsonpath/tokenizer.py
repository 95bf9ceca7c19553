"""
JSONPath tokenizer.

Lexes a $-rooted query into a flat list of tokens. The dialect is small:
.name  ..  .*  [*]  [n]  ['name']  ["name"]  [start:end:step]  [?(@.prop op literal)]

Bracket bodies are classified in this order: "*", contains "?", contains ":",
all digits, quoted. Anything else is dropped without error, so not every
character of a query necessarily ends up in a token.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TypeAlias

from ..errors import InvalidPathSyntax
from .comparison import Comparison, parse_comparison

_INDEX = re.compile(r"^\d+$")
_INT = re.compile(r"^[+-]?\d+")


@dataclass(frozen=True)
class Root:
    pass


@dataclass(frozen=True)
class Property:
    name: str


@dataclass(frozen=True)
class Index:
    index: int


@dataclass(frozen=True)
class Wildcard:
    pass


@dataclass(frozen=True)
class RecursiveDescent:
    pass


@dataclass(frozen=True)
class Filter:
    expression: str
    comparison: Comparison | None


@dataclass(frozen=True)
class Slice:
    start: int | None = None
    end: int | None = None
    step: int | None = None


PathToken: TypeAlias = Root | Property | Index | Wildcard | RecursiveDescent | Filter | Slice


def _parse_int(part: str) -> int | None:
    """Leading integer of a slice part; empty or non-numeric parts mean "use the default"."""
    match = _INT.match(part.strip())
    return int(match.group(0)) if match else None


def parse_slice(body: str) -> Slice:
    parts = body.split(":")
    start = _parse_int(parts[0]) if len(parts) > 0 else None
    end = _parse_int(parts[1]) if len(parts) > 1 else None
    step = _parse_int(parts[2]) if len(parts) > 2 else None
    return Slice(start=start, end=end, step=step)


def _classify_bracket(body: str) -> PathToken | None:
    if body == "*":
        return Wildcard()
    if "?" in body:
        return Filter(expression=body, comparison=parse_comparison(body))
    if ":" in body:
        return parse_slice(body)
    if _INDEX.match(body):
        return Index(int(body))
    if body.startswith(("'", '"')):
        return Property(body[1:-1])
    return None


def tokenize(path: str) -> list[PathToken]:
    """
    Split a JSONPath query into tokens.

    Raises InvalidPathSyntax if the query does not start with "$".
    """
    if not path.startswith("$"):
        raise InvalidPathSyntax(path)

    tokens: list[PathToken] = [Root()]
    i = 1
    n = len(path)

    while i < n:
        ch = path[i]
        if ch == ".":
            i += 1
            if i < n and path[i] == ".":
                tokens.append(RecursiveDescent())
                i += 1
                # "..name" and "..*" carry their selector without a second dot
                if i < n and path[i] == "[":
                    continue
            if i < n and path[i] == "*":
                tokens.append(Wildcard())
                i += 1
            else:
                start = i
                while i < n and path[i] not in ".[":
                    i += 1
                if i > start:
                    tokens.append(Property(path[start:i]))
        elif ch == "[":
            i += 1
            depth = 1
            start = i
            while i < n and depth > 0:
                if path[i] == "[":
                    depth += 1
                elif path[i] == "]":
                    depth -= 1
                i += 1
            # i sits just past the closing bracket, or at n if unclosed
            body = path[start:i - 1] if depth == 0 else path[start:i]
            token = _classify_bracket(body)
            if token is not None:
                tokens.append(token)
        else:
            i += 1

    return tokens
