"""
DOM - JSON value model for jsonscope

A document is whatever json.loads returns. Nothing here mutates a value;
helpers only read the tree and build path strings for it.

A path is a sequence of segments: str for an object key, int for an array
index. Two string renderings exist:
- canonical path: "a.b[2]", "[0].name", "" for the root
- jsonPath: the canonical path rooted at "$" ("$.a.b[2]", "$[0].name", "$")

Keys that would be ambiguous in dotted form (empty, or containing ".", "[",
"]", quotes) are written in quoted bracket form: "a['x.y']".
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TypeAlias

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
Segment: TypeAlias = str | int

# Result "type" names, matching the vocabulary callers filter on
NULL = "null"
ARRAY = "array"
OBJECT = "object"
STRING = "string"
NUMBER = "number"
BOOLEAN = "boolean"

VALUE_TYPES = (NULL, ARRAY, OBJECT, STRING, NUMBER, BOOLEAN)

_UNSAFE_KEY_CHARS = frozenset(".[]'\"")


def value_type(value: JsonValue) -> str:
    """Classify a value. bool is checked before int since bool subclasses int."""
    if value is None:
        return NULL
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, (int, float)):
        return NUMBER
    if isinstance(value, str):
        return STRING
    if isinstance(value, list):
        return ARRAY
    if isinstance(value, dict):
        return OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def is_container(value: JsonValue) -> bool:
    return isinstance(value, (dict, list))


def iter_children(value: JsonValue) -> Iterator[tuple[Segment, JsonValue]]:
    """Yield (segment, child) in document order: keys by insertion, indices ascending."""
    if isinstance(value, dict):
        yield from value.items()
    elif isinstance(value, list):
        yield from enumerate(value)


def _format_key(key: str) -> str:
    if key and not (_UNSAFE_KEY_CHARS & set(key)):
        return key
    quote = '"' if "'" in key else "'"
    return f"[{quote}{key}{quote}]"


def to_path(segments: Sequence[Segment]) -> str:
    """Canonical dot/bracket form of a path."""
    out = ""
    for seg in segments:
        if isinstance(seg, int):
            out += f"[{seg}]"
            continue
        formatted = _format_key(seg)
        if formatted.startswith("[") or not out:
            out += formatted
        else:
            out += "." + formatted
    return out


def to_json_path(segments: Sequence[Segment]) -> str:
    """The $-rooted form of a path."""
    path = to_path(segments)
    if not path:
        return "$"
    if path.startswith("["):
        return "$" + path
    return "$." + path


def segment_label(segment: Segment) -> str:
    """Display label for the last step of a path: the key, or "[i]" for an index."""
    if isinstance(segment, int):
        return f"[{segment}]"
    return segment


def ancestor_paths(segments: Sequence[Segment]) -> list[str]:
    """jsonPath of every strict ancestor, root first."""
    return [to_json_path(segments[:i]) for i in range(len(segments))]


def parse_path(text: str) -> list[Segment]:
    """
    Parse a canonical path or jsonPath back into segments.

    Accepts an optional leading "$", dotted keys, [i] indices and quoted
    bracket keys. Raises ValueError on malformed brackets.
    """
    segments: list[Segment] = []
    i = 1 if text.startswith("$") else 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == ".":
            i += 1
            continue
        if ch == "[":
            close = _find_bracket_end(text, i)
            body = text[i + 1:close]
            if body.isdigit():
                segments.append(int(body))
            elif len(body) >= 2 and body[0] == body[-1] and body[0] in "'\"":
                segments.append(body[1:-1])
            else:
                raise ValueError(f"Malformed bracket segment [{body}] in path {text!r}")
            i = close + 1
            continue
        start = i
        while i < n and text[i] not in ".[":
            i += 1
        segments.append(text[start:i])
    return segments


def _find_bracket_end(text: str, start: int) -> int:
    quote = None
    for i in range(start + 1, len(text)):
        ch = text[i]
        if quote:
            if ch == quote:
                quote = None
        elif ch in "'\"":
            quote = ch
        elif ch == "]":
            return i
    raise ValueError(f"Unclosed bracket in path {text!r}")


def get_value_at_path(root: JsonValue, path: str | Sequence[Segment]) -> JsonValue:
    """
    Follow a path from root and return the value found there.

    Raises KeyError when a step does not exist. An empty path returns root.
    """
    segments = parse_path(path) if isinstance(path, str) else path
    current = root
    for seg in segments:
        if isinstance(seg, int) and isinstance(current, list):
            if 0 <= seg < len(current):
                current = current[seg]
                continue
        elif isinstance(seg, str) and isinstance(current, dict):
            if seg in current:
                current = current[seg]
                continue
        raise KeyError(f"No value at {to_json_path(list(segments))}: missing step {segment_label(seg)}")
    return current
