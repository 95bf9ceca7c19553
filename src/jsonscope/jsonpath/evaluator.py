"""
JSONPath evaluator.

Consumes tokens one at a time against a (value, path) pair; when the tokens
run out the pair is emitted. Results come out in document order. Selecting
something that is not there yields nothing rather than an error.

Slices follow start:end:step with start=0, end=len, step=1 defaults. Negative
bounds count from the end of the array; a non-positive step selects nothing.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..dom import JsonValue, Segment, iter_children, to_path
from .tokenizer import (
    Filter,
    Index,
    PathToken,
    Property,
    RecursiveDescent,
    Root,
    Slice,
    Wildcard,
    tokenize,
)


@dataclass
class PathMatch:
    """A value selected by a query, with the segments that lead to it."""
    value: JsonValue
    path: list[Segment] = field(default_factory=list)

    @property
    def canonical(self) -> str:
        return to_path(self.path)


def _slice_indices(token: Slice, length: int) -> range:
    step = 1 if token.step is None else token.step
    if step <= 0:
        return range(0)

    start = 0 if token.start is None else token.start
    end = length if token.end is None else token.end
    if start < 0:
        start = max(0, length + start)
    if end < 0:
        end = max(0, length + end)
    return range(start, min(end, length), step)


def evaluate(root: JsonValue, tokens: Sequence[PathToken]) -> list[PathMatch]:
    """Run a token list against root."""
    results: list[PathMatch] = []

    def traverse(value: JsonValue, remaining: Sequence[PathToken], path: list[Segment]) -> None:
        if not remaining:
            results.append(PathMatch(value=value, path=path))
            return

        token, rest = remaining[0], remaining[1:]

        if isinstance(token, Root):
            traverse(value, rest, [])

        elif isinstance(token, Property):
            if isinstance(value, dict) and token.name in value:
                traverse(value[token.name], rest, [*path, token.name])

        elif isinstance(token, Index):
            if isinstance(value, list) and 0 <= token.index < len(value):
                traverse(value[token.index], rest, [*path, token.index])

        elif isinstance(token, Wildcard):
            for seg, child in iter_children(value):
                traverse(child, rest, [*path, seg])

        elif isinstance(token, RecursiveDescent):
            traverse(value, rest, path)
            # Re-apply the full remaining list, this token included, one level down
            for seg, child in iter_children(value):
                traverse(child, remaining, [*path, seg])

        elif isinstance(token, Filter):
            if isinstance(value, list) and token.comparison is not None:
                for i, item in enumerate(value):
                    if token.comparison.test(item):
                        traverse(item, rest, [*path, i])

        elif isinstance(token, Slice):
            if isinstance(value, list):
                for i in _slice_indices(token, len(value)):
                    traverse(value[i], rest, [*path, i])

    traverse(root, tokens, [])
    return results


def tokenize_and_evaluate(root: JsonValue, query: str) -> list[PathMatch]:
    """
    Evaluate a JSONPath query string against root.

    Raises InvalidPathSyntax for queries that do not start with "$".
    """
    return evaluate(root, tokenize(query))
