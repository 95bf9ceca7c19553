"""
Tree pruning: rebuild a document keeping only search hits and their ancestors.

A matched node is kept whole, even when it is a container. Any other
container survives only if something below it survives. Array elements that
were pruned away but precede a survivor become None placeholders, so every
result path still resolves in the pruned tree. With compact_arrays=True they
are removed instead, which reads better on screen but shifts indices.
"""

from __future__ import annotations

from collections.abc import Iterable

from .core import SearchResult
from .dom import JsonValue, Segment, parse_path

_MISSING = object()


def _result_segments(result: SearchResult) -> tuple[Segment, ...]:
    """Segments of a result, recovered from its jsonPath when the record carries none."""
    if result.segments or result.json_path in ("", "$"):
        return tuple(result.segments)
    return tuple(parse_path(result.json_path))


def _inclusion_sets(results: Iterable[SearchResult]) -> tuple[set[tuple[Segment, ...]], set[tuple[Segment, ...]]]:
    """(matched paths, matched paths plus every ancestor prefix including the root)."""
    matched: set[tuple[Segment, ...]] = set()
    included: set[tuple[Segment, ...]] = set()
    for result in results:
        segments = _result_segments(result)
        matched.add(segments)
        for i in range(len(segments) + 1):
            included.add(segments[:i])
    return matched, included


def prune(root: JsonValue, results: list[SearchResult], compact_arrays: bool = False) -> JsonValue:
    """
    Return a new tree containing only matched nodes and their ancestors.

    With no results, root itself is returned. If none of the result paths
    exist in root, an empty container of root's kind is returned.
    """
    if not results:
        return root

    matched, included = _inclusion_sets(results)

    def rebuild(value: JsonValue, path: tuple[Segment, ...]) -> object:
        if path not in included:
            return _MISSING
        if path in matched:
            return value

        if isinstance(value, dict):
            kept_obj: dict[str, JsonValue] = {}
            for key, child in value.items():
                pruned = rebuild(child, (*path, key))
                if pruned is not _MISSING:
                    kept_obj[key] = pruned  # type: ignore[assignment]
            return kept_obj if kept_obj else _MISSING

        if isinstance(value, list):
            kept_list: list[JsonValue] = []
            pending_gap = 0
            for i, child in enumerate(value):
                pruned = rebuild(child, (*path, i))
                if pruned is _MISSING:
                    pending_gap += 1
                    continue
                if not compact_arrays:
                    kept_list.extend([None] * pending_gap)
                pending_gap = 0
                kept_list.append(pruned)  # type: ignore[arg-type]
            return kept_list if kept_list else _MISSING

        # A scalar on the inclusion list that is not itself matched cannot lead anywhere
        return _MISSING

    pruned_root = rebuild(root, ())
    if pruned_root is _MISSING:
        return [] if isinstance(root, list) else {}
    return pruned_root  # type: ignore[return-value]
