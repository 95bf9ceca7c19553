"""
Core search engine for jsonscope.

Implements:
- Mode dispatch: simple / regex / fuzzy text matching, or JSONPath selection
- Depth-first traversal scoring keys, string values and paths
- Stable ranking by score and per-call statistics

Every call builds its own results and stats; nothing is cached between calls
and the input document is never modified.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum

import structlog

from .config import get_config
from .dom import (
    STRING,
    JsonValue,
    Segment,
    ancestor_paths,
    iter_children,
    segment_label,
    to_json_path,
    to_path,
    value_type,
)
from .errors import InvalidPathSyntax
from .jsonpath.evaluator import tokenize_and_evaluate
from .matchers import fuzzy as _fuzzy  # noqa: F401 - ensure fuzzy mode is registered
from .matchers import regex as _regex  # noqa: F401 - ensure regex mode is registered
from .matchers import simple as _simple  # noqa: F401 - ensure simple mode is registered
from .matchers.base import MatchStrategy, registry

logger = structlog.get_logger()

ROOT_KEY = "root"


class SearchMode(StrEnum):
    SIMPLE = "simple"
    REGEX = "regex"
    FUZZY = "fuzzy"
    JSONPATH = "jsonpath"


@dataclass
class SearchOptions:
    """What to search for and where. Unset tunables are filled from config."""
    query: str
    mode: SearchMode | str = SearchMode.SIMPLE
    case_sensitive: bool | None = None
    search_in_keys: bool | None = None
    search_in_values: bool | None = None
    search_in_paths: bool | None = None
    search_by_type: str | list[str] | None = None
    max_depth: int | None = None
    fuzzy_threshold: float | None = None
    include_ancestors: bool = False
    limit: int | None = None

    def __post_init__(self):
        self.mode = SearchMode(self.mode)
        cfg = get_config().search
        if self.case_sensitive is None:
            self.case_sensitive = cfg.case_sensitive
        if self.search_in_keys is None:
            self.search_in_keys = cfg.search_in_keys
        if self.search_in_values is None:
            self.search_in_values = cfg.search_in_values
        if self.search_in_paths is None:
            self.search_in_paths = cfg.search_in_paths
        if self.max_depth is None:
            self.max_depth = cfg.max_depth
        if self.fuzzy_threshold is None:
            self.fuzzy_threshold = cfg.fuzzy_threshold
        if self.limit is None:
            self.limit = cfg.limit

    @property
    def allowed_types(self) -> frozenset[str] | None:
        if self.search_by_type is None:
            return None
        if isinstance(self.search_by_type, str):
            return frozenset([self.search_by_type])
        return frozenset(self.search_by_type)


@dataclass(frozen=True)
class MatchInfo:
    """Which parts of a node matched."""
    in_key: bool = False
    in_value: bool = False
    in_path: bool = False
    matched_text: str | None = None
    positions: list[tuple[int, int]] = field(default_factory=list)


@dataclass(frozen=True)
class SearchContext:
    ancestors: list[str] = field(default_factory=list)  # jsonPaths, root first


@dataclass(frozen=True)
class SearchResult:
    """One matched node. value is the node itself, not a copy."""
    path: str
    json_path: str
    key: str
    value: JsonValue
    parent_path: str
    depth: int
    type: str
    score: float
    matches: MatchInfo
    segments: tuple[Segment, ...] = ()
    context: SearchContext | None = None


@dataclass
class SearchStats:
    """Aggregates for one search call."""
    mode: str
    total_matches: int = 0
    matches_by_type: dict[str, int] = field(default_factory=dict)
    matches_by_depth: dict[int, int] = field(default_factory=dict)
    max_depth: int = 0
    search_time: float = 0.0  # milliseconds
    truncated: bool = False

    def record(self, result: SearchResult) -> None:
        self.total_matches += 1
        self.matches_by_type[result.type] = self.matches_by_type.get(result.type, 0) + 1
        self.matches_by_depth[result.depth] = self.matches_by_depth.get(result.depth, 0) + 1


@dataclass
class SearchResponse:
    results: list[SearchResult]
    stats: SearchStats

    def __iter__(self):
        # Allows `results, stats = search(...)`
        yield self.results
        yield self.stats


def build_result(
    value: JsonValue,
    segments: tuple[Segment, ...],
    score: float,
    matches: MatchInfo,
    include_ancestors: bool = False,
) -> SearchResult:
    """Assemble a SearchResult for the node at segments."""
    return SearchResult(
        path=to_path(segments),
        json_path=to_json_path(segments),
        key=segment_label(segments[-1]) if segments else ROOT_KEY,
        value=value,
        parent_path=to_path(segments[:-1]),
        depth=len(segments),
        type=value_type(value),
        score=score,
        matches=matches,
        segments=segments,
        context=SearchContext(ancestors=ancestor_paths(segments)) if include_ancestors else None,
    )


def create_strategy(options: SearchOptions) -> MatchStrategy:
    """Build the text matcher for a non-JSONPath search."""
    kwargs = {}
    if options.mode == SearchMode.FUZZY:
        kwargs["threshold"] = options.fuzzy_threshold
    return registry.create(str(options.mode), options.query, bool(options.case_sensitive), **kwargs)


class _Limit(Exception):
    """Raised inside traversal once the result limit is reached."""


def _search_jsonpath(root: JsonValue, options: SearchOptions, stats: SearchStats) -> list[SearchResult]:
    try:
        matches = tokenize_and_evaluate(root, options.query)
    except InvalidPathSyntax as e:
        logger.warning("Invalid JSONPath, returning no results", query=options.query, reason=e.reason)
        return []

    results: list[SearchResult] = []
    for match in matches:
        if len(results) >= options.limit:
            stats.truncated = True
            break
        result = build_result(
            match.value,
            tuple(match.path),
            score=1.0,
            matches=MatchInfo(in_path=True),
            include_ancestors=options.include_ancestors,
        )
        results.append(result)
        stats.record(result)
        stats.max_depth = max(stats.max_depth, result.depth)
    return results


def _search_text(root: JsonValue, options: SearchOptions, stats: SearchStats) -> list[SearchResult]:
    strategy = create_strategy(options)
    allowed = options.allowed_types
    max_depth = options.max_depth
    limit = options.limit
    results: list[SearchResult] = []

    def visit(value: JsonValue, segments: tuple[Segment, ...]) -> None:
        depth = len(segments)
        if max_depth is not None and depth > max_depth:
            return
        if len(results) >= limit:
            stats.truncated = True
            raise _Limit

        stats.max_depth = max(stats.max_depth, depth)
        node_type = value_type(value)

        # Type filtering drops the node's own result, never its subtree
        if allowed is None or node_type in allowed:
            score = 0.0
            in_key = in_value = in_path = False
            matched_text = None
            positions: list[tuple[int, int]] = []

            if options.search_in_keys:
                # Same label the result reports: the key, "[i]" for an element, "root" at the top
                key = segment_label(segments[-1]) if segments else ROOT_KEY
                outcome = strategy.match(key)
                if outcome.matched:
                    in_key = True
                    score += outcome.score
                    matched_text, positions = key, outcome.positions

            if options.search_in_values and node_type == STRING:
                outcome = strategy.match(value)
                if outcome.matched:
                    in_value = True
                    score += outcome.score
                    matched_text, positions = value, outcome.positions

            if options.search_in_paths:
                json_path = to_json_path(segments)
                outcome = strategy.match(json_path)
                if outcome.matched:
                    in_path = True
                    score += outcome.score
                    matched_text, positions = json_path, outcome.positions

            if in_key or in_value or in_path:
                result = build_result(
                    value,
                    segments,
                    score=score,
                    matches=MatchInfo(
                        in_key=in_key,
                        in_value=in_value,
                        in_path=in_path,
                        matched_text=matched_text,
                        positions=positions,
                    ),
                    include_ancestors=options.include_ancestors,
                )
                results.append(result)
                stats.record(result)

        for seg, child in iter_children(value):
            visit(child, (*segments, seg))

    try:
        visit(root, ())
    except _Limit:
        logger.debug("Search stopped at result limit", limit=limit)
    return results


def search(root: JsonValue, options: SearchOptions) -> SearchResponse:
    """
    Search a JSON document.

    Returns results ranked by descending score (ties keep document order)
    together with statistics for the call. Invalid JSONPath queries and
    invalid regular expressions produce zero results, never an exception.
    """
    start = time.perf_counter()
    stats = SearchStats(mode=str(options.mode))

    if options.mode == SearchMode.JSONPATH:
        results = _search_jsonpath(root, options, stats)
    else:
        results = _search_text(root, options, stats)

    # list.sort is stable, so equal scores stay in traversal order
    results.sort(key=lambda r: r.score, reverse=True)

    stats.search_time = (time.perf_counter() - start) * 1000
    logger.debug(
        "Search finished",
        mode=stats.mode,
        matches=stats.total_matches,
        truncated=stats.truncated,
        ms=round(stats.search_time, 3),
    )
    return SearchResponse(results=results, stats=stats)
