"""
Base match strategy interface and registry.

Each text search mode (simple, regex, fuzzy) implements this interface. A
strategy is bound to one query when constructed, so any preparation (regex
compilation, case folding) happens once per search instead of per node.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MatchOutcome:
    """Result of testing one string against a strategy."""
    matched: bool
    score: float = 0.0
    positions: list[tuple[int, int]] = field(default_factory=list)  # (start, end) spans in the tested text


NO_MATCH = MatchOutcome(matched=False)


class MatchStrategy(ABC):
    """Base class for text matching modes."""

    def __init__(self, query: str, case_sensitive: bool = False):
        self.query = query
        self.case_sensitive = case_sensitive

    @property
    @abstractmethod
    def name(self) -> str:
        """Mode name as used in SearchOptions.mode."""
        ...

    @abstractmethod
    def match(self, text: str) -> MatchOutcome:
        """Test text against the query."""
        ...

    def normalize(self, text: str) -> str:
        """Case-fold text unless the search is case sensitive."""
        return text if self.case_sensitive else text.lower()

    def highlight(self, text: str, open_mark: str = "[[", close_mark: str = "]]") -> str:
        """
        Wrap every matched span of text in markers.
        Returns text unchanged when it does not match.
        """
        outcome = self.match(text)
        if not outcome.matched or not outcome.positions:
            return text
        return wrap_spans(text, outcome.positions, open_mark, close_mark)


def wrap_spans(text: str, spans: list[tuple[int, int]], open_mark: str, close_mark: str) -> str:
    """Insert markers around spans. Adjacent or overlapping spans are merged."""
    merged: list[tuple[int, int]] = []
    for start, end in sorted(spans):
        if end <= start:
            continue
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(end, merged[-1][1]))
        else:
            merged.append((start, end))

    pieces: list[str] = []
    cursor = 0
    for start, end in merged:
        pieces.append(text[cursor:start])
        pieces.append(open_mark + text[start:end] + close_mark)
        cursor = end
    pieces.append(text[cursor:])
    return "".join(pieces)


class StrategyRegistry:
    """Registry of match strategy classes keyed by mode name."""

    def __init__(self):
        self._by_name: dict[str, type[MatchStrategy]] = {}

    def register(self, name: str, strategy_cls: type[MatchStrategy]) -> type[MatchStrategy]:
        """Register a strategy class under a mode name. First registration wins."""
        self._by_name.setdefault(name, strategy_cls)
        return strategy_cls

    def get(self, name: str) -> type[MatchStrategy] | None:
        return self._by_name.get(name)

    def create(self, name: str, query: str, case_sensitive: bool = False, **kwargs) -> MatchStrategy:
        """Instantiate the strategy for a mode. Raises KeyError for unknown modes."""
        strategy_cls = self._by_name.get(name)
        if strategy_cls is None:
            raise KeyError(f"Unknown search mode: {name!r}")
        return strategy_cls(query, case_sensitive=case_sensitive, **kwargs)

    @property
    def names(self) -> list[str]:
        return list(self._by_name)


# Global registry instance
registry = StrategyRegistry()
