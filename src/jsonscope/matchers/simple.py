"""
Simple match strategy: case-normalized substring containment.
"""

from __future__ import annotations

from .base import NO_MATCH, MatchOutcome, MatchStrategy, registry


class SimpleStrategy(MatchStrategy):
    """Substring search. Score 1 on a hit."""

    def __init__(self, query: str, case_sensitive: bool = False):
        super().__init__(query, case_sensitive)
        self._needle = self.normalize(query)

    @property
    def name(self) -> str:
        return "simple"

    def match(self, text: str) -> MatchOutcome:
        haystack = self.normalize(text)
        if self._needle not in haystack:
            return NO_MATCH
        return MatchOutcome(matched=True, score=1.0, positions=self._occurrences(haystack))

    def _occurrences(self, haystack: str) -> list[tuple[int, int]]:
        if not self._needle:
            return []
        spans = []
        size = len(self._needle)
        start = haystack.find(self._needle)
        while start != -1:
            spans.append((start, start + size))
            start = haystack.find(self._needle, start + size)
        return spans


registry.register("simple", SimpleStrategy)
