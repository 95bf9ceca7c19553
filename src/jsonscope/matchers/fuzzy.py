"""
Fuzzy match strategy.

Subsequence heuristic, not edit distance: walk the haystack once, advancing a
cursor into the needle on every equal character. The score is the fraction of
needle characters found in order. Extra haystack characters are tolerated,
out-of-order needle characters are not. O(len(haystack)).
"""

from __future__ import annotations

from .base import NO_MATCH, MatchOutcome, MatchStrategy, registry

FUZZY_SCORE = 0.8


def _scan(haystack: str, needle: str) -> list[int]:
    """Haystack indices consumed by the in-order scan."""
    hits: list[int] = []
    cursor = 0
    for i, ch in enumerate(haystack):
        if cursor >= len(needle):
            break
        if ch == needle[cursor]:
            hits.append(i)
            cursor += 1
    return hits


def fuzzy_score(haystack: str, needle: str) -> float:
    """Fraction of needle characters found in order in haystack. 0.0 for an empty needle."""
    if not needle:
        return 0.0
    return len(_scan(haystack, needle)) / len(needle)


def fuzzy_match(haystack: str, needle: str, threshold: float = 0.6) -> bool:
    """True if enough of needle appears, in order, in haystack. Comparison is exact-case."""
    if not needle:
        return False
    return fuzzy_score(haystack, needle) >= threshold


class FuzzyStrategy(MatchStrategy):
    """Fuzzy subsequence search. Score 0.8 on a hit."""

    def __init__(self, query: str, case_sensitive: bool = False, threshold: float = 0.6):
        super().__init__(query, case_sensitive)
        self.threshold = threshold
        self._needle = self.normalize(query)

    @property
    def name(self) -> str:
        return "fuzzy"

    def match(self, text: str) -> MatchOutcome:
        haystack = self.normalize(text)
        if not fuzzy_match(haystack, self._needle, self.threshold):
            return NO_MATCH
        positions = [(i, i + 1) for i in _scan(haystack, self._needle)]
        return MatchOutcome(matched=True, score=FUZZY_SCORE, positions=positions)


registry.register("fuzzy", FuzzyStrategy)
