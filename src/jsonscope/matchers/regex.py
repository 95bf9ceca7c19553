"""
Regex match strategy.

The pattern is compiled once when the strategy is built. A pattern that does
not compile is logged and turns every comparison into a non-match; it never
fails the search.
"""

from __future__ import annotations

import re

import structlog

from ..errors import InvalidRegex
from .base import NO_MATCH, MatchOutcome, MatchStrategy, registry

logger = structlog.get_logger()


def compile_pattern(pattern: str, case_sensitive: bool = False) -> re.Pattern[str]:
    """Compile a search pattern. Raises InvalidRegex for malformed patterns."""
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise InvalidRegex(pattern, str(e)) from e


class RegexStrategy(MatchStrategy):
    """Regular expression search. Score 1 on a hit."""

    def __init__(self, query: str, case_sensitive: bool = False):
        super().__init__(query, case_sensitive)
        self.error: InvalidRegex | None = None
        self._pattern: re.Pattern[str] | None = None
        try:
            self._pattern = compile_pattern(query, case_sensitive)
        except InvalidRegex as e:
            self.error = e
            logger.warning("Invalid regex, treating as no match", pattern=query, reason=e.reason)

    @property
    def name(self) -> str:
        return "regex"

    @property
    def is_valid(self) -> bool:
        return self._pattern is not None

    def match(self, text: str) -> MatchOutcome:
        if self._pattern is None:
            return NO_MATCH
        spans = [m.span() for m in self._pattern.finditer(text)]
        if not spans:
            return NO_MATCH
        return MatchOutcome(matched=True, score=1.0, positions=[s for s in spans if s[1] > s[0]])


registry.register("regex", RegexStrategy)
