"""
Error taxonomy for jsonscope.

Only InvalidPathSyntax ever leaves the tokenizer. InvalidRegex is raised by
strategy construction helpers and caught where the pattern is compiled.
An empty result set is never an error.
"""

from __future__ import annotations


class JsonScopeError(Exception):
    """Base class for all jsonscope errors."""


class InvalidPathSyntax(JsonScopeError, ValueError):
    """A JSONPath query that cannot be tokenized (e.g. missing leading $)."""

    def __init__(self, query: str, reason: str = "JSONPath must start with $"):
        super().__init__(f"{reason}: {query!r}")
        self.query = query
        self.reason = reason


class InvalidRegex(JsonScopeError, ValueError):
    """A regular expression pattern that does not compile."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid regular expression {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason
