"""
Unit tests for the simple and regex match strategies and the registry.
"""

import pytest

from jsonscope.errors import InvalidRegex
from jsonscope.matchers.base import StrategyRegistry, registry, wrap_spans
from jsonscope.matchers.fuzzy import FuzzyStrategy
from jsonscope.matchers.regex import RegexStrategy, compile_pattern
from jsonscope.matchers.simple import SimpleStrategy


class TestSimpleStrategy:
    def test_substring_hit(self):
        outcome = SimpleStrategy("ada").match("Ada Lovelace")
        assert outcome.matched
        assert outcome.score == 1.0
        assert outcome.positions == [(0, 3)]

    def test_miss(self):
        outcome = SimpleStrategy("bob").match("Ada")
        assert not outcome.matched
        assert outcome.score == 0.0

    def test_case_sensitive(self):
        assert not SimpleStrategy("ada", case_sensitive=True).match("Ada").matched
        assert SimpleStrategy("Ada", case_sensitive=True).match("Ada").matched

    def test_all_occurrences(self):
        assert SimpleStrategy("ab").match("abcab").positions == [(0, 2), (3, 5)]

    def test_occurrences_do_not_overlap(self):
        assert SimpleStrategy("aa").match("aaaa").positions == [(0, 2), (2, 4)]

    def test_highlight(self):
        assert SimpleStrategy("o").highlight("foo", "<", ">") == "f<oo>"


class TestRegexStrategy:
    def test_pattern_hit(self):
        outcome = RegexStrategy(r"\d+").match("order 42 of 7")
        assert outcome.matched
        assert outcome.positions == [(6, 8), (12, 13)]

    def test_ignore_case_by_default(self):
        assert RegexStrategy("^ada").match("Ada").matched

    def test_case_sensitive(self):
        assert not RegexStrategy("^ada", case_sensitive=True).match("Ada").matched

    def test_invalid_pattern_never_matches(self):
        strategy = RegexStrategy("[unclosed")
        assert not strategy.is_valid
        assert isinstance(strategy.error, InvalidRegex)
        assert not strategy.match("[unclosed").matched

    def test_empty_match_counts_as_hit(self):
        outcome = RegexStrategy("x*").match("abc")
        assert outcome.matched
        assert outcome.positions == []

    def test_compile_pattern_raises(self):
        with pytest.raises(InvalidRegex) as exc:
            compile_pattern("(")
        assert exc.value.pattern == "("


class TestRegistry:
    def test_builtin_modes(self):
        assert {"simple", "regex", "fuzzy"} <= set(registry.names)

    def test_create(self):
        assert isinstance(registry.create("simple", "q"), SimpleStrategy)
        fuzzy = registry.create("fuzzy", "q", threshold=0.9)
        assert isinstance(fuzzy, FuzzyStrategy)
        assert fuzzy.threshold == 0.9

    def test_unknown_mode(self):
        with pytest.raises(KeyError):
            registry.create("soundex", "q")

    def test_first_registration_wins(self):
        local = StrategyRegistry()
        local.register("simple", SimpleStrategy)
        local.register("simple", RegexStrategy)
        assert local.get("simple") is SimpleStrategy


class TestWrapSpans:
    def test_merges_adjacent_spans(self):
        assert wrap_spans("abcd", [(0, 1), (1, 2)], "[", "]") == "[ab]cd"

    def test_skips_empty_spans(self):
        assert wrap_spans("abc", [(1, 1)], "[", "]") == "abc"

    def test_unsorted_input(self):
        assert wrap_spans("abcd", [(2, 3), (0, 1)], "<", ">") == "<a>b<c>d"
