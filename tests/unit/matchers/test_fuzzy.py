"""
Unit tests for fuzzy matching.
"""

from jsonscope.matchers.fuzzy import FUZZY_SCORE, FuzzyStrategy, fuzzy_match, fuzzy_score


class TestFuzzyMatch:
    def test_in_order_letters_match(self):
        assert fuzzy_match("hello world", "hw", 0.5)

    def test_out_of_order_letters_fail(self):
        assert not fuzzy_match("hello", "oh", 0.6)

    def test_out_of_order_needle_scores_partial_credit(self):
        # "o" is found after the skipped "h", "h" never is: 1/2
        assert fuzzy_score("hello", "oh") == 0.5
        assert fuzzy_match("hello", "oh", 0.5)

    def test_exact_substring(self):
        assert fuzzy_match("category", "cat", 1.0)

    def test_partial_above_threshold(self):
        # "a", "b", "c" found in order, "z" is not: 3/4
        assert fuzzy_score("abc", "abcz") == 0.75
        assert fuzzy_match("abc", "abcz", 0.6)
        assert not fuzzy_match("abc", "abcz", 0.8)

    def test_empty_needle_never_matches(self):
        assert fuzzy_score("anything", "") == 0.0
        assert not fuzzy_match("anything", "", 0.0)

    def test_empty_haystack(self):
        assert not fuzzy_match("", "a", 0.1)

    def test_case_is_exact(self):
        assert not fuzzy_match("HELLO", "hl", 0.5)

    def test_zero_threshold_accepts_any_nonempty_needle(self):
        assert fuzzy_match("xyz", "abc", 0.0)


class TestFuzzyStrategy:
    def test_name(self):
        assert FuzzyStrategy("q").name == "fuzzy"

    def test_score_and_positions(self):
        outcome = FuzzyStrategy("hw", threshold=0.5).match("hello world")
        assert outcome.matched
        assert outcome.score == FUZZY_SCORE
        assert outcome.positions == [(0, 1), (6, 7)]

    def test_case_insensitive_by_default(self):
        assert FuzzyStrategy("HW").match("hello world").matched

    def test_case_sensitive(self):
        assert not FuzzyStrategy("HW", case_sensitive=True).match("hello world").matched

    def test_below_threshold(self):
        outcome = FuzzyStrategy("xyz", threshold=0.6).match("xa")
        assert not outcome.matched
        assert outcome.score == 0.0

    def test_highlight_marks_characters(self):
        assert FuzzyStrategy("hw").highlight("hello world") == "[[h]]ello [[w]]orld"
