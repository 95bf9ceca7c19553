"""
Unit tests for the JSONPath tokenizer.
"""

import pytest

from jsonscope.errors import InvalidPathSyntax
from jsonscope.jsonpath.comparison import Op
from jsonscope.jsonpath.tokenizer import (
    Filter,
    Index,
    Property,
    RecursiveDescent,
    Root,
    Slice,
    Wildcard,
    tokenize,
)


class TestTokenize:
    def test_root_only(self):
        assert tokenize("$") == [Root()]

    def test_must_start_with_dollar(self):
        with pytest.raises(InvalidPathSyntax):
            tokenize("store.books")

    def test_empty_query_is_invalid(self):
        with pytest.raises(InvalidPathSyntax):
            tokenize("")

    def test_invalid_path_syntax_is_value_error(self):
        with pytest.raises(ValueError):
            tokenize("name")

    def test_dotted_properties(self):
        assert tokenize("$.store.name") == [Root(), Property("store"), Property("name")]

    def test_dot_wildcard(self):
        assert tokenize("$.*") == [Root(), Wildcard()]

    def test_bracket_wildcard(self):
        assert tokenize("$.tags[*]") == [Root(), Property("tags"), Wildcard()]

    def test_recursive_descent_with_name(self):
        assert tokenize("$..author") == [Root(), RecursiveDescent(), Property("author")]

    def test_recursive_descent_with_wildcard(self):
        assert tokenize("$..*") == [Root(), RecursiveDescent(), Wildcard()]

    def test_recursive_descent_with_bracket(self):
        assert tokenize("$..[0]") == [Root(), RecursiveDescent(), Index(0)]

    def test_index(self):
        assert tokenize("$.books[2]") == [Root(), Property("books"), Index(2)]

    def test_quoted_properties(self):
        assert tokenize("$['first name']") == [Root(), Property("first name")]
        assert tokenize('$["x.y"]') == [Root(), Property("x.y")]

    def test_property_after_index(self):
        assert tokenize("$.books[0].title") == [
            Root(), Property("books"), Index(0), Property("title"),
        ]

    def test_slice_all_parts(self):
        assert tokenize("$[1:5:2]") == [Root(), Slice(1, 5, 2)]

    def test_slice_missing_parts_are_none(self):
        assert tokenize("$[:3]") == [Root(), Slice(None, 3, None)]
        assert tokenize("$[2:]") == [Root(), Slice(2, None, None)]

    def test_slice_negative_start(self):
        assert tokenize("$[-2:]") == [Root(), Slice(-2, None, None)]

    def test_filter(self):
        tokens = tokenize("$.books[?(@.price < 10)]")
        assert tokens[:2] == [Root(), Property("books")]
        token = tokens[2]
        assert isinstance(token, Filter)
        assert token.expression == "?(@.price < 10)"
        assert token.comparison.prop == "price"
        assert token.comparison.op is Op.LT
        assert token.comparison.literal == "10"

    def test_nested_brackets_in_filter(self):
        tokens = tokenize("$[?(@.tags[0] == 'x')].name")
        assert isinstance(tokens[1], Filter)
        assert tokens[1].expression == "?(@.tags[0] == 'x')"
        assert tokens[2] == Property("name")

    def test_unrecognized_bracket_dropped(self):
        assert tokenize("$[abc].name") == [Root(), Property("name")]

    def test_stray_characters_skipped(self):
        assert tokenize("$ .a") == [Root(), Property("a")]

    def test_unclosed_bracket_uses_rest(self):
        assert tokenize("$[3") == [Root(), Index(3)]

    def test_trailing_dot_ignored(self):
        assert tokenize("$.a.") == [Root(), Property("a")]
