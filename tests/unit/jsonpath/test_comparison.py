"""
Unit tests for JSONPath filter comparisons.
"""

import math

import pytest

from jsonscope.jsonpath.comparison import Comparison, Op, parse_comparison, stringify, to_number


class TestParseComparison:
    @pytest.mark.parametrize("text,op", [
        ("?(@.a == 1)", Op.EQ),
        ("?(@.a = 1)", Op.EQ),
        ("?(@.a != 1)", Op.NE),
        ("?(@.a > 1)", Op.GT),
        ("?(@.a < 1)", Op.LT),
        ("?(@.a >= 1)", Op.GE),
        ("?(@.a <= 1)", Op.LE),
    ])
    def test_operators(self, text, op):
        comparison = parse_comparison(text)
        assert comparison == Comparison(prop="a", op=op, literal="1")

    def test_without_parens_or_spaces(self):
        assert parse_comparison("?@.name=='Ada'") == Comparison("name", Op.EQ, "Ada")

    def test_literal_quotes_stripped(self):
        assert parse_comparison('?(@.name == "Moby Dick")').literal == "Moby Dick"

    def test_underscore_and_digits_in_prop(self):
        assert parse_comparison("?(@.unit_price2 > 3)").prop == "unit_price2"

    @pytest.mark.parametrize("text", [
        "?(@.price)",
        "?(price > 3)",
        "?(@. > 3)",
        "?(@.price >)",
        "?(@.price ~ 3)",
        "?",
    ])
    def test_unsupported_shapes(self, text):
        assert parse_comparison(text) is None


class TestComparisonTest:
    def test_equality_compares_strings(self):
        c = Comparison("n", Op.EQ, "5")
        assert c.test({"n": 5})
        assert c.test({"n": "5"})
        assert c.test({"n": 5.0})

    def test_equality_on_booleans_and_null(self):
        assert Comparison("ok", Op.EQ, "true").test({"ok": True})
        assert Comparison("v", Op.EQ, "null").test({"v": None})

    def test_not_equal(self):
        c = Comparison("category", Op.NE, "fiction")
        assert c.test({"category": "reference"})
        assert not c.test({"category": "fiction"})

    def test_numeric_ordering(self):
        assert Comparison("price", Op.LT, "10").test({"price": 8.95})
        assert not Comparison("price", Op.LT, "10").test({"price": 12.99})
        assert Comparison("price", Op.GE, "12.99").test({"price": 12.99})
        assert Comparison("price", Op.LE, "8").test({"price": "7"})
        assert Comparison("price", Op.GT, "1").test({"price": 2})

    def test_non_numeric_never_orders(self):
        assert not Comparison("price", Op.GT, "1").test({"price": "cheap"})
        assert not Comparison("price", Op.LT, "1").test({"price": "cheap"})

    def test_absent_prop_excluded(self):
        assert not Comparison("isbn", Op.NE, "x").test({"title": "t"})

    def test_non_object_excluded(self):
        assert not Comparison("a", Op.EQ, "1").test([1])
        assert not Comparison("a", Op.EQ, "1").test("a")


class TestCoercion:
    def test_stringify(self):
        assert stringify(None) == "null"
        assert stringify(False) == "false"
        assert stringify(3.0) == "3"
        assert stringify(3.5) == "3.5"
        assert stringify([1, 2]) == "[1,2]"

    def test_to_number(self):
        assert to_number(" 4 ") == 4.0
        assert to_number("") == 0.0
        assert to_number(None) == 0.0
        assert to_number(True) == 1.0
        assert math.isnan(to_number("abc"))
        assert math.isnan(to_number({}))
