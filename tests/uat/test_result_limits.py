"""
UAT: result limits and responsiveness on large documents.

A user searching a big document gets at most `limit` results, learns that
the list was cut short, and never gets an exception for a half-typed query.
"""

import pytest

from jsonscope.core import SearchOptions, search


def make_catalog(n: int) -> dict:
    return {
        "items": [
            {"id": i, "name": f"item {i}", "tags": ["alpha", "beta"], "nested": {"name": f"inner {i}"}}
            for i in range(n)
        ]
    }


@pytest.fixture(scope="module")
def catalog():
    return make_catalog(2000)


class TestResultLimits:
    @pytest.mark.parametrize("limit", [1, 10, 250, 1000])
    def test_results_never_exceed_limit(self, catalog, limit):
        results, stats = search(catalog, SearchOptions(query="name", limit=limit))
        assert len(results) == limit
        assert stats.total_matches == limit
        assert stats.truncated

    def test_truncated_results_keep_document_order_among_ties(self, catalog):
        results, _ = search(catalog, SearchOptions(query="alpha", limit=4))
        assert [r.path for r in results] == [
            "items[0].tags[0]",
            "items[1].tags[0]",
            "items[2].tags[0]",
            "items[3].tags[0]",
        ]

    def test_jsonpath_limit(self, catalog):
        results, stats = search(catalog, SearchOptions(query="$..name", mode="jsonpath", limit=100))
        assert len(results) == 100
        assert stats.truncated

    def test_small_document_not_truncated(self):
        results, stats = search(make_catalog(3), SearchOptions(query="item"))
        assert len(results) == 4  # "items" key plus three names
        assert not stats.truncated


class TestPartialQueries:
    @pytest.mark.parametrize("query", ["", "$", "$.", "$..", "$[", "$[?(", "$.items[", "items", "$.items[abc]"])
    def test_partial_jsonpath_never_raises(self, catalog, query):
        results, stats = search(catalog, SearchOptions(query=query, mode="jsonpath", limit=50))
        assert len(results) <= 50
        assert stats.total_matches == len(results)

    @pytest.mark.parametrize("query", ["(", "[a-", "*", "a{2,1}", "(?P<x"])
    def test_partial_regex_never_raises(self, catalog, query):
        results, stats = search(catalog, SearchOptions(query=query, mode="regex"))
        assert results == []
        assert stats.total_matches == 0
