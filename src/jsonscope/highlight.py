"""
Mark matched text for display.
"""

from __future__ import annotations

from .core import SearchMode, SearchResult
from .matchers import fuzzy as _fuzzy  # noqa: F401 - ensure fuzzy mode is registered
from .matchers import regex as _regex  # noqa: F401 - ensure regex mode is registered
from .matchers import simple as _simple  # noqa: F401 - ensure simple mode is registered
from .matchers.base import registry, wrap_spans


def highlight(
    text: str,
    query: str,
    mode: SearchMode | str = SearchMode.SIMPLE,
    case_sensitive: bool = False,
    open_mark: str = "[[",
    close_mark: str = "]]",
    threshold: float = 0.6,
) -> str:
    """
    Wrap the parts of text that match query in markers.

    Fuzzy mode marks each matched character. JSONPath queries select nodes,
    not text, so text is returned unchanged for them, as it is for an empty
    query or an invalid regex.
    """
    mode = SearchMode(mode)
    if not query or not text or mode == SearchMode.JSONPATH:
        return text
    kwargs = {"threshold": threshold} if mode == SearchMode.FUZZY else {}
    strategy = registry.create(str(mode), query, case_sensitive, **kwargs)
    return strategy.highlight(text, open_mark, close_mark)


def highlight_result(result: SearchResult, open_mark: str = "[[", close_mark: str = "]]") -> str | None:
    """Matched text of a result with its recorded positions marked, or None if nothing was recorded."""
    text = result.matches.matched_text
    if text is None:
        return None
    if not result.matches.positions:
        return text
    return wrap_spans(text, result.matches.positions, open_mark, close_mark)
