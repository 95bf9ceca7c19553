"""
Advanced filter rows.

A filter row is what an "advanced search" form collects: where to look
(type), how to compare (operator) and the value. The first row with a value
decides the query and mode; rows of type "type" narrow results to the
listed JSON types.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .core import SearchMode, SearchOptions

ROW_TYPES = ("any", "key", "value", "path", "type", "jsonpath")
OPERATORS = ("contains", "regex", "fuzzy", "startsWith", "endsWith", "jsonpath")


@dataclass
class FilterRow:
    type: str = "any"
    operator: str = "contains"
    value: str = ""
    case_sensitive: bool = False

    def __post_init__(self):
        if self.type not in ROW_TYPES:
            raise ValueError(f"Unknown filter type: {self.type!r}")
        if self.operator not in OPERATORS:
            raise ValueError(f"Unknown filter operator: {self.operator!r}")


def _row_query(row: FilterRow) -> tuple[str, SearchMode]:
    if row.operator == "regex":
        return row.value, SearchMode.REGEX
    if row.operator == "fuzzy":
        return row.value, SearchMode.FUZZY
    if row.operator == "startsWith":
        return "^" + re.escape(row.value), SearchMode.REGEX
    if row.operator == "endsWith":
        return re.escape(row.value) + "$", SearchMode.REGEX
    return row.value, SearchMode.SIMPLE


def build_search_options(rows: list[FilterRow]) -> SearchOptions | None:
    """Turn filter rows into SearchOptions. None when no query row has a value."""
    primary = next((row for row in rows if row.value and row.type != "type"), None)
    if primary is None:
        return None

    if primary.type == "jsonpath" or primary.operator == "jsonpath":
        return SearchOptions(query=primary.value, mode=SearchMode.JSONPATH)

    query, mode = _row_query(primary)
    type_filters = [row.value for row in rows if row.type == "type" and row.value]
    return SearchOptions(
        query=query,
        mode=mode,
        case_sensitive=primary.case_sensitive,
        search_in_keys=primary.type in ("key", "any"),
        search_in_values=primary.type in ("value", "any"),
        search_in_paths=primary.type == "path",
        search_by_type=type_filters or None,
    )


def describe_filters(rows: list[FilterRow]) -> str:
    """Display form of the rows, e.g. "/ab+/ ^name x$"."""
    parts = []
    for row in rows:
        if not row.value:
            continue
        if row.operator == "regex":
            parts.append(f"/{row.value}/")
        elif row.operator == "startsWith":
            parts.append(f"^{row.value}")
        elif row.operator == "endsWith":
            parts.append(f"{row.value}$")
        else:
            parts.append(row.value)
    return " ".join(parts)
