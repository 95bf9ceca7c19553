"""
Export search results as JSON, CSV or a plain list of paths.
"""

from __future__ import annotations

import csv
import io
import json
from dataclasses import asdict

from .core import SearchResult

EXPORT_FORMATS = ("json", "csv", "paths")

CSV_HEADER = ["Path", "Key", "Type", "Value", "Score"]


def result_to_dict(result: SearchResult) -> dict:
    """Plain-dict form of a result, JSON serializable."""
    data = asdict(result)
    data["segments"] = list(result.segments)
    data["matches"]["positions"] = [list(span) for span in result.matches.positions]
    if result.context is None:
        del data["context"]
    return data


def export_results(results: list[SearchResult], format: str = "json", indent: int | None = 2) -> str:
    """
    Serialize results.

    json: list of result records
    csv: Path,Key,Type,Value,Score with JSON-encoded values
    paths: one jsonPath per line
    """
    if format == "paths":
        return "\n".join(r.json_path for r in results)

    if format == "csv":
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for r in results:
            writer.writerow([
                r.json_path,
                r.key,
                r.type,
                json.dumps(r.value, ensure_ascii=False),
                f"{r.score:g}",
            ])
        return buf.getvalue().rstrip("\n")

    if format == "json":
        return json.dumps([result_to_dict(r) for r in results], indent=indent, ensure_ascii=False)

    raise ValueError(f"Unknown export format: {format!r}. Use one of {', '.join(EXPORT_FORMATS)}")
