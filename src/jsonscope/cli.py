"""
CLI interface for jsonscope.

Pipe-friendly JSON search: load a document, run a text or JSONPath query,
print ranked matches, an export, or the pruned document.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

import structlog

from .config import get_config
from .core import SearchMode, SearchOptions, SearchResult, SearchStats, search
from .dom import JsonValue
from .export import export_results
from .highlight import highlight_result
from .prune import prune

logger = structlog.get_logger()

ANSI_OPEN = "\x1b[1;33m"
ANSI_CLOSE = "\x1b[0m"


def _stderr_logger(*args) -> structlog.PrintLogger:
    # Resolve sys.stderr per logger so redirected streams are honored
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(verbose: bool = False) -> None:
    """Console logging on stderr: warnings by default, everything with --verbose."""
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if verbose else logging.WARNING),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    cfg = get_config()

    parser = argparse.ArgumentParser(
        prog="jscope",
        description="Search, query and prune JSON documents",
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Input JSON file (reads from stdin if not provided)",
    )

    parser.add_argument(
        "--query",
        "-q",
        type=str,
        required=True,
        help="Search text, regex, fuzzy pattern or JSONPath (e.g. '$..name')",
    )

    parser.add_argument(
        "--mode",
        "-m",
        choices=[m.value for m in SearchMode],
        default=SearchMode.SIMPLE.value,
        help="Matching mode (default: simple)",
    )

    parser.add_argument(
        "--case-sensitive",
        "-c",
        action="store_true",
        default=cfg.search.case_sensitive,
        help="Match case exactly",
    )

    parser.add_argument(
        "--no-keys",
        action="store_false",
        dest="keys",
        default=cfg.search.search_in_keys,
        help="Do not match object keys",
    )

    parser.add_argument(
        "--no-values",
        action="store_false",
        dest="values",
        default=cfg.search.search_in_values,
        help="Do not match string values",
    )

    parser.add_argument(
        "--paths",
        action="store_true",
        default=cfg.search.search_in_paths,
        help="Also match against each node's jsonPath",
    )

    parser.add_argument(
        "--type",
        "-t",
        action="append",
        dest="types",
        choices=["null", "array", "object", "string", "number", "boolean"],
        help="Only report nodes of this JSON type (repeatable)",
    )

    parser.add_argument(
        "--max-depth",
        type=int,
        default=cfg.search.max_depth,
        help="Do not descend below this depth",
    )

    parser.add_argument(
        "--threshold",
        type=float,
        default=cfg.search.fuzzy_threshold,
        help="Fuzzy match threshold between 0 and 1 (default: %(default)s)",
    )

    parser.add_argument(
        "--max-results",
        "-n",
        type=int,
        default=cfg.search.limit,
        help="Stop after this many matches (default: %(default)s)",
    )

    parser.add_argument(
        "--ancestors",
        action="store_true",
        help="Include ancestor jsonPaths in JSON output",
    )

    parser.add_argument(
        "--prune",
        "-p",
        action="store_true",
        help="Print the document reduced to matches and their ancestors",
    )

    parser.add_argument(
        "--compact",
        action="store_true",
        help="With --prune, drop elided array elements instead of leaving null placeholders",
    )

    parser.add_argument(
        "--format",
        "-f",
        choices=["text", "json", "csv", "paths"],
        default="text",
        help="Result output format (default: text)",
    )

    parser.add_argument(
        "--stats",
        "-s",
        action="store_true",
        help="Print search statistics on stderr",
    )

    parser.add_argument(
        "--limit",
        type=int,
        default=cfg.output.limit,
        help="Maximum output characters (default: %(default)s, 0 disables)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Debug logging on stderr",
    )

    return parser.parse_args(args)


def read_input(filepath: str | None) -> str:
    """
    Read from file or stdin.

    Files larger than io.max_file_size are refused with ValueError, since the
    whole document has to be held in memory.
    """
    if filepath:
        cfg = get_config()
        file_size = os.path.getsize(filepath)
        if file_size > cfg.io.max_file_size:
            raise ValueError(
                f"{filepath} is {file_size:,} bytes, above the {cfg.io.max_file_size:,} byte limit "
                f"(raise JSCOPE_MAX_FILE_SIZE to load it)"
            )
        with open(filepath, encoding="utf-8") as f:
            return f.read()

    return sys.stdin.read()


def load_document(content: str) -> JsonValue:
    """Parse JSON text. Raises ValueError with position info on bad input."""
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}") from e


def apply_output_limit(output: str, limit: int) -> str:
    """
    Cap output at `limit` characters.

    Whole lines are kept from both ends, alternating head and tail, so a
    result line is never cut in half; the middle collapses into an OMITTED
    marker. Output whose first line alone overflows is cut by character.
    """
    if len(output) <= limit:
        return output

    lines = output.split("\n")
    head: list[str] = []
    tail: list[str] = []
    lo, hi = 0, len(lines) - 1
    used = 0
    while lo <= hi:
        from_head = len(head) <= len(tail)
        line = lines[lo] if from_head else lines[hi]
        if used + len(line) + 1 > limit:
            break
        used += len(line) + 1
        if from_head:
            head.append(line)
            lo += 1
        else:
            tail.append(line)
            hi -= 1

    omitted = hi - lo + 1
    if head:
        preview = "\n".join([*head, f"[... {omitted} lines OMITTED ...]", *reversed(tail)])
    else:
        preview = output[:limit] + "\n[... rest OMITTED ...]"

    return (
        preview
        + f"\n[OUTPUT TRUNCATED: {len(output):,} chars in {len(lines)} lines, over --limit {limit:,}]\n"
        + "Narrow with --type, --max-depth or --max-results, pass a larger --limit, or --limit 0 for everything\n"
    )


def preview_value(value: JsonValue, max_chars: int) -> str:
    """Single-line JSON preview, cut with an ellipsis."""
    text = json.dumps(value, ensure_ascii=False)
    if len(text) <= max_chars:
        return text
    if max_chars <= 3:
        return text[:max_chars]
    return text[:max_chars - 3] + "..."


def format_results_text(results: list[SearchResult], color: bool = False) -> str:
    """One line per result: jsonPath, type, score, then highlighted text or a value preview."""
    cfg = get_config().output
    if color:
        open_mark, close_mark = ANSI_OPEN, ANSI_CLOSE
    else:
        open_mark, close_mark = cfg.highlight_open, cfg.highlight_close

    lines = []
    for r in results:
        marked = highlight_result(r, open_mark, close_mark)
        detail = marked if marked is not None else preview_value(r.value, cfg.preview_chars)
        lines.append(f"{r.json_path}  {r.type}  {r.score:g}  {detail}")
    return "\n".join(lines)


def format_stats(stats: SearchStats) -> str:
    by_type = ", ".join(f"{k}={v}" for k, v in sorted(stats.matches_by_type.items()))
    by_depth = ", ".join(f"{k}={v}" for k, v in sorted(stats.matches_by_depth.items()))
    lines = [
        f"mode: {stats.mode}",
        f"matches: {stats.total_matches}" + (" (truncated)" if stats.truncated else ""),
        f"by type: {by_type or '-'}",
        f"by depth: {by_depth or '-'}",
        f"max depth: {stats.max_depth}",
        f"time: {stats.search_time:.2f} ms",
    ]
    return "\n".join(lines)


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(parsed.verbose)
    cfg = get_config()

    try:
        content = read_input(parsed.file)
    except FileNotFoundError:
        print(f"Error: File not found: {parsed.file}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    try:
        document = load_document(content)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    options = SearchOptions(
        query=parsed.query,
        mode=parsed.mode,
        case_sensitive=parsed.case_sensitive,
        search_in_keys=parsed.keys,
        search_in_values=parsed.values,
        search_in_paths=parsed.paths,
        search_by_type=parsed.types,
        max_depth=parsed.max_depth,
        fuzzy_threshold=parsed.threshold,
        include_ancestors=parsed.ancestors,
        limit=parsed.max_results,
    )
    results, stats = search(document, options)
    logger.info("Search complete", matches=stats.total_matches, truncated=stats.truncated)

    if parsed.prune:
        pruned = prune(document, results, compact_arrays=parsed.compact)
        output = json.dumps(pruned, indent=cfg.output.indent, ensure_ascii=False)
    elif parsed.format == "text":
        output = format_results_text(results, color=sys.stdout.isatty())
    else:
        output = export_results(results, parsed.format, indent=cfg.output.indent)

    if parsed.limit > 0:
        output = apply_output_limit(output, parsed.limit)

    if output:
        print(output)

    if parsed.stats:
        print(format_stats(stats), file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
