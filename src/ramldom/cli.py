"""
CLI interface for ramldom.

Inspect the lazy DOM of a document from the shell: put the cursor on a line
and ask for that line's parent, children, siblings or path.
"""

from __future__ import annotations

import argparse
import sys

from .config import get_config
from .dom import Node
from .formats.base import LineClassifier, registry
from .formats.raml import RamlLineClassifier, default_classifier
from .logging import configure_logging, get_logger
from .navigation import Navigator
from .source import Cursor, LinesTextSource

logger = get_logger(__name__)

QUERIES = [
    "node",
    "parent",
    "first-child",
    "next-sibling",
    "previous-sibling",
    "neighbors",
    "path",
    "in-array",
]


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="ramldom",
        description="Structural lookups on RAML documents without building a tree",
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Input file (reads from stdin if not provided)",
    )

    parser.add_argument(
        "--line",
        "-l",
        type=int,
        default=1,
        help="1-based line to place the cursor on (default: 1)",
    )

    parser.add_argument(
        "--column",
        "-c",
        type=int,
        default=1,
        help="1-based cursor column; sets the depth of a blank cursor line (default: 1)",
    )

    parser.add_argument(
        "--query",
        "-q",
        choices=QUERIES,
        default="node",
        help="Relation to print for the node at the cursor (default: node)",
    )

    parser.add_argument(
        "--indent-unit",
        "-i",
        type=int,
        help="Spaces per indentation level (overrides config)",
    )

    parser.add_argument(
        "--type",
        type=str,
        dest="format_type",
        help="Force line classifier (e.g., raml)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        help="Log level for diagnostics on stderr (overrides config)",
    )

    return parser.parse_args(args)


def read_input(filepath: str | None) -> str:
    """Read from file or stdin."""
    if filepath:
        with open(filepath, encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()


def get_classifier(
    content: str,
    format_type: str | None,
    indent_unit: int | None = None,
) -> LineClassifier:
    """Pick a classifier: explicit --indent-unit, --type, detection, then RAML."""
    if indent_unit is not None:
        return RamlLineClassifier(indent_unit=indent_unit)

    if format_type:
        classifier = registry.get_by_name(format_type)
        if classifier is None:
            raise ValueError(f"Unknown type: {format_type}")
        return classifier

    detected = registry.detect(content)
    if detected is not None:
        return detected

    return default_classifier()


def format_node(node: Node | None) -> str:
    """One node per line as '<1-based line>: <text>'."""
    if node is None:
        return "(none)"
    return f"{node.line_index + 1}: {node.text}"


def run_query(navigator: Navigator, node: Node, query: str) -> str:
    """Answer one query for node as printable text."""
    if query == "node":
        return format_node(node)
    if query == "parent":
        return format_node(navigator.parent(node))
    if query == "first-child":
        return format_node(navigator.first_child(node))
    if query == "next-sibling":
        return format_node(navigator.next_sibling(node))
    if query == "previous-sibling":
        return format_node(navigator.previous_sibling(node))
    if query == "neighbors":
        return "\n".join(format_node(n) for n in navigator.self_and_neighbors(node))
    if query == "path":
        nodes = navigator.path(node)
        if not nodes:
            return "(none)"
        return "\n".join(format_node(n) for n in nodes)
    if query == "in-array":
        return "true" if navigator.is_in_array(node) else "false"
    raise ValueError(f"Unknown query: {query}")


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)

    cfg = get_config()
    configure_logging(
        level=parsed.log_level or cfg.logging.level,
        json_format=cfg.logging.format == "json",
    )

    if parsed.line < 1:
        print(f"Error: Line must be >= 1, got {parsed.line}", file=sys.stderr)
        return 1
    if parsed.column < 1:
        print(f"Error: Column must be >= 1, got {parsed.column}", file=sys.stderr)
        return 1

    try:
        content = read_input(parsed.file)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        classifier = get_classifier(content, parsed.format_type, parsed.indent_unit)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    cursor = Cursor(line=parsed.line - 1, column=parsed.column - 1)
    source = LinesTextSource.from_text(content, cursor)
    navigator = Navigator(source, classifier)

    node = navigator.node_at()
    if node is None:
        print(
            f"Error: Line {parsed.line} out of range (document has {source.line_count} lines)",
            file=sys.stderr,
        )
        return 1

    logger.debug("query", query=parsed.query, line=parsed.line, depth=node.depth)
    print(run_query(navigator, node, parsed.query))
    return 0


if __name__ == "__main__":
    sys.exit(main())
