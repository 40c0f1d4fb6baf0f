"""
DOM - lazy document object model for RAML.

A node is the structural identity of one line: depth, flags, key and value.
Nodes are built on demand from a TextSource and a LineClassifier and thrown
away after use. There is no tree in memory.

Key invariant: no node refers to another node. Parent, child and sibling are
computed relations (see navigation.py) over line index, depth and flags, so
the text can change between queries without any invalidation step.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .formats.base import LineClassifier
from .formats.raml import default_classifier
from .logging import get_logger
from .source import TextSource

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommentNode:
    """A comment line. Has depth but no key, value or list-marker status."""
    line_index: int
    depth: int
    text: str

    is_comment: ClassVar[bool] = True
    is_empty: ClassVar[bool] = False

    @property
    def is_structural(self) -> bool:
        return False


@dataclass(frozen=True)
class ContentNode:
    """Any non-comment line, including empty and whitespace-only ones."""
    line_index: int
    depth: int
    text: str
    is_empty: bool
    is_list_item_start: bool
    key: str | None
    value: str | None

    is_comment: ClassVar[bool] = False

    @property
    def is_structural(self) -> bool:
        """Neither a comment nor blank."""
        return not self.is_empty


Node = CommentNode | ContentNode


def starts_list_item(node: Node) -> bool:
    """List-marker status, False for comments where it is undefined."""
    return isinstance(node, ContentNode) and node.is_list_item_start


def build_node(source: TextSource, line_index: int, classifier: LineClassifier) -> Node | None:
    """Construct the node for one line, or None if the source has no such line."""
    text = source.get_line(line_index)
    if text is None:
        return None

    is_empty = text.strip() == ""
    depth = _line_depth(source, line_index, text, is_empty, classifier)

    if classifier.is_comment_start(text):
        return CommentNode(line_index=line_index, depth=depth, text=text)

    return ContentNode(
        line_index=line_index,
        depth=depth,
        text=text,
        is_empty=is_empty,
        is_list_item_start=classifier.is_list_item_start(text),
        key=classifier.extract_key(text),
        value=classifier.extract_value(text),
    )


def _line_depth(
    source: TextSource,
    line_index: int,
    text: str,
    is_empty: bool,
    classifier: LineClassifier,
) -> int:
    """
    Depth from the classifier, except on the cursor's own blank line.

    A blank line carries no indentation yet, so when the caret sits on it the
    caret column stands in for the indentation about to be typed.
    """
    if is_empty:
        cursor = source.cursor
        if cursor.line == line_index:
            return classifier.depth(" " * cursor.column)
    return classifier.depth(text)


def resolve_node(
    source: TextSource,
    line_index: int | None = None,
    classifier: LineClassifier | None = None,
) -> Node | None:
    """
    Entry point: the node at line_index, or at the cursor line if omitted.

    Returns None iff the source has no line there.
    """
    if line_index is None:
        line_index = source.cursor.line
    node = build_node(source, line_index, classifier or default_classifier())
    if node is None:
        logger.debug("line_out_of_range", line_index=line_index, line_count=source.line_count)
    return node
