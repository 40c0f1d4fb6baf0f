"""
Navigation over the lazy DOM.

Every relation is answered by a fresh, bounded scan of neighbouring lines:
forward scans stop at the last line, backward scans at line 0, and both stop
early once depth drops below what the relation allows. Nothing is cached and
nothing recurses, so answers stay correct while the text is being edited and
on documents of any length.

List elements are the awkward part. In

    documentation:
      - title: foo
        content: bar

the marker line `- title: foo` and its secondary field `content: bar` sit one
depth apart yet belong to the same element, so every rule below carries an
adjustment for list-item starts.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from .dom import Node, build_node, resolve_node, starts_list_item
from .formats.base import LineClassifier
from .formats.raml import default_classifier
from .source import TextSource

Step = Callable[[Node], "Node | None"]
Predicate = Callable[[Node], bool]


class Navigator:
    """Stateless structural queries over one text source."""

    def __init__(self, source: TextSource, classifier: LineClassifier | None = None):
        self.source = source
        self.classifier = classifier or default_classifier()

    def node_at(self, line_index: int | None = None) -> Node | None:
        """The node at line_index, or at the cursor line if omitted."""
        return resolve_node(self.source, line_index, self.classifier)

    def _structural(self, start: int, step: int) -> Iterator[Node]:
        """Structural nodes after start in the given direction (+1 / -1)."""
        line_index = start + step
        while True:
            node = build_node(self.source, line_index, self.classifier)
            if node is None:
                return
            if node.is_structural:
                yield node
            line_index += step

    def next_sibling(self, node: Node) -> Node | None:
        """The next structural sibling, or None."""
        return self._sibling(node, 1)

    def previous_sibling(self, node: Node) -> Node | None:
        """The previous structural sibling, or None."""
        return self._sibling(node, -1)

    def _sibling(self, node: Node, step: int) -> Node | None:
        depth = node.depth
        is_start = starts_list_item(node)
        for candidate in self._structural(node.line_index, step):
            if candidate.depth == depth:
                return candidate
            candidate_start = starts_list_item(candidate)
            # Secondary field of the same element, one deeper than its marker
            if is_start and not candidate_start and candidate.depth == depth + 1:
                return candidate
            # Marker of an adjacent element, one shallower than a field
            if not is_start and candidate_start and candidate.depth == depth - 1:
                return candidate
            if candidate.depth < depth:
                return None
        return None

    def first_child(self, node: Node) -> Node | None:
        """
        The first structural child, or None.

        Children of a list-item start sit two levels below the marker. Any
        deeper line also counts, so over-indented documents still resolve.
        """
        required = node.depth + (2 if starts_list_item(node) else 1)
        candidate = next(self._structural(node.line_index, 1), None)
        if candidate is not None and candidate.depth >= required:
            return candidate
        return None

    def parent(self, node: Node) -> Node | None:
        """The parent node, or None if this is a root node.

        A secondary field of a list element looks past its own marker:

            documentation:
              - title: foo
                content: bar   <- parent is documentation, two levels up
        """
        offset = 2 if not starts_list_item(node) and self.is_in_array(node) else 1
        ceiling = node.depth - offset
        for candidate in self._structural(node.line_index, -1):
            if candidate.depth <= ceiling:
                return candidate
        return None

    def path(self, node: Node) -> list[Node]:
        """All ancestors, outermost first, direct parent last."""
        ancestors: list[Node] = []
        current = self.parent(node)
        while current is not None:
            ancestors.append(current)
            current = self.parent(current)
        ancestors.reverse()
        return ancestors

    def is_in_array(self, node: Node) -> bool:
        """Whether the node is a list-item start or a field of one."""
        if starts_list_item(node):
            return True
        # Skip back over same-or-deeper siblings to the first shallower one
        current = self.previous_sibling(node)
        while current is not None and current.depth >= node.depth:
            current = self.previous_sibling(current)
        return (
            current is not None
            and starts_list_item(current)
            and current.depth == node.depth - 1
        )

    def self_and_neighbors(self, node: Node) -> list[Node]:
        """
        The node plus its siblings at the same level with the same parent.

        Inside a list this is exactly the fields of one element. Order is the
        node itself, then previous neighbours nearest first, then next
        neighbours nearest first.
        """
        in_array = self.is_in_array(node)
        nodes: list[Node] = []

        current: Node | None = node
        while current is not None and self.is_in_array(current) == in_array:
            nodes.append(current)
            if starts_list_item(current):
                break
            current = self.previous_sibling(current)

        current = self.next_sibling(node)
        while (
            current is not None
            and not starts_list_item(current)
            and self.is_in_array(current) == in_array
        ):
            nodes.append(current)
            current = self.next_sibling(current)

        return nodes

    def first(self, node: Node, step: Step, predicate: Predicate) -> Node | None:
        """
        Test node, then step(node), step(step(node)) and so on.

        Returns the first node the predicate accepts, or None once step runs
        out of nodes.
        """
        current: Node | None = node
        while current is not None:
            if predicate(current):
                return current
            current = step(current)
        return None

    def self_or_parent(self, node: Node, predicate: Predicate) -> Node | None:
        """Nearest of node and its ancestors accepted by predicate."""
        return self.first(node, self.parent, predicate)

    def self_or_previous(self, node: Node, predicate: Predicate) -> Node | None:
        """Nearest of node and its preceding siblings accepted by predicate."""
        return self.first(node, self.previous_sibling, predicate)
