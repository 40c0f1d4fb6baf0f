"""
Unit tests for lazy DOM navigation.

Tests sibling, child, parent, array membership, neighbours, paths and the
generic search helpers, on small inline documents and on a RAML fixture.
"""

from pathlib import Path

from ramldom.formats.raml import RamlLineClassifier
from ramldom.navigation import Navigator
from ramldom.source import Cursor, LinesTextSource


FIXTURES = Path(__file__).parent.parent.parent / "fixtures"

TWO = RamlLineClassifier(indent_unit=2)
FOUR = RamlLineClassifier(indent_unit=4)


def navigator(*lines, classifier=TWO, cursor=None):
    return Navigator(LinesTextSource(list(lines), cursor), classifier)


def fixture_navigator():
    return Navigator(LinesTextSource.from_path(FIXTURES / "api.raml"), TWO)


def line_indexes(nodes):
    return [n.line_index for n in nodes]


def structural_nodes(nav):
    nodes = []
    for i in range(nav.source.line_count):
        node = nav.node_at(i)
        if node.is_structural:
            nodes.append(node)
    return nodes


class TestNestingByDepth:
    def setup_method(self):
        self.nav = navigator("Foo:", "    Bar:", "          Baz:", classifier=FOUR)
        self.foo, self.bar, self.baz = (self.nav.node_at(i) for i in range(3))

    def test_depths(self):
        assert [self.foo.depth, self.bar.depth, self.baz.depth] == [0, 1, 2]

    def test_first_children(self):
        assert self.nav.first_child(self.foo) == self.bar
        assert self.nav.first_child(self.bar) == self.baz
        assert self.nav.first_child(self.baz) is None

    def test_parents(self):
        assert self.nav.parent(self.baz) == self.bar
        assert self.nav.parent(self.bar) == self.foo
        assert self.nav.parent(self.foo) is None


class TestListElement:
    def setup_method(self):
        self.nav = navigator("documentation:", "  - title: foo", "    content: bar")
        self.documentation, self.title, self.content = (self.nav.node_at(i) for i in range(3))

    def test_first_child_is_marker(self):
        assert self.nav.first_child(self.documentation) == self.title

    def test_marker_and_field_are_siblings(self):
        assert self.nav.next_sibling(self.title) == self.content
        assert self.nav.previous_sibling(self.content) == self.title

    def test_field_parent_skips_marker(self):
        parent = self.nav.parent(self.content)
        assert parent == self.documentation
        assert parent != self.title

    def test_marker_parent(self):
        assert self.nav.parent(self.title) == self.documentation

    def test_marker_has_no_child_from_its_own_field(self):
        assert self.nav.first_child(self.title) is None

    def test_membership(self):
        assert self.nav.is_in_array(self.title)
        assert self.nav.is_in_array(self.content)
        assert not self.nav.is_in_array(self.documentation)


class TestSiblings:
    def test_comments_and_blanks_are_transparent(self):
        nav = navigator("a: 1", "# note", "", "b: 2")
        a, b = nav.node_at(0), nav.node_at(3)
        assert nav.next_sibling(a) == b
        assert nav.previous_sibling(b) == a

    def test_shallower_line_ends_search(self):
        nav = navigator("a:", "  b:", "c:")
        assert nav.next_sibling(nav.node_at(1)) is None

    def test_deeper_lines_are_skipped(self):
        nav = navigator("a:", "  x: 1", "  y: 2", "b:")
        assert nav.next_sibling(nav.node_at(0)) == nav.node_at(3)
        assert nav.previous_sibling(nav.node_at(3)) == nav.node_at(0)

    def test_document_edges(self):
        nav = navigator("a: 1", "b: 2")
        assert nav.previous_sibling(nav.node_at(0)) is None
        assert nav.next_sibling(nav.node_at(1)) is None

    def test_adjacent_list_elements(self):
        nav = navigator("list:", "  - a", "  - b")
        assert nav.next_sibling(nav.node_at(1)) == nav.node_at(2)

    def test_field_to_next_marker(self):
        nav = navigator("list:", "  - a: 1", "    b: 2", "  - c: 3")
        assert nav.next_sibling(nav.node_at(2)) == nav.node_at(3)
        assert nav.previous_sibling(nav.node_at(3)) == nav.node_at(2)

    def test_marker_skips_nested_block_to_its_field(self):
        nav = navigator("- x:", "    deep: 1", "  y: 2")
        assert nav.next_sibling(nav.node_at(0)) == nav.node_at(2)
        assert nav.previous_sibling(nav.node_at(2)) == nav.node_at(0)


class TestChildren:
    def test_over_indented_child_still_found(self):
        nav = navigator("a:", "      b:")
        assert nav.first_child(nav.node_at(0)) == nav.node_at(1)
        assert nav.parent(nav.node_at(1)) == nav.node_at(0)

    def test_comment_before_child_is_skipped(self):
        nav = navigator("a:", "# note", "", "  b:")
        assert nav.first_child(nav.node_at(0)) == nav.node_at(3)

    def test_no_child_when_next_is_sibling(self):
        nav = navigator("a:", "b:")
        assert nav.first_child(nav.node_at(0)) is None

    def test_last_line_has_no_child(self):
        nav = navigator("a:")
        assert nav.first_child(nav.node_at(0)) is None

    def test_marker_children_are_two_levels_down(self):
        nav = navigator("items:", "  - name:", "      deep: 1")
        marker, deep = nav.node_at(1), nav.node_at(2)
        assert nav.first_child(marker) == deep
        assert nav.parent(deep) == marker


class TestParents:
    def test_field_after_nested_block_belongs_to_element(self):
        nav = navigator("- a: 1", "  b:", "    c: 2", "  d: 3")
        d = nav.node_at(3)
        assert nav.is_in_array(d)
        assert nav.parent(d) is None

    def test_nested_key_under_field(self):
        nav = navigator("- a: 1", "  b:", "    c: 2")
        assert nav.parent(nav.node_at(2)) == nav.node_at(1)

    def test_top_level_is_root(self):
        nav = navigator("title: x", "version: 1")
        assert nav.parent(nav.node_at(1)) is None


class TestCursorOnBlankLine:
    def test_indented_cursor_resolves_inside_block(self):
        nav = navigator("resources:", "  get:", "", cursor=Cursor(line=2, column=2))
        here = nav.node_at()
        assert here.line_index == 2
        assert here.depth == 1
        assert nav.previous_sibling(here) == nav.node_at(1)
        assert nav.parent(here) == nav.node_at(0)

    def test_unindented_cursor_resolves_at_top_level(self):
        nav = navigator("resources:", "  get:", "", cursor=Cursor(line=2, column=0))
        here = nav.node_at()
        assert here.depth == 0
        assert nav.previous_sibling(here) == nav.node_at(0)
        assert nav.parent(here) is None


class TestFixtureDocument:
    def setup_method(self):
        self.nav = fixture_navigator()

    def node(self, i):
        return self.nav.node_at(i)

    def test_header_is_comment(self):
        assert self.node(0).is_comment

    def test_top_level_siblings(self):
        assert self.nav.next_sibling(self.node(1)) == self.node(2)
        assert self.nav.next_sibling(self.node(2)) == self.node(4)
        assert self.nav.next_sibling(self.node(4)) == self.node(10)
        assert self.nav.next_sibling(self.node(10)) is None

    def test_list_elements_across_comment(self):
        assert self.nav.next_sibling(self.node(6)) == self.node(8)
        assert self.nav.previous_sibling(self.node(8)) == self.node(6)

    def test_field_parent_is_documentation(self):
        assert self.nav.parent(self.node(9)) == self.node(4)

    def test_path(self):
        assert line_indexes(self.nav.path(self.node(15))) == [10, 11, 13, 14]

    def test_path_of_top_level_is_empty(self):
        assert self.nav.path(self.node(1)) == []

    def test_membership(self):
        in_array = {i for i in (4, 5, 6, 8, 9, 10, 12) if self.nav.is_in_array(self.node(i))}
        assert in_array == {5, 6, 8, 9}

    def test_neighbors_of_field(self):
        assert line_indexes(self.nav.self_and_neighbors(self.node(6))) == [6, 5]

    def test_neighbors_of_marker(self):
        assert line_indexes(self.nav.self_and_neighbors(self.node(5))) == [5, 6]

    def test_neighbors_of_second_element(self):
        assert line_indexes(self.nav.self_and_neighbors(self.node(9))) == [9, 8]

    def test_neighbors_outside_array(self):
        assert line_indexes(self.nav.self_and_neighbors(self.node(12))) == [12, 13]

    def test_neighbors_at_top_level(self):
        assert line_indexes(self.nav.self_and_neighbors(self.node(4))) == [4, 2, 1, 10]


class TestStructuralProperties:
    def setup_method(self):
        self.nav = fixture_navigator()
        self.nodes = structural_nodes(self.nav)

    def test_previous_then_next_round_trips(self):
        for node in self.nodes:
            previous = self.nav.previous_sibling(node)
            if previous is not None:
                assert self.nav.next_sibling(previous) == node

    def test_next_then_previous_round_trips(self):
        for node in self.nodes:
            following = self.nav.next_sibling(node)
            if following is not None:
                assert self.nav.previous_sibling(following) == node

    def test_first_child_parent_round_trips(self):
        for node in self.nodes:
            child = self.nav.first_child(node)
            if child is not None:
                assert self.nav.parent(child) == node

    def test_path_ends_with_parent(self):
        for node in self.nodes:
            path = self.nav.path(node)
            parent = self.nav.parent(node)
            if parent is None:
                assert path == []
            else:
                assert path[-1] == parent

    def test_element_fields_are_all_in_array(self):
        for node in self.nodes:
            if node.is_list_item_start:
                for member in self.nav.self_and_neighbors(node):
                    assert self.nav.is_in_array(member)


class TestMalformedDocument:
    """Over-indented lines and uneven steps still give consistent relations."""

    def setup_method(self):
        self.nav = navigator("a:", "      b:", "        c: 1", "  d:", "          e: 2", "f:")
        self.nodes = structural_nodes(self.nav)

    def node(self, i):
        return self.nav.node_at(i)

    def test_depths(self):
        assert [n.depth for n in self.nodes] == [0, 3, 4, 1, 5, 0]

    def test_first_child_parent_round_trips(self):
        for node in self.nodes:
            child = self.nav.first_child(node)
            if child is not None:
                assert self.nav.parent(child) == node

    def test_sibling_round_trips(self):
        for node in self.nodes:
            following = self.nav.next_sibling(node)
            if following is not None:
                assert self.nav.previous_sibling(following) == node
            previous = self.nav.previous_sibling(node)
            if previous is not None:
                assert self.nav.next_sibling(previous) == node

    def test_over_indented_children(self):
        assert self.nav.first_child(self.node(0)) == self.node(1)
        assert self.nav.first_child(self.node(1)) == self.node(2)
        assert self.nav.first_child(self.node(3)) == self.node(4)
        assert self.nav.first_child(self.node(2)) is None

    def test_parent_skips_deeper_lines(self):
        assert self.nav.parent(self.node(3)) == self.node(0)
        assert line_indexes(self.nav.path(self.node(4))) == [0, 3]

    def test_siblings_across_gaps(self):
        assert self.nav.next_sibling(self.node(0)) == self.node(5)
        assert self.nav.next_sibling(self.node(1)) is None
        assert self.nav.previous_sibling(self.node(3)) is None


class TestSearch:
    def setup_method(self):
        self.nav = fixture_navigator()

    def test_self_or_parent_finds_ancestor(self):
        found = self.nav.self_or_parent(self.nav.node_at(15), lambda n: n.key == "/users")
        assert found.line_index == 10

    def test_self_or_parent_checks_self_first(self):
        node = self.nav.node_at(15)
        assert self.nav.self_or_parent(node, lambda n: n.key == "type") == node

    def test_self_or_parent_exhausted(self):
        assert self.nav.self_or_parent(self.nav.node_at(15), lambda n: False) is None

    def test_self_or_previous(self):
        found = self.nav.self_or_previous(self.nav.node_at(13), lambda n: n.key == "description")
        assert found.line_index == 12

    def test_first_with_custom_step(self):
        found = self.nav.first(self.nav.node_at(2), self.nav.next_sibling, lambda n: n.key == "/users")
        assert found.line_index == 10


class TestLargeDocuments:
    def setup_method(self):
        lines = ["- first: 0"] + [f"  field{i}: {i}" for i in range(3000)]
        self.nav = navigator(*lines)
        self.last = self.nav.node_at(3000)

    def test_membership_walks_iteratively(self):
        assert self.nav.is_in_array(self.last)

    def test_parent_of_root_level_element_field(self):
        assert self.nav.parent(self.last) is None
        assert self.nav.path(self.last) == []

    def test_self_or_previous_reaches_marker(self):
        found = self.nav.self_or_previous(self.last, lambda n: n.is_list_item_start)
        assert found.line_index == 0
