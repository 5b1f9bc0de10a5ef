"""
Segmenter tests

Tests the adjacency table, blank gap elision, item clipping and the
ordering invariants of the produced segments.
"""

import pytest

from slidepause.lib.parser import Parser
from slidepause.lib.scanner import scan, nodes_walk
from slidepause.lib.segmenter import segment, ADJACENCY, Boundary, Pair
from slidepause.models.nodes import Node, NodeKind, Segment


def segmented(source: str, **kwargs):
    return segment(scan(Parser(source).parse(), **kwargs), source)


def texts(source: str, **kwargs):
    return [seg.text(source) for seg in segmented(source, **kwargs)]


class TestAdjacencyTable:
    """Test the pair emission rules"""

    def test_table_is_total(self):
        """Every (prev, cur) role combination has a rule"""
        for prev in (Boundary.HEADING, Boundary.ITEM, Boundary.MARKER):
            for cur in Boundary:
                assert (prev, cur) in ADJACENCY

    @pytest.mark.parametrize("cur", list(Boundary))
    def test_heading_pairs_emit_nothing(self, cur):
        heading = Node(NodeKind.HEADING, 0, 50, level=1, value="H")
        pair = Pair(prev=heading, prev_span=(0, 50), cur_begin=10, cur_span=(10, 20))
        assert ADJACENCY[(Boundary.HEADING, cur)](pair) == []

    def test_item_then_item(self):
        item = Node(NodeKind.LIST_ITEM, 0, 6, indent=0)
        pair = Pair(prev=item, prev_span=(0, 6), cur_begin=6, cur_span=(6, 12))
        assert ADJACENCY[(Boundary.ITEM, Boundary.ITEM)](pair) == [(0, 6)]

    def test_marker_then_item(self):
        marker = Node(NodeKind.COMMENT, 0, 8, value="pause")
        pair = Pair(prev=marker, prev_span=(0, 8), cur_begin=14, cur_span=(14, 20))
        assert ADJACENCY[(Boundary.MARKER, Boundary.ITEM)](pair) == [(8, 14), (14, 20)]


class TestConcreteScenarios:
    """Test the documented reference documents"""

    def test_two_comment_pauses(self):
        source = "# pause\nHello\n# pause\nWorld"
        segments = segmented(source)

        assert segments == [Segment(8, 14), Segment(22, 27)]
        assert [seg.text(source).strip() for seg in segments] == ["Hello", "World"]

    def test_three_item_list(self):
        source = "- one\n- two\n- three\n"
        assert texts(source) == ["- one\n", "- two\n", "- three\n"]

    def test_heading_then_marker(self):
        """The heading pair emits nothing; the marker pairs with its successor"""
        source = "* Slide\n# pause\nText\n"
        assert texts(source) == ["Text\n"]

    def test_heading_then_marker_at_end(self):
        source = "* Slide\nintro\n# pause\n"
        assert segmented(source) == []


class TestBlankGaps:
    """Test blank gap elision"""

    def test_whitespace_between_markers(self):
        source = "# pause\n\n   \n# pause\nWorld"
        assert texts(source) == ["World"]

    def test_text_between_markers(self):
        source = "# pause\nA\n# pause\n"
        assert texts(source) == ["A\n"]

    def test_no_markers(self):
        assert segmented("Just some text\n") == []

    def test_empty_document(self):
        assert segment([], "") == []


class TestItemsAndMarkers:
    """Test mixes of items, markers and headings"""

    def test_marker_before_items_no_duplicates(self):
        source = "# pause\n- a\n- b\n"
        assert texts(source) == ["- a\n", "- b\n"]

    def test_item_then_marker(self):
        source = "- a\n# pause\ntext\n"
        assert texts(source) == ["- a\n", "text\n"]

    def test_item_then_heading(self):
        source = "* S\n- a\nmiddle\n** T\nend\n"
        assert texts(source) == ["- a\n", "middle\n"]

    def test_marker_then_heading(self):
        source = "# pause\nA\n* H\nB\n"
        assert texts(source) == ["A\n"]

    def test_text_between_items_not_segmented(self):
        """ITEM followed by ITEM reveals only the first item"""
        source = "- a\nbetween\n- b\n"
        assert texts(source) == ["- a\n", "- b\n"]

    def test_nested_items_first_level(self):
        source = "- a\n  - b\n- c\n"
        assert texts(source, accept_first_level_only=True) == ["- a\n  - b\n", "- c\n"]

    def test_nested_items_all_levels(self):
        """Parents are clipped at their first nested item"""
        source = "- a\n  - b\n- c\n"
        assert texts(source, accept_first_level_only=False) == ["- a\n", "  - b\n", "- c\n"]

    def test_marker_inside_item(self):
        source = "- a\n  # pause\n  rest\n- b\n"
        assert texts(source) == ["- a\n", "  rest\n", "- b\n"]


SAMPLES = [
    "# pause\nHello\n# pause\nWorld",
    "* A\n- one\n  - sub\n# pause\nText\n** B\n- two\n#+PAUSE:\nmore\n* C\n#+BEAMER: \\pause\nend\n",
    "intro\n- a\n\n- b\n  # pause\n  rest\nparagraph\n# pause\n\n* H\n- c\n",
    "- a\n  - b\n    - c\n  - d\n- e\n",
]


class TestInvariants:
    """Test ordering and heading invariants over sample documents"""

    @pytest.mark.parametrize("source", SAMPLES)
    @pytest.mark.parametrize("first_level", [True, False])
    def test_ordered_and_disjoint(self, source, first_level):
        segments = segmented(source, accept_first_level_only=first_level)

        for seg in segments:
            assert 0 <= seg.start < seg.end <= len(source)
            assert seg.text(source).strip()
        for before, after in zip(segments, segments[1:]):
            assert after.start >= before.end
            assert after.start > before.start

    @pytest.mark.parametrize("source", SAMPLES)
    def test_no_heading_crossing(self, source):
        headings = [
            node for node in nodes_walk(Parser(source).parse())
            if node.kind is NodeKind.HEADING
        ]
        for seg in segmented(source):
            for heading in headings:
                assert not seg.start < heading.begin < seg.end
                assert not seg.start < heading.end < seg.end

    def test_malformed_node_keeps_order(self):
        """An out-of-place node cannot produce overlapping segments"""
        source = "# pause\nHello\n# pause\nWorld"
        found = [
            Node(NodeKind.COMMENT, 0, 8, value="pause"),
            Node(NodeKind.COMMENT, 3, 5, value="pause"),
            Node(NodeKind.COMMENT, 14, 22, value="pause"),
        ]
        segments = segment(found, source)

        assert segments
        for before, after in zip(segments, segments[1:]):
            assert after.start >= before.end
