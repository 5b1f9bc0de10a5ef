"""
Basic parser tests - simplest cases

Tests empty source, single nodes of each kind, drawers, blocks and images.
"""

import pytest

from slidepause.lib.parser import Parser
from slidepause.models.nodes import NodeKind


class TestEmptyAndSimple:
    """Test empty source and single nodes"""

    def test_empty_source(self):
        """Empty string should parse to empty list"""
        parser = Parser("")
        assert parser.parse() == []

    def test_whitespace_only(self):
        """Only whitespace should parse to empty list"""
        parser = Parser("   \n\n  \t  ")
        assert parser.parse() == []

    def test_plain_text_has_no_nodes(self):
        """Paragraph text is not a node"""
        parser = Parser("Just a paragraph\nspanning two lines\n")
        assert parser.parse() == []

    def test_heading(self):
        """Heading spans its whole subtree"""
        nodes = Parser("* Title\nbody\n").parse()

        assert len(nodes) == 1
        heading = nodes[0]
        assert heading.kind is NodeKind.HEADING
        assert heading.level == 1
        assert heading.value == "Title"
        assert heading.begin == 0
        assert heading.end == 13

    def test_bold_text_is_not_a_heading(self):
        """Stars must be followed by whitespace to open a heading"""
        assert Parser("*bold* text\n").parse() == []


class TestComments:
    """Test # comment lines"""

    def test_single_comment(self):
        nodes = Parser("# pause\n").parse()

        assert len(nodes) == 1
        assert nodes[0].kind is NodeKind.COMMENT
        assert nodes[0].value == "pause"
        assert (nodes[0].begin, nodes[0].end) == (0, 8)

    def test_consecutive_comments_merge(self):
        """Adjacent comment lines form one node"""
        nodes = Parser("# one\n# two\n").parse()

        assert len(nodes) == 1
        assert nodes[0].value == "one\ntwo"
        assert nodes[0].end == 12

    def test_bare_hash(self):
        """A lone # is an empty comment"""
        nodes = Parser("#\n").parse()
        assert nodes[0].kind is NodeKind.COMMENT
        assert nodes[0].value == ""

    def test_line_number(self):
        nodes = Parser("text\n# pause\n").parse()
        assert nodes[0].line_number == 2


class TestDirectives:
    """Test #+KEY: value lines"""

    def test_pause_directive(self):
        nodes = Parser("#+PAUSE:\n").parse()

        assert nodes[0].kind is NodeKind.DIRECTIVE
        assert nodes[0].key == "PAUSE"
        assert nodes[0].value == ""

    def test_key_is_upper_cased(self):
        nodes = Parser("#+beamer: \\pause\n").parse()

        assert nodes[0].key == "BEAMER"
        assert nodes[0].value == "\\pause"

    def test_directive_without_colon_is_text(self):
        """#+pause with no colon is neither directive nor comment"""
        assert Parser("#+pause\n").parse() == []


class TestListItems:
    """Test list item recognition"""

    def test_dash_items(self):
        nodes = Parser("- one\n- two\n").parse()

        assert [node.kind for node in nodes] == [NodeKind.LIST_ITEM, NodeKind.LIST_ITEM]
        assert [(node.begin, node.end) for node in nodes] == [(0, 6), (6, 12)]
        assert [node.indent for node in nodes] == [0, 0]
        assert nodes[0].value == "one"

    def test_ordered_items(self):
        nodes = Parser("1. first\n2) second\n").parse()
        assert len(nodes) == 2
        assert all(node.kind is NodeKind.LIST_ITEM for node in nodes)

    def test_indented_star_bullet(self):
        """An indented * is a bullet, not a heading"""
        nodes = Parser("  * star\n").parse()

        assert nodes[0].kind is NodeKind.LIST_ITEM
        assert nodes[0].indent == 2

    def test_horizontal_rule_is_not_an_item(self):
        assert Parser("-----\n").parse() == []


class TestDrawersAndBlocks:
    """Test property drawers and opaque blocks"""

    def test_property_drawer(self):
        source = "* Slide\n:PROPERTIES:\n:FADING-ELEMENTS: nil\n:END:\ntext\n"
        nodes = Parser(source).parse()

        heading = nodes[0]
        assert heading.properties == {"FADING-ELEMENTS": "nil"}
        assert heading.children == []

    def test_block_is_opaque(self):
        """Markers and items inside a block are not nodes"""
        source = "#+begin_src python\n# pause\n- x\n#+end_src\n"
        assert Parser(source).parse() == []

    def test_unterminated_block_lenient(self):
        """Non-strict mode swallows the rest of the text"""
        source = "#+begin_example\n# pause\n"
        assert Parser(source, strict=False).parse() == []

    def test_unterminated_block_strict(self):
        parser = Parser("#+begin_example\n# pause\n", strict=True)
        with pytest.raises(SyntaxError, match="Unterminated"):
            parser.parse()

    def test_unterminated_drawer_strict(self):
        parser = Parser("* Slide\n:PROPERTIES:\n:A: 1\n", strict=True)
        with pytest.raises(SyntaxError, match="PROPERTIES"):
            parser.parse()


class TestImages:
    """Test inline image link collection"""

    def test_file_image(self):
        parser = Parser("See [[file:arch.png]] now\n")
        parser.parse()

        assert len(parser.images) == 1
        image = parser.images[0]
        assert image.path == "arch.png"
        assert (image.begin, image.end) == (4, 21)

    def test_described_image(self):
        parser = Parser("[[./plot.JPG][the plot]]\n")
        parser.parse()
        assert parser.images[0].path == "./plot.JPG"

    def test_non_image_link(self):
        parser = Parser("[[https://example.org]]\n")
        parser.parse()
        assert parser.images == []
