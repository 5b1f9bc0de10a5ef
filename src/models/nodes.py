"""
Document node model

Typed spans produced by the outline parser and consumed by the marker
scanner and segmenter. Offsets are character positions in the parsed text.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional


class NodeKind(Enum):
    """
    Closed set of block-level node kinds

    Everything else in the document (paragraphs, blocks, drawers) is plain
    text between nodes.
    """
    HEADING = "heading"        # * Title
    LIST_ITEM = "item"         # - item, + item, 1. item
    COMMENT = "comment"        # # text
    DIRECTIVE = "directive"    # #+KEY: value


@dataclass
class Node:
    """
    A block-level node with its source span

    Attributes:
        kind: Node kind
        begin: Offset of the first character of the node
        end: Offset just past the node (headings span their whole subtree)
        indent: Columns before the bullet (list items only)
        key: Upper-cased directive key (directives only)
        value: Directive value, comment text or heading title
        level: Number of stars (headings only)
        properties: Property drawer entries (headings only)
        children: Nested nodes, in document order
        line_number: 1-based line where the node starts

    Example:
        For "- one\\n- two\\n":
        Node(kind=NodeKind.LIST_ITEM, begin=0, end=6, indent=0, ...)
    """
    kind: NodeKind
    begin: int
    end: int
    indent: Optional[int] = None
    key: Optional[str] = None
    value: Optional[str] = None
    level: Optional[int] = None
    properties: Dict[str, str] = field(default_factory=dict)
    children: List['Node'] = field(default_factory=list)
    line_number: int = 1

    @property
    def size(self) -> int:
        """Number of characters covered by the node"""
        return self.end - self.begin


@dataclass
class ImageLink:
    """
    An inline image link such as [[file:diagram.png]]

    The parser collects these so a span host can mark them as displayed
    images, which the reveal cursor then dims and undims.
    """
    begin: int
    end: int
    path: str


@dataclass(frozen=True)
class Segment:
    """
    A text span revealed as one unit

    Segments produced by the segmenter are non-overlapping, non-blank and
    strictly increasing.
    """
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def text(self, source: str) -> str:
        """Slice of source covered by this segment"""
        return source[self.start:self.end]
