"""
Marker scanner

Walks a node forest once and selects the reveal boundaries: every heading,
every pause marker and every eligible list item, in document order.

A pause marker is one of:
    # pause                 (a comment whose text is exactly "pause")
    #+PAUSE:                (any value)
    #+BEAMER: \\pause

Eligibility of list items uses a running minimum indentation: an item is
accepted when its indent is no larger than the smallest indent seen so far,
itself included. This is an online minimum, so a deep item visited before
any shallower one is still accepted.
"""

import sys
from typing import Iterator, List, Optional

from ..models.nodes import Node, NodeKind
from .log import LOG


def nodes_walk(nodes: List[Node]) -> Iterator[Node]:
    """Yield every node of the forest in pre-order (document order)"""
    for node in nodes:
        yield node
        yield from nodes_walk(node.children)


def node_isWellFormed(node: Node) -> bool:
    """
    Check the fields the scanner and segmenter rely on

    Returns:
        False for negative or inverted offsets, list items without an
        indent, and directives without a key
    """
    if node.begin < 0 or node.end < node.begin:
        return False
    if node.kind is NodeKind.LIST_ITEM and node.indent is None:
        return False
    if node.kind is NodeKind.DIRECTIVE and not node.key:
        return False
    return True


def marker_is(node: Node) -> bool:
    """
    Check whether node is a pause marker

    Example:
        >>> marker_is(Node(NodeKind.COMMENT, 0, 8, value=" pause "))
        True
        >>> marker_is(Node(NodeKind.DIRECTIVE, 0, 17, key="BEAMER", value="\\\\pause"))
        True
    """
    if node.kind is NodeKind.COMMENT:
        return (node.value or "").strip() == "pause"
    if node.kind is NodeKind.DIRECTIVE:
        key = (node.key or "").upper()
        if key == "PAUSE":
            return True
        return key == "BEAMER" and (node.value or "").strip() == "\\pause"
    return False


def scan(nodes: List[Node], accept_first_level_only: Optional[bool] = None) -> List[Node]:
    """
    Collect headings, pause markers and eligible list items in document order

    Args:
        nodes: Node forest from the parser
        accept_first_level_only: Only keep items at the running minimum
            indentation (defaults to appsettings.accept_first_level_only)

    Returns:
        Ordered scan result; the input is not modified
    """
    if accept_first_level_only is None:
        from ..config import appsettings
        accept_first_level_only = appsettings.accept_first_level_only

    found: List[Node] = []
    min_indent = sys.maxsize

    for node in nodes_walk(nodes):
        if not node_isWellFormed(node):
            LOG(f"Skipping malformed {node.kind.value} node at {node.begin}..{node.end}", level=2)
            continue

        if node.kind is NodeKind.HEADING:
            found.append(node)
        elif node.kind is NodeKind.LIST_ITEM:
            if not accept_first_level_only:
                found.append(node)
                continue
            indent = node.indent or 0
            min_indent = min(min_indent, indent)
            if indent <= min_indent:
                found.append(node)
        elif marker_is(node):
            found.append(node)

    LOG(f"Scan found {len(found)} boundaries", level=3)
    return found
