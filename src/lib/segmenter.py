"""
Segmenter

Turns an ordered scan result into the ordered, non-overlapping list of
reveal segments.

Consecutive boundaries are paired, (None, first) ... (last, END), where END
is the end of the document. Each pair emits zero, one or two spans through
the ADJACENCY table:

    prev     cur              emission
    HEADING  any              nothing
    ITEM     END              item, gap(item end, doc end)
    ITEM     ITEM             item
    ITEM     MARKER/HEADING   item, gap(item end, cur begin)
    MARKER   END              gap(marker end, doc end)
    MARKER   ITEM             gap(marker end, item begin), item
    MARKER   MARKER/HEADING   gap(marker end, cur begin)

An item's span stops at the next boundary when that boundary sits inside
the item, so nested items and markers split their parent instead of
overlapping it. Blank spans are dropped, as is anything that would start
before the previous segment ends.
"""

from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from ..models.nodes import Node, NodeKind, Segment
from .log import LOG


class Boundary(Enum):
    """Role of a scan result element in a pair"""
    HEADING = "heading"
    ITEM = "item"
    MARKER = "marker"
    END = "end"


class Pair(NamedTuple):
    """Two consecutive boundaries with their resolved offsets"""
    prev: Node
    prev_span: Tuple[int, int]
    cur_begin: int
    cur_span: Tuple[int, int]


def boundary_classify(node: Optional[Node]) -> Boundary:
    """Map a scan result element (or the END sentinel, None) to its role"""
    if node is None:
        return Boundary.END
    if node.kind is NodeKind.HEADING:
        return Boundary.HEADING
    if node.kind is NodeKind.LIST_ITEM:
        return Boundary.ITEM
    return Boundary.MARKER


def nothing_emit(pair: Pair) -> List[Tuple[int, int]]:
    return []


def item_emit(pair: Pair) -> List[Tuple[int, int]]:
    return [pair.prev_span]


def itemGap_emit(pair: Pair) -> List[Tuple[int, int]]:
    return [pair.prev_span, (pair.prev_span[1], pair.cur_begin)]


def gap_emit(pair: Pair) -> List[Tuple[int, int]]:
    return [(pair.prev.end, pair.cur_begin)]


def gapItem_emit(pair: Pair) -> List[Tuple[int, int]]:
    return [(pair.prev.end, pair.cur_begin), pair.cur_span]


ADJACENCY: Dict[Tuple[Boundary, Boundary], Callable[[Pair], List[Tuple[int, int]]]] = {
    (Boundary.HEADING, Boundary.HEADING): nothing_emit,
    (Boundary.HEADING, Boundary.ITEM): nothing_emit,
    (Boundary.HEADING, Boundary.MARKER): nothing_emit,
    (Boundary.HEADING, Boundary.END): nothing_emit,
    (Boundary.ITEM, Boundary.END): itemGap_emit,
    (Boundary.ITEM, Boundary.ITEM): item_emit,
    (Boundary.ITEM, Boundary.MARKER): itemGap_emit,
    (Boundary.ITEM, Boundary.HEADING): itemGap_emit,
    (Boundary.MARKER, Boundary.END): gap_emit,
    (Boundary.MARKER, Boundary.ITEM): gapItem_emit,
    (Boundary.MARKER, Boundary.MARKER): gap_emit,
    (Boundary.MARKER, Boundary.HEADING): gap_emit,
}


def spans_resolve(found: List[Node], doc_end: int) -> List[Tuple[int, int]]:
    """
    Span of every scan result element, with items clipped at inner boundaries

    Example:
        "- a\\n  - b\\n" scanned with every item eligible gives
        [(0, 4), (4, 10)] rather than [(0, 10), (4, 10)]
    """
    spans: List[Tuple[int, int]] = []
    for index, node in enumerate(found):
        end = min(node.end, doc_end)
        if node.kind is NodeKind.LIST_ITEM and index + 1 < len(found):
            following = found[index + 1].begin
            if node.begin <= following < end:
                end = following
        spans.append((node.begin, end))
    return spans


def segment(found: List[Node], text: str, doc_end: Optional[int] = None) -> List[Segment]:
    """
    Build reveal segments from a scan result

    Args:
        found: Scan result in document order
        text: Document text, used to drop blank spans
        doc_end: Offset of the end of the document (defaults to len(text))

    Returns:
        Non-overlapping, non-blank segments with strictly increasing starts

    Example:
        >>> text = "# pause\\nHello\\n# pause\\nWorld"
        >>> [s.text(text) for s in segment(scan(Parser(text).parse()), text)]
        ['Hello\\n', 'World']
    """
    if doc_end is None:
        doc_end = len(text)
    if not found:
        return []

    spans = spans_resolve(found, doc_end)
    raw: List[Tuple[int, int]] = []

    # The synthetic (None, first) pair never emits, so pairing starts at 1
    for index in range(1, len(found) + 1):
        prev = found[index - 1]
        cur = found[index] if index < len(found) else None
        pair = Pair(
            prev=prev,
            prev_span=spans[index - 1],
            cur_begin=cur.begin if cur is not None else doc_end,
            cur_span=spans[index] if cur is not None else (doc_end, doc_end),
        )
        raw.extend(ADJACENCY[(boundary_classify(prev), boundary_classify(cur))](pair))

    segments: List[Segment] = []
    last_end = 0
    for start, end in raw:
        start = max(start, last_end)
        end = min(end, doc_end)
        if end <= start or not text[start:end].strip():
            continue
        segments.append(Segment(start, end))
        last_end = end

    LOG(f"Segmented {len(found)} boundaries into {len(segments)} segments", level=3)
    return segments
