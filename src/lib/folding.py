"""
Fold controller

Folds and unfolds the eligible list items of the current slide by their
position among those items. The fold state itself lives in the span host;
the controller only knows which text range belongs to which item.
"""

from typing import List, Optional, Tuple

from ..models.nodes import Node
from ..models.span import SpanHost
from .log import LOG


class FoldController:
    """
    Collapse or expand list items by index

    An item's body is everything after its first line, i.e. its continuation
    lines and nested items. Items without a body cannot be folded, and
    indices outside the item list are ignored.
    """

    def __init__(self, host: SpanHost, items: List[Node]) -> None:
        self.host = host
        self.items = items

    def body_range(self, index: int) -> Optional[Tuple[int, int]]:
        """
        Text range folded for the item at index

        Runs from the newline ending the item's first line up to, but not
        including, the newline ending its last line.
        """
        if not 0 <= index < len(self.items):
            return None
        item = self.items[index]
        text = self.host.text
        first_break = text.find('\n', item.begin, item.end)
        if first_break == -1:
            return None
        end = min(item.end, len(text))
        if end > item.begin and text[end - 1] == '\n':
            end -= 1
        if end <= first_break:
            return None
        return first_break, end

    def fold(self, index: int) -> None:
        body = self.body_range(index)
        if body is None:
            return
        self.host.region_fold(*body)
        LOG(f"Folded item {index}", level=3)

    def unfold(self, index: int) -> None:
        """Expand the item at index fully, nested folds included"""
        if not 0 <= index < len(self.items):
            return
        item = self.items[index]
        removed = self.host.region_unfold(item.begin, item.end)
        if removed:
            LOG(f"Unfolded item {index}", level=3)

    def isFolded(self, index: int) -> bool:
        body = self.body_range(index)
        if body is None:
            return False
        return self.host.region_isFolded(*body)

    def unfold_all(self) -> None:
        for index in range(len(self.items)):
            self.unfold(index)
