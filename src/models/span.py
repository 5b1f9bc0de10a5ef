"""
Visibility/style span interface

The reveal cursor and fold controller never touch rendering directly. They
create and mutate opaque spans through a host that implements SpanHost;
lib/overlay.py provides the in-memory host used by the frame compiler and
the tests.
"""

from enum import Enum
from typing import List, Optional, Protocol


class SpanCategory(Enum):
    """What a span was created for"""
    REVEAL = "reveal"    # one per segment, hidden until revealed
    MARKER = "marker"    # pause marker text, hidden for the whole session
    FOLD = "fold"        # collapsed list item body
    IMAGE = "image"      # inline image display


class ImageTransform(Enum):
    """Display transform of an image span"""
    NORMAL = "normal"
    HIDDEN = "hidden"


class Span(Protocol):
    """Opaque handle over a text range"""

    start: int
    end: int
    category: SpanCategory
    image: Optional[str]

    def hide(self) -> None: ...

    def set_fade(self, color: str) -> None: ...

    def clear_style(self) -> None: ...

    def dim(self) -> None: ...

    def undim(self) -> None: ...

    def delete(self) -> None: ...


class SpanHost(Protocol):
    """Owner of the text and of every live span over it"""

    text: str

    def overlay_make(self, start: int, end: int, category: SpanCategory) -> Span: ...

    def images_in(self, start: int, end: int) -> List[Span]: ...

    def region_fold(self, start: int, end: int) -> Optional[Span]: ...

    def region_unfold(self, start: int, end: int) -> int: ...

    def region_isFolded(self, start: int, end: int) -> bool: ...
