"""
Reveal cursor

Drives one reveal session over one document: builds the segments, hides
them, and reveals them one at a time on advance().

States:
    uninitialized -> ready (current == 0, everything hidden)
                  -> revealing (0 < current < N)
                  -> complete (current == N)

In large-text mode every advance also folds the list item fold_age steps
behind, unfolds the current one, and fades earlier segments by how many
reveals ago they were shown.

Example:
    buffer = Buffer(text)
    cursor = RevealCursor(buffer)
    cursor.init(Parser(text).parse())
    while cursor.has_more():
        cursor.advance()
    cursor.reset()
"""

import time
from typing import Callable, List, Optional

from ..models.nodes import Node, NodeKind
from ..models.span import SpanCategory, SpanHost
from ..models.state import CursorState
from .folding import FoldController
from .log import LOG
from .scanner import scan, marker_is, nodes_walk
from .segmenter import segment


FADING_PROPERTY = "FADING-ELEMENTS"
TRUTHY = {"t", "true", "yes", "on", "1"}
FALSY = {"nil", "false", "no", "off", "0", "()"}


def flag_parse(value: Optional[str]) -> Optional[bool]:
    """
    Read a FADING-ELEMENTS value

    Returns:
        True or False for a recognised literal, None otherwise
    """
    if value is None:
        return None
    word = value.strip().lower()
    if word in TRUTHY:
        return True
    if word in FALSY:
        return False
    return None


class RevealCursor:
    """
    Stateful position over the reveal segments of one document

    Attributes:
        host: Span host owning the document text
        settings: AppSettings providing the reveal policy
        state: CursorState of the current session
        folds: FoldController over the session's eligible list items
        before_unfold: Callables run with the item index before it unfolds
        after_unfold: Callables run with the item index after it unfolds
    """

    def __init__(
        self,
        host: SpanHost,
        settings=None,
        distance_colors: Optional[List[str]] = None,
        disabled_color: Optional[str] = None,
    ) -> None:
        if settings is None:
            from ..config import appsettings
            settings = appsettings

        self.host = host
        self.settings = settings
        self.distance_colors = list(distance_colors or settings.distance_colors)
        self.disabled_color = disabled_color or settings.disabled_color
        self.state = CursorState()
        self.folds: Optional[FoldController] = None
        self.before_unfold: List[Callable[[int], None]] = []
        self.after_unfold: List[Callable[[int], None]] = []

    @property
    def current(self) -> int:
        return self.state.current

    @property
    def total(self) -> int:
        return self.state.total

    @property
    def segments(self):
        return self.state.segments

    def init(self, nodes: List[Node]) -> None:
        """
        Start a session over the parsed document

        Any previous session is released first. Every segment is hidden,
        images inside hidden segments are dimmed, and pause markers are
        hidden for the whole session.
        """
        self.reset()

        text = self.host.text
        found = scan(nodes, self.settings.accept_first_level_only)
        state = CursorState(segments=segment(found, text, len(text)))

        for seg in state.segments:
            span = self.host.overlay_make(seg.start, seg.end, SpanCategory.REVEAL)
            span.hide()
            state.spans.append(span)
            for image in self.host.images_in(seg.start, seg.end):
                image.dim()
                if image not in state.dimmed:
                    state.dimmed.append(image)

        for node in found:
            if marker_is(node):
                span = self.host.overlay_make(node.begin, node.end, SpanCategory.MARKER)
                span.hide()
                state.text_spans.append(span)

        items = [node for node in found if node.kind is NodeKind.LIST_ITEM]
        self.folds = FoldController(self.host, items)
        state.large_text = self.largeText_detect(nodes, len(text))
        self.state = state

        LOG(
            f"Reveal session: {state.total} segments, {len(state.text_spans)} markers, "
            f"{len(items)} items, large-text {'on' if state.large_text else 'off'}",
            level=2,
        )

    def largeText_detect(self, nodes: List[Node], doc_size: int) -> bool:
        """
        Decide whether fading and folding run for this document

        The first heading's FADING-ELEMENTS property, or a #+FADING-ELEMENTS:
        directive inside its subtree, wins when it holds a recognised value.
        Otherwise the first heading's subtree (the whole document when there
        is no heading) must exceed large_text_threshold characters.
        """
        heading = next((node for node in nodes_walk(nodes) if node.kind is NodeKind.HEADING), None)

        if heading is not None:
            override = flag_parse(heading.properties.get(FADING_PROPERTY))
            if override is not None:
                return override
            scope = heading.children
        else:
            scope = nodes

        for node in nodes_walk(scope):
            if node.kind is NodeKind.DIRECTIVE and (node.key or "").upper() == FADING_PROPERTY:
                override = flag_parse(node.value)
                if override is not None:
                    return override

        size = heading.size if heading is not None else doc_size
        return size > self.settings.large_text_threshold

    def has_more(self) -> bool:
        return self.state.current < self.state.total

    def fadeColor_get(self, distance: int) -> str:
        if 1 <= distance <= len(self.distance_colors):
            return self.distance_colors[distance - 1]
        return self.disabled_color

    def fade_apply(self) -> None:
        """Recolour every revealed segment by its distance behind current"""
        state = self.state
        for index in range(state.current - 1, -1, -1):
            state.spans[index].set_fade(self.fadeColor_get(state.current - index))

    def hooks_run(self, hooks: List[Callable[[int], None]], index: int) -> None:
        for hook in hooks:
            hook(index)

    def advance(self) -> None:
        """
        Reveal the next segment

        Safe to call in the complete state, where it does nothing.
        """
        state = self.state
        if state.done():
            return

        if state.large_text and self.folds is not None:
            fold_age = self.settings.fold_age
            if state.current >= fold_age:
                self.folds.fold(state.current - fold_age)
            self.hooks_run(self.before_unfold, state.current)
            self.folds.unfold(state.current)
            self.hooks_run(self.after_unfold, state.current)
            self.fade_apply()

        span = state.spans[state.current]
        span.clear_style()
        for image in self.host.images_in(span.start, span.end):
            image.undim()

        state.current += 1
        LOG(f"Revealed segment {state.current}/{state.total}", level=3)

    def jump_to_end(
        self,
        delay: Optional[float] = None,
        cancel: Optional[Callable[[], bool]] = None,
    ) -> None:
        """
        Advance until every segment is revealed

        Args:
            delay: Seconds between steps (defaults to settings.jump_delay)
            cancel: Polled before each step; returning True stops the jump
        """
        if delay is None:
            delay = self.settings.jump_delay

        while self.has_more():
            if cancel is not None and cancel():
                LOG(f"Jump cancelled at segment {self.state.current}", level=2)
                return
            self.advance()
            if delay > 0 and self.has_more():
                time.sleep(delay)

    def reset(self) -> None:
        """
        Release the session

        Restores dimmed images, deletes every reveal and marker span,
        expands folded items and returns to current == 0.
        """
        state = self.state
        for image in state.dimmed:
            image.undim()
        for span in state.spans + state.text_spans:
            span.delete()
        if self.folds is not None:
            self.folds.unfold_all()

        self.state = CursorState()
        self.folds = None

    def end(self) -> None:
        self.reset()
