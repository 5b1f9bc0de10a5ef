"""
In-memory span host

A Buffer holds a document's text and every live Overlay over it. Overlays
carry the visibility and style state the reveal cursor and fold controller
set; the frame compiler reads that state back to render each step.

Overlay categories:
    REVEAL   one per segment, hidden until revealed, then faded
    MARKER   pause marker text, hidden for the whole session
    FOLD     collapsed list item body
    IMAGE    inline image link, displayed normally or dimmed
"""

from typing import List, Optional, Tuple

from ..models.span import SpanCategory, ImageTransform


class Overlay:
    """
    A visibility/style span over [start, end) of a Buffer

    hide(), set_fade() and clear_style() drive text visibility. dim() and
    undim() only affect image overlays and are idempotent.
    """

    def __init__(
        self,
        buffer: "Buffer",
        start: int,
        end: int,
        category: SpanCategory,
        image: Optional[str] = None,
    ) -> None:
        self.buffer = buffer
        self.start = start
        self.end = end
        self.category = category
        self.image = image
        self.invisible = False
        self.face: Optional[str] = None
        self.transform = ImageTransform.NORMAL
        self.live = True

    def hide(self) -> None:
        self.invisible = True
        self.face = None

    def set_fade(self, color: str) -> None:
        self.invisible = False
        self.face = color

    def clear_style(self) -> None:
        self.invisible = False
        self.face = None

    def dim(self) -> None:
        """Switch an image to the hidden transform; no-op for text spans"""
        if self.image is None:
            return
        self.transform = ImageTransform.HIDDEN

    def undim(self) -> None:
        """Switch an image back to normal display; no-op for text spans"""
        if self.image is None:
            return
        self.transform = ImageTransform.NORMAL

    def delete(self) -> None:
        """Remove from the buffer; deleting twice is a no-op"""
        if not self.live:
            return
        self.buffer.overlay_delete(self)

    @property
    def styled(self) -> bool:
        """True while the overlay hides or recolours its text"""
        return self.invisible or self.face is not None

    @property
    def dimmed(self) -> bool:
        return self.transform is ImageTransform.HIDDEN

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and self.end > start

    def __repr__(self) -> str:
        return (
            f"Overlay({self.category.value}, {self.start}..{self.end}, "
            f"invisible={self.invisible}, face={self.face!r})"
        )


class Buffer:
    """
    Text plus its live overlays

    Example:
        >>> buffer = Buffer("Hello World")
        >>> buffer.overlay_make(5, 11).hide()
        >>> buffer.text_visible()
        'Hello'
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.overlays: List[Overlay] = []

    @property
    def end(self) -> int:
        return len(self.text)

    def overlay_make(
        self,
        start: int,
        end: int,
        category: SpanCategory = SpanCategory.REVEAL,
        image: Optional[str] = None,
    ) -> Overlay:
        """Create a live overlay, clamped to the text"""
        start = max(0, min(start, self.end))
        end = max(start, min(end, self.end))
        overlay = Overlay(self, start, end, category, image=image)
        self.overlays.append(overlay)
        return overlay

    def overlay_delete(self, overlay: Overlay) -> None:
        if overlay in self.overlays:
            self.overlays.remove(overlay)
        overlay.live = False

    def overlays_in(
        self, start: int, end: int, category: Optional[SpanCategory] = None
    ) -> List[Overlay]:
        """Live overlays intersecting [start, end), optionally of one category"""
        return [
            overlay for overlay in self.overlays
            if overlay.overlaps(start, end)
            and (category is None or overlay.category is category)
        ]

    def image_add(self, start: int, end: int, path: str) -> Overlay:
        """Mark [start, end) as a displayed inline image"""
        return self.overlay_make(start, end, SpanCategory.IMAGE, image=path)

    def images_in(self, start: int, end: int) -> List[Overlay]:
        """Image overlays lying entirely inside [start, end)"""
        return [
            overlay for overlay in self.overlays
            if overlay.category is SpanCategory.IMAGE
            and start <= overlay.start and overlay.end <= end
        ]

    def region_fold(self, start: int, end: int) -> Optional[Overlay]:
        """
        Hide [start, end) under a fold overlay

        Returns:
            The fold overlay (an existing one when the region is already
            folded), or None for an empty region
        """
        if end <= start:
            return None
        for overlay in self.overlays:
            if overlay.category is SpanCategory.FOLD and (overlay.start, overlay.end) == (start, end):
                return overlay
        overlay = self.overlay_make(start, end, SpanCategory.FOLD)
        overlay.hide()
        return overlay

    def region_unfold(self, start: int, end: int) -> int:
        """
        Remove every fold lying inside [start, end)

        Returns:
            Number of folds removed
        """
        folds = [
            overlay for overlay in self.overlays
            if overlay.category is SpanCategory.FOLD
            and start <= overlay.start and overlay.end <= end
        ]
        for overlay in folds:
            overlay.delete()
        return len(folds)

    def region_isFolded(self, start: int, end: int) -> bool:
        """True when a single fold covers all of [start, end)"""
        return any(
            overlay.category is SpanCategory.FOLD
            and overlay.start <= start and end <= overlay.end
            for overlay in self.overlays
        )

    def chars_state(self) -> Tuple[List[bool], List[Optional[str]]]:
        """
        Resolve per-character visibility and face

        Image overlays never hide text. Later overlays win for faces.

        Returns:
            (invisible, faces), each with one entry per character
        """
        invisible = [False] * self.end
        faces: List[Optional[str]] = [None] * self.end
        for overlay in self.overlays:
            if overlay.category is SpanCategory.IMAGE:
                continue
            for pos in range(overlay.start, overlay.end):
                if overlay.invisible:
                    invisible[pos] = True
                elif overlay.face is not None:
                    faces[pos] = overlay.face
        return invisible, faces

    def char_isInvisible(self, pos: int) -> bool:
        return any(
            overlay.invisible and overlay.start <= pos < overlay.end
            for overlay in self.overlays
            if overlay.category is not SpanCategory.IMAGE
        )

    def char_face(self, pos: int) -> Optional[str]:
        face = None
        for overlay in self.overlays:
            if overlay.face is not None and overlay.start <= pos < overlay.end:
                face = overlay.face
        return face

    def text_visible(self) -> str:
        """Text with every invisible character removed"""
        invisible, _ = self.chars_state()
        return ''.join(ch for ch, hidden in zip(self.text, invisible) if not hidden)

    def styles_active(self) -> int:
        """Number of live overlays currently hiding or recolouring text"""
        return sum(
            1 for overlay in self.overlays
            if overlay.category is not SpanCategory.IMAGE and overlay.styled
        )
