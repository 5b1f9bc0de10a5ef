"""
Frame compiler for outline presentations

Runs every slide of a document through a reveal session and writes one
rendered frame per step.
"""

import html
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pygments.styles import get_style_by_name
from pygments.token import Token

from ..models.nodes import NodeKind
from ..models.span import ImageTransform, SpanCategory
from .cursor import RevealCursor
from .lexer import OutlineLexer
from .log import LOG
from .overlay import Buffer
from .parser import Parser
from .theme import Theme


def slides_split(source: str) -> List[Tuple[int, str]]:
    """
    Split a document into slides, one per top-level heading subtree

    Text before the first heading forms a slide of its own when it is not
    blank.

    Returns:
        List of (offset, text) pairs in document order

    Example:
        >>> slides_split("intro\\n* A\\nx\\n* B\\ny\\n")
        [(0, 'intro\\n'), (6, '* A\\nx\\n'), (12, '* B\\ny\\n')]
    """
    nodes = Parser(source, strict=False).parse()
    headings = [node for node in nodes if node.kind is NodeKind.HEADING]

    slides: List[Tuple[int, str]] = []
    preamble_end = headings[0].begin if headings else len(source)
    if source[:preamble_end].strip():
        slides.append((0, source[:preamble_end]))
    for heading in headings:
        slides.append((heading.begin, source[heading.begin:heading.end]))
    return slides


class FrameCompiler:
    """
    Compiles an outline document to step-by-step frames

    Responsibilities:
    - Narrow the document to one slide at a time
    - Drive a RevealCursor through every step of each slide
    - Render each step as plain text and highlighted HTML
    - Write an index of every frame
    """

    def __init__(
        self,
        source: str,
        output_dir: str,
        verbosity: int = 1,
        theme_name: Optional[str] = None,
        settings=None,
    ) -> None:
        """
        Initialize compiler

        Args:
            source: Outline document text
            output_dir: Directory for rendered frames
            verbosity: Output verbosity level (0-3)
            theme_name: Theme to render with (default: settings.default_theme)
            settings: AppSettings with the reveal policy (default: appsettings)
        """
        if settings is None:
            from ..config import appsettings
            settings = appsettings

        self.source = source
        self.output_dir = Path(output_dir)
        self.verbosity = verbosity
        self.settings = settings

        self.theme = Theme(theme_name or settings.default_theme)
        LOG(f"Loaded theme: {self.theme.name}", level=2)
        self.distance_colors, self.disabled_color = self.theme.fadeColors_get(
            list(settings.distance_colors), settings.disabled_color
        )
        self.lexer = OutlineLexer()
        self.style = get_style_by_name(self.theme.pygmentsStyle_get())

        self.slide_count = 0
        self.segment_count = 0
        self.frames: List[Dict[str, Any]] = []

    def compile(self) -> Dict[str, Any]:
        """
        Render every step of every slide

        Returns:
            dict with compilation results and statistics
        """
        LOG("Starting frame compilation...", level=2)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        for slide_num, (offset, text) in enumerate(slides_split(self.source), start=1):
            self.slide_count = slide_num
            self.slide_compile(slide_num, text)

        index_file = self.output_dir / "index.html"
        index_file.write_text(self.index_build(), encoding='utf-8')
        LOG(f"Wrote {index_file}", level=2)

        return {
            'status': True,
            'output_dir': str(self.output_dir),
            'index_file': str(index_file),
            'slide_count': self.slide_count,
            'frame_count': len(self.frames),
            'segment_count': self.segment_count,
        }

    def slide_compile(self, slide_num: int, text: str) -> None:
        """Run one slide through a reveal session, writing a frame per step"""
        parser = Parser(text, debug=(self.verbosity >= 3))
        nodes = parser.parse()

        buffer = Buffer(text)
        for image in parser.images:
            buffer.image_add(image.begin, image.end, image.path)

        cursor = RevealCursor(
            buffer,
            settings=self.settings,
            distance_colors=self.distance_colors,
            disabled_color=self.disabled_color,
        )
        cursor.before_unfold.append(
            lambda index: LOG(f"Slide {slide_num}: unfolding item {index}", level=3)
        )
        cursor.init(nodes)
        self.segment_count += cursor.total
        LOG(f"Slide {slide_num}: {cursor.total} segments", level=2)

        step = 0
        self.frame_write(slide_num, step, buffer)
        while cursor.has_more():
            cursor.advance()
            step += 1
            self.frame_write(slide_num, step, buffer)

        cursor.end()

    def frame_write(self, slide_num: int, step: int, buffer: Buffer) -> None:
        """Write the current state of buffer as .txt and .html frames"""
        stem = f"slide-{slide_num:02d}-step-{step:02d}"
        text_file = self.output_dir / f"{stem}.txt"
        html_file = self.output_dir / f"{stem}.html"

        text_file.write_text(buffer.text_visible(), encoding='utf-8')
        html_file.write_text(
            self.htmlDocument_build(self.frameHtml_render(buffer), f"Slide {slide_num}, step {step}"),
            encoding='utf-8',
        )
        self.frames.append({
            'slide': slide_num,
            'step': step,
            'text_file': text_file.name,
            'html_file': html_file.name,
        })
        LOG(f"Wrote {stem}", level=3)

    def tokenColor_get(self, ttype: Any) -> Optional[str]:
        """Pygments style colour for a token type, walking up to known parents"""
        while not self.style.styles_token(ttype) and ttype is not Token:
            ttype = ttype.parent
        color = self.style.style_for_token(ttype).get('color')
        return f"#{color}" if color else None

    def frameHtml_render(self, buffer: Buffer) -> str:
        """
        Render the visible text of buffer as highlighted HTML

        Invisible characters are dropped, faded characters take their fade
        colour, and image links become <img> tags (hidden while dimmed).
        """
        text = buffer.text
        invisible, faces = buffer.chars_state()

        colors: List[Optional[str]] = [None] * len(text)
        for index, ttype, value in self.lexer.get_tokens_unprocessed(text):
            color = self.tokenColor_get(ttype)
            for pos in range(index, min(index + len(value), len(text))):
                colors[pos] = color

        images = {
            overlay.start: overlay
            for overlay in buffer.overlays
            if overlay.category is SpanCategory.IMAGE and overlay.end > overlay.start
        }

        parts: List[str] = []
        run: List[str] = []
        run_color: Optional[str] = None

        def run_flush() -> None:
            if not run:
                return
            escaped = html.escape(''.join(run))
            if run_color:
                parts.append(f'<span style="color: {run_color}">{escaped}</span>')
            else:
                parts.append(escaped)
            run.clear()

        pos = 0
        while pos < len(text):
            image = images.get(pos)
            if image is not None:
                dimmed = image.transform is ImageTransform.HIDDEN
                if dimmed or not invisible[pos]:
                    run_flush()
                    style = ' style="visibility: hidden"' if dimmed else ''
                    src = html.escape(image.image or '', quote=True)
                    parts.append(f'<img src="{src}" alt="{src}"{style}>')
                pos = image.end
                continue

            if invisible[pos]:
                pos += 1
                continue

            color = faces[pos] or colors[pos]
            if color != run_color:
                run_flush()
                run_color = color
            run.append(text[pos])
            pos += 1

        run_flush()
        return ''.join(parts)

    def htmlDocument_build(self, content: str, title: str) -> str:
        """Wrap rendered frame content in a standalone HTML page"""
        return (
            "<!DOCTYPE html>\n"
            "<html>\n<head>\n"
            '<meta charset="utf-8">\n'
            f"<title>{html.escape(title)}</title>\n"
            f"<style>\n{self.theme.css_load()}</style>\n"
            "</head>\n<body>\n"
            f'<pre class="frame">{content}</pre>\n'
            "</body>\n</html>\n"
        )

    def index_build(self) -> str:
        """HTML index linking every frame, grouped by slide"""
        rows: List[str] = []
        current_slide = None
        for frame in self.frames:
            if frame['slide'] != current_slide:
                if current_slide is not None:
                    rows.append("</ul>")
                current_slide = frame['slide']
                rows.append(f"<h2>Slide {current_slide}</h2>\n<ul>")
            rows.append(
                f'<li><a href="{frame["html_file"]}">step {frame["step"]}</a> '
                f'(<a href="{frame["text_file"]}">text</a>)</li>'
            )
        if current_slide is not None:
            rows.append("</ul>")

        return self.htmlDocument_build("", "Frames").replace(
            '<pre class="frame"></pre>', "\n".join(rows)
        )
