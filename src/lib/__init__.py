"""
slidepause - Progressive reveal for outline presentations

Pause markers and list items split each slide into segments that are
revealed one step at a time.
"""

__version__ = "1.0.0"

from .parser import Parser
from .scanner import scan, marker_is
from .segmenter import segment
from .cursor import RevealCursor
from .folding import FoldController
from .overlay import Buffer, Overlay
from .compiler import FrameCompiler, slides_split
from .log import LOG, state_connectToLogger

__all__ = [
    "Parser",
    "scan",
    "marker_is",
    "segment",
    "RevealCursor",
    "FoldController",
    "Buffer",
    "Overlay",
    "FrameCompiler",
    "slides_split",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
