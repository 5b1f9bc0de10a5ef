"""
slidepause - Progressive reveal for outline presentations

Pause markers and list items split each slide into segments that are
revealed one step at a time, with fading and folding for long slides.
"""

__version__ = "1.0.0"

from .lib import (
    Parser,
    RevealCursor,
    FoldController,
    Buffer,
    FrameCompiler,
    scan,
    segment,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "Parser",
    "RevealCursor",
    "FoldController",
    "Buffer",
    "FrameCompiler",
    "scan",
    "segment",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
