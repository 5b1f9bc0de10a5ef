"""
Models package for slidepause

Contains data structures and type definitions for the reveal pipeline.
"""

from .state import ProgramState, CursorState, pipeline
from .nodes import NodeKind, Node, ImageLink, Segment
from .span import Span, SpanHost, SpanCategory, ImageTransform

__all__ = [
    "ProgramState",
    "CursorState",
    "pipeline",
    "NodeKind",
    "Node",
    "ImageLink",
    "Segment",
    "Span",
    "SpanHost",
    "SpanCategory",
    "ImageTransform",
]
