"""
Program state, cursor state and pipeline helper

Defines the ProgramState dataclass carried through the CLI pipeline, the
CursorState owned by a single reveal session, and the pipeline() helper for
composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field

from .nodes import Segment


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class CursorState:
    """
    State of one reveal session over one document

    Owned exclusively by a RevealCursor. Every span listed here is live in
    the host until the cursor is reset.

    Attributes:
        current: Index of the next segment to reveal (len(segments) when done)
        segments: Ordered reveal segments
        spans: One reveal span per segment, parallel to segments
        text_spans: One hidden span per pause marker
        dimmed: Image spans this session dimmed and must restore
        large_text: Whether fading and folding run on advance
    """
    current: int = 0
    segments: List[Segment] = field(default_factory=list)
    spans: List[Any] = field(default_factory=list)
    text_spans: List[Any] = field(default_factory=list)
    dimmed: List[Any] = field(default_factory=list)
    large_text: bool = False

    @property
    def total(self) -> int:
        return len(self.segments)

    def done(self) -> bool:
        return self.current >= self.total


@dataclass
class ProgramState:
    """
    Central state container for the frame compilation pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, theme, outputSubdir, allLevels
        - env_check: inputSourceFile, framesOutputdir, envOK
        - source_parse: sourceText, slideCount
        - frames_compile: compileResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the source outline file
        outputdir: Base output directory for rendered frames
        verbosity: Logging verbosity level (1-3)
        inputFile: Input outline filename (relative to inputdir)
        theme: Theme name used to render frames
        outputSubdir: Subdirectory within outputdir for output
        allLevels: Pause on every list item, not just the top-level ones
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the input file
        framesOutputdir: Final output directory (outputdir + outputSubdir)
        sourceText: Raw text of the input file
        slideCount: Number of slides found in the source
        compileResult: Compilation results (output_dir, frame_count, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    theme: str = field(default="default")
    outputSubdir: str = field(default=".")
    allLevels: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    framesOutputdir: Path = field(default=Path("/"))
    sourceText: Optional[str] = field(default=None)
    slideCount: int = field(default=0)
    compileResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, theme, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for rendered frames

        Returns:
            ProgramState instance with all recognised CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Drop CLI options that have no ProgramState field
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_parse,
            frames_compile,
            results_report
        )

    This is equivalent to:
        results_report(frames_compile(source_parse(env_check(initial_state))))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
