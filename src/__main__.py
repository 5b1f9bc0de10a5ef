#!/usr/bin/env python3
"""
slidepause - Progressive reveal for outline presentations

Renders an org-style outline presentation as a sequence of frames, one per
reveal step, so a slide's pauses can be reviewed or embedded without an
interactive presenter.

As with other ChRIS plugins, the tool reads from an input directory and
writes to an output directory.

Philosophy:
    - Authors mark pauses in plain text (# pause, #+PAUSE:, #+BEAMER: \\pause)
    - Top-level list items reveal one at a time without any markup
    - Long slides fade what was shown earlier and fold older list items

Usage:
    slidepause inputdir/ outputdir/ --inputFile talk.org

    Each slide (top-level heading) produces slide-NN-step-MM.txt/.html
    frames in outputdir/, plus an index.html linking them.

Examples:
    # Basic rendering
    slidepause . frames/ --inputFile talk.org

    # Dark theme, pause on nested list items too
    slidepause . frames/ --inputFile talk.org --theme dark --allLevels

    # Verbose output
    slidepause . frames/ --inputFile talk.org -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import Parser, FrameCompiler, slides_split, __version__, LOG, state_connectToLogger
from .lib.theme import theme_validate, themes_listAvailable
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
       _ _     _
   ___| (_) __| | ___ _ __   __ _ _   _ ___  ___
  / __| | |/ _` |/ _ \ '_ \ / _` | | | / __|/ _ \
  \__ \ | | (_| |  __/ |_) | (_| | |_| \__ \  __/
  |___/_|_|\__,_|\___| .__/ \__,_|\__,_|___/\___|
                     |_|
  Progressive reveal for outline presentations
"""

# Define CLI arguments
parser = ArgumentParser(
    description="slidepause - Render the reveal steps of an outline presentation",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input outline (.org) file (relative to inputdir)"
)

parser.add_argument(
    "--theme",
    default=appsettings.default_theme,
    type=str,
    help="Frame rendering theme",
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the rendered frames",
)

parser.add_argument(
    "--allLevels",
    action="store_true",
    default=False,
    help="Pause on every list item, not only the top-level ones",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the outline file
            - framesOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if the input file or theme is not found
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile

    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    theme_ok, message = theme_validate(state.theme)
    if not theme_ok:
        print(f"Error: {message}", file=sys.stderr)
        print(f"Available themes: {', '.join(themes_listAvailable())}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    LOG(f"Theme: {state.theme}", level=2)

    state.framesOutputdir = state.outputdir / state.outputSubdir
    state.framesOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.framesOutputdir}", level=2)

    state.envOK = True
    return state


def source_parse(inputstate: ProgramState) -> ProgramState:
    """
    Read the outline file and check that it parses.

    Args:
        inputstate: Program state with inputSourceFile path set

    Returns:
        ProgramState with added fields:
            - sourceText: Raw outline text
            - slideCount: Number of slides (top-level headings plus preamble)

    Exits:
        1 if file read fails or parsing encounters syntax errors
    """

    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        source = state.inputSourceFile.read_text(encoding="utf-8")
        LOG(f"Read {len(source)} characters from {state.inputSourceFile.name}", level=2)
    except OSError as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG("Parsing outline...", level=1)
    try:
        nodes = Parser(source, debug=(state.verbosity >= 3)).parse()
        LOG(f"Parsed {len(nodes)} top-level nodes", level=2)
    except SyntaxError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)

    state.sourceText = source
    state.slideCount = len(slides_split(source))
    LOG(f"Found {state.slideCount} slides", level=2)
    return state


def frames_compile(inputstate: ProgramState) -> ProgramState:
    """
    Render every reveal step of every slide.

    Args:
        inputstate: Program state with sourceText

    Returns:
        ProgramState with added field:
            - compileResult: Dict containing:
                - status: bool (compilation success)
                - output_dir: str (directory holding the frames)
                - slide_count: int (number of slides rendered)
                - frame_count: int (number of frames written)
                - segment_count: int (number of reveal segments)

    Exits:
        1 if sourceText is None or rendering fails
    """

    state = inputstate.copy()

    LOG("Rendering frames...", level=1)

    if state.sourceText is None:
        print("Error: No source text available", file=sys.stderr)
        sys.exit(1)

    settings = appsettings
    if state.allLevels:
        settings = appsettings.model_copy(update={"accept_first_level_only": False})

    try:
        compiler = FrameCompiler(
            source=state.sourceText,
            output_dir=str(state.framesOutputdir),
            verbosity=state.verbosity,
            theme_name=state.theme,
            settings=settings,
        )
        state.compileResult = compiler.compile()
        LOG(f"Rendering complete: {state.compileResult['frame_count']} frames", level=2)
    except Exception as e:
        print(f"Rendering error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display rendering results to user.

    Args:
        inputstate: Program state with compileResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if compileResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.compileResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    if state.verbosity >= 1:
        LOG("\n✓ Rendering successful!", level=1)
        LOG(f"  Output:   {state.compileResult['output_dir']}", level=1)
        LOG(f"  Slides:   {state.compileResult['slide_count']}", level=1)
        LOG(f"  Segments: {state.compileResult['segment_count']}", level=1)
        LOG(f"  Frames:   {state.compileResult['frame_count']}", level=1)
        LOG(f"\nOpen {state.compileResult['index_file']} to browse the frames", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="slidepause - Progressive reveal for outline presentations",
    category="Visualization",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render the reveal steps of an outline presentation.

    Orchestrates the full pipeline:
        1. env_check: Validate paths and theme
        2. source_parse: Read and parse the outline
        3. frames_compile: Render every reveal step of every slide
        4. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
            - inputFile: str - Input outline filename
            - theme: str - Frame rendering theme
            - outputSubdir: str - Output subdirectory name
            - allLevels: bool - Pause on nested list items too
            - verbosity: int - Logging verbosity level (1-3)
        inputdir: Directory containing the outline file
        outputdir: Directory where frames will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, source_parse, frames_compile, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
