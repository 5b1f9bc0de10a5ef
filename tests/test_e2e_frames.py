"""
End-to-end frame tests

Tests the full pipeline: outline source -> slides -> reveal sessions ->
rendered frames on disk, and the CLI stages composed with pipeline().
"""

import pytest
from pathlib import Path
import tempfile

from slidepause.config import AppSettings
from slidepause.lib.compiler import FrameCompiler, slides_split
from slidepause.models import ProgramState, pipeline


SOURCE = """* Intro
Welcome
# pause
More
* List
- a
- b
"""


class TestSlideSplit:
    """Test narrowing a document to slides"""

    def test_one_slide_per_top_heading(self):
        slides = slides_split(SOURCE)

        assert len(slides) == 2
        assert slides[0] == (0, "* Intro\nWelcome\n# pause\nMore\n")
        assert slides[1][1] == "* List\n- a\n- b\n"

    def test_preamble_slide(self):
        assert slides_split("intro\n* A\nx\n") == [(0, "intro\n"), (6, "* A\nx\n")]

    def test_blank_preamble_dropped(self):
        assert slides_split("\n\n* A\n") == [(2, "* A\n")]

    def test_subheadings_stay_in_slide(self):
        slides = slides_split("* A\n** B\ntext\n* C\n")
        assert [text for _, text in slides] == ["* A\n** B\ntext\n", "* C\n"]


class TestFrameCompilation:
    """Test rendering frames to disk"""

    def test_frames_written(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            result = FrameCompiler(SOURCE, tmpdir, verbosity=0).compile()

            assert result['status'] is True
            assert result['slide_count'] == 2
            assert result['segment_count'] == 3
            assert result['frame_count'] == 5

            out = Path(tmpdir)
            assert (out / "slide-01-step-00.txt").read_text() == "* Intro\nWelcome\n"
            assert (out / "slide-01-step-01.txt").read_text() == "* Intro\nWelcome\nMore\n"
            assert (out / "slide-02-step-00.txt").read_text() == "* List\n"
            assert (out / "slide-02-step-02.txt").read_text() == "* List\n- a\n- b\n"

    def test_html_frames(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            FrameCompiler(SOURCE, tmpdir, verbosity=0).compile()

            first = (Path(tmpdir) / "slide-01-step-00.html").read_text()
            assert "Welcome" in first
            assert "More" not in first
            assert "pause" not in first

            last = (Path(tmpdir) / "slide-01-step-01.html").read_text()
            assert "More" in last

            index = (Path(tmpdir) / "index.html").read_text()
            assert 'href="slide-02-step-02.html"' in index

    def test_faded_html(self):
        source = "* Slide\n- a\n- b\n- c\n"
        settings = AppSettings(large_text_threshold=0)
        with tempfile.TemporaryDirectory() as tmpdir:
            FrameCompiler(source, tmpdir, verbosity=0, theme_name="default", settings=settings).compile()

            last = (Path(tmpdir) / "slide-01-step-03.html").read_text()
            assert 'color: #b3b3b3' in last
            assert 'color: #7f7f7f' in last

    def test_dimmed_image_html(self):
        source = "* Slide\n# pause\n[[file:plot.png]]\n"
        with tempfile.TemporaryDirectory() as tmpdir:
            FrameCompiler(source, tmpdir, verbosity=0).compile()

            hidden = (Path(tmpdir) / "slide-01-step-00.html").read_text()
            shown = (Path(tmpdir) / "slide-01-step-01.html").read_text()
            assert '<img src="plot.png" alt="plot.png" style="visibility: hidden">' in hidden
            assert '<img src="plot.png" alt="plot.png">' in shown

    def test_document_without_pauses(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            result = FrameCompiler("* Only\nText\n", tmpdir, verbosity=0).compile()

            assert result['frame_count'] == 1
            assert result['segment_count'] == 0


class TestPipeline:
    """Test the CLI stages without the plugin wrapper"""

    def test_stages(self):
        from slidepause.__main__ import env_check, source_parse, frames_compile

        with tempfile.TemporaryDirectory() as tmpdir:
            inputdir = Path(tmpdir) / "in"
            inputdir.mkdir()
            (inputdir / "talk.org").write_text(SOURCE, encoding="utf-8")

            state = ProgramState(
                inputdir=inputdir,
                outputdir=Path(tmpdir) / "out",
                verbosity=0,
                inputFile="talk.org",
                outputSubdir="frames",
            )
            final = pipeline(state, env_check, source_parse, frames_compile)

            assert final.envOK
            assert final.slideCount == 2
            assert final.compileResult['frame_count'] == 5
            assert (Path(tmpdir) / "out" / "frames" / "index.html").exists()

    def test_missing_input_exits(self):
        from slidepause.__main__ import env_check

        with tempfile.TemporaryDirectory() as tmpdir:
            state = ProgramState(
                inputdir=Path(tmpdir),
                outputdir=Path(tmpdir) / "out",
                verbosity=0,
                inputFile="missing.org",
            )
            with pytest.raises(SystemExit):
                env_check(state)
