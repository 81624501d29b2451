"""
Tests for caption embedding.
"""
import random

import pytest


class TestOverlayFilters:
    """Tests for strategy dispatch."""

    def test_dispatch(self, sample_segments):
        from reelforge.captions.engine import overlay_filters
        from reelforge.captions.models import CaptionOptions

        options = CaptionOptions()
        assert {f.role for f in overlay_filters("word-fill", sample_segments, options)} == {"base", "highlight"}
        assert {f.role for f in overlay_filters("glitch", sample_segments, options)} == {"effect"}
        assert {f.role for f in overlay_filters("bounce", sample_segments, options)} == {"animation"}
        assert overlay_filters("hormozi", sample_segments, options) == []
        assert overlay_filters("none", sample_segments, options) == []


class TestEmbedCaptions:
    """Tests for embed_captions with a fake ffmpeg."""

    def test_no_segments_returns_input(self, fake_ffmpeg):
        """Nothing to draw -> the exact input bytes, no subprocess."""
        from reelforge.captions.engine import embed_captions
        from reelforge.captions.models import CaptionOptions

        assert embed_captions(b"original", [], CaptionOptions()) == b"original"
        assert fake_ffmpeg.calls == []

    def test_blank_text_returns_input(self, fake_ffmpeg):
        from reelforge.captions.engine import embed_captions
        from reelforge.captions.models import CaptionOptions, SubtitleSegment

        segments = [SubtitleSegment(text="  ", start_time=0, end_time=1)]
        assert embed_captions(b"original", segments, CaptionOptions(animation_style="glitch")) == b"original"
        assert embed_captions(b"original", segments, CaptionOptions(animation_style="hormozi")) == b"original"
        assert fake_ffmpeg.calls == []

    def test_subtitle_file_style(self, fake_ffmpeg, sample_segments):
        """Styled captions write an ASS script and burn it with the ass filter."""
        from reelforge.captions.engine import embed_captions
        from reelforge.captions.models import CaptionOptions

        result = embed_captions(b"video", sample_segments, CaptionOptions(animation_style="hormozi"), random.Random(1))

        assert result == b"fake-media-output"
        cmd = fake_ffmpeg.commands[0]
        vf = cmd[cmd.index("-vf") + 1]
        assert vf.startswith("ass=")
        assert vf.endswith("captions.ass")
        assert "Title: Hormozi Style" in fake_ffmpeg.files["captions.ass"]
        assert cmd[cmd.index("-c:a") + 1] == "copy"
        assert fake_ffmpeg.timeouts == [600]

    def test_unknown_style_falls_back(self, fake_ffmpeg, sample_segments):
        """An unknown style still renders plain subtitles."""
        from reelforge.captions.engine import embed_captions
        from reelforge.captions.models import CaptionOptions

        embed_captions(b"video", sample_segments, CaptionOptions(animation_style="confetti"))
        assert "Style: Default" in fake_ffmpeg.files["captions.ass"]

    def test_word_style_uses_drawtext(self, fake_ffmpeg):
        """Word-highlight styles become a drawtext chain."""
        from reelforge.captions.engine import embed_captions
        from reelforge.captions.models import CaptionOptions, SubtitleSegment, WordTiming

        segments = [SubtitleSegment(
            text="A B",
            start_time=0,
            end_time=2,
            word_timings=[WordTiming(word="A", start=0, end=1), WordTiming(word="B", start=1, end=2)],
        )]
        embed_captions(b"video", segments, CaptionOptions(animation_style="word-highlight"))

        cmd = fake_ffmpeg.commands[0]
        vf = cmd[cmd.index("-vf") + 1]
        assert vf.count("drawtext=") == 4
        assert "ass=" not in vf
        assert "captions.ass" not in fake_ffmpeg.files

    def test_failure_propagates(self, fake_ffmpeg, sample_segments, scratch_root):
        """A failed burn raises and leaves no scratch files."""
        from reelforge.captions.engine import embed_captions
        from reelforge.captions.models import CaptionOptions
        from reelforge.exceptions import SubprocessError

        before = set(scratch_root.iterdir())
        fake_ffmpeg.returncode = 1
        with pytest.raises(SubprocessError):
            embed_captions(b"video", sample_segments, CaptionOptions(animation_style="glitch"))
        assert set(scratch_root.iterdir()) == before

    def test_keeps_requested_container(self, fake_ffmpeg, sample_segments):
        """A webm input is burned back into webm with VP9, audio copied."""
        from reelforge.captions.engine import embed_captions
        from reelforge.captions.models import CaptionOptions

        embed_captions(b"video", sample_segments, CaptionOptions(animation_style="hormozi"), output_format="webm")

        cmd = fake_ffmpeg.commands[0]
        assert cmd[cmd.index("-i") + 1].endswith("input.webm")
        assert cmd[-1].endswith("output.webm")
        assert cmd[cmd.index("-c:v") + 1] == "libvpx-vp9"
        assert cmd[cmd.index("-c:a") + 1] == "copy"
        assert "libx264" not in cmd
        assert "+faststart" not in cmd

    def test_mp4_is_the_default(self, fake_ffmpeg, sample_segments):
        from reelforge.captions.engine import embed_captions
        from reelforge.captions.models import CaptionOptions

        embed_captions(b"video", sample_segments, CaptionOptions(animation_style="glitch"))

        cmd = fake_ffmpeg.commands[0]
        assert cmd[-1].endswith("output.mp4")
        assert cmd[cmd.index("-c:v") + 1] == "libx264"
        assert "+faststart" in cmd

    def test_unknown_container_rejected(self, fake_ffmpeg, sample_segments):
        from reelforge.captions.engine import embed_captions
        from reelforge.captions.models import CaptionOptions
        from reelforge.exceptions import ValidationError

        with pytest.raises(ValidationError) as exc:
            embed_captions(b"video", sample_segments, CaptionOptions(), output_format="avi")
        assert exc.value.field == "output_format"
        assert fake_ffmpeg.calls == []

    @pytest.mark.parametrize("field", ["font_color", "highlight_color"])
    def test_bad_color_is_a_validation_error(self, field, fake_ffmpeg, sample_segments, scratch_root):
        """Colour names are not hex and fail before any file or process."""
        from reelforge.captions.engine import embed_captions
        from reelforge.captions.models import CaptionOptions
        from reelforge.exceptions import RenderError, ValidationError

        before = set(scratch_root.iterdir())
        options = CaptionOptions(animation_style="hormozi", **{field: "white"})

        with pytest.raises(ValidationError) as exc:
            embed_captions(b"video", sample_segments, options)

        assert isinstance(exc.value, RenderError)
        assert exc.value.field == field
        assert exc.value.kind == "validation"
        assert fake_ffmpeg.calls == []
        assert set(scratch_root.iterdir()) == before

    def test_canvas_out_of_bounds(self, fake_ffmpeg, sample_segments):
        from reelforge.captions.engine import embed_captions
        from reelforge.captions.models import CaptionOptions
        from reelforge.exceptions import ValidationError

        options = CaptionOptions(animation_style="hormozi", video_width=100000, video_height=100000)
        with pytest.raises(ValidationError) as exc:
            embed_captions(b"video", sample_segments, options)
        assert exc.value.field == "width"
        assert fake_ffmpeg.calls == []

    def test_ffmpeg_missing(self, fake_ffmpeg, sample_segments, scratch_root):
        """A failed `ffmpeg -version` check stops the burn before the script is written."""
        from reelforge.captions.engine import embed_captions
        from reelforge.captions.models import CaptionOptions
        from reelforge.exceptions import ToolUnavailableError

        before = set(scratch_root.iterdir())
        fake_ffmpeg.version_ok = False

        with pytest.raises(ToolUnavailableError):
            embed_captions(b"video", sample_segments, CaptionOptions(animation_style="hormozi"))

        assert len(fake_ffmpeg.calls) == 1
        assert fake_ffmpeg.commands == []
        assert "captions.ass" not in fake_ffmpeg.files
        assert set(scratch_root.iterdir()) == before


class TestGenerateSrt:
    """Tests for SubRip output."""

    def test_srt(self, sample_segments):
        from reelforge.captions.engine import generate_srt

        assert generate_srt(sample_segments) == (
            "1\n00:00:00,000 --> 00:00:01,500\nHello brave world\n"
            "\n"
            "2\n00:00:01,500 --> 00:00:04,000\nThis is amazing content today\n"
        )

    def test_empty_segments_skipped(self):
        from reelforge.captions.engine import generate_srt
        from reelforge.captions.models import SubtitleSegment

        segments = [
            SubtitleSegment(text="", start_time=0, end_time=1),
            SubtitleSegment(text="kept", start_time=1, end_time=2),
        ]
        assert generate_srt(segments).startswith("1\n00:00:01,000")
