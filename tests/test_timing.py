"""
Tests for word timing extraction and beat segmentation.
"""
import pytest


def _words(*names):
    from reelforge.captions.models import WordTiming

    return [WordTiming(word=n, start=i * 0.5, end=(i + 1) * 0.5) for i, n in enumerate(names)]


class TestExtractWordTimings:
    """Tests for extract_word_timings."""

    def test_supplied_timings_pass_through(self, sample_segments):
        """Aligned timings are returned as given."""
        from reelforge.captions.timing import extract_word_timings

        timings = extract_word_timings(sample_segments[0])
        assert [(t.word, t.start, t.end) for t in timings] == [
            ("Hello", 0.0, 0.5),
            ("brave", 0.5, 1.0),
            ("world", 1.0, 1.5),
        ]

    def test_synthesized_timings(self, sample_segments):
        """Without timings, the span minus 5% buffers is split evenly."""
        from reelforge.captions.timing import extract_word_timings

        segment = sample_segments[1]
        timings = extract_word_timings(segment)

        assert [t.word for t in timings] == ["This", "is", "amazing", "content", "today"]
        assert timings[0].start == pytest.approx(1.5 + 0.125)
        assert timings[-1].end == pytest.approx(4.0 - 0.125)
        for t in timings:
            assert t.duration == pytest.approx(0.45)

    @pytest.mark.parametrize("text,start,end", [
        ("one", 0.0, 1.0),
        ("a b c d e f g h i j", 10.0, 12.5),
        ("  spaced   out\twords \n", 3.0, 3.3),
        ("x " * 40, 0.0, 60.0),
    ])
    def test_synthesized_invariants(self, text, start, end):
        """N words -> N monotonic entries inside the segment."""
        from reelforge.captions.models import SubtitleSegment
        from reelforge.captions.timing import extract_word_timings

        timings = extract_word_timings(SubtitleSegment(text=text, start_time=start, end_time=end))

        assert len(timings) == len(text.split())
        previous_end = start
        for t in timings:
            assert start <= t.start <= t.end <= end
            assert t.start >= previous_end - 1e-9
            previous_end = t.end

    def test_empty_text(self):
        """Whitespace-only text has no words."""
        from reelforge.captions.models import SubtitleSegment
        from reelforge.captions.timing import extract_word_timings

        assert extract_word_timings(SubtitleSegment(text="   ", start_time=0, end_time=2)) == []

    def test_flatten_words(self, sample_segments):
        """Words from all segments are joined in order."""
        from reelforge.captions.timing import flatten_words

        words = flatten_words(sample_segments)
        assert len(words) == 8
        assert words[3].word == "This"


class TestSegmentation:
    """Tests for beat patterns."""

    def test_pattern_cycles(self):
        """[1, 4, 2] over nine words -> 1, 4, 2, 1, 1."""
        from reelforge.captions.timing import segment_by_pattern

        beats = segment_by_pattern(_words(*"abcdefghi"), [1, 4, 2])
        assert [len(b) for b in beats] == [1, 4, 2, 1, 1]
        assert [w.word for w in beats[1]] == ["b", "c", "d", "e"]

    def test_pattern_covers_every_word(self):
        """No word is dropped or duplicated."""
        from reelforge.captions.timing import segment_by_pattern

        words = _words(*"abcdefghijklm")
        beats = segment_by_pattern(words, [3, 2])
        assert [w.word for beat in beats for w in beat] == list("abcdefghijklm")

    def test_degenerate_pattern(self):
        """Zero or empty sizes fall back to one word per beat."""
        from reelforge.captions.timing import segment_by_pattern

        assert len(segment_by_pattern(_words("a", "b", "c"), [0])) == 3
        assert len(segment_by_pattern(_words("a", "b"), [])) == 2
        assert segment_by_pattern([], [2]) == []

    def test_chunk_and_beat_text(self):
        from reelforge.captions.timing import beat_text, chunk

        beats = chunk(_words("one", "two", "three"), 2)
        assert [beat_text(b) for b in beats] == ["one two", "three"]


class TestShiftSegments:
    """Tests for shift_segments."""

    def test_shift_moves_segments_and_words(self, sample_segments):
        from reelforge.captions.timing import shift_segments

        shifted = shift_segments(sample_segments, 2.5)

        assert shifted[0].start_time == pytest.approx(2.5)
        assert shifted[1].end_time == pytest.approx(6.5)
        assert shifted[0].word_timings[2].start == pytest.approx(3.5)
        assert shifted[1].word_timings is None
        assert sample_segments[0].start_time == 0.0

    def test_zero_offset(self, sample_segments):
        from reelforge.captions.timing import shift_segments

        assert shift_segments(sample_segments, 0) == sample_segments
