"""
Word-level timing for caption segments.

Segments either carry aligned word timings from speech-to-text or only
text plus a start/end; in the latter case timings are synthesized so every
word-driven style still has something to animate against.
"""
from typing import Iterable, Sequence

from .models import SubtitleSegment, WordTiming

EDGE_BUFFER_RATIO = 0.05


def split_words(text: str) -> list[str]:
    return text.split()


def extract_word_timings(segment: SubtitleSegment) -> list[WordTiming]:
    """
    Per-word timings for a segment.

    Supplied timings are passed through unchanged. Otherwise the segment
    keeps a 5% buffer at each end and the remaining span is divided evenly
    across the whitespace-separated words.
    """
    if segment.word_timings:
        return [WordTiming(word=w.word, start=w.start, end=w.end) for w in segment.word_timings]

    words = split_words(segment.text)
    if not words:
        return []

    duration = segment.end_time - segment.start_time
    buffer = duration * EDGE_BUFFER_RATIO
    effective_start = segment.start_time + buffer
    word_duration = (duration - buffer * 2) / len(words)

    timings = []
    for i, word in enumerate(words):
        start = effective_start + i * word_duration
        end = effective_start + (i + 1) * word_duration
        timings.append(WordTiming(word=word, start=start, end=min(end, segment.end_time)))
    return timings


def flatten_words(segments: Iterable[SubtitleSegment]) -> list[WordTiming]:
    """Single ordered word stream across all segments."""
    words: list[WordTiming] = []
    for segment in segments:
        words.extend(extract_word_timings(segment))
    return words


def segment_by_pattern(words: Sequence[WordTiming], pattern: Sequence[int]) -> list[list[WordTiming]]:
    """
    Cut a word stream into beats whose sizes cycle through `pattern`.

    `[1, 4, 2]` over nine words gives beats of 1, 4, 2, 1 and 1 words; the
    final beat takes whatever is left.
    """
    sizes = [max(1, int(n)) for n in pattern] or [1]
    beats = []
    i = 0
    p = 0
    while i < len(words):
        size = sizes[p % len(sizes)]
        beats.append(list(words[i:i + size]))
        i += size
        p += 1
    return beats


def chunk(words: Sequence[WordTiming], size: int) -> list[list[WordTiming]]:
    """Fixed-size beats (the last may be shorter)."""
    return segment_by_pattern(words, [size])


def beat_text(beat: Sequence[WordTiming]) -> str:
    return " ".join(w.word for w in beat)


def shift_segments(segments: Iterable[SubtitleSegment], offset: float) -> list[SubtitleSegment]:
    """Move segments (and their word timings) later on the timeline by `offset` seconds."""
    if not offset:
        return list(segments)
    shifted = []
    for seg in segments:
        words = None
        if seg.word_timings:
            words = [WordTiming(word=w.word, start=w.start + offset, end=w.end + offset) for w in seg.word_timings]
        shifted.append(SubtitleSegment(
            text=seg.text,
            start_time=seg.start_time + offset,
            end_time=seg.end_time + offset,
            word_timings=words,
        ))
    return shifted
