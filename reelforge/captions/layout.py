"""
Caption layout helpers: time formats, color conversion, text metrics and
vector shapes shared by the subtitle-file and overlay renderers.

Text width is estimated from a fixed average glyph width per font size.
It is an approximation for centring and box sizing, not text shaping.
"""
import re
from dataclasses import dataclass
from typing import Sequence

from .models import CaptionPosition

CHAR_WIDTH_RATIO = 0.52
SPACE_WIDTH_RATIO = 0.5
PILL_CURVE_K = 0.55

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")
_ASS_RE = re.compile(r"^&H([0-9a-fA-F]{6}|[0-9a-fA-F]{8})&?$")


# ---------------------------------------------------------------- time formats

def _split_time(seconds: float, fraction_digits: int) -> tuple[int, int, int, int]:
    scale = 10 ** fraction_digits
    total = int(round(max(0.0, seconds) * scale))
    whole, frac = divmod(total, scale)
    hours, rest = divmod(whole, 3600)
    minutes, secs = divmod(rest, 60)
    return hours, minutes, secs, frac


def format_ass_time(seconds: float) -> str:
    """H:MM:SS.cc"""
    h, m, s, cs = _split_time(seconds, 2)
    return f"{h}:{m:02d}:{s:02d}.{cs:02d}"


def format_srt_time(seconds: float) -> str:
    """HH:MM:SS,mmm"""
    h, m, s, ms = _split_time(seconds, 3)
    return f"{h:02d}:{m:02d}:{s:02d},{ms:03d}"


# ---------------------------------------------------------------- colors

def hex_to_ass(hex_color: str, alpha: int = 0) -> str:
    """'#RRGGBB' -> '&HAABBGGRR' (ASS stores blue first)."""
    match = _HEX_RE.match(hex_color.strip())
    if not match:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    h = match.group(1).upper()
    return f"&H{alpha:02X}{h[4:6]}{h[2:4]}{h[0:2]}"


def ass_to_hex(ass_color: str) -> str:
    """'&HAABBGGRR' or '&HBBGGRR&' -> '#RRGGBB'. Alpha is dropped."""
    match = _ASS_RE.match(ass_color.strip())
    if not match:
        raise ValueError(f"Invalid ASS color: {ass_color!r}")
    bgr = match.group(1).upper()[-6:]
    return f"#{bgr[4:6]}{bgr[2:4]}{bgr[0:2]}"


def ass_to_ffmpeg(ass_color: str) -> str:
    """ASS color -> '0xRRGGBB' for drawtext."""
    return "0x" + ass_to_hex(ass_color)[1:].lower()


def hex_to_ffmpeg(hex_color: str) -> str:
    """'#RRGGBB' -> '0xRRGGBB' for drawtext."""
    match = _HEX_RE.match(hex_color.strip())
    if not match:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return "0x" + match.group(1).lower()


def ass_inline(ass_color: str) -> str:
    """Inline override form '&HBBGGRR&' of any ASS color."""
    match = _ASS_RE.match(ass_color.strip())
    if not match:
        raise ValueError(f"Invalid ASS color: {ass_color!r}")
    return f"&H{match.group(1).upper()[-6:]}&"


# ---------------------------------------------------------------- text metrics

def estimate_text_width(text: str, font_size: float, ratio: float = CHAR_WIDTH_RATIO) -> int:
    return int(round(len(text) * font_size * ratio))


@dataclass
class WordPosition:
    word: str
    x_offset: int
    width: int


def word_positions(words: Sequence[str], font_size: float) -> tuple[list[WordPosition], int]:
    """Left offsets of each word on one line, plus the line's total width."""
    char_width = font_size * CHAR_WIDTH_RATIO
    space_width = font_size * SPACE_WIDTH_RATIO
    x = 0.0
    positions = []
    for word in words:
        width = len(word) * char_width
        positions.append(WordPosition(word=word, x_offset=int(round(x)), width=int(round(width))))
        x += width + space_width
    total = max(1, int(round(x - space_width)))
    return positions, total


def wrap_words(items: Sequence, words_per_line: int) -> list[list]:
    """Split into lines of at most `words_per_line` items (0 = single line)."""
    if not items:
        return []
    if words_per_line <= 0 or len(items) <= words_per_line:
        return [list(items)]
    return [list(items[i:i + words_per_line]) for i in range(0, len(items), words_per_line)]


def split_text_by_words_per_line(text: str, words_per_line: int, separator: str = "\\N") -> str:
    """Join words into lines; ASS uses the literal `\\N` line break."""
    words = text.split()
    if words_per_line <= 0 or len(words) <= words_per_line:
        return text
    return separator.join(" ".join(line) for line in wrap_words(words, words_per_line))


# ---------------------------------------------------------------- shapes

def pill_path(width: int, height: int) -> str:
    """ASS drawing commands for a rounded pill with fully rounded ends."""
    w, h = int(width), int(height)
    r = int(round(h / 2))
    kr = int(round(r * PILL_CURVE_K))
    return (
        f"m {r} 0 l {w - r} 0 "
        f"b {w - r + kr} 0 {w} {r - kr} {w} {r} "
        f"l {w} {h - r} "
        f"b {w} {h - r + kr} {w - r + kr} {h} {w - r} {h} "
        f"l {r} {h} "
        f"b {r - kr} {h} 0 {h - r + kr} 0 {h - r} "
        f"l 0 {r} "
        f"b 0 {r - kr} {r - kr} 0 {r} 0"
    )


def rect_path(width: int, height: int) -> str:
    w, h = int(width), int(height)
    return f"m 0 0 l {w} 0 l {w} {h} l 0 {h} l 0 0"


def underline_path(width: int, thickness: int = 4) -> str:
    return rect_path(width, thickness)


# ---------------------------------------------------------------- placement

# ASS numpad alignment and margins (L, R, V) per caption position
ALIGNMENT = {
    CaptionPosition.BOTTOM_LEFT: (1, 30, 0, 30),
    CaptionPosition.BOTTOM_CENTER: (2, 0, 0, 30),
    CaptionPosition.BOTTOM_RIGHT: (3, 0, 30, 30),
    CaptionPosition.MIDDLE_LEFT: (4, 30, 0, 0),
    CaptionPosition.MIDDLE_CENTER: (5, 0, 0, 0),
    CaptionPosition.MIDDLE_RIGHT: (6, 0, 30, 0),
    CaptionPosition.TOP_LEFT: (7, 30, 0, 30),
    CaptionPosition.TOP_CENTER: (8, 0, 0, 30),
    CaptionPosition.TOP_RIGHT: (9, 0, 30, 30),
}


def ass_alignment(position: CaptionPosition) -> int:
    return ALIGNMENT[CaptionPosition(position)][0]


def vertical_anchor(position: CaptionPosition, canvas_height: int, top: float = 0.14, bottom: float = 0.86) -> int:
    """Y coordinate for centre-anchored (\\an5) text at a caption position."""
    v = CaptionPosition(position).vertical
    if v == "top":
        return int(round(canvas_height * top))
    if v == "bottom":
        return int(round(canvas_height * bottom))
    return int(round(canvas_height / 2))
