"""
Caption styles and caption rendering.
"""
from .models import CaptionOptions, CaptionPosition, SubtitleSegment, WordTiming
from .registry import (
    STYLES,
    AnimationStyleMeta,
    RenderStrategy,
    StyleCategory,
    get_style,
    list_styles,
    requires_word_timing,
    resolve_strategy,
    resolve_style,
)
from .timing import extract_word_timings, flatten_words, segment_by_pattern
from .generators import generate_ass
from .engine import embed_captions, generate_srt, overlay_filters

__all__ = [
    # Models
    "CaptionOptions",
    "CaptionPosition",
    "SubtitleSegment",
    "WordTiming",

    # Registry
    "STYLES",
    "AnimationStyleMeta",
    "RenderStrategy",
    "StyleCategory",
    "get_style",
    "list_styles",
    "requires_word_timing",
    "resolve_strategy",
    "resolve_style",

    # Timing
    "extract_word_timings",
    "flatten_words",
    "segment_by_pattern",

    # Rendering
    "generate_ass",
    "embed_captions",
    "generate_srt",
    "overlay_filters",
]
