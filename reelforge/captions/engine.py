"""
Caption rendering entry points.

`embed_captions` burns captions into a video. The style's render strategy
decides how: subtitle-file styles write an ASS script and use the `ass`
filter, word-highlight and effect styles become a chain of drawtext filters.
"""
import logging
import random
from typing import Optional, Sequence

from reelforge.config import config
from reelforge.exceptions import ValidationError
from reelforge.rendering.ffmpeg import (
    OUTPUT_FORMATS,
    output_codec_args,
    read_output,
    require_ffmpeg,
    run_ffmpeg,
    scratch_dir,
)
from reelforge.rendering.filtergraph import Filter, FilterChain
from reelforge.rendering.validation import validate_color, validate_dimensions

from .generators import generate_ass
from .layout import format_srt_time
from .models import CaptionOptions, SubtitleSegment
from .overlays import build_animation_filters, build_effect_filters, build_word_filters
from .registry import RenderStrategy, StyleCategory, resolve_strategy, resolve_style

logger = logging.getLogger(__name__)


def overlay_filters(
    style_id: str,
    segments: Sequence[SubtitleSegment],
    options: CaptionOptions,
    rng: Optional[random.Random] = None,
) -> list[Filter]:
    """drawtext filters for an inline-overlay style (empty for subtitle-file styles)."""
    strategy = resolve_strategy(style_id)
    if strategy == RenderStrategy.WORD_HIGHLIGHT:
        return build_word_filters(style_id, segments, options, rng)
    if strategy == RenderStrategy.EFFECT:
        if resolve_style(style_id).category == StyleCategory.BASIC:
            return build_animation_filters(style_id, segments, options)
        return build_effect_filters(style_id, segments, options)
    return []


def build_caption_filter(
    segments: Sequence[SubtitleSegment],
    options: CaptionOptions,
    workdir,
    rng: Optional[random.Random] = None,
) -> Optional[FilterChain]:
    """
    The video filter chain that renders captions, or None when nothing would
    be drawn. ASS scripts are written into `workdir`.
    """
    style_id = resolve_style(options.animation_style).id
    strategy = resolve_strategy(style_id)
    logger.info(f"Captions: style '{style_id}' via {strategy.value} ({len(segments)} segments)")

    if strategy == RenderStrategy.SUBTITLE_FILE:
        if not any(seg.text.strip() for seg in segments):
            return None
        ass_path = workdir / "captions.ass"
        ass_path.write_text(generate_ass(style_id, segments, options, rng), encoding="utf-8")
        return FilterChain(filters=[Filter("ass", ass_path.as_posix())])

    filters = overlay_filters(style_id, segments, options, rng)
    if not filters:
        return None
    return FilterChain(filters=filters)


def validate_caption_options(options: CaptionOptions) -> None:
    """Reject a canvas or colours ffmpeg could not use, before any work starts."""
    validate_dimensions(options.video_width, options.video_height)
    validate_color(options.font_color, "font_color")
    validate_color(options.highlight_color, "highlight_color")


def embed_captions(
    video: bytes,
    segments: Sequence[SubtitleSegment],
    options: CaptionOptions,
    rng: Optional[random.Random] = None,
    output_format: str = "mp4",
) -> bytes:
    """
    Burn captions into a video.

    Args:
        video: Input video bytes
        segments: Caption segments in display order
        options: Caption styling; `animation_style` selects the style
        rng: Randomness for styles with random picks
        output_format: Container of both the input and the result (mp4, mov or webm)

    Returns:
        Re-encoded video bytes, or the input unchanged when no captions apply

    Raises:
        ValidationError: if the canvas, a colour or the format is out of range
        ToolUnavailableError: if ffmpeg does not respond
        SubprocessError: if ffmpeg fails or times out
    """
    if output_format not in OUTPUT_FORMATS:
        raise ValidationError("output_format", output_format, f"must be one of {list(OUTPUT_FORMATS)}")
    validate_caption_options(options)

    if not any(seg.text.strip() for seg in segments):
        logger.info("No caption text, returning video unchanged")
        return video

    require_ffmpeg()

    with scratch_dir() as workdir:
        chain = build_caption_filter(segments, options, workdir, rng)
        if chain is None:
            logger.info("No caption filters produced, returning video unchanged")
            return video

        input_path = workdir / f"input.{output_format}"
        output_path = workdir / f"output.{output_format}"
        input_path.write_bytes(video)

        vf = chain.render()

        run_ffmpeg(
            [
                "-i", str(input_path),
                "-vf", vf,
                *output_codec_args(output_format, copy_audio=True),
                str(output_path),
            ],
            timeout=config.timeouts.captions,
            description="Caption embedding",
        )
        result = read_output(output_path, "captioned video")

    logger.info(f"Captions embedded: {len(result)} bytes")
    return result


def generate_srt(segments: Sequence[SubtitleSegment]) -> str:
    """SubRip text for the segments; empty segments are skipped."""
    blocks = []
    for seg in segments:
        text = seg.text.strip()
        if not text:
            continue
        blocks.append(
            f"{len(blocks) + 1}\n"
            f"{format_srt_time(seg.start_time)} --> {format_srt_time(seg.end_time)}\n"
            f"{text}\n"
        )
    return "\n".join(blocks)
