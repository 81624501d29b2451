"""
Inline text-overlay caption styles.

Word-highlight, effect and basic animated styles render as stacks of
`drawtext` filters. Each filter is visible only inside its time window, so
layering a base copy of the text with highlighted copies gives karaoke
effects, and several colored copies with periodic alpha give flicker.
"""
import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from reelforge.rendering.filtergraph import Filter, format_number

from .layout import hex_to_ffmpeg, word_positions, wrap_words
from .models import CaptionOptions, SubtitleSegment, WordTiming
from .timing import extract_word_timings

logger = logging.getLogger(__name__)


class DrawText(Filter):
    """A drawtext filter that remembers its visibility window and layer role."""

    def __init__(self, text: str, window: tuple[float, float], role: str = "base", **options):
        start, end = window
        super().__init__(
            "drawtext",
            text=text,
            expansion="none",
            **options,
            enable=f"gte(t,{format_number(start)})*lt(t,{format_number(end)})",
        )
        self.window = (start, end)
        self.role = role


@dataclass
class PlacedWord:
    timing: WordTiming
    x: str
    y: str


def _base_y(options: CaptionOptions, block_height: int) -> str:
    v = options.position.vertical
    if v == "top":
        return "50"
    if v == "middle":
        return f"(h-{block_height})/2"
    return f"h-{block_height}-50"


def _line_y(base: str, offset: int) -> str:
    if base.isdigit():
        return str(int(base) + offset)
    return f"{base}+{offset}" if offset else base


def layout_words(timings: Sequence[WordTiming], options: CaptionOptions, line_height_ratio: float) -> list[PlacedWord]:
    """
    Place each word on its wrapped line.

    Lines are wrapped first; x offsets are relative to each line's own
    centred width.
    """
    size = options.font_size
    line_height = int(round(size * line_height_ratio))
    lines = wrap_words(list(timings), options.words_per_line)
    base = _base_y(options, len(lines) * line_height)

    placed = []
    for index, line in enumerate(lines):
        positions, total_width = word_positions([t.word for t in line], size)
        y = _line_y(base, index * line_height)
        for timing, pos in zip(line, positions):
            placed.append(PlacedWord(timing=timing, x=f"(w-{total_width})/2+{pos.x_offset}", y=y))
    return placed


def _text_opts(options: CaptionOptions, color: str, x: str, y: str, **extra) -> dict:
    opts = dict(font=options.font, fontsize=options.font_size, fontcolor=color, x=x, y=y)
    opts.update(extra)
    return opts


OUTLINE = dict(borderw=2, bordercolor="black")


# ---------------------------------------------------------------- word-highlight styles

@dataclass(frozen=True)
class WordPhase:
    """One rendering of a word: which window, which color, which extras."""
    window: str          # segment | before | during | after | from_word
    color: str           # base | highlight | white | faint
    role: str = "base"
    box: bool = False
    border: int = 2


@dataclass(frozen=True)
class WordStyle:
    line_height: float
    phases: tuple[WordPhase, ...]
    box_pad: float = 0.0


WORD_STYLES = {
    "word-highlight": WordStyle(1.3, (
        WordPhase("segment", "base"),
        WordPhase("during", "base", role="highlight", box=True),
    )),
    "word-fill": WordStyle(1.2, (
        WordPhase("before", "base"),
        WordPhase("from_word", "highlight", role="highlight"),
    )),
    "word-color": WordStyle(1.2, (
        WordPhase("before", "base"),
        WordPhase("during", "highlight", role="highlight"),
        WordPhase("after", "base"),
    )),
    "word-color-box": WordStyle(1.5, (
        WordPhase("before", "base"),
        WordPhase("during", "white", role="highlight", box=True),
        WordPhase("after", "base"),
    ), box_pad=0.4),
    "word-reveal": WordStyle(1.2, (
        WordPhase("from_word", "base", role="highlight"),
    )),
    "stroke": WordStyle(1.2, (
        WordPhase("before", "faint", border=3),
        WordPhase("from_word", "highlight", role="highlight"),
    )),
    "sticker": WordStyle(1.5, (
        WordPhase("from_word", "white", role="highlight", box=True),
    ), box_pad=0.35),
}


def _phase_window(phase: str, seg: SubtitleSegment, word: WordTiming) -> tuple[float, float]:
    if phase == "segment":
        return seg.start_time, seg.end_time
    if phase == "before":
        return seg.start_time, word.start
    if phase == "during":
        return word.start, word.end
    if phase == "after":
        return word.end, seg.end_time
    return word.start, seg.end_time


def _word_style_filters(style: WordStyle, seg: SubtitleSegment, timings: list[WordTiming],
                        options: CaptionOptions) -> list[DrawText]:
    base = hex_to_ffmpeg(options.font_color)
    highlight = hex_to_ffmpeg(options.highlight_color)
    colors = {"base": base, "highlight": highlight, "white": "0xffffff", "faint": f"{base}@0.3"}
    placed = layout_words(timings, options, style.line_height)

    filters = []
    # base-role layers first so highlighted copies draw on top
    for phase in sorted(style.phases, key=lambda p: p.role != "base"):
        for p in placed:
            start, end = _phase_window(phase.window, seg, p.timing)
            if end <= start:
                continue
            extra = dict(borderw=phase.border, bordercolor="black")
            if phase.box:
                pad = int(round(options.font_size * style.box_pad)) if style.box_pad else 6
                box_color = highlight if phase.color == "white" else f"{highlight}@0.7"
                extra = dict(box=1, boxcolor=box_color, boxborderw=pad, **extra)
            filters.append(DrawText(
                p.timing.word,
                (start, end),
                role=phase.role,
                **_text_opts(options, colors[phase.color], p.x, p.y, **extra),
            ))
    return filters


def _random_dual_color(seg: SubtitleSegment, timings: list[WordTiming], options: CaptionOptions,
                       rng: random.Random) -> list[DrawText]:
    if len(timings) < 2:
        return _word_style_filters(WORD_STYLES["word-reveal"], seg, timings, options)

    base = hex_to_ffmpeg(options.font_color)
    highlight = hex_to_ffmpeg(options.highlight_color)
    first = rng.randrange(len(timings) - 1)
    pair = {first, first + 1}

    filters = []
    for i, p in enumerate(layout_words(timings, options, 1.3)):
        color = highlight if i in pair else base
        filters.append(DrawText(
            p.timing.word,
            (p.timing.start, seg.end_time),
            role="highlight" if i in pair else "base",
            **_text_opts(options, color, p.x, p.y, **OUTLINE),
        ))
    return filters


def build_word_filters(style_id: str, segments: Sequence[SubtitleSegment], options: CaptionOptions,
                       rng: Optional[random.Random] = None) -> list[DrawText]:
    """drawtext layers for a word-highlight style across all segments."""
    rng = rng or random.Random()
    filters: list[DrawText] = []
    for seg in segments:
        timings = extract_word_timings(seg)
        if not timings:
            continue
        if style_id == "random-dual-color":
            filters.extend(_random_dual_color(seg, timings, options, rng))
        else:
            style = WORD_STYLES.get(style_id, WORD_STYLES["word-highlight"])
            filters.extend(_word_style_filters(style, seg, timings, options))
    return filters


# ---------------------------------------------------------------- effect styles

@dataclass(frozen=True)
class EffectLayer:
    color: str
    dx: str = ""
    dy: str = ""
    alpha: Optional[str] = None     # may reference {start}
    border: Optional[tuple[int, str]] = None
    shadow: Optional[tuple[int, str]] = None


def _flicker(colors: Sequence[str], speed: float, border: tuple[int, str],
             shadow: Optional[tuple[int, str]] = None) -> list[EffectLayer]:
    """Colored copies each visible for one slot of a repeating cycle."""
    cycle = format_number(len(colors) * speed)
    layers = []
    for i, color in enumerate(colors):
        offset = format_number(i * speed)
        alpha = f"if(lt(mod(t-{{start}}+{offset},{cycle}),{format_number(speed)}),1,0)"
        layers.append(EffectLayer(color, alpha=alpha, border=border, shadow=shadow))
    return layers


def _extrude(base: str, depth: int = 8) -> list[EffectLayer]:
    layers = []
    for i in range(depth, 0, -1):
        shade = f"{30 + i * 15:02x}"
        layers.append(EffectLayer(f"0x{shade * 3}", dx=f"+{i * 2}", dy=f"+{i * 2}"))
    layers.append(EffectLayer(base, border=(1, "0x000000")))
    return layers


EFFECTS: dict[str, Callable[[str], list[EffectLayer]]] = {
    "fire-text": lambda base: _flicker(
        ["0xff4500", "0xff6600", "0xffcc00", "0xff8c00", "0xff0000"], 0.15, (3, "0x8b0000"), (2, "0x330000"),
    ) + [EffectLayer("0xff6600", alpha="0.3", border=(4, "0x8b0000"))],
    "ice-text": lambda base: _flicker(
        ["0xffffff", "0x87ceeb", "0x00bfff", "0xb0e0e6", "0x00ffff"], 0.12, (3, "0x4169e1"), (1, "0x000080"),
    ) + [EffectLayer("0x87ceeb", alpha="0.3", border=(4, "0x4682b4"))],
    "glitch": lambda base: [
        EffectLayer("0xff0000@0.7", dx="-4+2*sin(t*30)", dy="+2*cos(t*25)"),
        EffectLayer("0x00ff00@0.7", dx="+4+2*cos(t*35)", dy="+2*sin(t*20)"),
        EffectLayer("0x0000ff@0.7", dx="+2*sin(t*40)", dy="-2+2*cos(t*30)"),
        EffectLayer("0xffffff", border=(1, "black")),
        EffectLayer("0x00ffff", dx="+8*sin(t*50)", alpha="if(lt(mod(t*10,1),0.1),0.8,0)"),
    ],
    "3d-extrude": _extrude,
    "retro-wave": lambda base: [
        EffectLayer("0x00ffff@0.5", dx="+3", dy="+3"),
        EffectLayer("0xff00ff@0.5", dx="-2", dy="-2"),
    ] + _flicker(["0xff00ff", "0x00ffff", "0xff00aa", "0xaa00ff"], 0.2, (2, "0x000000")) + [
        EffectLayer("0xffffff@0.3", dy="-1"),
    ],
}


def _segment_lines(seg: SubtitleSegment, options: CaptionOptions) -> list[str]:
    return [" ".join(line) for line in wrap_words(seg.text.split(), options.words_per_line)]


def build_effect_filters(style_id: str, segments: Sequence[SubtitleSegment], options: CaptionOptions) -> list[DrawText]:
    """drawtext layers for an effect style; every layer spans its segment."""
    make_layers = EFFECTS.get(style_id)
    if make_layers is None:
        return []
    layers = make_layers(hex_to_ffmpeg(options.font_color))

    filters = []
    line_height = int(round(options.font_size * 1.3))
    for seg in segments:
        lines = _segment_lines(seg, options)
        if not lines:
            continue
        base = _base_y(options, len(lines) * line_height)
        start = format_number(seg.start_time)
        for index, line in enumerate(lines):
            y = _line_y(base, index * line_height)
            for layer in layers:
                extra = {}
                if layer.border:
                    extra.update(borderw=layer.border[0], bordercolor=layer.border[1])
                if layer.shadow:
                    extra.update(shadowx=layer.shadow[0], shadowy=layer.shadow[0], shadowcolor=layer.shadow[1])
                if layer.alpha is not None:
                    extra["alpha"] = layer.alpha.replace("{start}", start)
                filters.append(DrawText(
                    line,
                    (seg.start_time, seg.end_time),
                    role="effect",
                    **_text_opts(options, layer.color, f"(w-text_w)/2{layer.dx}", f"{y}{layer.dy}", **extra),
                ))
    return filters


# ---------------------------------------------------------------- basic animations

def _fade_in(y: str, start: str, line: str, duration: float) -> dict:
    return dict(x="(w-text_w)/2", y=y, alpha=f"if(lt(t-{start},0.5),(t-{start})/0.5,1)")


def _slide_up(y: str, start: str, line: str, duration: float) -> dict:
    return dict(x="(w-text_w)/2", y=f"(h-50)+(({y})-(h-50))*min(1,(t-{start})/0.8)")


def _slide_left(y: str, start: str, line: str, duration: float) -> dict:
    return dict(x=f"(w)+((w-text_w)/2-(w))*min(1,(t-{start})/0.8)", y=y)


def _bounce(y: str, start: str, line: str, duration: float) -> dict:
    return dict(x="(w-text_w)/2", y=f"({y})-if(lt(t-{start},0.5),30*sin(6*(t-{start})),0)")


def _typewriter(y: str, start: str, line: str, duration: float) -> dict:
    type_duration = min(duration * 0.8, max(0.5, len(line) * 0.08))
    return dict(x="(w-text_w)/2", y=y, alpha=f"min(1,(t-{start})/{format_number(type_duration)})")


ANIMATIONS = {
    "fade-in": _fade_in,
    "slide-up": _slide_up,
    "slide-left": _slide_left,
    "bounce": _bounce,
    "typewriter": _typewriter,
}


def build_animation_filters(style_id: str, segments: Sequence[SubtitleSegment], options: CaptionOptions) -> list[DrawText]:
    animate = ANIMATIONS.get(style_id)
    if animate is None:
        return []

    color = hex_to_ffmpeg(options.font_color)
    line_height = int(round(options.font_size * 1.3))
    filters = []
    for seg in segments:
        lines = _segment_lines(seg, options)
        if not lines:
            continue
        base = _base_y(options, len(lines) * line_height)
        start = format_number(seg.start_time)
        for index, line in enumerate(lines):
            pos = animate(_line_y(base, index * line_height), start, line, seg.duration)
            filters.append(DrawText(
                line,
                (seg.start_time, seg.end_time),
                role="animation",
                **_text_opts(options, color, pos.pop("x"), pos.pop("y"), **pos, **OUTLINE),
            ))
    return filters
