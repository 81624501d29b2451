"""
Subtitle-file caption styles.

Each styled caption is a `StyleRecipe`: a few ASS styles, a pacing pattern,
colors and markup, run by one of a handful of layout families:

- segment:  one event per input segment
- lines:    one event per wrapped line, stacked within the segment
- beats:    the word stream re-cut by a repeating pattern, one event per beat
- karaoke:  one event per word, the whole beat shown with the active word marked
- reveal:   one event per word, the beat revealed cumulatively
- rolling:  fixed-size chunks with the previous chunk(s) still on screen

Every generator shares `(segments, options, rng) -> script text`. Styles
without a recipe fall back to the plain default script.
"""
import logging
import math
import random
from dataclasses import dataclass, field
from functools import cached_property
from typing import Callable, Optional, Sequence, Union

from .ass import BACKGROUND_BOX, OPAQUE_BOX, AssScript, AssStyle, escape_ass_text
from .layout import (
    ALIGNMENT,
    ass_alignment,
    ass_inline,
    estimate_text_width,
    hex_to_ass,
    pill_path,
    rect_path,
    split_text_by_words_per_line,
    underline_path,
    vertical_anchor,
    wrap_words,
)
from .models import CaptionOptions, CaptionPosition, SubtitleSegment, WordTiming
from .timing import chunk, extract_word_timings, flatten_words, segment_by_pattern, split_words

logger = logging.getLogger(__name__)

Beat = list[WordTiming]

WHITE = "&H00FFFFFF"
BLACK = "&H00000000"
SHADOW = "&H80000000"


# ---------------------------------------------------------------- context

@dataclass
class GeneratorContext:
    """Options resolved into ASS units plus the shared word stream."""
    options: CaptionOptions
    segments: list[SubtitleSegment]
    rng: random.Random
    script: AssScript
    play_res_x: int = 1920
    play_res_y: int = 1080
    state: dict = field(default_factory=dict)

    @property
    def font(self) -> str:
        return self.options.font

    @property
    def size(self) -> int:
        return self.options.font_size

    @property
    def wpl(self) -> int:
        return self.options.words_per_line

    @property
    def position(self) -> CaptionPosition:
        return self.options.position

    @property
    def alignment(self) -> int:
        return ass_alignment(self.options.position)

    @property
    def margin_v(self) -> int:
        return 0 if self.position.vertical == "middle" else 50

    @property
    def text_color(self) -> str:
        return hex_to_ass(self.options.font_color)

    @property
    def highlight(self) -> str:
        return hex_to_ass(self.options.highlight_color)

    @cached_property
    def words(self) -> list[WordTiming]:
        return flatten_words(self.segments)

    @property
    def center_x(self) -> int:
        return self.play_res_x // 2

    def anchor_y(self, top: float = 0.14, bottom: float = 0.86) -> int:
        return vertical_anchor(self.position, self.play_res_y, top, bottom)

    def style(self, name: str, **overrides) -> AssStyle:
        base = dict(
            font=self.font,
            size=self.size,
            primary=self.text_color,
            alignment=self.alignment,
            margin_l=40,
            margin_r=40,
            margin_v=self.margin_v,
        )
        base.update(overrides)
        return AssStyle(name=name, **base)


Tags = Union[str, Callable[[GeneratorContext, Beat, int], str]]
Emphasis = Callable[[GeneratorContext, Sequence[str], int], dict[int, str]]


@dataclass(frozen=True)
class StyleRecipe:
    id: str
    title: str
    family: str
    styles: Callable[[GeneratorContext], list[AssStyle]]
    pattern: tuple[int, ...] = (1,)
    wpl_default: int = 0            # beat size follows words_per_line, with this default
    wpl_factor: int = 1
    case: Optional[str] = None      # upper | lower | title
    tilts: tuple[float, ...] = ()
    style_cycle: tuple[str, ...] = ()
    single_style: Optional[str] = None
    intro: Tags = ""
    place: Tags = ""
    emphasis: Optional[Emphasis] = None
    emphasis_end: str = ""
    spoken: str = ""
    active: str = ""
    active_end: str = ""
    pending: str = ""
    lines: int = 1
    line_tags: tuple[str, ...] = ()
    history: int = 0
    joined: bool = False
    shape: Optional[str] = None     # pill | rect | underline
    shape_ratio: float = 0.5
    shape_pad: tuple[int, int] = (60, 30)
    gap: float = 0.0
    canvas: bool = False


# ---------------------------------------------------------------- primitives

def _c(color: str) -> str:
    return f"\\c{ass_inline(color)}"


def _tag(markup: str) -> str:
    return f"{{{markup}}}" if markup else ""


def _apply_case(text: str, case: Optional[str]) -> str:
    if case == "upper":
        return text.upper()
    if case == "lower":
        return text.lower()
    if case == "title":
        return text.title()
    return text


def _resolve(tags: Tags, ctx: GeneratorContext, beat: Beat, index: int) -> str:
    if callable(tags):
        return tags(ctx, beat, index)
    return tags


def _split_lines(items: Sequence, lines: int) -> list[list]:
    """Split into `lines` rows, earlier rows taking the extra item."""
    if lines <= 1 or len(items) <= 1:
        return [list(items)]
    per_line = math.ceil(len(items) / lines)
    return wrap_words(items, per_line)


def _span(beat: Beat, gap: float = 0.0) -> tuple[float, float]:
    start, end = beat[0].start, beat[-1].end
    if gap:
        end = max(start + 0.01, end - gap)
    return start, end


def _word_end(beat: Beat, i: int) -> float:
    # hold each word until the next one starts so the caption never blinks
    if i + 1 < len(beat):
        return max(beat[i].end, beat[i + 1].start)
    return beat[i].end


def _beats(ctx: GeneratorContext, recipe: StyleRecipe) -> list[Beat]:
    if recipe.wpl_default:
        size = (ctx.wpl or recipe.wpl_default) * recipe.wpl_factor
        return chunk(ctx.words, size)
    return segment_by_pattern(ctx.words, recipe.pattern)


def _words(beat: Beat, recipe: StyleRecipe) -> list[str]:
    return [escape_ass_text(_apply_case(w.word, recipe.case)) for w in beat]


def _join_lines(words: Sequence[str], lines: int, line_tags: Sequence[str] = ()) -> str:
    rows = _split_lines(list(range(len(words))), lines)
    out = []
    for r, row in enumerate(rows):
        prefix = _tag(line_tags[r]) if r < len(line_tags) else ""
        out.append(prefix + " ".join(words[i] for i in row))
    return "\\N".join(out)


def _shape_event(ctx: GeneratorContext, recipe: StyleRecipe, text: str, start: float, end: float,
                 cx: int, cy: int, style_name: str, tilt: float = 0) -> None:
    """Vector background drawn on layer 0, centred on (cx, cy)."""
    lines = text.split("\\N")
    longest = max(lines, key=len)
    pad_w, pad_h = recipe.shape_pad
    w = estimate_text_width(longest, ctx.size, recipe.shape_ratio) + pad_w
    line_h = int(round(ctx.size * 1.2))
    h = line_h * len(lines) + pad_h - (line_h - ctx.size)
    rot = f"\\frz{tilt:g}" if tilt else ""

    if recipe.shape == "underline":
        for i, line in enumerate(lines):
            uw = estimate_text_width(line, ctx.size, recipe.shape_ratio)
            y = cy - (len(lines) * line_h) // 2 + (i + 1) * line_h
            tags = f"{{\\an7\\pos({cx - uw // 2},{y})\\p1}}"
            ctx.script.add_event(start, end, f"{tags}{underline_path(uw)}{{\\p0}}", style_name, layer=0)
        return

    path = pill_path(w, h) if recipe.shape == "pill" else rect_path(w, h)
    tags = f"{{\\an7\\pos({cx - w // 2},{cy - h // 2}){rot}\\p1}}"
    ctx.script.add_event(start, end, f"{tags}{path}{{\\p0}}", style_name, layer=0)


# ---------------------------------------------------------------- families

def _family_segment(ctx: GeneratorContext, recipe: StyleRecipe, script: AssScript) -> None:
    names = recipe.style_cycle or tuple(script.style_names()[:1])
    for index, seg in enumerate(ctx.segments):
        words = [escape_ass_text(_apply_case(w, recipe.case)) for w in split_words(seg.text)]
        if not words:
            continue
        marks = recipe.emphasis(ctx, words, index) if recipe.emphasis else {}
        styled = [f"{{{marks[i]}}}{w}{_tag(recipe.emphasis_end)}" if i in marks else w for i, w in enumerate(words)]
        rows = wrap_words(styled, ctx.wpl)
        text = "\\N".join(" ".join(r) for r in rows)
        beat = [WordTiming(word=w, start=seg.start_time, end=seg.end_time) for w in words]
        intro = _resolve(recipe.intro, ctx, beat, index)
        script.add_event(seg.start_time, seg.end_time, _tag(intro) + text, names[index % len(names)])


def _family_lines(ctx: GeneratorContext, recipe: StyleRecipe, script: AssScript) -> None:
    name = script.style_names()[0]
    for seg in ctx.segments:
        timings = extract_word_timings(seg)
        if not timings:
            continue
        if ctx.wpl <= 0:
            text = escape_ass_text(_apply_case(seg.text, recipe.case))
            script.add_event(seg.start_time, seg.end_time, _tag(_resolve(recipe.intro, ctx, timings, 0)) + text, name)
            continue
        for idx, row in enumerate(wrap_words(timings, ctx.wpl)):
            text = " ".join(_words(row, recipe))
            intro = _tag(_resolve(recipe.intro, ctx, row, idx))
            script.add_event(row[0].start, seg.end_time, "\\N" * idx + intro + text, name)


def _family_beats(ctx: GeneratorContext, recipe: StyleRecipe, script: AssScript) -> None:
    names = recipe.style_cycle or tuple(script.style_names()[:1])
    for index, beat in enumerate(_beats(ctx, recipe)):
        start, end = _span(beat, recipe.gap)
        words = _words(beat, recipe)
        marks = recipe.emphasis(ctx, words, index) if recipe.emphasis else {}
        words = [f"{{{marks[i]}}}{w}{_tag(recipe.emphasis_end)}" if i in marks else w for i, w in enumerate(words)]

        tags = _resolve(recipe.place, ctx, beat, index)
        if recipe.tilts:
            tags += f"\\frz{recipe.tilts[index % len(recipe.tilts)]:g}"
        tags += _resolve(recipe.intro, ctx, beat, index)

        style = names[index % len(names)]
        if recipe.single_style and len(beat) == 1:
            style = recipe.single_style
        text = _join_lines(words, recipe.lines, recipe.line_tags)
        script.add_event(start, end, _tag(tags) + text, style)


def _karaoke_text(words: Sequence[str], active: int, recipe: StyleRecipe) -> str:
    marked = []
    for i, w in enumerate(words):
        if i < active:
            marked.append(_tag(recipe.spoken) + w)
        elif i == active:
            marked.append(_tag(recipe.active) + w + _tag(recipe.active_end))
        else:
            marked.append(_tag(recipe.pending) + w)
    return _join_lines(marked, recipe.lines, recipe.line_tags)


def _family_karaoke(ctx: GeneratorContext, recipe: StyleRecipe, script: AssScript) -> None:
    names = script.style_names()
    text_style = names[0]
    shape_style = names[1] if recipe.shape and len(names) > 1 else text_style

    for index, beat in enumerate(_beats(ctx, recipe)):
        words = _words(beat, recipe)
        start, end = _span(beat, recipe.gap)
        tilt = recipe.tilts[index % len(recipe.tilts)] if recipe.tilts else 0

        tags = _resolve(recipe.place, ctx, beat, index)
        if recipe.shape:
            cx, cy = ctx.center_x, ctx.anchor_y()
            plain = _join_lines(words, recipe.lines)
            _shape_event(ctx, recipe, plain, start, end, cx, cy, shape_style, tilt)
            tags = f"\\an5\\pos({cx},{cy})" + tags
        if tilt:
            tags += f"\\frz{tilt:g}"

        style = text_style
        if recipe.single_style and len(beat) == 1:
            style = recipe.single_style

        for i, word in enumerate(beat):
            intro = _resolve(recipe.intro, ctx, beat, index) if i == 0 else ""
            text = _karaoke_text(words, i, recipe)
            script.add_event(word.start, _word_end(beat, i), _tag(tags + intro) + text, style, layer=1)


def _family_reveal(ctx: GeneratorContext, recipe: StyleRecipe, script: AssScript) -> None:
    name = script.style_names()[0]
    beats = _beats(ctx, recipe)
    for index, beat in enumerate(beats):
        words = _words(beat, recipe)
        marks = recipe.emphasis(ctx, words, index) if recipe.emphasis else {}
        styled = [f"{{{marks[i]}}}{w}{_tag(recipe.emphasis_end)}" if i in marks else w for i, w in enumerate(words)]

        previous = ""
        if recipe.history and index > 0:
            prev_words = _words(beats[index - 1], recipe)
            prev_marks = recipe.emphasis(ctx, prev_words, index - 1) if recipe.emphasis else {}
            previous = " ".join(
                f"{{{prev_marks[i]}}}{w}{_tag(recipe.emphasis_end)}" if i in prev_marks else w
                for i, w in enumerate(prev_words)
            ) + "\\N"

        for i, word in enumerate(beat):
            intro = _tag(_resolve(recipe.intro, ctx, beat, i))
            shown = styled[:i] + [intro + styled[i]]
            text = previous + _join_lines(shown, recipe.lines)
            script.add_event(word.start, _word_end(beat, i), _tag(_resolve(recipe.place, ctx, beat, index)) + text, name)


def _family_rolling(ctx: GeneratorContext, recipe: StyleRecipe, script: AssScript) -> None:
    names = script.style_names()
    chunks = _beats(ctx, recipe)
    texts = [" ".join(_words(c, recipe)) for c in chunks]

    for index, current in enumerate(chunks):
        start, end = _span(current, recipe.gap)
        intro = _tag(_resolve(recipe.intro, ctx, current, index))
        depth = min(recipe.history, index)

        if recipe.joined:
            older = [_tag(recipe.pending) + texts[index - j] for j in range(depth, 0, -1)]
            script.add_event(start, end, "\\N".join(older + [intro + texts[index]]), names[0])
            continue

        script.add_event(start, end, intro + texts[index], names[0])
        for j in range(1, depth + 1):
            if j < len(names):
                script.add_event(start, end, texts[index - j], names[j])


FAMILIES = {
    "segment": _family_segment,
    "lines": _family_lines,
    "beats": _family_beats,
    "karaoke": _family_karaoke,
    "reveal": _family_reveal,
    "rolling": _family_rolling,
}


# ---------------------------------------------------------------- per-style hooks

TILT_PALETTE = ("&H0000D7FF", "&H0000FF00", "&H00FF00FF")


def _random_trio(ctx: GeneratorContext, words: Sequence[str], index: int) -> dict[int, str]:
    picks = sorted(ctx.rng.sample(range(len(words)), min(3, len(words))))
    return {idx: _c(TILT_PALETTE[n]) for n, idx in enumerate(picks)}


def _hormozi_green(ctx: GeneratorContext, words: Sequence[str], index: int) -> dict[int, str]:
    green = _c("&H0000FF00")
    if len(words) == 1:
        # single-word beats alternate between green and white
        single_beats_before = ctx.state.setdefault("hormozi_singles", 0)
        ctx.state["hormozi_singles"] = single_beats_before + 1
        return {0: green} if single_beats_before % 2 == 0 else {}
    return {ctx.rng.randrange(len(words)): green}


def _dual_font_emphasis(ctx: GeneratorContext, words: Sequence[str], index: int) -> dict[int, str]:
    marks = {}
    size = int(round(ctx.size * 1.05))
    for i, w in enumerate(words):
        clean = "".join(ch for ch in w if ch.isalnum())
        if len(clean) >= 5 or (i + 1) % 3 == 0 or (i == len(words) - 1 and len(words) > 2):
            marks[i] = f"\\fnGeorgia\\i1\\fs{size}"
    return marks


def _hormozi_slide(ctx: GeneratorContext, beat: Beat, index: int) -> str:
    x, y = ctx.center_x, ctx.anchor_y(0.2, 0.8)
    return f"\\an5\\move({x + 200},{y},{x},{y},0,120)\\fscx120\\fscy120\\t(0,80,\\fscx100\\fscy100)"


def _thuban_place(ctx: GeneratorContext, beat: Beat, index: int) -> str:
    # fixed 1920x1080 PlayRes; wrong if this recipe ever sets canvas=True
    return f"\\pos({ctx.rng.randint(600, 1319)},540)"


def _thuban_bounce(ctx: GeneratorContext, beat: Beat, index: int) -> str:
    duration_ms = int((beat[-1].end - beat[0].start) * 1000)
    count = max(3, math.ceil(duration_ms / 350))
    step = duration_ms // count
    out = []
    t = 0
    for i in range(count):
        scale = 110 if i % 2 == 0 else 100
        out.append(f"\\t({t},{t + step},\\fscx{scale}\\fscy{scale})")
        t += step
    return "".join(out)


# points on the fixed 1920x1080 PlayRes, so the recipe must not set canvas=True
MIZAR_POSITIONS = [(960, 540), (760, 440), (1160, 440), (760, 640), (1160, 640), (960, 380), (960, 700), (860, 540)]


def _mizar_place(ctx: GeneratorContext, beat: Beat, index: int) -> str:
    x, y = MIZAR_POSITIONS[index % len(MIZAR_POSITIONS)]
    return f"\\an5\\pos({x},{y})\\blur3"


def _reveal_fade(ctx: GeneratorContext, beat: Beat, index: int) -> str:
    return "\\fad(50,0)"


def _dual_font_fade(ctx: GeneratorContext, beat: Beat, index: int) -> str:
    return "\\fad(120,0)" if index == 0 else ""


POP_IN = "\\fscx75\\fscy75\\t(0,100,\\fscx105\\fscy105)\\t(100,180,\\fscx100\\fscy100)"
GLOW_BOUNCE = "\\fscx80\\fscy80\\t(0,150,\\fscx115\\fscy115)\\t(150,300,\\fscx100\\fscy100)"
OVERSHOOT = "\\fscx50\\fscy50\\t(0,100,\\fscx115\\fscy115)\\t(100,180,\\fscx100\\fscy100)"
SLOW_BOUNCE = "\\fscx90\\fscy90\\t(0,250,\\fscx104\\fscy104)\\t(250,500,\\fscx100\\fscy100)"


# ---------------------------------------------------------------- style sheets

def _tilted_styles(c: GeneratorContext) -> list[AssStyle]:
    return [
        c.style("TiltCW", bold=True, angle=-15, outline=3, margin_l=10, margin_r=10),
        c.style("TiltCCW", bold=True, angle=15, outline=3, margin_l=10, margin_r=10),
    ]


def _sticker_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("Sticker", primary=WHITE, secondary=WHITE, outline_color=c.highlight, back=BLACK,
                    bold=True, underline=True, angle=20, border_style=OPAQUE_BOX,
                    outline=round(c.size * 0.4), shadow=0)]


def _glow_styles(c: GeneratorContext) -> list[AssStyle]:
    glow = dict(secondary=c.highlight, outline_color=c.highlight, back=BLACK, bold=True, outline=4, shadow=2)
    return [
        c.style("GlowCCW", angle=15, **glow),
        c.style("GlowCW", angle=-15, **glow),
        c.style("GlowNormal", angle=0, **glow),
    ]


def _imessage_styles(c: GeneratorContext) -> list[AssStyle]:
    gap = round(c.size * 3)
    bubble = dict(primary=WHITE, outline_color="&H00FF840A", back=BLACK, bold=True,
                  outline=round(c.size * 0.9), shadow=0, alignment=3, margin_l=20, margin_r=80)
    return [c.style(f"Bubble{i + 1}", margin_v=80 + gap * i, **bubble) for i in range(3)]


def _gold_styles(c: GeneratorContext) -> list[AssStyle]:
    top = c.position.vertical == "top"
    near, far = (60, 60 + round(c.size * 1.4)) if not top else (60 + round(c.size * 1.4), 60)
    gold = dict(primary="&H004BA9D4", outline_color="&H0028454A", back=BLACK, bold=True, italic=True,
                spacing=1, outline=4, shadow=4)
    return [c.style("GoldCurr", margin_v=near, **gold), c.style("GoldPrev", margin_v=far, **gold)]


def _hormozi_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("HormoziMain", primary=WHITE, back=BLACK, bold=True, outline=5, shadow=0)]


def _dual_font_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("DualFont", font="Arial", primary=WHITE, back="&H803D2A1A",
                    border_style=BACKGROUND_BOX, outline=round(c.size * 0.35), shadow=0)]


def _betelgeuse_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("Betelgeuse", font="Bebas Neue", primary=BLACK, outline_color=WHITE, back=WHITE,
                    spacing=3, border_style=BACKGROUND_BOX, outline=round(c.size * 0.3), shadow=2)]


def _daily_mail_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("DailyMail", font="Arial Black", primary=WHITE, outline_color="&H00800000",
                    back=SHADOW, bold=True, spacing=1, outline=round(c.size * 0.12), shadow=2)]


def _eclipse_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("Eclipse", font="Arial", primary=WHITE, secondary="&H00CC9999", back="&H005C1F3D",
                    border_style=BACKGROUND_BOX, outline=round(c.size * 0.35), shadow=0)]


def _suzy_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("Suzy", font="Georgia", primary="&H0000D4FF", outline_color="&H001A1A4D",
                    back="&H00000033", bold=True, spacing=1, outline=round(c.size * 0.08), shadow=3,
                    alignment=5, margin_v=0)]


def _alcyone_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("Alcyone", font="Impact", primary=WHITE, back=BLACK, bold=True, italic=True,
                    spacing=2, outline=3, shadow=4)]


def _thuban_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("Thuban", font="Impact", primary=BLACK, outline_color="&H0000FFFF", back=BLACK,
                    bold=True, italic=True, spacing=2, border_style=OPAQUE_BOX, outline=18, shadow=0,
                    alignment=5)]


def _closed_caption_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("ClosedCaption", font="Courier New", primary=WHITE, outline_color=BLACK, back=BLACK,
                    border_style=BACKGROUND_BOX, outline=round(c.size * 0.25), shadow=0)]


def _marigold_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("Marigold", font="Courier New", primary=WHITE, outline_color="&H0000A5FF",
                    back="&H80000000", italic=True, spacing=1, outline=2, shadow=1)]


def _handwritten_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("HandwrittenPop", font="Brush Script MT", primary="&H00D0FDFF", back="&H80000000",
                    outline=0, shadow=2, margin_l=100)]


def _mizar_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("Mizar", font="Impact", primary=WHITE, outline_color="&H00D355BA", back="&H80D355BA",
                    bold=True, outline=5, shadow=3, alignment=5, margin_v=0)]


def _poem_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("Poem", font="Georgia", primary="&H00444444", back=BLACK, italic=True, spacing=1,
                    outline=0, shadow=0, margin_l=120)]


def _cartwheel(accent: str, box: str, prefix: str) -> Callable[[GeneratorContext], list[AssStyle]]:
    def styles(c: GeneratorContext) -> list[AssStyle]:
        common = dict(font="Impact", outline_color=box, back=box, bold=True, border_style=BACKGROUND_BOX,
                      shadow=0, margin_v=0)
        return [
            c.style(f"{prefix}Normal", primary=WHITE, outline=round(c.size * 0.3), **common),
            c.style(f"{prefix}Large", primary=accent, size=round(c.size * 1.5), outline=round(c.size * 0.45), **common),
        ]
    return styles


def _pulse_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("Pulse", font="Impact", primary=WHITE, back=BLACK, bold=True, outline=3, shadow=0, margin_v=0)]


def _fuel_styles(c: GeneratorContext) -> list[AssStyle]:
    common = dict(font="Impact", back=BLACK, bold=True, outline=3, shadow=0, margin_v=0)
    return [
        c.style("Fuel", primary=WHITE, **common),
        c.style("FuelLime", primary="&H0000FFC8", size=round(c.size * 1.6), **common),
    ]


def _scene_styles(c: GeneratorContext) -> list[AssStyle]:
    common = dict(font="Georgia", primary="&H0020C0F0", back=BLACK, outline=2, shadow=0, margin_v=40)
    return [c.style("Scene", **common), c.style("SceneLarge", size=round(c.size * 1.4), **common)]


def _neon_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("NeonGlow", font="Arial Rounded MT Bold", primary="&H00CBC0FF",
                    outline_color="&H009314FF", back=BLACK, bold=True, outline=4, shadow=0, margin_v=40)]


def _drive_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("Drive", font="Arial", primary=WHITE, back=BLACK, bold=True, spacing=8, outline=4,
                    shadow=0, margin_v=40)]


def _pill_styles(text: str, bg: str, prefix: str, font: str = "Inter Light", bold: bool = False) -> Callable:
    def styles(c: GeneratorContext) -> list[AssStyle]:
        return [
            c.style(f"{prefix}Text", font=font, primary=text, back=BLACK, bold=bold, italic=bold,
                    outline=0, shadow=0, alignment=5),
            c.style(f"{prefix}Bg", font="Arial", primary=bg, secondary=bg, outline_color=bg, back=bg,
                    outline=0, shadow=0, alignment=7),
        ]
    return styles


def _minima_styles(c: GeneratorContext) -> list[AssStyle]:
    return [c.style("Minima", font="Arial", primary=WHITE, back=BLACK, bold=True, outline=0, shadow=0, margin_v=40)]


# ---------------------------------------------------------------- recipes

_RECIPES = [
    StyleRecipe("tilted-emoji", "Tilted Color Subtitles", "segment", _tilted_styles,
                style_cycle=("TiltCW", "TiltCCW"), intro="\\fad(500,0)", emphasis=_random_trio),
    StyleRecipe("sticker-word", "Sticker Subtitles", "lines", _sticker_styles),
    StyleRecipe("glow-bounce", "Glow Bounce Subtitles", "beats", _glow_styles, pattern=(1, 4, 2),
                style_cycle=("GlowCCW", "GlowCW", "GlowNormal"), intro=GLOW_BOUNCE),
    StyleRecipe("imessage", "iMessage Bubbles", "rolling", _imessage_styles, pattern=(3,), history=2,
                intro=POP_IN),
    StyleRecipe("gold-3d", "3D Gold Subtitles", "rolling", _gold_styles, pattern=(3,), history=1,
                intro="\\fad(150,0)"),
    StyleRecipe("hormozi", "Hormozi Style", "beats", _hormozi_styles, pattern=(2, 1, 3), case="upper",
                place=_hormozi_slide, emphasis=_hormozi_green, emphasis_end=_c(WHITE)),
    StyleRecipe("dual-font", "Dual-Font Subtitles", "reveal", _dual_font_styles, wpl_default=4, history=1,
                intro=_dual_font_fade, emphasis=_dual_font_emphasis, emphasis_end="\\r"),
    StyleRecipe("betelgeuse", "Betelgeuse Subtitles", "beats", _betelgeuse_styles, pattern=(1, 1, 1, 1, 4),
                case="upper", intro="\\fad(80,0)"),
    StyleRecipe("daily-mail", "Daily Mail Subtitles", "beats", _daily_mail_styles, pattern=(1,), case="upper",
                intro="\\fscx110\\fscy110\\t(0,80,\\fscx100\\fscy100)"),
    StyleRecipe("eclipse", "Eclipse Subtitles", "karaoke", _eclipse_styles, wpl_default=4, wpl_factor=2,
                lines=2, spoken=_c(WHITE), active=_c(WHITE) + "\\b1", active_end="\\b0",
                pending=_c("&H00CC9999")),
    StyleRecipe("suzy", "Suzy Subtitles", "beats", _suzy_styles, pattern=(3, 4, 1, 1), case="title",
                intro="\\fscx95\\fscy95\\t(0,70,\\fscx100\\fscy100)"),
    StyleRecipe("alcyone", "Alcyone Subtitles", "karaoke", _alcyone_styles, pattern=(4, 3, 1, 1, 1),
                case="upper", tilts=(-8, 8),
                active=_c("&H0000FF00") + "\\3c&H993399&\\4c&H993399&\\bord8\\shad0",
                active_end=_c(WHITE) + "\\3c&H000000&\\4c&H000000&\\bord3\\shad4"),
    StyleRecipe("thuban", "Thuban Subtitles", "beats", _thuban_styles, pattern=(4, 4, 1, 1, 1, 1, 1, 1),
                case="upper", tilts=(8, -8, 0), place=_thuban_place, intro=_thuban_bounce),
    StyleRecipe("closed-caption", "Closed Captions", "rolling", _closed_caption_styles, wpl_default=5,
                history=1, joined=True),
    StyleRecipe("marigold", "Marigold Subtitles", "karaoke", _marigold_styles, pattern=(1, 4, 4, 4),
                spoken=_c(WHITE), active=_c("&H0000D7FF") + "\\b1", active_end="\\b0", pending=_c(WHITE)),
    StyleRecipe("handwritten-pop", "Handwritten Pop Subtitles", "reveal", _handwritten_styles, wpl_default=5,
                intro=_reveal_fade),
    StyleRecipe("mizar", "Mizar Subtitles", "beats", _mizar_styles, pattern=(3, 1, 1, 4, 4),
                tilts=(-8, 5, -3, 7, 0, -6, 4, -5), place=_mizar_place, intro="\\fad(100,0)"),
    StyleRecipe("poem", "Poem Subtitles", "beats", _poem_styles, pattern=(1, 3, 3, 4, 2), intro="\\fad(250,250)"),
    StyleRecipe("cartwheel-black", "Cartwheel Black Subtitles", "karaoke",
                _cartwheel("&H00ED3A7C", BLACK, "Cartwheel"), pattern=(4, 1, 1, 1, 1), case="upper",
                single_style="CartwheelLarge", active=_c("&H00ED3A7C"), active_end=_c(WHITE)),
    StyleRecipe("cartwheel-purple", "Cartwheel Purple Subtitles", "karaoke",
                _cartwheel("&H0000FFFF", "&H00951D4C", "CartwheelPurple"), pattern=(4, 1, 1, 1, 1),
                case="upper", single_style="CartwheelPurpleLarge", active=_c("&H0000FFFF"),
                active_end=_c(WHITE)),
    StyleRecipe("caster", "Caster Subtitles", "karaoke", _cartwheel("&H00FF8C00", "&H00FF3399", "Caster"),
                pattern=(4, 1, 1, 1, 1), case="upper", single_style="CasterLarge", active=_c("&H00FF8C00"),
                active_end=_c(WHITE)),
    StyleRecipe("pulse", "Pulse Subtitles", "beats", _pulse_styles, pattern=(6,), lines=2,
                line_tags=(_c("&H00FFA500"), _c(WHITE)), intro=OVERSHOOT),
    StyleRecipe("fuel", "Fuel Subtitles", "karaoke", _fuel_styles, pattern=(2, 1, 1, 4, 4, 4), lines=2,
                case="upper", single_style="FuelLime", spoken="\\alpha&H00&", active="\\alpha&H00&",
                pending="\\alpha&H99&"),
    StyleRecipe("scene", "Scene Subtitles", "beats", _scene_styles, pattern=(2, 1), lines=2,
                single_style="SceneLarge", intro="\\fad(300,0)"),
    StyleRecipe("neon-glow", "Neon Glow Subtitles", "karaoke", _neon_styles, pattern=(1, 4, 2, 3),
                intro=POP_IN, active=_c("&H009314FF"), active_end=_c("&H00CBC0FF")),
    StyleRecipe("drive", "Drive Subtitles", "beats", _drive_styles, pattern=(4, 3, 2, 1, 1), intro="\\fad(300,0)"),
    StyleRecipe("freshly", "Freshly Subtitles", "karaoke", _pill_styles("&H00A0A0A0", "&H00282828", "Freshly"),
                pattern=(4, 3, 2, 1, 1), shape="pill", shape_ratio=0.5, shape_pad=(60, 30),
                spoken=_c("&H00A0A0A0"), active=_c(WHITE), pending=_c("&H00A0A0A0"), canvas=True),
    StyleRecipe("slate", "Slate Subtitles", "karaoke", _pill_styles("&H00999999", WHITE, "Slate"),
                pattern=(4, 3, 2, 1, 1), shape="rect", shape_ratio=0.5, shape_pad=(60, 30),
                spoken=_c(BLACK), active=_c(BLACK), pending=_c("&H00999999"), canvas=True),
    StyleRecipe("minima", "Minima Subtitles", "beats", _minima_styles, pattern=(3, 4, 3, 4), case="lower",
                gap=0.05, intro="\\fad(200,200)"),
    StyleRecipe("blueprint", "Blueprint Subtitles", "karaoke",
                _pill_styles(WHITE, "&H00FDFDFD", "Blueprint", font="Inter"), pattern=(4,), lines=2,
                shape="underline", shape_ratio=0.52, spoken=_c(WHITE), active=_c("&H00FFD37F"),
                pending="\\alpha&H60&", active_end="\\alpha&H00&", canvas=True),
    StyleRecipe("orbitar-black", "Orbitar Black Subtitles", "karaoke",
                _pill_styles(WHITE, BLACK, "Orbitar", font="Arial", bold=True), pattern=(1, 3, 2),
                shape="pill", shape_ratio=0.55, shape_pad=(50, 20), tilts=(-3, 3), intro=SLOW_BOUNCE,
                active=_c("&H0000C3FD"), active_end=_c(WHITE), canvas=True),
]

RECIPES: dict[str, StyleRecipe] = {r.id: r for r in _RECIPES}


# ---------------------------------------------------------------- entry points

def generate_default_script(segments: Sequence[SubtitleSegment], options: CaptionOptions) -> str:
    """Plain subtitles: one event per segment in a single style."""
    align, margin_l, margin_r, margin_v = ALIGNMENT[options.position]
    script = AssScript(title="Subtitles", play_res_x=options.video_width, play_res_y=options.video_height)
    script.add_style(AssStyle(
        name="Default",
        font=options.font,
        size=options.font_size,
        primary=hex_to_ass(options.font_color),
        secondary="&H000000FF",
        outline_color=BLACK,
        back=SHADOW,
        border_style=3,
        outline=2,
        shadow=1,
        alignment=align,
        margin_l=margin_l,
        margin_r=margin_r,
        margin_v=margin_v,
    ))
    for seg in segments:
        text = escape_ass_text(split_text_by_words_per_line(seg.text, options.words_per_line))
        if text.strip():
            script.add_event(seg.start_time, seg.end_time, text)
    return script.render()


def has_generator(style_id: str) -> bool:
    return style_id in RECIPES


def generate_ass(
    style_id: str,
    segments: Sequence[SubtitleSegment],
    options: CaptionOptions,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Build the ASS script for a subtitle-file caption style.

    Args:
        style_id: Caption style id; ids without a recipe use the default script
        segments: Caption segments in display order
        options: Font, colors, placement and canvas size
        rng: Source of randomness for styles with random picks (seed it for repeatable output)

    Returns:
        Complete ASS script text
    """
    recipe = RECIPES.get(style_id)
    if recipe is None:
        if style_id != "none":
            logger.info(f"No subtitle generator for '{style_id}', using default subtitles")
        return generate_default_script(segments, options)

    width = options.video_width if recipe.canvas else 1920
    height = options.video_height if recipe.canvas else 1080
    script = AssScript(title=recipe.title, play_res_x=width, play_res_y=height)
    ctx = GeneratorContext(
        options=options,
        segments=list(segments),
        rng=rng or random.Random(),
        script=script,
        play_res_x=width,
        play_res_y=height,
    )
    for style in recipe.styles(ctx):
        script.add_style(style)

    FAMILIES[recipe.family](ctx, recipe, script)

    logger.debug(f"Generated {len(script.events)} events for caption style '{style_id}'")
    return script.render()
