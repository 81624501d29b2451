"""
Caption style catalog.

Static metadata for every caption style plus the mapping from a style to
the strategy that renders it. The catalog is built once at import time and
never mutated.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_STYLE_ID = "none"


class StyleCategory(str, Enum):
    BASIC = "basic"
    STYLED = "styled"
    WORD = "word"
    EFFECT = "effect"


class RenderStrategy(str, Enum):
    """How a style is executed."""
    SUBTITLE_FILE = "subtitle_file"     # ASS script burned in with the ass filter
    WORD_HIGHLIGHT = "word_highlight"   # per-word drawtext layers
    EFFECT = "effect"                   # layered drawtext with periodic enable windows


@dataclass(frozen=True)
class AnimationStyleMeta:
    id: str
    name: str
    description: str
    category: StyleCategory
    requires_word_timing: bool


_B, _S, _W, _E = StyleCategory.BASIC, StyleCategory.STYLED, StyleCategory.WORD, StyleCategory.EFFECT

_STYLE_TABLE = [
    # id, name, description, category, requires word timing
    ("none", "None", "Standard subtitles without animation", _B, False),
    ("fade-in", "Fade In", "Text fades in from transparent", _B, False),
    ("slide-up", "Slide Up", "Text slides up from bottom", _B, False),
    ("slide-left", "Slide Left", "Text slides in from the right", _B, False),
    ("bounce", "Bounce", "Text bounces on appearance", _B, False),
    ("typewriter", "Typewriter", "Text appears letter by letter", _B, False),

    ("tilted-emoji", "Tilted Emoji", "Alternating tilted text with random colored words", _S, False),
    ("sticker-word", "Sticker Word", "Rotated sticker popup with underline", _S, True),
    ("glow-bounce", "Glow Bounce", "Glowing text with bounce and tilt pattern", _S, True),
    ("imessage", "iMessage", "iOS-style blue message bubbles", _S, True),
    ("gold-3d", "Gold 3D", "Gold text with 3D shadow effect", _S, True),
    ("hormozi", "Hormozi", "Bold uppercase punchy text", _S, True),
    ("dual-font", "Dual Font", "Sans-serif and italic serif mix", _S, True),
    ("betelgeuse", "Betelgeuse", "White banner with black uppercase text", _S, True),
    ("daily-mail", "Daily Mail", "White uppercase with thick blue outline", _S, True),
    ("eclipse", "Eclipse", "Dark purple box with karaoke highlighting", _S, True),
    ("suzy", "Suzy", "Gold text with dark brown outline", _S, True),
    ("alcyone", "Alcyone", "Neon green karaoke in purple box", _S, True),
    ("thuban", "Thuban", "Yellow tilted banner with bounce", _S, True),
    ("marigold", "Marigold", "Elegant serif italic gold/white karaoke", _S, True),
    ("closed-caption", "Closed Caption", "Classic TV CC style", _S, False),
    ("handwritten-pop", "Handwritten Pop", "Script font word-by-word fade", _S, True),
    ("mizar", "Mizar", "Purple neon glow word-by-word", _S, True),
    ("poem", "Poem", "Elegant italic serif soft fade", _S, True),
    ("cartwheel-black", "Cartwheel Black", "Bold uppercase white/purple on black", _S, True),
    ("cartwheel-purple", "Cartwheel Purple", "Bold uppercase white/yellow on purple", _S, True),
    ("caster", "Caster", "Bold uppercase white/blue on light purple", _S, True),
    ("pulse", "Pulse", "Pop-in with scale overshoot", _S, True),
    ("fuel", "Fuel", "Brightness reveal with lime green highlights", _S, True),
    ("scene", "Scene", "Fade-in dissolve with golden yellow serif", _S, True),
    ("neon-glow", "Neon Glow", "Pink neon pop-in with word stacking", _S, True),
    ("drive", "Drive", "Clean fade-in with letter spacing", _S, True),
    ("freshly", "Freshly", "Karaoke word highlight in pill container", _S, True),
    ("slate", "Slate", "White rectangular background karaoke", _S, True),
    ("minima", "Minima", "Ultra-minimalist centered text with fade", _S, True),
    ("blueprint", "Blueprint", "Technical drawing style", _S, True),
    ("orbitar-black", "Orbitar Black", "Tilted pill boxes with karaoke", _S, True),

    ("word-highlight", "Word Highlight", "Karaoke-style background box on current word", _W, True),
    ("word-fill", "Word Fill", "Progressive color change that stays filled", _W, True),
    ("word-color", "Word Color", "Current word changes color while spoken", _W, True),
    ("word-color-box", "Word Color Box", "Current word gets colored background box", _W, True),
    ("random-dual-color", "Random Dual Color", "Two random words highlighted with reveal", _W, True),
    ("word-reveal", "Word Reveal", "Words appear one by one as spoken", _W, True),
    ("stroke", "Stroke", "Outline first, fills with color when spoken", _W, True),
    ("sticker", "Sticker", "Words appear with colored background sticker", _W, True),

    ("fire-text", "Fire Text", "Flickering orange/red/yellow fire effect", _E, False),
    ("ice-text", "Ice Text", "Shimmering blue/cyan/white ice effect", _E, False),
    ("glitch", "Glitch", "RGB splitting and jitter glitch effect", _E, False),
    ("3d-extrude", "3D Extrude", "Multiple layers creating depth illusion", _E, False),
    ("retro-wave", "Retro Wave", "80s neon synthwave style", _E, False),
]

STYLES: MappingProxyType = MappingProxyType({
    row[0]: AnimationStyleMeta(*row) for row in _STYLE_TABLE
})

_CATEGORY_STRATEGY = {
    StyleCategory.STYLED: RenderStrategy.SUBTITLE_FILE,
    StyleCategory.WORD: RenderStrategy.WORD_HIGHLIGHT,
    StyleCategory.EFFECT: RenderStrategy.EFFECT,
    # basic animations other than "none" are animated drawtext overlays
    StyleCategory.BASIC: RenderStrategy.EFFECT,
}


def get_style(style_id: str) -> Optional[AnimationStyleMeta]:
    return STYLES.get(style_id)


def list_styles(category: Optional[StyleCategory] = None) -> list[AnimationStyleMeta]:
    """All styles, optionally filtered by category, in catalog order."""
    if category is None:
        return list(STYLES.values())
    return [s for s in STYLES.values() if s.category == StyleCategory(category)]


def requires_word_timing(style_id: str) -> bool:
    style = STYLES.get(style_id)
    return bool(style and style.requires_word_timing)


def resolve_style(style_id: Optional[str]) -> AnimationStyleMeta:
    """
    Look up a style, degrading to the default style for unknown ids.

    Unknown ids are not an error: the caption still renders with plain
    subtitles.
    """
    style = STYLES.get(style_id or DEFAULT_STYLE_ID)
    if style is None:
        logger.warning(f"Unknown caption style '{style_id}', falling back to '{DEFAULT_STYLE_ID}'")
        style = STYLES[DEFAULT_STYLE_ID]
    return style


def resolve_strategy(style_id: Optional[str]) -> RenderStrategy:
    style = resolve_style(style_id)
    if style.id == DEFAULT_STYLE_ID:
        return RenderStrategy.SUBTITLE_FILE
    return _CATEGORY_STRATEGY[style.category]
