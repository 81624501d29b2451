"""
Curated motion + transition presets, random pickers, and normalization of
free-form motion/transition names (as produced by script-writing models).
"""
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import MotionSpec, MotionType, TransitionSpec, TransitionType

logger = logging.getLogger(__name__)


class PresetCategory(str, Enum):
    GENTLE = "gentle"
    DYNAMIC = "dynamic"
    CINEMATIC = "cinematic"
    DRAMATIC = "dramatic"


@dataclass(frozen=True)
class AnimationPreset:
    id: str
    name: str
    category: PresetCategory
    motion_type: MotionType
    motion_speed: float
    transition_type: TransitionType
    transition_duration: float

    @property
    def motion(self) -> MotionSpec:
        return MotionSpec(type=self.motion_type, speed=self.motion_speed)

    @property
    def transition(self) -> TransitionSpec:
        return TransitionSpec(type=self.transition_type, duration=self.transition_duration)


_G, _DY, _C, _DR = PresetCategory.GENTLE, PresetCategory.DYNAMIC, PresetCategory.CINEMATIC, PresetCategory.DRAMATIC
M, T = MotionType, TransitionType

ANIMATION_PRESETS: tuple[AnimationPreset, ...] = (
    AnimationPreset("gentle-zoom-in", "Gentle Zoom In", _G, M.ZOOM_IN, 0.3, T.FADE, 0.8),
    AnimationPreset("gentle-zoom-out", "Gentle Zoom Out", _G, M.ZOOM_OUT, 0.3, T.DISSOLVE, 0.8),
    AnimationPreset("gentle-pan", "Gentle Pan", _G, M.PAN_RIGHT, 0.3, T.FADE, 0.6),

    AnimationPreset("dynamic-kenburns", "Dynamic Ken Burns", _DY, M.KENBURNS_IN, 0.6, T.WIPELEFT, 0.5),
    AnimationPreset("dynamic-pan-left", "Dynamic Pan Left", _DY, M.PAN_LEFT, 0.6, T.SLIDELEFT, 0.4),
    AnimationPreset("dynamic-zoom", "Dynamic Zoom", _DY, M.ZOOM_IN, 0.7, T.SMOOTHLEFT, 0.5),

    AnimationPreset("cinematic-kb-in", "Cinematic Ken Burns In", _C, M.KENBURNS_IN, 0.4, T.FADEBLACK, 1.0),
    AnimationPreset("cinematic-kb-out", "Cinematic Ken Burns Out", _C, M.KENBURNS_OUT, 0.4, T.FADEBLACK, 1.0),
    AnimationPreset("cinematic-slow-zoom", "Cinematic Slow Zoom", _C, M.ZOOM_IN, 0.3, T.DISSOLVE, 1.2),
    AnimationPreset("cinematic-pan-right", "Cinematic Pan Right", _C, M.PAN_RIGHT, 0.35, T.FADE, 0.8),

    AnimationPreset("dramatic-zoom-in", "Dramatic Zoom In", _DR, M.ZOOM_IN, 0.9, T.FADEBLACK, 0.3),
    AnimationPreset("dramatic-kb", "Dramatic Ken Burns", _DR, M.KENBURNS_IN, 0.8, T.CIRCLEOPEN, 0.5),
    AnimationPreset("dramatic-wipe", "Dramatic Wipe", _DR, M.PAN_LEFT, 0.8, T.WIPERIGHT, 0.4),
)

_PRESETS_BY_ID = {p.id: p for p in ANIMATION_PRESETS}


def get_preset(preset_id: str) -> Optional[AnimationPreset]:
    return _PRESETS_BY_ID.get(preset_id)


def list_presets(category: Optional[PresetCategory] = None) -> list[AnimationPreset]:
    if category is None:
        return list(ANIMATION_PRESETS)
    category = PresetCategory(category)
    return [p for p in ANIMATION_PRESETS if p.category == category]


# ---------------------------------------------------------------- random picks

# static, pan_up and pan_down are left out of random assignment
RANDOM_MOTION_POOL = (M.ZOOM_IN, M.ZOOM_OUT, M.PAN_LEFT, M.PAN_RIGHT, M.KENBURNS_IN, M.KENBURNS_OUT)

RANDOM_TRANSITION_POOL = (
    T.FADE, T.FADEBLACK, T.DISSOLVE, T.WIPELEFT, T.WIPERIGHT,
    T.SLIDELEFT, T.SLIDERIGHT, T.SMOOTHLEFT, T.SMOOTHRIGHT,
)


def pick_random_motion(previous: Optional[MotionType] = None, rng: Optional[random.Random] = None) -> MotionSpec:
    """Random motion from the pool, never repeating `previous`. Speed in [0.3, 0.7]."""
    rng = rng or random.Random()
    pool = [m for m in RANDOM_MOTION_POOL if m != previous]
    motion = rng.choice(pool)
    speed = round(0.3 + rng.random() * 0.4, 1)
    return MotionSpec(type=motion, speed=speed)


def pick_random_transition(previous: Optional[TransitionType] = None,
                           rng: Optional[random.Random] = None) -> TransitionSpec:
    """Random transition from the pool, never repeating `previous`. Duration in [0.3, 0.8]."""
    rng = rng or random.Random()
    pool = [t for t in RANDOM_TRANSITION_POOL if t != previous]
    transition = rng.choice(pool)
    duration = round(0.3 + rng.random() * 0.5, 1)
    return TransitionSpec(type=transition, duration=duration)


# ---------------------------------------------------------------- name mapping

_TRANSITION_ALIASES = {
    "crossfade": T.DISSOLVE,
    "cross_fade": T.DISSOLVE,
    "cut": T.NONE,
    "wipe": T.WIPELEFT,
    "slide": T.SLIDELEFT,
    "fade_to_black": T.FADEBLACK,
    "fade_to_white": T.FADEWHITE,
    "circle_open": T.CIRCLEOPEN,
    "circle_close": T.CIRCLECLOSE,
    "smooth_left": T.SMOOTHLEFT,
    "smooth_right": T.SMOOTHRIGHT,
    "zoom_in": T.ZOOMIN,
    "wipe_left": T.WIPELEFT,
    "wipe_right": T.WIPERIGHT,
    "slide_left": T.SLIDELEFT,
    "slide_right": T.SLIDERIGHT,
}

_MOTION_ALIASES = {
    "zoom": M.ZOOM_IN,
    "ken_burns": M.KENBURNS_IN,
    "kenburns": M.KENBURNS_IN,
    "ken_burns_in": M.KENBURNS_IN,
    "ken_burns_out": M.KENBURNS_OUT,
    "pan": M.PAN_RIGHT,
}


def map_ai_transition_name(name: str) -> TransitionType:
    """Normalize a free-form transition name; unknown names become fade."""
    key = name.lower().strip()
    try:
        return TransitionType(key)
    except ValueError:
        pass
    if key not in _TRANSITION_ALIASES:
        logger.debug(f"Unknown transition name '{name}', using fade")
    return _TRANSITION_ALIASES.get(key, T.FADE)


def map_ai_motion_name(name: str) -> MotionType:
    """Normalize a free-form motion name; unknown names become kenburns_in."""
    key = name.lower().strip()
    try:
        return MotionType(key)
    except ValueError:
        pass
    if key not in _MOTION_ALIASES:
        logger.debug(f"Unknown motion name '{name}', using kenburns_in")
    return _MOTION_ALIASES.get(key, M.KENBURNS_IN)


def map_legacy_motion_spec(motion_type: Optional[str], direction: Optional[str] = None) -> MotionType:
    """Translate an older {type, direction} motion description."""
    if not motion_type:
        return M.KENBURNS_IN
    t = motion_type.lower()
    d = direction.lower() if direction else None

    if t == "zoom":
        return M.ZOOM_OUT if d == "out" else M.ZOOM_IN
    if t == "pan":
        return {
            "left": M.PAN_LEFT,
            "right": M.PAN_RIGHT,
            "up": M.PAN_UP,
            "down": M.PAN_DOWN,
        }.get(d, M.PAN_RIGHT)
    if t in ("kenburns", "ken_burns"):
        return M.KENBURNS_OUT if d == "out" else M.KENBURNS_IN
    return map_ai_motion_name(t)
