"""
Boundary checks for render parameters.

All checks run before any scratch file is written or subprocess spawned.
"""
import math
import re

from reelforge.exceptions import ValidationError

MAX_WIDTH = 7680
MAX_HEIGHT = 4320
MAX_FPS = 120
MIN_DURATION = 0.1
MAX_DURATION = 3600.0

_HEX_COLOR_RE = re.compile(r"^#?[0-9a-fA-F]{6}$")


def _require_int(field: str, value: object, low: int, high: int) -> int:
    # bool is an int subclass; True is not a width
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, value, "must be an integer")
    if value < low or value > high:
        raise ValidationError(field, value, f"must be between {low} and {high}")
    return value


def validate_dimensions(width: object, height: object) -> tuple[int, int]:
    return (
        _require_int("width", width, 1, MAX_WIDTH),
        _require_int("height", height, 1, MAX_HEIGHT),
    )


def validate_fps(fps: object) -> int:
    return _require_int("fps", fps, 1, MAX_FPS)


def validate_duration(duration: object, field: str = "duration") -> float:
    if isinstance(duration, bool) or not isinstance(duration, (int, float)):
        raise ValidationError(field, duration, "must be a number")
    if math.isnan(duration) or duration < MIN_DURATION or duration > MAX_DURATION:
        raise ValidationError(field, duration, f"must be between {MIN_DURATION} and {MAX_DURATION} seconds")
    return float(duration)


def validate_volume(volume: object, field: str = "volume") -> float:
    if isinstance(volume, bool) or not isinstance(volume, (int, float)):
        raise ValidationError(field, volume, "must be a number")
    if math.isnan(volume) or math.isinf(volume) or volume < 0:
        raise ValidationError(field, volume, "must be a finite value >= 0")
    return float(volume)


def validate_render_params(width: object, height: object, fps: object, duration: object) -> tuple[int, int, int, float]:
    """Validate a full (width, height, fps, duration) tuple."""
    w, h = validate_dimensions(width, height)
    return w, h, validate_fps(fps), validate_duration(duration)


def validate_color(color: object, field: str = "color") -> str:
    """'#RRGGBB' or 'RRGGBB'."""
    if not isinstance(color, str) or not _HEX_COLOR_RE.match(color.strip()):
        raise ValidationError(field, color, "must be a hex color like #RRGGBB")
    return color
