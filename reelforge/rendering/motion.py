"""
Motion effects for still images.

A motion spec becomes a zoompan filter over a 2x up-scaled copy of the image;
zooming on the larger canvas and scaling back down avoids the visible
stepping zoompan produces at native resolution.

Every expression is a closed form over `on/total_frames`, so there is no
per-frame accumulation that could drift or jitter.
"""
import logging
from pathlib import Path
from typing import Optional

from reelforge.config import config
from reelforge.rendering.ffmpeg import run_ffmpeg
from reelforge.rendering.filtergraph import Filter, FilterChain, format_number

from .models import MotionSpec, MotionType
from .validation import validate_render_params

logger = logging.getLogger(__name__)

MIN_SPEED = 0.1
MAX_SPEED = 1.0

# Ken Burns pans cover this share of the zoom slack on each axis
KENBURNS_PAN_X = 0.3
KENBURNS_PAN_Y = 0.2

CENTER_X = "iw/2-(iw/zoom/2)"
CENTER_Y = "ih/2-(ih/zoom/2)"


def clamp_speed(speed: float) -> float:
    return min(MAX_SPEED, max(MIN_SPEED, float(speed)))


def total_frames(duration: float, fps: int) -> int:
    return max(1, round(duration * fps))


def max_zoom_delta(speed: float) -> float:
    """Zoom added over the whole clip: 0.056 at the slowest, 0.2 at the fastest."""
    return 0.04 + clamp_speed(speed) * 0.16


def pan_fraction(speed: float) -> float:
    """Share of the canvas a pan travels: 5% plus up to 15% more with speed."""
    return 0.05 + 0.15 * clamp_speed(speed)


def motion_expressions(spec: MotionSpec, frames: int) -> tuple[str, str, str]:
    """
    (zoom, x, y) zoompan expressions for a motion spec.

    Pans hold a fixed zoom that exposes exactly the pan distance as slack,
    then sweep the crop window across it.
    """
    progress = f"on/{frames}"
    delta = format_number(max_zoom_delta(spec.speed))
    motion = MotionType(spec.type)

    if motion == MotionType.ZOOM_IN:
        return f"1+{delta}*{progress}", CENTER_X, CENTER_Y

    if motion == MotionType.ZOOM_OUT:
        return f"1+{delta}-{delta}*{progress}", CENTER_X, CENTER_Y

    if motion in (MotionType.PAN_LEFT, MotionType.PAN_RIGHT, MotionType.PAN_UP, MotionType.PAN_DOWN):
        zoom = format_number(1 / (1 - pan_fraction(spec.speed)))
        if motion == MotionType.PAN_LEFT:
            return zoom, f"(iw-iw/zoom)*(1-{progress})", CENTER_Y
        if motion == MotionType.PAN_RIGHT:
            return zoom, f"(iw-iw/zoom)*{progress}", CENTER_Y
        if motion == MotionType.PAN_UP:
            return zoom, CENTER_X, f"(ih-ih/zoom)*(1-{progress})"
        return zoom, CENTER_X, f"(ih-ih/zoom)*{progress}"

    if motion in (MotionType.KENBURNS_IN, MotionType.KENBURNS_OUT):
        drift_x = format_number(KENBURNS_PAN_X * pan_fraction(spec.speed))
        drift_y = format_number(KENBURNS_PAN_Y * pan_fraction(spec.speed))
        if motion == MotionType.KENBURNS_IN:
            zoom = f"1+{delta}*{progress}"
            x = f"{CENTER_X}+iw*{drift_x}*{progress}"
            y = f"{CENTER_Y}+ih*{drift_y}*{progress}"
        else:
            zoom = f"1+{delta}-{delta}*{progress}"
            x = f"{CENTER_X}-iw*{drift_x}*{progress}"
            y = f"{CENTER_Y}-ih*{drift_y}*{progress}"
        # keep the window inside the frame
        return zoom, f"min(iw-iw/zoom,max(0,{x}))", f"min(ih-ih/zoom,max(0,{y}))"

    # static: identity crop
    return "1", "0", "0"


def motion_chain(spec: MotionSpec, duration: float, fps: int, width: int, height: int) -> FilterChain:
    """Filter chain for a motion clip: upscale, crop, zoompan, downscale."""
    width, height, fps, duration = validate_render_params(width, height, fps, duration)
    frames = total_frames(duration, fps)
    canvas_w, canvas_h = width * 2, height * 2
    zoom, x, y = motion_expressions(spec, frames)

    return FilterChain(filters=[
        Filter("scale", canvas_w, canvas_h, force_original_aspect_ratio="increase"),
        Filter("crop", canvas_w, canvas_h),
        Filter("zoompan", z=zoom, x=x, y=y, d=frames, s=f"{canvas_w}x{canvas_h}", fps=fps),
        Filter("scale", width, height),
        Filter("setsar", 1),
    ])


def static_chain(width: int, height: int) -> FilterChain:
    """Fit the image inside the frame and pad the rest."""
    return FilterChain(filters=[
        Filter("scale", width, height, force_original_aspect_ratio="decrease"),
        Filter("pad", width, height, "(ow-iw)/2", "(oh-ih)/2"),
        Filter("setsar", 1),
    ])


def compile_motion(spec: Optional[MotionSpec], duration: float, fps: int, width: int, height: int) -> str:
    """
    The `-vf` value for turning one image into a clip.

    Args:
        spec: Motion to apply; None gives a static fitted frame
        duration: Clip length in seconds
        fps: Output frame rate
        width: Output width
        height: Output height

    Raises:
        ValidationError: on out-of-range dimensions, fps or duration
    """
    if spec is None:
        width, height, fps, duration = validate_render_params(width, height, fps, duration)
        return static_chain(width, height).render()
    return motion_chain(spec, duration, fps, width, height).render()


def render_image_clip(
    image_path: Path,
    output_path: Path,
    duration: float,
    fps: int,
    width: int,
    height: int,
    spec: Optional[MotionSpec] = None,
) -> Path:
    """
    Encode a still image as an H.264 clip, with or without motion.

    Motion clips emit exactly `total_frames` frames from a single input
    frame; static clips loop the image for `duration` seconds.
    """
    vf = compile_motion(spec, duration, fps, width, height)

    if spec is None:
        input_args = ["-loop", "1", "-i", str(image_path)]
        length_args = ["-t", format_number(duration)]
        label = "static"
    else:
        input_args = ["-i", str(image_path)]
        length_args = ["-frames:v", str(total_frames(duration, fps))]
        label = MotionType(spec.type).value

    logger.info(f"Image clip: {label}, {duration}s @ {fps}fps, {width}x{height}")
    run_ffmpeg(
        [
            *input_args,
            "-vf", vf,
            "-c:v", "libx264",
            "-preset", "fast",
            "-crf", "18",
            "-pix_fmt", "yuv420p",
            "-r", str(fps),
            *length_args,
            str(output_path),
        ],
        timeout=config.timeouts.clip,
        description=f"Image clip ({label})",
    )
    return output_path
