"""
Scene assembly.

Each scene's picture and narration are first merged into one clip, one
ffmpeg run per scene, in timeline order. The merged clips are then joined
along one of three topologies:

- single: one scene, scaled to the output size
- concat: every transition is `none`, joined with the concat demuxer
- crossfade: xfade/acrossfade chain with offsets from the transition plan
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from reelforge.config import config
from reelforge.exceptions import ValidationError
from reelforge.rendering.ffmpeg import OUTPUT_FORMATS, output_codec_args, read_output, run_ffmpeg, scratch_dir
from reelforge.rendering.filtergraph import Filter, FilterGraph, format_number

from .media import stage_all
from .models import (
    DEFAULT_TRANSITION_DURATION,
    AssemblyScene,
    TransitionSpec,
    TransitionType,
    Watermark,
    WatermarkPosition,
)
from .validation import validate_dimensions, validate_duration, validate_fps

logger = logging.getLogger(__name__)

MAX_TRANSITION_RATIO = 0.4
NONE_TRANSITION_DURATION = 0.001
WATERMARK_MARGIN = 20
AUDIO_SAMPLE_RATE = 44100


class Topology(str, Enum):
    SINGLE = "single"
    CONCAT = "concat"
    CROSSFADE = "crossfade"


@dataclass
class TransitionStep:
    """The transition between scene `index` and scene `index + 1`."""
    index: int
    name: str
    duration: float
    offset: float


@dataclass
class TransitionPlan:
    steps: list[TransitionStep] = field(default_factory=list)
    total_duration: float = 0.0

    @property
    def offsets(self) -> list[float]:
        return [s.offset for s in self.steps]

    @property
    def durations(self) -> list[float]:
        return [s.duration for s in self.steps]


@dataclass
class AssemblyResult:
    video: bytes
    duration: float
    topology: Topology


def _transition_of(scene: AssemblyScene) -> TransitionSpec:
    """A scene without a transition fades into the next; only an explicit `none` cuts."""
    return scene.transition or TransitionSpec(type=TransitionType.FADE, duration=DEFAULT_TRANSITION_DURATION)


def cap_transition(duration: float, left: float, right: float) -> float:
    """Clamp a transition to 40% of the shorter of its two scenes."""
    return max(0.0, min(duration, MAX_TRANSITION_RATIO * min(left, right)))


def choose_topology(scenes: Sequence[AssemblyScene]) -> Topology:
    if len(scenes) <= 1:
        return Topology.SINGLE
    # the last scene's transition leads nowhere
    if all(_transition_of(s).is_none for s in scenes[:-1]):
        return Topology.CONCAT
    return Topology.CROSSFADE


def plan_transitions(scenes: Sequence[AssemblyScene]) -> TransitionPlan:
    """
    Offsets for the crossfade chain.

    Each offset is taken from the duration already placed on the timeline,
    not from the raw scene durations, so overlaps never accumulate drift:

        offset = cumulative - capped
        cumulative = offset + next.duration
    """
    if not scenes:
        return TransitionPlan()

    cumulative = scenes[0].duration
    steps = []
    for i in range(len(scenes) - 1):
        current, following = scenes[i], scenes[i + 1]
        spec = _transition_of(current)
        if spec.is_none:
            name, duration = TransitionType.FADE.value, NONE_TRANSITION_DURATION
        else:
            name = spec.type.value
            duration = cap_transition(spec.duration, current.duration, following.duration)

        offset = round(cumulative - duration, 6)
        steps.append(TransitionStep(index=i, name=name, duration=duration, offset=offset))
        cumulative = offset + following.duration

    return TransitionPlan(steps=steps, total_duration=round(cumulative, 6))


def scene_starts(scenes: Sequence[AssemblyScene]) -> list[float]:
    """Where each scene begins on the assembled timeline."""
    if not scenes:
        return []
    if choose_topology(scenes) == Topology.CROSSFADE:
        return [0.0] + plan_transitions(scenes).offsets
    starts, t = [], 0.0
    for scene in scenes:
        starts.append(t)
        t += scene.duration
    return starts


# ---------------------------------------------------------------- filters

def output_filters(width: int, height: int, fps: int) -> list[Filter]:
    """Letterbox to the output frame at a fixed rate."""
    return [
        Filter("scale", width, height, force_original_aspect_ratio="decrease"),
        Filter("pad", width, height, "(ow-iw)/2", "(oh-ih)/2"),
        Filter("setsar", 1),
        Filter("fps", fps),
    ]


_WATERMARK_XY = {
    WatermarkPosition.TOP_LEFT: ("{m}", "{m}"),
    WatermarkPosition.TOP_RIGHT: ("w-text_w-{m}", "{m}"),
    WatermarkPosition.BOTTOM_LEFT: ("{m}", "h-text_h-{m}"),
    WatermarkPosition.BOTTOM_RIGHT: ("w-text_w-{m}", "h-text_h-{m}"),
    WatermarkPosition.CENTER: ("(w-text_w)/2", "(h-text_h)/2"),
}


def watermark_filter(watermark: Watermark) -> Filter:
    x, y = _WATERMARK_XY[watermark.position]
    return Filter(
        "drawtext",
        text=watermark.text,
        expansion="none",
        fontsize=watermark.font_size,
        fontcolor=f"white@{format_number(watermark.opacity)}",
        borderw=1,
        bordercolor=f"black@{format_number(watermark.opacity)}",
        x=x.format(m=WATERMARK_MARGIN),
        y=y.format(m=WATERMARK_MARGIN),
    )


def crossfade_graph(plan: TransitionPlan, width: int, height: int, fps: int,
                    watermark: Optional[Watermark] = None) -> FilterGraph:
    """
    Normalize every input, then fold xfade/acrossfade over the timeline.

    Output pads are [vout] and [aout].
    """
    graph = FilterGraph()
    count = len(plan.steps) + 1

    for i in range(count):
        graph.chain([f"{i}:v"], output_filters(width, height, fps) + [Filter("format", "yuv420p")], [f"v{i}"])
        graph.chain([f"{i}:a"], [Filter("aresample", AUDIO_SAMPLE_RATE)], [f"a{i}"])

    video, audio = "v0", "a0"
    for step in plan.steps:
        nxt = step.index + 1
        last = nxt == count - 1
        v_out = "vfinal" if last else graph.new_label("vx")
        a_out = "aout" if last else graph.new_label("ax")
        graph.chain(
            [video, f"v{nxt}"],
            [Filter("xfade", transition=step.name, duration=step.duration, offset=step.offset)],
            [v_out],
        )
        graph.chain([audio, f"a{nxt}"], [Filter("acrossfade", d=step.duration)], [a_out])
        video, audio = v_out, a_out

    tail = [watermark_filter(watermark)] if watermark else [Filter("null")]
    graph.chain([video], tail, ["vout"])
    return graph


# ---------------------------------------------------------------- steps

def merge_scene(video_path: Path, audio_path: Optional[Path], duration: float, output_path: Path) -> Path:
    """
    Mux one scene's picture with its narration.

    Video is copied, audio re-encoded to AAC, and the result cut to the
    shorter stream. Scenes without narration get a silent track so every
    segment carries audio for the join.
    """
    if audio_path is not None:
        audio_args = ["-i", str(audio_path)]
    else:
        audio_args = [
            "-f", "lavfi",
            "-t", format_number(duration),
            "-i", f"anullsrc=channel_layout=stereo:sample_rate={AUDIO_SAMPLE_RATE}",
        ]

    run_ffmpeg(
        [
            "-i", str(video_path),
            *audio_args,
            "-c:v", "copy",
            "-c:a", "aac",
            "-map", "0:v:0",
            "-map", "1:a:0",
            "-shortest",
            str(output_path),
        ],
        timeout=config.timeouts.clip,
        description=f"Scene merge ({output_path.stem})",
    )
    return output_path


def concat_list(paths: Sequence[Path]) -> str:
    """Concat demuxer script; single quotes in paths are closed and escaped."""
    lines = []
    for p in paths:
        quoted = p.as_posix().replace("'", "'\\''")
        lines.append(f"file '{quoted}'")
    return "\n".join(lines) + "\n"


def _final_video_filters(width: int, height: int, fps: int, watermark: Optional[Watermark]) -> str:
    filters = output_filters(width, height, fps)
    if watermark:
        filters.append(watermark_filter(watermark))
    return ",".join(f.render() for f in filters)


def build_single_args(merged: Path, output: Path, width: int, height: int, fps: int,
                      output_format: str, watermark: Optional[Watermark] = None) -> list[str]:
    return [
        "-i", str(merged),
        "-vf", _final_video_filters(width, height, fps, watermark),
        *output_codec_args(output_format),
        str(output),
    ]


def build_concat_args(list_file: Path, output: Path, width: int, height: int, fps: int,
                      output_format: str, watermark: Optional[Watermark] = None) -> list[str]:
    return [
        "-f", "concat",
        "-safe", "0",
        "-i", str(list_file),
        "-vf", _final_video_filters(width, height, fps, watermark),
        *output_codec_args(output_format),
        str(output),
    ]


def build_crossfade_args(merged: Sequence[Path], plan: TransitionPlan, output: Path, width: int, height: int,
                         fps: int, output_format: str, watermark: Optional[Watermark] = None) -> list[str]:
    inputs = []
    for path in merged:
        inputs.extend(["-i", str(path)])
    graph = crossfade_graph(plan, width, height, fps, watermark)
    return [
        *inputs,
        "-filter_complex", graph.render(),
        "-map", "[vout]",
        "-map", "[aout]",
        *output_codec_args(output_format),
        str(output),
    ]


def assemble(
    scenes: Sequence[AssemblyScene],
    width: Optional[int] = None,
    height: Optional[int] = None,
    fps: Optional[int] = None,
    output_format: str = "mp4",
    watermark: Optional[Watermark] = None,
) -> AssemblyResult:
    """
    Join scenes into one video.

    Args:
        scenes: Ordered timeline; the last scene's transition is ignored
        width: Output width (config default when None)
        height: Output height
        fps: Output frame rate
        output_format: mp4, mov or webm
        watermark: Optional text burned into every frame

    Returns:
        AssemblyResult with the encoded bytes, timeline duration and path taken

    Raises:
        ValidationError: on bad dimensions, durations or format
        SourceError: if a scene input cannot be staged
        SubprocessError: if any ffmpeg step fails; nothing partial is returned
    """
    if not scenes:
        raise ValidationError("scenes", [], "at least one scene is required")
    if output_format not in OUTPUT_FORMATS:
        raise ValidationError("output_format", output_format, f"must be one of {list(OUTPUT_FORMATS)}")

    width, height = validate_dimensions(
        width if width is not None else config.render.width,
        height if height is not None else config.render.height,
    )
    fps = validate_fps(fps if fps is not None else config.render.fps)
    for i, scene in enumerate(scenes):
        validate_duration(scene.duration, f"scenes[{i}].duration")

    topology = choose_topology(scenes)
    logger.info(f"Assembling {len(scenes)} scenes via {topology.value} path ({width}x{height}@{fps})")

    with scratch_dir() as workdir:
        items = []
        for i, scene in enumerate(scenes):
            items.append((scene.video, workdir / f"video_{i}.mp4"))
            if scene.audio is not None:
                items.append((scene.audio, workdir / f"audio_{i}.audio"))
        staged = iter(stage_all(items))

        merged = []
        for i, scene in enumerate(scenes):
            video_path = next(staged)
            audio_path = next(staged) if scene.audio is not None else None
            merged.append(merge_scene(video_path, audio_path, scene.duration, workdir / f"merged_{i}.mp4"))

        output = workdir / f"output.{output_format}"
        if topology == Topology.SINGLE:
            duration = scenes[0].duration
            args = build_single_args(merged[0], output, width, height, fps, output_format, watermark)
            timeout = config.timeouts.clip
        elif topology == Topology.CONCAT:
            duration = sum(s.duration for s in scenes)
            list_file = workdir / "concat.txt"
            list_file.write_text(concat_list(merged), encoding="utf-8")
            args = build_concat_args(list_file, output, width, height, fps, output_format, watermark)
            timeout = config.timeouts.concat
        else:
            plan = plan_transitions(scenes)
            duration = plan.total_duration
            logger.info(f"Transition offsets: {plan.offsets}")
            args = build_crossfade_args(merged, plan, output, width, height, fps, output_format, watermark)
            timeout = config.timeouts.assembly

        run_ffmpeg(args, timeout=timeout, description=f"Assembly ({topology.value})")
        video = read_output(output, "assembled video")

    logger.info(f"Assembly complete: {len(video)} bytes, {duration:.2f}s")
    return AssemblyResult(video=video, duration=duration, topology=topology)
