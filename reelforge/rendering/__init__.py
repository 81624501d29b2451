"""
Rendering core: motion clips, audio mixing and scene assembly over FFmpeg.
"""
from .models import (
    MotionType,
    MotionSpec,
    TransitionType,
    TransitionSpec,
    SceneRenderInput,
    SceneRenderOutput,
    AssemblyScene,
    AssemblyInput,
    AssemblyOutput,
    AudioMixOptions,
    AudioMixOutput,
    CaptionConfig,
    Watermark,
    WatermarkPosition,
)
from .motion import compile_motion
from .audio import mix_audio
from .assembly import Topology, TransitionPlan, assemble, choose_topology, plan_transitions
from .ffmpeg import check_ffmpeg, require_ffmpeg

__all__ = [
    "MotionType",
    "MotionSpec",
    "TransitionType",
    "TransitionSpec",
    "SceneRenderInput",
    "SceneRenderOutput",
    "AssemblyScene",
    "AssemblyInput",
    "AssemblyOutput",
    "AudioMixOptions",
    "AudioMixOutput",
    "CaptionConfig",
    "Watermark",
    "WatermarkPosition",
    "compile_motion",
    "mix_audio",
    "Topology",
    "TransitionPlan",
    "assemble",
    "choose_topology",
    "plan_transitions",
    "check_ffmpeg",
    "require_ffmpeg",
]
