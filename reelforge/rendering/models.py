"""
Pydantic models for the rendering engine.
Request/response shapes for scene rendering, audio mixing and assembly.
"""
from enum import Enum
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from reelforge.captions.models import CaptionOptions, SubtitleSegment

# A media source: local path, http(s) URL, or raw bytes already in memory
MediaSource = Union[bytes, Path, str]


class MotionType(str, Enum):
    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"
    PAN_LEFT = "pan_left"
    PAN_RIGHT = "pan_right"
    PAN_UP = "pan_up"
    PAN_DOWN = "pan_down"
    KENBURNS_IN = "kenburns_in"
    KENBURNS_OUT = "kenburns_out"
    STATIC = "static"


class TransitionType(str, Enum):
    FADE = "fade"
    FADEBLACK = "fadeblack"
    FADEWHITE = "fadewhite"
    DISSOLVE = "dissolve"
    WIPELEFT = "wipeleft"
    WIPERIGHT = "wiperight"
    SLIDELEFT = "slideleft"
    SLIDERIGHT = "slideright"
    CIRCLEOPEN = "circleopen"
    CIRCLECLOSE = "circleclose"
    RADIAL = "radial"
    SMOOTHLEFT = "smoothleft"
    SMOOTHRIGHT = "smoothright"
    ZOOMIN = "zoomin"
    NONE = "none"


DEFAULT_TRANSITION_DURATION = 0.5


class MotionSpec(BaseModel):
    """Pan/zoom applied to a still image. `speed` is clamped to [0.1, 1.0] at compile time."""
    type: MotionType
    speed: float = Field(default=0.5)
    easing: Optional[str] = None


class TransitionSpec(BaseModel):
    type: TransitionType = TransitionType.FADE
    duration: float = Field(default=DEFAULT_TRANSITION_DURATION, ge=0)

    @property
    def is_none(self) -> bool:
        return self.type == TransitionType.NONE


class SceneRenderInput(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    project_id: str = Field(..., min_length=1)
    scene_id: str = Field(..., min_length=1)
    source: MediaSource
    duration: float
    motion_spec: Optional[MotionSpec] = None
    width: Optional[int] = None
    height: Optional[int] = None
    fps: Optional[int] = None


class SceneRenderOutput(BaseModel):
    video: bytes = Field(repr=False)
    duration: float
    format: str = "mp4"
    width: int
    height: int


class AssemblyScene(BaseModel):
    """One timeline entry: picture, optional narration, and the transition into the next scene."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    video: MediaSource
    audio: Optional[MediaSource] = None
    duration: float
    transition: Optional[TransitionSpec] = None


class WatermarkPosition(str, Enum):
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    CENTER = "center"


class Watermark(BaseModel):
    text: str = Field(..., min_length=1)
    position: WatermarkPosition = WatermarkPosition.BOTTOM_RIGHT
    opacity: float = Field(default=0.5, ge=0, le=1)
    font_size: int = Field(default=32, gt=0)


class CaptionConfig(BaseModel):
    """Captions burned in after assembly."""
    segments: list[SubtitleSegment] = Field(default_factory=list)
    options: CaptionOptions = Field(default_factory=CaptionOptions)


class AssemblyInput(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    project_id: str = Field(..., min_length=1)
    scenes: list[AssemblyScene] = Field(..., min_length=1)
    output_format: str = "mp4"
    width: Optional[int] = None
    height: Optional[int] = None
    fps: Optional[int] = None
    caption_config: Optional[CaptionConfig] = None
    watermark: Optional[Watermark] = None
    branding_intro: Optional[MediaSource] = None
    branding_outro: Optional[MediaSource] = None
    branding_duration: float = Field(default=3.0, gt=0)


class AssemblyOutput(BaseModel):
    video: bytes = Field(repr=False)
    duration: float
    format: str = "mp4"
    size: int


class AudioMixOptions(BaseModel):
    voice_volume: float = 100.0
    music_volume: float = 30.0
    music_ducking_enabled: bool = False
    output_format: Literal["mp3", "wav"] = "mp3"


class AudioMixOutput(BaseModel):
    audio: bytes = Field(repr=False)
    format: str = "mp3"
    size: int
