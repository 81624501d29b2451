"""
Pydantic models for caption rendering.
"""
from enum import Enum
from typing import Optional, Self

from pydantic import BaseModel, Field, field_validator, model_validator


class WordTiming(BaseModel):
    word: str = Field(..., min_length=1)
    start: float = Field(..., ge=0)
    end: float = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_timing(self) -> Self:
        if self.end < self.start:
            raise ValueError(f"end ({self.end}) must be >= start ({self.start})")
        return self

    @property
    def duration(self) -> float:
        return self.end - self.start


class SubtitleSegment(BaseModel):
    text: str = ""
    start_time: float = Field(..., ge=0)
    end_time: float = Field(..., ge=0)
    word_timings: Optional[list[WordTiming]] = None

    @model_validator(mode="after")
    def validate_timing(self) -> Self:
        if self.end_time < self.start_time:
            raise ValueError(f"end_time ({self.end_time}) must be >= start_time ({self.start_time})")
        return self

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


class CaptionPosition(str, Enum):
    TOP_LEFT = "top-left"
    TOP_CENTER = "top-center"
    TOP_RIGHT = "top-right"
    MIDDLE_LEFT = "middle-left"
    MIDDLE_CENTER = "middle-center"
    MIDDLE_RIGHT = "middle-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_CENTER = "bottom-center"
    BOTTOM_RIGHT = "bottom-right"

    @property
    def vertical(self) -> str:
        return self.value.split("-")[0]

    @property
    def horizontal(self) -> str:
        return self.value.split("-")[1]


class CaptionOptions(BaseModel):
    font: str = "Arial"
    font_size: int = Field(default=24, gt=0)
    font_color: str = "#FFFFFF"
    position: CaptionPosition = CaptionPosition.BOTTOM_CENTER
    animation_style: str = "none"
    highlight_color: str = "#FFD700"
    words_per_line: int = Field(default=0, ge=0)
    video_width: int = Field(default=1920, gt=0)
    video_height: int = Field(default=1080, gt=0)

    @field_validator("position", mode="before")
    @classmethod
    def expand_bare_position(cls, v):
        # "top" / "middle" / "bottom" mean the centred variant
        if isinstance(v, str) and v in ("top", "middle", "bottom"):
            return f"{v}-center"
        return v
