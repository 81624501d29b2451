"""
FFmpeg rendering backend.

Adapts VideoService to the RenderingBackend contract.
"""
import logging
from typing import Optional

from reelforge.rendering.ffmpeg import check_ffmpeg
from reelforge.rendering.models import AssemblyInput, AssemblyOutput, SceneRenderInput, SceneRenderOutput
from reelforge.services.video_service import VideoService, get_video_service

from .base import RenderingBackend

logger = logging.getLogger(__name__)


class FFmpegBackend(RenderingBackend):
    """Local FFmpeg rendering: image clips with motion, crossfaded assembly, burned-in captions."""

    def __init__(self, service: Optional[VideoService] = None):
        self._service = service or get_video_service()

    @property
    def id(self) -> str:
        return "ffmpeg"

    @property
    def name(self) -> str:
        return "FFmpeg"

    def render_scene(self, request: SceneRenderInput) -> SceneRenderOutput:
        return self._service.generate_scene_video(request)

    def assemble_project(self, request: AssemblyInput) -> AssemblyOutput:
        return self._service.assemble_project(request)

    def is_available(self) -> bool:
        available = check_ffmpeg()
        if not available:
            logger.warning("FFmpeg backend unavailable: ffmpeg -version failed")
        return available
