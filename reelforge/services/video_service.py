"""
Video Service - scene rendering, audio mixing and project assembly.

Thin orchestration over the rendering modules: fills in defaults from
config, checks FFmpeg before touching any file, and wires branding clips and
captions around the core assembly.
"""
import logging
from typing import Optional

from reelforge.captions.engine import embed_captions, validate_caption_options
from reelforge.captions.timing import shift_segments
from reelforge.config import config
from reelforge.rendering.assembly import assemble, scene_starts
from reelforge.rendering.audio import mix_audio
from reelforge.rendering.ffmpeg import read_output, require_ffmpeg, scratch_dir
from reelforge.rendering.media import stage
from reelforge.rendering.models import (
    AssemblyInput,
    AssemblyOutput,
    AssemblyScene,
    AudioMixOptions,
    AudioMixOutput,
    MediaSource,
    SceneRenderInput,
    SceneRenderOutput,
    TransitionSpec,
    TransitionType,
)
from reelforge.rendering.motion import render_image_clip, total_frames
from reelforge.rendering.validation import validate_render_params

logger = logging.getLogger(__name__)


class VideoService:
    """
    Synchronous rendering facade.

    Every public method blocks until its ffmpeg runs finish and returns the
    encoded bytes; scratch files never outlive the call.
    """

    def generate_scene_video(self, request: SceneRenderInput) -> SceneRenderOutput:
        """
        Turn one still image into a scene clip.

        The returned duration is the encoded length: a whole number of
        frames for motion clips, so within one frame of the request.
        """
        width = request.width if request.width is not None else config.render.width
        height = request.height if request.height is not None else config.render.height
        fps = request.fps if request.fps is not None else config.render.fps
        width, height, fps, duration = validate_render_params(width, height, fps, request.duration)

        require_ffmpeg()

        spec = request.motion_spec
        logger.info(
            f"Rendering scene {request.project_id}/{request.scene_id}: "
            f"{duration}s, motion={spec.type.value if spec else 'none'}"
        )

        with scratch_dir() as workdir:
            image_path = stage(request.source, workdir / "source.img")
            output_path = workdir / f"scene_{request.scene_id}.mp4"
            render_image_clip(image_path, output_path, duration, fps, width, height, spec)
            video = read_output(output_path, "scene clip")

        actual = total_frames(duration, fps) / fps if spec is not None else duration
        return SceneRenderOutput(video=video, duration=actual, format="mp4", width=width, height=height)

    def mix_scene_audio(
        self,
        voice: MediaSource,
        music: Optional[MediaSource] = None,
        options: Optional[AudioMixOptions] = None,
    ) -> AudioMixOutput:
        """Mix narration with optional background music."""
        options = options or AudioMixOptions(
            voice_volume=config.render.voice_volume,
            music_volume=config.render.music_volume,
        )
        require_ffmpeg()
        audio = mix_audio(voice, music, options)
        return AudioMixOutput(audio=audio, format=options.output_format, size=len(audio))

    def assemble_project(self, request: AssemblyInput) -> AssemblyOutput:
        """
        Assemble a project: branding intro/outro, scenes, watermark, captions.

        Caption timings are relative to the first content scene and are moved
        by wherever that scene lands on the final timeline.
        """
        captions = request.caption_config
        if captions is not None:
            validate_caption_options(captions.options)
        require_ffmpeg()

        timeline = self._with_branding(request)
        logger.info(f"Assembling project {request.project_id}: {len(request.scenes)} scenes")

        result = assemble(
            timeline,
            width=request.width,
            height=request.height,
            fps=request.fps,
            output_format=request.output_format,
            watermark=request.watermark,
        )
        video = result.video

        if captions is not None and captions.segments:
            offset = scene_starts(timeline)[1] if request.branding_intro is not None else 0.0
            segments = shift_segments(captions.segments, offset)
            video = embed_captions(video, segments, captions.options, output_format=request.output_format)

        logger.info(f"Project {request.project_id} assembled: {result.duration:.2f}s, {len(video)} bytes")
        return AssemblyOutput(
            video=video,
            duration=result.duration,
            format=request.output_format,
            size=len(video),
        )

    @staticmethod
    def _with_branding(request: AssemblyInput) -> list[AssemblyScene]:
        timeline = list(request.scenes)
        if request.branding_intro is not None:
            timeline.insert(0, AssemblyScene(
                video=request.branding_intro,
                duration=request.branding_duration,
                transition=TransitionSpec(type=TransitionType.FADE),
            ))
        if request.branding_outro is not None:
            timeline.append(AssemblyScene(
                video=request.branding_outro,
                duration=request.branding_duration,
            ))
        return timeline


_video_service: Optional[VideoService] = None


def get_video_service() -> VideoService:
    """Get singleton VideoService instance."""
    global _video_service
    if _video_service is None:
        _video_service = VideoService()
    return _video_service
