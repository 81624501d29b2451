"""
Narration and background music mixing.

Volumes are percentages (100 = unchanged). With music, the music bed is
looped to outlast the narration and the mix ends with the narration.
"""
import logging
from typing import Optional

from reelforge.config import config
from reelforge.rendering.ffmpeg import read_output, run_ffmpeg, scratch_dir
from reelforge.rendering.filtergraph import Filter, FilterGraph

from .media import stage, stage_all
from .models import AudioMixOptions, MediaSource
from .validation import validate_volume

logger = logging.getLogger(__name__)

# aloop needs a buffer size; this is effectively "the whole input"
LOOP_BUFFER_SIZE = "2e+09"

CODECS = {
    "mp3": ["-c:a", "libmp3lame", "-q:a", "2"],
    "wav": ["-c:a", "pcm_s16le"],
}


def volume_factor(percent: float) -> float:
    return percent / 100


def mix_graph(voice_volume: float, music_volume: float) -> FilterGraph:
    """voice + looped music -> [out], duration of the voice track."""
    graph = FilterGraph()
    graph.chain(["0:a"], [Filter("volume", volume_factor(voice_volume))], ["voice"])
    graph.chain(
        ["1:a"],
        [
            Filter("volume", volume_factor(music_volume)),
            Filter("aloop", loop=-1, size=LOOP_BUFFER_SIZE),
        ],
        ["music"],
    )
    graph.chain(
        ["voice", "music"],
        [Filter("amix", inputs=2, duration="first", dropout_transition=2)],
        ["out"],
    )
    return graph


def mix_audio(voice: MediaSource, music: Optional[MediaSource] = None,
              options: Optional[AudioMixOptions] = None) -> bytes:
    """
    Mix narration with an optional music bed.

    Args:
        voice: Narration track
        music: Background music, looped to cover the narration
        options: Volumes (percent), ducking flag and output container

    Returns:
        Encoded audio bytes

    Raises:
        ValidationError: on negative or non-finite volumes
        SubprocessError: if ffmpeg fails or times out
    """
    options = options or AudioMixOptions()
    voice_volume = validate_volume(options.voice_volume, "voice_volume")
    music_volume = validate_volume(options.music_volume, "music_volume")

    if options.music_ducking_enabled:
        # TODO: sidechaincompress the music under the voice once ducking levels are settled
        logger.warning("Music ducking requested but not supported yet, mixing without it")

    ext = options.output_format
    with scratch_dir() as workdir:
        output_path = workdir / f"mixed.{ext}"

        if music is not None:
            voice_path, music_path = stage_all([
                (voice, workdir / "voice.audio"),
                (music, workdir / "music.audio"),
            ])
            graph = mix_graph(voice_volume, music_volume)
            logger.info(f"Mixing voice ({voice_volume}%) with music ({music_volume}%)")
            run_ffmpeg(
                [
                    "-i", str(voice_path),
                    "-i", str(music_path),
                    "-filter_complex", graph.render(),
                    "-map", "[out]",
                    *CODECS[ext],
                    str(output_path),
                ],
                timeout=config.timeouts.audio_mix,
                description="Audio mix",
            )
        else:
            voice_path = stage(voice, workdir / "voice.audio")
            logger.info(f"Scaling voice to {voice_volume}% (no music)")
            run_ffmpeg(
                [
                    "-i", str(voice_path),
                    "-af", Filter("volume", volume_factor(voice_volume)).render(),
                    *CODECS[ext],
                    str(output_path),
                ],
                timeout=config.timeouts.audio_voice_only,
                description="Voice volume",
            )

        result = read_output(output_path, "mixed audio")

    logger.info(f"Audio ready: {len(result)} bytes ({ext})")
    return result

