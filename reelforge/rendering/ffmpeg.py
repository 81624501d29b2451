"""
FFmpeg process boundary.

Every media operation goes through `run_ffmpeg`, which runs one subprocess
with a timeout and turns failures into SubprocessError. Scratch space is
acquired with `scratch_dir()` and removed on every exit path.
"""
import logging
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Sequence

from reelforge.config import config
from reelforge.exceptions import SubprocessError, ToolUnavailableError

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "reelforge-"

VIDEO_CODECS = {
    "mp4": ["-c:v", "libx264", "-preset", "fast", "-crf", "20", "-pix_fmt", "yuv420p"],
    "mov": ["-c:v", "libx264", "-preset", "fast", "-crf", "20", "-pix_fmt", "yuv420p"],
    "webm": ["-c:v", "libvpx-vp9", "-b:v", "0", "-crf", "32", "-pix_fmt", "yuv420p"],
}
AUDIO_CODECS = {
    "mp4": ["-c:a", "aac", "-b:a", "192k"],
    "mov": ["-c:a", "aac", "-b:a", "192k"],
    "webm": ["-c:a", "libopus"],
}
CONTAINER_FLAGS = {
    "mp4": ["-movflags", "+faststart"],
    "mov": ["-movflags", "+faststart"],
    "webm": [],
}
OUTPUT_FORMATS = tuple(VIDEO_CODECS)


def ffmpeg_binary() -> str:
    return config.paths.ffmpeg_path


def check_ffmpeg() -> bool:
    """Probe `ffmpeg -version`. Returns False if missing or unresponsive."""
    cmd = [ffmpeg_binary(), "-version"]
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=config.timeouts.probe,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug(f"FFmpeg probe failed: {e}")
        return False
    return result.returncode == 0


def require_ffmpeg() -> None:
    """Raise ToolUnavailableError unless ffmpeg answers the version probe."""
    if not check_ffmpeg():
        raise ToolUnavailableError(
            "ffmpeg",
            "FFmpeg is not installed or not responding. Install FFmpeg or set FFMPEG_PATH.",
        )


def run_ffmpeg(args: Sequence[str], timeout: float, description: str = "ffmpeg") -> subprocess.CompletedProcess:
    """
    Run ffmpeg with the given arguments (binary and -y are prepended).

    Args:
        args: Arguments after the binary name
        timeout: Seconds before the process is killed
        description: Short label used in log lines

    Returns:
        The completed process

    Raises:
        SubprocessError: on non-zero exit or timeout
        ToolUnavailableError: if the binary cannot be executed
    """
    cmd = [ffmpeg_binary(), "-y", *[str(a) for a in args]]
    logger.debug(f"{description}: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        logger.error(f"{description} timed out after {timeout}s")
        stderr = e.stderr if isinstance(e.stderr, str) else ""
        raise SubprocessError(cmd, None, stderr, timed_out=True, timeout=timeout) from e
    except FileNotFoundError as e:
        raise ToolUnavailableError("ffmpeg", str(e)) from e

    if result.returncode != 0:
        logger.error(f"{description} failed (exit code {result.returncode})")
        logger.error(f"FFmpeg stderr: {result.stderr[:1000]}")
        raise SubprocessError(cmd, result.returncode, result.stderr)

    return result


@contextmanager
def scratch_dir(prefix: str = SCRATCH_PREFIX) -> Iterator[Path]:
    """Temporary working directory, removed on success and on failure."""
    path = Path(tempfile.mkdtemp(prefix=prefix, dir=str(config.paths.temp_dir)))
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


def read_output(path: Path, description: str = "output") -> bytes:
    """Read a produced file, failing loudly if ffmpeg left nothing behind."""
    if not path.exists() or path.stat().st_size == 0:
        raise SubprocessError([ffmpeg_binary()], 0, f"{description} not created or empty: {path.name}")
    return path.read_bytes()


def output_codec_args(output_format: str, copy_audio: bool = False) -> list[str]:
    """Encoder arguments for an output container; `copy_audio` passes the audio stream through."""
    audio = ["-c:a", "copy"] if copy_audio else AUDIO_CODECS[output_format]
    return [*VIDEO_CODECS[output_format], *audio, *CONTAINER_FLAGS[output_format]]
