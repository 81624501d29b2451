"""
Rendering Engine Configuration - Environment Variable Management.
Loads render defaults and tool locations from the environment / .env file.
"""
import os
import logging
import tempfile
from pathlib import Path
from dataclasses import dataclass, field

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env from project root
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"

if ENV_FILE.exists():
    load_dotenv(ENV_FILE)
    logger.info(f"Loaded environment from {ENV_FILE}")
else:
    logger.debug(f".env file not found at {ENV_FILE}")


@dataclass
class PathsConfig:
    """External tool and scratch space locations."""
    ffmpeg_path: str
    temp_dir: Path

    @classmethod
    def detect(cls) -> "PathsConfig":
        """Auto-detect paths based on environment and system."""
        temp_dir = Path(os.getenv("REELFORGE_TEMP_DIR", tempfile.gettempdir()))
        temp_dir.mkdir(parents=True, exist_ok=True)

        return cls(
            ffmpeg_path=cls._find_ffmpeg(),
            temp_dir=temp_dir,
        )

    @staticmethod
    def _find_ffmpeg() -> str:
        """Find FFmpeg executable."""
        env_path = os.getenv("FFMPEG_PATH")
        if env_path and os.path.exists(env_path):
            return env_path

        common_paths = [
            "/usr/bin/ffmpeg",
            "/usr/local/bin/ffmpeg",
            "/opt/homebrew/bin/ffmpeg",
            r"C:\ffmpeg\bin\ffmpeg.exe",
        ]

        for path in common_paths:
            if os.path.exists(path):
                return path

        # Try imageio-ffmpeg
        try:
            import imageio_ffmpeg
            return imageio_ffmpeg.get_ffmpeg_exe()
        except (ImportError, RuntimeError):
            pass

        # Fallback to system PATH
        return "ffmpeg"


@dataclass
class TimeoutConfig:
    """Per-operation subprocess timeouts, in seconds."""
    probe: int = 10
    clip: int = 120
    audio_voice_only: int = 60
    audio_mix: int = 120
    concat: int = 300
    assembly: int = 600
    captions: int = 600
    download: float = 60.0


@dataclass
class RenderDefaults:
    """Defaults applied when a request leaves a parameter out."""
    width: int = 1920
    height: int = 1080
    fps: int = 30
    output_format: str = "mp4"
    voice_volume: float = 100.0
    music_volume: float = 30.0
    io_workers: int = 4


@dataclass
class AppConfig:
    """Main rendering engine configuration."""
    paths: PathsConfig
    render: RenderDefaults = field(default_factory=RenderDefaults)
    timeouts: TimeoutConfig = field(default_factory=TimeoutConfig)
    debug: bool = False

    def __post_init__(self):
        if self.render.io_workers < 1:
            logger.warning(f"REELFORGE_IO_WORKERS={self.render.io_workers} is invalid, using 1")
            self.render.io_workers = 1

    def validate(self) -> dict:
        """Validate configuration and return status."""
        return {
            "ffmpeg": {
                "path": self.paths.ffmpeg_path,
                "on_disk": os.path.exists(self.paths.ffmpeg_path),
            },
            "render": {
                "width": self.render.width,
                "height": self.render.height,
                "fps": self.render.fps,
            },
            "temp_dir": str(self.paths.temp_dir),
        }

    def log_status(self):
        """Log configuration status."""
        status = self.validate()

        logger.info("=" * 50)
        logger.info("Rendering Engine Configuration:")
        logger.info(f"  FFmpeg: {status['ffmpeg']['path']}")
        logger.info(f"  Default canvas: {self.render.width}x{self.render.height}@{self.render.fps}")
        logger.info(f"  Scratch dir: {status['temp_dir']}")
        logger.info("=" * 50)

        if not status["ffmpeg"]["on_disk"]:
            logger.warning("FFmpeg not found on disk - relying on system PATH")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer, using {default}")
        return default


def load_config() -> AppConfig:
    """Load configuration from environment variables."""
    render = RenderDefaults(
        width=_int_env("REELFORGE_DEFAULT_WIDTH", 1920),
        height=_int_env("REELFORGE_DEFAULT_HEIGHT", 1080),
        fps=_int_env("REELFORGE_DEFAULT_FPS", 30),
        io_workers=_int_env("REELFORGE_IO_WORKERS", 4),
    )

    timeouts = TimeoutConfig(
        clip=_int_env("REELFORGE_CLIP_TIMEOUT", 120),
        assembly=_int_env("REELFORGE_ASSEMBLY_TIMEOUT", 600),
        captions=_int_env("REELFORGE_CAPTIONS_TIMEOUT", 600),
    )

    return AppConfig(
        paths=PathsConfig.detect(),
        render=render,
        timeouts=timeouts,
        debug=os.getenv("DEBUG", "false").lower() == "true",
    )


# Global config instance
config = load_config()
