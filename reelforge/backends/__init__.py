"""
Rendering backends.
"""
from .base import RenderingBackend
from .ffmpeg import FFmpegBackend
from .remotion import RemotionBackend
from .slidev import SlidevBackend
from .registry import BackendRegistry, create_default_registry

__all__ = [
    "RenderingBackend",
    "FFmpegBackend",
    "RemotionBackend",
    "SlidevBackend",
    "BackendRegistry",
    "create_default_registry",
]
