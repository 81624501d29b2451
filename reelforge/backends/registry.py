"""
Rendering backend registry.

The registry is an ordinary object built at the composition root
(`create_default_registry`) and handed to whoever needs it.
"""
import logging
import threading
from typing import Optional

from reelforge.exceptions import UnknownBackendError

from .base import RenderingBackend
from .ffmpeg import FFmpegBackend
from .remotion import RemotionBackend
from .slidev import SlidevBackend

logger = logging.getLogger(__name__)


class BackendRegistry:
    """id -> backend map, safe to read while another thread registers."""

    def __init__(self):
        self._backends: dict[str, RenderingBackend] = {}
        self._lock = threading.Lock()

    def register(self, backend: RenderingBackend) -> None:
        """Add a backend. An existing backend with the same id is replaced."""
        with self._lock:
            if backend.id in self._backends:
                logger.debug(f"Replacing rendering backend '{backend.id}'")
            self._backends[backend.id] = backend
        logger.info(f"Registered rendering backend: {backend.id} ({backend.name})")

    def get(self, backend_id: str) -> RenderingBackend:
        with self._lock:
            backend = self._backends.get(backend_id)
            if backend is None:
                raise UnknownBackendError(backend_id, list(self._backends))
            return backend

    def ids(self) -> list[str]:
        with self._lock:
            return list(self._backends)

    def get_available(self) -> list[RenderingBackend]:
        """Backends whose availability probe passes. A probe that raises counts as unavailable."""
        with self._lock:
            backends = list(self._backends.values())

        available = []
        for backend in backends:
            try:
                ok = backend.is_available()
            except Exception as e:
                logger.warning(f"Availability probe for '{backend.id}' failed: {e}")
                ok = False
            if ok:
                available.append(backend)
        return available

    def __contains__(self, backend_id: str) -> bool:
        with self._lock:
            return backend_id in self._backends

    def __len__(self) -> int:
        with self._lock:
            return len(self._backends)


def create_default_registry(ffmpeg_backend: Optional[RenderingBackend] = None) -> BackendRegistry:
    """Registry with the ffmpeg, remotion and slidev backends."""
    registry = BackendRegistry()
    registry.register(ffmpeg_backend or FFmpegBackend())
    registry.register(RemotionBackend())
    registry.register(SlidevBackend())
    return registry
