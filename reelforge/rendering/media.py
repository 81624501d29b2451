"""
Media source staging.

Scene inputs arrive as raw bytes, local paths or http(s) URLs. Before ffmpeg
sees them they are staged as files in the operation's scratch directory.
Staging is I/O bound, so batches are fetched on a thread pool.
"""
import logging
import shutil
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Sequence

import httpx

from reelforge.config import config
from reelforge.exceptions import SourceError

from .models import MediaSource

logger = logging.getLogger(__name__)


def is_url(source: MediaSource) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def describe(source: MediaSource) -> str:
    if isinstance(source, bytes):
        return f"<{len(source)} bytes>"
    return str(source)


def download(url: str, dest: Path, timeout: Optional[float] = None) -> Path:
    """Fetch a URL into `dest`."""
    timeout = timeout if timeout is not None else config.timeouts.download
    try:
        with httpx.Client(timeout=timeout, follow_redirects=True) as client:
            response = client.get(url)
            response.raise_for_status()
    except httpx.TimeoutException as e:
        raise SourceError(url, f"download timed out after {timeout}s") from e
    except httpx.HTTPStatusError as e:
        raise SourceError(url, f"HTTP {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise SourceError(url, f"request failed: {e}") from e

    dest.write_bytes(response.content)
    logger.info(f"Downloaded: {url} ({len(response.content)} bytes)")
    return dest


def stage(source: MediaSource, dest: Path) -> Path:
    """
    Materialize one source at `dest`.

    Raises:
        SourceError: if the source is empty, missing or cannot be downloaded
    """
    if isinstance(source, bytes):
        if not source:
            raise SourceError(describe(source), "empty buffer")
        dest.write_bytes(source)
        return dest

    if is_url(source):
        return download(source, dest)

    path = Path(source)
    if not path.is_file():
        raise SourceError(str(path), "file not found")
    if path.stat().st_size == 0:
        raise SourceError(str(path), "file is empty")
    shutil.copyfile(path, dest)
    return dest


def stage_all(items: Sequence[tuple[MediaSource, Path]], workers: Optional[int] = None) -> list[Path]:
    """
    Stage several sources concurrently, preserving order.

    The first failure is raised once every fetch has finished.
    """
    if not items:
        return []
    workers = workers or config.render.io_workers
    with ThreadPoolExecutor(max_workers=min(workers, len(items))) as executor:
        futures = [executor.submit(stage, source, dest) for source, dest in items]
        return [f.result() for f in futures]
