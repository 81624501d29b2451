"""
Pytest configuration and fixtures for reelforge tests.
"""
import os
import subprocess
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

# Set test environment before importing reelforge modules
os.environ["REELFORGE_TEMP_DIR"] = tempfile.mkdtemp(prefix="reelforge-tests-")
os.environ["DEBUG"] = "true"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def scratch_root():
    """The directory scratch workspaces are created in."""
    from reelforge.config import config
    return config.paths.temp_dir


class FakeFFmpeg:
    """
    Stands in for subprocess.run.

    Records every command, writes a small payload to the output path (the
    last argument) and keeps a copy of any text inputs ffmpeg would read.
    """

    def __init__(self):
        self.calls = []
        self.files = {}
        self.returncode = 0
        self.stderr = ""
        self.version_ok = True

    def __call__(self, cmd, **kwargs):
        cmd = list(cmd)
        self.calls.append((cmd, kwargs))

        if "-version" in cmd:
            return subprocess.CompletedProcess(cmd, 0 if self.version_ok else 1, "ffmpeg version 6.1", "")

        for arg in cmd:
            # filter arguments such as ass=/path/captions.ass name files too
            path = Path(arg.split("=", 1)[-1])
            if path.suffix in (".ass", ".txt") and path.exists():
                self.files[path.name] = path.read_text(encoding="utf-8")

        if self.returncode == 0:
            Path(cmd[-1]).write_bytes(b"fake-media-output")
        return subprocess.CompletedProcess(cmd, self.returncode, "", self.stderr)

    @property
    def commands(self):
        """Commands other than the version probe."""
        return [c for c, _ in self.calls if "-version" not in c]

    @property
    def timeouts(self):
        return [kw.get("timeout") for c, kw in self.calls if "-version" not in c]


@pytest.fixture
def fake_ffmpeg():
    """Patch subprocess.run at the ffmpeg boundary."""
    fake = FakeFFmpeg()
    with patch("reelforge.rendering.ffmpeg.subprocess.run", side_effect=fake):
        yield fake


@pytest.fixture
def png_bytes():
    """A stand-in image payload; the fake ffmpeg never decodes it."""
    return b"\x89PNG\r\n\x1a\nfake-image"


@pytest.fixture
def sample_segments():
    """Two caption segments, the first with aligned word timings."""
    from reelforge.captions.models import SubtitleSegment, WordTiming

    return [
        SubtitleSegment(
            text="Hello brave world",
            start_time=0.0,
            end_time=1.5,
            word_timings=[
                WordTiming(word="Hello", start=0.0, end=0.5),
                WordTiming(word="brave", start=0.5, end=1.0),
                WordTiming(word="world", start=1.0, end=1.5),
            ],
        ),
        SubtitleSegment(text="This is amazing content today", start_time=1.5, end_time=4.0),
    ]
