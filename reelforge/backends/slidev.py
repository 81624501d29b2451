"""
Slidev backend (placeholder).

Slides are meant to be rendered to PNG by Slidev's exporter and the final
assembly done with FFmpeg.
"""
import shutil

from reelforge.exceptions import BackendNotImplementedError
from reelforge.rendering.models import AssemblyInput, AssemblyOutput, SceneRenderInput, SceneRenderOutput

from .base import RenderingBackend

INSTALL_HINT = "Install slidev and its Playwright exporter to enable."


class SlidevBackend(RenderingBackend):
    cli = "slidev"

    @property
    def id(self) -> str:
        return "slidev"

    @property
    def name(self) -> str:
        return "Slidev"

    def render_scene(self, request: SceneRenderInput) -> SceneRenderOutput:
        raise BackendNotImplementedError(self.id, INSTALL_HINT)

    def assemble_project(self, request: AssemblyInput) -> AssemblyOutput:
        raise BackendNotImplementedError(self.id, INSTALL_HINT)

    def is_available(self) -> bool:
        return shutil.which(self.cli) is not None
