"""
Remotion backend (placeholder).

Remotion renders a whole composition at once, so both operations will go
through its renderer CLI once it is wired up.
"""
import shutil

from reelforge.exceptions import BackendNotImplementedError
from reelforge.rendering.models import AssemblyInput, AssemblyOutput, SceneRenderInput, SceneRenderOutput

from .base import RenderingBackend

INSTALL_HINT = "Install the Remotion CLI (npx remotion) to enable."


class RemotionBackend(RenderingBackend):
    cli = "remotion"

    @property
    def id(self) -> str:
        return "remotion"

    @property
    def name(self) -> str:
        return "Remotion"

    def render_scene(self, request: SceneRenderInput) -> SceneRenderOutput:
        raise BackendNotImplementedError(self.id, INSTALL_HINT)

    def assemble_project(self, request: AssemblyInput) -> AssemblyOutput:
        raise BackendNotImplementedError(self.id, INSTALL_HINT)

    def is_available(self) -> bool:
        return shutil.which(self.cli) is not None
