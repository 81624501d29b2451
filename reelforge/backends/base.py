"""
Base class for rendering backends.
"""
from abc import ABC, abstractmethod

from reelforge.rendering.models import AssemblyInput, AssemblyOutput, SceneRenderInput, SceneRenderOutput


class RenderingBackend(ABC):
    """Renders single scenes and assembles them into a finished video."""

    @property
    @abstractmethod
    def id(self) -> str:
        """Registry key."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable backend name."""
        pass

    @abstractmethod
    def render_scene(self, request: SceneRenderInput) -> SceneRenderOutput:
        """
        Render one scene from its source asset.

        Args:
            request: Source, duration, optional motion and output size

        Returns:
            Encoded scene video with its actual duration and size
        """
        pass

    @abstractmethod
    def assemble_project(self, request: AssemblyInput) -> AssemblyOutput:
        """Join rendered scenes, with transitions, into the final video."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the backend's tooling is installed and responding."""
        pass
