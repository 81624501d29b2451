"""
Rendering engine exceptions.

Every failure surfaces as a single RenderError subclass carrying a `kind`
and a human-readable `detail`.
"""
from typing import Optional, Sequence


class RenderError(Exception):
    """Base exception for rendering errors."""

    kind = "render_error"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"[{self.kind}] {detail}")


class ValidationError(RenderError):
    """A numeric or structural parameter is out of range."""

    kind = "validation"

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}={value!r}: {reason}")


class ToolUnavailableError(RenderError):
    """External binary is missing or does not respond."""

    kind = "tool_unavailable"

    def __init__(self, tool: str, reason: str = "not installed"):
        self.tool = tool
        self.reason = reason
        super().__init__(f"{tool} is unavailable: {reason}")


class SubprocessError(RenderError):
    """External binary exited non-zero or timed out."""

    kind = "subprocess"

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int],
        stderr: str = "",
        timed_out: bool = False,
        timeout: Optional[float] = None,
    ):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr or ""
        self.timed_out = timed_out
        self.timeout = timeout

        tool = self.command[0] if self.command else "subprocess"
        if timed_out:
            detail = f"{tool} timed out after {timeout}s"
        else:
            detail = f"{tool} exited with code {returncode}"
        tail = self.stderr.strip()[-500:]
        if tail:
            detail = f"{detail}: {tail}"
        super().__init__(detail)


class UnknownBackendError(RenderError):
    """Registry lookup miss."""

    kind = "unknown_backend"

    def __init__(self, backend_id: str, available: Sequence[str]):
        self.backend_id = backend_id
        self.available = list(available)
        listed = ", ".join(self.available) if self.available else "none"
        super().__init__(f"Unknown rendering backend: {backend_id}. Available: [{listed}]")


class BackendNotImplementedError(RenderError):
    """Backend is registered but its renderer is not installed or implemented."""

    kind = "not_implemented"

    def __init__(self, backend_id: str, hint: str):
        self.backend_id = backend_id
        self.hint = hint
        super().__init__(f"{backend_id} backend not yet implemented. {hint}")


class SourceError(RenderError):
    """A media source could not be read or downloaded."""

    kind = "source"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"cannot load {source}: {reason}")
