"""
Error taxonomy for the preview pipeline.

Every ``PreviewError`` is reported to the user as an error and recorded
as a telemetry exception.  ``SelectionCancelled`` is deliberately not a
``PreviewError``: backing out of a prompt ends the pipeline with a
warning and nothing else.
"""

from __future__ import annotations


class PreviewError(Exception):
    """Base class for failures surfaced to the user."""


class InputMissing(PreviewError):
    """No file or directory was given and no active document is known."""


class PathNotFound(PreviewError):
    """Nothing exists at the given path."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class UnsupportedComponent(PreviewError):
    """The path exists but does not belong to a recognised component."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class LaunchFailure(PreviewError):
    """The preview process exited with a non-zero status."""

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.exit_code = exit_code


class ToolNotInstalled(LaunchFailure):
    """The sfdx preview plugin is not installed (exit code 127)."""


class SelectionCancelled(Exception):
    """The user dismissed the platform picker or the device prompt.

    Attributes:
        step: ``"platform"`` or ``"device"``.
        platform: The chosen platform when cancelled at the device step.
    """

    def __init__(self, step: str, platform=None):
        super().__init__(f"selection cancelled at {step} step")
        self.step = step
        self.platform = platform
