"""
Adapters — the host-side collaborators of the preview pipeline.
"""

from lwcpreview.adapters.base import (
    Notifier,
    OutputChannel,
    Prompter,
    TelemetrySink,
    WorkspaceInspector,
)

__all__ = [
    "Notifier",
    "OutputChannel",
    "Prompter",
    "TelemetrySink",
    "WorkspaceInspector",
]
