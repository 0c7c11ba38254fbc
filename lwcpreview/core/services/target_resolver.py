"""
Target resolver — turns a source path into a component identifier.
"""

from __future__ import annotations

import logging
import re

from lwcpreview.adapters.base import WorkspaceInspector
from lwcpreview.core.errors import PathNotFound, UnsupportedComponent
from lwcpreview.core.services.messages import Messages

logger = logging.getLogger(__name__)

# URI paths of Windows files arrive as "/c:/Users/..."
_DRIVE_LETTER_PATH = re.compile(r"^/[A-Za-z]:")


def normalize_path(path: str) -> str:
    """Strip the leading slash from a drive-letter URI path."""
    if _DRIVE_LETTER_PATH.match(path):
        return path[1:]
    return path


def resolve_target(
    path: str,
    workspace: WorkspaceInspector,
    messages: Messages | None = None,
) -> str:
    """Resolve the component identifier for a file or bundle directory.

    Args:
        path: File or directory path of the component.
        workspace: Inspector used for existence checks and name mapping.
        messages: Message table for the error text.

    Returns:
        The component identifier, e.g. ``c/foo``.

    Raises:
        PathNotFound: Nothing exists at ``path``.
        UnsupportedComponent: ``path`` is not part of a component bundle.
    """
    messages = messages or Messages()
    resource_path = normalize_path(path)

    if not workspace.exists(resource_path):
        raise PathNotFound(
            messages.localize("lwc_preview_file_nonexist", resource_path),
            path=resource_path,
        )

    if workspace.is_dir(resource_path):
        component = workspace.module_from_directory(resource_path)
    else:
        component = workspace.module_from_file(resource_path)

    if not component or not component.strip():
        raise UnsupportedComponent(
            messages.localize("lwc_preview_unsupported", resource_path),
            path=resource_path,
        )

    logger.debug("Resolved %s → %s", resource_path, component)
    return component
