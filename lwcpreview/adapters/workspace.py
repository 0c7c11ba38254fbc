"""
SFDX workspace adapter — maps bundle paths to component identifiers.

In an SFDX project every Lightning Web Component lives in its own
bundle directory under a folder named ``lwc``::

    force-app/main/default/lwc/foo/foo.js   →  c/foo
    force-app/main/default/lwc/foo/         →  c/foo

Anything outside such a bundle is not a previewable component.
"""

from __future__ import annotations

import logging
from pathlib import Path

from lwcpreview.adapters.base import WorkspaceInspector

logger = logging.getLogger(__name__)

LWC_FOLDER = "lwc"

# Bundle files that name the component they belong to
COMPONENT_EXTENSIONS = frozenset({".js", ".ts", ".html", ".css"})


class SfdxWorkspace(WorkspaceInspector):
    """Workspace inspector for SFDX-format projects."""

    def __init__(self, namespace: str = "c"):
        self._namespace = namespace

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def is_dir(self, path: str) -> bool:
        return Path(path).is_dir()

    def module_from_directory(self, path: str) -> str | None:
        bundle = Path(path)
        if bundle.parent.name != LWC_FOLDER or not bundle.name:
            logger.debug("Not a component bundle directory: %s", path)
            return None
        return f"{self._namespace}/{bundle.name}"

    def module_from_file(self, path: str) -> str | None:
        file = Path(path)
        if file.suffix not in COMPONENT_EXTENSIONS:
            logger.debug("Unsupported component file type: %s", path)
            return None
        if file.stem != file.parent.name:
            logger.debug("File does not name its bundle: %s", path)
            return None
        return self.module_from_directory(str(file.parent))
