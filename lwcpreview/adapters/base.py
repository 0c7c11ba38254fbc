"""
Adapter base — the contracts between the preview pipeline and its host.

The pipeline never talks to the terminal, the filesystem layout rules
or the telemetry backend directly.  It is handed one adapter per
concern at construction time:

    WorkspaceInspector   does the path exist, which component is it
    Prompter             platform picker and device-name input
    OutputChannel        append-only output log
    Notifier             info / warning / error messages
    TelemetrySink        command and exception events
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from lwcpreview.core.models.platform import PlatformOption


class WorkspaceInspector(ABC):
    """Filesystem inspection and component-name resolution."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Whether anything exists at ``path``."""

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Whether ``path`` is a directory."""

    @abstractmethod
    def module_from_file(self, path: str) -> str | None:
        """Component identifier for a file, or None if unrecognised."""

    @abstractmethod
    def module_from_directory(self, path: str) -> str | None:
        """Component identifier for a directory, or None if unrecognised."""


class Prompter(ABC):
    """User elicitation.

    Both methods return None when the user cancels.  ``input_box``
    returns ``""`` when the user submits without typing, which is not
    a cancellation.
    """

    @abstractmethod
    def pick(
        self,
        options: Sequence[PlatformOption],
        placeholder: str,
    ) -> PlatformOption | None:
        """Present ``options`` and return the chosen one."""

    @abstractmethod
    def input_box(self, placeholder: str) -> str | None:
        """Prompt for free text."""


class OutputChannel(ABC):
    """Persistent output log the user can inspect after the fact."""

    @abstractmethod
    def append_line(self, line: str) -> None:
        """Append one line to the log."""

    def show(self) -> None:
        """Bring the log to the user's attention (no-op by default)."""


class Notifier(ABC):
    """User notifications."""

    @abstractmethod
    def show_info(self, message: str) -> None: ...

    @abstractmethod
    def show_warning(self, message: str) -> None: ...

    @abstractmethod
    def show_error(self, message: str) -> None: ...

    @abstractmethod
    def show_successful_execution(self, message: str, detail: str = "") -> None:
        """Acknowledge a successful run; ``detail`` echoes the executed command."""


class TelemetrySink(ABC):
    """Telemetry events, keyed by the originating command's log name."""

    @abstractmethod
    def send_command_event(
        self,
        log_name: str,
        duration_ms: int | None = None,
        properties: dict | None = None,
    ) -> None: ...

    @abstractmethod
    def send_exception(self, name: str, message: str, error_class: str = "") -> None: ...
