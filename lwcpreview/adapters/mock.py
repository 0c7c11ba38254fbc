"""
Mock adapters — in-memory test doubles for every pipeline collaborator.

Each double records what it received so tests can assert on the exact
prompts shown, lines logged and events sent, without a terminal or a
real SFDX project.
"""

from __future__ import annotations

from typing import Sequence

from lwcpreview.adapters.base import (
    Notifier,
    OutputChannel,
    Prompter,
    TelemetrySink,
    WorkspaceInspector,
)
from lwcpreview.core.models.platform import PlatformOption

# Sentinel for "the user dismissed the prompt"
CANCEL = object()


class MockWorkspace(WorkspaceInspector):
    """Workspace backed by a dict of path → (is_dir, component or None)."""

    def __init__(self, entries: dict[str, tuple[bool, str | None]] | None = None):
        self._entries = dict(entries or {})
        self.checked: list[str] = []

    def add(self, path: str, *, is_dir: bool = False, component: str | None = None) -> None:
        self._entries[path] = (is_dir, component)

    def exists(self, path: str) -> bool:
        self.checked.append(path)
        return path in self._entries

    def is_dir(self, path: str) -> bool:
        return self._entries[path][0]

    def module_from_file(self, path: str) -> str | None:
        return self._entries[path][1]

    def module_from_directory(self, path: str) -> str | None:
        return self._entries[path][1]


class ScriptedPrompter(Prompter):
    """Prompter answering from a script.

    ``platform`` is a platform name/id, a PlatformOption, or CANCEL.
    ``device`` is the text to submit, or CANCEL.
    """

    def __init__(self, platform=None, device=""):
        self._platform = platform
        self._device = device
        self.pick_calls: list[tuple[list[PlatformOption], str]] = []
        self.input_calls: list[str] = []

    def pick(
        self,
        options: Sequence[PlatformOption],
        placeholder: str,
    ) -> PlatformOption | None:
        self.pick_calls.append((list(options), placeholder))
        if self._platform is CANCEL or self._platform is None:
            return None
        if isinstance(self._platform, PlatformOption):
            return self._platform
        for option in options:
            if self._platform.lower() in (option.id.value, option.platform_name.lower()):
                return option
        return None

    def input_box(self, placeholder: str) -> str | None:
        self.input_calls.append(placeholder)
        if self._device is CANCEL:
            return None
        return self._device


class RecordingChannel(OutputChannel):
    """Output channel that keeps every line in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.show_count = 0

    def append_line(self, line: str) -> None:
        self.lines.append(line)

    def show(self) -> None:
        self.show_count += 1

    def count_containing(self, text: str) -> int:
        return sum(1 for line in self.lines if text in line)


class RecordingNotifier(Notifier):
    """Notifier that records messages by severity."""

    def __init__(self) -> None:
        self.infos: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self.successes: list[tuple[str, str]] = []

    def show_info(self, message: str) -> None:
        self.infos.append(message)

    def show_warning(self, message: str) -> None:
        self.warnings.append(message)

    def show_error(self, message: str) -> None:
        self.errors.append(message)

    def show_successful_execution(self, message: str, detail: str = "") -> None:
        self.successes.append((message, detail))


class RecordingTelemetry(TelemetrySink):
    """Telemetry sink that records events in memory."""

    def __init__(self) -> None:
        self.commands: list[tuple[str, int | None, dict]] = []
        self.exceptions: list[tuple[str, str, str]] = []

    def send_command_event(
        self,
        log_name: str,
        duration_ms: int | None = None,
        properties: dict | None = None,
    ) -> None:
        self.commands.append((log_name, duration_ms, properties or {}))

    def send_exception(self, name: str, message: str, error_class: str = "") -> None:
        self.exceptions.append((name, message, error_class))
