"""
Shared test fixtures and configuration.
"""

import sys
from pathlib import Path

import pytest

from lwcpreview.adapters.mock import (
    MockWorkspace,
    RecordingChannel,
    RecordingNotifier,
    RecordingTelemetry,
)
from lwcpreview.core.persistence.state_file import GlobalStore, init_store
from lwcpreview.core.services.process_launcher import launch


@pytest.fixture
def tmp_state_dir(tmp_path: Path) -> Path:
    """Return a temporary directory for state files."""
    state_dir = tmp_path / "state"
    state_dir.mkdir()
    return state_dir


@pytest.fixture
def store(tmp_state_dir: Path) -> GlobalStore:
    return init_store(tmp_state_dir)


@pytest.fixture
def lwc_project(tmp_path: Path) -> Path:
    """An SFDX project with one component bundle ``foo``."""
    bundle = tmp_path / "force-app" / "main" / "default" / "lwc" / "foo"
    bundle.mkdir(parents=True)
    (bundle / "foo.js").write_text("export default class Foo {}\n")
    (bundle / "foo.html").write_text("<template></template>\n")
    (bundle / "helper.js").write_text("export const x = 1;\n")
    (tmp_path / "README.md").write_text("# project\n")
    return tmp_path


@pytest.fixture
def workspace() -> MockWorkspace:
    return MockWorkspace({
        "/lwc/foo/foo.js": (False, "c/foo"),
        "/lwc/foo": (True, "c/foo"),
        "/lwc/foo/notes.txt": (False, None),
    })


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def telemetry() -> RecordingTelemetry:
    return RecordingTelemetry()


def python_child(code: str) -> list[str]:
    """argv for a Python child process running ``code``."""
    return [sys.executable, "-c", code]


class RecordingLauncher:
    """Stand-in for ``launch`` that records argv and runs a Python child.

    The child prints ``output`` and exits with ``exit_code``, so the
    real launcher machinery (reader thread, outcome) is exercised.
    """

    def __init__(self, exit_code: int = 0, output: str = ""):
        self.exit_code = exit_code
        self.output = output
        self.calls: list[list[str]] = []

    def __call__(self, argv, **kwargs):
        self.calls.append(list(argv))
        code = f"import sys; print({self.output!r}); sys.exit({self.exit_code})"
        return launch(python_child(code), **kwargs)

    @property
    def last_argv(self) -> list[str]:
        return self.calls[-1]


@pytest.fixture
def launcher() -> RecordingLauncher:
    return RecordingLauncher()


@pytest.fixture
def make_launcher():
    """Factory for launchers whose child exits with a given code."""
    return RecordingLauncher
