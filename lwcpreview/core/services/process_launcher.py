"""
Process launcher — runs sfdx in the background and reports its outcome.

``launch`` starts the child and returns a ``CliExecution`` at once.  A
reader thread forwards every output line to the output channel as it
arrives, keeps the most recent lines for diagnostics, then waits for
the exit status and resolves the execution's future exactly once.

Exit status interpretation:
    0      success
    127    the preview plugin (or sfdx itself) is not installed
    other  platform failure

There is no timeout and no retry.  A ``CancellationToken`` (one per
invocation) terminates the child when cancelled.
"""

from __future__ import annotations

import logging
import os
import subprocess
import threading
import time
from collections import deque
from concurrent.futures import Future
from typing import Callable

from lwcpreview.adapters.base import OutputChannel
from lwcpreview.core.models.platform import PlatformOption
from lwcpreview.core.models.preview import TOOL_NOT_INSTALLED_EXIT_CODE, ExecutionOutcome
from lwcpreview.core.services.command_builder import format_command
from lwcpreview.core.services.messages import Messages

logger = logging.getLogger(__name__)

# sfdx writes structured (JSON) results to stdout when this is set
JSON_OUTPUT_ENV = {"SFDX_JSON_TO_STDOUT": "true"}

OUTPUT_TAIL_LINES = 50

# Grace period between terminate() and kill() on cancellation
_TERMINATE_GRACE_S = 5


class CancellationToken:
    """One-shot cancellation signal shared by an invocation."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        with self._lock:
            return self._cancelled

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            callbacks, self._callbacks = self._callbacks, []
        for cb in callbacks:
            cb()

    def on_cancel(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` on cancellation (immediately if already cancelled)."""
        with self._lock:
            if not self._cancelled:
                self._callbacks.append(callback)
                return
        callback()


class CliExecution:
    """Handle on a launched process; completes once with an ExecutionOutcome."""

    def __init__(self, command: str, token: CancellationToken):
        self.command = command
        self.token = token
        self.pid: int | None = None
        self._future: Future[ExecutionOutcome] = Future()

    @property
    def done(self) -> bool:
        return self._future.done()

    def add_done_callback(self, fn: Callable[[ExecutionOutcome], None]) -> None:
        """Call ``fn(outcome)`` on completion (immediately if already done)."""
        self._future.add_done_callback(lambda f: fn(f.result()))

    def wait(self, timeout: float | None = None) -> ExecutionOutcome:
        """Block until the process has exited and return its outcome."""
        return self._future.result(timeout=timeout)

    def cancel(self) -> None:
        self.token.cancel()

    def _resolve(self, outcome: ExecutionOutcome) -> None:
        self._future.set_result(outcome)


def launch(
    argv: list[str],
    *,
    platform: PlatformOption,
    channel: OutputChannel,
    env: dict[str, str] | None = None,
    token: CancellationToken | None = None,
    on_line: Callable[[str], None] | None = None,
    messages: Messages | None = None,
    cwd: str | None = None,
) -> CliExecution:
    """Start ``argv`` in the background.

    Args:
        argv: Executable followed by its arguments.
        platform: Platform the process previews on (carried into the outcome).
        channel: Receives every output line live.
        env: Extra environment variables on top of ``os.environ`` and
            ``SFDX_JSON_TO_STDOUT=true``.
        token: Cancellation signal; a fresh one is created if omitted.
        on_line: Optional callback for every output line.
        messages: Message table for the not-installed diagnostic.
        cwd: Working directory of the child.

    Returns:
        A CliExecution whose outcome is delivered when the process exits.
    """
    messages = messages or Messages()
    token = token or CancellationToken()
    command = format_command(argv[0], argv[1:])
    execution = CliExecution(command, token)

    child_env = os.environ.copy()
    child_env.update(JSON_OUTPUT_ENV)
    if env:
        child_env.update(env)

    logger.debug("Launching: %s", command)
    start = time.monotonic()

    try:
        proc = subprocess.Popen(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            stdin=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
            env=child_env,
            cwd=cwd,
        )
    except OSError as e:
        logger.warning("Cannot start %s: %s", argv[0], e)
        # A missing executable is reported the way a shell would
        exit_code = TOOL_NOT_INSTALLED_EXIT_CODE if isinstance(e, FileNotFoundError) else None
        outcome = ExecutionOutcome(
            exit_code=exit_code,
            error=str(e),
            platform=platform,
            command=command,
        )
        _finish(execution, outcome, channel, messages)
        return execution

    execution.pid = proc.pid
    token.on_cancel(lambda: _terminate(proc))

    reader = threading.Thread(
        target=_pump,
        args=(proc, execution, platform, channel, on_line, messages, start),
        name=f"lwcpreview-{proc.pid}",
        daemon=True,
    )
    reader.start()
    return execution


def _pump(
    proc: subprocess.Popen,
    execution: CliExecution,
    platform: PlatformOption,
    channel: OutputChannel,
    on_line: Callable[[str], None] | None,
    messages: Messages,
    start: float,
) -> None:
    """Reader thread body: stream output, wait for exit, resolve."""
    tail: deque[str] = deque(maxlen=OUTPUT_TAIL_LINES)
    try:
        assert proc.stdout is not None
        for raw in proc.stdout:
            line = raw.rstrip("\r\n")
            tail.append(line)
            channel.append_line(line)
            if on_line is not None:
                try:
                    on_line(line)
                except Exception:
                    logger.exception("Output callback failed for %s", execution.command)
        exit_code = proc.wait()
        error = None
    except Exception as e:
        logger.exception("Lost track of %s", execution.command)
        exit_code = proc.poll()
        error = str(e)

    outcome = ExecutionOutcome(
        exit_code=exit_code,
        error=error,
        platform=platform,
        command=execution.command,
        output_tail=list(tail),
        cancelled=execution.token.cancelled,
        duration_ms=int((time.monotonic() - start) * 1000),
    )
    _finish(execution, outcome, channel, messages)


def _finish(
    execution: CliExecution,
    outcome: ExecutionOutcome,
    channel: OutputChannel,
    messages: Messages,
) -> None:
    logger.info("%s exited with %s", execution.command, outcome.exit_code)
    if outcome.exit_code == TOOL_NOT_INSTALLED_EXIT_CODE:
        channel.append_line(messages.localize("lwc_preview_tool_not_installed"))
    execution._resolve(outcome)


def _terminate(proc: subprocess.Popen) -> None:
    if proc.poll() is not None:
        return
    logger.info("Cancelling process %s", proc.pid)
    proc.terminate()
    try:
        proc.wait(timeout=_TERMINATE_GRACE_S)
    except subprocess.TimeoutExpired:
        proc.kill()
