"""
Preview use case — the full pipeline from a source path to a running preview.

    source path ─► target resolver ─► platform/device selector
                                         │ (device memory)
                   desktop ◄─────────────┤
                   (dev server, browser) │
                                         ▼
                   command builder ─► process launcher ─► result reporter

Each call to ``run`` is an independent pipeline.  The only state shared
between runs is the persistent store behind device memory.  Failures
are reported through the injected collaborators and never raised;
cancelling a prompt ends the run with a warning.
"""

from __future__ import annotations

import logging
import threading
import time
import webbrowser
from dataclasses import dataclass, field
from typing import Callable

from lwcpreview.adapters.base import (
    Notifier,
    OutputChannel,
    Prompter,
    TelemetrySink,
    WorkspaceInspector,
)
from lwcpreview.core.config.loader import PreviewSettings
from lwcpreview.core.errors import InputMissing, PreviewError, SelectionCancelled
from lwcpreview.core.models.platform import DESKTOP, catalog_for
from lwcpreview.core.models.preview import ExecutionOutcome, PreviewRequest
from lwcpreview.core.persistence.state_file import GlobalStore
from lwcpreview.core.services.command_builder import build_command, preview_url
from lwcpreview.core.services.dev_server import DevServerService
from lwcpreview.core.services.device_memory import DeviceMemory
from lwcpreview.core.services.messages import Messages
from lwcpreview.core.services.platform_selector import PlatformSelector, Selection
from lwcpreview.core.services.process_launcher import CancellationToken, CliExecution, launch
from lwcpreview.core.services.result_reporter import ResultReporter
from lwcpreview.core.services.target_resolver import resolve_target

logger = logging.getLogger(__name__)

LOG_NAME = "lwc_preview"


@dataclass
class PreviewResult:
    """What a preview run did.

    ``status`` is one of:
        launched    a device preview process was started
        browser     the component was opened in the browser
        server      the dev server was started for a desktop preview
        cancelled   the user dismissed a prompt
        error       the run failed before anything was started
    """

    status: str = ""
    source_path: str = ""
    component: str = ""
    platform: str = ""
    target: str = ""
    command: str = ""
    error: str | None = None
    execution: CliExecution | None = None
    server: CliExecution | None = field(default=None, repr=False)
    outcome: ExecutionOutcome | None = None
    reported: threading.Event | None = field(default=None, repr=False)

    def wait(self, timeout: float | None = None) -> ExecutionOutcome | None:
        """Wait for the launched process and its report to finish.

        A dev server started for a device preview keeps serving the
        component, so it is waited for as well.
        """
        if self.execution is None:
            return self.outcome
        outcome = self.execution.wait(timeout)
        if self.reported is not None:
            self.reported.wait(timeout)
        if self.server is not None:
            self.server.wait(timeout)
        return self.outcome or outcome

    def cancel(self) -> None:
        """Stop whatever this run started."""
        for execution in (self.execution, self.server):
            if execution is not None:
                execution.cancel()

    def to_dict(self) -> dict:
        result: dict = {"status": self.status}
        if self.error:
            result["error"] = self.error
        for key in ("source_path", "component", "platform", "target", "command"):
            value = getattr(self, key)
            if value:
                result[key] = value
        if self.outcome is not None:
            result["outcome"] = self.outcome.to_dict()
        return result


class PreviewOrchestrator:
    """Runs preview pipelines against injected collaborators."""

    def __init__(
        self,
        *,
        settings: PreviewSettings,
        store: GlobalStore,
        workspace: WorkspaceInspector,
        prompter: Prompter,
        channel: OutputChannel,
        notifier: Notifier,
        telemetry: TelemetrySink,
        messages: Messages | None = None,
        dev_server: DevServerService | None = None,
        launcher: Callable[..., CliExecution] = launch,
        active_document: Callable[[], str | None] | None = None,
    ):
        self._settings = settings
        self._workspace = workspace
        self._channel = channel
        self._notifier = notifier
        self._telemetry = telemetry
        self._messages = messages or Messages()
        self._launcher = launcher
        self._active_document = active_document
        self._memory = DeviceMemory(store)
        self._selector = PlatformSelector(prompter, self._memory, self._messages)
        self._command_name = self._messages.localize("lwc_preview_text")
        self._reporter = ResultReporter(
            notifier, channel, telemetry, self._messages,
            command_name=self._command_name,
            log_name=LOG_NAME,
        )
        self._dev_server = dev_server or DevServerService(
            settings.dev_server_url,
            settings.executable,
            channel,
            open_browser=webbrowser.open,
            messages=self._messages,
        )

    @property
    def device_memory(self) -> DeviceMemory:
        return self._memory

    def run(self, source_path: str | None = None) -> PreviewResult:
        """Run one preview pipeline. Never raises."""
        start = time.monotonic()
        result = PreviewResult()

        try:
            path = self._resolve_input(source_path)
            result.source_path = path

            component = resolve_target(path, self._workspace, self._messages)
            result.component = component

            selection = self._selector.select(
                catalog_for(self._settings.platforms),
                self._settings.remember_device,
            )
            result.platform = selection.platform.id.value
            result.target = selection.target

            token = CancellationToken()
            if selection.platform.is_desktop:
                self._preview_desktop(result, component, token)
            else:
                self._preview_device(result, path, component, selection, token)

            self._telemetry.send_command_event(
                LOG_NAME,
                int((time.monotonic() - start) * 1000),
                {"platform": result.platform, "status": result.status},
            )

        except SelectionCancelled as e:
            result.status = "cancelled"
            self._report_cancelled(e)
        except PreviewError as e:
            result.status = "error"
            result.error = str(e)
            self._show_error(e)
        except Exception as e:
            logger.exception("Preview pipeline failed")
            result.status = "error"
            result.error = str(e)
            self._show_error(e)

        return result

    # ── Steps ───────────────────────────────────────────────────

    def _resolve_input(self, source_path: str | None) -> str:
        path = source_path
        if not path and self._active_document is not None:
            path = self._active_document()
            if path:
                logger.debug("No path given — using active document %s", path)
        if not path:
            raise InputMissing(
                self._messages.localize("lwc_preview_file_undefined", source_path)
            )
        return path

    def _preview_desktop(
        self,
        result: PreviewResult,
        component: str,
        token: CancellationToken,
    ) -> None:
        url = preview_url(component, self._settings.dev_server_url)
        result.target = url

        if self._dev_server.is_running():
            self._notifier.show_info(
                self._messages.localize("lwc_preview_dev_server_running")
            )
            try:
                self._dev_server.open_browser(url)
            except (webbrowser.Error, OSError) as e:
                raise PreviewError(
                    self._messages.localize("lwc_preview_desktop_failure", url)
                ) from e
            result.status = "browser"
            return

        self._notifier.show_info(self._messages.localize("lwc_preview_dev_server_starting"))
        execution = self._dev_server.start(open_browser_url=url, token=token)
        result.status = "server"
        self._attach(result, execution, url, failure_key="lwc_preview_dev_server_failure")

    def _preview_device(
        self,
        result: PreviewResult,
        path: str,
        component: str,
        selection: Selection,
        token: CancellationToken,
    ) -> None:
        request = PreviewRequest(
            source_path=path,
            platform=selection.platform,
            resolved_target=selection.target or selection.platform.default_target_name,
            component_identifier=component,
        )

        if self._settings.include_desktop and self._settings.contract.uses_preview_url:
            if not self._ensure_dev_server(result, request, token):
                return

        args = build_command(
            request,
            self._settings.contract,
            log_level=self._settings.log_level,
            dev_server_url=self._settings.dev_server_url,
        )
        execution = self._launcher(
            [self._settings.executable, *args],
            platform=request.platform,
            channel=self._channel,
            token=token,
            messages=self._messages,
        )
        result.status = "launched"
        result.target = request.resolved_target
        self._attach(result, execution, request.resolved_target)
        self._channel.show()

    def _ensure_dev_server(
        self,
        result: PreviewResult,
        request: PreviewRequest,
        token: CancellationToken,
    ) -> bool:
        """Start the dev server if needed and wait until it is up.

        Returns False, after reporting the server's outcome, when the
        server exits before it is ready; the device is then not launched.
        """
        if self._dev_server.is_running():
            return True
        logger.info("Dev server not running — starting it")
        self._notifier.show_info(self._messages.localize(
            "lwc_preview_dev_server_starting_for_device", request.platform.platform_name,
        ))
        server = self._dev_server.start(token=token)
        result.server = server
        try:
            if self._dev_server.wait_until_up():
                return True
        except KeyboardInterrupt:
            token.cancel()
            raise

        outcome = server.wait()
        url = self._settings.dev_server_url
        self._reporter.report_failure(
            outcome, DESKTOP, url, failure_key="lwc_preview_dev_server_not_up",
        )
        result.status = "error"
        result.error = self._messages.localize("lwc_preview_dev_server_not_up", url)
        result.command = server.command
        result.outcome = outcome
        return False

    def _attach(
        self,
        result: PreviewResult,
        execution: CliExecution,
        target: str,
        failure_key: str | None = None,
    ) -> None:
        """Report the outcome when the process exits."""
        result.execution = execution
        result.command = execution.command
        reported = threading.Event()
        result.reported = reported

        def _on_done(outcome: ExecutionOutcome) -> None:
            try:
                self._reporter.report(outcome, outcome.platform, target, failure_key)
            finally:
                result.outcome = outcome
                reported.set()

        execution.add_done_callback(_on_done)

    # ── Reporting ───────────────────────────────────────────────

    def _report_cancelled(self, e: SelectionCancelled) -> None:
        if e.step == "platform":
            self._notifier.show_warning(
                self._messages.localize("lwc_preview_platform_cancelled")
            )
            return
        self._notifier.show_warning(self._messages.localize("lwc_preview_device_cancelled"))
        if e.platform is not None:
            self._channel.append_line(
                self._messages.localize(f"{e.platform.message_prefix}_cancelled")
            )

    def _show_error(self, e: Exception) -> None:
        self._telemetry.send_exception(f"{LOG_NAME}_error", str(e), type(e).__name__)
        self._notifier.show_error(str(e))
        self._notifier.show_error(
            self._messages.localize("command_failure", self._command_name)
        )
        self._channel.append_line(f"Error: {e}")
        self._channel.show()
