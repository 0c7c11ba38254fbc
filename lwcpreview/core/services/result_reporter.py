"""
Result reporter — turns an ExecutionOutcome into user-facing messages.

Every branch is terminal for the invocation and nothing is raised:

    success             "starting" info + successful-execution acknowledgment
    cancelled           warning only (the user stopped the process)
    failure             platform failure error + recent output in the log
    tool not installed  as failure, plus one install-instruction line
"""

from __future__ import annotations

import logging

from lwcpreview.adapters.base import Notifier, OutputChannel, TelemetrySink
from lwcpreview.core.errors import LaunchFailure, ToolNotInstalled
from lwcpreview.core.models.platform import PlatformOption
from lwcpreview.core.models.preview import ExecutionOutcome, OutcomeKind
from lwcpreview.core.services.messages import Messages

logger = logging.getLogger(__name__)

_RULE = "-" * 41


class ResultReporter:
    """Maps outcomes to notifications, log lines and telemetry."""

    def __init__(
        self,
        notifier: Notifier,
        channel: OutputChannel,
        telemetry: TelemetrySink,
        messages: Messages,
        command_name: str,
        log_name: str,
    ):
        self._notifier = notifier
        self._channel = channel
        self._telemetry = telemetry
        self._messages = messages
        self._command_name = command_name
        self._log_name = log_name

    def report(
        self,
        outcome: ExecutionOutcome,
        platform: PlatformOption,
        resolved_target: str,
        failure_key: str | None = None,
    ) -> None:
        """Report one outcome.

        Args:
            outcome: What the process did.
            platform: Platform it ran for (selects the message keys).
            resolved_target: Device or URL named in the messages.
            failure_key: Message key for the failure text, instead of
                the platform's ``*_failure`` key.
        """
        try:
            if outcome.cancelled:
                self._report_cancelled(outcome)
            elif outcome.kind is OutcomeKind.SUCCESS:
                self._report_success(outcome, platform, resolved_target)
            else:
                self.report_failure(outcome, platform, resolved_target, failure_key)
        except Exception:
            logger.exception("Failed to report outcome of %s", outcome.command)

    def _report_success(
        self,
        outcome: ExecutionOutcome,
        platform: PlatformOption,
        resolved_target: str,
    ) -> None:
        self._notifier.show_info(
            self._messages.localize(f"{platform.message_prefix}_start", resolved_target)
        )
        self._notifier.show_successful_execution(
            self._messages.localize("command_success", self._command_name),
            self._messages.localize("command_executed", outcome.command),
        )

    def _report_cancelled(self, outcome: ExecutionOutcome) -> None:
        message = self._messages.localize("lwc_preview_process_cancelled", outcome.command)
        logger.info("%s was cancelled (exit %s)", outcome.command, outcome.exit_code)
        self._notifier.show_warning(message)
        self._channel.append_line(message)

    def report_failure(
        self,
        outcome: ExecutionOutcome,
        platform: PlatformOption,
        resolved_target: str,
        failure_key: str | None = None,
    ) -> None:
        """Report ``outcome`` as a failure whatever its exit code."""
        key = failure_key or f"{platform.message_prefix}_failure"
        message = self._messages.localize(key, resolved_target)
        if outcome.kind is OutcomeKind.TOOL_NOT_INSTALLED:
            error: LaunchFailure = ToolNotInstalled(message, outcome.exit_code)
        else:
            error = LaunchFailure(message, outcome.exit_code)

        self._notifier.show_error(message)
        self._telemetry.send_exception(
            f"{self._log_name}_error", str(error), type(error).__name__,
        )

        self._channel.append_line(_RULE)
        self._channel.append_line(
            self._messages.localize("lwc_preview_recent_output", outcome.command)
        )
        for line in outcome.output_tail:
            self._channel.append_line(line)
        if outcome.error:
            self._channel.append_line(f"Error: {outcome.error}")
        self._channel.append_line(_RULE)

        if isinstance(error, ToolNotInstalled):
            self._channel.append_line(
                self._messages.localize("lwc_preview_tool_install_instructions")
            )
        self._channel.show()
