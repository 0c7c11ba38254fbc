"""
Telemetry adapter — records command events in the local ledger.
"""

from __future__ import annotations

import logging

from lwcpreview.adapters.base import TelemetrySink
from lwcpreview.core.persistence.telemetry_ledger import TelemetryEvent, TelemetryWriter

logger = logging.getLogger(__name__)


class LedgerTelemetry(TelemetrySink):
    """Telemetry sink backed by the NDJSON ledger.

    When disabled, events are only logged at DEBUG level.
    """

    def __init__(self, writer: TelemetryWriter, enabled: bool = True):
        self._writer = writer
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def send_command_event(
        self,
        log_name: str,
        duration_ms: int | None = None,
        properties: dict | None = None,
    ) -> None:
        logger.debug("command event %s (%s ms)", log_name, duration_ms)
        if not self._enabled:
            return
        self._writer.write(TelemetryEvent(
            event_type="command",
            name=log_name,
            duration_ms=duration_ms,
            properties=properties or {},
        ))

    def send_exception(self, name: str, message: str, error_class: str = "") -> None:
        logger.debug("exception event %s: %s", name, message)
        if not self._enabled:
            return
        self._writer.write(TelemetryEvent(
            event_type="exception",
            name=name,
            message=message,
            error_class=error_class,
        ))
